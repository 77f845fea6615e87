"""
Preserve hand-made flight assignments across spreadsheet re-imports.

Role, time of day and page are assigned by the pilot after import. When
the spreadsheet is imported again, those assignments are carried over to
the fresh records by matching each flight on (date, takeoff time, tail
number).
"""

from .flight import ASSIGNMENT_FIELDS, KEY_FIELDS


def flight_key(flight):
    """Return the identity key (date, takeoff_time, tail_number) of a flight."""
    return tuple(flight.get(field) for field in KEY_FIELDS)


def is_complete(flight):
    """Check if a flight has role, time of day and page all assigned.

    Page 0 counts as unassigned.
    """
    return bool(flight.get('role') and flight.get('time_of_day') and flight.get('page'))


def count_incomplete(flights):
    """Number of flights still missing an assignment."""
    return sum(1 for f in flights if not is_complete(f))


def merge_assignments(old_flights, new_flights):
    """Carry role/time_of_day/page from old flights onto newly imported ones.

    Rules for a new flight whose key matches an old flight:
        - role and time_of_day are always taken from the old flight,
          even when empty there.
        - page is taken from the old flight only if it is not None.
    Unmatched flights keep their imported values. If the old list holds
    the same key twice, the later entry wins.

    Args:
        old_flights: Previously stored flights with assignments.
        new_flights: Freshly imported flights.

    Returns:
        New list of flight dicts, same order and length as new_flights.
        The input lists are not modified.
    """
    old_map = {}
    for f in old_flights:
        old_map[flight_key(f)] = {field: f.get(field) for field in ASSIGNMENT_FIELDS}

    merged = []
    for f in new_flights:
        f = dict(f)
        assigned = old_map.get(flight_key(f))
        if assigned is not None:
            f['role'] = assigned['role']
            f['time_of_day'] = assigned['time_of_day']
            if assigned['page'] is not None:
                f['page'] = assigned['page']
        merged.append(f)
    return merged
