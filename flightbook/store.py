"""
JSON store for the active flight list, plus the re-import and edit steps
that work on it.
"""

import json
import os
import tempfile

from .assignments import flight_key, merge_assignments, count_incomplete
from .flight import ROLES, TIMES_OF_DAY
from .importer import import_flights


def load_flights(store_path):
    """Load the stored flight list.

    Returns:
        List of flight dicts, empty if the store does not exist yet.

    Raises:
        ValueError: If the file does not hold a JSON list.
    """
    if not os.path.exists(store_path):
        return []
    with open(store_path, 'r', encoding='utf-8') as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"Flight store {store_path} is not valid JSON: {e}") from e
    if not isinstance(data, list):
        raise ValueError(f"Flight store {store_path} must contain a list of flights")
    return data


def save_flights(store_path, flights):
    """Write the flight list, replacing the store in one step."""
    store_dir = os.path.dirname(os.path.abspath(store_path))
    os.makedirs(store_dir, exist_ok=True)
    fd, tmp_path = tempfile.mkstemp(prefix='.flights_', suffix='.json', dir=store_dir)
    try:
        with os.fdopen(fd, 'w', encoding='utf-8') as f:
            json.dump(flights, f, ensure_ascii=False, indent=1)
        os.replace(tmp_path, store_path)
    except BaseException:
        os.unlink(tmp_path)
        raise


def reimport(store_path, input_file, fmt='auto', mapping_file=None):
    """Import a spreadsheet, keep earlier assignments, and save.

    Args:
        store_path: Flight store JSON file.
        input_file: Logbook spreadsheet.
        fmt: Source format, or 'auto'.
        mapping_file: Optional column mapping INI file.

    Returns:
        Tuple of (flights, stats) where stats has imported, matched,
        new and incomplete counts.
    """
    old_flights = load_flights(store_path)
    new_flights = import_flights(input_file, fmt, mapping_file)

    old_keys = {flight_key(f) for f in old_flights}
    matched = sum(1 for f in new_flights if flight_key(f) in old_keys)

    flights = merge_assignments(old_flights, new_flights)
    save_flights(store_path, flights)

    stats = {
        'imported': len(flights),
        'matched': matched,
        'new': len(flights) - matched,
        'incomplete': count_incomplete(flights),
    }
    print(f"  Kept assignments for {matched} flights, {stats['new']} new")
    return flights, stats


def assign(flights, flight_ids, role=None, time_of_day=None, page=None):
    """Set role / time of day / page on the selected flights.

    Args:
        flights: Flight list.
        flight_ids: Ids of the flights to change.
        role: 'PIC' or 'Dual', or None to leave unchanged.
        time_of_day: 'Day' or 'Night', or None to leave unchanged.
        page: Positive page number, or None to leave unchanged.

    Returns:
        New flight list with the changes applied.

    Raises:
        ValueError: For an unknown role or time of day, a page below 1,
            or an id that is not in the list.
    """
    if role is not None and role not in ROLES:
        raise ValueError(f"Unknown role '{role}'. Use one of: {', '.join(ROLES)}")
    if time_of_day is not None and time_of_day not in TIMES_OF_DAY:
        raise ValueError(f"Unknown time of day '{time_of_day}'. Use one of: {', '.join(TIMES_OF_DAY)}")
    if page is not None and (isinstance(page, bool) or not isinstance(page, int) or page < 1):
        raise ValueError(f"Page must be a positive integer, got {page!r}")

    wanted = set(flight_ids)
    unknown = wanted - {f.get('id') for f in flights}
    if unknown:
        raise ValueError(f"Unknown flight id(s): {', '.join(str(i) for i in sorted(unknown))}")

    changes = {}
    if role is not None:
        changes['role'] = role
    if time_of_day is not None:
        changes['time_of_day'] = time_of_day
    if page is not None:
        changes['page'] = page

    updated = []
    for f in flights:
        if f.get('id') in wanted:
            f = dict(f, **changes)
        updated.append(f)
    return updated
