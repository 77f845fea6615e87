"""
Flight record fields and logbook defaults.

A flight is a plain dict. The classification fields (role, time of day,
page) are assigned by the pilot; everything else comes from the imported
spreadsheet and is passed through untouched.

Logbook roles:
    PIC  - Pilot in Command
    Dual - Dual instruction received
"""

ROLE_PIC = 'PIC'
ROLE_DUAL = 'Dual'
ROLES = (ROLE_PIC, ROLE_DUAL)

DAY = 'Day'
NIGHT = 'Night'
TIMES_OF_DAY = (DAY, NIGHT)

DEFAULT_ROLE = ROLE_DUAL
DEFAULT_TIME_OF_DAY = DAY

# One physical logbook page holds this many flight lines
FLIGHTS_PER_PAGE = 10

# Fields that identify a flight across re-imports
KEY_FIELDS = ('date', 'takeoff_time', 'tail_number')

# Fields the pilot assigns by hand
ASSIGNMENT_FIELDS = ('role', 'time_of_day', 'page')


def make_flight(**overrides):
    """Create a flight dict with sensible defaults.

    Handy for fixtures and for seeding a logbook by hand.

    Args:
        **overrides: Field values replacing the defaults.

    Returns:
        Flight dict.
    """
    flight = {
        'id': 1,
        'date': '01.01.26',
        'aircraft_type': 'Aquila A211',
        'tail_number': 'OE-AKW',
        'crew': 'Testpilot / Instruktor',
        'origin': 'LOAV',
        'destination': 'LOAV',
        'takeoff_time': '10:00',
        'landing_time': '11:00',
        'block_off': '09:55',
        'block_on': '11:05',
        'landings': 1,
        'flight_time_sec': 3600,
        'block_time_sec': 4200,
        'remarks': '',
        'role': DEFAULT_ROLE,
        'time_of_day': DEFAULT_TIME_OF_DAY,
        'page': 1,
    }
    flight.update(overrides)
    return flight


def default_page(index):
    """Page a flight lands on when the logbook is filled in import order.

    Args:
        index: 0-based position of the flight in the import.

    Returns:
        1-based page number.
    """
    return index // FLIGHTS_PER_PAGE + 1
