"""Pytest fixtures for flight logbook tests."""

import pytest
import sys
from pathlib import Path

from openpyxl import Workbook

# Add parent to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from flightbook.flight import make_flight


GERMAN_HEADERS = [
    'Datum', 'LFZ Typ', 'Kennzeichen', 'Crew', 'Von', 'Nach', 'Start',
    'Landung', 'Block Off', 'Block On', 'Landungen', 'Flugstunden', 'Blockzeit',
    'Bemerkung',
]


def logbook_row(day, start_hour, tail='OE-AKW', landings=1, block_minutes=70):
    """One spreadsheet row the way the logbook workbook stores it.

    Times are fractions of a day, as Excel keeps them.
    """
    return [
        f'{day:02d}.01.26', 'Aquila A211', tail, 'Testpilot / Instruktor', 'LOAV', 'LOAV',
        start_hour / 24, (start_hour + 1) / 24,
        (start_hour * 60 - 5) / 1440, (start_hour * 60 - 5 + block_minutes) / 1440,
        landings, 1 / 24, block_minutes / 1440, '',
    ]


@pytest.fixture
def flight():
    """Factory for flight dicts with defaults."""
    return make_flight


@pytest.fixture
def two_page_flights():
    """Three flights over pages 1 and 2, mixed role and time of day."""
    return [
        make_flight(id=1, block_time_sec=3600, landings=2, role='PIC', time_of_day='Day', page=1),
        make_flight(id=2, block_time_sec=1800, landings=3, role='Dual', time_of_day='Night', page=1),
        make_flight(id=3, block_time_sec=2400, landings=1, role='Dual', time_of_day='Day', page=2),
    ]


@pytest.fixture
def logbook_xlsx(tmp_path):
    """Workbook with 12 flights on a 'Flugbuch' sheet (German headers)."""
    path = tmp_path / 'Flugbuch.xlsx'
    wb = Workbook()
    ws = wb.active
    ws.title = 'Flugbuch'
    ws.append(GERMAN_HEADERS)
    for i in range(12):
        ws.append(logbook_row(day=i + 1, start_hour=10, landings=i % 3 + 1))
    ws.append([None] * len(GERMAN_HEADERS))
    wb.save(path)
    return path


@pytest.fixture
def store_path(tmp_path):
    """Path for a flight store that does not exist yet."""
    return tmp_path / 'flights.json'
