"""
Flight logbook spreadsheet importer.

Reads flight data from an Excel workbook or a CSV/TSV file and produces
the list of flight dicts the logbook works on. Classification fields are
defaulted (Dual, Day, pages filled in import order) unless the source
carries its own role / time of day / page columns.

Supports:
- Auto-format detection (by file extension / content sniffing)
- Auto-column detection (by header name matching)
- Explicit column mapping via config file
- Data normalization (dates, times, integers)

Usage:
    python -m flightbook.importer --input Flugbuch.xlsx
    python -m flightbook.importer --input flights.csv --mapping my_mapping.ini
"""

import argparse
import csv
import math
import os
from datetime import date, datetime

from dateutil import parser as dateutil_parser
from openpyxl import load_workbook

from .column_detector import (
    detect_columns, load_column_mapping, resolve_mapping_names,
    validate_mapping, print_mapping_report, COLUMN_NAMES,
)
from .flight import (
    DEFAULT_ROLE, DEFAULT_TIME_OF_DAY, ROLE_PIC, ROLE_DUAL, DAY, NIGHT,
    default_page,
)
from .time_utils import excel_time_to_seconds, excel_time_to_hhmm, hm_to_sec, SECONDS_PER_DAY

# Preferred sheet names, checked before falling back to the active sheet
SHEET_NAMES = ('Flugbuch', 'Flight Log', 'Flights')

ROLE_VALUES = {
    'pic': ROLE_PIC,
    'p1': ROLE_PIC,
    'dual': ROLE_DUAL,
    'dual received': ROLE_DUAL,
    'schulung': ROLE_DUAL,
}

TIME_OF_DAY_VALUES = {
    'day': DAY,
    'tag': DAY,
    'night': NIGHT,
    'nacht': NIGHT,
}

# Text fields copied as stripped strings
TEXT_FIELDS = ('aircraft_type', 'tail_number', 'crew', 'origin', 'destination', 'remarks')

# Clock fields rendered as HH:MM
CLOCK_FIELDS = ('takeoff_time', 'landing_time', 'block_off', 'block_on')


def detect_format(file_path):
    """Auto-detect file format from extension and content.

    Args:
        file_path: Path to the input file.

    Returns:
        Format string: 'excel', 'csv', or 'tsv'.

    Raises:
        ValueError: If format cannot be determined.
    """
    ext = os.path.splitext(file_path)[1].lower()

    if ext in ('.xlsx', '.xlsm'):
        return 'excel'
    elif ext == '.csv':
        return 'csv'
    elif ext == '.tsv':
        return 'tsv'
    elif ext == '.txt':
        with open(file_path, 'r', encoding='utf-8') as f:
            header = f.readline()
        return 'tsv' if '\t' in header else 'csv'
    raise ValueError(
        f"Cannot determine format for '{file_path}' (extension: {ext}).\n"
        f"Supported formats: .xlsx, .xlsm, .csv, .tsv, .txt"
    )


def _read_excel(file_path):
    """Read headers and data rows from an Excel file.

    Returns:
        Tuple of (headers: list[str], rows: list[list]).
    """
    wb = load_workbook(file_path, read_only=True, data_only=True)

    ws = wb.active
    for name in SHEET_NAMES:
        if name in wb.sheetnames:
            ws = wb[name]
            break

    all_rows = list(ws.iter_rows(values_only=True))
    wb.close()

    if not all_rows:
        raise ValueError(f"Excel file is empty: {file_path}")

    headers = [str(cell or '').strip() for cell in all_rows[0]]

    data_rows = []
    for row in all_rows[1:]:
        if all(cell is None or str(cell).strip() == '' for cell in row):
            continue
        data_rows.append(list(row))

    print(f"  Read Excel: {len(data_rows)} rows, {len(headers)} columns")
    return headers, data_rows


def _read_csv(file_path, delimiter=','):
    """Read headers and data rows from a CSV/TSV file.

    Returns:
        Tuple of (headers: list[str], rows: list[list[str]]).
    """
    with open(file_path, 'r', encoding='utf-8-sig', newline='') as f:
        rows = list(csv.reader(f, delimiter=delimiter))

    if not rows:
        raise ValueError(f"File is empty: {file_path}")

    headers = [cell.strip() for cell in rows[0]]
    data_rows = [row for row in rows[1:] if any(cell.strip() for cell in row)]

    fmt_name = 'TSV' if delimiter == '\t' else 'CSV'
    print(f"  Read {fmt_name}: {len(data_rows)} rows, {len(headers)} columns")
    return headers, data_rows


def read_source(file_path, fmt='auto'):
    """Read raw data from any supported format.

    Args:
        file_path: Path to the source file.
        fmt: Format string ('auto', 'excel', 'csv', 'tsv').

    Returns:
        Tuple of (format_used: str, headers: list[str], rows: list[list]).
    """
    if fmt == 'auto':
        fmt = detect_format(file_path)

    print(f"  Format: {fmt}")

    if fmt == 'excel':
        headers, rows = _read_excel(file_path)
    elif fmt == 'csv':
        headers, rows = _read_csv(file_path, delimiter=',')
    elif fmt == 'tsv':
        headers, rows = _read_csv(file_path, delimiter='\t')
    else:
        raise ValueError(f"Unsupported format: {fmt}")

    return fmt, headers, rows


def normalize_date(val):
    """Bring a date value into the logbook's DD.MM.YY form.

    Handles datetime/date objects, DD.MM.YY, DD.MM.YYYY, YYYY-MM-DD,
    DD/MM/YYYY and anything else python-dateutil can read (day first).

    Args:
        val: Date value (string, datetime, or None).

    Returns:
        'DD.MM.YY' string, the stripped input if it cannot be parsed,
        or '' for empty input.
    """
    if val is None:
        return ''
    if isinstance(val, (datetime, date)):
        return val.strftime('%d.%m.%y')

    s = str(val).strip()
    if not s:
        return ''

    for fmt in ('%d.%m.%y', '%d.%m.%Y', '%Y-%m-%d', '%d/%m/%Y', '%d-%m-%Y'):
        try:
            return datetime.strptime(s, fmt).strftime('%d.%m.%y')
        except ValueError:
            continue

    try:
        return dateutil_parser.parse(s, dayfirst=True).strftime('%d.%m.%y')
    except (ValueError, OverflowError):
        return s


def normalize_clock(val):
    """Convert a time-of-day cell to HH:MM. Strings are only stripped."""
    if isinstance(val, str):
        return val.strip()
    return excel_time_to_hhmm(val)


def normalize_duration(val):
    """Convert a duration cell to seconds.

    Numbers are read as fractions of a day, strings as H:MM.
    """
    if isinstance(val, str):
        return hm_to_sec(val)
    return excel_time_to_seconds(val)


def normalize_int(val):
    """Convert a value to integer (landings, page numbers).

    Args:
        val: Value (string, float, int, or None).

    Returns:
        Integer, or 0 if conversion fails.
    """
    if val is None or isinstance(val, bool):
        return 0
    if isinstance(val, int):
        return val
    if isinstance(val, float):
        return int(round(val)) if math.isfinite(val) else 0
    s = str(val).strip()
    try:
        return int(round(float(s.replace(',', '.'))))
    except (ValueError, OverflowError):
        return 0


def _span_seconds(start, end):
    """Seconds between two HH:MM labels, wrapping past midnight."""
    if not start or not end:
        return 0
    diff = hm_to_sec(end) - hm_to_sec(start)
    if diff < 0:
        diff += SECONDS_PER_DAY
    return diff


def parse_flights(headers, rows, mapping=None):
    """Turn raw spreadsheet rows into flight dicts.

    Args:
        headers: Source header strings.
        rows: Source data rows.
        mapping: Field name -> source column index. Auto-detected from
            the headers when omitted.

    Returns:
        List of flight dicts in source order.
    """
    if mapping is None:
        mapping = detect_columns(headers)

    def get(row, field):
        idx = mapping.get(field)
        if idx is not None and idx < len(row):
            return row[idx]
        return None

    flights = []
    for index, row in enumerate(rows):
        flight = {'id': index + 1, 'date': normalize_date(get(row, 'date'))}

        for field in TEXT_FIELDS:
            val = get(row, field)
            flight[field] = str(val).strip() if val is not None else ''

        for field in CLOCK_FIELDS:
            flight[field] = normalize_clock(get(row, field))

        flight['landings'] = normalize_int(get(row, 'landings'))

        if 'flight_time' in mapping:
            flight['flight_time_sec'] = normalize_duration(get(row, 'flight_time'))
        else:
            flight['flight_time_sec'] = _span_seconds(flight['takeoff_time'], flight['landing_time'])

        if 'block_time' in mapping:
            flight['block_time_sec'] = normalize_duration(get(row, 'block_time'))
        else:
            flight['block_time_sec'] = _span_seconds(flight['block_off'], flight['block_on'])

        role = str(get(row, 'role') or '').strip().lower()
        flight['role'] = ROLE_VALUES.get(role, DEFAULT_ROLE)

        time_of_day = str(get(row, 'time_of_day') or '').strip().lower()
        flight['time_of_day'] = TIME_OF_DAY_VALUES.get(time_of_day, DEFAULT_TIME_OF_DAY)

        page = normalize_int(get(row, 'page')) if 'page' in mapping else 0
        flight['page'] = page if page > 0 else default_page(index)

        flights.append(flight)

    return flights


def import_flights(input_file, fmt='auto', mapping_file=None):
    """Read a logbook spreadsheet into a list of flight dicts.

    Args:
        input_file: Path to the source file.
        fmt: Format string, or 'auto' to detect.
        mapping_file: Optional column mapping INI file.

    Returns:
        List of flight dicts.

    Raises:
        ValueError: If the format is unsupported, the file is empty, or
            the columns identifying a flight cannot be found.
    """
    fmt, headers, rows = read_source(input_file, fmt)

    if mapping_file:
        mapping = resolve_mapping_names(load_column_mapping(mapping_file), headers)
    else:
        mapping = detect_columns(headers)

    missing = validate_mapping(mapping)
    if missing:
        names = ', '.join(COLUMN_NAMES[field] for field in missing)
        raise ValueError(
            f"Required columns not found in {input_file}: {names}\n"
            f"Headers found: {', '.join(h for h in headers if h)}\n"
            f"Provide a column mapping file to map them explicitly."
        )

    print_mapping_report(mapping, headers)
    flights = parse_flights(headers, rows, mapping)
    print(f"  Parsed {len(flights)} flight records")
    return flights


if __name__ == '__main__':
    arg_parser = argparse.ArgumentParser(description='Import a flight logbook spreadsheet')
    arg_parser.add_argument('--input', '-i', required=True, help='Logbook spreadsheet (Excel, CSV, TSV)')
    arg_parser.add_argument('--format', '-f', default='auto',
                            choices=['auto', 'excel', 'csv', 'tsv'], help='Input format')
    arg_parser.add_argument('--mapping', '-m', default=None, help='Column mapping INI file')
    args = arg_parser.parse_args()
    for f in import_flights(args.input, args.format, args.mapping):
        print(f"  {f['date']} {f['takeoff_time']} {f['tail_number']} "
              f"{f['block_time_sec']}s {f['landings']} ldg page {f['page']}")
