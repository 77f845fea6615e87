#!/usr/bin/env python3
"""
Page totals report for the flight logbook.

Prints the per-page totals (this page / brought forward / total) and
writes them, together with the flight lines grouped by page, to an Excel
workbook laid out like a paper logbook.

Usage:
    python -m flightbook.report --store flights.json --output Page_Summary.xlsx
"""

import argparse

from openpyxl import Workbook
from openpyxl.styles import Font, PatternFill, Alignment, Border, Side
from openpyxl.utils import get_column_letter

from .assignments import is_complete
from .page_summary import compute_page_summaries, grand_totals
from .time_utils import sec_to_hm


# ============ Styles ============

HEADER_FONT = Font(name='Calibri', bold=True, color='FFFFFF', size=10)
HEADER_FILL = PatternFill(start_color='1F4E79', end_color='1F4E79', fill_type='solid')
SUBHEADER_FILL = PatternFill(start_color='2E75B6', end_color='2E75B6', fill_type='solid')
DATA_FONT = Font(name='Calibri', size=9)
BOLD_FONT = Font(name='Calibri', size=9, bold=True)
TOTAL_FILL = PatternFill(start_color='DDEBF7', end_color='DDEBF7', fill_type='solid')
INCOMPLETE_FILL = PatternFill(start_color='FCE4D6', end_color='FCE4D6', fill_type='solid')
THIN_BORDER = Border(
    left=Side(style='thin', color='B4C6E7'),
    right=Side(style='thin', color='B4C6E7'),
    top=Side(style='thin', color='B4C6E7'),
    bottom=Side(style='thin', color='B4C6E7')
)
CENTER = Alignment(horizontal='center', vertical='center')

# Column definitions: (name, width)
FLIGHT_COLUMNS = [
    ("Page", 6), ("No.", 5), ("Date", 10), ("Aircraft Type", 14), ("Tail Number", 11),
    ("Crew", 24), ("From", 7), ("To", 7), ("Takeoff", 8), ("Landing", 8),
    ("Landings", 9), ("Block Time", 10), ("Role", 7), ("Time of Day", 10),
    ("Remarks", 30),
]

TOTALS_COLUMNS = [
    ("Page", 6), ("Row", 16), ("Total", 10), ("PIC", 10), ("Dual", 10),
    ("Day LDG", 9), ("Night LDG", 10), ("Night", 10),
]

ROW_LABELS = (
    ('current', 'This page'),
    ('previous', 'Brought forward'),
    ('total', 'Total'),
)


def format_totals(totals):
    """Render a totals row as H:MM labels and landing counts."""
    return {
        'total': sec_to_hm(totals['total_sec']),
        'pic': sec_to_hm(totals['pic_sec']),
        'dual': sec_to_hm(totals['dual_sec']),
        'day_landings': totals['day_landings'],
        'night_landings': totals['night_landings'],
        'night': sec_to_hm(totals['night_sec']),
    }


def print_page_summaries(summaries):
    """Print the three totals rows of every page."""
    print(f"\n{'Page':>4} {'Row':<16} {'Total':>8} {'PIC':>8} {'Dual':>8} {'DayLDG':>7} {'NtLDG':>6} {'Night':>8}")
    print("-" * 72)
    for page, summary in summaries.items():
        for key, label in ROW_LABELS:
            t = format_totals(summary[key])
            page_label = page if key == 'current' else ''
            print(f"{page_label:>4} {label:<16} {t['total']:>8} {t['pic']:>8} {t['dual']:>8} "
                  f"{t['day_landings']:>7} {t['night_landings']:>6} {t['night']:>8}")
        print("-" * 72)

    t = format_totals(grand_totals(summaries))
    print(f"  Grand total: {t['total']} (PIC {t['pic']}, Dual {t['dual']}, Night {t['night']}), "
          f"landings {t['day_landings']} day / {t['night_landings']} night")


def _write_header(ws, columns):
    for col_idx, (col_name, col_width) in enumerate(columns, 1):
        cell = ws.cell(row=1, column=col_idx, value=col_name)
        cell.font = HEADER_FONT
        cell.fill = HEADER_FILL
        cell.alignment = Alignment(horizontal='center', vertical='center', wrap_text=True)
        cell.border = THIN_BORDER
        ws.column_dimensions[get_column_letter(col_idx)].width = col_width
    ws.freeze_panes = 'A2'


def write_summary_workbook(flights, output_file, summaries=None):
    """Write flights grouped by page and the page totals to Excel.

    Flights without a page are listed at the end of the Flights sheet.
    Flights missing an assignment are highlighted.

    Args:
        flights: Flight list.
        output_file: Path to the output .xlsx file.
        summaries: Precomputed page summaries (computed when omitted).

    Returns:
        Number of pages written to the totals sheet.
    """
    if summaries is None:
        summaries = compute_page_summaries(flights)

    wb = Workbook()

    # ============ SHEET 1: FLIGHTS ============
    ws = wb.active
    ws.title = "Flights"
    _write_header(ws, FLIGHT_COLUMNS)

    ordered = sorted(flights, key=lambda f: (not f.get('page'), f.get('page') or 0))
    for row_num, f in enumerate(ordered, 2):
        values = [
            f.get('page') or None, f.get('id'), f.get('date'), f.get('aircraft_type'),
            f.get('tail_number'), f.get('crew'), f.get('origin'), f.get('destination'),
            f.get('takeoff_time'), f.get('landing_time'), f.get('landings') or 0,
            sec_to_hm(f.get('block_time_sec')), f.get('role'), f.get('time_of_day'),
            f.get('remarks'),
        ]
        for col_idx, val in enumerate(values, 1):
            cell = ws.cell(row=row_num, column=col_idx, value=val if val != '' else None)
            cell.font = DATA_FONT
            cell.border = THIN_BORDER
            cell.alignment = CENTER
            if not is_complete(f):
                cell.fill = INCOMPLETE_FILL

    # ============ SHEET 2: PAGE TOTALS ============
    ws2 = wb.create_sheet("Page Totals")
    _write_header(ws2, TOTALS_COLUMNS)

    row_num = 2
    for page, summary in summaries.items():
        for key, label in ROW_LABELS:
            t = format_totals(summary[key])
            values = [page if key == 'current' else None, label, t['total'], t['pic'],
                      t['dual'], t['day_landings'], t['night_landings'], t['night']]
            for col_idx, val in enumerate(values, 1):
                cell = ws2.cell(row=row_num, column=col_idx, value=val)
                cell.font = BOLD_FONT if key == 'total' else DATA_FONT
                cell.border = THIN_BORDER
                cell.alignment = CENTER
                if key == 'total':
                    cell.fill = TOTAL_FILL
            row_num += 1

    wb.save(output_file)
    print(f"  Wrote {len(ordered)} flights on {len(summaries)} pages to {output_file}")
    return len(summaries)


if __name__ == '__main__':
    from .store import load_flights

    parser = argparse.ArgumentParser(description='Logbook page totals')
    parser.add_argument('--store', required=True, help='Flight store JSON file')
    parser.add_argument('--output', '-o', default=None, help='Write totals to this Excel file')
    args = parser.parse_args()

    stored = load_flights(args.store)
    page_summaries = compute_page_summaries(stored)
    print_page_summaries(page_summaries)
    if args.output:
        write_summary_workbook(stored, args.output, page_summaries)
