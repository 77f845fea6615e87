#!/usr/bin/env python3
"""
Flight logbook runner.

Keeps a personal logbook in sync with its source spreadsheet:
1. Import the spreadsheet, keeping role / time of day / page assignments
   made earlier for the same flights
2. Assign role, time of day or page to flights
3. Show per-page totals with carry-forward
4. Export flights and page totals to Excel

Usage:
    python run.py --input Flugbuch.xlsx                       # Import (default step)
    python run.py --step assign --ids 3 4 --role PIC          # Mark flights as PIC
    python run.py --step assign --ids 12 --page 2             # Move a flight to page 2
    python run.py --step summary                              # Print page totals
    python run.py --step export -o Page_Summary.xlsx          # Write Excel report
    python run.py --step status                               # Count unassigned flights
"""

import argparse
import sys
import os

from flightbook.config import Config


STEPS = ['import', 'assign', 'summary', 'export', 'status']


def run_import(config, args):
    """Step 1: Import the spreadsheet and merge earlier assignments."""
    from flightbook.store import reimport
    print("\n" + "=" * 70)
    print("STEP: Importing flight data")
    print("=" * 70)
    print(f"  Source: {config.input_file}")
    config.validate('import')
    _, stats = reimport(
        config.store,
        config.input_file,
        fmt=config.input_format,
        mapping_file=config.column_mapping or None,
    )
    print(f"  Imported: {stats['imported']} flights "
          f"({stats['matched']} matched, {stats['new']} new)")
    print(f"  Incomplete: {stats['incomplete']}")


def run_assign(config, args):
    """Step 2: Assign role / time of day / page to flights."""
    from flightbook.store import load_flights, save_flights, assign
    print("\n" + "=" * 70)
    print("STEP: Assigning flights")
    print("=" * 70)
    config.validate('assign')
    if not args.ids:
        raise ValueError("No flights selected. Pass flight ids with --ids.")
    if args.role is None and args.time_of_day is None and args.page is None:
        raise ValueError("Nothing to assign. Pass --role, --time-of-day or --page.")
    flights = assign(
        load_flights(config.store), args.ids,
        role=args.role, time_of_day=args.time_of_day, page=args.page,
    )
    save_flights(config.store, flights)
    print(f"  Updated {len(set(args.ids))} flights")


def run_summary(config, args):
    """Step 3: Print per-page totals."""
    from flightbook.store import load_flights
    from flightbook.page_summary import compute_page_summaries
    from flightbook.report import print_page_summaries
    print("\n" + "=" * 70)
    print("STEP: Page totals")
    print("=" * 70)
    config.validate('summary')
    print_page_summaries(compute_page_summaries(load_flights(config.store)))


def run_export(config, args):
    """Step 4: Write flights and page totals to Excel."""
    from flightbook.store import load_flights
    from flightbook.report import write_summary_workbook
    print("\n" + "=" * 70)
    print("STEP: Exporting page totals")
    print("=" * 70)
    config.validate('export')
    write_summary_workbook(load_flights(config.store), config.summary_output)


def run_status(config, args):
    """Show how many flights still lack an assignment."""
    from flightbook.store import load_flights
    from flightbook.assignments import is_complete
    print("\n" + "=" * 70)
    print("STEP: Assignment status")
    print("=" * 70)
    config.validate('status')
    flights = load_flights(config.store)
    incomplete = [f for f in flights if not is_complete(f)]
    print(f"  Flights: {len(flights)}, incomplete: {len(incomplete)}")
    for f in incomplete:
        print(f"    #{f.get('id')} {f.get('date')} {f.get('takeoff_time')} {f.get('tail_number')}")


STEP_FUNCTIONS = {
    'import': run_import,
    'assign': run_assign,
    'summary': run_summary,
    'export': run_export,
    'status': run_status,
}


def build_parser():
    parser = argparse.ArgumentParser(
        description='Personal flight logbook with per-page totals',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Steps (default: import):
  import    Import spreadsheet, keeping earlier assignments
  assign    Set role / time of day / page on flights (--ids ...)
  summary   Print per-page totals with carry-forward
  export    Write flights and page totals to Excel
  status    List flights missing role, time of day or page

Supported input formats:
  .xlsx / .xlsm  Excel spreadsheet
  .csv           Comma-separated values
  .tsv / .txt    Tab-separated values
        """,
    )
    parser.add_argument('--config', '-c', default='config.ini',
                        help='Config file path (default: config.ini)')
    parser.add_argument('--step', '-s', choices=STEPS, default='import',
                        help='Step to run (default: import)')
    parser.add_argument('--input', '-i', default=None,
                        help='Input spreadsheet (Excel, CSV, TSV)')
    parser.add_argument('--format', '-f', default=None,
                        choices=['auto', 'excel', 'csv', 'tsv'],
                        help='Input format (default: auto-detect)')
    parser.add_argument('--mapping', '-m', default=None,
                        help='Column mapping INI file (default: auto-detect)')
    parser.add_argument('--store', default=None,
                        help='Override flight store path')
    parser.add_argument('--output', '-o', default=None,
                        help='Override Excel report output path')
    parser.add_argument('--ids', type=int, nargs='+', default=None,
                        help='Flight ids for the assign step')
    parser.add_argument('--role', choices=['PIC', 'Dual'], default=None)
    parser.add_argument('--time-of-day', choices=['Day', 'Night'], default=None)
    parser.add_argument('--page', type=int, default=None)
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)

    config = Config.from_file(args.config)
    config.override(
        input_file=args.input,
        input_format=args.format,
        column_mapping=args.mapping,
        store=args.store,
        summary_output=args.output,
    )

    print("Flight Logbook")
    print("=" * 70)
    print(f"Config: {os.path.abspath(args.config)}")
    if config.pilot_name:
        print(f"Pilot: {config.pilot_name}")
    print(f"Store: {config.store}")

    try:
        STEP_FUNCTIONS[args.step](config, args)
    except (FileNotFoundError, ValueError) as e:
        print(f"\nERROR: {e}", file=sys.stderr)
        sys.exit(1)
    except Exception as e:
        print(f"\nERROR: {e}", file=sys.stderr)
        raise


if __name__ == '__main__':
    main()
