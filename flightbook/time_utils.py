"""
Time value conversions between spreadsheet cells and logbook labels.

Spreadsheets store times of day and durations as a fraction of a day
(0.5 = 12 hours). openpyxl hands such cells back as floats, or as
datetime.time / timedelta objects when the cell carries a time format.

None of these functions raise: unrecognized input gives the default.
"""

import math
import re
from datetime import datetime, time, timedelta

SECONDS_PER_DAY = 86400

# Day zero of spreadsheet serial dates; openpyxl turns durations of a day
# or more into datetimes counted from here
EXCEL_EPOCH = datetime(1899, 12, 30)


def _round_half_up(val):
    return int(math.floor(val + 0.5))


def excel_time_to_seconds(val):
    """Convert a spreadsheet time value (fractional day) to seconds.

    Args:
        val: Fractional day, datetime.time, timedelta, datetime (time since
            the spreadsheet epoch), or None.

    Returns:
        Integer seconds, 0 for anything unrecognized.
    """
    if val is None or isinstance(val, bool):
        return 0
    if isinstance(val, (int, float)):
        if isinstance(val, float) and not math.isfinite(val):
            return 0
        return _round_half_up(val * SECONDS_PER_DAY)
    if isinstance(val, timedelta):
        return _round_half_up(val.total_seconds())
    if isinstance(val, datetime):
        return _round_half_up((val - EXCEL_EPOCH).total_seconds())
    if isinstance(val, time):
        return val.hour * 3600 + val.minute * 60 + val.second
    return 0


def excel_time_to_hhmm(val):
    """Convert a spreadsheet time value to an HH:MM string.

    Strings are passed through unchanged.

    Args:
        val: Fractional day, string, datetime.time, datetime (clock part
            only), or None.

    Returns:
        'HH:MM' string, or '' for None.
    """
    if val is None:
        return ''
    if isinstance(val, str):
        return val
    if isinstance(val, datetime):
        val = val.time()
    if isinstance(val, (int, float, timedelta, time)) and not isinstance(val, bool):
        total_sec = excel_time_to_seconds(val)
        h = total_sec // 3600
        m = (total_sec % 3600) // 60
        return f"{h:02d}:{m:02d}"
    return str(val)


def sec_to_hm(sec):
    """Format seconds as H:MM (e.g. 35520 -> '9:52').

    Hours are unpadded, minutes are floored and zero-padded.
    """
    if not sec:
        return '0:00'
    sec = int(sec)
    h = sec // 3600
    m = (sec % 3600) // 60
    return f"{h}:{m:02d}"


def hm_to_sec(text):
    """Parse an H:MM or HH:MM string to seconds. Returns 0 if unparseable."""
    if not isinstance(text, str):
        return 0
    match = re.match(r'^\s*(\d+):(\d{2})(?::(\d{2}))?\s*$', text)
    if not match:
        return 0
    h, m = int(match.group(1)), int(match.group(2))
    s = int(match.group(3) or 0)
    return h * 3600 + m * 60 + s
