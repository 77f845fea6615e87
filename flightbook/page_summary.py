"""
Per-page logbook totals with carry-forward.

Each logbook page shows three rows at the bottom: the totals of this
page, the totals brought forward from all earlier pages, and the running
total through this page. compute_page_summaries() produces exactly those
three rows for every page number in use.
"""

from collections import defaultdict

from .flight import ROLE_PIC, ROLE_DUAL, DAY, NIGHT

TOTAL_FIELDS = ('total_sec', 'pic_sec', 'dual_sec', 'day_landings', 'night_landings', 'night_sec')


def _sum_by(flights, field, predicate):
    total = 0
    for f in flights:
        if predicate(f):
            total += f.get(field) or 0
    return total


def _totals(pic_sec, dual_sec, day_landings, night_landings, night_sec):
    return {
        'total_sec': pic_sec + dual_sec,
        'pic_sec': pic_sec,
        'dual_sec': dual_sec,
        'day_landings': day_landings,
        'night_landings': night_landings,
        'night_sec': night_sec,
    }


def empty_totals():
    """All-zero totals row."""
    return _totals(0, 0, 0, 0, 0)


def compute_page_summaries(flights):
    """Compute per-page summaries with cumulative totals.

    Flights without a page (None or 0) are left out. Pages are processed
    in ascending numeric order; missing page numbers are not filled in.
    Total time is PIC + Dual block time, so a flight counts once whether
    flown by day or night.

    Args:
        flights: List of flight dicts with role, time_of_day, page,
            block_time_sec and landings.

    Returns:
        Dict {page: {'current': totals, 'previous': totals, 'total': totals}}
        in ascending page order. Each totals dict has total_sec, pic_sec,
        dual_sec, day_landings, night_landings and night_sec.
    """
    page_map = defaultdict(list)
    for f in flights:
        page = f.get('page')
        if not page:
            continue
        page_map[page].append(f)

    summaries = {}
    cum_pic = cum_dual = cum_day_ldg = cum_night_ldg = cum_night_sec = 0

    for page in sorted(page_map):
        page_flights = page_map[page]
        pic_sec = _sum_by(page_flights, 'block_time_sec', lambda f: f.get('role') == ROLE_PIC)
        dual_sec = _sum_by(page_flights, 'block_time_sec', lambda f: f.get('role') == ROLE_DUAL)
        day_ldg = _sum_by(page_flights, 'landings', lambda f: f.get('time_of_day') == DAY)
        night_ldg = _sum_by(page_flights, 'landings', lambda f: f.get('time_of_day') == NIGHT)
        night_sec = _sum_by(page_flights, 'block_time_sec', lambda f: f.get('time_of_day') == NIGHT)

        previous = _totals(cum_pic, cum_dual, cum_day_ldg, cum_night_ldg, cum_night_sec)

        cum_pic += pic_sec
        cum_dual += dual_sec
        cum_day_ldg += day_ldg
        cum_night_ldg += night_ldg
        cum_night_sec += night_sec

        summaries[page] = {
            'current': _totals(pic_sec, dual_sec, day_ldg, night_ldg, night_sec),
            'previous': previous,
            'total': _totals(cum_pic, cum_dual, cum_day_ldg, cum_night_ldg, cum_night_sec),
        }

    return summaries


def grand_totals(summaries):
    """Running total of the last page, or all zeros for an empty logbook."""
    if not summaries:
        return empty_totals()
    return dict(summaries[max(summaries)]['total'])
