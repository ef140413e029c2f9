from __future__ import annotations

from typing import Iterable, List, Sequence

from networth_core.domain.models import CalendarMonth, MonthNote, NetWorthPoint, Range


_MONTHS_BACK = {
    Range.ONE_YEAR: 11,
    Range.SIX_MONTHS: 5,
}


def trailing_window(series: Sequence[NetWorthPoint], months_back: int) -> List[NetWorthPoint]:
    """Points with month >= last point's month minus ``months_back``."""
    if not series:
        return []
    start = series[-1].month.add_months(-months_back)
    return [p for p in series if p.month >= start]


def filter_series(series: Sequence[NetWorthPoint], range_: Range) -> List[NetWorthPoint]:
    """
    Returns the trailing part of the series selected by ``range_``.
    Order is preserved; nothing is deduplicated.
    """
    points = list(series)
    if not points:
        return []

    range_ = Range(range_)
    if range_ is Range.ALL:
        return points

    last: CalendarMonth = points[-1].month
    if range_ is Range.YTD:
        return [p for p in points if p.month.same_year(last)]

    return trailing_window(points, _MONTHS_BACK[range_])


def filter_notes(points: Iterable[NetWorthPoint], notes: Iterable[MonthNote]) -> List[MonthNote]:
    by_month = {n.month: n for n in notes}
    return [by_month[p.month] for p in points if p.month in by_month]
