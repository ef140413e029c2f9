from __future__ import annotations

import logging
import math
from typing import Iterable, List, Optional, Sequence

import numpy as np

from networth_core.domain.models import (
    CalendarMonth,
    CategoryHolding,
    DistributionSlice,
    EmergencyFund,
    EmergencyFundStatus,
    FinancialIndependence,
    GoalProjection,
    GoalStatus,
    IncomeAllocation,
    NetWorthPoint,
    Projection12m,
    SavingsAverages,
    SavingsTrend,
    SavingsWindow,
    SpendingRunway,
    TargetProgress,
    TrendDirection,
    YtdChange,
)
from networth_core.services.range_filter import trailing_window

logger = logging.getLogger(__name__)

DEFAULT_TREND_THRESHOLD = 50.0
FI_MULTIPLIER = 25.0

_WINDOW_MONTHS_BACK = {
    SavingsWindow.TWELVE_MONTHS: 11,
    SavingsWindow.SIX_MONTHS: 5,
}

# (lower bound in %, status), highest first
_EMERGENCY_TIERS = (
    (100.0, EmergencyFundStatus.EXCELLENT),
    (75.0, EmergencyFundStatus.GOOD),
    (50.0, EmergencyFundStatus.FAIR),
)


def clamp(lo: float, hi: float, x: float) -> float:
    return max(lo, min(hi, x))


def _ceil_months(months: float) -> int:
    return int(math.ceil(months))


# -------------------------------
# Current / previous
# -------------------------------


def current_value(series: Sequence[NetWorthPoint]) -> float:
    return float(series[-1].value) if series else 0.0


def previous_value(series: Sequence[NetWorthPoint]) -> float:
    return float(series[-2].value) if len(series) > 1 else 0.0


def delta(series: Sequence[NetWorthPoint]) -> float:
    return current_value(series) - previous_value(series)


def last_point_year(series: Sequence[NetWorthPoint], today: Optional[CalendarMonth] = None) -> int:
    if series:
        return series[-1].month.year
    return (today or CalendarMonth.today()).year


# -------------------------------
# Savings
# -------------------------------


def _month_deltas(points: Sequence[NetWorthPoint]) -> np.ndarray:
    values = np.array([p.value for p in points], dtype=float)
    return np.diff(values)


def _window(series: Sequence[NetWorthPoint], window: SavingsWindow) -> List[NetWorthPoint]:
    window = SavingsWindow(window)
    if window is SavingsWindow.ALL:
        return list(series)
    return trailing_window(series, _WINDOW_MONTHS_BACK[window])


def savings_averages(series: Sequence[NetWorthPoint], window: SavingsWindow) -> SavingsAverages:
    """
    Average month-over-month change over the selected trailing window.
    Fewer than two points in the window gives zeros.
    """
    points = _window(series, window)
    if len(points) < 2:
        return SavingsAverages()
    monthly = float(_month_deltas(points).mean())
    return SavingsAverages(monthly_average=monthly, yearly_average=monthly * 12)


def trailing_12_month_savings(series: Sequence[NetWorthPoint]) -> SavingsAverages:
    return savings_averages(series, SavingsWindow.TWELVE_MONTHS)


def ytd_change(series: Sequence[NetWorthPoint]) -> YtdChange:
    if not series:
        return YtdChange()
    last = series[-1]
    year_start = next((p for p in series if p.month.same_year(last.month)), None)
    if year_start is None:
        return YtdChange()
    change = float(last.value - year_start.value)
    pct = change / year_start.value * 100 if year_start.value else 0.0
    return YtdChange(change=change, pct=pct)


def savings_streak(series: Sequence[NetWorthPoint]) -> int:
    streak = 0
    for i in range(len(series) - 1, 0, -1):
        if series[i].value - series[i - 1].value > 0:
            streak += 1
        else:
            break
    return streak


def savings_trend(
    series: Sequence[NetWorthPoint],
    threshold: float = DEFAULT_TREND_THRESHOLD,
) -> SavingsTrend:
    """
    Least-squares slope of the monthly deltas in the trailing 12-month window
    against their index. Needs at least three deltas.
    """
    deltas = _month_deltas(trailing_window(series, _WINDOW_MONTHS_BACK[SavingsWindow.TWELVE_MONTHS]))
    n = len(deltas)
    if n < 3:
        return SavingsTrend()

    x = np.arange(n, dtype=float)
    x_diff = x - x.mean()
    y_diff = deltas - deltas.mean()
    denominator = float((x_diff ** 2).sum())
    slope = float((x_diff * y_diff).sum() / denominator) if denominator != 0 else 0.0

    if abs(slope) < threshold:
        direction = TrendDirection.STABLE
    elif slope > 0:
        direction = TrendDirection.IMPROVING
    else:
        direction = TrendDirection.DECLINING
    logger.debug("Savings trend over %d deltas: slope=%.2f (%s)", n, slope, direction.value)
    return SavingsTrend(slope=slope, direction=direction)


# -------------------------------
# Goal / projection
# -------------------------------


def goal_projection(
    goal_amount: float,
    current: float,
    monthly_savings: float,
    today: Optional[CalendarMonth] = None,
) -> GoalProjection:
    remaining = goal_amount - current
    if remaining <= 0:
        return GoalProjection(status=GoalStatus.REACHED, remaining=remaining)
    if monthly_savings <= 0:
        return GoalProjection(status=GoalStatus.UNREACHABLE, remaining=remaining)

    months = remaining / monthly_savings
    start = today or CalendarMonth.today()
    return GoalProjection(
        status=GoalStatus.ON_TRACK,
        remaining=remaining,
        months_to_goal=months,
        years_to_goal=months / 12,
        target_month=start.add_months(_ceil_months(months)),
    )


def projection_12m(current: float, monthly_savings: float) -> Projection12m:
    growth = monthly_savings * 12
    return Projection12m(projected_balance=current + growth, projected_growth=growth)


# -------------------------------
# Holdings
# -------------------------------


def _category_sum(slices: Iterable[DistributionSlice], categories: Iterable[str]) -> float:
    wanted = {c.strip().lower() for c in categories}
    return float(sum(s.value for s in slices if s.name.strip().lower() in wanted))


def category_holding(
    slices: Iterable[DistributionSlice],
    categories: Iterable[str],
    current: float,
) -> CategoryHolding:
    total = _category_sum(slices, categories)
    pct = total / current * 100 if current > 0 else 0.0
    return CategoryHolding(total=total, pct_of_total=pct)


def distribution_total(slices: Iterable[DistributionSlice]) -> float:
    return float(sum(s.value for s in slices))


def distribution_shares(slices: Sequence[DistributionSlice]) -> List[float]:
    total = distribution_total(slices)
    if total <= 0:
        return [0.0 for _ in slices]
    return [s.value / total * 100 for s in slices]


# -------------------------------
# Spending-derived metrics
# -------------------------------


def spending_and_runway(income: float, monthly_savings: float, liquid: float) -> SpendingRunway:
    spending = income - monthly_savings
    runway = liquid / spending if spending > 0 else 0.0
    return SpendingRunway(avg_monthly_spending=spending, runway_months=runway)


def emergency_fund(avg_monthly_spending: float, months: float, liquid: float) -> EmergencyFund:
    target = avg_monthly_spending * months
    pct = liquid / target * 100 if target > 0 else 0.0
    status = next(
        (tier for bound, tier in _EMERGENCY_TIERS if pct >= bound),
        EmergencyFundStatus.INSUFFICIENT,
    )
    return EmergencyFund(target=target, pct=pct, status=status)


def financial_independence(
    avg_monthly_spending: float,
    current: float,
    monthly_savings: float,
    today: Optional[CalendarMonth] = None,
    multiplier: float = FI_MULTIPLIER,
) -> FinancialIndependence:
    yearly = avg_monthly_spending * 12
    target = yearly * multiplier
    pct = current / target * 100 if target > 0 else 0.0
    months = (target - current) / monthly_savings if monthly_savings > 0 else 0.0

    target_month = None
    if pct < 100 and monthly_savings > 0:
        target_month = (today or CalendarMonth.today()).add_months(max(0, _ceil_months(months)))

    return FinancialIndependence(
        yearly_spending=yearly,
        fi_target=target,
        fi_pct=pct,
        months_to_fi=months,
        years_to_fi=months / 12,
        target_month=target_month,
    )


def income_allocation(
    income: float,
    monthly_savings: float,
    avg_monthly_spending: float,
    total_fixed_monthly_costs: float,
) -> IncomeAllocation:
    savings_pct = clamp(0, 100, monthly_savings / income * 100) if income > 0 else 0.0
    fixed_pct = (
        clamp(0, 100, total_fixed_monthly_costs / avg_monthly_spending * 100)
        if avg_monthly_spending > 0
        else 0.0
    )
    return IncomeAllocation(
        savings_pct_of_income=savings_pct,
        costs_pct_of_income=clamp(0, 100, 100 - savings_pct),
        total_fixed_monthly_costs=total_fixed_monthly_costs,
        fixed_pct_of_costs=fixed_pct,
        other_costs=avg_monthly_spending - total_fixed_monthly_costs,
        other_pct_of_costs=clamp(0, 100, 100 - fixed_pct),
    )


def target_progress(ytd: YtdChange, yearly_savings_target: float) -> TargetProgress:
    progress = ytd.change
    pct = clamp(0, 100, progress / yearly_savings_target * 100) if yearly_savings_target > 0 else 0.0
    return TargetProgress(progress=progress, progress_pct=pct)
