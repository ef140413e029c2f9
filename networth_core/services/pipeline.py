from __future__ import annotations

from typing import Optional, Sequence

from networth_core.domain.models import (
    Assumptions,
    CalendarMonth,
    DistributionSlice,
    EngineSettings,
    FixedCost,
    MetricsSnapshot,
    NetWorthPoint,
)
from networth_core.services import cost_ledger
from networth_core.services import metrics


def compute_all_metrics(
    series: Sequence[NetWorthPoint],
    ledger: Sequence[FixedCost],
    assumptions: Assumptions,
    distribution: Sequence[DistributionSlice] = (),
    bank_distribution: Sequence[DistributionSlice] = (),
    settings: Optional[EngineSettings] = None,
    today: Optional[CalendarMonth] = None,
) -> MetricsSnapshot:
    """
    Every derived indicator for the full (unfiltered) series, computed fresh.
    ``distribution`` is the account-type breakdown used for liquid/investment sums.
    """
    settings = settings or EngineSettings()
    today = today or CalendarMonth.today()
    series = list(series)

    current = metrics.current_value(series)
    savings = metrics.trailing_12_month_savings(series)
    monthly_savings = savings.monthly_average
    ytd = metrics.ytd_change(series)

    liquid = metrics.category_holding(distribution, settings.liquid_categories, current)
    investments = metrics.category_holding(distribution, settings.investment_categories, current)
    spending = metrics.spending_and_runway(assumptions.estimated_monthly_income, monthly_savings, liquid.total)

    return MetricsSnapshot(
        current_value=current,
        previous_value=metrics.previous_value(series),
        delta=metrics.delta(series),
        last_point_year=metrics.last_point_year(series, today),
        savings=savings,
        ytd=ytd,
        savings_streak=metrics.savings_streak(series),
        trend=metrics.savings_trend(series, settings.trend_threshold),
        goal=metrics.goal_projection(assumptions.goal_amount, current, monthly_savings, today),
        projection_12m=metrics.projection_12m(current, monthly_savings),
        liquid=liquid,
        investments=investments,
        spending=spending,
        emergency_fund=metrics.emergency_fund(
            spending.avg_monthly_spending, assumptions.emergency_fund_months, liquid.total
        ),
        financial_independence=metrics.financial_independence(
            spending.avg_monthly_spending, current, monthly_savings, today, settings.fi_multiplier
        ),
        income_allocation=metrics.income_allocation(
            assumptions.estimated_monthly_income,
            monthly_savings,
            spending.avg_monthly_spending,
            cost_ledger.total_monthly(ledger),
        ),
        target_progress=metrics.target_progress(ytd, assumptions.yearly_savings_target),
        account_distribution_total=metrics.distribution_total(distribution),
        bank_distribution_total=metrics.distribution_total(bank_distribution),
    )
