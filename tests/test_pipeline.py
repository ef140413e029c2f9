import pytest

from networth_core.domain.models import (
    Assumptions,
    CalendarMonth,
    DistributionSlice,
    EmergencyFundStatus,
    EngineSettings,
    GoalStatus,
    TrendDirection,
)
from networth_core.services.pipeline import compute_all_metrics


ACCOUNT_TYPES = [
    DistributionSlice("Checking", 15000),
    DistributionSlice("Savings", 120000),
    DistributionSlice("Investments", 150000),
    DistributionSlice("Cash", 12100),
]


def test_dashboard_scenario(dashboard_series, dashboard_ledger):
    snap = compute_all_metrics(
        dashboard_series,
        dashboard_ledger,
        Assumptions(estimated_monthly_income=5000),
        distribution=ACCOUNT_TYPES,
        today=CalendarMonth(2025, 11),
    )

    assert snap.current_value == 280000
    assert snap.delta == 2000
    assert snap.savings.monthly_average == pytest.approx(2000)
    assert snap.savings_streak == 11
    assert snap.trend.direction is TrendDirection.STABLE
    assert snap.goal.status is GoalStatus.ON_TRACK
    assert snap.goal.months_to_goal == pytest.approx(60)

    assert snap.liquid.total == 147100
    assert snap.investments.total == 150000
    assert snap.spending.avg_monthly_spending == pytest.approx(3000)
    assert snap.emergency_fund.status is EmergencyFundStatus.EXCELLENT

    alloc = snap.income_allocation
    assert alloc.total_fixed_monthly_costs == pytest.approx(1250)
    assert alloc.fixed_pct_of_costs == pytest.approx(41.7, abs=0.05)
    assert alloc.other_costs == pytest.approx(1750)
    assert alloc.savings_pct_of_income == pytest.approx(40)

    assert snap.target_progress.progress == snap.ytd.change == 20000
    assert snap.target_progress.progress_pct == 100
    assert snap.account_distribution_total == 297100


def test_empty_inputs_give_neutral_snapshot():
    snap = compute_all_metrics([], [], Assumptions(), today=CalendarMonth(2026, 3))
    assert snap.current_value == 0
    assert snap.previous_value == 0
    assert snap.last_point_year == 2026
    assert snap.savings.monthly_average == 0
    assert snap.savings_streak == 0
    assert snap.trend.direction is TrendDirection.STABLE
    assert snap.goal.status is GoalStatus.UNREACHABLE
    assert snap.liquid.pct_of_total == 0
    assert snap.spending.runway_months == 0
    assert snap.financial_independence.target_month is None
    assert snap.target_progress.progress_pct == 0


def test_settings_change_liquid_categories(dashboard_series):
    settings = EngineSettings(liquid_categories=("cash",))
    snap = compute_all_metrics(dashboard_series, [], Assumptions(), distribution=ACCOUNT_TYPES, settings=settings)
    assert snap.liquid.total == 12100


def test_snapshot_serializes_to_plain_json(dashboard_series, dashboard_ledger):
    snap = compute_all_metrics(
        dashboard_series, dashboard_ledger, Assumptions(), distribution=ACCOUNT_TYPES, today=CalendarMonth(2025, 11)
    )
    payload = snap.to_dict()
    assert payload["goal"]["status"] == "on_track"
    assert payload["goal"]["target_month"] == "2030-11"
    assert payload["trend"]["direction"] == "stable"
    assert payload["emergency_fund"]["status"] == "excellent"
