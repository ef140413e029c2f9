import pytest

from networth_core.domain.errors import ValidationError
from networth_core.domain.models import FixedCost, Frequency
from networth_core.services.cost_ledger import add_cost, monthly_equivalent, remove_cost, total_monthly


def test_monthly_equivalent_per_frequency():
    assert monthly_equivalent(FixedCost("Water", 120, Frequency.YEARLY)) == 10
    assert monthly_equivalent(FixedCost("Insurance", 90, Frequency.QUARTERLY)) == 30
    assert monthly_equivalent(FixedCost("Rent", 900, Frequency.MONTHLY)) == 900


def test_monthly_equivalent_is_stable():
    cost = FixedCost("Water", 120, Frequency.YEARLY)
    assert monthly_equivalent(cost) == monthly_equivalent(cost)


def test_unknown_frequency_fails_fast():
    with pytest.raises(ValueError):
        monthly_equivalent(FixedCost("Odd", 10, "weekly"))


def test_total_monthly(dashboard_ledger):
    assert total_monthly(dashboard_ledger) == pytest.approx(1250)
    assert total_monthly([]) == 0


@pytest.mark.parametrize(
    "cost",
    [
        FixedCost("", 10),
        FixedCost("   ", 10),
        FixedCost("Gym", 0),
        FixedCost("Gym", -5),
        FixedCost("Gym", float("nan")),
        FixedCost("Gym", float("inf")),
    ],
)
def test_add_rejects_invalid_cost(dashboard_ledger, cost):
    before = list(dashboard_ledger)
    with pytest.raises(ValidationError):
        add_cost(dashboard_ledger, cost)
    assert dashboard_ledger == before


def test_add_and_remove_preserve_order(dashboard_ledger):
    gym = FixedCost("Gym", 40, Frequency.MONTHLY, account="Checking")
    added = add_cost(dashboard_ledger, gym)
    assert added[-1] == gym
    assert len(dashboard_ledger) == 4

    removed = remove_cost(added, 1)
    assert [c.name for c in removed] == ["Mortgage", "Water", "Internet / phone", "Gym"]


@pytest.mark.parametrize("index", [-1, 4, 99])
def test_remove_out_of_range(dashboard_ledger, index):
    with pytest.raises(ValidationError):
        remove_cost(dashboard_ledger, index)
