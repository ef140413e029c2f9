from networth_core.services.assumptions import set_assumption  # noqa: F401
from networth_core.services.cost_ledger import add_cost, monthly_equivalent, remove_cost, total_monthly  # noqa: F401
from networth_core.services.pipeline import compute_all_metrics  # noqa: F401
from networth_core.services.range_filter import filter_notes, filter_series  # noqa: F401

__all__ = [
    "add_cost",
    "compute_all_metrics",
    "filter_notes",
    "filter_series",
    "monthly_equivalent",
    "remove_cost",
    "set_assumption",
    "total_monthly",
]
