from networth_core.io.config import load_assumptions, load_engine_settings, save_assumptions  # noqa: F401
from networth_core.io.costs import load_costs, save_costs  # noqa: F401
from networth_core.io.series import load_distribution, load_notes, load_series, load_store  # noqa: F401

__all__ = [
    "load_assumptions",
    "load_costs",
    "load_distribution",
    "load_engine_settings",
    "load_notes",
    "load_series",
    "load_store",
    "save_assumptions",
    "save_costs",
]
