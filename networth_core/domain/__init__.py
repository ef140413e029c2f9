from networth_core.domain.errors import ValidationError  # noqa: F401
from networth_core.domain.models import (  # noqa: F401
    Assumptions,
    CalendarMonth,
    CostKind,
    DistributionSlice,
    EmergencyFundStatus,
    EngineSettings,
    FixedCost,
    Frequency,
    GoalStatus,
    MetricsSnapshot,
    MonthNote,
    NetWorthPoint,
    Range,
    SavingsWindow,
    TimeSeriesStore,
    TrendDirection,
)

__all__ = [
    "Assumptions",
    "CalendarMonth",
    "CostKind",
    "DistributionSlice",
    "EmergencyFundStatus",
    "EngineSettings",
    "FixedCost",
    "Frequency",
    "GoalStatus",
    "MetricsSnapshot",
    "MonthNote",
    "NetWorthPoint",
    "Range",
    "SavingsWindow",
    "TimeSeriesStore",
    "TrendDirection",
    "ValidationError",
]
