from __future__ import annotations

import dataclasses
import datetime as dt
import enum
from typing import Dict, Optional, Tuple

from networth_core.domain.errors import ValidationError


@dataclasses.dataclass(frozen=True, order=True)
class CalendarMonth:
    year: int
    month: int

    def __post_init__(self) -> None:
        if not 1 <= self.month <= 12:
            raise ValueError(f"Month out of range: {self.month}")

    @classmethod
    def parse(cls, raw: str) -> "CalendarMonth":
        txt = str(raw).strip()
        parts = txt.split("-")
        if len(parts) < 2:
            raise ValueError(f"Expected YYYY-MM, got {raw!r}")
        return cls(int(parts[0]), int(parts[1]))

    @classmethod
    def today(cls) -> "CalendarMonth":
        now = dt.date.today()
        return cls(now.year, now.month)

    def add_months(self, n: int) -> "CalendarMonth":
        index = self.year * 12 + (self.month - 1) + n
        return CalendarMonth(index // 12, index % 12 + 1)

    def same_year(self, other: "CalendarMonth") -> bool:
        return self.year == other.year

    def months_since(self, other: "CalendarMonth") -> int:
        return (self.year - other.year) * 12 + (self.month - other.month)

    def __str__(self) -> str:
        return f"{self.year:04d}-{self.month:02d}"


@dataclasses.dataclass(frozen=True)
class NetWorthPoint:
    month: CalendarMonth
    value: float


@dataclasses.dataclass(frozen=True)
class MonthNote:
    month: CalendarMonth
    text: str


@dataclasses.dataclass(frozen=True)
class DistributionSlice:
    name: str
    value: float


class Range(str, enum.Enum):
    ALL = "all"
    YTD = "ytd"
    ONE_YEAR = "1y"
    SIX_MONTHS = "6m"


class SavingsWindow(str, enum.Enum):
    ALL = "all"
    TWELVE_MONTHS = "12m"
    SIX_MONTHS = "6m"


class Frequency(str, enum.Enum):
    MONTHLY = "monthly"
    QUARTERLY = "quarterly"
    YEARLY = "yearly"


class CostKind(str, enum.Enum):
    FIXED = "fixed"
    VARIABLE = "variable"


@dataclasses.dataclass(frozen=True)
class FixedCost:
    name: str
    amount: float
    frequency: Frequency = Frequency.MONTHLY
    account: Optional[str] = None
    kind: CostKind = CostKind.FIXED


@dataclasses.dataclass(frozen=True)
class Assumptions:
    estimated_monthly_income: float = 5000.0
    yearly_savings_target: float = 10000.0
    goal_amount: float = 400000.0
    emergency_fund_months: float = 6.0


@dataclasses.dataclass(frozen=True)
class EngineSettings:
    trend_threshold: float = 50.0
    fi_multiplier: float = 25.0
    liquid_categories: Tuple[str, ...] = ("cash", "checking", "savings", "zicht", "spaar")
    investment_categories: Tuple[str, ...] = ("investments", "beleggingen")


@dataclasses.dataclass(frozen=True)
class TimeSeriesStore:
    """
    In-memory holder for the monthly net-worth series and its month notes.

    Points are strictly increasing by month. Notes are keyed by month.
    """

    points: Tuple[NetWorthPoint, ...] = ()
    notes: Tuple[MonthNote, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "points", tuple(self.points))
        object.__setattr__(self, "notes", tuple(self.notes))
        for prev, cur in zip(self.points, self.points[1:]):
            if cur.month <= prev.month:
                raise ValidationError(f"Series not strictly increasing at {cur.month}")
        seen = set()
        for note in self.notes:
            if note.month in seen:
                raise ValidationError(f"Duplicate note for {note.month}")
            seen.add(note.month)

    def replace_series(self, points) -> "TimeSeriesStore":
        return TimeSeriesStore(points=tuple(points), notes=self.notes)

    def note_for(self, month: CalendarMonth) -> Optional[MonthNote]:
        for note in self.notes:
            if note.month == month:
                return note
        return None

    def gaps(self) -> Tuple[CalendarMonth, ...]:
        if not self.points:
            return ()
        present = {p.month for p in self.points}
        first, last = self.points[0].month, self.points[-1].month
        return tuple(
            first.add_months(i)
            for i in range(last.months_since(first) + 1)
            if first.add_months(i) not in present
        )


# -------------------------------
# Metric results
# -------------------------------


class TrendDirection(str, enum.Enum):
    IMPROVING = "improving"
    DECLINING = "declining"
    STABLE = "stable"


class GoalStatus(str, enum.Enum):
    REACHED = "reached"
    UNREACHABLE = "unreachable"
    ON_TRACK = "on_track"


class EmergencyFundStatus(str, enum.Enum):
    EXCELLENT = "excellent"
    GOOD = "good"
    FAIR = "fair"
    INSUFFICIENT = "insufficient"


@dataclasses.dataclass(frozen=True)
class SavingsAverages:
    monthly_average: float = 0.0
    yearly_average: float = 0.0


@dataclasses.dataclass(frozen=True)
class YtdChange:
    change: float = 0.0
    pct: float = 0.0


@dataclasses.dataclass(frozen=True)
class SavingsTrend:
    slope: float = 0.0
    direction: TrendDirection = TrendDirection.STABLE


@dataclasses.dataclass(frozen=True)
class GoalProjection:
    status: GoalStatus
    remaining: float
    months_to_goal: Optional[float] = None
    years_to_goal: Optional[float] = None
    target_month: Optional[CalendarMonth] = None


@dataclasses.dataclass(frozen=True)
class Projection12m:
    projected_balance: float = 0.0
    projected_growth: float = 0.0


@dataclasses.dataclass(frozen=True)
class CategoryHolding:
    total: float = 0.0
    pct_of_total: float = 0.0


@dataclasses.dataclass(frozen=True)
class SpendingRunway:
    avg_monthly_spending: float = 0.0
    runway_months: float = 0.0


@dataclasses.dataclass(frozen=True)
class EmergencyFund:
    target: float = 0.0
    pct: float = 0.0
    status: EmergencyFundStatus = EmergencyFundStatus.INSUFFICIENT


@dataclasses.dataclass(frozen=True)
class FinancialIndependence:
    yearly_spending: float = 0.0
    fi_target: float = 0.0
    fi_pct: float = 0.0
    months_to_fi: float = 0.0
    years_to_fi: float = 0.0
    target_month: Optional[CalendarMonth] = None


@dataclasses.dataclass(frozen=True)
class IncomeAllocation:
    savings_pct_of_income: float = 0.0
    costs_pct_of_income: float = 0.0
    total_fixed_monthly_costs: float = 0.0
    fixed_pct_of_costs: float = 0.0
    other_costs: float = 0.0
    other_pct_of_costs: float = 0.0


@dataclasses.dataclass(frozen=True)
class TargetProgress:
    progress: float = 0.0
    progress_pct: float = 0.0


@dataclasses.dataclass(frozen=True)
class MetricsSnapshot:
    current_value: float
    previous_value: float
    delta: float
    last_point_year: int
    savings: SavingsAverages
    ytd: YtdChange
    savings_streak: int
    trend: SavingsTrend
    goal: GoalProjection
    projection_12m: Projection12m
    liquid: CategoryHolding
    investments: CategoryHolding
    spending: SpendingRunway
    emergency_fund: EmergencyFund
    financial_independence: FinancialIndependence
    income_allocation: IncomeAllocation
    target_progress: TargetProgress
    account_distribution_total: float
    bank_distribution_total: float

    def to_dict(self) -> Dict[str, object]:
        return _jsonable(self)


def _jsonable(value):
    if isinstance(value, CalendarMonth):
        return str(value)
    if dataclasses.is_dataclass(value):
        return {f.name: _jsonable(getattr(value, f.name)) for f in dataclasses.fields(value)}
    if isinstance(value, dict):
        return {k: _jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_jsonable(v) for v in value]
    if isinstance(value, enum.Enum):
        return value.value
    return value
