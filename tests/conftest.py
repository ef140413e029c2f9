from pathlib import Path
from typing import List

import pytest

from networth_core.domain.models import CalendarMonth, FixedCost, Frequency, NetWorthPoint


DATA_DIR = Path(__file__).parent / "data"


def make_series(start: str, values) -> List[NetWorthPoint]:
    first = CalendarMonth.parse(start)
    return [NetWorthPoint(month=first.add_months(i), value=float(v)) for i, v in enumerate(values)]


@pytest.fixture
def data_dir() -> Path:
    return DATA_DIR


@pytest.fixture
def dashboard_series() -> List[NetWorthPoint]:
    return make_series("2024-12", range(258000, 280001, 2000))


@pytest.fixture
def dashboard_ledger() -> List[FixedCost]:
    return [
        FixedCost("Mortgage", 1000, Frequency.MONTHLY),
        FixedCost("Electricity", 160, Frequency.MONTHLY),
        FixedCost("Water", 120, Frequency.YEARLY),
        FixedCost("Internet / phone", 80, Frequency.MONTHLY),
    ]
