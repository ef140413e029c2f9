from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Sequence

import pandas as pd

from networth_core.domain.models import CostKind, FixedCost, Frequency
from networth_core.io._csv import read_table
from networth_core.services.cost_ledger import validate_cost

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = {"name", "amount", "frequency"}
COLUMNS = ["name", "amount", "frequency", "account", "kind"]


def load_costs(csv_path: str | Path) -> List[FixedCost]:
    df = read_table(csv_path, REQUIRED_COLUMNS)
    costs: List[FixedCost] = []
    for _, row in df.iterrows():
        account = str(row.get("account", "")).strip()
        kind = str(row.get("kind", "")).strip().lower()
        cost = FixedCost(
            name=row["name"],
            amount=float(row["amount"]),
            frequency=Frequency(str(row["frequency"]).strip().lower()),
            account=account or None,
            kind=CostKind(kind) if kind else CostKind.FIXED,
        )
        validate_cost(cost)
        costs.append(cost)
    return costs


def save_costs(csv_path: str | Path, ledger: Sequence[FixedCost]) -> None:
    path = Path(csv_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    rows = [
        {
            "name": c.name,
            "amount": c.amount,
            "frequency": Frequency(c.frequency).value,
            "account": c.account or "",
            "kind": CostKind(c.kind).value,
        }
        for c in ledger
    ]
    pd.DataFrame(rows, columns=COLUMNS).to_csv(path, index=False)
    logger.debug("Wrote %d cost(s) to %s", len(rows), path)
