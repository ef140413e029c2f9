from __future__ import annotations

from pathlib import Path
from typing import Set

import pandas as pd


def read_table(csv_path: str | Path, required: Set[str]) -> pd.DataFrame:
    path = Path(csv_path)
    if not path.exists():
        raise FileNotFoundError(path)

    # every column as text; numeric columns are converted by the loaders
    df = pd.read_csv(path, dtype=str, keep_default_na=False)
    df.columns = [str(c).strip().lower() for c in df.columns]
    missing = required - set(df.columns)
    if missing:
        raise ValueError(f"Missing columns in {path.name}: {sorted(missing)}")
    return df
