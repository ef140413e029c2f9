from __future__ import annotations

import dataclasses
import json
from pathlib import Path
from typing import Any, Dict

from networth_core.domain.models import Assumptions, EngineSettings

_DEFAULT_SETTINGS = EngineSettings()


def load_assumptions(path: str | Path) -> Assumptions:
    data = _read_json(path)
    defaults = Assumptions()
    return Assumptions(
        estimated_monthly_income=max(0.0, float(data.get("estimated_monthly_income", defaults.estimated_monthly_income))),
        yearly_savings_target=max(0.0, float(data.get("yearly_savings_target", defaults.yearly_savings_target))),
        goal_amount=max(0.0, float(data.get("goal_amount", defaults.goal_amount))),
        emergency_fund_months=max(0.0, float(data.get("emergency_fund_months", defaults.emergency_fund_months))),
    )


def save_assumptions(path: str | Path, assumptions: Assumptions) -> None:
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    with p.open("w", encoding="utf-8") as f:
        json.dump(dataclasses.asdict(assumptions), f, indent=2)


def load_engine_settings(path: str | Path) -> EngineSettings:
    data = _read_json(path)
    return EngineSettings(
        trend_threshold=float(data.get("trend_threshold", _DEFAULT_SETTINGS.trend_threshold)),
        fi_multiplier=float(data.get("fi_multiplier", _DEFAULT_SETTINGS.fi_multiplier)),
        liquid_categories=tuple(data.get("liquid_categories", _DEFAULT_SETTINGS.liquid_categories)),
        investment_categories=tuple(data.get("investment_categories", _DEFAULT_SETTINGS.investment_categories)),
    )


def _read_json(path: str | Path) -> Dict[str, Any]:
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)
