from __future__ import annotations

import logging
import math
from typing import Sequence, Tuple

from networth_core.domain.errors import ValidationError
from networth_core.domain.models import FixedCost, Frequency

logger = logging.getLogger(__name__)

_DIVISORS = {
    Frequency.MONTHLY: 1.0,
    Frequency.QUARTERLY: 3.0,
    Frequency.YEARLY: 12.0,
}


def monthly_equivalent(cost: FixedCost) -> float:
    try:
        divisor = _DIVISORS[Frequency(cost.frequency)]
    except ValueError as exc:
        raise ValueError(f"Unknown cost frequency: {cost.frequency!r}") from exc
    return cost.amount / divisor


def total_monthly(ledger: Sequence[FixedCost]) -> float:
    return float(sum(monthly_equivalent(c) for c in ledger))


def validate_cost(cost: FixedCost) -> None:
    if not cost.name or not cost.name.strip():
        raise ValidationError("Cost name must not be empty")
    if not (cost.amount > 0) or not math.isfinite(cost.amount):
        raise ValidationError(f"Cost amount must be a positive finite number, got {cost.amount}")


def add_cost(ledger: Sequence[FixedCost], cost: FixedCost) -> Tuple[FixedCost, ...]:
    """Returns a new ledger with ``cost`` appended; the input is left untouched."""
    validate_cost(cost)
    logger.debug("Adding cost %r (%s %s)", cost.name, cost.amount, cost.frequency)
    return tuple(ledger) + (cost,)


def remove_cost(ledger: Sequence[FixedCost], index: int) -> Tuple[FixedCost, ...]:
    entries = tuple(ledger)
    if not 0 <= index < len(entries):
        raise ValidationError(f"No cost at position {index} (ledger has {len(entries)})")
    logger.debug("Removing cost %r", entries[index].name)
    return entries[:index] + entries[index + 1 :]
