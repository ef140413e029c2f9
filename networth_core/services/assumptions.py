from __future__ import annotations

import dataclasses
import logging
import math

from networth_core.domain.errors import ValidationError
from networth_core.domain.models import Assumptions

logger = logging.getLogger(__name__)

ASSUMPTION_NAMES = tuple(f.name for f in dataclasses.fields(Assumptions))


def set_assumption(assumptions: Assumptions, name: str, value: float) -> Assumptions:
    """
    Returns a copy with ``name`` set to ``max(0, value)``.
    Unknown names and non-finite values are rejected.
    """
    key = name.strip().replace("-", "_")
    if key not in ASSUMPTION_NAMES:
        raise ValidationError(f"Unknown assumption {name!r}; expected one of {', '.join(ASSUMPTION_NAMES)}")
    try:
        number = float(value)
    except (TypeError, ValueError) as exc:
        raise ValidationError(f"Assumption {key} needs a number, got {value!r}") from exc
    if not math.isfinite(number):
        raise ValidationError(f"Assumption {key} must be finite")
    if number < 0:
        logger.info("Clamping negative %s (%s) to 0", key, number)
    return dataclasses.replace(assumptions, **{key: max(0.0, number)})
