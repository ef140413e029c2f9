from __future__ import annotations


class ValidationError(ValueError):
    """Raised when a mutation would break a ledger, store or assumption invariant."""
