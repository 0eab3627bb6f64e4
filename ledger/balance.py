"""Balance computation over a party's entries."""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import TYPE_CHECKING, Dict, Iterable

if TYPE_CHECKING:  # pragma: no cover
    from .models import Entry

__all__ = ["ENTRY_TYPES", "SIGNS", "compute_balance", "totals_by_type"]

logger = logging.getLogger(__name__)

# Purchases are debits against the party; payments and returns are credits.
SIGNS: Dict[str, int] = {
    "purchase": -1,
    "payment": 1,
    "return": 1,
}

ENTRY_TYPES = frozenset(SIGNS)

ZERO = Decimal("0.00")


def compute_balance(entries: Iterable["Entry"]) -> Decimal:
    """Fold entries into a signed net balance (payments + returns - purchases).

    Unknown entry types contribute nothing. The store rejects them at creation,
    so seeing one here means an Entry was built by hand.
    """
    balance = ZERO
    for entry in entries:
        sign = SIGNS.get(entry.type)
        if sign is None:
            logger.warning("Ignoring entry %s with unknown type %r", entry.id, entry.type)
            continue
        balance += sign * entry.amount
    return balance


def totals_by_type(entries: Iterable["Entry"]) -> Dict[str, Decimal]:
    totals = {entry_type: ZERO for entry_type in SIGNS}
    for entry in entries:
        if entry.type in totals:
            totals[entry.type] += entry.amount
    return totals
