"""Data models for the party ledger domain."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Any, Dict, Tuple

from .balance import ENTRY_TYPES, compute_balance

__all__ = ["ENTRY_TYPES", "Entry", "Party"]


@dataclass(frozen=True)
class Entry:
    id: str
    type: str
    amount: Decimal
    date: date

    def to_dict(self) -> Dict[str, Any]:
        """Serialise the entry to JSON-friendly natives."""
        return {
            "id": self.id,
            "type": self.type,
            "amount": f"{self.amount:.2f}",
            "date": self.date.isoformat(),
        }


@dataclass(frozen=True)
class Party:
    id: str
    name: str
    entries: Tuple[Entry, ...] = field(default_factory=tuple)

    @property
    def balance(self) -> Decimal:
        return compute_balance(self.entries)

    def with_entry(self, entry: Entry) -> "Party":
        """Return a copy of the party with ``entry`` appended."""
        return Party(id=self.id, name=self.name, entries=self.entries + (entry,))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "entries": [entry.to_dict() for entry in self.entries],
            "balance": f"{self.balance:.2f}",
        }
