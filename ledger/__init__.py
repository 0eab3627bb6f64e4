"""Core business logic package for the party ledger."""

from .balance import compute_balance, totals_by_type
from .exceptions import LedgerError, RecordNotFoundError, ValidationError
from .models import ENTRY_TYPES, Entry, Party
from .store import PartyStore

__all__ = [
    "ENTRY_TYPES",
    "Entry",
    "Party",
    "PartyStore",
    "compute_balance",
    "totals_by_type",
    "LedgerError",
    "RecordNotFoundError",
    "ValidationError",
]
