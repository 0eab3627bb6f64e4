"""Domain-specific exceptions for the party ledger core."""


class LedgerError(Exception):
    """Base class for errors raised by the ledger core."""


class ValidationError(LedgerError, ValueError):
    """Raised when provided data does not meet validation requirements."""


class RecordNotFoundError(LedgerError, LookupError):
    """Raised when a party cannot be located."""
