"""In-memory, session-scoped store of parties and their entries."""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Dict, List, Mapping
from uuid import uuid4

from .balance import ENTRY_TYPES, ZERO, compute_balance
from .exceptions import RecordNotFoundError
from .models import Entry, Party
from .validators import (
    PARTY_NAME_MAX_LENGTH,
    parse_amount,
    validate_date,
    validate_enum,
    validate_required_str,
)

logger = logging.getLogger(__name__)


class PartyStore:
    """Holds the authoritative list of parties for one session.

    Both collections are append-only: parties can be added and entries can be
    appended to a party, nothing is ever edited or removed. Parties keep their
    creation order. Party values are frozen, so a snapshot handed to a caller
    never changes underneath it.
    """

    def __init__(self) -> None:
        self._parties: Dict[str, Party] = {}

    # Public API -----------------------------------------------------------
    def add_party(self, name: object) -> Party:
        party = Party(
            id=str(uuid4()),
            name=validate_required_str(name, "name", PARTY_NAME_MAX_LENGTH),
        )
        self._parties[party.id] = party
        logger.debug("Added party %s (%s)", party.id, party.name)
        return party

    def add_entry(self, party_id: str, payload: Mapping[str, object]) -> Entry:
        party = self._get_or_raise(party_id)
        entry = Entry(**self._validate_entry(payload))
        # Replacing the value keeps the dict position, so creation order holds.
        self._parties[party_id] = party.with_entry(entry)
        logger.debug(
            "Added %s entry %s of %s to party %s", entry.type, entry.id, entry.amount, party_id
        )
        return entry

    def get(self, party_id: str) -> Party:
        """Return a party or raise if it does not exist."""
        return self._get_or_raise(party_id)

    def list(self) -> List[Party]:
        return list(self._parties.values())

    def snapshot(self) -> List[Dict[str, object]]:
        """Return a serialisable snapshot of every party."""
        return [party.to_dict() for party in self._parties.values()]

    def balance(self, party_id: str) -> Decimal:
        return compute_balance(self._get_or_raise(party_id).entries)

    def summary(self) -> Dict[str, object]:
        """Balances of all parties plus their overall net."""
        balances = [(party, party.balance) for party in self._parties.values()]
        net = sum((balance for _, balance in balances), start=ZERO)
        return {
            "parties": [
                {"id": party.id, "name": party.name, "balance": f"{balance:.2f}"}
                for party, balance in balances
            ],
            "net": f"{net:.2f}",
        }

    def clear(self) -> None:
        """Drop every party, ending the session's data."""
        logger.info("Clearing %d parties", len(self._parties))
        self._parties.clear()

    def __len__(self) -> int:
        return len(self._parties)

    def __contains__(self, party_id: object) -> bool:
        return party_id in self._parties

    # Internal helpers -----------------------------------------------------
    def _get_or_raise(self, party_id: str) -> Party:
        try:
            return self._parties[party_id]
        except (KeyError, TypeError) as exc:
            raise RecordNotFoundError(f"Party {party_id} not found") from exc

    @staticmethod
    def _validate_entry(payload: Mapping[str, object]) -> Dict[str, object]:
        return {
            "id": str(uuid4()),
            "type": validate_enum(payload.get("type"), "type", ENTRY_TYPES),
            "amount": parse_amount(payload.get("amount"), "amount"),
            "date": validate_date(payload.get("date"), "date"),
        }
