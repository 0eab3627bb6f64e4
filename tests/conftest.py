from __future__ import annotations

import pytest

from ledger.store import PartyStore


@pytest.fixture()
def store() -> PartyStore:
    return PartyStore()


@pytest.fixture()
def trip(store: PartyStore):
    party = store.add_party("Trip")
    store.add_entry(party.id, {"type": "purchase", "amount": "100"})
    store.add_entry(party.id, {"type": "payment", "amount": "40"})
    store.add_entry(party.id, {"type": "return", "amount": "10"})
    return store.get(party.id)
