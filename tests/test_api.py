from __future__ import annotations

import pytest

from api.app import create_app
from ledger.store import PartyStore


@pytest.fixture()
def client(store: PartyStore):
    app = create_app(store)
    app.config.update(TESTING=True)
    return app.test_client()


def _create_party(client, name: str = "Trip") -> dict:
    response = client.post("/parties", json={"name": name})
    assert response.status_code == 201
    return response.get_json()


def test_create_and_list_parties(client):
    trip = _create_party(client, "  Trip ")
    flat = _create_party(client, "Flat")

    response = client.get("/parties")

    assert response.status_code == 200
    items = response.get_json()["items"]
    assert [item["id"] for item in items] == [trip["id"], flat["id"]]
    assert items[0] == {"id": trip["id"], "name": "Trip", "entries": [], "balance": "0.00"}


def test_blank_party_name_is_rejected(client, store: PartyStore):
    response = client.post("/parties", json={"name": "   "})
    assert response.status_code == 400
    assert response.get_json()["error"] == "Validation error"
    assert len(store) == 0


def test_non_json_body_is_rejected(client):
    response = client.post("/parties", data="name=Trip")
    assert response.status_code == 400


def test_entries_and_balance(client):
    party = _create_party(client)
    for entry_type, amount in (("purchase", "100"), ("payment", 40), ("return", "10")):
        response = client.post(
            f"/parties/{party['id']}/entries",
            json={"type": entry_type, "amount": amount, "date": "2024-05-01"},
        )
        assert response.status_code == 201

    balance = client.get(f"/parties/{party['id']}/balance").get_json()
    assert balance == {
        "balance": "-50.00",
        "totals": {"purchase": "100.00", "payment": "40.00", "return": "10.00"},
    }

    detail = client.get(f"/parties/{party['id']}").get_json()
    assert [entry["amount"] for entry in detail["entries"]] == ["100.00", "40.00", "10.00"]
    assert detail["entries"][0]["date"] == "2024-05-01"


def test_invalid_entry_is_rejected(client):
    party = _create_party(client)
    response = client.post(f"/parties/{party['id']}/entries", json={"type": "gift", "amount": "5"})
    assert response.status_code == 400
    assert "type must be one of" in response.get_json()["details"]


def test_unknown_party_returns_404(client, store: PartyStore):
    response = client.post("/parties/missing/entries", json={"type": "purchase", "amount": "5"})
    assert response.status_code == 404
    assert response.get_json()["error"] == "Record not found"
    assert client.get("/parties/missing").status_code == 404
    assert client.get("/parties/missing/balance").status_code == 404


def test_summary(client):
    trip = _create_party(client, "Trip")
    client.post(f"/parties/{trip['id']}/entries", json={"type": "purchase", "amount": "50"})

    summary = client.get("/summary").get_json()

    assert summary == {
        "parties": [{"id": trip["id"], "name": "Trip", "balance": "-50.00"}],
        "net": "-50.00",
    }


def test_dev_env_enables_open_cors(monkeypatch):
    monkeypatch.setenv("PARTY_LEDGER_ENV", "dev")
    client = create_app().test_client()
    response = client.get("/parties", headers={"Origin": "http://example.com"})
    assert response.headers.get("Access-Control-Allow-Origin") == "http://example.com"


@pytest.mark.parametrize("amount", [1e300, "1e30", "0.001"])
def test_out_of_range_amount_is_rejected(client, amount):
    party = _create_party(client)
    response = client.post(
        f"/parties/{party['id']}/entries", json={"type": "purchase", "amount": amount}
    )
    assert response.status_code == 400
    assert client.get(f"/parties/{party['id']}").get_json()["entries"] == []
