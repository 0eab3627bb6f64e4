"""Flask REST API exposing the party ledger store."""

from __future__ import annotations

import os
from typing import Any, Dict, Optional

from flask import Flask, jsonify, request
from flask_cors import CORS

from ledger.balance import totals_by_type
from ledger.exceptions import RecordNotFoundError, ValidationError
from ledger.store import PartyStore


def create_app(store: Optional[PartyStore] = None) -> Flask:
    app = Flask(__name__)

    env_name = os.getenv("PARTY_LEDGER_ENV", "prod").lower()
    if env_name in {"dev", "development"}:
        CORS(app, resources={r"/*": {"origins": "*"}}, supports_credentials=True)
    else:
        allowed_origins = os.getenv("PARTY_LEDGER_ALLOWED_ORIGINS")
        if allowed_origins:
            origins = [origin.strip() for origin in allowed_origins.split(",") if origin.strip()]
            CORS(app, resources={r"/*": {"origins": origins}}, supports_credentials=True)
        else:
            CORS(app)

    # The store lives as long as the app; nothing is written to disk.
    party_store = store if store is not None else PartyStore()
    app.extensions["party_store"] = party_store

    def _success(payload: Any, status: int = 200):
        return jsonify(payload), status

    def _handle_error(exc: Exception, status: int, message: str):
        app.logger.error("%s: %s", message, exc)
        return jsonify({"error": message, "details": str(exc)}), status

    @app.errorhandler(ValidationError)
    def handle_validation_error(exc: ValidationError):
        return _handle_error(exc, 400, "Validation error")

    @app.errorhandler(RecordNotFoundError)
    def handle_not_found(exc: RecordNotFoundError):
        return _handle_error(exc, 404, "Record not found")

    def _json_body() -> Dict[str, Any]:
        if not request.is_json:
            raise ValidationError("Request content must be application/json")
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            raise ValidationError("Malformed JSON body")
        return data

    @app.get("/parties")
    def list_parties():
        return _success({"items": party_store.snapshot()})

    @app.post("/parties")
    def create_party():
        payload = _json_body()
        party = party_store.add_party(payload.get("name"))
        app.logger.info("Created party %s", party.id)
        return _success(party.to_dict(), 201)

    @app.get("/parties/<party_id>")
    def get_party(party_id: str):
        return _success(party_store.get(party_id).to_dict())

    @app.post("/parties/<party_id>/entries")
    def create_entry(party_id: str):
        payload = _json_body()
        entry = party_store.add_entry(party_id, payload)
        return _success(entry.to_dict(), 201)

    @app.get("/parties/<party_id>/balance")
    def party_balance(party_id: str):
        party = party_store.get(party_id)
        totals = totals_by_type(party.entries)
        return _success({
            "balance": f"{party.balance:.2f}",
            "totals": {entry_type: f"{amount:.2f}" for entry_type, amount in totals.items()},
        })

    @app.get("/summary")
    def summary():
        return _success(party_store.summary())

    return app
