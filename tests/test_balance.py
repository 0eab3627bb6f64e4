from __future__ import annotations

import itertools
from datetime import date
from decimal import Decimal

from ledger.balance import compute_balance, totals_by_type
from ledger.models import Entry


def _entry(entry_type: str, amount: str, entry_id: str = "e") -> Entry:
    return Entry(id=entry_id, type=entry_type, amount=Decimal(amount), date=date(2024, 5, 1))


def test_empty_balance_is_zero():
    assert compute_balance([]) == 0
    assert compute_balance([]) == Decimal("0.00")


def test_trip_scenario():
    entries = [_entry("purchase", "100"), _entry("payment", "40"), _entry("return", "10")]
    assert compute_balance(entries) == Decimal("-50")


def test_single_purchase_is_negative():
    assert compute_balance([_entry("purchase", "50")]) == Decimal("-50")


def test_credits_add():
    assert compute_balance([_entry("payment", "12.50"), _entry("return", "7.25")]) == Decimal("19.75")


def test_balance_is_order_independent():
    entries = [
        _entry("purchase", "100.10", "a"),
        _entry("payment", "40.05", "b"),
        _entry("return", "10.00", "c"),
        _entry("purchase", "3.33", "d"),
    ]
    expected = compute_balance(entries)
    for permutation in itertools.permutations(entries):
        assert compute_balance(permutation) == expected


def test_unknown_type_contributes_nothing(caplog):
    entries = [_entry("purchase", "20"), _entry("refund", "5", "odd")]
    with caplog.at_level("WARNING", logger="ledger.balance"):
        assert compute_balance(entries) == Decimal("-20")
    assert "odd" in caplog.text


def test_totals_by_type():
    entries = [_entry("purchase", "100"), _entry("purchase", "5"), _entry("return", "10")]
    totals = totals_by_type(entries)
    assert totals == {
        "purchase": Decimal("105"),
        "payment": Decimal("0"),
        "return": Decimal("10"),
    }
