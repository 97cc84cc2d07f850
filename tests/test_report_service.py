from datetime import date

import pytest

from models.transaction import Transaction
from services.report_service import (
    MonthlyTotals, PaymentMethodTotals, monthly_series, summarize,
    totals_by_category, totals_by_payment_method,
)


def _tx(amount, on, category="Food", method="Cash", is_income=False, tx_id=1):
    return Transaction(
        id=tx_id, amount=amount, date=on, category=category,
        payment_method=method, is_income=is_income,
    )


def test_empty_snapshot():
    assert totals_by_category([]) == {}
    assert totals_by_payment_method([]) == PaymentMethodTotals(0.0, 0.0, 0.0)
    assert monthly_series([]) == []
    assert summarize([]) == {"income": 0.0, "expense": 0.0, "net": 0.0, "count": 0}


def test_totals_by_category_excludes_income():
    snapshot = [
        _tx(50, date(2024, 1, 1), "Food"),
        _tx(1000, date(2024, 1, 2), "Food", is_income=True),
    ]
    assert totals_by_category(snapshot) == {"Food": 50}


def test_totals_by_category_sums_and_keeps_names_verbatim():
    snapshot = [
        _tx(10, date(2024, 1, 1), "Food"),
        _tx(15, date(2024, 1, 2), "Food"),
        _tx(7, date(2024, 1, 3), "food"),
        _tx(100, date(2024, 1, 4), "Housing"),
    ]
    assert totals_by_category(snapshot) == {"Food": 25, "food": 7, "Housing": 100}


def test_totals_by_payment_method():
    snapshot = [
        _tx(30, date(2024, 1, 1), method="Credit Card"),
        _tx(20, date(2024, 1, 1), method="Credit Card"),
        _tx(12, date(2024, 1, 1), method="Debit Card"),
        _tx(5, date(2024, 1, 1), method="Cash"),
        _tx(500, date(2024, 1, 1), method="Cash", is_income=True),
    ]
    totals = totals_by_payment_method(snapshot)
    assert totals == PaymentMethodTotals(credit_card=50, debit_card=12, cash=5)
    assert totals.as_dict() == {"Credit Card": 50, "Debit Card": 12, "Cash": 5}


def test_totals_by_payment_method_drops_unknown_methods():
    snapshot = [
        _tx(40, date(2024, 1, 1), method="Check"),
        _tx(8, date(2024, 1, 1), method="cash"),
    ]
    assert totals_by_payment_method(snapshot) == PaymentMethodTotals()


def test_monthly_series_fills_missing_side_with_zero():
    snapshot = [
        _tx(100, date(2024, 1, 15)),
        _tx(200, date(2024, 2, 3), is_income=True),
    ]
    assert monthly_series(snapshot) == [("2024-01", 100, 0), ("2024-02", 0, 200)]


def test_monthly_series_orders_months_and_sums_both_sides():
    snapshot = [
        _tx(5, date(2024, 3, 1)),
        _tx(10, date(2023, 12, 31)),
        _tx(300, date(2024, 3, 20), is_income=True),
        _tx(7, date(2024, 3, 31)),
    ]
    series = monthly_series(snapshot)
    assert [p.month for p in series] == ["2023-12", "2024-03"]
    assert series[1] == MonthlyTotals("2024-03", 12, 300)


def test_summarize():
    snapshot = [
        _tx(40, date(2024, 1, 1)),
        _tx(100, date(2024, 1, 2), is_income=True),
        _tx(10.5, date(2024, 1, 3)),
    ]
    result = summarize(snapshot)
    assert result["income"] == 100
    assert result["expense"] == pytest.approx(50.5)
    assert result["net"] == pytest.approx(49.5)
    assert result["count"] == 3


def test_aggregates_from_store_snapshot(service):
    service.add(50, date(2024, 1, 5), "Food", "Credit Card")
    service.add(1000, date(2024, 1, 6), "Food", "Cash", is_income=True)
    service.add(20, date(2024, 2, 1), "Transport", "Check")
    snapshot = service.get_all()

    assert totals_by_category(snapshot) == {"Food": 50, "Transport": 20}
    assert totals_by_payment_method(snapshot) == PaymentMethodTotals(credit_card=50)
    assert monthly_series(snapshot) == [("2024-01", 50, 1000), ("2024-02", 20, 0)]


def test_transaction_labels():
    tx = _tx(12.5, date(2024, 3, 1), tx_id=7)
    assert tx.type_label == "Expense"
    assert tx.month_key == "2024-03"
    assert str(tx) == "Transaction #7: $12.50 on 2024-03-01 (Expense)"
