from datetime import date, datetime

import pytest

from database.exceptions import StoreUnavailable, WriteFailed


def test_create_returns_fresh_ids_and_lists_record(dao):
    first = dao.create(12.5, date(2024, 3, 1), "Food", "Credit Card")
    second = dao.create(80.0, date(2024, 3, 2), "Housing", "Debit Card", is_income=False, recurring=True)
    assert first != second

    rows = dao.get_all()
    matching = [t for t in rows if t.id == second]
    assert len(matching) == 1
    tx = matching[0]
    assert tx.amount == 80.0
    assert tx.date == date(2024, 3, 2)
    assert tx.category == "Housing"
    assert tx.payment_method == "Debit Card"
    assert tx.is_income is False
    assert tx.recurring is True
    assert tx.created_at


def test_ids_are_not_reused_after_delete(dao, add_expense):
    first = add_expense()
    assert dao.delete(first)
    second = add_expense()
    assert second != first


def test_store_accepts_any_category_and_method(dao):
    tx_id = dao.create(3.0, date(2024, 1, 1), "gadgets & gizmos", "Check")
    tx = dao.get_by_id(tx_id)
    assert tx.category == "gadgets & gizmos"
    assert tx.payment_method == "Check"


def test_amount_is_rounded_to_cents_and_read_as_float(dao):
    tx_id = dao.create(19.999, date(2024, 1, 1), "Food", "Cash")
    whole_id = dao.create(50, date(2024, 1, 1), "Food", "Cash")
    assert dao.get_by_id(tx_id).amount == 20.0
    whole = dao.get_by_id(whole_id).amount
    assert isinstance(whole, float)
    assert whole == 50.0


def test_get_all_orders_by_date_descending(dao, add_expense):
    add_expense(on=date(2024, 1, 1))
    add_expense(on=date(2024, 3, 1))
    add_expense(on=date(2024, 2, 1))
    assert [t.date for t in dao.get_all()] == [
        date(2024, 3, 1), date(2024, 2, 1), date(2024, 1, 1),
    ]


def test_same_date_ties_break_by_newest_id(dao, add_expense):
    a = add_expense(on=date(2024, 1, 1))
    b = add_expense(on=date(2024, 1, 1))
    c = add_expense(on=date(2024, 1, 1))
    assert [t.id for t in dao.get_all()] == [c, b, a]


def test_get_all_on_empty_store(dao):
    assert dao.get_all() == []


def test_type_filter(dao, add_expense):
    add_expense(amount=5)
    income_id = add_expense(amount=900, category="Other", is_income=True)
    assert [t.id for t in dao.get_all("income")] == [income_id]
    assert all(not t.is_income for t in dao.get_all("expense"))
    assert len(dao.get_all("all")) == 2


def test_date_range_is_inclusive(dao, add_expense):
    add_expense(on=date(2024, 1, 31))
    add_expense(on=date(2024, 2, 1))
    add_expense(on=date(2024, 2, 15))
    add_expense(on=date(2024, 2, 29))
    add_expense(on=date(2024, 3, 1))
    result = dao.get_by_date_range(date(2024, 2, 1), date(2024, 2, 29))
    assert [t.date for t in result] == [
        date(2024, 2, 29), date(2024, 2, 15), date(2024, 2, 1),
    ]


def test_date_range_with_type_filter(dao, add_expense):
    add_expense(on=date(2024, 2, 1))
    income_id = add_expense(on=date(2024, 2, 2), is_income=True)
    result = dao.get_by_date_range(date(2024, 2, 1), date(2024, 2, 28), "income")
    assert [t.id for t in result] == [income_id]


def test_reversed_range_is_empty(dao, add_expense):
    add_expense(on=date(2024, 2, 1))
    assert dao.get_by_date_range(date(2024, 3, 1), date(2024, 1, 1)) == []


def test_update_replaces_every_field(dao, add_expense):
    tx_id = add_expense(amount=10, on=date(2024, 1, 1), category="Food", method="Cash")
    assert dao.update(tx_id, 250.0, date(2024, 6, 30), "Other", "Debit Card", True, True)

    rows = dao.get_all()
    assert len(rows) == 1
    tx = rows[0]
    assert (tx.id, tx.amount, tx.date, tx.category, tx.payment_method, tx.is_income, tx.recurring) == (
        tx_id, 250.0, date(2024, 6, 30), "Other", "Debit Card", True, True,
    )


def test_update_keeps_created_at(dao, add_expense):
    tx_id = add_expense()
    before = dao.get_by_id(tx_id).created_at
    dao.update(tx_id, 1.0, date(2025, 1, 1), "Food", "Cash")
    assert dao.get_by_id(tx_id).created_at == before


def test_update_unknown_id_returns_false(dao, add_expense):
    add_expense()
    assert dao.update(9999, 1.0, date(2024, 1, 1), "Food", "Cash") is False
    assert dao.count() == 1


def test_delete(dao, add_expense):
    keep = add_expense()
    gone = add_expense()
    assert dao.delete(gone) is True
    assert dao.count() == 1
    assert [t.id for t in dao.get_all()] == [keep]
    assert dao.get_by_id(gone) is None


def test_delete_unknown_id_returns_false(dao, add_expense):
    add_expense()
    assert dao.delete(424242) is False
    assert dao.count() == 1


def _install_abort_trigger(db, event):
    db.get_connection().execute(
        f"""CREATE TRIGGER fail_{event.lower()} BEFORE {event} ON transactions
            BEGIN SELECT RAISE(ABORT, 'disk says no'); END"""
    )
    db.get_connection().commit()


def test_failed_insert_raises_write_failed_and_leaves_nothing(db, dao):
    _install_abort_trigger(db, "INSERT")
    with pytest.raises(WriteFailed, match="disk says no"):
        dao.create(1.0, date(2024, 1, 1), "Food", "Cash")
    assert dao.count() == 0


def test_failed_update_raises_write_failed_and_keeps_old_values(db, dao, add_expense):
    tx_id = add_expense(amount=10)
    _install_abort_trigger(db, "UPDATE")
    with pytest.raises(WriteFailed):
        dao.update(tx_id, 99.0, date(2024, 1, 1), "Food", "Cash")
    assert dao.get_by_id(tx_id).amount == 10.0


def test_failed_delete_raises_write_failed(db, dao, add_expense):
    tx_id = add_expense()
    _install_abort_trigger(db, "DELETE")
    with pytest.raises(WriteFailed):
        dao.delete(tx_id)
    assert dao.count() == 1


def test_write_after_close_raises_unavailable(db, dao):
    db.close()
    with pytest.raises(StoreUnavailable):
        dao.create(1.0, date(2024, 1, 1), "Food", "Cash")
    with pytest.raises(StoreUnavailable):
        dao.delete(1)


def _insert_raw(db, stored_date, amount=42.0, is_income=1):
    conn = db.get_connection()
    cursor = conn.execute(
        """INSERT INTO transactions
           (amount, transaction_date, category, payment_method, is_income, recurring)
           VALUES (?, ?, ?, ?, ?, ?)""",
        (amount, stored_date, "Food", "Cash", is_income, 0),
    )
    conn.commit()
    return cursor.lastrowid


def _epoch_millis(d):
    return int(datetime(d.year, d.month, d.day).timestamp() * 1000)


def test_reads_legacy_epoch_millis_dates(db, dao):
    _insert_raw(db, _epoch_millis(date(2023, 11, 5)))
    tx = dao.get_all()[0]
    assert tx.date == date(2023, 11, 5)
    assert tx.is_income is True


def test_legacy_and_iso_dates_sort_together(db, dao, add_expense):
    _insert_raw(db, _epoch_millis(date(2025, 6, 1)))
    add_expense(on=date(2024, 1, 1))
    _insert_raw(db, _epoch_millis(date(2023, 11, 5)))
    add_expense(on=date(2024, 8, 15))
    assert [t.date for t in dao.get_all()] == [
        date(2025, 6, 1), date(2024, 8, 15), date(2024, 1, 1), date(2023, 11, 5),
    ]


def test_date_range_includes_legacy_rows(db, dao, add_expense):
    legacy_id = _insert_raw(db, _epoch_millis(date(2023, 11, 5)))
    _insert_raw(db, _epoch_millis(date(2023, 12, 1)))
    iso_id = add_expense(on=date(2023, 11, 30))
    add_expense(on=date(2023, 10, 31))
    result = dao.get_by_date_range(date(2023, 11, 1), date(2023, 11, 30))
    assert [t.id for t in result] == [iso_id, legacy_id]


def test_legacy_range_bounds_are_inclusive(db, dao):
    first = _insert_raw(db, _epoch_millis(date(2024, 2, 1)))
    last = _insert_raw(db, _epoch_millis(date(2024, 2, 29)))
    result = dao.get_by_date_range(date(2024, 2, 1), date(2024, 2, 29))
    assert [t.id for t in result] == [last, first]


def test_unreadable_date_is_skipped_not_fatal(db, dao, add_expense):
    good = add_expense(on=date(2024, 5, 1))
    bad = _insert_raw(db, "sometime last spring")
    assert [t.id for t in dao.get_all()] == [good]
    assert dao.get_by_id(bad) is None
    assert dao.count() == 2
