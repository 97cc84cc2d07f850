import math
from datetime import date
from typing import Optional
from models.transaction import Transaction
from database.transaction_dao import TransactionDAO
from utils.constants import TYPE_FILTERS
from utils.date_helpers import parse_date


class TransactionService:
    def __init__(self, tx_dao: TransactionDAO):
        self._dao = tx_dao

    def get_all(self, type_filter: str | None = None) -> list[Transaction]:
        """Snapshot of every transaction, newest first."""
        return self._dao.get_all(self._check_filter(type_filter))

    def get_in_range(
        self, start, end, type_filter: str | None = None
    ) -> list[Transaction]:
        start_d = self._coerce_date(start, "start date")
        end_d = self._coerce_date(end, "end date")
        return self._dao.get_by_date_range(start_d, end_d, self._check_filter(type_filter))

    def get_by_id(self, tx_id: int) -> Optional[Transaction]:
        return self._dao.get_by_id(tx_id)

    def count(self) -> int:
        return self._dao.count()

    def add(
        self,
        amount: float,
        date,
        category: str,
        payment_method: str,
        is_income: bool = False,
        recurring: bool = False,
    ) -> int:
        amount, tx_date = self._validate(amount, date, category, payment_method)
        return self._dao.create(
            amount=amount,
            date=tx_date,
            category=category,
            payment_method=payment_method,
            is_income=bool(is_income),
            recurring=bool(recurring),
        )

    def update(
        self,
        tx_id: int,
        amount: float,
        date,
        category: str,
        payment_method: str,
        is_income: bool = False,
        recurring: bool = False,
    ) -> bool:
        """Full-record update. False means the transaction no longer exists."""
        amount, tx_date = self._validate(amount, date, category, payment_method)
        return self._dao.update(
            tx_id, amount, tx_date, category, payment_method,
            bool(is_income), bool(recurring),
        )

    def delete(self, tx_id: int) -> bool:
        return self._dao.delete(tx_id)

    def _validate(self, amount, date_value, category, payment_method) -> tuple[float, date]:
        if amount is None or isinstance(amount, bool):
            raise ValueError("Amount is required.")
        try:
            amount = float(amount)
        except (TypeError, ValueError):
            raise ValueError("Invalid amount.") from None
        if not math.isfinite(amount):
            raise ValueError("Invalid amount.")
        if amount < 0:
            raise ValueError("Amount cannot be negative.")
        tx_date = self._coerce_date(date_value, "date")
        if category is None or not str(category).strip():
            raise ValueError("Please select a category.")
        if payment_method is None or not str(payment_method).strip():
            raise ValueError("Please select a payment method.")
        return amount, tx_date

    @staticmethod
    def _coerce_date(value, label: str) -> date:
        if isinstance(value, date):
            return value
        parsed = parse_date(value) if isinstance(value, str) else None
        if parsed is None:
            raise ValueError(f"Invalid {label}. Use YYYY-MM-DD.")
        return parsed

    @staticmethod
    def _check_filter(type_filter: str | None) -> str | None:
        if type_filter is not None and type_filter not in TYPE_FILTERS:
            raise ValueError(f"Invalid type filter: {type_filter}")
        return type_filter
