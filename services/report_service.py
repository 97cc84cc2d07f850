"""Chart-ready aggregates computed from a snapshot of transactions.

Every function here is pure: it takes the list returned by
TransactionService.get_all() and never touches the database.
"""
from dataclasses import dataclass
from typing import Iterable, NamedTuple
from models.transaction import Transaction
from utils.constants import CASH, CREDIT_CARD, DEBIT_CARD


@dataclass
class PaymentMethodTotals:
    credit_card: float = 0.0
    debit_card: float = 0.0
    cash: float = 0.0

    def as_dict(self) -> dict[str, float]:
        return {
            CREDIT_CARD: self.credit_card,
            DEBIT_CARD: self.debit_card,
            CASH: self.cash,
        }


class MonthlyTotals(NamedTuple):
    month: str      # 'YYYY-MM'
    expense: float
    income: float


_PAYMENT_FIELDS = {
    CREDIT_CARD: "credit_card",
    DEBIT_CARD: "debit_card",
    CASH: "cash",
}


def totals_by_category(transactions: Iterable[Transaction]) -> dict[str, float]:
    """Expense total per category. Income is left out; names are not normalized."""
    totals: dict[str, float] = {}
    for tx in transactions:
        if tx.is_income:
            continue
        totals[tx.category] = totals.get(tx.category, 0.0) + tx.amount
    return totals


def totals_by_payment_method(transactions: Iterable[Transaction]) -> PaymentMethodTotals:
    """Expense totals for the three known payment methods; anything else is dropped."""
    result = PaymentMethodTotals()
    for tx in transactions:
        if tx.is_income:
            continue
        field = _PAYMENT_FIELDS.get(tx.payment_method)
        if field:
            setattr(result, field, getattr(result, field) + tx.amount)
    return result


def monthly_series(transactions: Iterable[Transaction]) -> list[MonthlyTotals]:
    """(month, expense, income) per month with any activity, oldest month first."""
    expense: dict[str, float] = {}
    income: dict[str, float] = {}
    for tx in transactions:
        bucket = income if tx.is_income else expense
        bucket[tx.month_key] = bucket.get(tx.month_key, 0.0) + tx.amount
    months = sorted(set(expense) | set(income))
    return [
        MonthlyTotals(m, expense.get(m, 0.0), income.get(m, 0.0))
        for m in months
    ]


def summarize(transactions: Iterable[Transaction]) -> dict:
    """Return {income, expense, net, count} for the summary cards."""
    income = expense = 0.0
    count = 0
    for tx in transactions:
        count += 1
        if tx.is_income:
            income += tx.amount
        else:
            expense += tx.amount
    return {"income": income, "expense": expense, "net": income - expense, "count": count}
