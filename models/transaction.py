from dataclasses import dataclass
from datetime import date as Date
from utils.date_helpers import month_key


@dataclass
class Transaction:
    id: int
    amount: float           # always a magnitude; direction comes from is_income
    date: Date
    category: str
    payment_method: str
    is_income: bool = False
    recurring: bool = False  # stored only, never scheduled
    created_at: str = ""

    @property
    def type_label(self) -> str:
        return "Income" if self.is_income else "Expense"

    @property
    def month_key(self) -> str:
        """'YYYY-MM' bucket used by the monthly trend."""
        return month_key(self.date)

    def __str__(self) -> str:
        return (
            f"Transaction #{self.id}: ${self.amount:.2f} "
            f"on {self.date.isoformat()} ({self.type_label})"
        )
