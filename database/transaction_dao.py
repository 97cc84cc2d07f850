import logging
import sqlite3
from datetime import date
from typing import Optional
from database.db_manager import DatabaseManager
from database.exceptions import StoreUnavailable, WriteFailed
from models.transaction import Transaction
from utils.date_helpers import format_date, from_epoch_millis, parse_date

logger = logging.getLogger(__name__)

# The original JDBC app stored dates as local-midnight epoch millis; SQLite
# sorts every INTEGER before every TEXT, so compare on a normalized ISO day.
_DATE_EXPR = (
    "(CASE WHEN typeof(transaction_date) IN ('integer', 'real')"
    " THEN date(transaction_date / 1000, 'unixepoch', 'localtime')"
    " ELSE substr(transaction_date, 1, 10) END)"
)
_ORDER_BY = f" ORDER BY {_DATE_EXPR} DESC, transaction_id DESC"


class TransactionDAO:
    def __init__(self, db: DatabaseManager):
        self._db = db

    def _row_to_model(self, row) -> Optional[Transaction]:
        tx_date = self._to_date(row["transaction_date"])
        if tx_date is None:
            logger.warning(
                "Skipping transaction #%s with unreadable date %r",
                row["transaction_id"], row["transaction_date"],
            )
            return None
        return Transaction(
            id=row["transaction_id"],
            amount=float(row["amount"]),
            date=tx_date,
            category=row["category"] or "",
            payment_method=row["payment_method"] or "",
            is_income=bool(row["is_income"]),
            recurring=bool(row["recurring"]),
            created_at=str(row["created_at"] or ""),
        )

    @staticmethod
    def _to_date(value) -> Optional[date]:
        if isinstance(value, (int, float)):
            try:
                return from_epoch_millis(int(value))
            except (OverflowError, OSError, ValueError):
                return None
        if value is None:
            return None
        return parse_date(str(value)[:10])

    @staticmethod
    def _type_clause(type_filter: str | None) -> tuple[str, list]:
        if type_filter == "income":
            return " AND is_income = ?", [1]
        if type_filter == "expense":
            return " AND is_income = ?", [0]
        return "", []

    def _query(self, sql: str, params: list) -> list[Transaction]:
        conn = self._db.get_connection()
        try:
            rows = conn.execute(sql, params).fetchall()
        except sqlite3.Error as e:
            logger.error("Error retrieving transactions: %s", e)
            raise StoreUnavailable(f"Error retrieving transactions: {e}") from e
        models = (self._row_to_model(r) for r in rows)
        return [tx for tx in models if tx is not None]

    def get_all(self, type_filter: str | None = None) -> list[Transaction]:
        """Every transaction, newest date first (ties: newest id first)."""
        clause, params = self._type_clause(type_filter)
        return self._query(
            "SELECT * FROM transactions WHERE 1=1" + clause + _ORDER_BY, params
        )

    def get_by_date_range(
        self, start: date, end: date, type_filter: str | None = None
    ) -> list[Transaction]:
        """Transactions with start <= date <= end, ordered like get_all()."""
        if start > end:
            return []
        clause, params = self._type_clause(type_filter)
        return self._query(
            f"SELECT * FROM transactions WHERE {_DATE_EXPR} BETWEEN ? AND ?"
            + clause + _ORDER_BY,
            [format_date(start), format_date(end)] + params,
        )

    def get_by_id(self, tx_id: int) -> Optional[Transaction]:
        rows = self._query(
            "SELECT * FROM transactions WHERE transaction_id = ?", [tx_id]
        )
        return rows[0] if rows else None

    def count(self) -> int:
        conn = self._db.get_connection()
        try:
            return conn.execute("SELECT COUNT(*) FROM transactions").fetchone()[0]
        except sqlite3.Error as e:
            logger.error("Error counting transactions: %s", e)
            raise StoreUnavailable(f"Error counting transactions: {e}") from e

    def create(
        self,
        amount: float,
        date: date,
        category: str,
        payment_method: str,
        is_income: bool = False,
        recurring: bool = False,
    ) -> int:
        """Insert one transaction and return its new id."""
        conn = self._db.get_connection()
        try:
            cursor = conn.execute(
                """INSERT INTO transactions
                   (amount, transaction_date, category, payment_method,
                    is_income, recurring)
                   VALUES (?, ?, ?, ?, ?, ?)""",
                (
                    round(amount, 2), format_date(date), category, payment_method,
                    1 if is_income else 0, 1 if recurring else 0,
                ),
            )
            tx_id = cursor.lastrowid
            if cursor.rowcount != 1:
                raise WriteFailed("Creating transaction failed, no rows affected.")
            if not tx_id:
                raise WriteFailed("Creating transaction failed, no ID obtained.")
            conn.commit()
        except sqlite3.Error as e:
            conn.rollback()
            logger.error("Error adding transaction: %s", e)
            raise WriteFailed(f"Error adding transaction: {e}") from e
        except WriteFailed as e:
            conn.rollback()
            logger.error("%s", e)
            raise
        logger.debug("Created transaction #%d", tx_id)
        return tx_id

    def update(
        self,
        tx_id: int,
        amount: float,
        date: date,
        category: str,
        payment_method: str,
        is_income: bool = False,
        recurring: bool = False,
    ) -> bool:
        """Replace every mutable field. False if tx_id does not exist."""
        changed = self._execute_write(
            """UPDATE transactions
               SET amount=?, transaction_date=?, category=?, payment_method=?,
                   is_income=?, recurring=?
               WHERE transaction_id=?""",
            (
                round(amount, 2), format_date(date), category, payment_method,
                1 if is_income else 0, 1 if recurring else 0, tx_id,
            ),
            "updating",
        )
        logger.debug("Update of transaction #%s changed %d row(s)", tx_id, changed)
        return changed == 1

    def delete(self, tx_id: int) -> bool:
        """Hard delete. False if tx_id does not exist."""
        changed = self._execute_write(
            "DELETE FROM transactions WHERE transaction_id = ?", (tx_id,), "deleting"
        )
        logger.debug("Delete of transaction #%s removed %d row(s)", tx_id, changed)
        return changed == 1

    def _execute_write(self, sql: str, params: tuple, action: str) -> int:
        conn = self._db.get_connection()
        try:
            cursor = conn.execute(sql, params)
            changed = cursor.rowcount
            if changed > 1:
                raise WriteFailed(f"Error {action} transaction: {changed} rows matched one id.")
            conn.commit()
        except sqlite3.Error as e:
            conn.rollback()
            logger.error("Error %s transaction: %s", action, e)
            raise WriteFailed(f"Error {action} transaction: {e}") from e
        except WriteFailed as e:
            conn.rollback()
            logger.error("%s", e)
            raise
        return changed
