import logging
import os
import sqlite3
from database.exceptions import StoreUnavailable

logger = logging.getLogger(__name__)


class DatabaseManager:
    def __init__(self, db_path: str):
        self.db_path = db_path
        self._conn: sqlite3.Connection | None = None

    @property
    def is_open(self) -> bool:
        return self._conn is not None

    def get_connection(self) -> sqlite3.Connection:
        if self._conn is None:
            raise StoreUnavailable(
                f"Database {self.db_path} is not open; call initialize() first."
            )
        return self._conn

    def initialize(self):
        """Open the database file and ensure the schema exists.

        Idempotent: existing rows are never touched. Raises StoreUnavailable
        if the file cannot be opened or the schema cannot be created.
        """
        if self._conn is not None:
            return
        conn = self._open()
        try:
            self._create_schema(conn)
            conn.commit()
        except sqlite3.Error as e:
            conn.close()
            logger.error("Could not create schema in %s: %s", self.db_path, e)
            raise StoreUnavailable(f"Could not create schema: {e}") from e
        self._conn = conn
        logger.info("Transactions table checked/created in %s", self.db_path)

    def _open(self) -> sqlite3.Connection:
        folder = os.path.dirname(self.db_path)
        conn = None
        try:
            if folder:
                os.makedirs(folder, exist_ok=True)
            conn = sqlite3.connect(self.db_path, check_same_thread=False)
            conn.row_factory = sqlite3.Row
            conn.execute("PRAGMA journal_mode = WAL")
        except (OSError, sqlite3.Error) as e:
            if conn is not None:
                conn.close()
            logger.error("Could not open database %s: %s", self.db_path, e)
            raise StoreUnavailable(f"Could not open database {self.db_path}: {e}") from e
        logger.info("Database connection established: %s", self.db_path)
        return conn

    def _create_schema(self, conn: sqlite3.Connection):
        # Column layout matches files written by the original Savr app.
        conn.executescript("""
            CREATE TABLE IF NOT EXISTS transactions (
                transaction_id   INTEGER PRIMARY KEY AUTOINCREMENT,
                amount           DECIMAL(10,2) NOT NULL,
                transaction_date DATE NOT NULL,
                category         VARCHAR(50),
                payment_method   VARCHAR(50),
                is_income        BOOLEAN DEFAULT 0,
                recurring        BOOLEAN DEFAULT 0,
                created_at       TIMESTAMP DEFAULT CURRENT_TIMESTAMP
            );

            CREATE INDEX IF NOT EXISTS idx_transactions_date ON transactions(transaction_date);
        """)

    def close(self):
        if self._conn:
            try:
                self._conn.close()
            except sqlite3.Error as e:
                logger.error("Error closing database connection: %s", e)
            finally:
                self._conn = None
            logger.info("Database connection closed.")
