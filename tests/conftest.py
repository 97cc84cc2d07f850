from datetime import date

import pytest

from database.db_manager import DatabaseManager
from database.transaction_dao import TransactionDAO
from services.transaction_service import TransactionService


@pytest.fixture
def db_path(tmp_path):
    return str(tmp_path / "savr.db")


@pytest.fixture
def db(db_path):
    manager = DatabaseManager(db_path)
    manager.initialize()
    yield manager
    manager.close()


@pytest.fixture
def dao(db):
    return TransactionDAO(db)


@pytest.fixture
def service(dao):
    return TransactionService(dao)


@pytest.fixture
def add_expense(dao):
    def _add(amount=10.0, on=date(2024, 1, 15), category="Food", method="Cash", **kw):
        return dao.create(amount, on, category, method, **kw)
    return _add
