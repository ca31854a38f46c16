"""Shared pytest fixtures for moneyboard tests."""

import tempfile
import os
import pytest

from moneyboard.database.factories import create_sqlite_database
from moneyboard.domain.categorization import CategorizationService
from moneyboard.domain.category import CategoryService
from moneyboard.domain.statement_import import StatementImportService
from moneyboard.domain.summary import SummaryService
from moneyboard.domain.transaction import TransactionService

STATEMENT_HEADER = "利用日,利用店名・商品名,利用者,支払方法,利用金額,手数料,支払総額"


def make_statement(rows: list[tuple[str, str, int | str]]) -> str:
    """Build statement text in the default card export layout.

    Args:
        rows: (date, usage name, amount) tuples
    """
    lines = [STATEMENT_HEADER]
    for usage_date, usage_name, amount in rows:
        lines.append(f'"{usage_date}","{usage_name}","本人","1回払い","{amount}","0","{amount}"')
    return "\n".join(lines) + "\n"


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    # Create a temporary file for the database
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    # Create database
    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    # Cleanup
    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def category_service(temp_db):
    """Create a CategoryService with a temporary database."""
    return CategoryService(temp_db)


@pytest.fixture
def categorization_service(temp_db):
    """Create a CategorizationService with a temporary database."""
    return CategorizationService(temp_db)


@pytest.fixture
def import_service(temp_db):
    """Create a StatementImportService with a temporary database."""
    return StatementImportService(temp_db)


@pytest.fixture
def summary_service(temp_db):
    """Create a SummaryService with a temporary database."""
    return SummaryService(temp_db)


@pytest.fixture
def transaction_service(temp_db):
    """Create a TransactionService with a temporary database."""
    return TransactionService(temp_db)


@pytest.fixture
def sample_categories(category_service):
    """Create a few categories and return their IDs by name."""
    return {
        "Food": category_service.create_category("Food", "#FF6B6B"),
        "Transportation": category_service.create_category("Transportation", "#6BCF7F"),
        "Entertainment": category_service.create_category("Entertainment", "#FF9FF3"),
    }


@pytest.fixture
def build_statement():
    """Return the statement text builder."""
    return make_statement


@pytest.fixture
def march_statement():
    """Statement for March 2024 that also carries late February rows."""
    return make_statement(
        [
            ("2024/02/27", "COFFEE SHOP", 450),
            ("2024/03/02", "SUPERMARKET", 3200),
            ("2024/03/05", "COFFEE SHOP", 500),
            ("2024/03/11", "RAILWAY", 1200),
        ]
    )


@pytest.fixture
def statement_file(tmp_path, march_statement):
    """Write the March statement to a file."""
    path = tmp_path / "statement.csv"
    path.write_text(march_statement, encoding="utf-8-sig")
    return path


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
