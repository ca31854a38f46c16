"""Tests for transaction listing."""

import pytest
from moneyboard.cli.main import cli


@pytest.fixture
def imported(import_service, categorization_service, sample_categories, march_statement):
    import_service.import_statement(2024, 3, march_statement)
    categorization_service.assign_category("RAILWAY", sample_categories["Transportation"])
    return sample_categories


class TestTransactionService:
    """Tests for TransactionService."""

    def test_list_all_newest_first(self, transaction_service, imported):
        transactions = transaction_service.list_transactions()

        assert [t.usage_date.isoformat() for t in transactions] == [
            "2024-03-11",
            "2024-03-05",
            "2024-03-02",
            "2024-02-27",
        ]

    def test_list_by_month(self, transaction_service, imported):
        transactions = transaction_service.list_transactions(year=2024, month=2)

        assert [(t.usage_name, t.amount) for t in transactions] == [("COFFEE SHOP", 450)]

    def test_list_uncategorized(self, transaction_service, imported):
        transactions = transaction_service.list_transactions(uncategorized=True)

        assert {t.usage_name for t in transactions} == {"COFFEE SHOP", "SUPERMARKET"}

    def test_list_by_category(self, transaction_service, imported):
        transactions = transaction_service.list_transactions(category_id=imported["Transportation"])

        assert [t.usage_name for t in transactions] == ["RAILWAY"]

    def test_list_by_usage_name(self, transaction_service, imported):
        transactions = transaction_service.list_transactions(usage_name="COFFEE SHOP")

        assert [t.amount for t in transactions] == [500, 450]

    def test_year_requires_month(self, transaction_service):
        with pytest.raises(ValueError):
            transaction_service.list_transactions(year=2024)

    def test_get_transaction(self, transaction_service, imported):
        first = transaction_service.list_transactions()[0]

        assert transaction_service.get_transaction(first.id) == first
        assert transaction_service.get_transaction(9999) is None


def test_transactions_command(cli_runner, temp_db, imported):
    """Test listing transactions."""
    result = cli_runner.invoke(cli, ["--db-path", temp_db.database_path, "transactions"])

    assert result.exit_code == 0
    assert "Found 4 transaction(s)" in result.output
    assert "Transportation" in result.output
    assert "5,350" in result.output


def test_transactions_command_filters(cli_runner, temp_db, imported):
    result = cli_runner.invoke(
        cli,
        ["--db-path", temp_db.database_path, "transactions", "--month", "2024-03", "--uncategorized"],
    )

    assert result.exit_code == 0
    assert "Found 2 transaction(s)" in result.output
    assert "RAILWAY" not in result.output


def test_transactions_command_usage_name(cli_runner, temp_db, imported):
    result = cli_runner.invoke(
        cli, ["--db-path", temp_db.database_path, "transactions", "--usage-name", "RAILWAY"]
    )

    assert result.exit_code == 0
    assert "Found 1 transaction(s)" in result.output


def test_transactions_command_empty(cli_runner, temp_db):
    result = cli_runner.invoke(cli, ["--db-path", temp_db.database_path, "transactions"])

    assert result.exit_code == 0
    assert "No transactions found." in result.output
