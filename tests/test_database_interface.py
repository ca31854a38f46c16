"""Tests for Database interface returning domain models."""

import pytest
from datetime import date, datetime
from sqlalchemy.exc import SQLAlchemyError

from moneyboard.database.factories import DB_PATH_ENV_VAR, create_sqlite_database
from moneyboard.domain import entities
from moneyboard.domain.entities import TransactionCandidate
from moneyboard.domain.errors import PersistenceError


class TestDatabaseInterface:
    """Tests to verify Database interface returns domain models."""

    def test_get_category_returns_domain_model(self, temp_db):
        """Test that get_category returns a domain Category entity."""
        category_id = temp_db.create_category(name="Food", color_hex="#FF6B6B")

        category = temp_db.get_category(category_id)

        assert isinstance(category, entities.Category)
        assert category.id == category_id
        assert category.name == "Food"
        assert category.color_hex == "#FF6B6B"
        assert isinstance(category.created_at, datetime)

    def test_get_category_by_name_ignores_case(self, temp_db):
        category_id = temp_db.create_category(name="Daily Necessities")

        assert temp_db.get_category_by_name("daily necessities").id == category_id
        assert temp_db.get_category_by_name("Daily") is None

    def test_category_name_key_is_unique(self, temp_db):
        """Names that only differ by case cannot both be stored."""
        temp_db.create_category(name="Straße")

        with pytest.raises(PersistenceError):
            temp_db.create_category(name="STRASSE")

    def test_add_and_list_transactions(self, temp_db):
        """Test that stored transactions come back as domain entities."""
        count = temp_db.add_transactions(
            [
                TransactionCandidate(date(2024, 3, 2), "SHOP", 100),
                TransactionCandidate(date(2024, 3, 5), "SHOP", 200),
            ]
        )

        transactions = temp_db.list_transactions()

        assert count == 2
        assert all(isinstance(t, entities.Transaction) for t in transactions)
        assert [t.amount for t in transactions] == [200, 100]
        assert all(isinstance(t.imported_at, datetime) for t in transactions)

    def test_list_transactions_month_bounds(self, temp_db):
        """Month filters include the first and last day only."""
        temp_db.add_transactions(
            [
                TransactionCandidate(date(2024, 1, 31), "A", 1),
                TransactionCandidate(date(2024, 2, 1), "B", 1),
                TransactionCandidate(date(2024, 2, 29), "C", 1),
                TransactionCandidate(date(2024, 3, 1), "D", 1),
            ]
        )

        names = [t.usage_name for t in temp_db.list_transactions(year=2024, month=2)]

        assert names == ["C", "B"]

    def test_list_transaction_months(self, temp_db):
        temp_db.add_transactions(
            [
                TransactionCandidate(date(2023, 12, 31), "A", 1),
                TransactionCandidate(date(2024, 2, 1), "B", 1),
                TransactionCandidate(date(2024, 2, 3), "C", 1),
            ]
        )

        assert temp_db.list_transaction_months() == [(2024, 2), (2023, 12)]

    def test_delete_transactions_in_month(self, temp_db):
        temp_db.add_transactions(
            [
                TransactionCandidate(date(2024, 2, 28), "A", 1),
                TransactionCandidate(date(2024, 3, 1), "B", 1),
                TransactionCandidate(date(2024, 3, 31), "C", 1),
            ]
        )

        deleted = temp_db.delete_transactions_in_month(2024, 3)

        assert deleted == 2
        assert [t.usage_name for t in temp_db.list_transactions()] == ["A"]

    def test_update_usage_name_category(self, temp_db):
        category_id = temp_db.create_category(name="Food")
        temp_db.add_transactions(
            [
                TransactionCandidate(date(2024, 3, 1), "CAFE", 1),
                TransactionCandidate(date(2024, 3, 2), "CAFE", 1),
                TransactionCandidate(date(2024, 3, 2), "CAFE 2", 1),
            ]
        )

        updated = temp_db.update_usage_name_category("CAFE", category_id)

        assert updated == 2
        assert temp_db.list_transactions(usage_name="CAFE 2")[0].category_id is None

    def test_mapping_operations(self, temp_db):
        """Test that mappings come back as domain entities."""
        food = temp_db.create_category(name="Food")
        other = temp_db.create_category(name="Other")
        mapping_id = temp_db.create_mapping("CAFE", food)

        mapping = temp_db.get_mapping("CAFE")
        assert isinstance(mapping, entities.Mapping)
        assert mapping.id == mapping_id

        temp_db.update_mapping_category(mapping_id, other)
        assert temp_db.get_mapping("CAFE").category_id == other
        assert temp_db.get_mapping("UNKNOWN") is None

    def test_mapping_usage_name_is_unique(self, temp_db):
        food = temp_db.create_category(name="Food")
        temp_db.create_mapping("CAFE", food)

        with pytest.raises(PersistenceError):
            temp_db.create_mapping("CAFE", food)

    def test_mapping_requires_existing_category(self, temp_db):
        """Foreign keys are enforced."""
        with pytest.raises(PersistenceError):
            temp_db.create_mapping("CAFE", 999)

    def test_import_history_operations(self, temp_db):
        history_id = temp_db.create_import_history(2024, 3, "ABC", 4)

        history = temp_db.get_import_history(2024, 3)
        assert isinstance(history, entities.ImportHistory)
        assert history.id == history_id
        assert history.file_hash == "ABC"
        assert history.transaction_count == 4
        assert temp_db.get_import_history(2024, 4) is None

        temp_db.delete_import_history(history_id)
        assert temp_db.get_import_history(2024, 3) is None

    def test_import_history_one_record_per_month(self, temp_db):
        temp_db.create_import_history(2024, 3, "ABC", 4)

        with pytest.raises(PersistenceError):
            temp_db.create_import_history(2024, 3, "DEF", 2)

    def test_list_import_history_newest_first(self, temp_db):
        temp_db.create_import_history(2023, 12, "A", 1)
        temp_db.create_import_history(2024, 2, "B", 1)
        temp_db.create_import_history(2024, 1, "C", 1)

        periods = [(h.year, h.month) for h in temp_db.list_import_history()]

        assert periods == [(2024, 2), (2024, 1), (2023, 12)]

    def test_delete_missing_rows(self, temp_db):
        with pytest.raises(ValueError):
            temp_db.delete_category(999)
        with pytest.raises(ValueError):
            temp_db.delete_import_history(999)


class TestUnitOfWork:
    """Tests for grouped commits."""

    def test_commits_on_success(self, temp_db):
        with temp_db.unit_of_work():
            temp_db.create_category(name="Food")
            temp_db.create_category(name="Other")

        assert len(temp_db.list_categories()) == 2

    def test_rolls_back_on_database_error(self, temp_db):
        """A database failure inside the block discards every write."""
        with pytest.raises(PersistenceError):
            with temp_db.unit_of_work():
                temp_db.create_category(name="Food")
                raise SQLAlchemyError("boom")

        assert temp_db.list_categories() == []

    def test_rolls_back_on_other_errors(self, temp_db):
        with pytest.raises(RuntimeError):
            with temp_db.unit_of_work():
                temp_db.create_category(name="Food")
                raise RuntimeError("boom")

        assert temp_db.list_categories() == []

    def test_nested_blocks_join_outer(self, temp_db):
        with pytest.raises(PersistenceError):
            with temp_db.unit_of_work():
                temp_db.create_category(name="Food")
                with temp_db.unit_of_work():
                    temp_db.create_category(name="Other")
                raise SQLAlchemyError("boom")

        assert temp_db.list_categories() == []

    def test_constraint_violation_inside_block(self, temp_db):
        """Flush failures inside the block also roll back earlier writes."""
        temp_db.create_import_history(2024, 3, "ABC", 1)

        with pytest.raises(PersistenceError):
            with temp_db.unit_of_work():
                temp_db.create_category(name="Food")
                temp_db.create_import_history(2024, 3, "DEF", 1)

        assert temp_db.list_categories() == []
        assert temp_db.get_import_history(2024, 3).file_hash == "ABC"


def test_create_sqlite_database_from_env(tmp_path, monkeypatch):
    """The database path can come from the environment."""
    db_path = tmp_path / "env.db"
    monkeypatch.setenv(DB_PATH_ENV_VAR, str(db_path))

    db = create_sqlite_database()

    assert db.database_url == f"sqlite:///{db_path}"
    assert db_path.exists()
