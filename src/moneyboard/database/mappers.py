"""Mapper functions to convert between domain models and SQLAlchemy models.

This layer isolates the conversion logic, so the domain services only ever
see frozen entities and never hold on to session-bound ORM objects.
"""

from moneyboard.domain import entities as domain
from moneyboard.database.models import (
    Category as ORMCategory,
    Transaction as ORMTransaction,
    Mapping as ORMMapping,
    ImportHistory as ORMImportHistory,
)


def category_to_domain(orm_category: ORMCategory) -> domain.Category:
    """Convert SQLAlchemy Category model to domain Category entity."""
    return domain.Category(
        id=orm_category.id,
        name=orm_category.name,
        color_hex=orm_category.color_hex,
        created_at=orm_category.created_at,
    )


def transaction_to_domain(orm_transaction: ORMTransaction) -> domain.Transaction:
    """Convert SQLAlchemy Transaction model to domain Transaction entity."""
    return domain.Transaction(
        id=orm_transaction.id,
        usage_date=orm_transaction.usage_date,
        usage_name=orm_transaction.usage_name,
        amount=orm_transaction.amount,
        category_id=orm_transaction.category_id,
        imported_at=orm_transaction.imported_at,
    )


def mapping_to_domain(orm_mapping: ORMMapping) -> domain.Mapping:
    """Convert SQLAlchemy Mapping model to domain Mapping entity."""
    return domain.Mapping(
        id=orm_mapping.id,
        usage_name=orm_mapping.usage_name,
        category_id=orm_mapping.category_id,
    )


def import_history_to_domain(orm_history: ORMImportHistory) -> domain.ImportHistory:
    """Convert SQLAlchemy ImportHistory model to domain ImportHistory entity."""
    return domain.ImportHistory(
        id=orm_history.id,
        year=orm_history.year,
        month=orm_history.month,
        file_hash=orm_history.file_hash,
        imported_at=orm_history.imported_at,
        transaction_count=orm_history.transaction_count,
    )


def candidate_to_orm(candidate: domain.TransactionCandidate) -> ORMTransaction:
    """Build an unsaved SQLAlchemy Transaction from a parsed candidate."""
    return ORMTransaction(
        usage_date=candidate.usage_date,
        usage_name=candidate.usage_name,
        amount=candidate.amount,
        category_id=candidate.category_id,
    )
