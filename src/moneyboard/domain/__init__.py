"""Domain layer for moneyboard application."""

import importlib

_SERVICES = {
    "StatementImportService": "moneyboard.domain.statement_import",
    "CategorizationService": "moneyboard.domain.categorization",
    "CategoryService": "moneyboard.domain.category",
    "SummaryService": "moneyboard.domain.summary",
    "TransactionService": "moneyboard.domain.transaction",
}

__all__ = list(_SERVICES)


# Services import moneyboard.database.base, which imports
# moneyboard.domain.entities; importing them here eagerly would re-enter
# database.base before Database is defined.
def __getattr__(name):
    if name in _SERVICES:
        return getattr(importlib.import_module(_SERVICES[name]), name)
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")
