"""Statement import domain service.

Reconciles a statement export for a target month against what was imported
before. Each (year, month) keeps one import history record holding the
fingerprint of the batch that was stored for it:

- no history: the batch is stored and the history record created
- same fingerprint: nothing happens
- different fingerprint: the caller must confirm; a confirmed overwrite
  deletes the stored transactions of the target month and its history
  record, then stores the new batch

Every write of one import commits as a single unit of work.
"""

import logging
from enum import Enum
from pathlib import Path
from typing import Callable, Optional, Sequence, Union

from moneyboard.database.base import Database
from moneyboard.domain.categorization import CategorizationService
from moneyboard.domain.entities import (
    ImportHistory,
    ImportResult,
    ImportStatus,
    ParseFailure,
    TransactionCandidate,
)
from moneyboard.domain.errors import ValidationError, format_period
from moneyboard.domain.fingerprint import compute_fingerprint
from moneyboard.domain.import_window import allowed_months, validate_import_window
from moneyboard.domain.record_parser import DEFAULT_LAYOUT, RecordParser, StatementLayout

logger = logging.getLogger(__name__)

OverwriteConfirmation = Union[bool, Callable[[ImportHistory], bool]]


class HistoryState(str, Enum):
    """How a new batch relates to the stored import history of its month."""

    NO_HISTORY = "no_history"
    HISTORY_MATCHES = "history_matches"
    HISTORY_DIFFERS = "history_differs"


def classify_history(history: Optional[ImportHistory], fingerprint: str) -> HistoryState:
    """Classify a batch fingerprint against the stored history record."""
    if history is None:
        return HistoryState.NO_HISTORY
    if history.file_hash == fingerprint:
        return HistoryState.HISTORY_MATCHES
    return HistoryState.HISTORY_DIFFERS


class StatementImportService:
    """Service for importing statement exports."""

    def __init__(self, db: Database, layout: StatementLayout = DEFAULT_LAYOUT):
        """Initialize statement import service.

        Args:
            db: Database instance
            layout: Column layout of the statement exports
        """
        self.db = db
        self.parser = RecordParser(layout)
        self.categorization_service = CategorizationService(db)

    def import_file(
        self,
        file_path: str,
        year: int,
        month: int,
        confirm_overwrite: OverwriteConfirmation = False,
    ) -> ImportResult:
        """Import a statement file for a target month.

        Raises:
            FileNotFoundError: If the file doesn't exist
        """
        path = Path(file_path)
        if not path.exists():
            raise FileNotFoundError(f"Statement file not found: {file_path}")

        text = path.read_text(encoding="utf-8-sig")
        return self.import_statement(year, month, text, confirm_overwrite=confirm_overwrite)

    def import_statement(
        self,
        year: int,
        month: int,
        text: str,
        confirm_overwrite: OverwriteConfirmation = False,
    ) -> ImportResult:
        """Import statement text for a target month.

        Args:
            year: Target year
            month: Target month (1-12)
            text: Statement document including its header line
            confirm_overwrite: True to overwrite a month imported with different
                content, or a callable asked with the existing history record

        Returns:
            ImportResult; its ``failures`` lists rows that were skipped

        Raises:
            ValidationError: If the month is invalid or no row could be parsed
            ImportWindowError: If rows fall outside the import window
            PersistenceError: If the database writes could not be committed
        """
        allowed_months(year, month)

        parsed = self.parser.parse(text)
        if not parsed.candidates:
            raise ValidationError(
                f"Statement contains no valid transactions ({parsed.skipped} rows skipped)"
            )

        return self.reconcile(
            year,
            month,
            parsed.candidates,
            failures=parsed.failures,
            confirm_overwrite=confirm_overwrite,
        )

    def reconcile(
        self,
        year: int,
        month: int,
        candidates: Sequence[TransactionCandidate],
        failures: Sequence[ParseFailure] = (),
        confirm_overwrite: OverwriteConfirmation = False,
    ) -> ImportResult:
        """Decide between fresh import, no-op and overwrite for a batch."""
        validate_import_window(year, month, candidates)

        fingerprint = compute_fingerprint(candidates)
        history = self.db.get_import_history(year, month)
        state = classify_history(history, fingerprint)
        period = format_period(year, month)
        logger.debug("Import of %s: %s (fingerprint %s)", period, state.value, fingerprint)

        result_base = dict(
            year=year,
            month=month,
            fingerprint=fingerprint,
            failures=tuple(failures),
            existing_history=history,
        )

        if state == HistoryState.HISTORY_MATCHES:
            logger.info("%s already imported with identical content", period)
            return ImportResult(status=ImportStatus.NO_OP, **result_base)

        if state == HistoryState.HISTORY_DIFFERS:
            if callable(confirm_overwrite):
                if not confirm_overwrite(history):
                    logger.info("Overwrite of %s declined", period)
                    return ImportResult(status=ImportStatus.ABORTED, **result_base)
            elif not confirm_overwrite:
                logger.info("%s already imported with different content, overwrite required", period)
                return ImportResult(status=ImportStatus.OVERWRITE_REQUIRED, **result_base)

        categorized = self.categorization_service.apply_mappings(candidates)

        deleted = 0
        with self.db.unit_of_work():
            if history is not None:
                deleted = self.db.delete_transactions_in_month(year, month)
                self.db.delete_import_history(history.id)
            imported = self.db.add_transactions(categorized)
            self.db.create_import_history(
                year=year,
                month=month,
                file_hash=fingerprint,
                transaction_count=imported,
            )

        if history is None:
            logger.info("Imported %d transactions for %s", imported, period)
            status = ImportStatus.IMPORTED
        else:
            logger.info(
                "Overwrote %s: %d transactions deleted, %d imported", period, deleted, imported
            )
            status = ImportStatus.OVERWRITTEN

        return ImportResult(status=status, imported=imported, deleted=deleted, **result_base)

    def list_history(self) -> list[ImportHistory]:
        """List import history records, newest period first."""
        return self.db.list_import_history()
