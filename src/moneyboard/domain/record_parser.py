"""Statement record parsing.

Turns the text of a statement export into transaction candidates. The
first line is a header and is discarded; every following line is one
record. Malformed records never abort parsing: they are collected as
``ParseFailure`` entries so the caller can report them.
"""

import csv
import logging
from dataclasses import dataclass
from typing import Optional

from moneyboard.domain.entities import ParseFailure, ParseResult, TransactionCandidate
from moneyboard.domain.errors import ValidationError
from moneyboard.utils.amount_parser import parse_amount
from moneyboard.utils.date_parser import parse_date

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StatementLayout:
    """Column layout of a statement export.

    The defaults describe the credit card export the application was built
    around: usage date in the first column, usage name in the second and
    the billed amount in the fifth.
    """

    delimiter: str = ","
    quote_char: str = '"'
    date_column: int = 0
    name_column: int = 1
    amount_column: int = 4
    min_columns: int = 5
    date_format: Optional[str] = None

    def __post_init__(self):
        if len(self.delimiter) != 1:
            raise ValidationError(f"Delimiter must be a single character, got '{self.delimiter}'")
        if len(self.quote_char) != 1:
            raise ValidationError(f"Quote character must be a single character, got '{self.quote_char}'")
        columns = (self.date_column, self.name_column, self.amount_column)
        if min(columns) < 0:
            raise ValidationError("Column positions must not be negative")
        if self.min_columns <= max(columns):
            raise ValidationError(
                f"Minimum column count {self.min_columns} does not cover column position {max(columns)}"
            )


DEFAULT_LAYOUT = StatementLayout()


class RecordParser:
    """Parser for delimited statement exports."""

    def __init__(self, layout: StatementLayout = DEFAULT_LAYOUT):
        self.layout = layout

    def split_fields(self, line: str) -> list[str]:
        """Split one record into fields with surrounding quotes removed."""
        reader = csv.reader(
            [line],
            delimiter=self.layout.delimiter,
            quotechar=self.layout.quote_char,
        )
        fields = next(reader, [])
        return [f.strip().strip(self.layout.quote_char) for f in fields]

    def parse_line(self, line: str, line_number: int) -> TransactionCandidate:
        """Parse one record into a transaction candidate.

        Raises:
            ValueError: If the record is malformed
        """
        layout = self.layout
        fields = self.split_fields(line)
        if len(fields) < layout.min_columns:
            raise ValueError(f"Expected at least {layout.min_columns} columns, got {len(fields)}")

        usage_date = parse_date(fields[layout.date_column], layout.date_format)

        usage_name = fields[layout.name_column].strip()
        if not usage_name:
            raise ValueError("Missing usage name")

        amount = parse_amount(fields[layout.amount_column])

        return TransactionCandidate(
            usage_date=usage_date,
            usage_name=usage_name,
            amount=amount,
            line_number=line_number,
        )

    def parse(self, text: str) -> ParseResult:
        """Parse a full statement document.

        Args:
            text: Document text including its header line

        Returns:
            ParseResult with candidates in document order and any failures
        """
        candidates: list[TransactionCandidate] = []
        failures: list[ParseFailure] = []

        lines = text.splitlines()
        # Line 1 is the header
        for line_number, line in enumerate(lines[1:], start=2):
            if not line.strip():
                continue
            try:
                candidates.append(self.parse_line(line, line_number))
            except (ValueError, csv.Error) as e:
                logger.debug("Failed to parse line %d: %s (%s)", line_number, line, e)
                failures.append(ParseFailure(line_number=line_number, line=line, reason=str(e)))

        logger.debug("Parsed %d records, %d failures", len(candidates), len(failures))
        return ParseResult(candidates=tuple(candidates), failures=tuple(failures))


def parse_statement(text: str, layout: StatementLayout = DEFAULT_LAYOUT) -> ParseResult:
    """Parse statement text with the given layout."""
    return RecordParser(layout).parse(text)
