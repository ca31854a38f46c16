"""Content fingerprint of an import batch."""

import hashlib
from typing import Iterable, Protocol
from datetime import date


class _Record(Protocol):
    usage_date: date
    usage_name: str
    amount: int


FIELD_DELIMITER = "|"
DATE_FORMAT = "%Y%m%d"


def canonical_text(records: Iterable[_Record]) -> str:
    """Render records as the canonical text block that gets hashed.

    Records are ordered by date, then name, then amount, and written one per
    line as ``YYYYMMDD|name|amount``.
    """
    ordered = sorted(records, key=lambda r: (r.usage_date, r.usage_name, r.amount))
    return "".join(
        f"{r.usage_date.strftime(DATE_FORMAT)}{FIELD_DELIMITER}{r.usage_name}{FIELD_DELIMITER}{r.amount}\n"
        for r in ordered
    )


def compute_fingerprint(records: Iterable[_Record]) -> str:
    """Compute the SHA-256 fingerprint of a batch as uppercase hex.

    The result depends only on the content of the records, never on the
    order they are given in.
    """
    digest = hashlib.sha256(canonical_text(records).encode("utf-8"))
    return digest.hexdigest().upper()
