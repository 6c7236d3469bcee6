from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum


@dataclass(frozen=True)
class UploadedFile:
    """An uploaded CSV: its original file name and decoded text."""

    name: str
    text: str


class RowOutcome(str, Enum):
    ENRICHED = "enriched"
    INVALID_IDENTIFIER = "invalid_identifier"
    LOOKUP_FAILED = "lookup_failed"


@dataclass(frozen=True)
class RunSummary:
    """Row counts for a finished run."""

    total: int
    enriched: int
    invalid: int
    failed: int

    @classmethod
    def from_outcomes(cls, outcomes: Iterable[RowOutcome]) -> "RunSummary":
        outcomes = list(outcomes)
        return cls(
            total=len(outcomes),
            enriched=outcomes.count(RowOutcome.ENRICHED),
            invalid=outcomes.count(RowOutcome.INVALID_IDENTIFIER),
            failed=outcomes.count(RowOutcome.LOOKUP_FAILED),
        )
