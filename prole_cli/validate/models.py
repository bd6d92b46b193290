"""Data models for repository validation."""

import math
from enum import Enum

from pydantic import BaseModel


class ValidationStatus(str, Enum):
    """Outcome of a single check."""

    PASS = "pass"
    WARN = "warn"
    FAIL = "fail"


class ValidationResult(BaseModel):
    """One checked aspect of the repository."""

    name: str
    status: ValidationStatus
    message: str
    fixable: bool = False


def calculate_score(results: list[ValidationResult]) -> int:
    """Percentage of passing results, rounded half up.

    Warnings and failures both count in the denominator. An empty run scores 0.
    """
    if not results:
        return 0
    pass_count = sum(1 for result in results if result.status is ValidationStatus.PASS)
    return math.floor(100 * pass_count / len(results) + 0.5)


class ValidationReport(BaseModel):
    """Ordered results of a validation run."""

    results: list[ValidationResult]

    def count(self, status: ValidationStatus) -> int:
        """Number of results with the given status."""
        return sum(1 for result in self.results if result.status is status)

    @property
    def score(self) -> int:
        return calculate_score(self.results)

    @property
    def has_problems(self) -> bool:
        """True if any result is a warning or a failure."""
        return any(result.status is not ValidationStatus.PASS for result in self.results)
