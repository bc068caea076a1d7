"""Domain semantic exceptions."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from itinerary_engine.domain.models import ValidationIssue


class DomainError(Exception):
    """Base domain exception."""


class ItineraryValidationError(DomainError):
    """Raised in strict mode when the activity set fails validation."""

    def __init__(self, issues: list["ValidationIssue"]):
        self.issues = list(issues)
        codes = ", ".join(sorted({issue.code for issue in self.issues})) or "UNKNOWN"
        super().__init__(f"{len(self.issues)} validation issue(s): {codes}")
