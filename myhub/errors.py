"""
Domain Error Taxonomy

DESIGN DECISION: Services raise a small, fixed set of exceptions so callers
can tell "bad input" apart from "name already taken" and "storage broke".

Lookups on a missing id do NOT raise - update/delete return None/False so
callers can distinguish "nothing to do" from a hard failure.
"""

from typing import Optional

from pydantic import BaseModel, Field


class ValidationIssue(BaseModel):
    """A single validation issue found while checking a request."""

    field: str = Field(
        ...,
        description="Field with the issue"
    )
    issue_type: str = Field(
        ...,
        description="Type of issue (e.g., 'missing', 'too_long', 'invalid_format')"
    )
    message: str = Field(
        ...,
        description="Human-readable description of the issue"
    )


class MyHubError(Exception):
    """Base exception for all organizer errors."""
    pass


class ValidationError(MyHubError):
    """
    A required field is missing or malformed.

    Always raised before any write occurs.
    """

    def __init__(
        self,
        field: str,
        message: str,
        issues: Optional[list[ValidationIssue]] = None,
    ):
        super().__init__(message)
        self.field = field
        self.message = message
        self.issues = issues or [
            ValidationIssue(field=field, issue_type="invalid", message=message)
        ]

    @classmethod
    def from_issues(cls, issues: list[ValidationIssue]) -> "ValidationError":
        """Build an error naming the first offending field."""
        first = issues[0]
        return cls(field=first.field, message=first.message, issues=issues)


class NotFoundError(MyHubError):
    """Entity not found."""
    pass


class ConflictError(MyHubError):
    """An entity with the same unique value already exists."""

    def __init__(self, field: str, message: str):
        super().__init__(message)
        self.field = field
        self.message = message


class ImportFormatError(MyHubError):
    """Import file is not parseable or misses a required top-level array."""
    pass
