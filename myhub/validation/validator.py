"""
Request Validation

DESIGN DECISION: Validators collect every issue they find, then raise one
ValidationError naming the first offending field and carrying the full
list. Services call them BEFORE touching storage, so an invalid request
never results in a partial write.

IMPORTANT: Validation never silently fixes input. It reports problems and
the caller decides what to do.
"""

import re
from decimal import Decimal
from typing import Any, Optional
from urllib.parse import urlparse

from myhub.errors import ValidationError, ValidationIssue
from myhub.models import (
    CreateIncomeRequest,
    CreatePasswordRequest,
    CreateRecurringTemplateRequest,
    CreateScheduleItemRequest,
    CreateTransactionRequest,
    DayOfWeek,
    GoalType,
    UpdatePasswordRequest,
)

TIME_PATTERN = re.compile(r"^([0-1][0-9]|2[0-3]):[0-5][0-9]$")

APP_NAME_MAX_LENGTH = 100
USERNAME_MAX_LENGTH = 255
PASSWORD_MAX_LENGTH = 500


def is_blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()


def is_valid_url(url: str) -> bool:
    """True for absolute URLs (scheme and host, e.g. https://example.com)."""
    try:
        parsed = urlparse(url)
    except ValueError:
        return False
    return bool(parsed.scheme) and bool(parsed.netloc)


def is_valid_time(value: Optional[str]) -> bool:
    return value is not None and TIME_PATTERN.match(value) is not None


def time_to_minutes(value: str) -> int:
    """Convert "HH:MM" to minutes since midnight."""
    hours, minutes = value.split(":")
    return int(hours) * 60 + int(minutes)


def raise_for_issues(issues: list[ValidationIssue]) -> None:
    if issues:
        raise ValidationError.from_issues(issues)


def _missing(field: str, message: str) -> ValidationIssue:
    return ValidationIssue(field=field, issue_type="missing", message=message)


def _too_long(field: str, message: str) -> ValidationIssue:
    return ValidationIssue(field=field, issue_type="too_long", message=message)


def _invalid(field: str, message: str) -> ValidationIssue:
    return ValidationIssue(field=field, issue_type="invalid_format", message=message)


# =============================================================================
# PASSWORDS
# =============================================================================

class PasswordValidator:
    """Checks password create/update requests."""

    def validate_create(self, request: CreatePasswordRequest) -> None:
        issues: list[ValidationIssue] = []

        if is_blank(request.app_name):
            issues.append(_missing("app_name", "App name is required"))
        elif len(request.app_name) > APP_NAME_MAX_LENGTH:
            issues.append(_too_long(
                "app_name",
                f"App name is too long (maximum {APP_NAME_MAX_LENGTH} characters)",
            ))

        if is_blank(request.username):
            issues.append(_missing("username", "Username is required"))
        elif len(request.username) > USERNAME_MAX_LENGTH:
            issues.append(_too_long(
                "username",
                f"Username is too long (maximum {USERNAME_MAX_LENGTH} characters)",
            ))

        if is_blank(request.password):
            issues.append(_missing("password", "Password is required"))
        elif len(request.password) > PASSWORD_MAX_LENGTH:
            issues.append(_too_long(
                "password",
                f"Password is too long (maximum {PASSWORD_MAX_LENGTH} characters)",
            ))

        if request.website and not is_valid_url(request.website):
            issues.append(_invalid("website", "Invalid website URL format"))

        raise_for_issues(issues)

    def validate_update(self, request: UpdatePasswordRequest) -> None:
        """Apply the create rules to every field present in the patch."""
        issues: list[ValidationIssue] = []

        if is_blank(request.id):
            issues.append(_missing("id", "ID is required"))

        if request.is_set("app_name") and (
            is_blank(request.app_name) or len(request.app_name) > APP_NAME_MAX_LENGTH
        ):
            issues.append(_invalid("app_name", "Invalid app name"))

        if request.is_set("username") and (
            is_blank(request.username) or len(request.username) > USERNAME_MAX_LENGTH
        ):
            issues.append(_invalid("username", "Invalid username"))

        if request.is_set("password") and (
            is_blank(request.password) or len(request.password) > PASSWORD_MAX_LENGTH
        ):
            issues.append(_invalid("password", "Invalid password"))

        if request.website and not is_valid_url(request.website):
            issues.append(_invalid("website", "Invalid website URL format"))

        raise_for_issues(issues)


# =============================================================================
# CUSTOM CATEGORIES
# =============================================================================

class CategoryValidator:
    """Name and color are both required and non-blank."""

    def validate(self, name: Optional[str], color: Optional[str]) -> None:
        issues: list[ValidationIssue] = []
        if is_blank(name):
            issues.append(_missing("name", "Category name is required"))
        if is_blank(color):
            issues.append(_missing("color", "Category color is required"))
        raise_for_issues(issues)


# =============================================================================
# BUDGETS AND TRANSACTIONS
# =============================================================================

def _has_amount(amount: Optional[Decimal]) -> bool:
    # Zero counts as missing
    return amount is not None and amount != 0


class BudgetValidator:
    """Required-field checks for budgets, transactions and templates."""

    def validate_budget(self, name: Optional[str], amount: Optional[Decimal]) -> None:
        issues: list[ValidationIssue] = []
        if is_blank(name):
            issues.append(_missing("name", "Budget name is required"))
        if not _has_amount(amount):
            issues.append(_missing("amount", "Budget amount is required"))
        raise_for_issues(issues)

    def validate_transaction(self, request: CreateTransactionRequest) -> None:
        issues: list[ValidationIssue] = []
        if not _has_amount(request.amount):
            issues.append(_missing("amount", "Amount is required"))
        if is_blank(request.description):
            issues.append(_missing("description", "Description is required"))
        if request.category is None:
            issues.append(_missing("category", "Category is required"))
        if request.type is None:
            issues.append(_missing("type", "Transaction type is required"))
        raise_for_issues(issues)

    def validate_income(self, request: CreateIncomeRequest) -> None:
        issues: list[ValidationIssue] = []
        if not _has_amount(request.amount):
            issues.append(_missing("amount", "Amount is required"))
        if is_blank(request.source):
            issues.append(_missing("source", "Income source is required"))
        if is_blank(request.account_target):
            issues.append(_missing("account_target", "Account target is required"))
        raise_for_issues(issues)

    def validate_template(self, request: CreateRecurringTemplateRequest) -> None:
        issues: list[ValidationIssue] = []
        if is_blank(request.description):
            issues.append(_missing("description", "Description is required"))
        if not _has_amount(request.amount):
            issues.append(_missing("amount", "Amount is required"))
        raise_for_issues(issues)


# =============================================================================
# ROUTINE PLANNER
# =============================================================================

class ScheduleValidator:
    """
    Checks schedule items.

    Both times must be HH:MM on the 24-hour clock and the end must be
    strictly later than the start.
    """

    def validate_item(self, request: CreateScheduleItemRequest) -> None:
        issues: list[ValidationIssue] = []

        for field, value in (
            ("start_time", request.start_time),
            ("end_time", request.end_time),
            ("what_to_do", request.what_to_do),
        ):
            if is_blank(value):
                issues.append(_missing(field, f"{field.replace('_', ' ').capitalize()} is required"))
        raise_for_issues(issues)

        for field, value in (
            ("start_time", request.start_time),
            ("end_time", request.end_time),
        ):
            if not is_valid_time(value):
                issues.append(_invalid(field, "Invalid time format, expected HH:MM"))
        raise_for_issues(issues)

        if time_to_minutes(request.end_time) <= time_to_minutes(request.start_time):
            issues.append(ValidationIssue(
                field="end_time",
                issue_type="inconsistent",
                message="End time must be after start time",
            ))
        raise_for_issues(issues)

    def validate_block(self, time: Optional[str], title: Optional[str]) -> None:
        issues: list[ValidationIssue] = []
        if not is_valid_time(time):
            issues.append(_invalid("time", "Invalid time format, expected HH:MM"))
        if is_blank(title):
            issues.append(_missing("title", "Title is required"))
        raise_for_issues(issues)

    def validate_program(self, name: Optional[str]) -> None:
        if is_blank(name):
            raise ValidationError("name", "Program name is required")

    def validate_goal(
        self,
        text: Optional[str],
        goal_type: GoalType,
        custom_date: Optional[str],
    ) -> None:
        issues: list[ValidationIssue] = []
        if is_blank(text):
            issues.append(_missing("text", "Goal text is required"))
        if goal_type == GoalType.CUSTOM and is_blank(custom_date):
            issues.append(_missing("custom_date", "Custom goals need a date"))
        raise_for_issues(issues)

    def validate_routine(self, title: Optional[str], time_of_day: Optional[str]) -> None:
        issues: list[ValidationIssue] = []
        if is_blank(title):
            issues.append(_missing("title", "Routine title is required"))
        if time_of_day is not None and not is_valid_time(time_of_day):
            issues.append(_invalid("time_of_day", "Invalid time format, expected HH:MM"))
        raise_for_issues(issues)


def parse_day(day: Any) -> DayOfWeek:
    """
    Resolve a weekday key such as "monday".

    Raises:
        ValidationError: If the value names no weekday
    """
    try:
        return DayOfWeek(day)
    except ValueError:
        raise ValidationError("day", f"Unknown day of week: {day!r}") from None
