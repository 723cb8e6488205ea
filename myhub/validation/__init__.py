"""Validation package."""

from myhub.validation.validator import (
    BudgetValidator,
    CategoryValidator,
    PasswordValidator,
    ScheduleValidator,
    is_valid_time,
    is_valid_url,
    parse_day,
    time_to_minutes,
)

__all__ = [
    "BudgetValidator",
    "CategoryValidator",
    "PasswordValidator",
    "ScheduleValidator",
    "is_valid_time",
    "is_valid_url",
    "parse_day",
    "time_to_minutes",
]
