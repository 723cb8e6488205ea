"""
Password Vault Models

DESIGN DECISION: Secrets are stored in plaintext. The organizer is a
single-user local tool and encryption-at-rest is explicitly out of scope.

``strength`` is derived from ``password`` by the service layer and is
never accepted from callers, which is why the request models below do
not expose it.
"""

import json
from enum import Enum
from typing import Literal, Optional

from pydantic import Field

from myhub.models.base import BaseEntity, CamelModel, PatchModel, UtcDatetime, utcnow
from myhub.models.category import CustomCategory


class PasswordCategory(str, Enum):
    """Built-in password categories."""
    SOCIAL_MEDIA = "social_media"
    EMAIL = "email"
    BANKING = "banking"
    SHOPPING = "shopping"
    WORK = "work"
    ENTERTAINMENT = "entertainment"
    EDUCATION = "education"
    GAMING = "gaming"
    HEALTH = "health"
    TRAVEL = "travel"
    OTHER = "other"


class PasswordStrength(str, Enum):
    """Strength tiers produced by the scoring heuristic."""
    WEAK = "weak"
    MEDIUM = "medium"
    STRONG = "strong"
    VERY_STRONG = "very_strong"


class PasswordEntry(BaseEntity):
    """A stored credential."""

    app_name: str
    username: str
    password: str
    website: Optional[str] = None
    notes: Optional[str] = None
    category: Optional[PasswordCategory] = None
    custom_category_id: Optional[str] = None
    tags: list[str] = Field(default_factory=list)
    is_favorite: bool = False
    last_used: Optional[UtcDatetime] = None
    strength: Optional[PasswordStrength] = None
    google_authenticator: Optional[str] = Field(
        default=None,
        description="2FA backup codes or secret key"
    )
    phone_number: Optional[str] = Field(
        default=None,
        description="Phone number used for 2FA"
    )


class CreatePasswordRequest(CamelModel):
    """
    Request to create a password entry.

    Required fields are Optional here so that a missing value is reported
    as a ValidationError naming the field rather than a parse failure.
    """

    app_name: Optional[str] = None
    username: Optional[str] = None
    password: Optional[str] = None
    website: Optional[str] = None
    notes: Optional[str] = None
    category: Optional[PasswordCategory] = None
    custom_category_id: Optional[str] = None
    tags: list[str] = Field(default_factory=list)
    is_favorite: bool = False
    google_authenticator: Optional[str] = None
    phone_number: Optional[str] = None


class UpdatePasswordRequest(PatchModel):
    """Partial update of a password entry."""

    app_name: Optional[str] = None
    username: Optional[str] = None
    password: Optional[str] = None
    website: Optional[str] = None
    notes: Optional[str] = None
    category: Optional[PasswordCategory] = None
    custom_category_id: Optional[str] = None
    tags: Optional[list[str]] = None
    is_favorite: Optional[bool] = None
    google_authenticator: Optional[str] = None
    phone_number: Optional[str] = None


PasswordSortField = Literal["app_name", "username", "created_at", "last_used"]


class SearchPasswordRequest(CamelModel):
    """Filter, sort and paginate the vault."""

    query: Optional[str] = None
    category: Optional[PasswordCategory] = None
    tags: Optional[list[str]] = None
    is_favorite: Optional[bool] = None
    sort_by: Optional[PasswordSortField] = None
    sort_direction: Literal["asc", "desc"] = "asc"
    limit: Optional[int] = Field(
        default=None,
        ge=1,
        description="Page size (defaults to the configured page limit)"
    )
    offset: int = Field(
        default=0,
        ge=0,
        description="Raw item offset, NOT a page number"
    )


class PasswordResponse(PasswordEntry):
    """Password as returned to callers and written to export files."""

    @classmethod
    def from_entry(cls, entry: PasswordEntry) -> "PasswordResponse":
        return cls.model_validate(entry.model_dump())


class PasswordStats(CamelModel):
    """Vault statistics."""

    total_passwords: int
    category_counts: dict[str, int]
    strength_counts: dict[str, int]
    recently_used: list[PasswordResponse]
    favorites: list[PasswordResponse]


class PasswordExport(CamelModel):
    """
    Export document for the password domain.

    Shape on disk:
        {"version", "exportDate", "passwords": [...], "customCategories": [...]}
    """

    version: str = "1.0"
    export_date: UtcDatetime = Field(default_factory=utcnow)
    passwords: list[PasswordResponse] = Field(default_factory=list)
    custom_categories: list[CustomCategory] = Field(default_factory=list)

    def to_json(self) -> str:
        """Render as indented JSON with ISO-8601 dates."""
        data = self.model_dump(by_alias=True, mode="json")
        return json.dumps(data, indent=2, ensure_ascii=False)

    @property
    def filename(self) -> str:
        """Download name carrying the export date."""
        return f"passwords-export-{self.export_date.date().isoformat()}.json"


class ImportResult(CamelModel):
    """Outcome of a merge-import."""

    imported_passwords: int = 0
    imported_categories: int = 0
    errors: list[str] = Field(default_factory=list)

    @property
    def has_errors(self) -> bool:
        return bool(self.errors)
