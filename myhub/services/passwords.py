"""
Password Vault Service

DESIGN DECISION: Methods are ``async`` so callers can treat the vault like
any other I/O-backed service, but every call completes without suspending;
storage is local and synchronous.

Strength is ALWAYS derived here from the password itself, on create, on
update when the password changes, and on import.
"""

import json
import os
import re
from typing import IO, Any, List, Optional, Union

from pydantic import ValidationError as PydanticValidationError

from myhub.errors import ImportFormatError, MyHubError
from myhub.logger import get_logger
from myhub.models import (
    CreatePasswordRequest,
    CustomCategory,
    ImportResult,
    Page,
    PasswordCategory,
    PasswordEntry,
    PasswordExport,
    PasswordResponse,
    PasswordStats,
    PasswordStrength,
    SearchPasswordRequest,
    UpdatePasswordRequest,
    utcnow,
)
from myhub.queries import DEFAULT_PAGE_LIMIT, matches_text, most_recent, query_passwords
from myhub.queries.executor import password_text_fields
from myhub.repositories import CustomCategoryRepository, PasswordRepository
from myhub.services.base import apply_patch
from myhub.validation import CategoryValidator, PasswordValidator

logger = get_logger(__name__)

ImportSource = Union[str, bytes, os.PathLike, IO[str], IO[bytes]]

RECENTLY_USED_COUNT = 5
DEFAULT_IMPORT_ICON = "🏠"
DEFAULT_IMPORT_CATEGORY_TYPE = "expense"

_REPEATED_CHAR = re.compile(r"(.)\1{2,}")
_COMMON_SEQUENCE = re.compile(r"123|abc|qwe", re.IGNORECASE)


def calculate_password_strength(password: str) -> PasswordStrength:
    """
    Score a password and map the score to a strength tier.

    +1 for length >= 8, +1 for length >= 12, +1 for each character class
    present (lower, upper, digit, symbol). -1 for a character repeated
    three or more times in a row, -1 for a common sequence.
    """
    score = 0

    if len(password) >= 8:
        score += 1
    if len(password) >= 12:
        score += 1

    if re.search(r"[a-z]", password):
        score += 1
    if re.search(r"[A-Z]", password):
        score += 1
    if re.search(r"[0-9]", password):
        score += 1
    if re.search(r"[^A-Za-z0-9]", password):
        score += 1

    if _REPEATED_CHAR.search(password):
        score -= 1
    if _COMMON_SEQUENCE.search(password):
        score -= 1

    if score <= 2:
        return PasswordStrength.WEAK
    if score <= 4:
        return PasswordStrength.MEDIUM
    if score <= 6:
        return PasswordStrength.STRONG
    return PasswordStrength.VERY_STRONG


def read_import_source(source: ImportSource) -> dict[str, Any]:
    """
    Load and structurally check an export document.

    ``str`` and ``bytes`` are taken as the JSON text itself; paths and
    file objects are read first.

    Raises:
        ImportFormatError: Unreadable or unparseable input, or a missing
            ``passwords`` / ``customCategories`` array
    """
    try:
        if isinstance(source, os.PathLike):
            with open(source, "rb") as f:
                raw = f.read()
        elif isinstance(source, (str, bytes)):
            raw = source
        else:
            raw = source.read()
        data = json.loads(raw)
    except (OSError, UnicodeDecodeError, ValueError) as e:
        raise ImportFormatError(f"Could not read import file: {e}") from e

    if not isinstance(data, dict):
        raise ImportFormatError("Invalid file format: expected a JSON object")
    if not isinstance(data.get("passwords"), list):
        raise ImportFormatError("Invalid file format: passwords not found")
    if not isinstance(data.get("customCategories"), list):
        raise ImportFormatError("Invalid file format: custom categories not found")
    return data


def _record_label(record: Any, key: str) -> str:
    if isinstance(record, dict):
        return str(record.get(key))
    return repr(record)


def _strip_or(value: Any, default: str) -> Any:
    """Trimmed string, or the default when the value is missing or blank."""
    if isinstance(value, str):
        return value.strip() or default
    return value if value is not None else default


class PasswordService:
    """CRUD, search, statistics and import/export for the password vault."""

    def __init__(
        self,
        passwords: PasswordRepository,
        categories: CustomCategoryRepository,
        page_limit: int = DEFAULT_PAGE_LIMIT,
        export_version: str = "1.0",
    ):
        self._passwords = passwords
        self._categories = categories
        self._page_limit = page_limit
        self._export_version = export_version
        self._validator = PasswordValidator()
        self._category_validator = CategoryValidator()

    # =========================================================================
    # CRUD
    # =========================================================================

    async def create(self, request: CreatePasswordRequest) -> PasswordResponse:
        """
        Create a password entry.

        Raises:
            ValidationError: If a required field is blank or too long, or
                the website is not an absolute URL
        """
        self._validator.validate_create(request)

        now = utcnow()
        entry = PasswordEntry(
            **request.model_dump(),
            created_at=now,
            updated_at=now,
            strength=calculate_password_strength(request.password),
        )
        self._passwords.add(entry)

        logger.info("password_created", password_id=entry.id, app_name=entry.app_name)
        return PasswordResponse.from_entry(entry)

    async def get_by_id(self, password_id: str) -> Optional[PasswordResponse]:
        entry = self._passwords.get_by_id(password_id)
        return PasswordResponse.from_entry(entry) if entry else None

    async def list(
        self,
        search_request: Optional[SearchPasswordRequest] = None,
    ) -> Page[PasswordResponse]:
        """
        Filter, sort and paginate the vault.

        Without a request every entry is returned as a single page.
        """
        page = query_passwords(self._passwords.get_all(), search_request, self._page_limit)
        return Page[PasswordResponse](
            items=[PasswordResponse.from_entry(e) for e in page.items],
            total=page.total,
            page=page.page,
            limit=page.limit,
            total_pages=page.total_pages,
        )

    async def update(self, request: UpdatePasswordRequest) -> Optional[PasswordResponse]:
        """
        Apply a partial update.

        Returns None if no entry has the id. Strength is recomputed only
        when the patch carries a password.
        """
        existing = self._passwords.get_by_id(request.id)
        if existing is None:
            return None

        self._validator.validate_update(request)

        updated = apply_patch(existing, request)
        if request.is_set("password"):
            updated.strength = calculate_password_strength(updated.password)
        self._passwords.update(updated)

        logger.info(
            "password_updated",
            password_id=updated.id,
            fields=sorted(request.changes()),
        )
        return PasswordResponse.from_entry(updated)

    async def delete(self, password_id: str) -> bool:
        deleted = self._passwords.delete(password_id)
        if deleted:
            logger.info("password_deleted", password_id=password_id)
        return deleted

    # =========================================================================
    # QUERIES
    # =========================================================================

    async def search(self, query: str) -> List[PasswordResponse]:
        """Case-insensitive substring search, no paging."""
        return [
            PasswordResponse.from_entry(e)
            for e in self._passwords.get_all()
            if matches_text(query, password_text_fields(e))
        ]

    async def stats(self) -> PasswordStats:
        entries = self._passwords.get_all()

        category_counts = {
            category.value: sum(1 for e in entries if e.category == category)
            for category in PasswordCategory
        }
        strength_counts = {
            strength.value: sum(1 for e in entries if e.strength == strength)
            for strength in PasswordStrength
        }
        recently_used = most_recent(entries, lambda e: e.last_used, RECENTLY_USED_COUNT)

        return PasswordStats(
            total_passwords=len(entries),
            category_counts=category_counts,
            strength_counts=strength_counts,
            recently_used=[PasswordResponse.from_entry(e) for e in recently_used],
            favorites=[PasswordResponse.from_entry(e) for e in entries if e.is_favorite],
        )

    async def mark_used(self, password_id: str) -> Optional[PasswordResponse]:
        entry = self._passwords.get_by_id(password_id)
        if entry is None:
            return None

        entry.last_used = utcnow()
        self._passwords.update(entry)
        return PasswordResponse.from_entry(entry)

    async def toggle_favorite(self, password_id: str) -> Optional[PasswordResponse]:
        entry = self._passwords.get_by_id(password_id)
        if entry is None:
            return None

        entry.is_favorite = not entry.is_favorite
        self._passwords.update(entry)
        return PasswordResponse.from_entry(entry)

    # =========================================================================
    # IMPORT / EXPORT
    # =========================================================================

    async def export_all(self) -> PasswordExport:
        """Snapshot every password and custom category."""
        export = PasswordExport(
            version=self._export_version,
            passwords=[PasswordResponse.from_entry(e) for e in self._passwords.get_all()],
            custom_categories=self._categories.get_all(),
        )
        logger.info(
            "passwords_exported",
            password_count=len(export.passwords),
            category_count=len(export.custom_categories),
        )
        return export

    async def import_all(self, file: ImportSource) -> ImportResult:
        """
        Merge an export document into the vault.

        Categories are imported first, skipping names that already exist
        (case-sensitive). Passwords are then imported, skipping any entry
        whose app name AND username already exist. Records that fail are
        reported in ``errors`` and do not stop the import.

        NOTE: Not transactional. Records written before a failure stay.

        Raises:
            ImportFormatError: If the file is structurally invalid; nothing
                is written in that case
        """
        data = read_import_source(file)
        result = ImportResult()

        for record in data["customCategories"]:
            try:
                if self._import_category(record):
                    result.imported_categories += 1
            except (PydanticValidationError, MyHubError) as e:
                result.errors.append(
                    f'Category "{_record_label(record, "name")}" could not be imported: {e}'
                )

        for record in data["passwords"]:
            try:
                if self._import_password(record):
                    result.imported_passwords += 1
            except (PydanticValidationError, MyHubError) as e:
                result.errors.append(
                    f'Password "{_record_label(record, "appName")}" could not be imported: {e}'
                )

        logger.info(
            "passwords_imported",
            imported_passwords=result.imported_passwords,
            imported_categories=result.imported_categories,
            error_count=len(result.errors),
        )
        return result

    def _import_category(self, record: Any) -> bool:
        if not isinstance(record, dict):
            raise ImportFormatError("category record is not an object")

        name = record.get("name")
        color = record.get("color")
        if not all(value is None or isinstance(value, str) for value in (name, color)):
            raise ImportFormatError("category name and color must be strings")
        self._category_validator.validate(name, color)

        name = name.strip()
        if any(c.name == name for c in self._categories.get_all()):
            return False

        category = CustomCategory(
            name=name,
            color=color.strip(),
            icon=_strip_or(record.get("icon"), DEFAULT_IMPORT_ICON),
            description=_strip_or(record.get("description"), ""),
            category_type=record.get("categoryType") or DEFAULT_IMPORT_CATEGORY_TYPE,
            is_active=True,
        )
        self._categories.add(category)
        return True

    def _import_password(self, record: Any) -> bool:
        if not isinstance(record, dict):
            raise ImportFormatError("password record is not an object")

        request = CreatePasswordRequest.model_validate(record)
        exists = any(
            e.app_name == request.app_name and e.username == request.username
            for e in self._passwords.get_all()
        )
        if exists:
            return False

        self._validator.validate_create(request)
        entry = PasswordEntry(
            **request.model_dump(),
            strength=calculate_password_strength(request.password),
            last_used=record.get("lastUsed"),
        )
        self._passwords.add(entry)
        return True
