"""
Service Wiring

This module ties the layers together:

    KeyValueStore -> StorageAdapter -> repositories -> services

DESIGN DECISION: There is no global storage singleton. Callers build a
Services bundle once (optionally over their own store, e.g. an in-memory
one in tests) and pass the services they need to their collaborators.
"""

from dataclasses import dataclass
from typing import Optional

from myhub.config import Settings, get_settings
from myhub.logger import configure_logging, get_logger
from myhub.repositories import (
    BudgetRepository,
    CustomCategoryRepository,
    GoalRepository,
    PasswordRepository,
    ProgramRepository,
    RecurringTemplateRepository,
    RoutineBlockRepository,
    RoutineRepository,
    ScheduleRepository,
    TransactionRepository,
)
from myhub.services import (
    BackupService,
    BudgetService,
    CustomCategoryService,
    PasswordService,
    RecurringTransactionService,
    RoutinePlannerService,
    RoutineScheduleService,
)
from myhub.storage import (
    InMemoryKeyValueStore,
    JsonFileKeyValueStore,
    KeyValueStore,
    StorageAdapter,
)

logger = get_logger(__name__)


@dataclass
class Services:
    """Every domain service, sharing one storage adapter."""

    adapter: StorageAdapter
    passwords: PasswordService
    categories: CustomCategoryService
    budget: BudgetService
    recurring: RecurringTransactionService
    schedule: RoutineScheduleService
    planner: RoutinePlannerService
    backup: BackupService


def create_store(settings: Settings) -> KeyValueStore:
    """Build the backend named in the storage settings."""
    storage = settings.storage
    if storage.backend == "memory":
        return InMemoryKeyValueStore(quota_bytes=storage.quota_bytes)
    return JsonFileKeyValueStore(storage.path, quota_bytes=storage.quota_bytes)


def build_services(
    settings: Optional[Settings] = None,
    store: Optional[KeyValueStore] = None,
) -> Services:
    """
    Wire repositories and services over a single store.

    Args:
        settings: Configuration; defaults to the cached environment settings
        store: Backend to use instead of the configured one
    """
    settings = settings or get_settings()
    configure_logging(settings.logging)

    store = store or create_store(settings)
    adapter = StorageAdapter(store, key_prefix=settings.storage.key_prefix)
    app = settings.app

    passwords = PasswordRepository(adapter)
    routines = RoutineRepository(adapter)
    budgets = BudgetRepository(adapter)
    transactions = TransactionRepository(adapter)
    categories = CustomCategoryRepository(adapter)
    templates = RecurringTemplateRepository(adapter)
    goals = GoalRepository(adapter)
    blocks = RoutineBlockRepository(adapter)

    logger.info(
        "services_built",
        backend=type(store).__name__,
        key_prefix=settings.storage.key_prefix,
    )

    return Services(
        adapter=adapter,
        passwords=PasswordService(
            passwords,
            categories,
            page_limit=app.default_page_limit,
            export_version=app.export_version,
        ),
        categories=CustomCategoryService(categories, passwords, transactions, templates),
        budget=BudgetService(budgets, transactions, page_limit=app.default_page_limit),
        recurring=RecurringTransactionService(templates, transactions),
        schedule=RoutineScheduleService(
            ScheduleRepository(adapter),
            ProgramRepository(adapter),
            default_program_id=app.default_program_id,
        ),
        planner=RoutinePlannerService(
            goals,
            blocks,
            routines,
            page_limit=app.default_page_limit,
        ),
        backup=BackupService(
            adapter,
            passwords,
            routines,
            budgets,
            transactions,
            categories,
            templates,
            goals,
            blocks,
            backup_version=app.backup_version,
        ),
    )
