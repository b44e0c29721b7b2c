"""Repositories SQLModel implementant les ports de core/ports/repositories.py."""

from reelsort.infrastructure.persistence.repositories.library_item_repository import (
    SQLModelLibraryItemRepository,
)
from reelsort.infrastructure.persistence.repositories.scan_job_repository import (
    SQLModelScanJobRepository,
)
from reelsort.infrastructure.persistence.repositories.settings_repository import (
    SQLModelSettingsRepository,
)

__all__ = [
    "SQLModelLibraryItemRepository",
    "SQLModelScanJobRepository",
    "SQLModelSettingsRepository",
]
