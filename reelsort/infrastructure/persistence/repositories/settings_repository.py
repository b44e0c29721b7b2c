"""
Implementation SQLModel du repository des reglages.

Une seule ligne (id "global") porte les reglages de la bibliotheque.
"""

from pathlib import Path
from typing import Optional

from sqlmodel import Session

from reelsort.core.entities import LibrarySettings
from reelsort.core.ports.repositories import ISettingsRepository
from reelsort.infrastructure.persistence.models import (
    GLOBAL_SETTINGS_ID,
    LibrarySettingsModel,
)
from reelsort.utils.helpers import utc_now


class SQLModelSettingsRepository(ISettingsRepository):
    """Repository SQLModel des reglages globaux."""

    def __init__(self, session: Session) -> None:
        self._session = session

    def _to_entity(self, model: LibrarySettingsModel) -> LibrarySettings:
        return LibrarySettings(
            library_root=Path(model.library_root) if model.library_root else None,
            is_copy_mode=model.is_copy_mode,
            tmdb_api_key=model.tmdb_api_key,
            library_id=model.library_id,
            dry_run=model.dry_run,
            mount_safety=model.mount_safety,
        )

    def get(self) -> Optional[LibrarySettings]:
        """Retourne les reglages, ou None s'ils n'existent pas."""
        model = self._session.get(LibrarySettingsModel, GLOBAL_SETTINGS_ID)
        if model:
            return self._to_entity(model)
        return None

    def save(self, settings: LibrarySettings) -> LibrarySettings:
        """Sauvegarde les reglages (insertion ou mise a jour)."""
        model = self._session.get(LibrarySettingsModel, GLOBAL_SETTINGS_ID)
        if model is None:
            model = LibrarySettingsModel(id=GLOBAL_SETTINGS_ID)

        model.library_root = str(settings.library_root) if settings.library_root else None
        model.is_copy_mode = settings.is_copy_mode
        model.tmdb_api_key = settings.tmdb_api_key
        model.library_id = settings.library_id
        model.dry_run = settings.dry_run
        model.mount_safety = settings.mount_safety
        model.updated_at = utc_now()

        self._session.add(model)
        self._session.commit()
        self._session.refresh(model)
        return self._to_entity(model)
