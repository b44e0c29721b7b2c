"""
Modeles SQLModel pour la base de donnees ReelSort.

Ces modeles representent les tables SQLite. Ils sont distincts des entites
de domaine (dataclass dans core/entities/) ; la conversion se fait dans
les repositories.

Tables:
- library_settings: Reglages globaux (une seule ligne, id "global")
- library_items: Fichiers de la bibliotheque, uniques par chemin effectif
- scan_jobs: Scans et leur progression

Les champs *_json stockent des structures serialisees en JSON.
Les dates sont ecrites en UTC avec fuseau.
"""

import json
from datetime import datetime
from typing import Any, Optional

from sqlalchemy import DateTime
from sqlmodel import Field, SQLModel

from reelsort.utils.helpers import utc_now

GLOBAL_SETTINGS_ID = "global"


class LibrarySettingsModel(SQLModel, table=True):
    """Reglages globaux de la bibliotheque."""

    __tablename__ = "library_settings"

    id: str = Field(default=GLOBAL_SETTINGS_ID, primary_key=True)
    library_root: str | None = None
    is_copy_mode: bool = False
    tmdb_api_key: str | None = None
    library_id: str | None = None
    dry_run: bool = False
    mount_safety: bool = True
    updated_at: datetime | None = Field(
        default_factory=utc_now, sa_type=DateTime(timezone=True)
    )


class LibraryItemModel(SQLModel, table=True):
    """
    Fichier de la bibliotheque.

    path est le chemin effectif (source tant que non range, destination
    une fois range) : la contrainte d'unicite garantit un seul
    enregistrement par chemin.
    """

    __tablename__ = "library_items"

    id: int | None = Field(default=None, primary_key=True)
    path: str = Field(unique=True, index=True)
    source_path: str
    destination_path: str | None = None
    media_type: str = Field(default="unknown", index=True)
    status: str = Field(default="uncategorized", index=True)
    sub_status: str | None = None
    reason: str | None = None
    action: str = "skip"
    identification_json: str | None = None
    quality: str | None = None
    source: str | None = None
    codec: str | None = None
    library_id: str | None = Field(default=None, index=True)
    job_id: int | None = Field(default=None, index=True)
    created_at: datetime | None = Field(
        default_factory=utc_now, sa_type=DateTime(timezone=True)
    )
    updated_at: datetime | None = Field(
        default_factory=utc_now, sa_type=DateTime(timezone=True)
    )

    @property
    def identification(self) -> Optional[dict[str, Any]]:
        """Retourne l'identification deserialisee."""
        if self.identification_json:
            return json.loads(self.identification_json)
        return None


class ScanJobModel(SQLModel, table=True):
    """
    Scan de la bibliotheque.

    running_lock vaut 1 tant que le scan est en cours et NULL ensuite.
    L'index unique (les NULL ne sont pas compares) interdit deux scans
    en cours : l'insertion du second echoue de maniere atomique.
    """

    __tablename__ = "scan_jobs"

    id: int | None = Field(default=None, primary_key=True)
    status: str = Field(default="running", index=True)
    running_lock: int | None = Field(default=None, unique=True)
    total_files: int = 0
    processed_files: int = 0
    stats_json: str | None = None  # JSON: {"movies": 0, "tv": 0, ...}
    errors_json: str | None = None  # JSON: [{"path": ..., "error": ...}]
    logs_json: str | None = None  # JSON: [{"ts": ..., "message": ...}]
    dry_run: bool = False
    started_at: datetime = Field(default_factory=utc_now, sa_type=DateTime(timezone=True))
    finished_at: datetime | None = Field(default=None, sa_type=DateTime(timezone=True))

    @property
    def stats(self) -> dict[str, int]:
        """Retourne les compteurs deserialises."""
        if self.stats_json:
            return json.loads(self.stats_json)
        return {}

    @property
    def errors(self) -> list[dict[str, str]]:
        """Retourne les erreurs deserialisees."""
        if self.errors_json:
            return json.loads(self.errors_json)
        return []


    @property
    def logs(self) -> list[dict[str, str]]:
        """Retourne le journal deserialise."""
        if self.logs_json:
            return json.loads(self.logs_json)
        return []
