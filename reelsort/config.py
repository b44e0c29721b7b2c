"""
Configuration de l'application via pydantic-settings.

La configuration est chargee depuis les variables d'environnement avec le prefixe REELSORT_,
et peut optionnellement etre fournie via un fichier .env.

Les reglages de la bibliotheque (racine, mode copie, cle TMDB) ne sont pas ici :
ils sont stockes en base (table library_settings) et modifies via `reelsort configure`.
"""

from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Trouver le fichier .env a la racine du projet (parent de reelsort/)
_PROJECT_ROOT = Path(__file__).parent.parent
_ENV_FILE = _PROJECT_ROOT / ".env"


class Settings(BaseSettings):
    """Parametres du processus avec support des variables d'environnement.

    Tous les parametres peuvent etre surcharges via des variables d'environnement
    avec le prefixe REELSORT_.
    Exemple : REELSORT_SCAN_REQUEST_DELAY=0.5

    Les chemins sont automatiquement etendus (~ -> repertoire home).
    """

    model_config = SettingsConfigDict(
        env_prefix="REELSORT_",
        env_file=_ENV_FILE if _ENV_FILE.exists() else ".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Base de donnees
    database_url: str = Field(default="sqlite:///reelsort.db")

    # TMDB
    tmdb_language: str = Field(default="en-US")
    tmdb_timeout: float = Field(default=30.0, gt=0)
    cache_dir: Path = Field(default=Path(".cache/api"))

    # Scan
    scan_request_delay: float = Field(default=0.2, ge=0)
    progress_flush_interval: int = Field(default=5, ge=1)

    # Logging (fichier + stderr, rotation 10MB, 5 fichiers de retention)
    log_level: str = Field(default="INFO")
    log_file: Path = Field(default=Path("logs/reelsort.log"))
    log_rotation_size: str = Field(default="10 MB")
    log_retention_count: int = Field(default=5)

    @field_validator("cache_dir", "log_file", mode="before")
    @classmethod
    def expand_path(cls, v: str | Path) -> Path:
        """Etend ~ vers le repertoire home dans les chemins."""
        return Path(v).expanduser()
