"""
Entite de suivi d'un scan.

Machine a etats : running -> completed | failed.
Aucune transition ne sort d'un etat terminal et processed_files ne decroit jamais.
"""

from dataclasses import asdict, dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional

from reelsort.core.exceptions import InvalidJobTransitionError
from reelsort.utils.helpers import utc_now


class JobStatus(Enum):
    """Etat d'un scan."""

    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self is not JobStatus.RUNNING


@dataclass
class JobStats:
    """Compteurs par categorie de resultat."""

    movies: int = 0
    tv: int = 0
    uncategorized: int = 0
    errors: int = 0

    def to_dict(self) -> dict[str, int]:
        return asdict(self)


@dataclass(frozen=True)
class JobError:
    """Erreur rattachee a un fichier (ou a la racine pour un echec global)."""

    path: str
    error: str

    def to_dict(self) -> dict[str, str]:
        return {"path": self.path, "error": self.error}


@dataclass(frozen=True)
class JobLogEntry:
    """Ligne du journal d'un scan, lisible par l'operateur."""

    ts: datetime
    message: str

    def to_dict(self) -> dict[str, str]:
        return {"ts": self.ts.isoformat(), "message": self.message}

    @classmethod
    def from_dict(cls, data: dict[str, str]) -> "JobLogEntry":
        return cls(ts=datetime.fromisoformat(data["ts"]), message=data["message"])


@dataclass
class ScanJob:
    """
    Scan de la bibliotheque et sa progression.

    Attributs :
        id : Identifiant base de donnees
        status : Etat courant
        total_files : Nombre de fichiers decouverts par le crawl
        processed_files : Nombre de fichiers traites
        stats : Compteurs movies/tv/uncategorized/errors
        errors : Erreurs rencontrees (chemin + message)
        logs : Journal horodate des etapes du scan
        dry_run : Scan en mode simulation
        started_at : Debut du scan
        finished_at : Fin du scan (renseigne a l'etat terminal)
    """

    id: Optional[int] = None
    status: JobStatus = JobStatus.RUNNING
    total_files: int = 0
    processed_files: int = 0
    stats: JobStats = field(default_factory=JobStats)
    errors: list[JobError] = field(default_factory=list)
    logs: list[JobLogEntry] = field(default_factory=list)
    dry_run: bool = False
    started_at: datetime = field(default_factory=utc_now)
    finished_at: Optional[datetime] = None

    def advance(self, processed_files: int) -> None:
        """Met a jour la progression sans jamais la faire reculer."""
        self._ensure_running()
        self.processed_files = max(self.processed_files, processed_files)

    def add_error(self, path: str, message: str) -> JobError:
        """Ajoute une erreur et incremente le compteur d'erreurs."""
        error = JobError(path=path, error=message)
        self.errors.append(error)
        self.stats.errors += 1
        return error

    def log(self, message: str) -> JobLogEntry:
        """Ajoute une ligne horodatee au journal du scan."""
        entry = JobLogEntry(ts=utc_now(), message=message)
        self.logs.append(entry)
        return entry

    def complete(self) -> None:
        """Termine le scan normalement."""
        self._finish(JobStatus.COMPLETED)

    def fail(self) -> None:
        """Termine le scan en echec (precondition non satisfaite)."""
        self._finish(JobStatus.FAILED)

    def _finish(self, status: JobStatus) -> None:
        self._ensure_running()
        self.status = status
        self.finished_at = utc_now()

    def _ensure_running(self) -> None:
        if self.status.is_terminal:
            raise InvalidJobTransitionError(
                f"Le scan {self.id} est deja termine ({self.status.value})"
            )
