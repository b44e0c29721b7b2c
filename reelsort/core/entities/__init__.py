"""
Entites du domaine ReelSort.

- LibraryItem : Fichier de la bibliotheque avec son statut de rangement
- Identification : Resultat d'identification TMDB attache a un fichier
- ScanJob : Suivi d'un scan (progression, statistiques, erreurs)
- LibrarySettings : Reglages globaux de la bibliotheque
"""

from reelsort.core.entities.job import (
    JobError,
    JobLogEntry,
    JobStats,
    JobStatus,
    ScanJob,
)
from reelsort.core.entities.library import (
    Identification,
    ItemStatus,
    LibraryItem,
    LibrarySettings,
)

__all__ = [
    "Identification",
    "ItemStatus",
    "JobError",
    "JobLogEntry",
    "JobStats",
    "JobStatus",
    "LibraryItem",
    "LibrarySettings",
    "ScanJob",
]
