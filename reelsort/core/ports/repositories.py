"""
Interfaces ports pour les repositories.

Interfaces abstraites (ports) definissant les contrats du magasin de donnees
partage : reglages, fichiers de la bibliotheque et scans. Le coeur ne pose
aucun verrou ; il s'appuie sur l'atomicite de chaque ecriture du magasin.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional

from reelsort.core.entities import (
    ItemStatus,
    LibraryItem,
    LibrarySettings,
    ScanJob,
)


class ISettingsRepository(ABC):
    """Stockage des reglages globaux de la bibliotheque."""

    @abstractmethod
    def get(self) -> Optional[LibrarySettings]:
        """Retourne les reglages, ou None s'ils n'ont jamais ete enregistres."""
        ...

    @abstractmethod
    def save(self, settings: LibrarySettings) -> LibrarySettings:
        """Enregistre les reglages (insertion ou mise a jour)."""
        ...


class ILibraryItemRepository(ABC):
    """
    Stockage des fichiers de la bibliotheque.

    Garantit un seul enregistrement par chemin effectif.
    """

    @abstractmethod
    def get_by_path(self, path: Path) -> Optional[LibraryItem]:
        """Recupere un fichier par son chemin effectif."""
        ...

    @abstractmethod
    def upsert(self, item: LibraryItem) -> LibraryItem:
        """Insere ou met a jour l'enregistrement du chemin effectif de l'item."""
        ...

    @abstractmethod
    def mark_organized(self, previous_path: Path, item: LibraryItem) -> LibraryItem:
        """
        Re-indexe un fichier range sur son chemin de destination.

        Supprime l'enregistrement non range de previous_path et insere/met
        a jour celui de la destination dans la meme transaction.
        """
        ...

    @abstractmethod
    def list_by_status(
        self, status: ItemStatus, library_id: Optional[str] = None
    ) -> list[LibraryItem]:
        """Liste les fichiers d'un statut donne."""
        ...


class IScanJobRepository(ABC):
    """Stockage des scans."""

    @abstractmethod
    def create_if_none_running(self, job: ScanJob) -> Optional[ScanJob]:
        """
        Insere le scan si aucun autre n'est en cours, en une seule operation.

        Retourne :
            Le scan enregistre, ou None si un scan est deja en cours
        """
        ...

    @abstractmethod
    def get_by_id(self, job_id: int) -> Optional[ScanJob]:
        """Recupere un scan par son ID."""
        ...

    @abstractmethod
    def get_running(self) -> Optional[ScanJob]:
        """Retourne le scan en cours, s'il existe."""
        ...

    @abstractmethod
    def get_latest(self) -> Optional[ScanJob]:
        """Retourne le scan le plus recent."""
        ...

    @abstractmethod
    def save_progress(self, job: ScanJob) -> None:
        """Ecrit statut, compteurs, progression et date de fin."""
        ...
