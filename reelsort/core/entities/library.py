"""
Entites de la bibliotheque.

Un LibraryItem est indexe par son chemin effectif : le chemin source tant
que le fichier n'est pas range, le chemin de destination une fois range.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Any, Optional

from reelsort.core.value_objects import MediaType


class ItemStatus(Enum):
    """Statut de rangement d'un fichier."""

    ORGANIZED = "organized"
    UNCATEGORIZED = "uncategorized"


# Sous-statut d'un fichier non range suite a un echec de rangement
SUB_STATUS_ERROR = "error"


@dataclass(frozen=True)
class Identification:
    """
    Identification TMDB retenue pour un fichier.

    Attributs :
        id : ID TMDB
        title : Titre affiche
        year : Annee de sortie/premiere diffusion
        poster_path : Chemin relatif du poster TMDB
        overview : Resume
        season : Saison (series uniquement, reprise du nom de fichier)
        episode : Episode (series uniquement, reprise du nom de fichier)
    """

    id: int
    title: str
    year: Optional[int] = None
    poster_path: Optional[str] = None
    overview: Optional[str] = None
    season: Optional[int] = None
    episode: Optional[int] = None

    def to_dict(self) -> dict[str, Any]:
        """Representation stockee (cles camelCase du format historique)."""
        return {
            "id": self.id,
            "title": self.title,
            "year": self.year,
            "posterPath": self.poster_path,
            "overview": self.overview,
            "season": self.season,
            "episode": self.episode,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Identification":
        """Reconstruit une identification depuis sa representation stockee."""
        return cls(
            id=data["id"],
            title=data["title"],
            year=data.get("year"),
            poster_path=data.get("posterPath"),
            overview=data.get("overview"),
            season=data.get("season"),
            episode=data.get("episode"),
        )


@dataclass
class LibraryItem:
    """
    Fichier video suivi par la bibliotheque.

    Attributs :
        id : Identifiant base de donnees
        source_path : Chemin du fichier au moment du scan
        destination_path : Chemin de destination (range ou prevu)
        media_type : movie, tv ou unknown
        status : organized ou uncategorized
        sub_status : "error" quand un rangement automatique a echoue
        reason : Raison du rejet d'identification ou message d'erreur
        action : Action effectuee (move, copy, skip, error, dry-move, dry-copy)
        identification : Resultat TMDB (si identifie)
        quality, source, codec : Metadonnees extraites du nom
        library_id : Identifiant de la bibliotheque
        job_id : Scan ayant produit l'enregistrement
    """

    source_path: Path
    destination_path: Optional[Path] = None
    media_type: MediaType = MediaType.UNKNOWN
    status: ItemStatus = ItemStatus.UNCATEGORIZED
    sub_status: Optional[str] = None
    reason: Optional[str] = None
    action: str = "skip"
    identification: Optional[Identification] = None
    quality: Optional[str] = None
    source: Optional[str] = None
    codec: Optional[str] = None
    library_id: Optional[str] = None
    job_id: Optional[int] = None
    id: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def effective_path(self) -> Path:
        """Chemin qui indexe l'enregistrement."""
        if self.status is ItemStatus.ORGANIZED and self.destination_path is not None:
            return self.destination_path
        return self.source_path


@dataclass
class LibrarySettings:
    """
    Reglages globaux de la bibliotheque, lus en lecture seule par le scan.

    Attributs :
        library_root : Racine absolue de la bibliotheque
        is_copy_mode : Copier au lieu de deplacer
        tmdb_api_key : Cle TMDB (v3) ou token (v4)
        library_id : Identifiant reporte sur chaque fichier
        dry_run : Mode simulation par defaut
        mount_safety : Verifier que la racine reste sur le meme volume pendant le scan
    """

    library_root: Optional[Path] = None
    is_copy_mode: bool = False
    tmdb_api_key: Optional[str] = None
    library_id: Optional[str] = None
    dry_run: bool = False
    mount_safety: bool = True
