"""
Objets valeur pour les informations de parsing de noms de fichiers.

Objets valeur immutables representant les informations extraites
d'un nom de fichier video et les fichiers decouverts par le crawl.
"""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional


class MediaType(Enum):
    """Type de media d'un fichier de la bibliotheque.

    Valeurs:
        MOVIE: Film
        TV: Episode de serie TV
        UNKNOWN: Type non determine (fichier non identifie)
    """

    MOVIE = "movie"
    TV = "tv"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class FilenameMetadata:
    """
    Informations extraites du parsing d'un nom de fichier video.

    Tous les champs sont optionnels : un nom illisible produit un objet
    vide (clean_title == "") plutot qu'une exception.

    Attributs:
        quality: Resolution ("2160p", "1080p", "720p", "576p", "480p")
        year: Annee entre 1900 et 2099
        source: Source normalisee (ex: "WEB-DL", "WEBRip", "BLURAY")
        codec: Codec video en majuscules (ex: "X265", "HEVC")
        clean_title: Titre lisible, sans tags ni separateurs
        is_tv: True si un motif saison/episode a ete trouve
        season: Numero de saison
        episode: Numero d'episode
    """

    quality: Optional[str] = None
    year: Optional[int] = None
    source: Optional[str] = None
    codec: Optional[str] = None
    clean_title: str = ""
    is_tv: bool = False
    season: Optional[int] = None
    episode: Optional[int] = None

    @property
    def media_type(self) -> MediaType:
        """Type de recherche a effectuer (TV si saison/episode detectes)."""
        return MediaType.TV if self.is_tv else MediaType.MOVIE


@dataclass(frozen=True)
class FileCandidate:
    """
    Fichier video decouvert lors du parcours de la bibliotheque.

    Attributs:
        path: Chemin absolu du fichier
        filename: Nom du fichier (avec extension)
        extension: Extension avec le point, casse d'origine (ex: ".mkv")
    """

    path: Path
    filename: str
    extension: str

    @classmethod
    def from_path(cls, path: Path) -> "FileCandidate":
        """Construit un candidat a partir d'un chemin."""
        return cls(path=path, filename=path.name, extension=path.suffix)
