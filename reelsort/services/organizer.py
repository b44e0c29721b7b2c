"""
Service de calcul des chemins de destination.

Structure films : {racine}/Movies/Titre (Annee)/Titre (Annee) - Qualite.ext
Structure series : {racine}/TV Shows/Titre/Season SS/Titre - SxxEyy.ext

Fonctions pures et deterministes : les memes entrees donnent toujours
le meme chemin, ce qui rend un rescan idempotent.
"""

import re
from pathlib import Path
from typing import Optional

from reelsort.core.entities import Identification
from reelsort.core.value_objects import MediaType

MOVIES_DIR = "Movies"
TV_SHOWS_DIR = "TV Shows"

# Titre de repli quand le nettoyage ne laisse rien
UNTITLED = "Untitled"

_FORBIDDEN_CHARS = re.compile(r'[<>:"/\\|?*!@#$%^&]')
_WHITESPACE = re.compile(r"\s+")


def sanitize_title(title: Optional[str]) -> str:
    """
    Nettoie un titre pour l'utiliser comme nom de fichier/repertoire.

    Supprime <>:"/\\|?*!@#$%^&, reduit les suites d'espaces a un espace
    et retire les espaces de bord.
    """
    cleaned = _FORBIDDEN_CHARS.sub("", title or "")
    cleaned = _WHITESPACE.sub(" ", cleaned).strip()
    return cleaned or UNTITLED


def format_episode_code(season: Optional[int], episode: Optional[int]) -> str:
    """Code SxxEyy, largeur minimale 2 (S12E100 reste S12E100)."""
    season = 1 if season is None else season
    episode = 1 if episode is None else episode
    return f"S{season:02d}E{episode:02d}"


def build_movie_path(
    library_root: Path,
    identification: Identification,
    quality: Optional[str],
    extension: str,
) -> Path:
    """
    Chemin de destination d'un film.

    Les parentheses d'annee sont omises si l'annee est inconnue ;
    le suffixe " - Qualite" n'est ajoute que si la qualite est connue.
    """
    title = sanitize_title(identification.title)
    base_name = f"{title} ({identification.year})" if identification.year else title
    file_name = f"{base_name} - {quality}" if quality else base_name
    return Path(library_root) / MOVIES_DIR / base_name / f"{file_name}{extension}"


def build_tv_path(
    library_root: Path,
    identification: Identification,
    extension: str,
) -> Path:
    """Chemin de destination d'un episode."""
    title = sanitize_title(identification.title)
    season = 1 if identification.season is None else identification.season
    episode_code = format_episode_code(identification.season, identification.episode)
    return (
        Path(library_root)
        / TV_SHOWS_DIR
        / title
        / f"Season {season:02d}"
        / f"{title} - {episode_code}{extension}"
    )


def canonical_roots(library_root: Path) -> dict[MediaType, Path]:
    """Racines canoniques des fichiers deja ranges, par type."""
    root = Path(library_root)
    return {MediaType.MOVIE: root / MOVIES_DIR, MediaType.TV: root / TV_SHOWS_DIR}


def organized_media_type(path: Path, library_root: Path) -> Optional[MediaType]:
    """
    Type du fichier s'il se trouve deja sous Movies/ ou TV Shows/.

    Returns:
        MediaType.MOVIE, MediaType.TV, ou None si le fichier est ailleurs
    """
    for media_type, root in canonical_roots(library_root).items():
        if Path(path).is_relative_to(root):
            return media_type
    return None


class OrganizerService:
    """
    Construction des chemins de destination (DestinationPathBuilder).

    Sans etat, utilisable comme singleton.
    """

    def build_destination(
        self,
        library_root: Path,
        media_type: MediaType,
        identification: Identification,
        quality: Optional[str],
        extension: str,
    ) -> Path:
        """
        Chemin canonique d'un fichier identifie.

        Args:
            library_root: Racine de la bibliotheque
            media_type: MOVIE ou TV
            identification: Identification retenue
            quality: Qualite extraite du nom de fichier
            extension: Extension d'origine (avec le point)

        Raises:
            ValueError: Si media_type n'est ni MOVIE ni TV
        """
        if media_type is MediaType.MOVIE:
            return build_movie_path(library_root, identification, quality, extension)
        if media_type is MediaType.TV:
            return build_tv_path(library_root, identification, extension)
        raise ValueError(f"Type de media non rangeable : {media_type.value}")
