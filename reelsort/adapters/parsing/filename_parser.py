"""
Extraction des metadonnees d'un nom de fichier video par tables de regles.

La qualite suit l'ordre de sa table : la premiere regle qui correspond gagne,
quelle que soit la position du motif (2160p avant 1080p, etc.).
Source et codec retiennent le motif le plus a gauche dans le nom, l'ordre de
la table ne departageant que deux motifs au meme emplacement.

Toutes les recherches sont insensibles a la casse et portent sur le nom
complet, extension comprise.
"""

import re
from typing import Optional

from reelsort.core.ports.parser import IFilenameParser
from reelsort.core.value_objects import FilenameMetadata

# (motif, valeur normalisee), par priorite decroissante
QUALITY_RULES: tuple[tuple[re.Pattern[str], str], ...] = (
    (re.compile(r"\b(?:2160p|4k|uhd)\b", re.IGNORECASE), "2160p"),
    (re.compile(r"\b1080p\b", re.IGNORECASE), "1080p"),
    (re.compile(r"\b720p\b", re.IGNORECASE), "720p"),
    (re.compile(r"\b576p\b", re.IGNORECASE), "576p"),
    (re.compile(r"\b480p\b", re.IGNORECASE), "480p"),
)

SOURCE_RULES: tuple[tuple[re.Pattern[str], str], ...] = (
    (re.compile(r"\bweb-?dl\b", re.IGNORECASE), "WEB-DL"),
    (re.compile(r"\bweb-?rip\b", re.IGNORECASE), "WEBRip"),
    (re.compile(r"\bbluray\b", re.IGNORECASE), "BLURAY"),
    (re.compile(r"\bbdrip\b", re.IGNORECASE), "BDRIP"),
    (re.compile(r"\bbrrip\b", re.IGNORECASE), "BRRIP"),
    (re.compile(r"\bdvdrip\b", re.IGNORECASE), "DVDRIP"),
    (re.compile(r"\bhdrip\b", re.IGNORECASE), "HDRIP"),
    (re.compile(r"\bhdts\b", re.IGNORECASE), "HDTS"),
    (re.compile(r"\bcam\b", re.IGNORECASE), "CAM"),
)

CODEC_RULES: tuple[tuple[re.Pattern[str], str], ...] = tuple(
    (re.compile(rf"\b{codec}\b", re.IGNORECASE), codec.upper())
    for codec in ("x264", "x265", "hevc", "h264", "h265", "av1")
)

YEAR_PATTERN = re.compile(r"\b(?:19|20)\d{2}\b")

# S01E02, s1 e2, Season 1 Episode 2, S01.Something.E02
SEASON_EPISODE_PATTERN = re.compile(
    r"\b(?:s|season)\s*(\d{1,4})[^0-9]*?(?:e|x|episode)\s*(\d{1,4})\b",
    re.IGNORECASE,
)
# 1x02
CROSS_EPISODE_PATTERN = re.compile(r"\b(\d{1,4})x(\d{1,4})\b", re.IGNORECASE)

# Jetons retires (remplaces par un espace) pour obtenir le titre nettoye
TITLE_NOISE_PATTERNS: tuple[re.Pattern[str], ...] = (
    YEAR_PATTERN,
    re.compile(r"\b(?:2160p|1080p|720p|576p|480p|4k|uhd)\b", re.IGNORECASE),
    re.compile(
        r"\b(?:web-?dl|web-?rip|bluray|bdrip|brrip|dvdrip|hdrip|hdts|cam)\b",
        re.IGNORECASE,
    ),
    re.compile(
        r"\b(?:x264|x265|hevc|h264|h265|av1|aac|ac3|dts|dd5\.1)\b", re.IGNORECASE
    ),
    SEASON_EPISODE_PATTERN,
    CROSS_EPISODE_PATTERN,
    re.compile(r"\[.*?\]"),
    re.compile(r"\(.*?\)"),
    re.compile(r"[._\-]"),
)

_WHITESPACE = re.compile(r"\s+")


def _first_rule_match(
    rules: tuple[tuple[re.Pattern[str], str], ...], text: str
) -> Optional[str]:
    """Retourne la valeur de la premiere regle qui correspond."""
    for pattern, value in rules:
        if pattern.search(text):
            return value
    return None


def _leftmost_rule_match(
    rules: tuple[tuple[re.Pattern[str], str], ...], text: str
) -> Optional[str]:
    """Retourne la valeur du motif trouve le plus tot dans le texte."""
    best: Optional[tuple[int, int, str]] = None
    for rank, (pattern, value) in enumerate(rules):
        match = pattern.search(text)
        if match and (best is None or (match.start(), rank) < best[:2]):
            best = (match.start(), rank, value)
    return best[2] if best else None


def extract_quality(filename: str) -> Optional[str]:
    """Resolution la plus haute presente dans le nom."""
    return _first_rule_match(QUALITY_RULES, filename)


def extract_year(filename: str) -> Optional[int]:
    """Premiere annee 19xx/20xx isolee dans le nom."""
    match = YEAR_PATTERN.search(filename)
    return int(match.group(0)) if match else None


def extract_source(filename: str) -> Optional[str]:
    """Source de la release (WEB-DL, WEBRip, BLURAY...)."""
    return _leftmost_rule_match(SOURCE_RULES, filename)


def extract_codec(filename: str) -> Optional[str]:
    """Codec video en majuscules."""
    return _leftmost_rule_match(CODEC_RULES, filename)


def extract_season_episode(filename: str) -> tuple[Optional[int], Optional[int]]:
    """
    Detecte un marqueur saison/episode.

    Returns:
        (saison, episode), ou (None, None) si le nom ne ressemble pas a un episode
    """
    match = SEASON_EPISODE_PATTERN.search(filename) or CROSS_EPISODE_PATTERN.search(
        filename
    )
    if match is None:
        return None, None
    return int(match.group(1)), int(match.group(2))


def extract_clean_title(filename: str) -> str:
    """
    Derive un titre de recherche lisible.

    Retire l'extension puis remplace annee, qualite, source, codecs audio/video,
    marqueurs saison/episode, groupes entre crochets ou parentheses et
    separateurs par des espaces.
    """
    stem = filename.rpartition(".")[0] or filename
    for pattern in TITLE_NOISE_PATTERNS:
        stem = pattern.sub(" ", stem)
    return _WHITESPACE.sub(" ", stem).strip()


def parse_filename(filename: str) -> FilenameMetadata:
    """
    Extrait toutes les metadonnees d'un nom de fichier.

    Fonction totale : un nom vide ou illisible donne un FilenameMetadata vide.

    Args:
        filename: Nom du fichier (ex: "Movie.Name.2024.1080p.WEBRip.x265.mkv")

    Returns:
        FilenameMetadata avec les champs detectes
    """
    if not filename:
        return FilenameMetadata()

    season, episode = extract_season_episode(filename)
    return FilenameMetadata(
        quality=extract_quality(filename),
        year=extract_year(filename),
        source=extract_source(filename),
        codec=extract_codec(filename),
        clean_title=extract_clean_title(filename),
        is_tv=season is not None,
        season=season,
        episode=episode,
    )


class RegexFilenameParser(IFilenameParser):
    """
    Implementation de IFilenameParser par tables de regles.

    Sans etat, utilisable comme singleton.
    """

    def parse(self, filename: str) -> FilenameMetadata:
        """Voir parse_filename()."""
        return parse_filename(filename)
