"""
Score de similarite entre deux titres.

Les titres sont normalises (minuscules, seuls [a-z0-9] conserves) puis
compares par distance d'edition classique (insertion, suppression,
substitution a cout 1) calculee par rapidfuzz.

score = (longueur_max - distance) / longueur_max, dans [0, 1], symetrique.
"""

import re

from rapidfuzz.distance import Levenshtein

_NON_ALNUM = re.compile(r"[^a-z0-9]")


def normalize(text: str | None) -> str:
    """Minuscules et suppression de tout caractere hors [a-z0-9]."""
    if not text:
        return ""
    return _NON_ALNUM.sub("", text.lower())


def distance(a: str | None, b: str | None) -> int:
    """Distance d'edition entre les formes normalisees de a et b."""
    return Levenshtein.distance(normalize(a), normalize(b))


def score(a: str | None, b: str | None) -> float:
    """
    Similarite entre deux titres.

    - 1.0 si les deux formes normalisees sont vides
    - 0.0 si une seule des deux est vide

    Args:
        a: Premier titre
        b: Second titre

    Returns:
        Score entre 0.0 et 1.0
    """
    norm_a = normalize(a)
    norm_b = normalize(b)
    if not norm_a and not norm_b:
        return 1.0
    if not norm_a or not norm_b:
        return 0.0

    longest = max(len(norm_a), len(norm_b))
    return (longest - Levenshtein.distance(norm_a, norm_b)) / longest
