"""
Fonctions utilitaires partagees dans le projet ReelSort.

- utc_now : horodatage courant, toujours en UTC avec fuseau
- as_utc : rattache UTC a une date relue sans fuseau (SQLite n'en stocke pas)
"""

from datetime import datetime, timezone
from typing import Optional


def utc_now() -> datetime:
    """Date et heure courantes en UTC (datetime avec fuseau)."""
    return datetime.now(timezone.utc)


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """
    Normalise une date relue de la base.

    Une date sans fuseau est consideree comme UTC, une date avec fuseau
    est convertie en UTC.
    """
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)
