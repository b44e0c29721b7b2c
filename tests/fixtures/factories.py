"""Fabriques d'objets de test."""

from typing import Optional

from reelsort.core.ports.api_clients import SearchCandidate


def make_candidate(
    id: int = 1,
    title: str = "Movie Name",
    year: Optional[int] = 2024,
    popularity: float = 50.0,
    vote_count: int = 1000,
    original_title: Optional[str] = None,
    poster_path: Optional[str] = "/poster.jpg",
) -> SearchCandidate:
    """Fabrique un SearchCandidate avec des valeurs par defaut raisonnables."""
    return SearchCandidate(
        id=id,
        title=title,
        original_title=original_title if original_title is not None else title,
        year=year,
        popularity=popularity,
        vote_count=vote_count,
        poster_path=poster_path,
        overview="Overview",
        release_date=f"{year}-01-01" if year else None,
    )
