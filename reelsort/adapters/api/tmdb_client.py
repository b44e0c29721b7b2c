"""
Client TMDB pour la recherche de films et de series.

Implemente l'interface ITitleSearchClient pour TMDB (The Movie Database).
Utilise le cache persistant et le mecanisme de retry pour gerer
le rate limiting. Toute erreur reseau ou reponse non-2xx est convertie
en ExternalServiceError.

Usage:
    client = TMDBClient(api_key="your_key", cache=APICache())
    candidates = await client.search("Avatar", MediaType.MOVIE, year=2009)
    await client.close()
"""

from typing import Any, Optional

import httpx
from loguru import logger

from reelsort.adapters.api.cache import APICache
from reelsort.adapters.api.retry import RateLimitError, request_with_retry
from reelsort.core.exceptions import ExternalServiceError
from reelsort.core.ports.api_clients import (
    ITitleSearchClient,
    KeyCheckResult,
    SearchCandidate,
)
from reelsort.core.value_objects import MediaType

TMDB_BASE_URL = "https://api.themoviedb.org/3"


def _is_v4_token(api_key: str) -> bool:
    """Une cle v3 fait 32 caracteres hex, un token v4 est un long JWT."""
    return len(api_key) > 40


def _auth(api_key: str) -> tuple[dict[str, str], dict[str, str]]:
    """Headers et parametres d'authentification selon le type de cle."""
    headers = {"Accept": "application/json"}
    params: dict[str, str] = {}
    if _is_v4_token(api_key):
        headers["Authorization"] = f"Bearer {api_key}"
    else:
        params["api_key"] = api_key
    return headers, params


def _year_from_date(date: Optional[str]) -> Optional[int]:
    """Annee d'une date YYYY-MM-DD ; None si absente ou illisible."""
    if not date:
        return None
    head = date.split("-")[0]
    return int(head) if head.isdigit() else None


class TMDBClient(ITitleSearchClient):
    """
    Client API TMDB.

    - Recherche /search/movie ou /search/tv (contenu adulte exclu)
    - Filtre annee : year (films) ou first_air_date_year (series)
    - Cache persistant des recherches (24h), optionnel
    - Retry automatique sur rate limiting (429)
    """

    def __init__(
        self,
        api_key: str,
        cache: Optional[APICache] = None,
        language: str = "en-US",
        timeout: float = 30.0,
    ) -> None:
        """
        Initialise le client TMDB.

        Args:
            api_key: Cle API TMDB v3 ou Read Access Token v4
            cache: Cache des recherches (None pour desactiver)
            language: Langue des titres retournes
            timeout: Timeout HTTP en secondes
        """
        self._api_key = api_key
        self._cache = cache
        self._language = language
        self._timeout = timeout
        self._client: Optional[httpx.AsyncClient] = None

    def _get_client(self) -> httpx.AsyncClient:
        """Retourne le client HTTP, le cree si necessaire (lazy init)."""
        if self._client is None or self._client.is_closed:
            headers, params = _auth(self._api_key)
            self._client = httpx.AsyncClient(
                base_url=TMDB_BASE_URL,
                headers=headers,
                params=params,
                timeout=self._timeout,
            )
        return self._client

    async def search(
        self,
        query: str,
        media_type: MediaType,
        year: Optional[int] = None,
    ) -> list[SearchCandidate]:
        """
        Recherche des films ou series par titre.

        Utilise le pattern cache-first.

        Args:
            query: Titre a rechercher
            media_type: MediaType.TV pour /search/tv, sinon /search/movie
            year: Annee optionnelle pour filtrer

        Returns:
            Liste de SearchCandidate dans l'ordre TMDB (vide si aucun resultat)

        Raises:
            ExternalServiceError: Erreur reseau, reponse non-2xx ou JSON invalide
        """
        is_tv = media_type is MediaType.TV
        endpoint = "/search/tv" if is_tv else "/search/movie"
        cache_key = f"tmdb:search:{endpoint}:{self._language}:{year}:{query.lower()}"

        if self._cache is not None:
            cached = await self._cache.get(cache_key)
            if cached is not None:
                return cached

        params: dict[str, Any] = {
            "query": query,
            "include_adult": "false",
            "page": 1,
            "language": self._language,
        }
        if year:
            params["first_air_date_year" if is_tv else "year"] = year

        data = await self._get_json(endpoint, params)

        candidates = [
            self._to_candidate(item, is_tv) for item in data.get("results") or []
        ]
        logger.debug(f"TMDB {endpoint} '{query}' ({year}) : {len(candidates)} resultat(s)")

        if self._cache is not None:
            await self._cache.set_search(cache_key, candidates)

        return candidates

    async def _get_json(self, url: str, params: dict[str, Any]) -> dict[str, Any]:
        """GET avec retry, conversion des erreurs en ExternalServiceError."""
        client = self._get_client()
        try:
            response = await request_with_retry(client, "GET", url, params=params)
            return response.json()
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            raise ExternalServiceError(f"TMDB Error {status}", status_code=status) from e
        except RateLimitError as e:
            raise ExternalServiceError(str(e), status_code=429) from e
        except httpx.HTTPError as e:
            raise ExternalServiceError(str(e) or type(e).__name__) from e
        except ValueError as e:
            raise ExternalServiceError(f"Invalid TMDB response: {e}") from e

    @staticmethod
    def _to_candidate(item: dict[str, Any], is_tv: bool) -> SearchCandidate:
        """Transforme un resultat brut TMDB en SearchCandidate."""
        if is_tv:
            title = item.get("name") or ""
            original_title = item.get("original_name")
            date = item.get("first_air_date")
        else:
            title = item.get("title") or ""
            original_title = item.get("original_title")
            date = item.get("release_date")

        return SearchCandidate(
            id=int(item["id"]),
            title=title,
            original_title=original_title,
            year=_year_from_date(date),
            popularity=float(item.get("popularity") or 0.0),
            vote_count=int(item.get("vote_count") or 0),
            poster_path=item.get("poster_path"),
            overview=item.get("overview"),
            release_date=date or None,
        )

    async def close(self) -> None:
        """Ferme le client HTTP."""
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
        self._client = None


async def check_api_key(api_key: Optional[str], timeout: float = 10.0) -> KeyCheckResult:
    """
    Verifie une cle TMDB via l'endpoint /configuration.

    Args:
        api_key: Cle v3 ou token v4 a verifier
        timeout: Timeout HTTP en secondes

    Returns:
        KeyCheckResult : VALID (2xx), INVALID (4xx ou cle vide),
        FAILED (erreur reseau ou 5xx)
    """
    if not api_key:
        return KeyCheckResult(
            ok=False, status="INVALID", key_type=None, http_status=None,
            message="Missing API Key",
        )

    key_type = "v4" if _is_v4_token(api_key) else "v3"
    headers, params = _auth(api_key)
    try:
        async with httpx.AsyncClient(
            base_url=TMDB_BASE_URL, headers=headers, params=params, timeout=timeout
        ) as client:
            response = await client.get("/configuration")
    except httpx.HTTPError as e:
        return KeyCheckResult(
            ok=False, status="FAILED", key_type=key_type, http_status=None,
            message=f"Connection failed: {e}",
        )

    status_code = response.status_code
    if response.is_success:
        return KeyCheckResult(
            ok=True, status="VALID", key_type=key_type, http_status=status_code,
            message="Connection Successful",
        )
    if status_code >= 500:
        return KeyCheckResult(
            ok=False, status="FAILED", key_type=key_type, http_status=status_code,
            message=f"TMDB Error {status_code}",
        )
    return KeyCheckResult(
        ok=False, status="INVALID", key_type=key_type, http_status=status_code,
        message="Invalid API key" if status_code in (401, 403) else f"TMDB Error {status_code}",
    )
