"""
Cache persistant des recherches TMDB.

Le cache utilise diskcache pour conserver les resultats entre deux scans :
un rescan de la bibliotheque ne renvoie pas les memes requetes a TMDB.
"""

import asyncio
from functools import partial
from typing import Any, Optional

from diskcache import Cache


class APICache:
    """
    Cache asynchrone avec TTL pour les appels API.

    Utilise diskcache pour la persistence et run_in_executor pour
    ne pas bloquer la boucle d'evenements.

    Attributes:
        SEARCH_TTL: Duree de vie des resultats de recherche (24h)
    """

    SEARCH_TTL = 24 * 60 * 60

    def __init__(self, cache_dir: str = ".cache/api") -> None:
        self._cache = Cache(str(cache_dir))

    async def get(self, key: str) -> Optional[Any]:
        """Recupere une valeur, ou None si absente ou expiree."""
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, self._cache.get, key)

    async def set_search(self, key: str, value: Any) -> None:
        """Stocke un resultat de recherche (TTL de 24h)."""
        loop = asyncio.get_running_loop()
        await loop.run_in_executor(
            None, partial(self._cache.set, key, value, expire=self.SEARCH_TTL)
        )

    async def clear(self) -> None:
        """Supprime toutes les entrees du cache."""
        loop = asyncio.get_running_loop()
        await loop.run_in_executor(None, self._cache.clear)

    def close(self) -> None:
        """Ferme la connexion au cache."""
        self._cache.close()
