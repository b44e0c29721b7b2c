"""
Client du service de recherche de titres (TMDB).

- TMDBClient : implementation de ITitleSearchClient
- APICache : cache persistant des recherches (24h)
- RateLimitError / request_with_retry : retry avec backoff sur 429
"""

from reelsort.adapters.api.cache import APICache
from reelsort.adapters.api.retry import RateLimitError, request_with_retry, with_retry
from reelsort.adapters.api.tmdb_client import TMDBClient

__all__ = [
    "APICache",
    "RateLimitError",
    "TMDBClient",
    "request_with_retry",
    "with_retry",
]
