"""
Relance des requetes TMDB limitees par le serveur (HTTP 429).

Le rythme normal des requetes est fixe par le scan (pause constante entre
deux fichiers) ; ce module ne couvre que les depassements signales par
TMDB. L'attente respecte le header Retry-After quand il est present
(nombre de secondes ou date HTTP), sinon un backoff exponentiel avec jitter.
"""

from datetime import datetime, timezone
from email.utils import parsedate_to_datetime
from typing import Optional

import httpx
from loguru import logger
from tenacity import (
    RetryCallState,
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_random_exponential,
)


class RateLimitError(Exception):
    """
    Reponse 429 Too Many Requests.

    Attributes:
        retry_after: Secondes a attendre indiquees par le serveur, ou None
    """

    def __init__(self, retry_after: Optional[float] = None) -> None:
        self.retry_after = retry_after
        super().__init__(f"Rate limited. Retry after: {retry_after}s")


def parse_retry_after(value: Optional[str]) -> Optional[float]:
    """
    Interprete un header Retry-After.

    Args:
        value: "120" ou "Wed, 21 Oct 2015 07:28:00 GMT"

    Returns:
        Delai en secondes (jamais negatif), ou None si absent ou illisible
    """
    if not value:
        return None
    value = value.strip()
    try:
        return max(float(value), 0.0)
    except ValueError:
        pass

    try:
        when = parsedate_to_datetime(value)
    except (TypeError, ValueError):
        logger.debug(f"Retry-After illisible ignore : {value!r}")
        return None
    if when.tzinfo is None:
        when = when.replace(tzinfo=timezone.utc)
    return max((when - datetime.now(timezone.utc)).total_seconds(), 0.0)


def _server_or_backoff_wait(max_wait: int):
    """Delai du serveur s'il est connu, sinon backoff exponentiel, borne par max_wait."""
    backoff = wait_random_exponential(multiplier=1, min=1, max=max_wait)

    def wait(retry_state: RetryCallState) -> float:
        error = retry_state.outcome.exception() if retry_state.outcome else None
        if isinstance(error, RateLimitError) and error.retry_after is not None:
            return min(error.retry_after, max_wait)
        return backoff(retry_state)

    return wait


def _log_retry(retry_state: RetryCallState) -> None:
    delay = retry_state.next_action.sleep if retry_state.next_action else 0
    logger.warning(
        f"TMDB limite le debit, tentative {retry_state.attempt_number} "
        f"relancee dans {delay:.1f}s"
    )


def with_retry(max_attempts: int = 5, max_wait: int = 60):
    """
    Decorateur de relance sur RateLimitError.

    Args:
        max_attempts: Nombre maximum de tentatives
        max_wait: Attente maximale entre deux tentatives, en secondes
    """
    return retry(
        retry=retry_if_exception_type(RateLimitError),
        wait=_server_or_backoff_wait(max_wait),
        stop=stop_after_attempt(max_attempts),
        before_sleep=_log_retry,
        reraise=True,
    )


async def request_with_retry(
    client: httpx.AsyncClient,
    method: str,
    url: str,
    max_attempts: int = 5,
    **kwargs,
) -> httpx.Response:
    """
    Requete HTTP relancee tant que TMDB repond 429.

    Raises:
        RateLimitError: 429 persistant apres max_attempts tentatives
        httpx.HTTPStatusError: Toute autre reponse non-2xx, sans relance
    """

    @with_retry(max_attempts=max_attempts)
    async def _send() -> httpx.Response:
        response = await client.request(method, url, **kwargs)
        if response.status_code == 429:
            raise RateLimitError(parse_retry_after(response.headers.get("Retry-After")))
        response.raise_for_status()
        return response

    return await _send()
