"""
Service d'identification automatique des fichiers.

Interroge le service de recherche avec le titre nettoye puis applique des
regles de confiance au premier resultat. Les regles sont evaluees dans
l'ordre ; la premiere qui echoue donne la raison du rejet :

1. Aucun resultat
2. Ambiguite : les deux premiers resultats sont trop proches
   (popularite ET votes)
3. Similarite de titre < 0.82 (titre localise ou original)
4. Annee : ecart > 1 an avec l'annee du nom de fichier
5. Series : saison ou episode absent du nom de fichier

Un rejet n'est pas une erreur : le fichier part en revue manuelle.
"""

from dataclasses import dataclass
from typing import Callable, Optional

from loguru import logger

from reelsort.core.entities import Identification
from reelsort.core.ports.api_clients import ITitleSearchClient, SearchCandidate
from reelsort.core.value_objects import FilenameMetadata, MediaType
from reelsort.services import similarity

# Raisons de rejet (chaines stables, affichees pour le tri manuel)
REASON_NO_API_KEY = "No API Key"
REASON_NO_TITLE = "No Title Parsed"
REASON_NO_RESULTS = "No Results"
REASON_AMBIGUOUS = "Ambiguous Match (Top 2 too similar)"
REASON_YEAR_MISMATCH = "Year Mismatch"
REASON_MISSING_EPISODE = "Missing S/E Numbers"

AMBIGUITY_POPULARITY_RATIO = 1.35
AMBIGUITY_VOTE_RATIO = 1.50
MIN_TITLE_SIMILARITY = 0.82
YEAR_TOLERANCE = 1
# Plancher du denominateur des ratios (runner-up sans popularite/votes)
_RATIO_FLOOR = 0.1


@dataclass(frozen=True)
class IdentificationOutcome:
    """
    Resultat d'une tentative d'identification.

    Attributs:
        confident: True si toutes les regles sont satisfaites
        media_type: Type recherche (MOVIE ou TV)
        identification: Candidat retenu (si confident)
        reason: Raison du rejet (si non confident)
    """

    confident: bool
    media_type: MediaType = MediaType.UNKNOWN
    identification: Optional[Identification] = None
    reason: Optional[str] = None

    @classmethod
    def reject(cls, reason: str, media_type: MediaType = MediaType.UNKNOWN) -> "IdentificationOutcome":
        return cls(confident=False, media_type=media_type, reason=reason)


def low_similarity_reason(best_score: float) -> str:
    """Raison de rejet embarquant le score a deux decimales."""
    return f"Low Similarity ({best_score:.2f})"


def is_ambiguous(top1: SearchCandidate, top2: SearchCandidate) -> bool:
    """
    Vrai si le premier resultat ne se detache pas assez du second.

    Ambigu seulement si les DEUX ratios (popularite et votes) sont sous
    leur seuil.
    """
    pop_ratio = top1.popularity / max(top2.popularity, _RATIO_FLOOR)
    vote_ratio = top1.vote_count / max(top2.vote_count, _RATIO_FLOOR)
    return pop_ratio < AMBIGUITY_POPULARITY_RATIO and vote_ratio < AMBIGUITY_VOTE_RATIO


def best_title_score(clean_title: str, candidate: SearchCandidate) -> float:
    """Meilleur score entre titre localise et titre original."""
    return max(
        similarity.score(clean_title, candidate.title),
        similarity.score(clean_title, candidate.original_title or ""),
    )


def evaluate_candidates(
    metadata: FilenameMetadata,
    candidates: list[SearchCandidate],
) -> IdentificationOutcome:
    """
    Applique les regles de confiance aux resultats d'une recherche.

    Args:
        metadata: Metadonnees extraites du nom de fichier
        candidates: Resultats dans l'ordre du service

    Returns:
        IdentificationOutcome confiant (premier candidat) ou rejete
    """
    media_type = metadata.media_type

    if not candidates:
        return IdentificationOutcome.reject(REASON_NO_RESULTS, media_type)

    top1 = candidates[0]

    if len(candidates) >= 2 and is_ambiguous(top1, candidates[1]):
        return IdentificationOutcome.reject(REASON_AMBIGUOUS, media_type)

    score = best_title_score(metadata.clean_title, top1)
    if score < MIN_TITLE_SIMILARITY:
        return IdentificationOutcome.reject(low_similarity_reason(score), media_type)

    if metadata.year is not None and top1.year is not None:
        if abs(metadata.year - top1.year) > YEAR_TOLERANCE:
            return IdentificationOutcome.reject(REASON_YEAR_MISMATCH, media_type)

    if media_type is MediaType.TV and (metadata.season is None or metadata.episode is None):
        return IdentificationOutcome.reject(REASON_MISSING_EPISODE, media_type)

    return IdentificationOutcome(
        confident=True,
        media_type=media_type,
        identification=Identification(
            id=top1.id,
            title=top1.title,
            year=top1.year,
            poster_path=top1.poster_path,
            overview=top1.overview,
            season=metadata.season,
            episode=metadata.episode,
        ),
    )


class IdentificationMatcher:
    """
    Identification d'un fichier via le service de recherche de titres.

    Le client est cree a la demande par client_factory pour la cle fournie
    (la cle vient des reglages de la bibliotheque, lus au debut du scan).
    Les erreurs du service ne remontent jamais : elles deviennent un rejet
    "System Error: ...".
    """

    def __init__(self, client_factory: Callable[[str], ITitleSearchClient]) -> None:
        """
        Args:
            client_factory: Construit un client de recherche pour une cle API
        """
        self._client_factory = client_factory
        self._clients: dict[str, ITitleSearchClient] = {}

    def _client_for(self, api_key: str) -> ITitleSearchClient:
        client = self._clients.get(api_key)
        if client is None:
            client = self._client_factory(api_key)
            self._clients[api_key] = client
        return client

    async def identify(
        self,
        metadata: FilenameMetadata,
        api_key: Optional[str],
    ) -> IdentificationOutcome:
        """
        Identifie un fichier a partir de ses metadonnees.

        Args:
            metadata: Metadonnees extraites du nom de fichier
            api_key: Cle du service de recherche

        Returns:
            IdentificationOutcome (jamais d'exception)
        """
        if not api_key:
            return IdentificationOutcome.reject(REASON_NO_API_KEY)
        if not metadata.clean_title:
            return IdentificationOutcome.reject(REASON_NO_TITLE)

        media_type = metadata.media_type
        try:
            candidates = await self._client_for(api_key).search(
                metadata.clean_title, media_type, year=metadata.year
            )
        except Exception as e:
            logger.warning(f"Recherche echouee pour '{metadata.clean_title}' : {e}")
            return IdentificationOutcome.reject(f"System Error: {e}", media_type)

        outcome = evaluate_candidates(metadata, candidates)
        if outcome.confident:
            logger.debug(
                f"Identifie '{metadata.clean_title}' -> "
                f"{outcome.identification.title} ({outcome.identification.year})"
            )
        else:
            logger.debug(f"Rejet '{metadata.clean_title}' : {outcome.reason}")
        return outcome

    async def close(self) -> None:
        """Ferme les clients crees pendant le scan."""
        for client in self._clients.values():
            await client.close()
        self._clients.clear()
