"""
Interfaces ports pour le service de recherche de titres.

Le service retourne une liste classee de candidats ; la decision
(accepter ou rejeter le premier) appartient au matcher.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from reelsort.core.value_objects import MediaType


@dataclass(frozen=True)
class SearchCandidate:
    """
    Candidat retourne par une recherche de titre.

    Attributs :
        id : ID TMDB
        title : Titre localise (title pour un film, name pour une serie)
        original_title : Titre en langue originale
        year : Annee extraite de release_date / first_air_date (None si absente)
        popularity : Score de popularite TMDB
        vote_count : Nombre de votes
        poster_path : Chemin relatif du poster
        overview : Resume
        release_date : Date brute (YYYY-MM-DD) telle que retournee par l'API
    """

    id: int
    title: str
    original_title: Optional[str] = None
    year: Optional[int] = None
    popularity: float = 0.0
    vote_count: int = 0
    poster_path: Optional[str] = None
    overview: Optional[str] = None
    release_date: Optional[str] = None


@dataclass(frozen=True)
class KeyCheckResult:
    """
    Resultat de la verification d'une cle TMDB.

    Attributs :
        ok : True si la cle est acceptee
        status : "VALID", "INVALID" ou "FAILED" (erreur reseau / serveur)
        key_type : "v3" (cle 32 caracteres) ou "v4" (token), None si vide
        http_status : Code HTTP obtenu
        message : Message lisible
    """

    ok: bool
    status: str
    key_type: Optional[str]
    http_status: Optional[int]
    message: str


class ITitleSearchClient(ABC):
    """
    Interface du service de recherche de titres (TMDB).

    Les implementations levent ExternalServiceError pour toute erreur
    reseau ou reponse non-2xx.
    """

    @abstractmethod
    async def search(
        self,
        query: str,
        media_type: MediaType,
        year: Optional[int] = None,
    ) -> list[SearchCandidate]:
        """
        Recherche des films ou series par titre.

        Args :
            query : Titre a rechercher
            media_type : MOVIE ou TV, choisit l'endpoint
            year : Filtre optionnel (annee de sortie ou de premiere diffusion)

        Retourne :
            Candidats dans l'ordre de classement du service
        """
        ...

    @abstractmethod
    async def close(self) -> None:
        """Libere les ressources reseau."""
        ...
