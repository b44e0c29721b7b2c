"""
Exceptions du domaine ReelSort.

Seules les erreurs de configuration interrompent un scan complet.
Les autres sont capturees au plus pres, converties en resultat
(rejet d'identification, erreur par fichier) et le traitement continue.
"""


class ReelSortError(Exception):
    """Classe de base des erreurs ReelSort."""


class ConfigurationError(ReelSortError):
    """Reglages absents ou racine de bibliotheque inutilisable. Fatal pour le scan."""


class FilesystemError(ReelSortError):
    """
    Echec d'une operation sur le systeme de fichiers.

    Attributs:
        path: Chemin concerne par l'echec
    """

    def __init__(self, message: str, path: str | None = None) -> None:
        self.path = path
        super().__init__(message)


class ExternalServiceError(ReelSortError):
    """
    Erreur du service de recherche de titres (reseau ou reponse non-2xx).

    Attributs:
        status_code: Code HTTP de la reponse, ou None pour une erreur reseau
    """

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.status_code = status_code
        super().__init__(message)


class ScanAlreadyRunningError(ReelSortError):
    """Un scan est deja en cours, un second ne peut pas etre demarre."""

    def __init__(self, job_id: int | None = None) -> None:
        self.job_id = job_id
        super().__init__(f"Un scan est deja en cours (job {job_id})")


class InvalidJobTransitionError(ReelSortError):
    """Tentative de sortie d'un etat terminal d'un scan."""
