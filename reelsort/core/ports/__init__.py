"""
Ports (interfaces abstraites) definissant les contrats pour les adaptateurs.

Ports repository : Contrats de persistance des donnees
- ISettingsRepository : Reglages globaux de la bibliotheque
- ILibraryItemRepository : Fichiers de la bibliotheque
- IScanJobRepository : Suivi des scans

Ports client API : Contrats pour le service de recherche de titres
- ITitleSearchClient : Recherche de films/series
- SearchCandidate : Resultat de recherche

Ports systeme de fichiers : Primitives utilisees par le rangement
- IFileSystem

Port parsing :
- IFilenameParser : Extraction des metadonnees d'un nom de fichier
"""

from reelsort.core.ports.api_clients import (
    ITitleSearchClient,
    KeyCheckResult,
    SearchCandidate,
)
from reelsort.core.ports.file_system import IFileSystem
from reelsort.core.ports.parser import IFilenameParser
from reelsort.core.ports.repositories import (
    ILibraryItemRepository,
    IScanJobRepository,
    ISettingsRepository,
)

__all__ = [
    # Repositories
    "ISettingsRepository",
    "ILibraryItemRepository",
    "IScanJobRepository",
    # Clients API
    "ITitleSearchClient",
    "KeyCheckResult",
    "SearchCandidate",
    # Systeme de fichiers
    "IFileSystem",
    # Parsing
    "IFilenameParser",
]
