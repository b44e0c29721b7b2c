"""
Objets valeur immutables representant des concepts du domaine sans identite.

Exports :
- MediaType : Type de media (MOVIE, TV, UNKNOWN)
- FilenameMetadata : Informations extraites d'un nom de fichier
- FileCandidate : Fichier video decouvert par le crawl
"""

from reelsort.core.value_objects.parsed_info import (
    FileCandidate,
    FilenameMetadata,
    MediaType,
)

__all__ = [
    "FileCandidate",
    "FilenameMetadata",
    "MediaType",
]
