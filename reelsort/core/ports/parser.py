"""
Interface port pour le parsing de noms de fichiers video.
"""

from abc import ABC, abstractmethod

from reelsort.core.value_objects import FilenameMetadata


class IFilenameParser(ABC):
    """
    Interface pour l'extraction des metadonnees d'un nom de fichier.

    Definit le contrat pour extraire qualite, annee, source, codec,
    titre nettoye et saison/episode depuis un nom de fichier.
    """

    @abstractmethod
    def parse(self, filename: str) -> FilenameMetadata:
        """
        Parse un nom de fichier video.

        Args:
            filename: Nom du fichier complet (avec extension, sans le chemin)

        Retourne:
            FilenameMetadata. Ne leve jamais d'exception : un nom illisible
            produit un objet aux champs vides.
        """
        ...
