"""
Interface port pour les primitives du systeme de fichiers.

Les services decident de la politique (parcours et coupure des cycles,
repli cross-device, ordre copie puis suppression, nettoyage) ; l'adaptateur
n'execute que des operations elementaires qui levent OSError en cas d'echec.
"""

from abc import ABC, abstractmethod
from pathlib import Path


class IFileSystem(ABC):
    """Operations elementaires utilisees par le parcours et le rangement."""

    @abstractmethod
    def list_dir(self, path: Path) -> list[Path]:
        """Liste les entrees d'un repertoire. Leve OSError s'il est illisible."""
        ...

    @abstractmethod
    def is_dir(self, path: Path) -> bool:
        """Vrai pour un repertoire (liens symboliques suivis)."""
        ...

    @abstractmethod
    def is_file(self, path: Path) -> bool:
        """Vrai pour un fichier regulier (liens symboliques suivis)."""
        ...

    @abstractmethod
    def real_path(self, path: Path) -> Path:
        """Chemin reel, liens symboliques resolus."""
        ...

    @abstractmethod
    def exists(self, path: Path) -> bool:
        """Verifie si un chemin existe."""
        ...

    @abstractmethod
    def make_dirs(self, path: Path) -> None:
        """Cree un repertoire et ses parents (idempotent)."""
        ...

    @abstractmethod
    def rename(self, source: Path, destination: Path) -> None:
        """Renommage atomique. Leve OSError (errno EXDEV entre deux volumes)."""
        ...

    @abstractmethod
    def copy(self, source: Path, destination: Path) -> None:
        """Copie le contenu et les metadonnees d'un fichier."""
        ...

    @abstractmethod
    def replace(self, source: Path, destination: Path) -> None:
        """Renommage atomique qui ecrase la destination si elle existe."""
        ...

    @abstractmethod
    def delete(self, path: Path) -> None:
        """Supprime un fichier."""
        ...

    @abstractmethod
    def is_same_file(self, first: Path, second: Path) -> bool:
        """Vrai si les deux fichiers ont le meme contenu (copie deja faite)."""
        ...

    @abstractmethod
    def remove_empty_dir(self, path: Path) -> bool:
        """Supprime un repertoire s'il est vide. Retourne True si supprime."""
        ...
