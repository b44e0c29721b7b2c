"""
Adaptateur pour les operations sur le systeme de fichiers.

Implementation concrete de IFileSystem. Chaque methode est une primitive
qui leve OSError en cas d'echec ; la politique (parcours, repli entre
volumes, copie avant suppression) est portee par les services.
"""

import filecmp
import os
import shutil
from pathlib import Path

from reelsort.core.ports.file_system import IFileSystem

# Extensions video reconnues (comparaison insensible a la casse)
VIDEO_EXTENSIONS: frozenset[str] = frozenset({
    ".mkv", ".mp4", ".avi", ".m4v", ".ts", ".mov", ".wmv"
})


class FileSystemAdapter(IFileSystem):
    """Implementation de IFileSystem pour le systeme de fichiers reel."""

    def list_dir(self, path: Path) -> list[Path]:
        """Entrees du repertoire via os.scandir (une seule lecture)."""
        with os.scandir(path) as it:
            return [Path(entry.path) for entry in it]

    def is_dir(self, path: Path) -> bool:
        return path.is_dir()

    def is_file(self, path: Path) -> bool:
        return path.is_file()

    def real_path(self, path: Path) -> Path:
        return Path(os.path.realpath(path))

    def exists(self, path: Path) -> bool:
        """Verifie si un chemin existe."""
        return path.exists()

    def make_dirs(self, path: Path) -> None:
        """Cree un repertoire et ses parents (sans erreur s'il existe)."""
        path.mkdir(parents=True, exist_ok=True)

    def rename(self, source: Path, destination: Path) -> None:
        """
        Renommage atomique sur un meme volume.

        Utilise os.rename (et non os.replace) : la destination est supposee
        absente, verifiee en amont par le service de rangement.
        """
        os.rename(source, destination)

    def copy(self, source: Path, destination: Path) -> None:
        """Copie avec preservation des metadonnees."""
        shutil.copy2(source, destination)

    def delete(self, path: Path) -> None:
        """Supprime un fichier."""
        path.unlink()

    def replace(self, source: Path, destination: Path) -> None:
        """Renommage atomique ecrasant la destination (fichiers temporaires)."""
        os.replace(source, destination)

    def is_same_file(self, first: Path, second: Path) -> bool:
        """
        Comparaison rapide : signature stat (taille, date) puis contenu.

        copy2 preserve la date de modification, une copie faite par le
        rangement est donc reconnue sans relire les fichiers.
        """
        return filecmp.cmp(first, second, shallow=True)

    def remove_empty_dir(self, path: Path) -> bool:
        """Supprime le repertoire s'il est vide."""
        if not path.is_dir() or any(path.iterdir()):
            return False
        path.rmdir()
        return True
