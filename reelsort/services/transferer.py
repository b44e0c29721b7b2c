"""
Service de rangement physique des fichiers (deplacement ou copie).

- Source == destination : rien a faire
- Copie deja faite (destination identique a la source) : rien a faire
- Destination deja occupee par un autre fichier : echec, la source n'est
  pas touchee
- Copie : vers un fichier temporaire voisin puis renommage atomique
- Deplacement : renommage atomique ; entre deux volumes (EXDEV), copie
  puis suppression de la source une fois la copie en place
- Apres un deplacement, le repertoire source devenu vide est supprime
  (jamais la racine de la bibliotheque)

Le service ne leve pas d'exception : le resultat porte une FilesystemError.
"""

import errno
import os
import uuid
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from loguru import logger

from reelsort.core.exceptions import FilesystemError
from reelsort.core.ports.file_system import IFileSystem

ACTION_MOVE = "move"
ACTION_COPY = "copy"
ACTION_SKIP = "skip"


@dataclass
class RelocationResult:
    """
    Resultat d'une operation de rangement.

    Attributs:
        success: True si le fichier est a sa destination
        final_path: Chemin final du fichier (si succes)
        action: move, copy ou skip (source deja a destination)
        error: Erreur systeme de fichiers (si echec)
    """

    success: bool
    final_path: Optional[Path] = None
    action: str = ACTION_SKIP
    error: Optional[FilesystemError] = None


def same_path(a: Path, b: Path) -> bool:
    """Compare deux chemins apres normalisation lexicale."""
    return os.path.normpath(a) == os.path.normpath(b)


class TransfererService:
    """
    Service de rangement des fichiers (FileRelocator).

    Utilisation:
        transferer = TransfererService(FileSystemAdapter())
        result = transferer.relocate(source, destination, copy_mode=False)
        if not result.success:
            print(result.error)
    """

    def __init__(self, file_system: IFileSystem) -> None:
        """
        Args:
            file_system: Primitives du systeme de fichiers
        """
        self._fs = file_system

    def relocate(
        self,
        source: Path,
        destination: Path,
        copy_mode: bool = False,
        library_root: Optional[Path] = None,
    ) -> RelocationResult:
        """
        Range un fichier a sa destination.

        Args:
            source: Chemin actuel du fichier
            destination: Chemin canonique calcule
            copy_mode: Copier (la source est conservee) au lieu de deplacer
            library_root: Racine a ne jamais supprimer lors du nettoyage

        Returns:
            RelocationResult
        """
        source = Path(source)
        destination = Path(destination)

        if same_path(source, destination):
            return RelocationResult(success=True, final_path=destination, action=ACTION_SKIP)

        if not self._fs.exists(source):
            return RelocationResult(
                success=False,
                error=FilesystemError(f"Source file not found: {source}", path=str(source)),
            )

        if self._fs.exists(destination):
            if copy_mode and self._already_copied(source, destination):
                logger.debug(f"Copie deja en place : {destination}")
                return RelocationResult(
                    success=True, final_path=destination, action=ACTION_SKIP
                )
            return RelocationResult(
                success=False,
                error=FilesystemError(
                    f"Destination already exists: {destination}", path=str(destination)
                ),
            )

        try:
            self._fs.make_dirs(destination.parent)
            if copy_mode:
                self._copy_into_place(source, destination)
            else:
                self._move(source, destination)
        except OSError as e:
            logger.error(f"Rangement echoue {source} -> {destination} : {e}")
            return RelocationResult(
                success=False, error=FilesystemError(str(e), path=str(source))
            )

        action = ACTION_COPY if copy_mode else ACTION_MOVE
        logger.info(f"{action} : {source} -> {destination}")

        if not copy_mode:
            self._cleanup_source_dir(source.parent, destination.parent, library_root)

        return RelocationResult(success=True, final_path=destination, action=action)

    def _already_copied(self, source: Path, destination: Path) -> bool:
        try:
            return self._fs.is_same_file(source, destination)
        except OSError as e:
            logger.warning(f"Comparaison impossible {source} / {destination} : {e}")
            return False

    def _move(self, source: Path, destination: Path) -> None:
        """Renommage atomique, repli copie + suppression entre deux volumes."""
        try:
            self._fs.rename(source, destination)
            return
        except OSError as e:
            if e.errno != errno.EXDEV:
                raise

        logger.debug(f"Deplacement entre volumes, copie de {source}")
        self._copy_into_place(source, destination)
        try:
            self._fs.delete(source)
        except OSError as e:
            # La copie est en place : le fichier est range, la source reste en double
            logger.warning(f"Source non supprimee apres copie {source} : {e}")

    def _copy_into_place(self, source: Path, destination: Path) -> None:
        """
        Copie vers un fichier temporaire voisin puis renommage atomique.

        En cas d'echec, le temporaire est supprime et la source reste intacte.
        """
        temp = destination.with_name(f".reelsort-tmp-{uuid.uuid4().hex}-{destination.name}")
        try:
            self._fs.copy(source, temp)
            self._fs.replace(temp, destination)
        except OSError:
            if self._fs.exists(temp):
                self._fs.delete(temp)
            raise

    def _cleanup_source_dir(
        self,
        directory: Path,
        destination_dir: Path,
        library_root: Optional[Path],
    ) -> None:
        """Supprime le repertoire source s'il est vide (hors racine et destination)."""
        if library_root is not None and same_path(directory, library_root):
            return
        if same_path(directory, destination_dir) or directory == Path(directory.anchor):
            return
        try:
            if self._fs.remove_empty_dir(directory):
                logger.debug(f"Repertoire vide supprime : {directory}")
        except OSError as e:
            logger.warning(f"Nettoyage impossible de {directory} : {e}")
