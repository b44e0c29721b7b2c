"""
Service de parcours de la bibliotheque.

Parcourt la racine avec une pile explicite de repertoires (pas de recursion)
via le port IFileSystem et retourne les fichiers video trouves. Un repertoire
illisible est journalise puis ignore : il n'interrompt jamais le parcours
de ses voisins.
"""

from dataclasses import dataclass, field
from pathlib import Path

from loguru import logger

from reelsort.adapters.file_system import VIDEO_EXTENSIONS
from reelsort.core.exceptions import FilesystemError
from reelsort.core.ports.file_system import IFileSystem
from reelsort.core.value_objects import FileCandidate


@dataclass
class CrawlResult:
    """
    Resultat du parcours.

    Attributs:
        files: Fichiers video, tries par chemin
        errors: Repertoires illisibles (le parcours a continue)
    """

    files: list[FileCandidate] = field(default_factory=list)
    errors: list[FilesystemError] = field(default_factory=list)


def is_video_file(name: str) -> bool:
    """Vrai si l'extension fait partie des extensions video reconnues."""
    return Path(name).suffix.lower() in VIDEO_EXTENSIONS


class DirectoryCrawler:
    """
    Parcours iteratif d'une arborescence a la recherche de fichiers video.

    - Entrees dont le nom commence par "." ignorees (fichiers et repertoires)
    - Liens symboliques suivis ; un repertoire deja visite (meme chemin reel)
      n'est pas parcouru deux fois, ce qui coupe les cycles
    - Sortie triee lexicographiquement pour un resultat deterministe

    Utilisation:
        crawler = DirectoryCrawler(FileSystemAdapter())
        result = crawler.crawl(library_root)
    """

    def __init__(self, file_system: IFileSystem) -> None:
        """
        Args:
            file_system: Primitives de lecture du systeme de fichiers
        """
        self._fs = file_system

    def crawl(self, root: Path) -> CrawlResult:
        """
        Parcourt root et ses sous-repertoires.

        Args:
            root: Racine de la bibliotheque

        Returns:
            CrawlResult avec les fichiers video et les erreurs de lecture
        """
        result = CrawlResult()
        pending: list[Path] = [Path(root)]
        visited: set[Path] = set()

        while pending:
            directory = pending.pop()
            real_path = self._fs.real_path(directory)
            if real_path in visited:
                logger.debug(f"Repertoire deja visite, ignore : {directory}")
                continue
            visited.add(real_path)

            try:
                entries = self._fs.list_dir(directory)
            except OSError as e:
                logger.warning(f"Repertoire illisible ignore : {directory} ({e})")
                result.errors.append(FilesystemError(str(e), path=str(directory)))
                continue

            for entry in entries:
                if entry.name.startswith("."):
                    continue
                try:
                    if self._fs.is_dir(entry):
                        pending.append(entry)
                    elif self._fs.is_file(entry) and is_video_file(entry.name):
                        result.files.append(FileCandidate.from_path(entry))
                except OSError as e:
                    logger.warning(f"Entree illisible ignoree : {entry} ({e})")
                    result.errors.append(FilesystemError(str(e), path=str(entry)))

        result.files.sort(key=lambda candidate: str(candidate.path))
        logger.info(f"{len(result.files)} fichier(s) video trouve(s) sous {root}")
        return result
