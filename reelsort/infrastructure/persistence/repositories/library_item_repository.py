"""
Implementation SQLModel du repository des fichiers de la bibliotheque.

Chaque fichier est indexe par son chemin effectif (colonne path unique).
Le passage d'un fichier a l'etat range change donc sa cle : l'ancienne
ligne est supprimee et la nouvelle ecrite dans la meme transaction.
"""

import json
from pathlib import Path
from typing import Optional

from sqlmodel import Session, select

from reelsort.core.entities import Identification, ItemStatus, LibraryItem
from reelsort.core.ports.repositories import ILibraryItemRepository
from reelsort.core.value_objects import MediaType
from reelsort.infrastructure.persistence.models import LibraryItemModel
from reelsort.utils.helpers import as_utc, utc_now


class SQLModelLibraryItemRepository(ILibraryItemRepository):
    """
    Repository SQLModel des fichiers de la bibliotheque.

    Conversion bidirectionnelle entre LibraryItem (domaine) et
    LibraryItemModel (persistance).
    """

    def __init__(self, session: Session) -> None:
        """
        Initialise le repository avec une session SQLModel.

        Args:
            session: Session SQLModel active pour les operations DB
        """
        self._session = session

    def _to_entity(self, model: LibraryItemModel) -> LibraryItem:
        """Convertit un modele DB en entite domaine."""
        data = model.identification
        return LibraryItem(
            id=model.id,
            source_path=Path(model.source_path),
            destination_path=Path(model.destination_path) if model.destination_path else None,
            media_type=MediaType(model.media_type),
            status=ItemStatus(model.status),
            sub_status=model.sub_status,
            reason=model.reason,
            action=model.action,
            identification=Identification.from_dict(data) if data else None,
            quality=model.quality,
            source=model.source,
            codec=model.codec,
            library_id=model.library_id,
            job_id=model.job_id,
            created_at=as_utc(model.created_at),
            updated_at=as_utc(model.updated_at),
        )

    def _apply(self, model: LibraryItemModel, item: LibraryItem) -> None:
        """Copie les champs de l'entite sur le modele."""
        model.path = str(item.effective_path)
        model.source_path = str(item.source_path)
        model.destination_path = str(item.destination_path) if item.destination_path else None
        model.media_type = item.media_type.value
        model.status = item.status.value
        model.sub_status = item.sub_status
        model.reason = item.reason
        model.action = item.action
        model.identification_json = (
            json.dumps(item.identification.to_dict()) if item.identification else None
        )
        model.quality = item.quality
        model.source = item.source
        model.codec = item.codec
        model.library_id = item.library_id
        model.job_id = item.job_id
        model.updated_at = utc_now()

    def _find(self, path: Path | str) -> Optional[LibraryItemModel]:
        statement = select(LibraryItemModel).where(LibraryItemModel.path == str(path))
        return self._session.exec(statement).first()

    def _stage_upsert(self, item: LibraryItem) -> LibraryItemModel:
        model = self._find(item.effective_path)
        if model is None:
            model = LibraryItemModel(path=str(item.effective_path), source_path=str(item.source_path))
        self._apply(model, item)
        self._session.add(model)
        return model

    def get_by_path(self, path: Path) -> Optional[LibraryItem]:
        """Recupere un fichier par son chemin effectif."""
        model = self._find(path)
        if model:
            return self._to_entity(model)
        return None

    def upsert(self, item: LibraryItem) -> LibraryItem:
        """Insere ou met a jour la ligne du chemin effectif."""
        model = self._stage_upsert(item)
        self._session.commit()
        self._session.refresh(model)
        return self._to_entity(model)

    def mark_organized(self, previous_path: Path, item: LibraryItem) -> LibraryItem:
        """Supprime la ligne de previous_path et ecrit celle de la destination."""
        if str(previous_path) != str(item.effective_path):
            previous = self._find(previous_path)
            if previous is not None:
                self._session.delete(previous)
                # La suppression doit preceder l'insertion (contrainte unique)
                self._session.flush()
        model = self._stage_upsert(item)
        self._session.commit()
        self._session.refresh(model)
        return self._to_entity(model)

    def list_by_status(
        self, status: ItemStatus, library_id: Optional[str] = None
    ) -> list[LibraryItem]:
        """Liste les fichiers d'un statut, tries par chemin."""
        statement = select(LibraryItemModel).where(LibraryItemModel.status == status.value)
        if library_id is not None:
            statement = statement.where(LibraryItemModel.library_id == library_id)
        statement = statement.order_by(LibraryItemModel.path)
        return [self._to_entity(model) for model in self._session.exec(statement).all()]
