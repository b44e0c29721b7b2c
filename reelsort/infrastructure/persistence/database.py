"""
Configuration de la base de donnees SQLite pour ReelSort.

Ce module fournit :
- Creation de l'engine (aucun engine global : il est injecte par le container)
- Session factory
- Fonction d'initialisation des tables

La base de donnees est configuree via REELSORT_DATABASE_URL (defaut: sqlite:///reelsort.db).
"""

from collections.abc import Generator
from pathlib import Path

from sqlalchemy import Engine
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine


def create_db_engine(database_url: str) -> Engine:
    """
    Cree l'engine SQLAlchemy.

    Cree le repertoire parent si l'URL designe un fichier SQLite.
    Une base en memoire partage une connexion unique (StaticPool) pour
    rester visible de toutes les sessions.
    """
    connect_args = {}
    kwargs = {}
    if database_url.startswith("sqlite"):
        connect_args["check_same_thread"] = False
        if database_url in ("sqlite://", "sqlite:///:memory:"):
            kwargs["poolclass"] = StaticPool
        else:
            db_path = Path(database_url.replace("sqlite:///", ""))
            db_path.parent.mkdir(exist_ok=True, parents=True)

    return create_engine(database_url, echo=False, connect_args=connect_args, **kwargs)


def get_session(engine: Engine) -> Generator[Session, None, None]:
    """
    Generateur de session SQLModel.

    Utilisation :
        session = next(get_session(engine))

    Yields:
        Session SQLModel connectee a l'engine
    """
    with Session(engine) as session:
        yield session


def init_db(engine: Engine) -> Engine:
    """
    Cree toutes les tables si elles n'existent pas.

    Doit etre appelee une fois au demarrage de l'application.
    """
    # Import des modeles pour enregistrer leurs metadonnees
    from reelsort.infrastructure.persistence import models  # noqa: F401

    SQLModel.metadata.create_all(engine)
    return engine
