"""
Configuration de la base de donnees SQLite du catalogue.

Ce module fournit :
- Engine SQLite configure pour multi-thread avec cles etrangeres actives
- Session factory
- Fonction d'initialisation des tables et migrations additives

Le chemin de la base vient de Settings.database_path (defaut: media-index.db).
Aucun engine global : le container construit l'engine et le transmet.
"""

from pathlib import Path
from typing import Union

from loguru import logger
from sqlalchemy import Engine, event, text
from sqlmodel import Session, SQLModel, create_engine

# Colonnes ajoutees apres la premiere version du schema : (nom, definition SQL)
_FAILURE_COLUMNS = (
    ("failed", "BOOLEAN NOT NULL DEFAULT 0"),
    ("error_message", "VARCHAR"),
    ("error_type", "VARCHAR"),
)


def _enable_foreign_keys(dbapi_connection, connection_record) -> None:
    """Active les cles etrangeres sur chaque connexion SQLite."""
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def create_catalog_engine(database_path: Union[str, Path]) -> Engine:
    """
    Cree l'engine SQLite du catalogue.

    Le repertoire parent est cree si necessaire ; ":memory:" est accepte.

    Args:
        database_path: Chemin du fichier SQLite

    Returns:
        Engine SQLAlchemy avec PRAGMA foreign_keys=ON sur chaque connexion
    """
    db_path = str(database_path)
    if db_path != ":memory:":
        Path(db_path).parent.mkdir(parents=True, exist_ok=True)

    engine = create_engine(
        f"sqlite:///{db_path}",
        echo=False,
        connect_args={"check_same_thread": False},
    )
    event.listen(engine, "connect", _enable_foreign_keys)
    return engine


def get_session(engine: Engine) -> Session:
    """
    Cree une session SQLModel liee a l'engine.

    Utilisation avec context manager :
        with get_session(engine) as session:
            # operations
    """
    return Session(engine)


def init_db(engine: Engine) -> None:
    """
    Initialise la base de donnees en creant toutes les tables.

    Importe les modeles pour enregistrer leurs metadonnees dans SQLModel.metadata,
    cree les tables manquantes puis applique les migrations additives.
    Idempotent : peut etre appele a chaque demarrage.
    """
    # Import des modeles pour enregistrer leurs metadonnees
    from mediaindexer.infrastructure.persistence import models  # noqa: F401

    SQLModel.metadata.create_all(engine)
    _run_migrations(engine)


def _run_migrations(engine: Engine) -> None:
    """
    Execute les migrations de schema necessaires.

    SQLModel.metadata.create_all() ne modifie pas les tables existantes : les
    colonnes de suivi des echecs (failed, error_message, error_type) sont ajoutees
    aux catalogues crees par une version anterieure. Les migrations sont
    uniquement additives.
    """
    with engine.connect() as conn:
        for table in ("thumbnails", "mini_thumbnails"):
            result = conn.execute(text(f"PRAGMA table_info({table})"))
            columns = {row[1] for row in result.fetchall()}

            for name, definition in _FAILURE_COLUMNS:
                if name not in columns:
                    conn.execute(text(f"ALTER TABLE {table} ADD COLUMN {name} {definition}"))
                    logger.info(f"Migration: colonne {name} ajoutee a {table}")
        conn.commit()
