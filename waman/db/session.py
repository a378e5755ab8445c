"""
➡️ But : Configurer la base et gérer les sessions / le pool de connexions.

engine : connexion à la base (SQLite en dev/tests, PostgreSQL en prod).

ConnectionPool : enveloppe le pool de l'engine et expose reset_connection(),
utilisé par le RetryExecutor après une erreur transitoire.

init_db() : crée les tables à partir des modèles SQLModel.

get_session() : dépendance FastAPI qui ouvre une session, la fournit aux routes, puis la ferme proprement.
"""

import logging
from fastapi import Depends
from typing import Dict, Any, Optional
from sqlmodel import SQLModel, create_engine, Session
from sqlalchemy.engine import Engine
from sqlalchemy.pool import StaticPool

# Import all models for creating all tables
from waman.db.models.partners import Partner
from waman.db.models.blog_posts import BlogPost
from waman.db.models.projects import Project
from waman.db.models.contacts import Contact
from waman.db.models.activities import ActivityCategory, ActivitySubcategory, Activity
from waman.db.models.admin_users import AdminUser

from waman.core.config import settings

logger = logging.getLogger("waman.db")


def build_engine(url: Optional[str] = None, *, echo: bool = False) -> Engine:
    url = url or settings.DATABASE_URL
    assert url, "DATABASE_URL must be set"

    is_sqlite = url.startswith("sqlite:")

    connect_args: Dict[str, Any] = {}
    kwargs: Dict[str, Any] = {}
    if is_sqlite:
        # Requis pour SQLite quand utilisé dans un app serveur (multi-threads)
        connect_args["check_same_thread"] = False
        if url in ("sqlite://", "sqlite:///:memory:"):
            # base mémoire partagée par toutes les sessions
            kwargs["poolclass"] = StaticPool

    return create_engine(
        url,
        echo=echo,
        connect_args=connect_args,
        pool_pre_ping=not is_sqlite,  # ping utile pour Postgres ; inutile pour SQLite
        **kwargs,
    )


class ConnectionPool:
    """
    Handle du pool de connexions partagé par le process.

    reset_connection() ferme toutes les connexions du pool ; l'engine se
    reconnecte à la demande. Idempotent, mais touche aussi les requêtes
    concurrentes qui partagent le pool.
    """

    def __init__(self, engine: Engine):
        self.engine = engine

    def session(self) -> Session:
        return Session(self.engine)

    def reset_connection(self) -> None:
        logger.warning("Resetting database connection pool")
        self.engine.dispose()


engine: Engine = build_engine(echo=settings.DB_ECHO)
pool = ConnectionPool(engine)


def init_db(target: Optional[Engine] = None) -> None:
    """
    Crée les tables si elles n'existent pas (usage dev/demo).
    En prod, préférer des migrations.
    """
    SQLModel.metadata.create_all(target or engine)


def get_pool() -> ConnectionPool:
    """Dépendance FastAPI : le pool partagé (surchargeable en test)."""
    return pool


def get_session(pool: ConnectionPool = Depends(get_pool)):
    """
    Dépendance FastAPI : fournit une session par requête.
    Utilisation :
        def route(..., session: Session = Depends(get_session)):
            ...
    """
    with pool.session() as session:
        yield session
