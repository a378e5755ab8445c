"""
➡️ But : Définir la structure des tables de la base (ORM).

Contient les classes héritant de SQLModel.

Ici on représente les propriétés communes de toutes les tables :
identifiant attribué par la base + horodatages de création / mise à jour.

🔹 Avantages :

Tu manipules des objets Python, pas du SQL brut.

Même code pour SQLite (dev/tests) et PostgreSQL (prod).
"""

from sqlmodel import SQLModel, Field
from datetime import datetime, timezone
from typing import Optional


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class BaseModelDB(SQLModel, table=False):
    id: Optional[int] = Field(default=None, primary_key=True)
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)
