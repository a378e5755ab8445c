from typing import List, Optional
from sqlalchemy import Column, JSON
from sqlmodel import Field

from .base import BaseModelDB


class Project(BaseModelDB, table=True):
    """Références / projets réalisés."""
    __tablename__ = "projects"

    # Métadonnées bilingues
    title_fr: str
    title_en: Optional[str] = None
    description_fr: str
    description_en: Optional[str] = None

    client: str
    year: str
    status: str = Field(index=True)

    category: Optional[str] = Field(default=None, index=True)
    location: Optional[str] = None
    budget: Optional[str] = None
    duration: Optional[str] = None
    image: Optional[str] = None
    featured: bool = Field(default=False)

    # liste ordonnée de réalisations (colonne JSON)
    achievements: Optional[List[str]] = Field(default=None, sa_column=Column(JSON))
