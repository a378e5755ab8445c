"""
➡️ But : Taxonomie hiérarchique des activités (catégorie → sous-catégorie → activité).

Une activité appartient toujours à une catégorie, et optionnellement à une sous-catégorie.
Les listes (livrables, technologies...) sont stockées en colonnes JSON.
"""

from typing import List, Optional
from sqlalchemy import Column, JSON
from sqlmodel import Field, Relationship

from .base import BaseModelDB


class ActivityCategory(BaseModelDB, table=True):
    __tablename__ = "activity_categories"

    slug: str = Field(index=True, unique=True)
    title_fr: str
    title_en: Optional[str] = None
    description_fr: Optional[str] = None
    description_en: Optional[str] = None
    display_order: int = Field(default=0)
    icon: Optional[str] = None
    color: Optional[str] = None  # classes de dégradé côté front
    is_active: bool = Field(default=True)

    subcategories: List["ActivitySubcategory"] = Relationship(back_populates="category")
    activities: List["Activity"] = Relationship(back_populates="category")


class ActivitySubcategory(BaseModelDB, table=True):
    __tablename__ = "activity_subcategories"

    slug: str = Field(index=True, unique=True)
    title_fr: str
    title_en: Optional[str] = None
    display_order: int = Field(default=0)
    is_active: bool = Field(default=True)

    category_id: int = Field(foreign_key="activity_categories.id", index=True)
    category: Optional[ActivityCategory] = Relationship(back_populates="subcategories")
    activities: List["Activity"] = Relationship(back_populates="subcategory")


class Activity(BaseModelDB, table=True):
    __tablename__ = "activities"

    slug: str = Field(index=True, unique=True)
    title_fr: str
    title_en: Optional[str] = None
    short_desc_fr: Optional[str] = None
    short_desc_en: Optional[str] = None
    description_fr: str = ""
    description_en: Optional[str] = None
    methodology: Optional[str] = None
    duration: Optional[str] = None
    target_audience: Optional[str] = None
    prerequisites: Optional[str] = None
    image: Optional[str] = None

    deliverables: List[str] = Field(default_factory=list, sa_column=Column(JSON, nullable=False))
    technologies: List[str] = Field(default_factory=list, sa_column=Column(JSON, nullable=False))
    data_types: List[str] = Field(default_factory=list, sa_column=Column(JSON, nullable=False))
    output_formats: List[str] = Field(default_factory=list, sa_column=Column(JSON, nullable=False))
    features: List[str] = Field(default_factory=list, sa_column=Column(JSON, nullable=False))
    certifications: List[str] = Field(default_factory=list, sa_column=Column(JSON, nullable=False))

    display_order: int = Field(default=0)
    is_active: bool = Field(default=True)
    is_featured: bool = Field(default=False)

    category_id: int = Field(foreign_key="activity_categories.id", index=True)
    subcategory_id: Optional[int] = Field(default=None, foreign_key="activity_subcategories.id", index=True)

    category: Optional[ActivityCategory] = Relationship(back_populates="activities")
    subcategory: Optional[ActivitySubcategory] = Relationship(back_populates="activities")
