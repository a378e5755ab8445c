"""
➡️ But : Décrire, pour chaque type de ressource générique, son schéma de champs.

Un ResourceDescriptor regroupe :
- les champs (nom API camelCase ⇄ nom stockage snake_case, type, requis, défaut) ;
- la clé de tri et le plafond de la liste ;
- la classe de repository à utiliser.

L'ensemble des ressources est fermé (ResourceKind) ; resolve_kind() est le
seul point de validation d'un kind reçu en entrée.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional, Tuple, Type

from waman.core.errors import UnknownResourceKind
from waman.db.repositories.base import BaseRepository
from waman.db.repositories.blog_posts import BlogPostRepository
from waman.db.repositories.contacts import ContactRepository
from waman.db.repositories.partners import PartnerRepository
from waman.db.repositories.projects import ProjectRepository


class ResourceKind(str, Enum):
    PARTNER = "partner"
    BLOG_POST = "blog_post"
    PROJECT = "project"
    CONTACT = "contact"


class FieldType(str, Enum):
    STRING = "string"
    BOOL = "bool"
    INT = "int"
    LIST = "list"


@dataclass(frozen=True)
class FieldSpec:
    external: str
    internal: str
    type: FieldType = FieldType.STRING
    required: bool = False
    default: Any = None


@dataclass(frozen=True)
class ResourceDescriptor:
    kind: ResourceKind
    fields: Tuple[FieldSpec, ...]
    repository: Type[BaseRepository]
    order_by: str = "created_at"
    descending: bool = True
    list_limit: int = 100

    @property
    def required(self) -> Tuple[FieldSpec, ...]:
        return tuple(f for f in self.fields if f.required)

    @property
    def optional(self) -> Tuple[FieldSpec, ...]:
        return tuple(f for f in self.fields if not f.required)

    @property
    def defaults(self) -> Dict[str, Any]:
        """Défauts de création, indexés par nom de stockage."""
        return {f.internal: f.default for f in self.fields if f.default is not None}


def _req(name: str, internal: Optional[str] = None) -> FieldSpec:
    return FieldSpec(name, internal or name, required=True)


def _opt(name: str, internal: Optional[str] = None, type_: FieldType = FieldType.STRING) -> FieldSpec:
    return FieldSpec(name, internal or name, type=type_)


def _flag(name: str, internal: str, type_: FieldType, default: Any) -> FieldSpec:
    return FieldSpec(name, internal, type=type_, default=default)


# Identité + horodatages : communs à toutes les ressources, jamais écrits par l'API
SYSTEM_FIELDS: Tuple[Tuple[str, str], ...] = (
    ("id", "id"),
    ("createdAt", "created_at"),
    ("updatedAt", "updated_at"),
)


DESCRIPTORS: Dict[ResourceKind, ResourceDescriptor] = {
    ResourceKind.PARTNER: ResourceDescriptor(
        kind=ResourceKind.PARTNER,
        fields=(
            _req("name"),
            _req("category"),
            _opt("logo"),
            _opt("url"),
            _flag("active", "active", FieldType.BOOL, True),
            _flag("partnerOrder", "order", FieldType.INT, 0),
        ),
        repository=PartnerRepository,
        order_by="order",
        descending=False,
        list_limit=100,
    ),
    ResourceKind.BLOG_POST: ResourceDescriptor(
        kind=ResourceKind.BLOG_POST,
        fields=(
            _req("titleFr", "title_fr"),
            _req("content"),
            _req("category"),
            _opt("titleEn", "title_en"),
            _opt("author"),
            _opt("image"),
            _flag("featured", "featured", FieldType.BOOL, False),
            _flag("published", "published", FieldType.BOOL, True),
        ),
        repository=BlogPostRepository,
        list_limit=50,
    ),
    ResourceKind.PROJECT: ResourceDescriptor(
        kind=ResourceKind.PROJECT,
        fields=(
            _req("titleFr", "title_fr"),
            _req("descriptionFr", "description_fr"),
            _req("client"),
            _req("year"),
            _req("status"),
            _opt("titleEn", "title_en"),
            _opt("descriptionEn", "description_en"),
            _opt("category"),
            _opt("location"),
            _opt("budget"),
            _opt("duration"),
            _opt("image"),
            _flag("featured", "featured", FieldType.BOOL, False),
            _opt("achievements", type_=FieldType.LIST),
        ),
        repository=ProjectRepository,
        list_limit=100,
    ),
    ResourceKind.CONTACT: ResourceDescriptor(
        kind=ResourceKind.CONTACT,
        fields=(
            _req("name"),
            _req("email"),
            _req("message"),
            _opt("company"),
            _opt("projectType", "project_type"),
            _flag("status", "status", FieldType.STRING, "nouveau"),
        ),
        repository=ContactRepository,
        list_limit=200,
    ),
}

# noms historiques utilisés par l'ancien admin (/api/admin/partners, ...)
_ALIASES: Dict[str, ResourceKind] = {
    "partners": ResourceKind.PARTNER,
    "blog_posts": ResourceKind.BLOG_POST,
    "projects": ResourceKind.PROJECT,
    "contacts": ResourceKind.CONTACT,
}


def resolve_kind(kind: Any) -> ResourceKind:
    """Convertit un kind reçu en entrée ; UnknownResourceKind sinon."""
    if isinstance(kind, ResourceKind):
        return kind
    if isinstance(kind, str):
        key = kind.strip().lower().replace("-", "_")
        if key in _ALIASES:
            return _ALIASES[key]
        try:
            return ResourceKind(key)
        except ValueError:
            pass
    raise UnknownResourceKind(kind)


def get_descriptor(kind: Any) -> ResourceDescriptor:
    return DESCRIPTORS[resolve_kind(kind)]
