"""
➡️ But : Logique métier de la taxonomie des activités (catégorie → sous-catégorie → activité).

- Admin : CRUD des activités, arbre complet des catégories.
- Public : arbre filtré (catégories / sous-catégories / activités actives) en projection courte.

Les accès DB passent par le RetryExecutor, comme pour les ressources génériques.
"""

from typing import Any, Dict, List

from waman.db.models.activities import Activity, ActivityCategory
from waman.db.models.base import utcnow
from waman.db.repositories.activities import ActivityRepository, ActivityCategoryRepository
from waman.db.retry import RetryExecutor
from waman.features.activities.schemas import (
    ActivityIn,
    ActivityUpdateIn,
    ActivityOut,
    ActivityWithParentsOut,
    ActivityShortOut,
    CategoryTreeOut,
    SubcategoryTreeOut,
    PublicCategoryOut,
    PublicSubcategoryOut,
)
from waman.features.resources.services import parse_record_id

_LIST_FIELDS = ("deliverables", "technologies", "data_types", "output_formats", "features", "certifications")
_NULLABLE_TEXT = (
    "title_en",
    "short_desc_fr",
    "short_desc_en",
    "description_en",
    "methodology",
    "duration",
    "target_audience",
    "prerequisites",
    "image",
)


def _blank_to_none(value):
    if isinstance(value, str) and not value.strip():
        return None
    return value


class ActivityService:
    def __init__(
        self,
        *,
        repo: ActivityRepository,
        category_repo: ActivityCategoryRepository,
        executor: RetryExecutor,
    ):
        self.repo = repo
        self.category_repo = category_repo
        self.executor = executor

    # -------- Helpers --------

    @staticmethod
    def _values(payload: ActivityIn) -> Dict[str, Any]:
        """Remplacement complet : chaque champ reçoit une valeur (défaut si absent)."""
        values: Dict[str, Any] = {
            "slug": payload.slug,
            "title_fr": payload.title_fr,
            "description_fr": payload.description_fr or "",
            "display_order": payload.display_order or 0,
            "is_active": True if payload.is_active is None else payload.is_active,
            "is_featured": False if payload.is_featured is None else payload.is_featured,
            "category_id": payload.category_id,
            "subcategory_id": payload.subcategory_id or None,
        }
        for name in _NULLABLE_TEXT:
            values[name] = _blank_to_none(getattr(payload, name))
        for name in _LIST_FIELDS:
            values[name] = list(getattr(payload, name) or [])
        return values

    @staticmethod
    def _active_activities(activities: List[Activity]) -> List[Activity]:
        return sorted(
            (a for a in activities if a.is_active),
            key=lambda a: (a.display_order, a.id),
        )

    # -------- Admin --------

    def list_admin(self) -> List[ActivityWithParentsOut]:
        rows = self.executor.execute(self.repo.list_with_parents)
        return [ActivityWithParentsOut.model_validate(a) for a in rows]

    def create(self, payload: ActivityIn) -> ActivityOut:
        values = self._values(payload)
        created = self.executor.execute(lambda: self.repo.create(**values))
        return ActivityOut.model_validate(created)

    def update(self, payload: ActivityUpdateIn) -> ActivityOut:
        id_ = parse_record_id(payload.id, "update")
        values = self._values(payload)
        values["updated_at"] = utcnow()
        updated = self.executor.execute(lambda: self.repo.update_by_id(id_, **values))
        return ActivityOut.model_validate(updated)

    def delete(self, record_id: Any) -> None:
        id_ = parse_record_id(record_id, "delete")
        self.executor.execute(lambda: self.repo.delete_by_id(id_))

    def list_categories_admin(self) -> List[CategoryTreeOut]:
        categories = self.executor.execute(self.category_repo.list_tree)
        return [self._category_tree(c) for c in categories]

    def _category_tree(self, category: ActivityCategory) -> CategoryTreeOut:
        subcategories = sorted(category.subcategories, key=lambda s: (s.display_order, s.id))
        active = self._active_activities(category.activities)
        return CategoryTreeOut(
            id=category.id,
            slug=category.slug,
            title_fr=category.title_fr,
            title_en=category.title_en,
            description_fr=category.description_fr,
            description_en=category.description_en,
            display_order=category.display_order,
            icon=category.icon,
            color=category.color,
            is_active=category.is_active,
            subcategories=[
                SubcategoryTreeOut(
                    id=s.id,
                    slug=s.slug,
                    title_fr=s.title_fr,
                    title_en=s.title_en,
                    display_order=s.display_order,
                    activities=[ActivityOut.model_validate(a) for a in self._active_activities(s.activities)],
                )
                for s in subcategories
            ],
            activities=[ActivityOut.model_validate(a) for a in active],
            activity_count=len(active),
        )

    # -------- Public --------

    def list_public(self) -> List[PublicCategoryOut]:
        categories = self.executor.execute(lambda: self.category_repo.list_tree(active_only=True))
        out: List[PublicCategoryOut] = []
        for c in categories:
            subcategories = sorted(
                (s for s in c.subcategories if s.is_active),
                key=lambda s: (s.display_order, s.id),
            )
            direct = [a for a in self._active_activities(c.activities) if a.subcategory_id is None]
            out.append(
                PublicCategoryOut(
                    id=c.id,
                    slug=c.slug,
                    title_fr=c.title_fr,
                    title_en=c.title_en,
                    description_fr=c.description_fr,
                    description_en=c.description_en,
                    display_order=c.display_order,
                    icon=c.icon,
                    color=c.color,
                    subcategories=[
                        PublicSubcategoryOut(
                            id=s.id,
                            slug=s.slug,
                            title_fr=s.title_fr,
                            title_en=s.title_en,
                            display_order=s.display_order,
                            activities=[
                                ActivityShortOut.model_validate(a) for a in self._active_activities(s.activities)
                            ],
                        )
                        for s in subcategories
                    ],
                    activities=[ActivityShortOut.model_validate(a) for a in direct],
                )
            )
        return out
