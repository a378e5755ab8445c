from typing import Optional, Sequence
from sqlmodel import select
from sqlalchemy.orm import selectinload

from waman.db.repositories.base import BaseRepository
from waman.db.models.activities import Activity, ActivityCategory, ActivitySubcategory


class ActivityCategoryRepository(BaseRepository[ActivityCategory]):
    """Catégories + chargement de l'arbre complet."""
    model = ActivityCategory

    def get_by_slug(self, slug: str) -> Optional[ActivityCategory]:
        return self.session.exec(select(self.model).where(self.model.slug == slug)).first()

    def list_tree(self, *, active_only: bool = False) -> Sequence[ActivityCategory]:
        """
        Catégories triées par display_order, avec sous-catégories et activités préchargées.
        Le filtrage des enfants actifs est fait par le service (projection).
        """
        stmt = (
            select(self.model)
            .options(
                selectinload(ActivityCategory.subcategories).selectinload(ActivitySubcategory.activities),
                selectinload(ActivityCategory.activities),
            )
            .order_by(self.model.display_order.asc(), self.model.id.asc())
        )
        if active_only:
            stmt = stmt.where(self.model.is_active.is_(True))
        with self._rollback_on_error():
            return self.session.exec(stmt).all()


class ActivitySubcategoryRepository(BaseRepository[ActivitySubcategory]):
    model = ActivitySubcategory

    def get_by_slug(self, slug: str) -> Optional[ActivitySubcategory]:
        return self.session.exec(select(self.model).where(self.model.slug == slug)).first()


class ActivityRepository(BaseRepository[Activity]):
    """CRUD Activités + liste avec catégorie / sous-catégorie."""
    model = Activity

    def list_with_parents(self, *, limit: int = 500) -> Sequence[Activity]:
        stmt = (
            select(self.model)
            .options(selectinload(Activity.category), selectinload(Activity.subcategory))
            .order_by(self.model.display_order.asc(), self.model.id.asc())
            .limit(limit)
        )
        with self._rollback_on_error():
            return self.session.exec(stmt).all()
