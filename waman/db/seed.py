import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml
from sqlmodel import Session

from waman.core.config import jwt_settings
from waman.db.models.activities import ActivityCategory, ActivitySubcategory
from waman.db.repositories.activities import ActivityCategoryRepository, ActivitySubcategoryRepository
from waman.db.repositories.admin_users import AdminUserRepository
from waman.features.authentication.services import AuthService

logger = logging.getLogger("waman.seed")

_CATEGORY_FIELDS = (
    "title_fr",
    "title_en",
    "description_fr",
    "description_en",
    "display_order",
    "icon",
    "color",
    "is_active",
)
_SUBCATEGORY_FIELDS = ("title_fr", "title_en", "display_order", "is_active")


# -----------------------------
# YAML loader
# -----------------------------
def load_seed_yaml(seed_path: str | Path) -> Dict[str, Any]:
    path = Path(seed_path)
    if not path.exists():
        raise FileNotFoundError(f"Seed YAML introuvable: {path}")

    data = yaml.safe_load(path.read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError("Le YAML de seed doit contenir un objet racine (mapping).")
    return data


def _pick(item: Dict[str, Any], fields) -> Dict[str, Any]:
    return {k: item[k] for k in fields if k in item}


# -----------------------------
# Catégories
# -----------------------------
def seed_categories(session: Session, data: Dict[str, Any]) -> Dict[str, ActivityCategory]:
    """Crée les catégories absentes ; une catégorie existante (même slug) n'est pas modifiée."""
    repo = ActivityCategoryRepository(session)
    items: List[Dict[str, Any]] = data.get("categories") or []
    if not items:
        logger.warning("No category in seed YAML (key 'categories')")

    by_slug: Dict[str, ActivityCategory] = {}
    created = 0
    for item in items:
        slug = item["slug"]
        category = repo.get_by_slug(slug)
        if category is None:
            category = repo.create(slug=slug, **_pick(item, _CATEGORY_FIELDS))
            created += 1
        by_slug[slug] = category

    logger.info("Seeded %s activity categories (%s new)", len(by_slug), created)
    return by_slug


# -----------------------------
# Sous-catégories
# -----------------------------
def seed_subcategories(
    session: Session,
    data: Dict[str, Any],
    categories: Dict[str, ActivityCategory],
) -> int:
    repo = ActivitySubcategoryRepository(session)
    items: List[Dict[str, Any]] = data.get("subcategories") or []

    created = 0
    for item in items:
        parent_slug = item.get("category")
        parent = categories.get(parent_slug)
        if parent is None:
            raise ValueError(f"Sous-catégorie '{item.get('slug')}' : catégorie inconnue '{parent_slug}'")

        existing: Optional[ActivitySubcategory] = repo.get_by_slug(item["slug"])
        if existing is not None:
            continue
        repo.create(slug=item["slug"], category_id=parent.id, **_pick(item, _SUBCATEGORY_FIELDS))
        created += 1

    logger.info("Seeded %s activity subcategories (%s new)", len(items), created)
    return created


# -----------------------------
# Compte admin initial
# -----------------------------
def seed_admin(session: Session, *, email: Optional[str], password: Optional[str]) -> bool:
    if not email or not password:
        logger.info("ADMIN_EMAIL / ADMIN_PASSWORD not set, admin account skipped")
        return False
    auth = AuthService(user_repo=AdminUserRepository(session), jwt_settings=jwt_settings)
    user = auth.ensure_admin(email=email, password=password)
    logger.info("Admin account ready", extra={"email": user.email})
    return True


def seed_all(
    session: Session,
    seed_path: str | Path,
    *,
    admin_email: Optional[str] = None,
    admin_password: Optional[str] = None,
) -> None:
    data = load_seed_yaml(seed_path)
    categories = seed_categories(session, data)
    seed_subcategories(session, data, categories)
    seed_admin(session, email=admin_email, password=admin_password)
