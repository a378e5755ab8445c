from typing import List, Optional
from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field as PydField
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Champs snake_case côté Python, camelCase côté JSON (titleFr, isFeatured...)."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


# ---------- IN / UPDATE ----------

class ActivityIn(CamelModel):
    slug: str = PydField(..., min_length=1, description="Identifiant d'URL unique")
    title_fr: str = PydField(..., description="Titre FR")
    title_en: Optional[str] = None
    short_desc_fr: Optional[str] = None
    short_desc_en: Optional[str] = None
    description_fr: Optional[str] = None
    description_en: Optional[str] = None
    methodology: Optional[str] = None
    deliverables: Optional[List[str]] = None
    duration: Optional[str] = None
    target_audience: Optional[str] = None
    prerequisites: Optional[str] = None
    technologies: Optional[List[str]] = None
    data_types: Optional[List[str]] = None
    output_formats: Optional[List[str]] = None
    features: Optional[List[str]] = None
    certifications: Optional[List[str]] = None
    display_order: Optional[int] = None
    is_active: Optional[bool] = None
    is_featured: Optional[bool] = None
    image: Optional[str] = None
    category_id: int
    subcategory_id: Optional[int] = None


class ActivityUpdateIn(ActivityIn):
    # obligatoire, mais vérifié par le service (400 explicite plutôt que 422)
    id: Optional[int] = None


# ---------- OUT ----------

class CategorySummaryOut(CamelModel):
    id: int
    slug: str
    title_fr: str
    title_en: Optional[str] = None


class SubcategorySummaryOut(CamelModel):
    id: int
    slug: str
    title_fr: str
    title_en: Optional[str] = None


class ActivityOut(CamelModel):
    id: int
    slug: str
    title_fr: str
    title_en: Optional[str] = None
    short_desc_fr: Optional[str] = None
    short_desc_en: Optional[str] = None
    description_fr: str = ""
    description_en: Optional[str] = None
    methodology: Optional[str] = None
    deliverables: List[str] = []
    duration: Optional[str] = None
    target_audience: Optional[str] = None
    prerequisites: Optional[str] = None
    technologies: List[str] = []
    data_types: List[str] = []
    output_formats: List[str] = []
    features: List[str] = []
    certifications: List[str] = []
    display_order: int = 0
    is_active: bool = True
    is_featured: bool = False
    image: Optional[str] = None
    category_id: int
    subcategory_id: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class ActivityWithParentsOut(ActivityOut):
    category: Optional[CategorySummaryOut] = None
    subcategory: Optional[SubcategorySummaryOut] = None


class ActivityShortOut(CamelModel):
    """Projection publique (cartes du site)."""
    id: int
    slug: str
    title_fr: str
    title_en: Optional[str] = None
    short_desc_fr: Optional[str] = None
    short_desc_en: Optional[str] = None
    image: Optional[str] = None
    is_featured: bool = False


class SubcategoryTreeOut(CamelModel):
    id: int
    slug: str
    title_fr: str
    title_en: Optional[str] = None
    display_order: int = 0
    activities: List[ActivityOut] = []


class CategoryTreeOut(CamelModel):
    id: int
    slug: str
    title_fr: str
    title_en: Optional[str] = None
    description_fr: Optional[str] = None
    description_en: Optional[str] = None
    display_order: int = 0
    icon: Optional[str] = None
    color: Optional[str] = None
    is_active: bool = True
    subcategories: List[SubcategoryTreeOut] = []
    activities: List[ActivityOut] = []
    activity_count: int = 0


class PublicSubcategoryOut(CamelModel):
    id: int
    slug: str
    title_fr: str
    title_en: Optional[str] = None
    display_order: int = 0
    activities: List[ActivityShortOut] = []


class PublicCategoryOut(CamelModel):
    id: int
    slug: str
    title_fr: str
    title_en: Optional[str] = None
    description_fr: Optional[str] = None
    description_en: Optional[str] = None
    display_order: int = 0
    icon: Optional[str] = None
    color: Optional[str] = None
    subcategories: List[PublicSubcategoryOut] = []
    # activités rattachées directement à la catégorie (sans sous-catégorie)
    activities: List[ActivityShortOut] = []
