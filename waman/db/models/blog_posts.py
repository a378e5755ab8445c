from typing import Optional
from sqlmodel import Field

from .base import BaseModelDB


class BlogPost(BaseModelDB, table=True):
    """Articles du blog (titre FR obligatoire, EN optionnel)."""
    __tablename__ = "blog_posts"

    title_fr: str
    title_en: Optional[str] = None
    content: str
    category: str = Field(index=True)
    author: Optional[str] = None
    image: Optional[str] = None
    featured: bool = Field(default=False)
    published: bool = Field(default=True)
