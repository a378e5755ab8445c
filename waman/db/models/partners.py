from typing import Optional
from sqlmodel import Field

from .base import BaseModelDB


class Partner(BaseModelDB, table=True):
    """Partenaires institutionnels affichés sur le site (logos)."""
    __tablename__ = "partners"

    name: str
    category: str = Field(index=True)
    logo: Optional[str] = None
    url: Optional[str] = None
    active: bool = Field(default=True)
    # ordre d'affichage (exposé "partnerOrder" côté API)
    order: int = Field(default=0, index=True)
