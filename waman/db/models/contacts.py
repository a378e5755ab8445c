from typing import Optional
from sqlmodel import Field

from .base import BaseModelDB


class Contact(BaseModelDB, table=True):
    """Demandes reçues via le formulaire de contact."""
    __tablename__ = "contacts"

    name: str
    email: str = Field(index=True)
    company: Optional[str] = None
    project_type: Optional[str] = None
    message: str
    status: str = Field(default="nouveau", index=True)  # nouveau | en_cours | traite
