from typing import Optional
from sqlmodel import Field

from .base import BaseModelDB


class AdminUser(BaseModelDB, table=True):
    __tablename__ = "admin_users"

    email: str = Field(index=True, unique=True)
    hashed_password: str
    name: Optional[str] = None
    is_active: bool = Field(default=True)
