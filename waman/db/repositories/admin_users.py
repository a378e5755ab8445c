"""
➡️ But : Accès DB aux comptes administrateurs du back-office.

AdminUserRepository : CRUD générique + recherche par email.
"""

from __future__ import annotations

from typing import Optional
from sqlmodel import select

from waman.db.repositories.base import BaseRepository
from waman.db.models.admin_users import AdminUser

class AdminUserRepository(BaseRepository[AdminUser]):
    model = AdminUser

    def get_by_email(self, email: str) -> Optional[AdminUser]:
        """Email normalisé en minuscules à l'écriture comme à la lecture."""
        return self.session.exec(
            select(self.model).where(self.model.email == email.strip().lower())
        ).first()
