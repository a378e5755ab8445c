from waman.db.repositories.base import BaseRepository
from waman.db.models.partners import Partner


class PartnerRepository(BaseRepository[Partner]):
    """CRUD Partenaires."""
    model = Partner
