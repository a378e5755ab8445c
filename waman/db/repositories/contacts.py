from waman.db.repositories.base import BaseRepository
from waman.db.models.contacts import Contact


class ContactRepository(BaseRepository[Contact]):
    """CRUD Demandes de contact."""
    model = Contact
