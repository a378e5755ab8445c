from waman.db.repositories.base import BaseRepository
from waman.db.models.projects import Project


class ProjectRepository(BaseRepository[Project]):
    """CRUD Projets."""
    model = Project
