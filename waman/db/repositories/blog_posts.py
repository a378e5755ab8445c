from waman.db.repositories.base import BaseRepository
from waman.db.models.blog_posts import BlogPost


class BlogPostRepository(BaseRepository[BlogPost]):
    """CRUD Articles du blog."""
    model = BlogPost
