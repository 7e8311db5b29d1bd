"""
Blog post database model.

The author is kept as a small JSON document ({"firstName", "lastName"})
and flattened into a display name when serialized.
"""
from datetime import datetime, timezone
from uuid import uuid4

from sqlalchemy import Column, String, Text, DateTime, JSON

from blogging.shared.database import Base


def generate_post_id() -> str:
    return uuid4().hex


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class BlogPost(Base):
    """A single blog entry."""
    __tablename__ = "blog_posts"

    id = Column(String(32), primary_key=True, default=generate_post_id)
    title = Column(String(500), nullable=False)
    content = Column(Text, nullable=False)
    author = Column(JSON(none_as_null=True), nullable=False)  # {"firstName": "...", "lastName": "..."}
    created = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    @property
    def author_name(self) -> str:
        return f"{self.author['firstName']} {self.author['lastName']}"

    def serialize(self) -> dict:
        """Convert post to dictionary for API responses."""
        created = self.created
        if created is not None and created.tzinfo is None:
            # SQLite hands back naive values; they were stored as UTC
            created = created.replace(tzinfo=timezone.utc)
        return {
            "id": self.id,
            "title": self.title,
            "content": self.content,
            "author": self.author_name,
            "created": created,
        }

    def __repr__(self) -> str:
        return f"<BlogPost id={self.id!r} title={self.title!r}>"
