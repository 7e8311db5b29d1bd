"""
Post store

Document-store style operations over a SQLAlchemy session. Every write
commits before returning so a following read sees it.
"""

import logging
from typing import Any, Iterable, Optional

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from blogging.posts.models import BlogPost

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = ("title", "content", "author")


class PostStore:
    """BlogPost persistence bound to one session."""

    def __init__(self, db: Session):
        self.db = db

    def insert_many(self, docs: Iterable[dict[str, Any]]) -> list[BlogPost]:
        """Insert several posts at once and return them with ids assigned."""
        posts = [BlogPost(**doc) for doc in docs]
        self.db.add_all(posts)
        self.db.commit()
        for post in posts:
            self.db.refresh(post)
        logger.info(f"Inserted {len(posts)} posts")
        return posts

    def insert_one(self, doc: dict[str, Any]) -> BlogPost:
        return self.insert_many([doc])[0]

    def find(self) -> list[BlogPost]:
        return list(self.db.scalars(select(BlogPost)))

    def find_one(self) -> Optional[BlogPost]:
        return self.db.scalars(select(BlogPost).limit(1)).first()

    def find_by_id(self, post_id: str) -> Optional[BlogPost]:
        # Always hit the database so writes from other sessions are visible
        return self.db.get(BlogPost, post_id, populate_existing=True)

    def find_one_and_update(self, post_id: str, patch: dict[str, Any]) -> Optional[BlogPost]:
        """
        Overwrite the given fields of one post.

        Keys other than title, content and author are ignored.
        Returns the updated post, or None if the id is unknown.
        """
        post = self.find_by_id(post_id)
        if post is None:
            return None

        for key, value in patch.items():
            if key in UPDATABLE_FIELDS:
                setattr(post, key, value)

        self.db.commit()
        self.db.refresh(post)
        logger.info(f"Updated post {post_id}: {sorted(k for k in patch if k in UPDATABLE_FIELDS)}")
        return post

    def find_by_id_and_remove(self, post_id: str) -> Optional[BlogPost]:
        """Delete one post. Returns the removed post, or None if the id is unknown."""
        post = self.find_by_id(post_id)
        if post is None:
            return None

        self.db.delete(post)
        self.db.commit()
        logger.info(f"Deleted post {post_id}")
        return post

    def count(self) -> int:
        return self.db.scalar(select(func.count()).select_from(BlogPost))
