"""Shared fixtures: test database, seeded posts and an HTTP client."""

from datetime import timezone
from typing import Any, Optional

import pytest
from faker import Faker
from fastapi.testclient import TestClient

from blogging.shared import config
from blogging.shared.database import Database
from blogging.posts.main import create_app
from blogging.posts.models import BlogPost
from blogging.posts.store import PostStore

SEED_COUNT = 10

fake = Faker()


def generate_author_name() -> dict[str, str]:
    return {"firstName": fake.first_name(), "lastName": fake.last_name()}


def generate_blog_post() -> dict[str, Any]:
    return {
        "author": generate_author_name(),
        "content": "\n\n".join(fake.paragraphs()),
        "title": fake.sentence(),
        "created": fake.past_datetime(tzinfo=timezone.utc),
    }


def lookup(database: Database, post_id: str) -> Optional[BlogPost]:
    """Read a post through a fresh session, independent of the app's sessions."""
    with database.session() as db:
        return PostStore(db).find_by_id(post_id)


@pytest.fixture(scope="session")
def database():
    db = Database(config.TEST_DATABASE_URL)
    db.connect()
    yield db
    db.drop_database()
    db.close()


@pytest.fixture(autouse=True)
def seed_blog_data(database: Database):
    database.create_tables()
    with database.session() as db:
        PostStore(db).insert_many(generate_blog_post() for _ in range(SEED_COUNT))
    yield
    database.drop_database()


@pytest.fixture
def store(database: Database):
    with database.session() as db:
        yield PostStore(db)


@pytest.fixture
def app(database: Database):
    return create_app(database)


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c
