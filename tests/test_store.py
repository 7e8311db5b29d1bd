"""PostStore and BlogPost against the test database."""

from datetime import datetime, timezone

import pytest
from sqlalchemy.exc import IntegrityError

from blogging.posts.models import BlogPost
from blogging.posts.store import PostStore
from tests.conftest import SEED_COUNT, generate_blog_post, lookup


def test_insert_many_assigns_ids(store):
    docs = [generate_blog_post() for _ in range(3)]
    posts = store.insert_many(docs)
    assert len(posts) == 3
    assert all(post.id for post in posts)
    assert len({post.id for post in posts}) == 3
    assert store.count() == SEED_COUNT + 3


def test_created_defaults_to_now(store):
    doc = generate_blog_post()
    del doc["created"]
    post = store.insert_one(doc)
    assert isinstance(post.created, datetime)


def test_find_returns_every_post(store):
    assert len(store.find()) == SEED_COUNT


def test_find_by_id_unknown_returns_none(store):
    assert store.find_by_id("doesnotexist") is None


def test_find_by_id_sees_writes_from_other_sessions(store, database):
    post = store.find_one()
    with database.session() as db:
        PostStore(db).find_one_and_update(post.id, {"title": "changed elsewhere"})
    assert store.find_by_id(post.id).title == "changed elsewhere"


def test_find_one_and_update_ignores_unknown_fields(store, database):
    post = store.find_one()
    updated = store.find_one_and_update(post.id, {"title": "new", "id": "hijack", "created": None})
    assert updated.id == post.id
    assert updated.title == "new"
    assert updated.created is not None
    assert lookup(database, post.id).title == "new"


def test_find_one_and_update_unknown_returns_none(store):
    assert store.find_one_and_update("doesnotexist", {"title": "x"}) is None


def test_find_by_id_and_remove(store, database):
    post = store.find_one()
    removed = store.find_by_id_and_remove(post.id)
    assert removed.id == post.id
    assert lookup(database, post.id) is None
    assert store.count() == SEED_COUNT - 1
    assert store.find_by_id_and_remove(post.id) is None


def test_drop_database_removes_everything(store, database):
    database.drop_database()
    database.create_tables()
    assert store.count() == 0


def test_serialize():
    post = BlogPost(
        id="abc",
        title="T",
        content="C",
        author={"firstName": "Jane", "lastName": "Doe"},
        created=datetime(2024, 1, 2, 3, 4, 5),
    )
    assert post.author_name == "Jane Doe"
    assert post.serialize() == {
        "id": "abc",
        "title": "T",
        "content": "C",
        "author": "Jane Doe",
        "created": datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc),
    }


def test_null_author_rejected_by_database(store):
    post = store.find_one()
    with pytest.raises(IntegrityError):
        store.find_one_and_update(post.id, {"author": None})
    store.db.rollback()
