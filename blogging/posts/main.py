"""
Posts API

CRUD endpoints for blog posts.
"""
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session

from blogging.shared import config
from blogging.shared.cors import setup_cors
from blogging.shared.database import Database, get_database, get_db
from blogging.shared.errors import setup_error_handlers, validation_detail
from blogging.posts.schemas import PostCreate, PostUpdate, PostResponse
from blogging.posts.store import PostStore

logger = logging.getLogger(__name__)

router = APIRouter(tags=["posts"])


def get_store(db: Session = Depends(get_db)) -> PostStore:
    return PostStore(db)


@router.get("/health")
def health(database: Database = Depends(get_database)):
    """Health check endpoint."""
    db_connected = database.check_connection()
    return {
        "status": "ok" if db_connected else "degraded",
        "service": "blog",
        "database": "connected" if db_connected else "disconnected",
    }


@router.get("/posts", response_model=list[PostResponse])
def list_posts(store: PostStore = Depends(get_store)):
    """List every post."""
    return [post.serialize() for post in store.find()]


@router.get("/posts/{post_id}", response_model=PostResponse)
def get_post(post_id: str, store: PostStore = Depends(get_store)):
    post = store.find_by_id(post_id)
    if post is None:
        raise HTTPException(status_code=404, detail="Post not found")
    return post.serialize()


@router.post("/posts", response_model=PostResponse, status_code=201)
def create_post(post_data: PostCreate, store: PostStore = Depends(get_store)):
    """Create a new post. The creation time is always assigned by the server."""
    post = store.insert_one(post_data.model_dump())
    logger.info(f"Created post {post.id}")
    return post.serialize()


@router.put("/posts/{post_id}", status_code=204)
def update_post(post_id: str, post_data: PostUpdate, store: PostStore = Depends(get_store)):
    """Update only the fields sent over."""
    if post_data.id is not None and post_data.id != post_id:
        message = f"Request path id ({post_id}) and request body id ({post_data.id}) must match"
        logger.info(message)
        raise HTTPException(status_code=400, detail=validation_detail(message))

    update_data = post_data.model_dump(exclude_unset=True, exclude={"id"})
    post = store.find_one_and_update(post_id, update_data)
    if post is None:
        raise HTTPException(status_code=404, detail="Post not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/posts/{post_id}", status_code=204)
def delete_post(post_id: str, store: PostStore = Depends(get_store)):
    if store.find_by_id_and_remove(post_id) is None:
        raise HTTPException(status_code=404, detail="Post not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)


def create_app(database: Optional[Database] = None) -> FastAPI:
    """
    Build the blogging app around a Database.

    The database is connected when the app starts and closed when it shuts
    down. Without an explicit database one is built from DATABASE_URL.
    """
    if database is None:
        database = Database(config.DATABASE_URL)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        database.connect()
        try:
            yield
        finally:
            database.close()

    app = FastAPI(
        title="Blogging API",
        version="1.0.0",
        description="Create, read, update and delete blog posts",
        lifespan=lifespan,
    )
    app.state.database = database

    setup_cors(app)
    setup_error_handlers(app)
    app.include_router(router)
    return app
