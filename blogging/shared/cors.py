"""CORS configuration for the blogging API."""

import os
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from blogging.shared import config


# Development origins (only outside production)
DEV_ORIGINS = [
    "http://localhost:5173",
    "http://localhost:3000",
    "http://localhost:8080",
]


def get_allowed_origins() -> list[str]:
    """Build the list of allowed CORS origins for the current environment."""
    origins = []

    # Comma separated list from env, e.g. "https://blog.example.com,https://www.blog.example.com"
    extra = os.getenv("CORS_ORIGINS", "")
    for origin in extra.split(","):
        clean = origin.strip().rstrip("/")
        if clean and clean not in origins:
            origins.append(clean)

    frontend_url = os.getenv("FRONTEND_URL")
    if frontend_url:
        clean_url = frontend_url.rstrip("/")
        if clean_url not in origins:
            origins.append(clean_url)

    if config.ENVIRONMENT != "production":
        origins.extend(o for o in DEV_ORIGINS if o not in origins)

    return origins


def setup_cors(app: FastAPI) -> None:
    """Add CORS middleware to a FastAPI app."""
    app.add_middleware(
        CORSMiddleware,
        allow_origins=get_allowed_origins(),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
