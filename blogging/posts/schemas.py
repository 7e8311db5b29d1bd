"""
Pydantic schemas for the posts API.

Defines request/response models with validation.
"""
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field, field_validator


class AuthorName(BaseModel):
    """Structured author as accepted on writes."""
    firstName: str = Field(..., min_length=1, max_length=100)
    lastName: str = Field(..., min_length=1, max_length=100)


class PostCreate(BaseModel):
    """Schema for creating a new post. Unknown fields are ignored."""
    title: str = Field(..., min_length=1, max_length=500)
    content: str = Field(..., min_length=1)
    author: AuthorName


class PostUpdate(BaseModel):
    """Schema for updating a post. All fields optional."""
    id: Optional[str] = None
    title: Optional[str] = Field(None, min_length=1, max_length=500)
    content: Optional[str] = Field(None, min_length=1)
    author: Optional[AuthorName] = None

    @field_validator("title", "content", "author")
    @classmethod
    def reject_null(cls, value):
        """Fields may be left out, but not sent as null."""
        if value is None:
            raise ValueError("may not be null")
        return value


class PostResponse(BaseModel):
    """Serialized post, author flattened to a display name."""
    id: str
    title: str
    content: str
    author: str
    created: datetime
