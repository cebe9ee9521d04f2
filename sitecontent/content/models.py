"""Typed representations of validated content entries."""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class CollectionType(str, Enum):
    """Named content collections known to the site."""

    BLOG = "blog"
    DOCS = "docs"


class ContentEntry(BaseModel):
    """A content entry whose frontmatter has passed schema validation."""

    model_config = ConfigDict(frozen=True)

    slug: str = Field(description="URL-friendly identifier, unique per collection.")
    collection: CollectionType = Field(description="Collection the entry belongs to.")
    title: str = Field(description="Display title.")
    description: Optional[str] = Field(default=None, description="Short summary.")
    date: Optional[datetime] = Field(default=None, description="Publication timestamp.")
    updated_date: Optional[datetime] = Field(
        default=None, description="Last modification timestamp."
    )
    tags: tuple[str, ...] = Field(default=(), description="Free-form tags in display order.")
    featured: Optional[bool] = Field(default=None)
    author: Optional[str] = Field(default=None)
    role: Optional[str] = Field(default=None)
    image: Optional[str] = Field(default=None, description="Cover image path or URL.")
    body: str = Field(default="", description="Raw body text, not interpreted.")
    source_path: Optional[str] = Field(default=None, description="Path to the source file.")

    @field_validator("slug")
    def _normalize_slug(cls, value: str) -> str:
        cleaned = value.strip().strip("/")
        if not cleaned:
            raise ValueError("slug cannot be empty")
        return cleaned
