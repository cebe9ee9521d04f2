from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, field_validator

from .content.models import CollectionType
from .feeds import FeedChannel

CONFIG_FILENAME = "sitecontent.yml"


class FeedConfig(BaseModel):
    """Options controlling feed generation."""

    enabled: bool = Field(
        default=True,
        description="Toggle syndication feed generation.",
    )
    collection: CollectionType = Field(
        default=CollectionType.BLOG,
        description="Collection whose entries are syndicated.",
    )
    title: str = Field(default="ComputeSDK Blog")
    description: str = Field(
        default="Insights, updates, and technical deep-dives from the ComputeSDK team.",
    )
    base_url: str = Field(
        default="https://www.computesdk.com",
        description="Canonical site URL used for absolute links (e.g., 'https://example.com').",
    )
    language: str = Field(default="en-us")
    output_path: Path = Field(
        default=Path("blog/rss.xml"),
        description="Feed location relative to output_dir.",
    )
    limit: int | None = Field(
        default=None,
        ge=1,
        description="Maximum number of entries to include; unset includes all.",
    )

    @field_validator("output_path", mode="before")
    def _ensure_path(cls, value: Any) -> Path:
        return Path(value)

    @field_validator("base_url")
    def _strip_trailing_slash(cls, value: str) -> str:
        text = value.strip().rstrip("/")
        if not text:
            raise ValueError("base_url cannot be empty")
        return text

    def channel(self) -> FeedChannel:
        return FeedChannel(
            title=self.title,
            description=self.description,
            base_url=self.base_url,
            language=self.language,
        )


class Config(BaseModel):
    project_name: str = Field(default="ComputeSDK Site")
    content_dir: Path = Field(default=Path("src/content"))
    output_dir: Path = Field(default=Path("dist"))
    collections: list[CollectionType] = Field(
        default_factory=lambda: [CollectionType.BLOG, CollectionType.DOCS],
    )
    feed: FeedConfig = Field(default_factory=FeedConfig)

    @field_validator("content_dir", "output_dir", mode="before")
    def _ensure_path(cls, value: Any) -> Path:
        return Path(value)

    def collection_dir(self, collection: CollectionType) -> Path:
        return self.content_dir / collection.value

    @property
    def feed_path(self) -> Path:
        output_path = self.feed.output_path
        if output_path.is_absolute():
            return output_path
        return self.output_dir / output_path


def load_config(path: str | Path) -> Config:
    """Load configuration and resolve relative paths based on the config location.

    The ``path`` argument may point to a file (e.g., ``/site/sitecontent.yml``)
    or a directory containing that file. All relative paths inside the
    configuration are interpreted relative to the directory holding the
    config file.
    """
    candidate = Path(path)
    data: dict[str, Any] = {}
    base_dir: Path
    if candidate.is_dir():
        # A project directory without a config file uses defaults.
        config_file = candidate / CONFIG_FILENAME
        if config_file.exists():
            data = _read_yaml(config_file)
        base_dir = candidate.resolve()
    else:
        if not candidate.exists():
            raise FileNotFoundError(candidate)
        data = _read_yaml(candidate)
        base_dir = candidate.parent.resolve()

    cfg = Config(**data)

    def _abs(value: Path) -> Path:
        return value if value.is_absolute() else (base_dir / value).resolve()

    cfg.content_dir = _abs(cfg.content_dir)
    cfg.output_dir = _abs(cfg.output_dir)
    return cfg


def _read_yaml(path: Path) -> dict[str, Any]:
    with path.open("r", encoding="utf-8") as handle:
        data = yaml.safe_load(handle) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Configuration file {path} must define a mapping.")
    return data
