"""Load and validate content collections from the workspace."""

from __future__ import annotations

import logging
from pathlib import Path, PurePosixPath
from typing import Any, Iterable, Mapping

from .config import Config
from .content import CollectionType, ContentEntry, read_source
from .errors import ContentValidationError, DuplicateSlugError, FrontMatterError
from .schemas import resolve_collection, validate

logger = logging.getLogger(__name__)

SUPPORTED_SUFFIXES = {".md", ".markdown", ".mdx"}
INDEX_STEM = "index"


def load_all(collection: CollectionType | str, source_dir: str | Path) -> list[ContentEntry]:
    """Load every entry of ``collection`` found under ``source_dir``.

    Aborts on the first entry that fails validation, reporting all of its
    field errors, and on any slug shared by two entries.
    """
    kind = resolve_collection(collection)
    root = Path(source_dir)
    if not root.exists():
        logger.warning("Content directory %s for collection '%s' does not exist.", root, kind.value)
        return []

    entries: list[ContentEntry] = []
    seen: dict[str, str] = {}
    for path in _iter_content_files(root):
        try:
            raw, body = read_source(path)
        except FrontMatterError as exc:
            raise FrontMatterError(f"Invalid entry in collection '{kind.value}': {exc}") from exc
        slug = _resolve_slug(raw, path, root)
        result = validate(kind, raw, slug=slug, body=body, source_path=str(path))
        if not result.ok or result.entry is None:
            raise ContentValidationError(kind.value, str(path), result.errors)

        entry = result.entry
        if entry.slug in seen:
            raise DuplicateSlugError(
                entry.slug,
                collection=kind.value,
                paths=[seen[entry.slug], str(path)],
            )
        seen[entry.slug] = str(path)
        logger.debug("Loaded %s entry '%s' from %s", kind.value, entry.slug, path)
        entries.append(entry)

    logger.info("Loaded %d %s entries from %s", len(entries), kind.value, root)
    return entries


def load_collections(config: Config) -> dict[CollectionType, list[ContentEntry]]:
    """Load every configured collection from ``content_dir/<collection>``."""
    return {
        collection: load_all(collection, config.collection_dir(collection))
        for collection in config.collections
    }


def slug_from_path(path: Path, root: Path) -> str:
    relative = PurePosixPath(path.relative_to(root).with_suffix("").as_posix())
    parts = list(relative.parts)
    if len(parts) > 1 and parts[-1].lower() == INDEX_STEM:
        parts.pop()
    return normalize_slug("/".join(parts))


def normalize_slug(value: str) -> str:
    """Lowercase each path segment and turn inner whitespace into hyphens."""
    segments = (segment.strip() for segment in value.strip().strip("/").split("/"))
    return "/".join("-".join(segment.split()).lower() for segment in segments if segment)


def _resolve_slug(raw: Any, path: Path, root: Path) -> str:
    if isinstance(raw, Mapping):
        value = raw.get("slug")
        if isinstance(value, str) and normalize_slug(value):
            return normalize_slug(value)
    return slug_from_path(path, root)


def _iter_content_files(root: Path) -> Iterable[Path]:
    directories = sorted(p for p in root.rglob("*") if p.is_dir())
    directories.insert(0, root)

    for directory in directories:
        for path in sorted(directory.iterdir()):
            if path.is_file() and path.suffix.lower() in SUPPORTED_SUFFIXES:
                yield path
