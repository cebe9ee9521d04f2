"""Frontmatter schemas per collection and the validation entry point."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date, datetime, time, timezone
from types import MappingProxyType
from typing import Any, Callable, Mapping, Optional

from pydantic import TypeAdapter, ValidationError

from .content.models import CollectionType, ContentEntry
from .errors import InvalidFieldType, MissingField, SchemaError, UnknownCollectionError

logger = logging.getLogger(__name__)

Transform = Callable[[Any], Any]

DEFAULT_AUTHOR = "ComputeSDK Team"
DEFAULT_ROLE = "Developer"


def parse_timestamp(value: Any) -> datetime:
    """Coerce an ISO-8601 date or datetime (string or YAML scalar) to an aware datetime."""
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime.combine(value, time.min)
    elif isinstance(value, str):
        text = value.strip()
        if text.endswith("Z"):
            text = f"{text[:-1]}+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            raise ValueError(f"'{value}' is not an ISO-8601 date") from None
    else:
        raise ValueError(f"expected an ISO-8601 date, got {type(value).__name__}")
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def parse_tags(value: Any) -> tuple[str, ...]:
    """Accept a list of strings (or a single string) and drop duplicates in order."""
    if isinstance(value, str):
        value = [value]
    items = TypeAdapter(list[str]).validate_python(value)
    result: list[str] = []
    seen: set[str] = set()
    for item in items:
        tag = item.strip()
        if tag and tag not in seen:
            seen.add(tag)
            result.append(tag)
    return tuple(result)


@dataclass(frozen=True, slots=True)
class FieldSpec:
    """Declaration of one frontmatter field."""

    name: str
    type: Any = str
    required: bool = False
    default: Any = None
    transform: Optional[Transform] = None

    def coerce(self, value: Any) -> Any:
        if self.transform is not None:
            return self.transform(value)
        return TypeAdapter(self.type).validate_python(value)


@dataclass(frozen=True, slots=True)
class CollectionSchema:
    """Ordered field declarations for one collection."""

    collection: CollectionType
    fields: tuple[FieldSpec, ...] = field(default_factory=tuple)

    @property
    def field_names(self) -> frozenset[str]:
        return frozenset(spec.name for spec in self.fields)


@dataclass(frozen=True, slots=True)
class ValidationResult:
    """Outcome of validating one entry: an entry or the full list of errors."""

    entry: Optional[ContentEntry] = None
    errors: tuple[SchemaError, ...] = ()

    @property
    def ok(self) -> bool:
        return not self.errors


BLOG_SCHEMA = CollectionSchema(
    collection=CollectionType.BLOG,
    fields=(
        FieldSpec("title", str, required=True),
        FieldSpec("description", str),
        FieldSpec("date", required=True, transform=parse_timestamp),
        FieldSpec("updated_date", transform=parse_timestamp),
        FieldSpec("author", str, default=DEFAULT_AUTHOR),
        FieldSpec("role", str, default=DEFAULT_ROLE),
        FieldSpec("featured", bool),
        FieldSpec("tags", transform=parse_tags),
        FieldSpec("image", str),
    ),
)

# Docs accept every blog field for cross-listing; only title is required.
DOCS_SCHEMA = CollectionSchema(
    collection=CollectionType.DOCS,
    fields=(
        FieldSpec("title", str, required=True),
        FieldSpec("description", str),
        FieldSpec("date", transform=parse_timestamp),
        FieldSpec("updated_date", transform=parse_timestamp),
        FieldSpec("author", str),
        FieldSpec("role", str),
        FieldSpec("featured", bool),
        FieldSpec("tags", transform=parse_tags),
        FieldSpec("image", str),
    ),
)

SCHEMAS: Mapping[CollectionType, CollectionSchema] = MappingProxyType(
    {
        CollectionType.BLOG: BLOG_SCHEMA,
        CollectionType.DOCS: DOCS_SCHEMA,
    }
)

# Keys consumed by the loader rather than the schema.
RESERVED_KEYS = frozenset({"slug"})


def resolve_collection(collection: CollectionType | str) -> CollectionType:
    if isinstance(collection, CollectionType):
        return collection
    try:
        return CollectionType(str(collection).strip().lower())
    except ValueError:
        raise UnknownCollectionError(str(collection)) from None


def get_schema(collection: CollectionType | str) -> CollectionSchema:
    return SCHEMAS[resolve_collection(collection)]


def validate(
    collection: CollectionType | str,
    raw: Any,
    *,
    slug: str,
    body: str = "",
    source_path: str | None = None,
) -> ValidationResult:
    """Validate raw frontmatter for ``collection``.

    Every declared field is checked and all problems are returned together;
    the entry is only built when no errors were found. Unknown keys are
    ignored.
    """
    schema = get_schema(collection)
    if not isinstance(raw, Mapping):
        reason = f"expected a mapping of fields, got {type(raw).__name__}"
        return ValidationResult(errors=(InvalidFieldType("frontmatter", reason),))

    values: dict[str, Any] = {}
    errors: list[SchemaError] = []
    for spec in schema.fields:
        value = raw.get(spec.name)
        if _is_blank(value):
            if spec.required:
                errors.append(MissingField(spec.name))
            elif spec.default is not None:
                values[spec.name] = spec.default
            continue
        try:
            values[spec.name] = spec.coerce(value)
        except ValidationError as exc:
            errors.append(InvalidFieldType(spec.name, _summarize(exc)))
        except (TypeError, ValueError) as exc:
            errors.append(InvalidFieldType(spec.name, str(exc)))

    ignored = set(raw) - schema.field_names - RESERVED_KEYS
    if ignored:
        logger.debug("Ignoring unknown fields %s in %s", sorted(map(str, ignored)), source_path or slug)

    if errors:
        return ValidationResult(errors=tuple(errors))

    entry = ContentEntry(
        slug=slug,
        collection=schema.collection,
        body=body,
        source_path=source_path,
        **values,
    )
    return ValidationResult(entry=entry)


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    return isinstance(value, str) and not value.strip()


def _summarize(exc: ValidationError) -> str:
    messages = [error["msg"] for error in exc.errors()]
    return "; ".join(messages) or str(exc)
