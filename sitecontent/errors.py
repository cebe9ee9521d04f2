"""Error types raised and collected by the content pipeline."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence


@dataclass(frozen=True, slots=True)
class SchemaError:
    """A single field-level problem found while validating frontmatter."""

    field: str

    def describe(self) -> str:
        return f"{self.field}: invalid"


@dataclass(frozen=True, slots=True)
class MissingField(SchemaError):
    """A required field is absent or empty."""

    def describe(self) -> str:
        return f"{self.field}: required field is missing"


@dataclass(frozen=True, slots=True)
class InvalidFieldType(SchemaError):
    """A present field could not be coerced to its declared type."""

    reason: str = ""

    def describe(self) -> str:
        return f"{self.field}: {self.reason or 'invalid value'}"


class ContentError(ValueError):
    """Base class for failures that abort a content load."""


class UnknownCollectionError(ContentError):
    """Raised when a collection name has no registered schema."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Unknown content collection '{name}'.")
        self.name = name


class FrontMatterError(ContentError):
    """Raised when a source document has malformed frontmatter."""


class ContentValidationError(ContentError):
    """Raised when an entry fails validation; carries every error for that entry."""

    def __init__(
        self,
        collection: str,
        source_path: str,
        errors: Sequence[SchemaError],
    ) -> None:
        self.collection = collection
        self.source_path = source_path
        self.errors = list(errors)
        details = "; ".join(error.describe() for error in self.errors)
        super().__init__(
            f"Invalid entry in collection '{collection}': {source_path} ({details})"
        )


class DuplicateSlugError(ContentError):
    """Raised when two entries of one collection resolve to the same slug."""

    def __init__(self, slug: str, *, collection: str = "", paths: Sequence[str] = ()) -> None:
        self.slug = slug
        self.collection = collection
        self.paths = list(paths)
        message = f"Duplicate slug '{slug}'"
        if collection:
            message += f" in collection '{collection}'"
        if self.paths:
            message += f": {', '.join(self.paths)}"
        super().__init__(message)
