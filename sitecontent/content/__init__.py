"""Content entry models and source parsing."""

from .models import CollectionType, ContentEntry
from .parsers import read_source, split_front_matter

__all__ = [
    "CollectionType",
    "ContentEntry",
    "read_source",
    "split_front_matter",
]
