"""Split source documents into frontmatter and body."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from ..errors import FrontMatterError

DELIMITER = "---"
TIMESTAMP_TAG = "tag:yaml.org,2002:timestamp"


class _FrontMatterLoader(yaml.SafeLoader):
    """Safe loader that leaves dates as strings for the schema to parse."""


_FrontMatterLoader.yaml_implicit_resolvers = {
    first: [(tag, pattern) for tag, pattern in resolvers if tag != TIMESTAMP_TAG]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}


def read_source(path: str | Path) -> tuple[Any, str]:
    """Read a markdown file and return its raw frontmatter mapping and body."""
    source_path = Path(path)
    try:
        text = source_path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise FrontMatterError(f"{source_path}: file is not valid UTF-8 ({exc.reason})") from exc
    try:
        return split_front_matter(text)
    except FrontMatterError as exc:
        raise FrontMatterError(f"{source_path}: {exc}") from exc


def split_front_matter(text: str) -> tuple[Any, str]:
    """Separate a leading ``---`` delimited metadata block from the body.

    Text without a leading delimiter has no metadata. The block itself is
    YAML; plain ``key: value`` lines are the common case. A non-mapping block
    is returned as-is so the schema layer can report it.
    """
    text = text.lstrip("\ufeff")
    lines = text.splitlines()
    if not lines or lines[0].strip() != DELIMITER:
        return {}, text

    front_lines: list[str] = []
    for idx, line in enumerate(lines[1:], start=1):
        if line.strip() == DELIMITER:
            body = "\n".join(lines[idx + 1 :])
            return _parse_block("\n".join(front_lines)), body.strip()
        front_lines.append(line)
    raise FrontMatterError("Closing front matter delimiter '---' missing.")


def _parse_block(raw: str) -> Any:
    try:
        data = yaml.load(raw, Loader=_FrontMatterLoader)
    except yaml.YAMLError as exc:
        raise FrontMatterError(f"Front matter is not valid YAML: {exc}") from exc
    return {} if data is None else data
