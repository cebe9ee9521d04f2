from datetime import datetime, timezone
from pathlib import Path

import pytest

from sitecontent.config import Config
from sitecontent.content.models import CollectionType
from sitecontent.errors import (
    ContentValidationError,
    DuplicateSlugError,
    FrontMatterError,
    InvalidFieldType,
    MissingField,
)
from sitecontent.ingest import load_all, load_collections, slug_from_path

FIXTURE_DIR = Path(__file__).parent / "fixtures" / "content" / "blog"


def _write(path: Path, body: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(body, encoding="utf-8")


def test_loads_fixture_collection_in_path_order() -> None:
    entries = load_all("blog", FIXTURE_DIR)

    assert [entry.slug for entry in entries] == [
        "announcing-computesdk",
        "filesystem-api",
        "provider-benchmarks",
        "release-notes",
    ]
    notes = entries[-1]
    assert notes.date == datetime(2025, 12, 17, 9, 30, tzinfo=timezone.utc)
    assert notes.source_path is not None and notes.source_path.endswith("index.md")
    assert entries[1].author == "Jane Doe"
    assert entries[0].featured is True


def test_slug_from_frontmatter_overrides_path(tmp_path: Path) -> None:
    _write(tmp_path / "draft name.md", "---\ntitle: T\ndate: 2026-01-01\nslug: final-name\n---\n")

    entries = load_all(CollectionType.BLOG, tmp_path)

    assert entries[0].slug == "final-name"


def test_slug_from_path_normalizes_segments(tmp_path: Path) -> None:
    path = tmp_path / "Getting Started" / "Quick Start.mdx"

    assert slug_from_path(path, tmp_path) == "getting-started/quick-start"
    assert slug_from_path(tmp_path / "guides" / "index.md", tmp_path) == "guides"
    assert slug_from_path(tmp_path / "index.md", tmp_path) == "index"


def test_missing_title_fails_the_whole_load(tmp_path: Path) -> None:
    _write(tmp_path / "a-good.md", "---\ntitle: Good\ndate: 2026-01-01\n---\n")
    _write(tmp_path / "b-bad.md", "---\ndescription: No title here\n---\nBody")

    with pytest.raises(ContentValidationError) as excinfo:
        load_all("blog", tmp_path)

    error = excinfo.value
    assert error.collection == "blog"
    assert error.source_path.endswith("b-bad.md")
    assert error.errors == [MissingField("title"), MissingField("date")]
    assert "b-bad.md" in str(error)
    assert "title" in str(error) and "date" in str(error)


def test_unparseable_date_fails_with_invalid_field_type(tmp_path: Path) -> None:
    _write(tmp_path / "post.md", '---\ntitle: Post\ndate: "not-a-date"\n---\n')

    with pytest.raises(ContentValidationError) as excinfo:
        load_all("blog", tmp_path)

    [error] = excinfo.value.errors
    assert isinstance(error, InvalidFieldType)
    assert error.field == "date"


def test_duplicate_slug_fails(tmp_path: Path) -> None:
    _write(tmp_path / "launch.md", "---\ntitle: One\ndate: 2026-01-01\n---\n")
    _write(tmp_path / "launch" / "index.md", "---\ntitle: Two\ndate: 2026-01-02\n---\n")

    with pytest.raises(DuplicateSlugError) as excinfo:
        load_all("blog", tmp_path)

    assert excinfo.value.slug == "launch"
    assert len(excinfo.value.paths) == 2


def test_malformed_front_matter_propagates(tmp_path: Path) -> None:
    _write(tmp_path / "open.md", "---\ntitle: Open\n")

    with pytest.raises(FrontMatterError):
        load_all("docs", tmp_path)


def test_ignores_unsupported_files(tmp_path: Path) -> None:
    _write(tmp_path / "guide.md", "---\ntitle: Guide\n---\n")
    _write(tmp_path / "notes.txt", "not content")

    entries = load_all("docs", tmp_path)

    assert [entry.slug for entry in entries] == ["guide"]


def test_returns_empty_when_directory_missing(tmp_path: Path) -> None:
    assert load_all("blog", tmp_path / "missing") == []


def test_load_collections_reads_each_configured_collection(tmp_path: Path) -> None:
    content = tmp_path / "content"
    _write(content / "blog" / "post.md", "---\ntitle: Post\ndate: 2026-01-01\n---\n")
    _write(content / "docs" / "intro.md", "---\ntitle: Intro\n---\n")

    collections = load_collections(Config(content_dir=content))

    assert [entry.slug for entry in collections[CollectionType.BLOG]] == ["post"]
    assert [entry.slug for entry in collections[CollectionType.DOCS]] == ["intro"]


@pytest.mark.parametrize("value", ["2026-02-30", "2026-13-01"])
def test_impossible_unquoted_date_fails_with_invalid_field_type(tmp_path: Path, value: str) -> None:
    _write(tmp_path / "post.md", f"---\ntitle: Post\ndate: {value}\n---\n")

    with pytest.raises(ContentValidationError) as excinfo:
        load_all("blog", tmp_path)

    assert excinfo.value.source_path.endswith("post.md")
    [error] = excinfo.value.errors
    assert isinstance(error, InvalidFieldType)
    assert error.field == "date"
    assert value in error.reason


def test_undecodable_file_names_collection_and_path(tmp_path: Path) -> None:
    (tmp_path / "cafe.md").write_bytes(b"---\ntitle: Caf\xe9\ndate: 2026-01-01\n---\n")

    with pytest.raises(FrontMatterError) as excinfo:
        load_all("blog", tmp_path)

    message = str(excinfo.value)
    assert "collection 'blog'" in message
    assert "cafe.md" in message
    assert "UTF-8" in message


def test_frontmatter_slug_is_normalized(tmp_path: Path) -> None:
    _write(tmp_path / "post.md", "---\ntitle: T\ndate: 2026-01-01\nslug: \" My  Post \"\n---\n")

    entries = load_all("blog", tmp_path)

    assert entries[0].slug == "my-post"
