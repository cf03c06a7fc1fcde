"""Pytest configuration and fixtures."""

from collections.abc import Generator
from pathlib import Path

import pytest
import tantivy
from fastapi.testclient import TestClient

from fulltext_api.config import Settings
from fulltext_api.main import create_app

HPOTTER_DOCS = [
    ("hp-001", ["Harry caught the Snitch and won the Quidditch match for Gryffindor."]),
    (
        "hp-002",
        [
            "The Nimbus Two Thousand was the fastest broom in the school.",
            "Wood wanted to talk about Quidditch tactics before breakfast.",
        ],
    ),
    ("hp-003", ["Hermione spent the whole evening in the library."]),
]


def build_index(
    path: Path,
    docs: list[tuple[str, list[str]]],
    text_field: str = "Line",
    with_id: bool = True,
) -> Path:
    """Write a small tantivy index with an optional raw `id` field."""
    path.mkdir(parents=True)
    builder = tantivy.SchemaBuilder()
    if with_id:
        builder.add_text_field("id", stored=True, tokenizer_name="raw")
    builder.add_text_field(text_field, stored=True)
    schema = builder.build()

    index = tantivy.Index(schema, path=str(path))
    writer = index.writer()
    for doc_id, lines in docs:
        doc = tantivy.Document()
        if with_id:
            doc.add_text("id", doc_id)
        for line in lines:
            doc.add_text(text_field, line)
        writer.add_document(doc)
    writer.commit()
    writer.wait_merging_threads()
    return path


@pytest.fixture
def data_root(tmp_path: Path) -> Path:
    """Data root with two valid indexes and one stray file."""
    root = tmp_path / "data"
    root.mkdir()
    build_index(root / "hpotter", HPOTTER_DOCS)
    build_index(
        root / "notes",
        [("n-1", ["Buy a new broom"]), ("n-2", ["Return library books"])],
        text_field="body",
    )
    (root / "README.txt").write_text("not an index")
    return root


@pytest.fixture
def broken_root(data_root: Path) -> Path:
    """Same data root plus a directory that is not a tantivy index."""
    broken = data_root / "broken"
    broken.mkdir()
    (broken / "junk.bin").write_bytes(b"\x00\x01\x02")
    return data_root


@pytest.fixture
def settings(data_root: Path) -> Settings:
    return Settings(data_dir=str(data_root))


@pytest.fixture
def client(settings: Settings) -> Generator[TestClient, None, None]:
    with TestClient(create_app(settings)) as test_client:
        yield test_client
