from pathlib import Path

from pydantic import BaseModel


class IndexDescriptor(BaseModel):
    name: str
    path: Path
    doc_count: int = 0


class SkippedIndex(BaseModel):
    name: str
    reason: str


class IndexInfo(BaseModel):
    name: str
    doc_count: int = 0


class IndexListing(BaseModel):
    status: str  # ok, degraded
    indexes: list[IndexInfo] = []
    skipped: list[SkippedIndex] = []
