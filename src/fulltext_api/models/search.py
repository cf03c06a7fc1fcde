from pydantic import BaseModel


class Hit(BaseModel):
    id: str
    highlighted_lines: list[str] = []


class SearchResult(BaseModel):
    total: int
    took: float  # seconds
    hits: list[Hit] = []


class SearchHit(BaseModel):
    Name: str
    Line: list[str]


class SearchResponse(BaseModel):
    SearchStat: str
    Hits: list[SearchHit]
