import logging

from fastapi import APIRouter, Depends, HTTPException, Query, Response

from fulltext_api.api.deps import get_executor
from fulltext_api.errors import (
    InvalidIndexName,
    NotFoundOrInvalidIndex,
    QueryExecutionError,
    SearchTimeout,
    SerializationError,
)
from fulltext_api.models.search import SearchHit, SearchResponse, SearchResult
from fulltext_api.search.executor import QueryExecutor
from fulltext_api.utils.duration import format_duration

logger = logging.getLogger(__name__)

router = APIRouter()


def render_response(result: SearchResult) -> str:
    response = SearchResponse(
        SearchStat=f"{result.total} results ({format_duration(result.took)})",
        Hits=[SearchHit(Name=hit.id, Line=hit.highlighted_lines) for hit in result.hits],
    )
    try:
        return response.model_dump_json()
    except ValueError as e:
        raise SerializationError(str(e)) from e


@router.get("/search", response_model=SearchResponse)
async def search(
    i: str = Query("", description="索引名稱"),
    q: str = Query("", description="搜尋字串"),
    size: int | None = Query(None, ge=1, description="回傳數量"),
    offset: int = Query(0, ge=0, alias="from", description="略過筆數"),
    executor: QueryExecutor = Depends(get_executor),
):
    """在指定索引中全文搜尋，回傳 highlight 過的結果。"""
    # 例：/search?i=hpotter&q=nimbus
    try:
        result = await executor.search_async(i, q, size=size, offset=offset)
    except InvalidIndexName:
        raise HTTPException(400, "Invalid index name")
    except NotFoundOrInvalidIndex:
        raise HTTPException(404, "Index not found")
    except SearchTimeout:
        raise HTTPException(504, "Search timed out")
    except QueryExecutionError:
        raise HTTPException(500, "Search failed")

    try:
        body = render_response(result)
    except SerializationError as e:
        logger.error("JSON marshaling error: %s", e)
        raise HTTPException(500, "Internal Server Error")

    return Response(content=body, media_type="application/json")
