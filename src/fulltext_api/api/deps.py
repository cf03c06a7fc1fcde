from fastapi import Request

from fulltext_api.search.executor import QueryExecutor
from fulltext_api.storage.registry import IndexStore


def get_index_store(request: Request) -> IndexStore:
    return request.app.state.index_store


def get_executor(request: Request) -> QueryExecutor:
    return request.app.state.executor
