"""單次查詢的執行：開啟索引 → match query → highlight → 關閉。"""

import asyncio
import logging
import time

from fulltext_api.config import Settings
from fulltext_api.errors import NotFoundOrInvalidIndex, QueryExecutionError, SearchTimeout
from fulltext_api.models.search import SearchResult
from fulltext_api.storage.registry import IndexStore
from fulltext_api.storage.tantivy_index import TantivyIndex

logger = logging.getLogger(__name__)


class QueryExecutor:
    """無狀態；每次呼叫各自開啟並關閉自己的索引 handle，可同時被多個請求使用。"""

    def __init__(self, settings: Settings, store: IndexStore):
        self.settings = settings
        self.store = store

    def search(
        self,
        index_name: str,
        term: str,
        *,
        size: int | None = None,
        offset: int = 0,
    ) -> SearchResult:
        logger.info('Searching through index "%s" for "%s"', index_name, term)

        try:
            path = self.store.resolve(index_name)
            index = TantivyIndex.open(path, name=index_name)
        except NotFoundOrInvalidIndex as e:
            logger.warning("error opening index %s: %s", index_name, e.reason)
            raise

        with index:
            start = time.perf_counter()
            try:
                limit = self.settings.effective_size(size, index.num_docs())
                total, hits = index.search(
                    term,
                    limit=limit,
                    offset=offset,
                    highlight_field=self.settings.highlight_field,
                    id_field=self.settings.id_field,
                    snippet_max_chars=self.settings.snippet_max_chars,
                )
            except QueryExecutionError as e:
                logger.error("index search error on %s: %s", index_name, e.reason)
                raise
            took = time.perf_counter() - start

        return SearchResult(total=total, took=took, hits=hits)

    async def search_async(
        self,
        index_name: str,
        term: str,
        *,
        size: int | None = None,
        offset: int = 0,
    ) -> SearchResult:
        """在 worker thread 執行 search，超過 search_timeout_seconds 即放棄等待。"""
        timeout = self.settings.search_timeout_seconds or None
        try:
            return await asyncio.wait_for(
                asyncio.to_thread(self.search, index_name, term, size=size, offset=offset),
                timeout=timeout,
            )
        except asyncio.TimeoutError as e:
            logger.error("search on %s timed out after %ss", index_name, timeout)
            raise SearchTimeout(index_name, timeout) from e
