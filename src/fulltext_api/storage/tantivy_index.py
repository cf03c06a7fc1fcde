import logging
import re
from pathlib import Path
from typing import Any

import tantivy

from fulltext_api.errors import NotFoundOrInvalidIndex, QueryExecutionError
from fulltext_api.models.search import Hit

logger = logging.getLogger(__name__)

# 與 tantivy 預設 tokenizer 相同：以非英數字元切分
_TOKEN_RE = re.compile(r"[^\W_]+")


def match_query_text(term: str) -> str:
    """把自由文字轉成只含引號 token 的查詢字串。

    每個 token 各自成為一個 OR 子句，AND、-、field: 等語法都只當作文字。
    """
    return " ".join(f'"{token}"' for token in _TOKEN_RE.findall(term))


class TantivyIndex:
    """單一 tantivy 索引的 handle，每次使用都重新開啟，用完即關閉。"""

    def __init__(self, index: tantivy.Index, path: Path, name: str):
        self._index: tantivy.Index | None = index
        self.path = path
        self.name = name

    @classmethod
    def open(cls, path: Path, name: str | None = None) -> "TantivyIndex":
        index_name = name or path.name
        if not path.is_dir():
            raise NotFoundOrInvalidIndex(index_name)
        try:
            index = tantivy.Index.open(str(path))
        except Exception as e:
            logger.debug("tantivy refused to open %s: %s", index_name, e)
            raise NotFoundOrInvalidIndex(index_name, "is not a readable index") from e
        return cls(index, path, index_name)

    def __enter__(self) -> "TantivyIndex":
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    @property
    def closed(self) -> bool:
        return self._index is None

    def set_name(self, name: str):
        self.name = name

    def stats(self) -> dict:
        return {"name": self.name, "doc_count": self.num_docs()}

    def num_docs(self) -> int:
        index = self._require_open()
        try:
            return index.searcher().num_docs
        except Exception as e:
            logger.debug("tantivy could not read stats of %s: %s", self.name, e)
            raise QueryExecutionError(self.name, "could not read index statistics") from e

    def search(
        self,
        term: str,
        *,
        limit: int,
        offset: int = 0,
        highlight_field: str = "Line",
        id_field: str = "id",
        snippet_max_chars: int = 150,
    ) -> tuple[int, list[Hit]]:
        """以 match 語意查詢所有預設欄位，回傳 (總筆數, 依相關度排序的 hits)。"""
        index = self._require_open()
        try:
            searcher = index.searcher()
            query, _errors = index.parse_query_lenient(match_query_text(term))

            result = searcher.search(query, limit=limit, count=True, offset=offset)
            generator = self._snippet_generator(
                searcher, query, index.schema, highlight_field, snippet_max_chars
            )

            hits = []
            for _score, address in result.hits:
                doc = searcher.doc(address)
                doc_dict = doc.to_dict()
                hits.append(
                    Hit(
                        id=self._doc_id(doc_dict, address, id_field),
                        highlighted_lines=self._fragments(generator, doc_dict, highlight_field),
                    )
                )
        except Exception as e:
            raise QueryExecutionError(self.name, str(e)) from e

        total = result.count if result.count is not None else len(hits)
        return total, hits

    def close(self):
        self._index = None

    def _require_open(self) -> tantivy.Index:
        if self._index is None:
            raise QueryExecutionError(self.name, "index handle is closed")
        return self._index

    @staticmethod
    def _snippet_generator(
        searcher: tantivy.Searcher,
        query: tantivy.Query,
        schema: tantivy.Schema,
        field: str,
        max_chars: int,
    ) -> tantivy.SnippetGenerator | None:
        try:
            generator = tantivy.SnippetGenerator.create(searcher, query, schema, field)
        except ValueError:
            # 索引沒有這個欄位
            return None
        generator.set_max_num_chars(max_chars)
        return generator

    @staticmethod
    def _doc_id(doc_dict: dict[str, list[Any]], address: tantivy.DocAddress, id_field: str) -> str:
        values = doc_dict.get(id_field) or []
        if values:
            return str(values[0])
        return f"{address.segment_ord}:{address.doc}"

    @staticmethod
    def _fragments(
        generator: tantivy.SnippetGenerator | None,
        doc_dict: dict[str, list[Any]],
        field: str,
    ) -> list[str]:
        """每個欄位值各自產生一段 highlight，沒有命中的值略過。"""
        if generator is None:
            return []
        fragments = []
        for value in doc_dict.get(field) or []:
            if not isinstance(value, str):
                continue
            single = tantivy.Document()
            single.add_text(field, value)
            snippet = generator.snippet_from_doc(single)
            if snippet.highlighted():
                fragments.append(snippet.to_html())
        return fragments
