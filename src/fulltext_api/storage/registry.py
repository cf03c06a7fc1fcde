import logging
from pathlib import Path

from fulltext_api.config import Settings
from fulltext_api.errors import (
    ConfigurationError,
    CorruptIndexAtStartup,
    InvalidIndexName,
    NotFoundOrInvalidIndex,
    QueryExecutionError,
)
from fulltext_api.models.index import IndexDescriptor, SkippedIndex
from fulltext_api.storage.tantivy_index import TantivyIndex
from fulltext_api.utils.names import resolve_index_path

logger = logging.getLogger(__name__)


class IndexStore:
    """資料根目錄下的索引登錄表：啟動時掃描一次，之後只負責名稱解析。"""

    def __init__(self, settings: Settings):
        self.settings = settings
        self.data_root: Path = settings.data_root
        self.descriptors: list[IndexDescriptor] = []
        self.skipped: list[SkippedIndex] = []

    def discover(self) -> list[IndexDescriptor]:
        """掃描資料根目錄的直接子項目，逐一開啟驗證後立即關閉。"""
        try:
            entries = sorted(self.data_root.iterdir(), key=lambda p: p.name)
        except OSError as e:
            raise ConfigurationError(f"error reading data dir {self.data_root}: {e}") from e

        descriptors: list[IndexDescriptor] = []
        skipped: list[SkippedIndex] = []

        for entry in entries:
            # 有效的索引一定是包含多個檔案的目錄
            if not entry.is_dir():
                logger.info("not registering %s, skipping", entry)
                continue

            # symlink 指向資料根目錄之外的目錄不登錄，與請求時的名稱解析一致
            try:
                resolve_index_path(self.data_root, entry.name)
            except InvalidIndexName:
                logger.warning("not registering %s, it points outside the data dir", entry.name)
                skipped.append(SkippedIndex(name=entry.name, reason="points outside the data dir"))
                continue

            try:
                with TantivyIndex.open(entry) as index:
                    # 讓 stats 回報的名稱與登錄名稱一致
                    index.set_name(entry.name)
                    stats = index.stats()
            except (NotFoundOrInvalidIndex, QueryExecutionError) as e:
                logger.error("error opening index %s: %s", entry.name, e.reason)
                if self.settings.strict_discovery:
                    raise CorruptIndexAtStartup(entry.name, e.reason) from e
                skipped.append(SkippedIndex(name=entry.name, reason=e.reason))
                continue

            descriptors.append(
                IndexDescriptor(name=stats["name"], path=entry, doc_count=stats["doc_count"])
            )
            logger.info("registered index: %s", entry.name)

        self.descriptors = descriptors
        self.skipped = skipped
        if skipped:
            logger.warning(
                "Serving %d index(es); %d skipped: %s",
                len(descriptors), len(skipped), ", ".join(s.name for s in skipped),
            )
        return descriptors

    @property
    def status(self) -> str:
        return "degraded" if self.skipped else "ok"

    def names(self) -> list[str]:
        return [d.name for d in self.descriptors]

    def get(self, name: str) -> IndexDescriptor | None:
        return next((d for d in self.descriptors if d.name == name), None)

    def resolve(self, name: str) -> Path:
        return resolve_index_path(self.data_root, name)
