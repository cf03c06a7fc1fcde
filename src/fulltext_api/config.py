from pathlib import Path

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    bind_host: str = "0.0.0.0"
    bind_port: int = 8095
    data_dir: str = "data"
    # 網頁 UI 靜態資源目錄（可選）
    static_dir: str | None = None
    # 啟動時遇到無法開啟的索引是否直接中止
    strict_discovery: bool = False
    page_size: int = 100
    max_page_size: int = 10000
    unbounded_results: bool = False
    highlight_field: str = "Line"
    id_field: str = "id"
    snippet_max_chars: int = 150
    search_timeout_seconds: float | None = 30.0
    log_level: str = "INFO"

    @property
    def data_root(self) -> Path:
        return Path(self.data_dir)

    def effective_size(self, requested: int | None, num_docs: int) -> int:
        """決定單次查詢要回傳的筆數（tantivy 不接受 0）。"""
        if requested is not None:
            size = min(requested, self.max_page_size)
        elif self.unbounded_results:
            size = num_docs
        else:
            size = self.page_size
        return max(1, size)

    model_config = {"env_prefix": "", "case_sensitive": False}
