"""搜尋服務的錯誤類型。

啟動期錯誤（ConfigurationError、CorruptIndexAtStartup）會讓程序無法啟動；
其餘錯誤只影響單一請求。
"""


class SearchServiceError(Exception):
    """所有服務錯誤的基底類別。"""


class ConfigurationError(SearchServiceError):
    """資料根目錄不存在或無法讀取。"""


class CorruptIndexAtStartup(SearchServiceError):
    def __init__(self, index_name: str, reason: str):
        super().__init__(f"Index '{index_name}' could not be opened: {reason}")
        self.index_name = index_name
        self.reason = reason


class NotFoundOrInvalidIndex(SearchServiceError):
    def __init__(self, index_name: str, reason: str = "not found"):
        super().__init__(f"Index '{index_name}' {reason}")
        self.index_name = index_name
        self.reason = reason


class InvalidIndexName(NotFoundOrInvalidIndex):
    """索引名稱含有路徑分隔符號或會跳出資料根目錄。"""

    def __init__(self, index_name: str):
        super().__init__(index_name, "is not a valid index name")


class QueryExecutionError(SearchServiceError):
    def __init__(self, index_name: str, reason: str):
        super().__init__(f"Search on index '{index_name}' failed: {reason}")
        self.index_name = index_name
        self.reason = reason


class SearchTimeout(SearchServiceError):
    def __init__(self, index_name: str, timeout: float):
        super().__init__(f"Search on index '{index_name}' exceeded {timeout}s")
        self.index_name = index_name
        self.timeout = timeout


class SerializationError(SearchServiceError):
    """搜尋結果無法編碼成 JSON。"""
