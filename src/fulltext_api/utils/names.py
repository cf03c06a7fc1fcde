import os
from pathlib import Path

from fulltext_api.errors import InvalidIndexName

_FORBIDDEN_NAMES = {"", ".", ".."}


def validate_index_name(name: str) -> str:
    """索引名稱只能是資料根目錄下的單一目錄名稱。"""
    if name in _FORBIDDEN_NAMES or "\x00" in name:
        raise InvalidIndexName(name)
    separators = {"/", "\\", os.sep}
    if os.altsep:
        separators.add(os.altsep)
    if any(sep in name for sep in separators):
        raise InvalidIndexName(name)
    return name


def resolve_index_path(data_root: Path, name: str) -> Path:
    """將索引名稱轉為 data_root/name，並確認解析後仍在 data_root 之內。"""
    validate_index_name(name)
    root = data_root.resolve()
    path = (root / name).resolve()
    # symlink 指向外部同樣拒絕
    if not path.is_relative_to(root) or path == root:
        raise InvalidIndexName(name)
    return root / name
