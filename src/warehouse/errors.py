"""倉庫管理 例外定義"""

from pathlib import Path
from typing import Optional


class WarehouseError(Exception):
    """倉庫管理エラーの基底クラス"""


class PersistenceError(WarehouseError):
    """ファイルの読み書きエラー"""
    def __init__(self, path: Path, message: str = ""):
        self.path = path
        super().__init__(f"Persistence Error [{path}]: {message}")


class InvalidInputError(WarehouseError, ValueError):
    """対話入力の形式エラー"""
    def __init__(self, field: str, value: Optional[str] = None):
        self.field = field
        self.value = value
        super().__init__(f"invalid {field}: {value!r}")
