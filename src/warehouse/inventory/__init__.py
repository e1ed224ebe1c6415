"""倉庫在庫管理システム"""

from .codec import (
    LoadResult,
    SkippedLine,
    deserialize,
    load_file,
    save_file,
    serialize,
)
from .models import Product, ProductKind
from .monitor import ExpirationMonitor
from .store import Store

__all__ = [
    "ExpirationMonitor",
    "LoadResult",
    "Product",
    "ProductKind",
    "SkippedLine",
    "Store",
    "deserialize",
    "load_file",
    "save_file",
    "serialize",
]
