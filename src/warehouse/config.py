"""設定の読み込み（環境変数 / .env）

.env の例:
    WAREHOUSE_FILE="products.csv"
    WAREHOUSE_CHECK_INTERVAL="30"
    WAREHOUSE_LOG_LEVEL="INFO"
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

DEFAULT_FILE = "products.csv"
DEFAULT_CHECK_INTERVAL = 30.0
DEFAULT_LOG_LEVEL = "WARNING"


@dataclass
class Settings:
    """アプリ設定"""
    file_path: Path = Path(DEFAULT_FILE)        # 作業ディレクトリからの相対パス可
    check_interval: float = DEFAULT_CHECK_INTERVAL
    log_level: str = DEFAULT_LOG_LEVEL


def _parse_interval(value: Optional[str]) -> float:
    if not value:
        return DEFAULT_CHECK_INTERVAL
    try:
        interval = float(value)
    except ValueError:
        interval = -1.0
    if not (0 < interval < float("inf")):
        logger.warning(
            "Invalid WAREHOUSE_CHECK_INTERVAL %r, using %ss", value, DEFAULT_CHECK_INTERVAL
        )
        return DEFAULT_CHECK_INTERVAL
    return interval


def _parse_log_level(value: Optional[str]) -> str:
    if not value:
        return DEFAULT_LOG_LEVEL
    level = value.strip().upper()
    if not isinstance(logging.getLevelName(level), int):
        logger.warning("Invalid WAREHOUSE_LOG_LEVEL %r, using %s", value, DEFAULT_LOG_LEVEL)
        return DEFAULT_LOG_LEVEL
    return level


def load_settings(env_path: Optional[str] = None) -> Settings:
    """.env と環境変数から設定を作る（既に設定済みの環境変数が優先）"""
    load_dotenv(env_path or ".env")
    return Settings(
        file_path=Path(os.getenv("WAREHOUSE_FILE") or DEFAULT_FILE),
        check_interval=_parse_interval(os.getenv("WAREHOUSE_CHECK_INTERVAL")),
        log_level=_parse_log_level(os.getenv("WAREHOUSE_LOG_LEVEL")),
    )
