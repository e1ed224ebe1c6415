"""賞味期限切れ監視スレッド"""

import logging
import threading
from datetime import date
from typing import Callable, Optional

from .models import Product
from .store import Store

logger = logging.getLogger(__name__)

DEFAULT_INTERVAL = 30.0  # 秒


def print_expired_report(expired: list[Product]):
    """期限切れ食品をコンソールに警告表示（メニュー入力中でも割り込んで表示される）"""
    print("\n[警告] 賞味期限切れの食品があります:")
    for product in expired:
        print(f"  {product.describe()}")
    print("> ", end="", flush=True)


class ExpirationMonitor(threading.Thread):
    """一定間隔でストアの期限切れ食品を調べて報告するデーモンスレッド

    ストアは参照のみで変更しない。終了時に join する必要はない。
    """

    def __init__(
        self,
        store: Store,
        interval: float = DEFAULT_INTERVAL,
        report: Optional[Callable[[list[Product]], None]] = None,
        clock: Callable[[], date] = date.today,
    ):
        """
        Args:
            store: 監視対象のストア
            interval: チェック間隔（秒）
            report: 期限切れ食品があったときに呼ぶ関数（省略時はコンソール表示）
            clock: 今日の日付を返す関数（テスト用に差し替え可能）
        """
        super().__init__(name="expiration-monitor", daemon=True)
        self.store = store
        self.interval = interval
        self.report = report or print_expired_report
        self.clock = clock
        self._stop_event = threading.Event()

    def check_once(self) -> list[Product]:
        """1回分のチェック。期限切れ食品を返す。"""
        expired = self.store.list_expired_food(self.clock())
        if expired:
            self.report(expired)
        return expired

    def run(self):
        logger.debug("Expiration monitor started (interval=%ss)", self.interval)
        # wait() が早く戻っても1回余分にチェックするだけ
        while not self._stop_event.wait(self.interval):
            try:
                self.check_once()
            except Exception:
                logger.exception("Expiration check failed")
        logger.debug("Expiration monitor stopped")

    def stop(self):
        """ループを終了させる（アプリ終了時は呼ばなくてよい）"""
        self._stop_event.set()
