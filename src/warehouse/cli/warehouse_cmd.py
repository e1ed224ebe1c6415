#!/usr/bin/env python3
"""
倉庫在庫管理 CLI（対話メニュー）

Usage:
    warehouse [--file products.csv] [--interval 30] [--no-monitor] [--log-level INFO]

起動時にファイルを読み込み、終了時（メニューの 0）に保存する。
バックグラウンドで賞味期限切れの食品を定期的にチェックして警告を表示する。
"""

import argparse
import logging
import sys
from datetime import date
from decimal import Decimal
from pathlib import Path
from typing import Callable, Optional

from warehouse.config import load_settings
from warehouse.errors import InvalidInputError, PersistenceError
from warehouse.inventory import ExpirationMonitor, ProductKind, Store, load_file, save_file
from warehouse.inventory.codec import parse_date, parse_price

logger = logging.getLogger(__name__)

MENU = """
=== メインメニュー ===
1. 全商品を表示
2. 賞味期限切れを表示
3. 商品を追加
4. 商品を削除
5. 保存
0. 終了"""

Reader = Callable[[str], str]


# ── 入力ヘルパー ──

def _read_int(read: Reader, prompt: str, field: str) -> int:
    value = read(prompt).strip()
    try:
        return int(value)
    except ValueError:
        raise InvalidInputError(field, value) from None


def _read_price(read: Reader, prompt: str) -> Decimal:
    value = read(prompt)
    try:
        return parse_price(value)
    except ValueError:
        raise InvalidInputError("price", value) from None


def _read_date(read: Reader, prompt: str) -> date:
    value = read(prompt)
    try:
        return parse_date(value)
    except ValueError:
        raise InvalidInputError("expiration date", value) from None


# ── コマンド ──

def cmd_list_all(store: Store):
    """全商品を表示"""
    products = store.list_all()
    if not products:
        print("倉庫は空です。")
        return
    for product in products:
        print(product.describe())


def cmd_list_expired(store: Store):
    """賞味期限切れの食品を表示"""
    expired = store.list_expired_food()
    if not expired:
        print("賞味期限切れの食品はありません。")
        return
    for product in expired:
        print(product.describe())


def cmd_add(store: Store, read: Optional[Reader] = None):
    """対話入力で商品を追加

    Raises:
        InvalidInputError: 数値・日付の入力が不正な場合（商品は追加されない）
    """
    read = read or input
    kind_text = read("種別 (food/electronics): ").strip().lower()
    try:
        kind = ProductKind(kind_text)
    except ValueError:
        print("不明な種別です。")
        return

    name = read("商品名: ").strip()
    if not name or "," in name:
        raise InvalidInputError("name", name)
    price = _read_price(read, "価格: ")
    quantity = _read_int(read, "数量: ", "quantity")

    if kind is ProductKind.FOOD:
        variant = _read_date(read, "賞味期限 (YYYY-MM-DD): ")
    else:
        variant = _read_int(read, "保証期間 (月): ", "warranty months")

    product = store.create(kind, name, price, quantity, variant)
    print(f"商品を追加しました (ID = {product.id})")


def cmd_remove(store: Store, read: Optional[Reader] = None):
    """ID を指定して商品を削除"""
    read = read or input
    product_id = _read_int(read, "削除する ID: ", "id")
    removed = store.remove_by_id(product_id)
    if removed:
        print(f"削除しました ({removed} 件)")
    else:
        print(f"ID {product_id} の商品はありません。")


def cmd_save(store: Store, file_path: Path) -> bool:
    """ファイルに保存。失敗してもメモリ上の在庫はそのまま使える。"""
    try:
        count = save_file(file_path, store)
    except PersistenceError as e:
        print(f"保存エラー: {e}", file=sys.stderr)
        return False
    print(f"倉庫を保存しました ({count} 件)")
    return True


def run_menu(store: Store, file_path: Path, read: Optional[Reader] = None):
    """メニューループ。0 / EOF / Ctrl-C で戻る。"""
    read = read or input
    while True:
        print(MENU)
        try:
            choice = read("番号を選択してください: ").strip()

            if choice == "1":
                cmd_list_all(store)
            elif choice == "2":
                cmd_list_expired(store)
            elif choice == "3":
                cmd_add(store, read)
            elif choice == "4":
                cmd_remove(store, read)
            elif choice == "5":
                cmd_save(store, file_path)
            elif choice == "0":
                return
            else:
                print("無効な選択です。")

        except InvalidInputError as e:
            logger.debug("Aborted operation: %s", e)
            print(f"入力エラー: {e}")
        except (EOFError, KeyboardInterrupt):
            print()
            return


def main(argv=None) -> int:
    settings = load_settings()

    parser = argparse.ArgumentParser(description="倉庫在庫管理")
    parser.add_argument(
        "--file", type=Path, default=settings.file_path,
        help=f"在庫ファイルのパス (default: {settings.file_path})",
    )
    parser.add_argument(
        "--interval", type=float, default=settings.check_interval,
        help=f"賞味期限チェック間隔 [秒] (default: {settings.check_interval:g})",
    )
    parser.add_argument("--no-monitor", action="store_true", help="賞味期限チェックを無効にする")
    parser.add_argument(
        "--log-level", type=str.upper, default=settings.log_level,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help=f"ログレベル (default: {settings.log_level})",
    )
    args = parser.parse_args(argv)

    if not args.interval > 0:
        parser.error("--interval は正の数を指定してください")

    logging.basicConfig(
        level=args.log_level,
        format="%(levelname)s %(name)s: %(message)s",
    )

    print(f"作業ディレクトリ: {Path.cwd()}")
    store = Store()

    if not args.file.exists():
        print(f"ファイル {args.file} が見つかりません。新規作成します。")
    loaded_ok = True
    try:
        result = load_file(args.file, store)
    except PersistenceError as e:
        loaded_ok = False
        print(f"読み込みエラー: {e}", file=sys.stderr)
    else:
        if result.skipped:
            print(f"破損した行を {len(result.skipped)} 件スキップしました。")
        if result.products:
            print(f"{len(result.products)} 件の商品を読み込みました。")

    if not args.no_monitor:
        ExpirationMonitor(store, interval=args.interval).start()

    run_menu(store, args.file)

    # 読めなかったファイルは終了時に上書きしない
    if loaded_ok:
        cmd_save(store, args.file)
    else:
        print(f"読み込みに失敗したため、終了時の保存は行いません: {args.file}", file=sys.stderr)
    print("さようなら！")
    return 0


if __name__ == "__main__":
    sys.exit(main())
