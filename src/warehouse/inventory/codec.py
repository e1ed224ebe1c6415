"""在庫ファイル（カンマ区切りテキスト）の読み書き

1行1商品、フィールド順は固定:

    id,kind,name,price,quantity,variant

- kind: "food" または "electronics"
- price: 小数点は "."、小数2桁
- variant: 食品は賞味期限 (YYYY-MM-DD)、家電は保証月数 (整数)

壊れた行は読み飛ばし（SkippedLine として記録）、残りの行の読み込みを続ける。
"""

import logging
import os
import re
import tempfile
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Iterable, Union

from warehouse.errors import PersistenceError

from .models import Product, ProductKind, format_price
from .store import Store

logger = logging.getLogger(__name__)

DELIMITER = ","
FIELD_COUNT = 6
DATE_FORMAT = "%Y-%m-%d"
DATE_PATTERN = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")


@dataclass
class SkippedLine:
    """読み飛ばした行"""
    line_number: int             # 1始まり
    text: str
    reason: str


@dataclass
class LoadResult:
    """deserialize / load_file の結果"""
    products: list[Product] = field(default_factory=list)
    max_id: int = 0              # 読み込んだ最大ID（0件なら0、負のIDのみならその最大値）
    skipped: list[SkippedLine] = field(default_factory=list)


# ── 値の変換 ──

def parse_price(text: str) -> Decimal:
    """価格文字列を Decimal に変換。小数点は "." と "," の両方を受け付ける。

    Raises:
        ValueError: 数値として解釈できない場合
    """
    try:
        value = Decimal(text.strip().replace(",", "."))
    except InvalidOperation:
        raise ValueError(f"invalid price: {text!r}") from None
    if not value.is_finite():
        raise ValueError(f"invalid price: {text!r}")
    return value


def parse_date(text: str) -> date:
    """YYYY-MM-DD 形式の日付をパース（"2020-1-1" などゼロ埋めなしは不可）"""
    text = text.strip()
    if not DATE_PATTERN.fullmatch(text):
        raise ValueError(f"invalid date: {text!r}")
    return date.fromisoformat(text)


def _format_variant(product: Product) -> str:
    if product.kind is ProductKind.FOOD:
        return product.expiration_date.strftime(DATE_FORMAT)
    return str(product.warranty_months)


# ── シリアライズ ──

def serialize_product(product: Product) -> str:
    """1商品を1行（改行なし）に変換"""
    return DELIMITER.join([
        str(product.id),
        product.kind.value,
        product.name,
        format_price(product.price),
        str(product.quantity),
        _format_variant(product),
    ])


def serialize(products: Iterable[Product]) -> str:
    """商品列をファイル内容に変換。順序は渡された順のまま。"""
    return "".join(serialize_product(p) + "\n" for p in products)


def parse_line(line: str) -> Product:
    """1行をパースして Product を返す

    Raises:
        ValueError: フィールド数・種別・数値・日付のいずれかが不正な場合
    """
    parts = line.split(DELIMITER)
    if len(parts) != FIELD_COUNT:
        raise ValueError(f"expected {FIELD_COUNT} fields, got {len(parts)}")

    raw_id, raw_kind, name, raw_price, raw_quantity, raw_variant = parts
    product_id = int(raw_id)
    kind = raw_kind.strip().lower()
    price = parse_price(raw_price)
    quantity = int(raw_quantity)

    if kind == ProductKind.FOOD.value:
        return Product.food(product_id, name, price, quantity, parse_date(raw_variant))
    if kind == ProductKind.ELECTRONICS.value:
        return Product.electronics(product_id, name, price, quantity, int(raw_variant))
    raise ValueError(f"unknown product kind: {raw_kind!r}")


def deserialize(data: Union[str, bytes]) -> LoadResult:
    """ファイル内容をパースする。空行は無視、壊れた行は skipped に記録する。

    bytes を渡した場合は行ごとに UTF-8 でデコードし、
    デコードできない行も壊れた行として扱う（他の行は読み込む）。
    """
    result = LoadResult()
    max_id = None

    for line_number, raw in enumerate(data.splitlines(), start=1):
        try:
            line = raw.decode("utf-8") if isinstance(raw, bytes) else raw
        except UnicodeDecodeError as e:
            line = raw.decode("utf-8", errors="replace")
            _skip(result, line_number, line, f"invalid UTF-8: {e.reason}")
            continue
        if not line.strip():
            continue
        try:
            product = parse_line(line)
        except ValueError as e:
            _skip(result, line_number, line, str(e))
            continue
        result.products.append(product)
        max_id = product.id if max_id is None else max(max_id, product.id)

    if max_id is not None:
        result.max_id = max_id
    return result


def _skip(result: LoadResult, line_number: int, line: str, reason: str):
    logger.warning("Skipped malformed line %d: %r (%s)", line_number, line, reason)
    result.skipped.append(SkippedLine(line_number, line, reason))


# ── ファイル入出力 ──

def load_file(path: Union[str, Path], store: Store) -> LoadResult:
    """ファイルを読み込んでストアの内容を置き換える

    ファイルが存在しない場合はエラーにせず、ストアを空にする。

    Raises:
        PersistenceError: ファイルの読み込みに失敗した場合（ストアは変更しない）
    """
    path = Path(path)
    try:
        data = path.read_bytes()
    except FileNotFoundError:
        logger.info("File %s not found, starting with an empty store", path)
        store.replace_all([])
        return LoadResult()
    except OSError as e:
        raise PersistenceError(path, str(e)) from e

    result = deserialize(data)
    store.replace_all(result.products, next_id=result.max_id + 1)
    logger.info(
        "Loaded %d products from %s (%d skipped)",
        len(result.products), path, len(result.skipped),
    )
    return result


def save_file(path: Union[str, Path], store: Store) -> int:
    """ストアの内容をファイルに保存。保存件数を返す。

    同じディレクトリの一時ファイルに書いてから置き換えるので、
    失敗しても既存のファイルは壊れない。

    Raises:
        PersistenceError: 書き込みに失敗した場合
    """
    path = Path(path)
    products = store.list_all()
    content = serialize(products)

    tmp_name = None
    try:
        with tempfile.NamedTemporaryFile(
            "w", encoding="utf-8", newline="", dir=path.parent,
            prefix=f".{path.name}.", suffix=".tmp", delete=False,
        ) as f:
            tmp_name = f.name
            f.write(content)
        os.replace(tmp_name, path)
    except OSError as e:
        if tmp_name and os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise PersistenceError(path, str(e)) from e

    logger.info("Saved %d products to %s", len(products), path)
    return len(products)
