"""倉庫在庫ストア（メニューと期限監視スレッドで共有）"""

import threading
from datetime import date
from decimal import Decimal
from typing import Iterable, Optional, Union

from .models import Product, ProductKind


class Store:
    """商品コレクションと ID 採番カウンタ

    すべての操作は1つのロックで排他される。
    メニュー側スレッドと期限監視スレッドから同じインスタンスを使う。
    """

    def __init__(self, products: Optional[Iterable[Product]] = None):
        self._lock = threading.Lock()
        self._products: list[Product] = []
        self._next_id = 1
        for product in products or ():
            self._append(product)

    def __len__(self) -> int:
        with self._lock:
            return len(self._products)

    @property
    def next_id(self) -> int:
        """次に採番される ID"""
        with self._lock:
            return self._next_id

    def _append(self, product: Product):
        # ロック保持中に呼ぶこと
        self._products.append(product)
        if product.id >= self._next_id:
            self._next_id = product.id + 1

    # ── 更新 ──

    def generate_id(self) -> int:
        """現在のカウンタ値を返して1進める"""
        with self._lock:
            new_id = self._next_id
            self._next_id += 1
            return new_id

    def add(self, product: Product):
        """商品を追加。ID がカウンタ以上ならカウンタを ID+1 まで進める。"""
        with self._lock:
            self._append(product)

    def create(
        self,
        kind: ProductKind,
        name: str,
        price: Decimal,
        quantity: int,
        variant: Union[date, int],
    ) -> Product:
        """ID を採番して商品を作成・追加する。作成した商品を返す。"""
        with self._lock:
            new_id = self._next_id
            if kind is ProductKind.FOOD:
                product = Product.food(new_id, name, price, quantity, variant)
            else:
                product = Product.electronics(new_id, name, price, quantity, variant)
            self._append(product)
            return product

    def remove_by_id(self, product_id: int) -> int:
        """ID が一致する商品をすべて削除。削除件数を返す（0件でもエラーにしない）。"""
        with self._lock:
            before = len(self._products)
            self._products = [p for p in self._products if p.id != product_id]
            return before - len(self._products)

    def replace_all(self, products: Iterable[Product], next_id: Optional[int] = None):
        """コレクションを丸ごと入れ替え、カウンタをリセットする（ロード用）

        Args:
            products: 新しい商品リスト
            next_id: 新しいカウンタ値。省略時は最大ID+1。
                     読み込んだ ID 以下の値が渡された場合は最大ID+1 に引き上げる。
        """
        products = list(products)
        with self._lock:
            self._products = []
            self._next_id = 1
            for product in products:
                self._append(product)
            if next_id is not None and next_id > self._next_id:
                self._next_id = next_id

    # ── 照会 ──

    def list_all(self) -> list[Product]:
        """全商品のスナップショット（コピー）を返す"""
        with self._lock:
            return list(self._products)

    def list_expired_food(self, as_of: Optional[date] = None) -> list[Product]:
        """as_of（省略時は今日）より前に期限切れとなった食品を返す"""
        as_of = as_of or date.today()
        with self._lock:
            return [p for p in self._products if p.is_expired(as_of)]
