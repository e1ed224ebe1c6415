"""倉庫在庫 データモデル定義"""

from dataclasses import dataclass
from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum
from typing import Optional, Union

CENTS = Decimal("0.01")


class ProductKind(str, Enum):
    """商品の種別（ファイル上のタグと同じ値）"""
    FOOD = "food"
    ELECTRONICS = "electronics"


@dataclass(frozen=True)
class Product:
    """在庫の1商品

    共通フィールドに加え、種別ごとの値を1つ持つ。
    食品なら expiration_date、家電なら warranty_months のみが設定される。
    """
    id: int
    kind: ProductKind
    name: str
    price: Decimal
    quantity: int
    expiration_date: Optional[date] = None    # 食品のみ
    warranty_months: Optional[int] = None     # 家電のみ

    @classmethod
    def food(
        cls, id: int, name: str, price: Decimal, quantity: int, expiration_date: date
    ) -> "Product":
        return cls(
            id=id,
            kind=ProductKind.FOOD,
            name=name,
            price=_to_decimal(price),
            quantity=quantity,
            expiration_date=expiration_date,
        )

    @classmethod
    def electronics(
        cls, id: int, name: str, price: Decimal, quantity: int, warranty_months: int
    ) -> "Product":
        return cls(
            id=id,
            kind=ProductKind.ELECTRONICS,
            name=name,
            price=_to_decimal(price),
            quantity=quantity,
            warranty_months=warranty_months,
        )

    @property
    def variant_value(self) -> Union[date, int]:
        """種別ごとの値（賞味期限 or 保証月数）"""
        if self.kind is ProductKind.FOOD:
            return self.expiration_date
        return self.warranty_months

    def is_expired(self, as_of: date) -> bool:
        """as_of より前に期限が切れている食品なら True"""
        return self.kind is ProductKind.FOOD and self.expiration_date < as_of

    def describe(self) -> str:
        """メニュー表示用の1行表現"""
        base = f"ID={self.id}, Name='{self.name}', Price={format_price(self.price)}, Qty={self.quantity}"
        if self.kind is ProductKind.FOOD:
            return f"Food{{{base}, Expiration={self.expiration_date.isoformat()}}}"
        return f"Electronics{{{base}, WarrantyMonths={self.warranty_months}}}"


def format_price(price: Decimal) -> str:
    """価格を小数2桁・小数点 "." の文字列にする（ロケール非依存、四捨五入）"""
    return format(Decimal(price).quantize(CENTS, rounding=ROUND_HALF_UP), "f")


def _to_decimal(value) -> Decimal:
    """float を含む数値を Decimal に変換（float は文字列経由で誤差を避ける）"""
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))
