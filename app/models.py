import math
import sys
from collections.abc import Mapping
from decimal import Decimal
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

SellerId = Union[int, str]

TOP_PRODUCTS_LIMIT = 10


def coerce_number(value: Any, default: float) -> float:
    """Best-effort numeric conversion; anything unusable, infinite or zero becomes ``default``."""
    if isinstance(value, bool):
        value = int(value)
    if isinstance(value, (int, float)):
        number = value
    else:
        try:
            number = float(str(value).strip())
        except (TypeError, ValueError):
            return default
    if isinstance(number, int) and abs(number) > sys.float_info.max:
        return default
    if isinstance(number, float) and not math.isfinite(number):
        return default
    if not number:
        return default
    return number


def _as_sku(value: Any) -> Optional[str]:
    # numeric skus match their string form; anything else counts as no sku
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return str(value)
    return value if isinstance(value, str) else None


# ── Inputs ───────────────────────────────────────────────────────────────────

class Seller(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: SellerId
    first_name: str
    last_name: str

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"
class Product(BaseModel):
    model_config = ConfigDict(extra="allow")

    # entries without a usable sku are left out of the index
    sku: Optional[str] = None
    price: float = 0.0           # sale price
    purchase_price: float = 0.0  # cost

    @field_validator("sku", mode="before")
    @classmethod
    def _sku(cls, value: Any) -> Optional[str]:
        return _as_sku(value)

    @field_validator("price", "purchase_price", mode="before")
    @classmethod
    def _money(cls, value: Any) -> float:
        return coerce_number(value, 0.0)


class LineItem(BaseModel):
    # extra fields stay reachable for custom revenue strategies
    model_config = ConfigDict(extra="allow")

    sku: Optional[str] = None
    quantity: Any = None
    sale_price: float = 0.0
    discount: float = 0.0  # percent

    @field_validator("sku", mode="before")
    @classmethod
    def _sku(cls, value: Any) -> Optional[str]:
        return _as_sku(value)

    @field_validator("sale_price", "discount", mode="before")
    @classmethod
    def _numeric(cls, value: Any) -> float:
        return coerce_number(value, 0.0)

    @property
    def has_quantity(self) -> bool:
        """An explicit ``null`` counts as present; only an absent field does not."""
        return "quantity" in self.model_fields_set


class PurchaseRecord(BaseModel):
    model_config = ConfigDict(extra="allow")

    # any value; ids that match no seller are skipped downstream
    seller_id: Any = None
    total_amount: Any = None
    items: list[LineItem] = Field(default_factory=list)

    @field_validator("items", mode="before")
    @classmethod
    def _items(cls, value: Any) -> Any:
        if not isinstance(value, (list, tuple)):
            return []
        # non-mapping entries become sku-less items and are skipped with a warning
        return [v if isinstance(v, (Mapping, LineItem)) else {} for v in value]


class Dataset(BaseModel):
    sellers: list[Seller]
    products: list[Product]
    purchase_records: list[PurchaseRecord]


# ── Accumulator ──────────────────────────────────────────────────────────────

class TopProduct(BaseModel):
    sku: str
    quantity: Union[int, float]


class SellerStat(BaseModel):
    seller_id: SellerId
    name: str
    revenue: float = 0.0
    profit: float = 0.0
    sales_count: int = 0
    # insertion order doubles as the tie-break for top products
    products_sold: dict[str, float] = Field(default_factory=dict)

    @classmethod
    def for_seller(cls, seller: Seller) -> "SellerStat":
        return cls(seller_id=seller.id, name=seller.full_name)

    def record_sale(self, amount: float) -> None:
        self.revenue += amount
        self.sales_count += 1

    def record_item(self, sku: str, quantity: float, profit: float) -> None:
        self.profit += profit
        self.products_sold[sku] = self.products_sold.get(sku, 0) + quantity

    def ranked_products(self, limit: int = TOP_PRODUCTS_LIMIT) -> list[TopProduct]:
        ranked = sorted(self.products_sold.items(), key=lambda kv: kv[1], reverse=True)
        return [
            TopProduct(sku=sku, quantity=int(qty) if isinstance(qty, float) and qty.is_integer() else qty)
            for sku, qty in ranked[:limit]
        ]


# ── Response models ──────────────────────────────────────────────────────────

class SellerReport(BaseModel):
    seller_id: SellerId
    name: str
    revenue: Decimal
    profit: Decimal
    sales_count: int
    top_products: list[TopProduct]
    bonus: Decimal
