from typing import Any, Optional

from app.models import Dataset, Product, Seller, SellerId


class DataStore:
    """Lookup indexes for one analysis run. Duplicate keys: the later entry wins."""

    def __init__(self) -> None:
        self.sellers: dict[SellerId, Seller] = {}
        self.products: dict[str, Product] = {}

    @classmethod
    def from_dataset(cls, dataset: Dataset) -> "DataStore":
        store = cls()
        for seller in dataset.sellers:
            store.add_seller(seller)
        for product in dataset.products:
            store.add_product(product)
        return store

    # ── writes ────────────────────────────────────────────────────────────────

    def add_seller(self, seller: Seller) -> None:
        self.sellers[seller.id] = seller

    def add_product(self, product: Product) -> None:
        # no line item can reference a product without a sku
        if product.sku:
            self.products[product.sku] = product

    # ── reads ─────────────────────────────────────────────────────────────────

    def get_seller(self, seller_id: Any) -> Optional[Seller]:
        # seller ids are ints or strings; bool would otherwise match id 1
        if isinstance(seller_id, bool) or not isinstance(seller_id, (int, str)):
            return None
        return self.sellers.get(seller_id)

    def get_product(self, sku: Optional[str]) -> Optional[Product]:
        return self.products.get(sku)

    def list_sellers(self) -> list[Seller]:
        return list(self.sellers.values())
