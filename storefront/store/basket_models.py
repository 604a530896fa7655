from dataclasses import dataclass
from typing import Any, List

from storefront.store.product_models import Product


@dataclass(slots=True)
class BasketItem:
    product: Product
    quantity: int

    def to_record(self) -> dict[str, Any]:
        return {"product": self.product.to_record(), "quantity": self.quantity}

    @staticmethod
    def from_record(record: dict[str, Any]) -> "BasketItem":
        quantity = record["quantity"]
        if isinstance(quantity, bool) or not isinstance(quantity, int):
            raise ValueError(f"basket item quantity must be an integer, got {quantity!r}")
        return BasketItem(product=Product.from_record(record["product"]), quantity=quantity)


@dataclass(slots=True)
class BasketState:
    items: List[BasketItem]

    def to_record(self) -> dict[str, Any]:
        return {"items": [item.to_record() for item in self.items]}

    @staticmethod
    def from_record(record: dict[str, Any]) -> "BasketState":
        items = [BasketItem.from_record(r) for r in record["items"]]
        seen = set[str]()
        for item in items:
            if item.quantity < 1:
                raise ValueError("basket item quantity must be positive")
            if not isinstance(item.product.id, str) or not item.product.id:
                raise ValueError(f"basket item has invalid product identifier {item.product.id!r}")
            if item.product.id in seen:
                raise ValueError(f"duplicate basket entry for {item.product.id!r}")
            seen.add(item.product.id)
        return BasketState(items=items)
