from __future__ import annotations

from typing import List

from pydantic import BaseModel

from storefront.api.product.product_contracts import ProductResponse
from storefront.store.basket_models import BasketItem
from storefront.store.basket_store import BasketStore


class BasketItemResponse(BaseModel):
    product: ProductResponse
    quantity: int

    @staticmethod
    def from_basket_item(basket_item: BasketItem) -> BasketItemResponse:
        return BasketItemResponse(
            product=ProductResponse.from_product(basket_item.product),
            quantity=basket_item.quantity,
        )


class BasketResponse(BaseModel):
    items: List[BasketItemResponse]
    total_price: float
    total_quantity: int

    @staticmethod
    def from_store(basket: BasketStore) -> BasketResponse:
        return BasketResponse(
            items=[BasketItemResponse.from_basket_item(item) for item in basket.get_grouped_items()],
            total_price=basket.get_total_price(),
            total_quantity=basket.total_quantity(),
        )


class ItemCountResponse(BaseModel):
    product_id: str
    quantity: int
