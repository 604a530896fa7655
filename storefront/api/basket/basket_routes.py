from http import HTTPStatus
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Request

from storefront.store import product_queries
from storefront.store.basket_store import BasketStore

from .basket_contracts import (
    BasketResponse,
    ItemCountResponse,
)

basket_router = APIRouter(prefix="/basket")


def get_basket_store(request: Request) -> BasketStore:
    return request.app.state.basket_store


Basket = Annotated[BasketStore, Depends(get_basket_store)]


@basket_router.get("/")
async def get_basket(basket: Basket) -> BasketResponse:
    return BasketResponse.from_store(basket)


@basket_router.post(
    "/add/{product_id}",
    responses={
        HTTPStatus.OK: {
            "description": "Successfully added one unit of the product",
        },
        HTTPStatus.NOT_FOUND: {
            "description": "Failed to add product as one was not found in the catalog",
        },
    },
)
async def add_item(product_id: str, basket: Basket) -> BasketResponse:
    product = product_queries.get_one(product_id)
    if product is None:
        raise HTTPException(HTTPStatus.NOT_FOUND, f"/product/{product_id} not found")

    basket.add_item(product)
    return BasketResponse.from_store(basket)


@basket_router.post("/remove/{product_id}")
async def remove_item(product_id: str, basket: Basket) -> BasketResponse:
    basket.remove_item(product_id)
    return BasketResponse.from_store(basket)


@basket_router.get("/count/{product_id}")
async def get_item_count(product_id: str, basket: Basket) -> ItemCountResponse:
    return ItemCountResponse(product_id=product_id, quantity=basket.get_item_count(product_id))


@basket_router.delete("/")
async def clear_basket(basket: Basket) -> BasketResponse:
    basket.clear_basket()
    return BasketResponse.from_store(basket)
