from http import HTTPStatus
from typing import Annotated

from fastapi import APIRouter, HTTPException, Query, Response
from pydantic import NonNegativeInt, PositiveInt, NonNegativeFloat

from storefront.store import product_queries as store

from .product_contracts import (
    PatchProductRequest,
    ProductRequest,
    ProductResponse,
)

product_router = APIRouter(prefix="/product")


@product_router.get("/")
async def get_product_list(
    offset: Annotated[NonNegativeInt, Query()] = 0,
    limit: Annotated[PositiveInt, Query()] = 10,
    min_price: Annotated[NonNegativeFloat | None, Query()] = None,
    max_price: Annotated[NonNegativeFloat | None, Query()] = None,
) -> list[ProductResponse]:
    return [
        ProductResponse.from_product(p)
        for p in store.get_many(
            offset=offset,
            limit=limit,
            min_price=min_price,
            max_price=max_price,
        )
    ]


@product_router.get(
    "/{id}",
    responses={
        HTTPStatus.OK: {
            "description": "Successfully returned requested product",
        },
        HTTPStatus.NOT_FOUND: {
            "description": "Failed to return requested product as one was not found",
        },
    },
)
async def get_product_by_id(id: str) -> ProductResponse:
    product = store.get_one(id)

    if not product:
        raise HTTPException(
            HTTPStatus.NOT_FOUND,
            f"Request resource /product/{id} was not found",
        )

    return ProductResponse.from_product(product)


@product_router.post(
    "/",
    status_code=HTTPStatus.CREATED,
)
async def post_product(info: ProductRequest, response: Response) -> ProductResponse:
    product = store.add(info.as_product())

    response.headers["location"] = f"/product/{product.id}"

    return ProductResponse.from_product(product)


@product_router.patch(
    "/{id}",
    responses={
        HTTPStatus.OK: {
            "description": "Successfully patched product",
        },
        HTTPStatus.NOT_MODIFIED: {
            "description": "Failed to modify product as one was not found",
        },
    },
)
async def patch_product(id: str, info: PatchProductRequest) -> ProductResponse:
    product = store.patch(id, info.as_patch_product_info())

    if product is None:
        raise HTTPException(
            HTTPStatus.NOT_MODIFIED,
            f"Requested resource /product/{id} was not found",
        )

    return ProductResponse.from_product(product)


@product_router.put("/{id}")
async def put_product(id: str, info: ProductRequest) -> ProductResponse:
    return ProductResponse.from_product(store.upsert(id, info.as_product()))


@product_router.delete("/{id}")
async def delete_product(id: str) -> Response:
    store.delete(id)
    return Response("")
