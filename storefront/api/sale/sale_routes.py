from http import HTTPStatus

from fastapi import APIRouter, HTTPException

from storefront.store import sale_queries as store
from storefront.store.sale_models import CouponCode

from .sale_contracts import (
    SaleBannerResponse,
    SaleRequest,
    SaleResponse,
)

sale_router = APIRouter(prefix="/sale")


@sale_router.put("/{coupon_code}")
async def put_sale(coupon_code: CouponCode, info: SaleRequest) -> SaleResponse:
    return SaleResponse.from_sale(store.upsert(info.as_sale(coupon_code)))


@sale_router.get(
    "/active/{coupon_code}",
    responses={
        HTTPStatus.OK: {
            "description": "Banner data for the running sale",
        },
        HTTPStatus.NOT_FOUND: {
            "description": "No active sale uses this coupon code",
        },
    },
)
async def get_active_sale(coupon_code: CouponCode) -> SaleBannerResponse:
    sale = store.get_active_sale_by_coupon_code(coupon_code)

    if sale is None:
        raise HTTPException(
            HTTPStatus.NOT_FOUND,
            f"No active sale for coupon {coupon_code.value}",
        )

    return SaleBannerResponse.from_sale(sale)
