from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from storefront.store.sale_models import CouponCode, Sale


class SaleRequest(BaseModel):
    title: str
    description: str | None = None
    discount_amount: float = Field(ge=0, le=100)
    valid_from: datetime | None = None
    valid_until: datetime | None = None
    is_active: bool = False

    model_config = ConfigDict(extra="forbid")

    def as_sale(self, coupon_code: CouponCode) -> Sale:
        return Sale(
            title=self.title,
            coupon_code=coupon_code,
            discount_amount=self.discount_amount,
            description=self.description,
            valid_from=self.valid_from,
            valid_until=self.valid_until,
            is_active=self.is_active,
        )


class SaleResponse(BaseModel):
    title: str
    coupon_code: CouponCode
    discount_amount: float
    description: str | None
    valid_from: datetime | None
    valid_until: datetime | None
    is_active: bool

    @staticmethod
    def from_sale(sale: Sale) -> SaleResponse:
        return SaleResponse(
            title=sale.title,
            coupon_code=sale.coupon_code,
            discount_amount=sale.discount_amount,
            description=sale.description,
            valid_from=sale.valid_from,
            valid_until=sale.valid_until,
            is_active=sale.is_active,
        )


class SaleBannerResponse(BaseModel):
    title: str
    description: str | None
    coupon_code: CouponCode
    discount_amount: float

    @staticmethod
    def from_sale(sale: Sale) -> SaleBannerResponse:
        return SaleBannerResponse(
            title=sale.title,
            description=sale.description,
            coupon_code=sale.coupon_code,
            discount_amount=sale.discount_amount,
        )
