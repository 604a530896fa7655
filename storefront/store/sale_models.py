from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class CouponCode(str, Enum):
    EASTER = "EASTER"
    XMAS = "XMAS"


@dataclass(slots=True)
class Sale:
    title: str
    coupon_code: CouponCode
    discount_amount: float
    description: str | None = None
    valid_from: datetime | None = None
    valid_until: datetime | None = None
    is_active: bool = False
