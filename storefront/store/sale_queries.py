import logging
from datetime import datetime, timezone

from storefront.store.sale_models import CouponCode, Sale

logger = logging.getLogger(__name__)

sales_data = dict[CouponCode, Sale]()


def upsert(sale: Sale) -> Sale:
    sales_data[sale.coupon_code] = sale
    logger.info("Sale %s saved (active=%s)", sale.coupon_code.value, sale.is_active)
    return sale


def _aware(moment: datetime) -> datetime:
    return moment if moment.tzinfo is not None else moment.replace(tzinfo=timezone.utc)


def get_active_sale_by_coupon_code(
    coupon_code: CouponCode,
    now: datetime | None = None,
) -> Sale | None:
    sale = sales_data.get(coupon_code)
    if sale is None or not sale.is_active:
        return None

    now = _aware(now or datetime.now(timezone.utc))
    if sale.valid_from is not None and now < _aware(sale.valid_from):
        return None
    if sale.valid_until is not None and now > _aware(sale.valid_until):
        return None
    return sale


def clear() -> None:
    sales_data.clear()
