from typing import Iterable

from storefront.store.product_models import (
    PatchProductInfo,
    Product,
)

from storefront.store.id_generator import id_generator

products_data = dict[str, Product]()


def add(product: Product) -> Product:
    if not product.id:
        product.id = next(id_generator)
        while product.id in products_data:
            product.id = next(id_generator)
    products_data[product.id] = product

    return product


def delete(id: str) -> None:
    products_data.pop(id, None)


def get_one(id: str) -> Product | None:
    return products_data.get(id)


def get_many(
    offset: int = 0,
    limit: int = 10,
    min_price: float | None = None,
    max_price: float | None = None,
) -> Iterable[Product]:
    curr = 0
    for product in products_data.values():
        # unpriced products only show up in unfiltered listings
        price = product.price
        if min_price is not None and (price is None or price < min_price):
            continue
        if max_price is not None and (price is None or price > max_price):
            continue
        if offset <= curr < offset + limit:
            yield product
        curr += 1


def upsert(id: str, product: Product) -> Product:
    product.id = id
    products_data[id] = product
    return product


def patch(id: str, patch_info: PatchProductInfo) -> Product | None:
    if id not in products_data:
        return None

    if patch_info.price is not None:
        products_data[id].price = patch_info.price

    if patch_info.attributes is not None:
        products_data[id].attributes.update(patch_info.attributes)

    return products_data[id]


def clear() -> None:
    products_data.clear()
