import functools
import json
import logging
from typing import Callable, Iterable, List, TypeVar

from storefront.store.basket_models import BasketItem, BasketState
from storefront.store.product_models import Product
from storefront.store.storage import Storage, StorageError

logger = logging.getLogger(__name__)

DEFAULT_STORAGE_KEY = "Basket-store"
STORAGE_VERSION = 0

T = TypeVar("T")


class InvalidProductError(ValueError):
    pass


def add_to_items(items: Iterable[BasketItem], product: Product) -> List[BasketItem]:
    result: list[BasketItem] = []
    found = False
    for item in items:
        if item.product.id == product.id:
            result.append(BasketItem(product=item.product, quantity=item.quantity + 1))
            found = True
        else:
            result.append(item)
    if not found:
        result.append(BasketItem(product=product.snapshot(), quantity=1))
    return result


def remove_from_items(items: Iterable[BasketItem], product_id: str) -> List[BasketItem]:
    result: list[BasketItem] = []
    for item in items:
        if item.product.id != product_id:
            result.append(item)
        elif item.quantity > 1:
            result.append(BasketItem(product=item.product, quantity=item.quantity - 1))
    return result


def total_price(items: Iterable[BasketItem]) -> float:
    return sum(((item.product.price or 0) * item.quantity for item in items), 0.0)


def dump_state(items: Iterable[BasketItem]) -> str:
    state = BasketState(items=list(items))
    return json.dumps({"state": state.to_record(), "version": STORAGE_VERSION})


def load_state(raw: str) -> List[BasketItem]:
    """Parse a persisted record; raises ``ValueError`` when it is malformed."""
    try:
        record = json.loads(raw)
        if record.get("version") != STORAGE_VERSION:
            raise ValueError(f"unsupported basket record version {record.get('version')!r}")
        return BasketState.from_record(record["state"]).items
    except (KeyError, TypeError, AttributeError) as e:
        raise ValueError("malformed basket record") from e


def persisted(method: Callable[..., T]) -> Callable[..., T]:
    @functools.wraps(method)
    def wrapper(self: "BasketStore", *args, **kwargs) -> T:
        result = method(self, *args, **kwargs)
        self.save()
        return result

    return wrapper


class BasketStore:
    def __init__(self, storage: Storage, key: str = DEFAULT_STORAGE_KEY) -> None:
        self.storage = storage
        self.key = key
        self._items: list[BasketItem] = []
        self.restore()

    def restore(self) -> None:
        try:
            raw = self.storage.get_item(self.key)
        except StorageError:
            logger.exception("Failed to read basket %r, starting empty", self.key)
            self._items = []
            return

        if raw is None:
            self._items = []
            return

        try:
            self._items = load_state(raw)
        except ValueError as e:
            logger.warning("Discarding unreadable basket %r: %s", self.key, e)
            self._items = []
            return

        logger.info("Restored basket %r with %d entries", self.key, len(self._items))

    def save(self) -> None:
        try:
            self.storage.set_item(self.key, dump_state(self._items))
        except StorageError:
            logger.exception("Failed to persist basket %r", self.key)

    @persisted
    def add_item(self, product: Product) -> None:
        if not isinstance(product.id, str) or not product.id:
            raise InvalidProductError(f"product identifier must be a non-empty string, got {product.id!r}")
        self._items = add_to_items(self._items, product)
        logger.debug("Added %s to basket %r", product.id, self.key)

    @persisted
    def remove_item(self, product_id: str) -> None:
        self._items = remove_from_items(self._items, product_id)
        logger.debug("Removed one %s from basket %r", product_id, self.key)

    @persisted
    def clear_basket(self) -> None:
        self._items = []
        logger.debug("Cleared basket %r", self.key)

    def get_total_price(self) -> float:
        return total_price(self._items)

    def get_item_count(self, product_id: str) -> int:
        for item in self._items:
            if item.product.id == product_id:
                return item.quantity
        return 0

    def get_grouped_items(self) -> List[BasketItem]:
        return [BasketItem(product=item.product.snapshot(), quantity=item.quantity) for item in self._items]

    @property
    def items(self) -> List[BasketItem]:
        return self.get_grouped_items()

    def total_quantity(self) -> int:
        return sum(item.quantity for item in self._items)
