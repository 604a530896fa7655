from __future__ import annotations

import json
import logging

import pytest

from storefront.store.basket_models import BasketItem
from storefront.store.basket_store import (
	DEFAULT_STORAGE_KEY,
	BasketStore,
	InvalidProductError,
	add_to_items,
	remove_from_items,
)
from storefront.store.product_models import Product
from storefront.store.storage import MemoryStorage, StorageError


class BrokenStorage(MemoryStorage):
	def set_item(self, key: str, value: str) -> None:
		raise StorageError("quota exceeded")


@pytest.fixture()
def storage() -> MemoryStorage:
	return MemoryStorage()


@pytest.fixture()
def basket(storage: MemoryStorage) -> BasketStore:
	return BasketStore(storage)


def product(id: str, price: float | None = None, **attributes) -> Product:
	return Product(id=id, price=price, attributes=attributes)


def summary(basket: BasketStore) -> list[tuple[str, int]]:
	return [(item.product.id, item.quantity) for item in basket.get_grouped_items()]


def test_add_new_product_has_count_one(basket: BasketStore) -> None:
	basket.add_item(product("a", 10.0))
	assert basket.get_item_count("a") == 1


def test_add_existing_product_increments_in_place(basket: BasketStore) -> None:
	basket.add_item(product("a", 10.0))
	basket.add_item(product("b", 5.0))
	basket.add_item(product("a", 10.0))
	basket.add_item(product("a", 10.0))

	assert basket.get_item_count("a") == 3
	assert summary(basket) == [("a", 3), ("b", 1)]


def test_remove_last_unit_drops_entry(basket: BasketStore) -> None:
	basket.add_item(product("a", 10.0))
	basket.remove_item("a")

	assert basket.get_item_count("a") == 0
	assert basket.get_grouped_items() == []


def test_remove_decrements(basket: BasketStore) -> None:
	for _ in range(3):
		basket.add_item(product("a", 1.0))
	basket.remove_item("a")
	assert basket.get_item_count("a") == 2


def test_remove_absent_is_noop(basket: BasketStore) -> None:
	basket.add_item(product("a", 1.0))
	basket.add_item(product("b", 2.0))
	before = basket.get_grouped_items()

	basket.remove_item("missing")

	assert basket.get_grouped_items() == before


def test_clear_empties_basket(basket: BasketStore) -> None:
	basket.add_item(product("a", 1.0))
	basket.add_item(product("b", 2.0))
	basket.clear_basket()
	assert basket.get_grouped_items() == []
	assert basket.get_total_price() == 0

	basket.clear_basket()
	assert basket.get_grouped_items() == []


def test_total_price_treats_missing_price_as_zero(basket: BasketStore) -> None:
	basket.add_item(product("a", 2.5))
	basket.add_item(product("a", 2.5))
	basket.add_item(product("free"))
	basket.add_item(product("c", 4.0))

	assert basket.get_total_price() == pytest.approx(9.0)


def test_grouped_items_is_stable_snapshot(basket: BasketStore) -> None:
	basket.add_item(product("a", 1.0))
	first = basket.get_grouped_items()
	second = basket.get_grouped_items()
	assert first == second

	first.clear()
	assert basket.get_item_count("a") == 1

	basket.add_item(product("a", 1.0))
	assert second[0].quantity == 1


def test_grouped_items_products_are_copies(basket: BasketStore, storage: MemoryStorage) -> None:
	basket.add_item(product("a", 10.0, name="A"))
	snap = basket.get_grouped_items()

	snap[0].product.price = 999
	snap[0].product.attributes["name"] = "changed"

	assert basket.get_total_price() == 10.0
	assert basket.get_grouped_items()[0].product.attributes == {"name": "A"}
	assert json.loads(storage.get_item(DEFAULT_STORAGE_KEY))["state"]["items"][0]["product"]["name"] == "A"


def test_end_to_end_scenario(basket: BasketStore) -> None:
	basket.add_item(product("a", 10))
	basket.add_item(product("b", 5))
	basket.add_item(product("a", 10))

	assert summary(basket) == [("a", 2), ("b", 1)]
	assert basket.get_total_price() == 25
	assert basket.get_item_count("a") == 2
	assert basket.total_quantity() == 3
	assert basket.items == basket.get_grouped_items()


@pytest.mark.parametrize("bad_id", ["", None, 42])
def test_add_rejects_product_without_identifier(basket: BasketStore, storage: MemoryStorage, bad_id) -> None:
	basket.add_item(product("a", 1.0))
	saved = storage.get_item(DEFAULT_STORAGE_KEY)

	with pytest.raises(InvalidProductError):
		basket.add_item(Product(id=bad_id, price=1.0))

	assert summary(basket) == [("a", 1)]
	assert storage.get_item(DEFAULT_STORAGE_KEY) == saved


def test_persistence_round_trip(storage: MemoryStorage) -> None:
	basket = BasketStore(storage)
	basket.add_item(product("a", 10.0, name="Hoodie", slug={"current": "hoodie"}))
	basket.add_item(product("b"))
	basket.add_item(product("a", 10.0, name="Hoodie", slug={"current": "hoodie"}))

	restored = BasketStore(storage)

	assert restored.get_grouped_items() == basket.get_grouped_items()
	assert restored.get_grouped_items()[0].product.attributes == {"name": "Hoodie", "slug": {"current": "hoodie"}}
	assert restored.get_grouped_items()[1].product.price is None


def test_persisted_record_format(basket: BasketStore, storage: MemoryStorage) -> None:
	basket.add_item(product("a", 10.0, name="Hoodie"))

	record = json.loads(storage.get_item(DEFAULT_STORAGE_KEY))
	assert record == {
		"state": {"items": [{"product": {"name": "Hoodie", "_id": "a", "price": 10.0}, "quantity": 1}]},
		"version": 0,
	}


def test_every_mutation_is_persisted(basket: BasketStore, storage: MemoryStorage) -> None:
	basket.add_item(product("a", 1.0))
	assert BasketStore(storage).get_item_count("a") == 1

	basket.remove_item("a")
	assert BasketStore(storage).get_item_count("a") == 0

	basket.add_item(product("b", 1.0))
	basket.clear_basket()
	assert BasketStore(storage).get_grouped_items() == []


def test_separate_keys_are_independent(storage: MemoryStorage) -> None:
	first = BasketStore(storage, key="first")
	second = BasketStore(storage, key="second")
	first.add_item(product("a", 1.0))

	assert second.get_item_count("a") == 0
	assert BasketStore(storage, key="first").get_item_count("a") == 1


@pytest.mark.parametrize(
	"raw",
	[
		"not json",
		"[]",
		json.dumps({"state": {"items": [{"quantity": 1}]}, "version": 0}),
		json.dumps({"state": {"items": [{"product": {"_id": "a"}, "quantity": 0}]}, "version": 0}),
		json.dumps({"state": {"items": []}, "version": 7}),
		json.dumps({"state": {"items": [{"product": {"_id": "a"}, "quantity": 1}, {"product": {"_id": "a"}, "quantity": 3}]}, "version": 0}),
		json.dumps({"state": {"items": [{"product": {"_id": 42}, "quantity": 1}]}, "version": 0}),
		json.dumps({"state": {"items": [{"product": {"_id": ""}, "quantity": 1}]}, "version": 0}),
		json.dumps({"state": {"items": [{"product": {"_id": "a"}, "quantity": 2.7}]}, "version": 0}),
		json.dumps({"state": {"items": [{"product": {"_id": "a"}, "quantity": True}]}, "version": 0}),
	],
)
def test_malformed_record_starts_empty(storage: MemoryStorage, raw: str, caplog: pytest.LogCaptureFixture) -> None:
	storage.set_item(DEFAULT_STORAGE_KEY, raw)

	with caplog.at_level(logging.WARNING):
		basket = BasketStore(storage)

	assert basket.get_grouped_items() == []
	assert "Discarding unreadable basket" in caplog.text


def test_storage_failure_is_logged_and_state_kept(caplog: pytest.LogCaptureFixture) -> None:
	basket = BasketStore(BrokenStorage())

	with caplog.at_level(logging.ERROR):
		basket.add_item(product("a", 3.0))

	assert basket.get_item_count("a") == 1
	assert "Failed to persist basket" in caplog.text


def test_pure_mutations_do_not_touch_input() -> None:
	items = [BasketItem(product=product("a", 1.0), quantity=1)]

	added = add_to_items(items, product("a", 1.0))
	removed = remove_from_items(added, "a")

	assert items[0].quantity == 1
	assert added[0].quantity == 2
	assert removed[0].quantity == 1
	assert remove_from_items(removed, "a") == []
