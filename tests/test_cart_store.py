"""Tests for cart persistence: migration, validation and storage backends."""

import json

import pytest

from storefront.cart.provider import CartProvider
from storefront.cart.storage import DatabaseStorage, JsonFileStorage, MemoryStorage
from storefront.cart.store import PersistentCartStore, migrate_cart_item, parse_cart, validate_cart_item
from storefront.core.exceptions.errors import CorruptCartError
from storefront.schemas.cart import CartProduct

VALID_ITEM = {
    "id": "1",
    "name": "Pizza",
    "description": "Queijo",
    "price": 10,
    "quantity": 2,
    "image": "pizza.png",
    "category": "Pizzas",
    "packages": [{"id": "small", "name": "Small", "price": 12}],
    "selected_package": "small",
    "total_price": 24,
}


class TestMigration:
    def test_missing_fields_get_type_defaults(self):
        migrated = migrate_cart_item({"id": "1", "name": "Old", "price": 5})

        assert migrated["description"] == ""
        assert migrated["selected_package"] == ""
        assert migrated["packages"] == []
        assert migrated["quantity"] == 1
        assert migrated["total_price"] == 0
        assert validate_cart_item(migrated)

    def test_wrong_types_are_replaced(self):
        migrated = migrate_cart_item({**VALID_ITEM, "price": "10", "packages": "none", "quantity": True})

        assert migrated["price"] == 0
        assert migrated["packages"] == []
        assert migrated["quantity"] == 1

    def test_non_object_is_corrupt(self):
        with pytest.raises(CorruptCartError):
            migrate_cart_item("not-an-item")


class TestParseCart:
    def test_valid_payload(self):
        items = parse_cart(json.dumps([VALID_ITEM]))

        assert len(items) == 1
        assert items[0].packages[0].id == "small"

    def test_old_format_is_migrated(self):
        items = parse_cart(json.dumps([{"id": "1", "name": "Old", "price": 5, "quantity": 3}]))

        assert items[0].quantity == 3
        assert items[0].packages == []

    @pytest.mark.parametrize(
        "payload",
        [
            "{not json",
            json.dumps({"items": []}),
            json.dumps([VALID_ITEM, {**VALID_ITEM, "quantity": 0}]),
            json.dumps([{**VALID_ITEM, "packages": [{"id": 1, "name": "x", "price": 1}]}]),
            json.dumps([VALID_ITEM, 42]),
        ],
    )
    def test_any_invalid_item_rejects_the_whole_cart(self, payload):
        with pytest.raises(CorruptCartError):
            parse_cart(payload)


class TestPersistentCartStore:
    def test_missing_record_loads_empty(self):
        assert PersistentCartStore(MemoryStorage()).load() == []

    def test_corrupt_record_is_deleted_and_cart_reset(self):
        storage = MemoryStorage({"cart": "[{\"id\": 1}"})
        store = PersistentCartStore(storage)

        assert store.load() == []
        assert storage.get("cart") is None

    def test_save_then_load(self):
        storage = MemoryStorage()
        store = PersistentCartStore(storage)
        items = parse_cart(json.dumps([VALID_ITEM]))
        store.save(items)

        assert store.load() == items

    def test_save_failure_propagates(self):
        class BrokenStorage(MemoryStorage):
            def set(self, key, value):
                raise OSError("disk full")

        with pytest.raises(OSError):
            PersistentCartStore(BrokenStorage()).save([])


class TestStorageBackends:
    def test_json_file_storage(self, tmp_path):
        storage = JsonFileStorage(str(tmp_path))
        storage.set("cart:abc/../x", "[]")

        assert storage.get("cart:abc/../x") == "[]"
        assert len(list(tmp_path.iterdir())) == 1

        storage.delete("cart:abc/../x")
        assert storage.get("cart:abc/../x") is None

    def test_database_storage_is_namespaced(self, session):
        first = DatabaseStorage(session, namespace="browser-1")
        second = DatabaseStorage(session, namespace="browser-2")
        first.set("cart", "[]")

        assert first.get("cart") == "[]"
        assert second.get("cart") is None

        first.set("cart", "[1]")
        assert first.get("cart") == "[1]"

        first.delete("cart")
        assert first.get("cart") is None


class TestCartProvider:
    def test_cart_outside_provider_is_an_error(self):
        provider = CartProvider(MemoryStorage())

        with pytest.raises(RuntimeError):
            provider.cart

    def test_context_manager_opens_and_closes(self):
        storage = MemoryStorage()
        provider = CartProvider(storage)

        with provider as cart:
            cart.add_item(CartProduct(id="1", name="A", price=3.0), 1, "")
            assert provider.cart is cart

        with pytest.raises(RuntimeError):
            provider.cart
        assert storage.get("cart") is not None

    def test_teardown_clears_persisted_cart(self):
        storage = MemoryStorage()
        provider = CartProvider(storage)
        provider.open().add_item(CartProduct(id="1", name="A", price=3.0), 1, "")

        provider.teardown()

        assert storage.get("cart") is None
        assert CartProvider(storage).open().items == []
