"""Tests for the cart reducer and its pricing helpers."""

import pytest

from storefront.cart.pricing import calculate_item_total, get_item_price
from storefront.cart.reducer import CartReducer
from storefront.cart.storage import MemoryStorage
from storefront.cart.store import PersistentCartStore, parse_cart
from storefront.core.exceptions.errors import CartValidationError
from storefront.schemas.cart import CartPackage, CartProduct


def make_product(product_id="1", price=10.0, packages=None):
    return CartProduct(
        id=product_id,
        name=f"Product {product_id}",
        description="desc",
        price=price,
        image="img.png",
        category="cat",
        packages=packages or [],
    )


PACKED = make_product(
    "2",
    price=10.0,
    packages=[CartPackage(id="small", name="Small", price=15.0), CartPackage(id="large", name="Large", price=30.0)],
)


class TestAddItem:
    def test_new_item_is_appended_with_total(self):
        cart = CartReducer()
        cart.add_item(make_product(), 2, "")

        assert len(cart.items) == 1
        assert cart.items[0].quantity == 2
        assert cart.items[0].total_price == 20.0

    def test_same_product_and_package_merges(self):
        """Adding the same (id, package) pair sums quantities instead of duplicating."""
        cart = CartReducer()
        cart.add_item(PACKED, 1, "small")
        cart.add_item(PACKED, 2, "small")

        assert len(cart.items) == 1
        assert cart.items[0].quantity == 3
        assert cart.items[0].total_price == 45.0

    def test_same_product_different_package_is_separate_line(self):
        cart = CartReducer()
        cart.add_item(PACKED, 1, "small")
        cart.add_item(PACKED, 1, "large")

        assert len(cart.items) == 2
        assert cart.get_cart_total() == 45.0
        assert cart.get_cart_count() == 2

    @pytest.mark.parametrize("quantity", [0, -1, 1.5, True])
    def test_rejects_non_positive_or_non_integer_quantity(self, quantity):
        cart = CartReducer()
        with pytest.raises(CartValidationError):
            cart.add_item(make_product(), quantity, "")
        assert cart.items == []

    def test_packages_are_copied(self):
        product = make_product("3", packages=[CartPackage(id="p", name="P", price=1.0)])
        cart = CartReducer()
        cart.add_item(product, 1, "p")
        product.packages[0].price = 99.0

        assert cart.items[0].packages[0].price == 1.0


class TestUpdates:
    def test_update_quantity_recomputes_total(self):
        cart = CartReducer()
        cart.add_item(make_product(), 1, "")
        cart.update_quantity("1", 4)

        assert cart.items[0].quantity == 4
        assert cart.items[0].total_price == 40.0

    def test_update_quantity_below_one_is_ignored(self):
        cart = CartReducer()
        cart.add_item(make_product(), 3, "")
        cart.update_quantity("1", 0)

        assert cart.items[0].quantity == 3

    def test_update_package_changes_price(self):
        cart = CartReducer()
        cart.add_item(PACKED, 2, "small")
        cart.update_package("2", "large")

        assert cart.items[0].selected_package == "large"
        assert cart.items[0].total_price == 60.0

    def test_unknown_package_falls_back_to_base_price(self):
        cart = CartReducer()
        cart.add_item(PACKED, 2, "small")
        cart.update_package("2", "missing")

        assert cart.items[0].selected_package == "missing"
        assert cart.items[0].total_price == 20.0

    def test_remove_item_drops_every_line_of_the_product(self):
        cart = CartReducer()
        cart.add_item(PACKED, 1, "small")
        cart.add_item(PACKED, 1, "large")
        cart.add_item(make_product(), 1, "")
        cart.remove_item("2")

        assert [item.id for item in cart.items] == ["1"]

    def test_clear_cart_empties_items(self):
        cart = CartReducer()
        cart.add_item(make_product(), 1, "")
        cart.clear_cart()

        assert cart.items == []
        assert cart.get_cart_total() == 0
        assert cart.get_cart_count() == 0

    def test_switching_onto_an_existing_package_merges_lines(self):
        """Moving a line onto a package already in the cart keeps one line per (product, package)."""
        cart = CartReducer()
        cart.add_item(PACKED, 1, "small")
        cart.add_item(PACKED, 2, "large")

        cart.update_package("2", "small")

        assert [(item.id, item.selected_package) for item in cart.items] == [("2", "small")]
        assert cart.items[0].quantity == 3
        assert cart.items[0].total_price == 45.0
        assert cart.get_cart_count() == 3

    def test_switching_package_keeps_other_products(self):
        cart = CartReducer()
        cart.add_item(make_product(), 1, "")
        cart.add_item(PACKED, 1, "small")
        cart.add_item(PACKED, 1, "large")

        cart.update_package("2", "large")

        assert [(item.id, item.selected_package, item.quantity) for item in cart.items] == [("1", "", 1), ("2", "large", 2)]

    @pytest.mark.parametrize("quantity", [2.5, True, "3"])
    def test_update_quantity_rejects_non_integer(self, quantity):
        cart = CartReducer()
        cart.add_item(make_product(), 1, "")

        with pytest.raises(CartValidationError):
            cart.update_quantity("1", quantity)
        assert cart.items[0].quantity == 1

    def test_switch_to_missing_package_uses_base_price(self):
        product = make_product("7", price=100.0, packages=[CartPackage(id="p1", name="P1", price=150.0)])
        cart = CartReducer()
        cart.add_item(product, 3, "p1")
        assert cart.items[0].total_price == 450.0

        cart.update_package("7", "p2")

        assert cart.items[0].total_price == 300.0


class TestPricing:
    def test_item_price_uses_selected_package(self):
        cart = CartReducer()
        item = cart.add_item(PACKED, 1, "large")

        assert get_item_price(item) == 30.0
        assert CartReducer.get_item_price(item) == 30.0
        assert calculate_item_total(item) == 30.0

    def test_item_price_without_package_is_base_price(self):
        cart = CartReducer()
        item = cart.add_item(PACKED, 1, "")

        assert get_item_price(item) == 10.0

    def test_total_matches_sum_of_lines(self):
        cart = CartReducer()
        cart.add_item(PACKED, 2, "small")
        cart.add_item(make_product("9", price=2.5), 4, "")

        assert cart.get_cart_total() == sum(calculate_item_total(i) for i in cart.items)
        assert cart.get_cart_count() == 6


class TestPersistence:
    def test_every_mutation_is_written_to_the_store(self):
        storage = MemoryStorage()
        store = PersistentCartStore(storage)
        cart = CartReducer.load(store)

        cart.add_item(PACKED, 1, "small")
        assert len(parse_cart(storage.get("cart"))) == 1

        cart.update_quantity("2", 5)
        assert parse_cart(storage.get("cart"))[0].quantity == 5

        cart.remove_item("2")
        assert parse_cart(storage.get("cart")) == []

    def test_clear_removes_the_record(self):
        storage = MemoryStorage()
        cart = CartReducer.load(PersistentCartStore(storage))
        cart.add_item(make_product(), 1, "")
        cart.clear_cart()

        assert storage.get("cart") is None

    def test_reload_restores_items(self):
        storage = MemoryStorage()
        cart = CartReducer.load(PersistentCartStore(storage))
        cart.add_item(PACKED, 2, "large")

        reloaded = CartReducer.load(PersistentCartStore(storage))
        assert reloaded.items == cart.items
