import pytest

from coffeeshop.models.database import db, CartItem
from coffeeshop.services import cart_service
from coffeeshop.services.cart_service import CartService
from coffeeshop.services.exceptions import InsufficientStockError, InvalidInputError, NotFoundError


class TestAddToCart:
    def test_adds_new_line(self, customer, product):
        item = CartService.add_to_cart(customer.id, product.id, 2)

        assert item.id is not None
        assert item.user_id == customer.id
        assert item.product_id == product.id
        assert item.quantity == 2

    def test_whole_stock_can_be_added(self, customer, make_product):
        product = make_product(stock_quantity=3)

        assert CartService.add_to_cart(customer.id, product.id, 3).quantity == 3

    def test_more_than_stock_is_refused(self, customer, make_product):
        product = make_product(stock_quantity=3)

        with pytest.raises(InsufficientStockError, match="Insufficient stock"):
            CartService.add_to_cart(customer.id, product.id, 4)

        assert CartItem.query.count() == 0

    def test_merges_into_existing_line(self, customer, product):
        first = CartService.add_to_cart(customer.id, product.id, 2)
        second = CartService.add_to_cart(customer.id, product.id, 3)

        assert second.id == first.id
        assert second.quantity == 5
        assert CartItem.query.filter_by(user_id=customer.id, product_id=product.id).count() == 1

    def test_merge_above_stock_keeps_existing_quantity(self, customer, make_product):
        product = make_product(stock_quantity=5)
        item = CartService.add_to_cart(customer.id, product.id, 3)

        with pytest.raises(InsufficientStockError, match="requested quantity"):
            CartService.add_to_cart(customer.id, product.id, 3)

        db.session.rollback()
        assert db.session.get(CartItem, item.id).quantity == 3

    def test_lines_are_per_user(self, customer, other_customer, product):
        CartService.add_to_cart(customer.id, product.id, 1)
        CartService.add_to_cart(other_customer.id, product.id, 1)

        assert CartItem.query.count() == 2

    def test_unknown_user(self, product):
        with pytest.raises(NotFoundError, match="User not found"):
            CartService.add_to_cart(404, product.id, 1)

    def test_unknown_product(self, customer):
        with pytest.raises(NotFoundError, match="Product not found"):
            CartService.add_to_cart(customer.id, 404, 1)

    def test_line_created_by_a_concurrent_request_is_merged(self, customer, product, monkeypatch):
        existing = CartItem(user_id=customer.id, product_id=product.id, quantity=2)
        db.session.add(existing)
        db.session.commit()
        find_line = cart_service._find_line
        lookups = []

        def not_visible_yet(user_id, product_id):
            lookups.append(product_id)
            return None if len(lookups) == 1 else find_line(user_id, product_id)

        monkeypatch.setattr(cart_service, "_find_line", not_visible_yet)

        item = CartService.add_to_cart(customer.id, product.id, 3)

        assert item.id == existing.id
        assert item.quantity == 5
        assert CartItem.query.count() == 1

    @pytest.mark.parametrize("quantity", [0, -2])
    def test_quantity_must_be_positive(self, customer, product, quantity):
        with pytest.raises(InvalidInputError):
            CartService.add_to_cart(customer.id, product.id, quantity)


class TestUpdateCartItem:
    def test_overwrites_quantity(self, customer, product):
        item = CartService.add_to_cart(customer.id, product.id, 4)

        updated = CartService.update_cart_item(item.id, 1)

        assert updated.quantity == 1
        assert db.session.get(CartItem, item.id).quantity == 1

    def test_unknown_item(self, app):
        with pytest.raises(NotFoundError, match="not found"):
            CartService.update_cart_item(999, 2)

    def test_zero_is_refused(self, customer, product):
        item = CartService.add_to_cart(customer.id, product.id, 4)

        with pytest.raises(InvalidInputError):
            CartService.update_cart_item(item.id, 0)


class TestRemoveAndClear:
    def test_remove(self, customer, product):
        item = CartService.add_to_cart(customer.id, product.id, 1)

        CartService.remove_from_cart(item.id)

        assert db.session.get(CartItem, item.id) is None

    def test_remove_missing_item_is_a_no_op(self, app):
        CartService.remove_from_cart(12345)

    def test_clear_only_touches_one_user(self, customer, other_customer, make_product):
        first = make_product(name="A")
        second = make_product(name="B")
        CartService.add_to_cart(customer.id, first.id, 1)
        CartService.add_to_cart(customer.id, second.id, 1)
        CartService.add_to_cart(other_customer.id, first.id, 1)

        CartService.clear_cart(customer.id)

        assert CartItem.query.filter_by(user_id=customer.id).count() == 0
        assert CartItem.query.filter_by(user_id=other_customer.id).count() == 1

    def test_clear_empty_or_unknown_cart(self, customer):
        CartService.clear_cart(customer.id)
        CartService.clear_cart(999)


class TestListCartItems:
    def test_lines_carry_current_product(self, customer, product):
        CartService.add_to_cart(customer.id, product.id, 2)

        items = CartService.list_cart_items(customer.id)

        assert len(items) == 1
        assert items[0]["quantity"] == 2
        assert items[0]["product"]["id"] == product.id
        assert items[0]["product"]["name"] == "Colombian Supremo"
        assert items[0]["product"]["roast_type"] == "medium"

    def test_empty_cart(self, customer):
        assert CartService.list_cart_items(customer.id) == []
