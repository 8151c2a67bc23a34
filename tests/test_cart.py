"""Tests for the shopping cart model."""

from decimal import Decimal
from types import SimpleNamespace

from autoparts.services.cart import Cart


def part(id, price, stock):
    return SimpleNamespace(id=id, name=f"Part {id}", price=price, stock_quantity=stock)


def test_add_new_part_starts_at_one():
    cart = Cart()
    assert cart.add(part(1, 10.0, 3))
    assert [(item.part.id, item.quantity) for item in cart] == [(1, 1)]


def test_add_existing_part_increments_up_to_stock():
    cart = Cart()
    brake = part(1, 10.0, 2)
    assert cart.add(brake)
    assert cart.add(brake)
    assert not cart.add(brake)
    assert cart.get(1).quantity == 2


def test_out_of_stock_part_cannot_be_added():
    cart = Cart()
    assert not cart.add(part(1, 10.0, 0))
    assert cart.is_empty


def test_update_quantity_rejects_out_of_range_values():
    cart = Cart()
    cart.add(part(1, 10.0, 4))

    assert not cart.update_quantity(1, 0)
    assert not cart.update_quantity(1, 5)
    assert cart.get(1).quantity == 1

    assert cart.update_quantity(1, 4)
    assert cart.get(1).quantity == 4


def test_update_quantity_of_missing_part_is_ignored():
    cart = Cart()
    assert not cart.update_quantity(99, 1)


def test_remove_and_clear():
    cart = Cart()
    cart.add(part(1, 10.0, 4))
    cart.add(part(2, 5.0, 4))

    cart.remove(1)
    assert [item.part.id for item in cart] == [2]

    cart.clear()
    assert cart.is_empty
    assert len(cart) == 0


def test_total_and_item_count():
    cart = Cart()
    cart.add(part(1, 19.99, 5))
    cart.add(part(2, 0.10, 5))
    cart.update_quantity(1, 3)
    cart.update_quantity(2, 3)

    assert cart.total == Decimal("60.27")
    assert cart.item_count == 6


def test_items_keep_insertion_order():
    cart = Cart()
    for part_id in (3, 1, 2):
        cart.add(part(part_id, 1.0, 1))
    assert [item.part.id for item in cart.items] == [3, 1, 2]
