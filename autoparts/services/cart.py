"""
Shopping cart.

The storefront keeps the cart on the client until checkout; this is the
same model on the server, used to validate and price a submitted cart.
"""
from dataclasses import dataclass
from decimal import Decimal
from typing import Iterator, List, Optional


@dataclass
class CartItem:
    part: object
    quantity: int = 1

    @property
    def subtotal(self) -> Decimal:
        return Decimal(str(self.part.price)) * self.quantity


class Cart:
    """Ordered (part, quantity) pairs, never exceeding a part's stock."""

    def __init__(self):
        self._items: List[CartItem] = []

    def __iter__(self) -> Iterator[CartItem]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    @property
    def items(self) -> List[CartItem]:
        return list(self._items)

    @property
    def is_empty(self) -> bool:
        return not self._items

    @property
    def item_count(self) -> int:
        return sum(item.quantity for item in self._items)

    @property
    def total(self) -> Decimal:
        return sum((item.subtotal for item in self._items), Decimal("0"))

    def get(self, part_id) -> Optional[CartItem]:
        for item in self._items:
            if item.part.id == part_id:
                return item
        return None

    def add(self, part) -> bool:
        """Add one unit of ``part``. Returns False when stock is exhausted."""
        item = self.get(part.id)
        if item is None:
            if part.stock_quantity < 1:
                return False
            self._items.append(CartItem(part=part, quantity=1))
            return True
        if item.quantity < part.stock_quantity:
            item.quantity += 1
            return True
        return False

    def update_quantity(self, part_id, quantity: int) -> bool:
        """Set a line's quantity; out-of-range values leave the cart unchanged."""
        if quantity < 1:
            return False
        item = self.get(part_id)
        if item is None or quantity > item.part.stock_quantity:
            return False
        item.quantity = quantity
        return True

    def remove(self, part_id) -> None:
        self._items = [item for item in self._items if item.part.id != part_id]

    def clear(self) -> None:
        self._items = []
