# cart_service/store.py
import threading
from typing import Dict, List, Union

from .models import CartEntry, InvalidArgument, NotFound

# In-memory quantity-by-product mapping. Every read-modify-write and every
# snapshot happens under the one lock, so no caller sees a half-applied update.


def _check_product_id(product_id: str) -> None:
    if not isinstance(product_id, str) or not product_id.strip():
        raise InvalidArgument("Product ID cannot be null or empty")


def _check_quantity(quantity: int) -> None:
    # bool is an int subclass; True must not count as a quantity of 1
    if isinstance(quantity, bool) or not isinstance(quantity, int):
        raise InvalidArgument("Quantity must be an integer")
    if quantity <= 0:
        raise InvalidArgument("Quantity must be positive")


class CartStore:
    def __init__(self):
        self._items: Dict[str, int] = {}
        self._lock = threading.Lock()

    def add_item(self, product_id: str, quantity: int) -> CartEntry:
        """Add quantity to product_id, creating the entry if absent."""
        _check_quantity(quantity)
        _check_product_id(product_id)
        with self._lock:
            new_qty = self._items.get(product_id, 0) + quantity
            self._items[product_id] = new_qty
        return CartEntry(product_id=product_id, quantity=new_qty)

    def get_all(self) -> List[CartEntry]:
        with self._lock:
            snapshot = list(self._items.items())
        return [CartEntry(product_id=pid, quantity=qty) for pid, qty in snapshot]

    def get_item(self, product_id: str) -> Union[CartEntry, NotFound]:
        with self._lock:
            qty = self._items.get(product_id)
        if qty is None:
            return NotFound(product_id=product_id)
        return CartEntry(product_id=product_id, quantity=qty)

    def set_quantity(self, product_id: str, quantity: int) -> Union[CartEntry, NotFound]:
        """Replace the quantity of an existing entry.

        Absent products are reported as NotFound and never created here;
        use add_item for create-or-increment.
        """
        _check_quantity(quantity)
        with self._lock:
            if product_id not in self._items:
                return NotFound(product_id=product_id)
            self._items[product_id] = quantity
        return CartEntry(product_id=product_id, quantity=quantity)

    def remove_item(self, product_id: str) -> bool:
        with self._lock:
            return self._items.pop(product_id, None) is not None

    def clear(self) -> None:
        with self._lock:
            self._items.clear()

    def drain(self) -> List[CartEntry]:
        """Empty the cart and return what was in it, as one atomic step."""
        with self._lock:
            snapshot = list(self._items.items())
            self._items.clear()
        return [CartEntry(product_id=pid, quantity=qty) for pid, qty in snapshot]

    def size(self) -> int:
        with self._lock:
            return len(self._items)

    def total_quantity(self) -> int:
        with self._lock:
            return sum(self._items.values())
