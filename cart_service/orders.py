# cart_service/orders.py
import threading
import uuid
from collections import OrderedDict
from typing import Optional

from . import config
from .core import CheckoutOut
from .store import CartStore


def _new_order_id() -> str:
    return "ORDER-" + uuid.uuid4().hex[:8].upper()


class CheckoutLedger:
    """Turns the cart into an order and remembers responses by Idempotency-Key.

    Only the most recent ``max_keys`` responses are kept; a key older than
    that is treated as new.
    """

    def __init__(self, unit_price: float, max_keys: int = config.IDEMPOTENCY_MAX_KEYS):
        self.unit_price = unit_price
        self.max_keys = max_keys
        self._responses: "OrderedDict[str, CheckoutOut]" = OrderedDict()
        # held across lookup, drain and record so one key never places two orders
        self._lock = threading.Lock()

    def checkout(self, store: CartStore, idempotency_key: Optional[str] = None) -> CheckoutOut:
        if not idempotency_key:
            return self._place(store)

        with self._lock:
            prev = self._responses.get(idempotency_key)
            if prev is not None:
                return prev
            result = self._place(store)
            # failed attempts are not recorded, the same key can be retried
            if result.success:
                self._responses[idempotency_key] = result
                while len(self._responses) > self.max_keys:
                    self._responses.popitem(last=False)
            return result

    def _place(self, store: CartStore) -> CheckoutOut:
        entries = store.drain()
        if not entries:
            return CheckoutOut(success=False, message="Cart is empty")
        total = sum(e.quantity for e in entries) * self.unit_price
        return CheckoutOut(
            success=True,
            message="Checkout completed successfully",
            total=total,
            order_id=_new_order_id(),
        )

    def remembered_keys(self) -> int:
        with self._lock:
            return len(self._responses)

    def reset(self) -> None:
        with self._lock:
            self._responses.clear()
