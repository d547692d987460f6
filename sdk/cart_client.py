# sdk/cart_client.py
import requests
import httpx
from typing import Optional, Dict, Any
from urllib.parse import quote

from cart_service import config


class CartClient:
    def __init__(self, base_url: str = config.BASE_URL, timeout: int = 10):
        self.base_url = base_url.rstrip("/")
        self.cart_url = f"{self.base_url}/api/v1/cart"
        self.session = requests.Session()
        self.timeout = timeout

    def _item_url(self, product_id: str) -> str:
        # ids may contain "/", "?" or "#"
        return f"{self.cart_url}/items/{quote(product_id, safe='')}"

    def health(self) -> Dict[str, Any]:
        r = self.session.get(f"{self.cart_url}/health", timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    # Cart
    def get_cart(self) -> Dict[str, Any]:
        r = self.session.get(self.cart_url, timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    def add_item(self, product_id: str, quantity: int = 1) -> Dict[str, Any]:
        r = self.session.post(f"{self.cart_url}/items", json={
            "product_id": product_id, "quantity": quantity
        }, timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    def get_item(self, product_id: str) -> Optional[Dict[str, Any]]:
        r = self.session.get(self._item_url(product_id), timeout=self.timeout)
        if r.status_code == 404:
            return None
        r.raise_for_status()
        return r.json()

    def update_quantity(self, product_id: str, quantity: int) -> Dict[str, Any]:
        r = self.session.put(self._item_url(product_id), json={"quantity": int(quantity)}, timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    def remove_item(self, product_id: str) -> bool:
        r = self.session.delete(self._item_url(product_id), timeout=self.timeout)
        # not in the cart: nothing to remove, not an error for the caller
        if r.status_code == 404:
            return False
        r.raise_for_status()
        return True

    def clear_cart(self) -> Dict[str, Any]:
        r = self.session.delete(self.cart_url, timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    def checkout(self, idempotency_key: Optional[str] = None) -> Dict[str, Any]:
        headers = {"Idempotency-Key": idempotency_key} if idempotency_key else {}
        r = self.session.post(f"{self.cart_url}/checkout", headers=headers, timeout=self.timeout)
        # 400 "Cart is empty" carries a CheckoutOut body, let the caller look at it
        if r.status_code == 400:
            return r.json()
        r.raise_for_status()
        return r.json()

    # Async add (used by the concurrency demo)
    async def add_item_async(self, product_id: str, quantity: int = 1, client: Optional[httpx.AsyncClient] = None):
        payload = {"product_id": product_id, "quantity": quantity}
        if client is not None:
            return await client.post(f"{self.cart_url}/items", json=payload)
        async with httpx.AsyncClient(timeout=self.timeout) as ac:
            return await ac.post(f"{self.cart_url}/items", json=payload)
