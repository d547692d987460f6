# tests/test_sdk.py
import asyncio

import httpx
import pytest
import requests
from requests.adapters import BaseAdapter
from requests.structures import CaseInsensitiveDict
from fastapi.testclient import TestClient

from sdk.cart_client import CartClient

BASE_URL = "http://testserver"


class _AppAdapter(BaseAdapter):
    """Sends requests.Session traffic to the ASGI app through TestClient."""

    def __init__(self, app):
        super().__init__()
        self.client = TestClient(app)

    def send(self, request, **kwargs):
        r = self.client.request(
            request.method, request.url, content=request.body, headers=dict(request.headers)
        )
        resp = requests.Response()
        resp.status_code = r.status_code
        resp._content = r.content
        resp.headers = CaseInsensitiveDict(r.headers)
        resp.encoding = "utf-8"
        resp.url = request.url
        resp.request = request
        return resp

    def close(self):
        self.client.close()


@pytest.fixture
def cart(app):
    c = CartClient(base_url=BASE_URL)
    c.session.mount(BASE_URL, _AppAdapter(app))
    return c


def test_health(cart):
    assert cart.health()["success"] is True


def test_add_and_get_cart(cart, store):
    assert cart.add_item("A", 2) == {"product_id": "A", "quantity": 2, "success": True}
    cart.add_item("A", 1)
    body = cart.get_cart()
    assert body["total_items"] == 3
    assert store.get_item("A").quantity == 3


def test_get_item_returns_none_when_missing(cart):
    assert cart.get_item("missing") is None
    cart.add_item("A", 4)
    assert cart.get_item("A") == {"product_id": "A", "quantity": 4}


def test_remove_item_returns_false_when_missing(cart, store):
    cart.add_item("A", 1)
    assert cart.remove_item("A") is True
    assert cart.remove_item("A") is False
    assert store.size() == 0


def test_item_ids_are_url_quoted(cart, store):
    for pid in ["SKU/1", "what?", "tag#7", "a b"]:
        cart.add_item(pid, 1)
        assert cart.get_item(pid) == {"product_id": pid, "quantity": 1}
        assert cart.update_quantity(pid, 3)["item"] == {"product_id": pid, "quantity": 3}
        assert cart.remove_item(pid) is True
    assert store.size() == 0


def test_checkout_returns_body_for_empty_cart(cart):
    body = cart.checkout()
    assert body["success"] is False
    assert body["message"] == "Cart is empty"


def test_checkout_with_idempotency_key(cart):
    cart.add_item("A", 2)
    first = cart.checkout("k1")
    assert first["success"] is True
    assert first["total"] == 2.0
    assert cart.checkout("k1") == first


def test_clear_cart(cart, store):
    cart.add_item("A", 1)
    assert cart.clear_cart()["message"] == "Cleared cart (1 items removed)"
    assert store.size() == 0


def test_other_failures_raise_http_error(cart, store):
    with pytest.raises(requests.HTTPError) as exc:
        cart.add_item("A", 0)
    assert exc.value.response.status_code == 400

    with pytest.raises(requests.HTTPError) as exc:
        cart.update_quantity("missing", 2)
    assert exc.value.response.status_code == 404
    assert store.size() == 0


def test_add_item_async(app, store):
    cart = CartClient(base_url=BASE_URL)

    async def _run():
        transport = httpx.ASGITransport(app=app)
        async with httpx.AsyncClient(transport=transport, base_url=BASE_URL) as ac:
            return await asyncio.gather(*(cart.add_item_async("A", 1, client=ac) for _ in range(20)))

    results = asyncio.run(_run())
    assert all(r.status_code == 201 for r in results)
    assert store.get_item("A").quantity == 20
