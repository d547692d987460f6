# tests/conftest.py
import pytest
from fastapi.testclient import TestClient

from cart_service.main import create_app
from cart_service.orders import CheckoutLedger
from cart_service.store import CartStore


@pytest.fixture
def store():
    return CartStore()


@pytest.fixture
def app(store):
    return create_app(store=store, ledger=CheckoutLedger(unit_price=1.00))


@pytest.fixture
def client(app):
    return TestClient(app)
