# tests/test_orders.py
from concurrent.futures import ThreadPoolExecutor

from cart_service.orders import CheckoutLedger


def test_unit_price_applied(store):
    ledger = CheckoutLedger(unit_price=2.5)
    store.add_item("A", 4)
    result = ledger.checkout(store)
    assert result.success
    assert result.total == 10.0


def test_failed_checkout_not_recorded(store):
    ledger = CheckoutLedger(unit_price=1.0)
    assert ledger.checkout(store, "k").success is False

    store.add_item("A", 1)
    result = ledger.checkout(store, "k")
    assert result.success
    assert result.total == 1.0


def test_reset_forgets_keys(store):
    ledger = CheckoutLedger(unit_price=1.0)
    store.add_item("A", 1)
    first = ledger.checkout(store, "k")
    ledger.reset()
    store.add_item("A", 1)
    assert ledger.checkout(store, "k").order_id != first.order_id


def test_oldest_keys_are_forgotten(store):
    ledger = CheckoutLedger(unit_price=1.0, max_keys=2)
    orders = {}
    for key in ["k1", "k2", "k3"]:
        store.add_item("A", 1)
        orders[key] = ledger.checkout(store, key).order_id
    assert ledger.remembered_keys() == 2

    store.add_item("A", 1)
    # k3 is still remembered, k1 was dropped and places a new order
    assert ledger.checkout(store, "k3").order_id == orders["k3"]
    assert store.size() == 1
    assert ledger.checkout(store, "k1").order_id != orders["k1"]
    assert store.size() == 0


def test_concurrent_checkouts_with_same_key_place_one_order(store):
    ledger = CheckoutLedger(unit_price=1.0)
    store.add_item("A", 3)

    with ThreadPoolExecutor(max_workers=8) as pool:
        results = list(pool.map(lambda _: ledger.checkout(store, "same"), range(16)))

    assert all(r.success for r in results)
    assert len({r.order_id for r in results}) == 1
    assert results[0].total == 3.0
