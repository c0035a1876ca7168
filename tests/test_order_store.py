"""Tests for the session order store."""

import threading

import pytest

from pizzaservice.models import Customer, Order
from pizzaservice.services.order_store import SessionOrderStore


def test_save_and_get():
    store = SessionOrderStore()
    order = Order(session_token="s1")
    store.save(order)

    assert store.get("s1") is order
    assert store.get("other") is None
    assert store.get(None) is None
    assert len(store) == 1


def test_resubmission_replaces_stored_order():
    store = SessionOrderStore()
    first = Order(customer=Customer(first_name="Anna"), session_token="s1")
    second = Order(customer=Customer(first_name="Anna"), session_token="s1")
    store.save(first)
    store.save(second)

    assert store.get("s1") is second
    assert len(store) == 1


def test_order_without_session_is_rejected():
    store = SessionOrderStore()
    with pytest.raises(ValueError):
        store.save(Order())
    with pytest.raises(ValueError):
        store.save(None)


def test_discard_and_clear():
    store = SessionOrderStore()
    store.save(Order(session_token="s1"))
    store.save(Order(session_token="s2"))

    assert store.discard("s1") is True
    assert store.discard("s1") is False
    assert store.get("s1") is None

    store.clear()
    assert len(store) == 0


def test_oldest_session_is_evicted():
    store = SessionOrderStore(max_sessions=2)
    store.save(Order(session_token="s1"))
    store.save(Order(session_token="s2"))
    store.save(Order(session_token="s1"))
    store.save(Order(session_token="s3"))

    assert store.get("s2") is None
    assert store.get("s1") is not None
    assert store.get("s3") is not None


def test_max_sessions_must_be_positive():
    with pytest.raises(ValueError):
        SessionOrderStore(max_sessions=0)


def test_concurrent_saves_are_all_kept():
    store = SessionOrderStore(max_sessions=10_000)

    def worker(n):
        for i in range(200):
            store.save(Order(session_token=f"w{n}-{i}"))

    threads = [threading.Thread(target=worker, args=(n,)) for n in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(store) == 1600
