"""Application tests for store registration and cart record commands."""

import json

import pytest
from ordering.cart.management import SaveCart, load_cart
from ordering.store.registration import RegisterStore
from ordering.store.store import Store, resolve_store_id
from protean import current_domain
from protean.exceptions import ObjectNotFoundError


class TestRegisterStore:
    def test_registers_store(self):
        store_id = current_domain.process(RegisterStore(slug="badminton", name="OfCourt"), asynchronous=False)
        store = current_domain.repository_for(Store).get(store_id)
        assert store.slug == "badminton"
        assert store.name == "OfCourt"

    def test_reregistering_returns_existing_store(self):
        first = current_domain.process(RegisterStore(slug="badminton", name="OfCourt"), asynchronous=False)
        second = current_domain.process(RegisterStore(slug="Badminton", name="Other"), asynchronous=False)
        assert first == second
        assert len(current_domain.repository_for(Store)._dao.query.all().items) == 1

    def test_resolve_store_id(self, store_id):
        assert resolve_store_id("badminton") == store_id

    def test_resolve_unknown_store_is_none(self):
        assert resolve_store_id("tennis") is None
        assert resolve_store_id("") is None


class TestSaveCart:
    def test_creates_record(self):
        current_domain.process(SaveCart(user_id="user-001", items=json.dumps([{"id": 1}])), asynchronous=False)
        assert load_cart("user-001").item_list == [{"id": 1}]

    def test_overwrites_existing_record(self):
        current_domain.process(SaveCart(user_id="user-001", items=json.dumps([{"id": 1}])), asynchronous=False)
        current_domain.process(SaveCart(user_id="user-001", items=json.dumps([{"id": 2}])), asynchronous=False)
        assert load_cart("user-001").item_list == [{"id": 2}]

    def test_empty_cart_is_stored(self):
        current_domain.process(SaveCart(user_id="user-001", items=json.dumps([])), asynchronous=False)
        assert load_cart("user-001").item_list == []

    def test_load_missing_record_raises(self):
        with pytest.raises(ObjectNotFoundError):
            load_cart("user-404")
