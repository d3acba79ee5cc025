"""End-to-end fixtures: the storefront client talks to the real application through TestClient."""

import pytest
from app import create_app
from fastapi.testclient import TestClient
from ordering.store.registration import RegisterStore
from payments.gateway.fake_adapter import FakeGateway
from protean.utils.globals import current_domain
from storefront.cart.remote import ApiCartStore
from storefront.client import StorefrontClient


@pytest.fixture(autouse=True)
def _ctx(ordering_bed):
    with ordering_bed.domain_context():
        current_domain.process(RegisterStore(slug="badminton", name="OfCourt"), asynchronous=False)
        yield

        for _, provider in current_domain.providers.items():
            provider._data_reset()
        current_domain.event_store.store._data_reset()


@pytest.fixture()
def gateway():
    return FakeGateway()


@pytest.fixture()
def app(settings, gateway):
    return create_app(settings, gateway)


@pytest.fixture()
def client(app):
    return StorefrontClient(http=TestClient(app))


@pytest.fixture()
def remote(client):
    return ApiCartStore(client)
