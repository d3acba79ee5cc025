import pytest
from protean.utils.globals import current_domain


@pytest.fixture(autouse=True)
def _ctx(ordering_bed):
    with ordering_bed.domain_context():
        yield


@pytest.fixture(autouse=True)
def run_around_tests(_ctx):
    """Fixture to automatically cleanup infrastructure after every test"""
    yield

    # Clear all databases
    for _, provider in current_domain.providers.items():
        provider._data_reset()

    # Drain event stores
    current_domain.event_store.store._data_reset()


@pytest.fixture()
def store_id():
    """The default checkout store, registered."""
    from ordering.store.registration import RegisterStore

    return current_domain.process(RegisterStore(slug="badminton", name="OfCourt"), asynchronous=False)
