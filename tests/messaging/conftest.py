import pytest
from protean import current_domain
from protean.integrations.pytest import DomainFixture


@pytest.fixture(scope="session")
def messaging_bed():
    from messaging.domain import messaging

    bed = DomainFixture(messaging)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(messaging_bed):
    with messaging_bed.domain_context():
        yield

        for _, provider in current_domain.providers.items():
            provider._data_reset()
        current_domain.event_store.store._data_reset()


@pytest.fixture()
def gateway():
    from messaging.gateway.fake_push import FakePushGateway

    return FakePushGateway()


@pytest.fixture()
def store():
    from messaging.store.repository_store import RepositorySessionStore

    return RepositorySessionStore()


@pytest.fixture()
def dispatcher(store, gateway):
    from messaging.dispatch.dispatcher import EventDispatcher

    return EventDispatcher(store=store, gateway=gateway, profile_topic="profile-update")
