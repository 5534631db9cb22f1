import pytest
from protean.integrations.pytest import DomainFixture


@pytest.fixture(scope="session")
def alerts_bed():
    from alerts.domain import alerts
    from alerts.utils.db import drop_db, setup_db

    bed = DomainFixture(alerts)
    bed.setup()
    setup_db(alerts)
    yield bed
    drop_db(alerts)
    bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(alerts_bed):
    with alerts_bed.domain_context():
        yield

        from protean import current_domain

        # Clear the device registry and drain the event store between tests
        for _, provider in current_domain.providers.items():
            provider._data_reset()
        for _, broker in current_domain.brokers.items():
            broker._data_reset()
        current_domain.event_store.store._data_reset()
