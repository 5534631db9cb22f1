import pytest
from alerts.channel import set_transport
from alerts.channel.fake_push import FakePushAdapter
from alerts.device.device import DeviceRegistration
from protean.utils.globals import current_domain


@pytest.fixture
def transport():
    adapter = FakePushAdapter()
    set_transport(adapter)
    return adapter


@pytest.fixture
def registry():
    return current_domain.repository_for(DeviceRegistration)


@pytest.fixture
def register_tokens(registry):
    def _register(*tokens):
        for token in tokens:
            registry.add(DeviceRegistration.register(token, platform="Android"))
        return list(tokens)

    return _register
