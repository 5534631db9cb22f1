"""Shared BDD fixtures and step definitions for the Alerts domain."""

import pytest
from alerts.channel import set_transport
from alerts.channel.fake_push import FakePushAdapter
from alerts.device.device import DeviceRegistration
from protean import current_domain
from pytest_bdd import given, parsers, then


def _split(tokens):
    return [token.strip() for token in tokens.split(",") if token.strip()]


@pytest.fixture()
def push():
    adapter = FakePushAdapter()
    set_transport(adapter)
    return adapter


# ---------------------------------------------------------------------------
# Given steps — device registry
# ---------------------------------------------------------------------------
@given(parsers.cfparse('devices "{tokens}" are registered'))
def devices_registered(tokens, push):
    repo = current_domain.repository_for(DeviceRegistration)
    for token in _split(tokens):
        repo.add(DeviceRegistration.register(token))


@given(parsers.cfparse('device "{token}" has uninstalled the app'))
def device_uninstalled(token, push):
    push.fail_token(token, "messaging/registration-token-not-registered")


@given(parsers.cfparse('device "{token}" is temporarily unreachable'))
def device_unreachable(token, push):
    push.fail_token(token, "messaging/server-unavailable")


# ---------------------------------------------------------------------------
# Then steps — device registry
# ---------------------------------------------------------------------------
@then(parsers.cfparse('the registered devices are "{tokens}"'))
def registered_devices_are(tokens):
    repo = current_domain.repository_for(DeviceRegistration)
    assert repo.list_tokens() == _split(tokens)
