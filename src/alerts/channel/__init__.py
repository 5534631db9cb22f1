"""Push transport factory.

Provides get_transport() / set_transport() to swap implementations. The
fake adapter is the default; a production FCM adapter is installed with
set_transport() at process start.
"""

from alerts.channel.fake_push import FakePushAdapter
from alerts.channel.push_port import PushPort

_current_transport: PushPort | None = None


def get_transport() -> PushPort:
    """Return the current push transport. Defaults to FakePushAdapter."""
    global _current_transport
    if _current_transport is None:
        _current_transport = FakePushAdapter()
    return _current_transport


def set_transport(transport: PushPort) -> None:
    """Override the active push transport (useful for tests)."""
    global _current_transport
    _current_transport = transport


def reset_transport() -> None:
    """Reset to the default transport."""
    global _current_transport
    _current_transport = None
