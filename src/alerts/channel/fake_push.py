"""Fake push transport — records multicasts and probes in memory for testing."""

import threading
import time
from uuid import uuid4

from alerts.channel.push_port import PushPort
from alerts.errors import TransportInvocationError


class FakePushAdapter(PushPort):
    """Push adapter that records deliveries and simulates per-token failures."""

    def __init__(self):
        self._lock = threading.Lock()
        self.sent_multicasts: list[dict] = []
        self.sent_probes: list[dict] = []
        self.should_succeed = True
        self.failure_reason = "Push request rejected"
        self.token_errors: dict[str, str] = {}
        self.token_exceptions: dict[str, Exception] = {}
        self.token_delays: dict[str, float] = {}

    def configure(self, should_succeed: bool = True, failure_reason: str = "Push request rejected"):
        """Configure whole-request behaviour. A failing adapter raises on every call."""
        self.should_succeed = should_succeed
        self.failure_reason = failure_reason

    def fail_token(self, token: str, error_code: str):
        """Report ``token`` as failed with ``error_code`` on every delivery."""
        self.token_errors[token] = error_code

    def raise_for_token(self, token: str, exc: Exception):
        """Raise ``exc`` when ``token`` is probed."""
        self.token_exceptions[token] = exc

    def delay_token(self, token: str, seconds: float):
        """Stall probes of ``token`` for ``seconds``."""
        self.token_delays[token] = seconds

    def _result_for(self, token: str) -> dict:
        error_code = self.token_errors.get(token)
        if error_code is not None:
            return {"message_id": None, "status": "failed", "error": error_code}
        return {"message_id": f"push-{uuid4().hex[:12]}", "status": "sent"}

    def send_multicast(
        self,
        title: str,
        body: str,
        data: dict[str, str],
        tokens: list[str],
    ) -> list[dict]:
        if not self.should_succeed:
            raise TransportInvocationError(self.failure_reason)

        results = [self._result_for(token) for token in tokens]
        with self._lock:
            self.sent_multicasts.append(
                {
                    "title": title,
                    "body": body,
                    "data": dict(data),
                    "tokens": list(tokens),
                    "results": results,
                }
            )
        return results

    def send_single(self, data: dict[str, str], token: str) -> dict:
        if not self.should_succeed:
            raise TransportInvocationError(self.failure_reason)

        delay = self.token_delays.get(token)
        if delay:
            time.sleep(delay)

        with self._lock:
            self.sent_probes.append({"token": token, "data": dict(data)})

        exc = self.token_exceptions.get(token)
        if exc is not None:
            raise exc
        return self._result_for(token)

    @property
    def multicast_count(self) -> int:
        return len(self.sent_multicasts)

    def reset(self):
        """Clear recorded traffic and failure configuration (useful between tests)."""
        with self._lock:
            self.sent_multicasts.clear()
            self.sent_probes.clear()
        self.should_succeed = True
        self.failure_reason = "Push request rejected"
        self.token_errors.clear()
        self.token_exceptions.clear()
        self.token_delays.clear()
