"""Tests for the liveness sweeper."""

from unittest.mock import MagicMock

import pytest
from alerts.config import AlertSettings
from alerts.delivery.outcome import ErrorKind
from alerts.delivery.sweeper import PROBE_TIMEOUT_CODE, LivenessSweeper
from alerts.errors import PermanentTokenError, RegistryWriteError, SweepTimeoutError, TransientDeliveryError


def _sweeper(transport, settings=None, **kwargs):
    return LivenessSweeper(transport=transport, settings=settings or AlertSettings(), **kwargs)


class TestSweep:
    def test_empty_registry_sends_nothing(self, transport):
        report = _sweeper(transport).sweep_report()
        assert report.probed == 0
        assert report.removed == 0
        assert transport.sent_probes == []

    def test_all_healthy(self, transport, registry, register_tokens):
        register_tokens("a", "b", "c")
        assert _sweeper(transport).sweep() == 0
        assert registry.list_tokens() == ["a", "b", "c"]
        assert sorted(p["token"] for p in transport.sent_probes) == ["a", "b", "c"]

    def test_probe_carries_check_payload(self, transport, register_tokens):
        register_tokens("a")
        _sweeper(transport).sweep()
        assert transport.sent_probes[0]["data"] == {"check": "valid"}

    def test_permanently_invalid_tokens_removed(self, transport, registry, register_tokens):
        register_tokens("a", "b", "c", "d")
        transport.fail_token("b", "messaging/registration-token-not-registered")
        transport.fail_token("d", "messaging/invalid-registration-token")

        assert _sweeper(transport).sweep() == 2
        assert registry.list_tokens() == ["a", "c"]

    def test_transient_and_unknown_failures_keep_tokens(self, transport, registry, register_tokens):
        register_tokens("a", "b", "c")
        transport.fail_token("a", "messaging/quota-exceeded")
        transport.fail_token("b", "messaging/something-new")

        report = _sweeper(transport).sweep_report()
        assert report.removed == 0
        assert report.probed == 3
        assert registry.list_tokens() == ["a", "b", "c"]

    def test_report_outcomes_in_registry_order(self, transport, register_tokens):
        register_tokens("a", "b")
        transport.fail_token("b", "UNREGISTERED")
        report = _sweeper(transport).sweep_report()
        assert [token for token, _ in report.outcomes] == ["a", "b"]
        assert report.outcomes[1][1].error_kind == ErrorKind.PERMANENTLY_INVALID


class TestProbeFailures:
    def test_raised_permanent_error_prunes(self, transport, registry, register_tokens):
        register_tokens("a", "b")
        transport.raise_for_token("b", PermanentTokenError("b", code="UNREGISTERED"))
        assert _sweeper(transport).sweep() == 1
        assert registry.list_tokens() == ["a"]

    def test_raised_transient_error_keeps_token(self, transport, registry, register_tokens):
        register_tokens("a")
        transport.raise_for_token("a", TransientDeliveryError("a", code="UNAVAILABLE"))
        assert _sweeper(transport).sweep() == 0
        assert registry.list_tokens() == ["a"]

    def test_unexpected_exception_is_isolated(self, transport, registry, register_tokens):
        register_tokens("a", "b", "c")
        transport.raise_for_token("a", RuntimeError("socket closed"))
        transport.fail_token("c", "messaging/registration-token-not-registered")

        report = _sweeper(transport).sweep_report()
        assert report.probed == 3
        assert report.outcomes[0][1].error_kind == ErrorKind.TRANSIENT
        assert registry.list_tokens() == ["a", "b"]

    def test_failing_transport_removes_nothing(self, transport, registry, register_tokens):
        register_tokens("a", "b")
        transport.configure(should_succeed=False)
        assert _sweeper(transport).sweep() == 0
        assert registry.list_tokens() == ["a", "b"]


class TestTimeouts:
    def test_hung_probe_times_out_as_transient(self, transport, registry, register_tokens):
        register_tokens("a", "slow", "dead")
        transport.delay_token("slow", 1.0)
        transport.fail_token("dead", "UNREGISTERED")
        settings = AlertSettings(probe_timeout_seconds=0.2, sweep_deadline_seconds=30)

        report = _sweeper(transport, settings).sweep_report()

        assert report.timed_out == 1
        outcomes = dict(report.outcomes)
        assert outcomes["slow"].error_code == PROBE_TIMEOUT_CODE
        assert outcomes["slow"].error_kind == ErrorKind.TRANSIENT
        assert registry.list_tokens() == ["a", "slow"]

    def test_deadline_overrun_raises_without_pruning(self, transport, registry, register_tokens):
        register_tokens("dead", "slow")
        transport.fail_token("dead", "UNREGISTERED")
        transport.delay_token("slow", 1.0)
        settings = AlertSettings(probe_timeout_seconds=5, sweep_deadline_seconds=0.3)

        with pytest.raises(SweepTimeoutError) as exc:
            _sweeper(transport, settings).sweep()

        assert exc.value.unprobed == 1
        assert exc.value.permanently_invalid == 1
        assert registry.list_tokens() == ["dead", "slow"]

    def test_hung_probes_do_not_starve_later_tokens(self, transport, registry, register_tokens):
        register_tokens("hung-1", "hung-2", "dead")
        transport.delay_token("hung-1", 1.0)
        transport.delay_token("hung-2", 1.0)
        transport.fail_token("dead", "UNREGISTERED")
        settings = AlertSettings(probe_concurrency=2, probe_timeout_seconds=0.2, sweep_deadline_seconds=5)

        report = _sweeper(transport, settings).sweep_report()

        assert report.timed_out == 2
        assert report.removed == 1
        assert dict(report.outcomes)["dead"].error_kind == ErrorKind.PERMANENTLY_INVALID
        assert "dead" in [probe["token"] for probe in transport.sent_probes]
        assert registry.list_tokens() == ["hung-1", "hung-2"]

    def test_queued_token_is_probed_after_a_timeout(self, transport, registry, register_tokens):
        register_tokens("slow", "healthy")
        transport.delay_token("slow", 1.0)
        settings = AlertSettings(probe_concurrency=1, probe_timeout_seconds=0.2, sweep_deadline_seconds=5)

        report = _sweeper(transport, settings).sweep_report()

        outcomes = dict(report.outcomes)
        assert outcomes["slow"].error_code == PROBE_TIMEOUT_CODE
        assert outcomes["healthy"].success is True
        assert report.timed_out == 1

    def test_probes_run_concurrently(self, transport, register_tokens):
        tokens = register_tokens(*[f"tok-{i}" for i in range(4)])
        for token in tokens:
            transport.delay_token(token, 0.3)
        settings = AlertSettings(probe_concurrency=4, probe_timeout_seconds=2, sweep_deadline_seconds=0.9)

        report = _sweeper(transport, settings).sweep_report()
        assert report.probed == 4
        assert report.timed_out == 0


class TestPruneFailure:
    def test_registry_write_error_propagates(self, transport, register_tokens):
        register_tokens("a")
        transport.fail_token("a", "UNREGISTERED")
        pruner = MagicMock()
        pruner.prune.side_effect = RegistryWriteError("db down")

        with pytest.raises(RegistryWriteError):
            _sweeper(transport, pruner=pruner).sweep()
