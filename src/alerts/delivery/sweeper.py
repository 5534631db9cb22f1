"""Liveness sweeper — periodically probes every registered token and prunes dead ones.

Runs once per schedule tick, independent of order activity:

    registry snapshot → probe each token → classify → collect → one prune batch

At most ``probe_concurrency`` probes are live at once. Each probe has its own
timeout, counted from the moment it starts; a probe that overruns is
abandoned and its slot handed to the next token, so unresponsive tokens
cannot stall the sweep. The sweep as a whole has a deadline. A probe that
fails for any reason only affects its own outcome.
"""

import time
from collections import deque
from concurrent.futures import FIRST_COMPLETED, ThreadPoolExecutor, wait

import structlog
from alerts.channel import get_transport
from alerts.channel.push_port import PushPort
from alerts.config import AlertSettings, get_settings
from alerts.delivery.outcome import (
    DeliveryOutcome,
    ErrorKind,
    SweepReport,
    outcome_from_exception,
    outcome_from_result,
)
from alerts.delivery.pruner import RegistryPruner
from alerts.device.device import DeviceRegistration
from alerts.errors import DeliveryError, SweepTimeoutError, UnclassifiedError
from protean.utils.globals import current_domain

logger = structlog.get_logger(__name__)

PROBE_TIMEOUT_CODE = "probe-timeout"


class LivenessSweeper:
    def __init__(
        self,
        registry=None,
        transport: PushPort | None = None,
        pruner: RegistryPruner | None = None,
        settings: AlertSettings | None = None,
    ):
        settings = settings or get_settings()
        self.registry = registry if registry is not None else current_domain.repository_for(DeviceRegistration)
        self.transport = transport or get_transport()
        self.pruner = pruner or RegistryPruner(self.registry)
        self.probe_payload = settings.probe_payload
        self.probe_timeout = settings.probe_timeout_seconds
        self.concurrency = settings.probe_concurrency
        self.deadline_seconds = settings.sweep_deadline_seconds

    def sweep(self) -> int:
        """Probe the whole registry and return the number of tokens removed."""
        return self.sweep_report().removed

    def sweep_report(self) -> SweepReport:
        tokens = self.registry.list_tokens()
        if not tokens:
            logger.info("Liveness sweep skipped, registry is empty")
            return SweepReport()

        logger.info("Starting liveness sweep", tokens=len(tokens))
        outcomes, timed_out, unfinished = self._probe_all(tokens)

        if unfinished:
            permanently_invalid = len(RegistryPruner.select(outcomes))
            logger.error(
                "Liveness sweep deadline exceeded",
                deadline_seconds=self.deadline_seconds,
                probed=len(outcomes),
                unprobed=len(unfinished),
                permanently_invalid=permanently_invalid,
            )
            raise SweepTimeoutError(
                f"Sweep exceeded {self.deadline_seconds}s with {len(unfinished)} tokens unprobed",
                unprobed=len(unfinished),
                permanently_invalid=permanently_invalid,
            )

        removed = self.pruner.prune(outcomes)

        logger.info(
            "Liveness sweep complete",
            probed=len(outcomes),
            timed_out=timed_out,
            removed=removed,
        )
        return SweepReport(
            probed=len(outcomes),
            removed=removed,
            timed_out=timed_out,
            outcomes=tuple(outcomes),
        )

    def _probe_all(self, tokens: list[str]):
        results: dict[str, DeliveryOutcome] = {}
        timed_out = 0
        deadline = time.monotonic() + self.deadline_seconds
        pending = deque(tokens)
        in_flight: dict = {}

        # One thread per token at most, so a hung probe never holds a slot
        # another token is waiting for. ``probe_concurrency`` caps live probes.
        executor = ThreadPoolExecutor(max_workers=len(tokens), thread_name_prefix="liveness-probe")
        try:
            while pending or in_flight:
                while pending and len(in_flight) < self.concurrency:
                    token = pending.popleft()
                    in_flight[executor.submit(self._probe, token)] = (token, time.monotonic())

                now = time.monotonic()
                if now >= deadline:
                    for future, (token, _) in in_flight.items():
                        if future.done():
                            results[token] = future.result()
                    break

                next_expiry = min(started for _, started in in_flight.values()) + self.probe_timeout
                done, _ = wait(
                    list(in_flight),
                    timeout=max(min(next_expiry, deadline) - now, 0),
                    return_when=FIRST_COMPLETED,
                )
                for future in done:
                    token, _ = in_flight.pop(future)
                    results[token] = future.result()

                now = time.monotonic()
                for future, (token, started) in list(in_flight.items()):
                    if now - started < self.probe_timeout:
                        continue
                    # Abandoned, not joined; its slot goes to the next token
                    del in_flight[future]
                    logger.warning("Probe timed out", token_prefix=token[:8], timeout=self.probe_timeout)
                    results[token] = DeliveryOutcome.failed(error_code=PROBE_TIMEOUT_CODE, error_kind=ErrorKind.TRANSIENT)
                    timed_out += 1
        finally:
            executor.shutdown(wait=False, cancel_futures=True)

        outcomes = [(token, results[token]) for token in tokens if token in results]
        unfinished = [token for token in tokens if token not in results]
        return outcomes, timed_out, unfinished

    def _probe(self, token: str) -> DeliveryOutcome:
        try:
            result = self.transport.send_single(dict(self.probe_payload), token)
        except DeliveryError as exc:
            outcome = outcome_from_exception(exc)
        except Exception as exc:
            unclassified = UnclassifiedError(token, code=type(exc).__name__, message=str(exc))
            logger.warning("Probe failed with unclassified error", token_prefix=token[:8], error=str(exc))
            outcome = outcome_from_exception(unclassified)
        else:
            outcome = outcome_from_result(result)

        if not outcome.success:
            logger.info(
                "Probe failed",
                token_prefix=token[:8],
                error_code=outcome.error_code,
                error_kind=outcome.error_kind.value,
            )
        return outcome
