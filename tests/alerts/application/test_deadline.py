"""Tests for running transport work under a time budget."""

import time

import pytest
from alerts.errors import DispatchTimeoutError, SweepTimeoutError
from alerts.utils.deadline import run_with_timeout


class TestRunWithTimeout:
    def test_returns_result(self):
        assert run_with_timeout(lambda a, b: a + b, 1.0, 2, 3) == 5

    def test_kwargs_forwarded(self):
        assert run_with_timeout(lambda value=0: value, 1.0, value=7) == 7

    def test_exception_propagates_unchanged(self):
        def boom():
            raise KeyError("missing")

        with pytest.raises(KeyError):
            run_with_timeout(boom, 1.0)

    def test_timeout_raises(self):
        with pytest.raises(DispatchTimeoutError):
            run_with_timeout(time.sleep, 0.05, 0.5)

    def test_exhausted_budget_raises_without_calling(self):
        calls = []
        with pytest.raises(DispatchTimeoutError):
            run_with_timeout(calls.append, 0, "x")
        assert calls == []

    def test_custom_error_class(self):
        with pytest.raises(SweepTimeoutError):
            run_with_timeout(time.sleep, 0.05, 0.5, error_cls=SweepTimeoutError)
