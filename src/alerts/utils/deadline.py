"""Run blocking transport work under a time budget."""

from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeoutError

from alerts.errors import DispatchTimeoutError


def run_with_timeout(fn, timeout: float, *args, error_cls=DispatchTimeoutError, **kwargs):
    """Call ``fn`` on a worker thread and wait at most ``timeout`` seconds.

    Exceptions raised by ``fn`` propagate unchanged. When the budget runs out
    ``error_cls`` is raised; the worker is abandoned, not interrupted.
    """
    if timeout <= 0:
        raise error_cls("Time budget exhausted before the call was issued")

    executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="alerts-deadline")
    future = executor.submit(fn, *args, **kwargs)
    try:
        return future.result(timeout=timeout)
    except FutureTimeoutError as exc:
        raise error_cls(f"Call did not complete within {timeout:.2f}s") from exc
    finally:
        executor.shutdown(wait=False)
