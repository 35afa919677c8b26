"""
Opt-in simulated network conditions.

With SIMULATE_NETWORK enabled every route using these dependencies waits a
random 200-1200 ms, and write routes fail a fraction of the time with
TransientWriteError (HTTP 503) before any state is touched. Clients are
expected to surface the error and let the user retry.
"""

import logging
import random
import time

from config.settings import settings
from services.exceptions import TransientWriteError

logger = logging.getLogger(__name__)


def _sleep() -> None:
    low = min(settings.LATENCY_MIN_MS, settings.LATENCY_MAX_MS)
    high = max(settings.LATENCY_MIN_MS, settings.LATENCY_MAX_MS)
    time.sleep(random.randint(low, high) / 1000.0)


def _maybe_fail(rate: float, operation: str) -> None:
    if random.random() < rate:
        logger.info(f"Simulated failure for {operation}")
        raise TransientWriteError(f"Simulated network failure during {operation}")


def simulated_read() -> None:
    """Latency only."""
    if settings.SIMULATE_NETWORK:
        _sleep()


def simulated_write() -> None:
    """Latency plus the default write failure rate."""
    if settings.SIMULATE_NETWORK:
        _sleep()
        _maybe_fail(settings.WRITE_FAILURE_RATE, "write")


def simulated_assessment_save() -> None:
    """Latency plus the (lower) failure rate of saving an assessment."""
    if settings.SIMULATE_NETWORK:
        _sleep()
        _maybe_fail(settings.ASSESSMENT_SAVE_FAILURE_RATE, "assessment save")
