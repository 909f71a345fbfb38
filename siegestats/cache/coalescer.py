"""
Request coalescing for player lookups.

When several requests ask for the same player at once, only the first one
talks to the provider and the others share its result.
"""
import logging
import threading
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional

logger = logging.getLogger("cache.coalescer")


@dataclass
class InFlightLookup:
    """Tracks an in-progress upstream lookup."""
    done: threading.Event = field(default_factory=threading.Event)
    result: Optional[Any] = None
    error: Optional[BaseException] = None
    waiters: int = 0


class RequestCoalescer:
    """
    Ensures concurrent lookups for the same key share one upstream sequence.

    - The first caller for a key runs fetch_fn
    - Later callers for that key block on the event
    - Everyone receives the same result (or the same exception)
    """

    def __init__(self, timeout: float = 30.0):
        """
        Args:
            timeout: Max seconds a waiter blocks on an in-flight lookup
        """
        self._in_flight: Dict[str, InFlightLookup] = {}
        self._lock = threading.Lock()
        self._timeout = timeout

    def run(self, key: str, fetch_fn: Callable[[], Any]) -> Any:
        """
        Join the in-flight lookup for key, or start one.

        Raises:
            TimeoutError: If waiting on another caller's lookup times out
            Exception: Whatever fetch_fn raised
        """
        with self._lock:
            in_flight = self._in_flight.get(key)
            if in_flight is not None:
                in_flight.waiters += 1
                is_leader = False
                logger.debug(f"Coalescing lookup for {key} (waiters: {in_flight.waiters})")
            else:
                in_flight = InFlightLookup()
                self._in_flight[key] = in_flight
                is_leader = True

        if is_leader:
            try:
                in_flight.result = fetch_fn()
            except Exception as e:
                in_flight.error = e
            finally:
                in_flight.done.set()
                with self._lock:
                    self._in_flight.pop(key, None)
        elif not in_flight.done.wait(timeout=self._timeout):
            logger.error(f"Timeout waiting for coalesced lookup: {key}")
            raise TimeoutError(f"Lookup for {key} timed out after {self._timeout}s")

        if in_flight.error is not None:
            raise in_flight.error
        return in_flight.result

    @property
    def active_lookups(self) -> int:
        """Number of currently in-flight lookups."""
        with self._lock:
            return len(self._in_flight)

    def get_stats(self) -> Dict[str, Any]:
        with self._lock:
            return {
                "active_lookups": len(self._in_flight),
                "active_keys": list(self._in_flight.keys()),
            }
