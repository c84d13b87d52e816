"""Per-token market parameter cache (tick size, neg-risk flag, fee rate)"""

import threading
from typing import Any, Callable, Dict

TICK_SIZE = "tick_size"
NEG_RISK = "neg_risk"
FEE_RATE = "fee_rate"


class MarketParamsCache:
    """Thread-safe get-or-fetch cache shared by concurrent order builds"""

    def __init__(self):
        self._values: Dict[str, Dict[str, Any]] = {TICK_SIZE: {}, NEG_RISK: {}, FEE_RATE: {}}
        self._lock = threading.Lock()

    def get(self, kind: str, token_id: str) -> Any:
        with self._lock:
            return self._values[kind].get(token_id)

    def set(self, kind: str, token_id: str, value: Any) -> None:
        with self._lock:
            self._values[kind][token_id] = value

    def get_or_fetch(self, kind: str, token_id: str, fetch: Callable[[str], Any]) -> Any:
        """
        Return the cached value, fetching and storing it on a miss.

        The fetch runs outside the lock. Concurrent misses on one token may
        fetch twice; the last write is kept.
        """
        cached = self.get(kind, token_id)
        if cached is not None:
            return cached
        value = fetch(token_id)
        self.set(kind, token_id, value)
        return value

    def clear(self) -> None:
        with self._lock:
            for values in self._values.values():
                values.clear()
