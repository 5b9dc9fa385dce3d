# BE/macro_bias/persistence/cache.py
from __future__ import annotations

import threading
import time
from typing import Any, Callable, Dict, List, Optional, Tuple


def horizon_key(prefix: str, ttl: int, now: Optional[float] = None) -> str:
    """
    Time-bucketed key: every caller inside the same `ttl`-second window gets
    the same key, e.g. "bias:day:20371".
    """
    ttl_eff = max(1, int(ttl))
    ts = time.time() if now is None else float(now)
    return f"{prefix}:{int(ts // ttl_eff)}"


class BiasCache:
    """
    In-memory TTL cache for computed bias snapshots.

    Usage:
        cache = BiasCache(default_ttl=900)
        snap = cache.get_or_compute(horizon_key("bias:15m", 900), lambda: compute(...))

        cache.put("bias:manual", snap, ttl=60)
        cache.get("bias:manual")

    Notes
    -----
    - Keys are namespaced strings ("bias:<horizon>:<bucket>").
    - get_or_compute is single-flight per key: concurrent callers on a miss
      wait for one factory call and share its result.
    - A factory exception propagates to its caller and nothing is stored.
    - Per-key locks live only while a get_or_compute call holds or waits on
      them, so the lock map is bounded by the number of in-flight keys.
    """

    def __init__(self, default_ttl: int = 300, clock: Callable[[], float] = time.time) -> None:
        self._mem: Dict[str, Tuple[float, Any]] = {}
        self.default_ttl = max(1, int(default_ttl))
        self._clock = clock
        self._lock = threading.Lock()
        # key -> [lock, callers holding or waiting]
        self._key_locks: Dict[str, List[Any]] = {}

    # --------------- core ---------------

    def _expired(self, exp_ts: float) -> bool:
        return self._clock() >= exp_ts

    def _acquire_key_lock(self, key: str) -> threading.Lock:
        with self._lock:
            slot = self._key_locks.get(key)
            if slot is None:
                slot = self._key_locks[key] = [threading.Lock(), 0]
            slot[1] += 1
            return slot[0]

    def _release_key_lock(self, key: str) -> None:
        with self._lock:
            slot = self._key_locks.get(key)
            if slot is None:
                return
            slot[1] -= 1
            if slot[1] <= 0:
                del self._key_locks[key]

    def get(self, key: str) -> Optional[Any]:
        with self._lock:
            hit = self._mem.get(key)
            if hit is None:
                return None
            exp_ts, val = hit
            if not self._expired(exp_ts):
                return val
            # drop expired
            self._mem.pop(key, None)
            return None

    def put(self, key: str, value: Any, ttl: Optional[int] = None) -> None:
        ttl_eff = self.default_ttl if ttl is None else max(1, int(ttl))
        with self._lock:
            self._mem[key] = (self._clock() + ttl_eff, value)

    def get_or_compute(self, key: str, factory: Callable[[], Any], ttl: Optional[int] = None) -> Any:
        found = self.get(key)
        if found is not None:
            return found
        lock = self._acquire_key_lock(key)
        try:
            with lock:
                # another caller may have filled it while we waited
                found = self.get(key)
                if found is not None:
                    return found
                val = factory()
                self.put(key, val, ttl=ttl)
                return val
        finally:
            self._release_key_lock(key)

    def invalidate(self, key: str) -> None:
        with self._lock:
            self._mem.pop(key, None)

    def __len__(self) -> int:
        with self._lock:
            return len(self._mem)

    # --------------- housekeeping ---------------

    def purge_expired(self) -> int:
        """
        Remove expired items. Returns count purged.
        """
        purged = 0
        with self._lock:
            for k in list(self._mem.keys()):
                exp_ts, _ = self._mem[k]
                if self._expired(exp_ts):
                    self._mem.pop(k, None)
                    purged += 1
        return purged
