# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Run-scoped single-flight memoization."""

import concurrent.futures
import threading
from typing import Callable, Generic, Hashable, TypeVar

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")


class SingleFlightCache(Generic[K, V]):
    """Compute each key at most once and share the outcome with all callers.

    The first caller for a key runs the loader and publishes its result or
    exception; concurrent callers for the same key wait on that outcome.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._futures: dict[K, concurrent.futures.Future[V]] = {}

    def get(
        self,
        key: K,
        loader: Callable[[], V],
        timeout: float | None = None,
    ) -> V:
        """Return the cached value for ``key``, computing it on first use.

        Args:
            key: Cache key.
            loader: Zero-argument callable producing the value.
            timeout: Optional seconds to wait for the value. When set, the
                loader runs on a daemon thread so a hung load only fails the
                waiting callers.

        Returns:
            The loaded value.

        Raises:
            concurrent.futures.TimeoutError: If ``timeout`` expires.
            Exception: Whatever the loader raised, for every caller.
        """
        with self._lock:
            future = self._futures.get(key)
            owner = future is None
            if future is None:
                future = concurrent.futures.Future()
                self._futures[key] = future

        if owner:
            if timeout is None:
                self._fill(future, loader)
            else:
                threading.Thread(
                    target=self._fill,
                    args=(future, loader),
                    name=f"single-flight-{key}",
                    daemon=True,
                ).start()
        return future.result(timeout=timeout)

    @staticmethod
    def _fill(future: concurrent.futures.Future[V], loader: Callable[[], V]) -> None:
        try:
            value = loader()
        except Exception as exc:  # noqa: BLE001
            future.set_exception(exc)
            return
        future.set_result(value)
