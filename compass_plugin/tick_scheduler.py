from __future__ import annotations

from typing import Callable, Optional

AfterFn = Callable[[int, Callable[[], None]], object]
AfterCancelFn = Callable[[object], None]
LoggerFn = Callable[..., None]

RECONCILE_INTERVAL_MS = 1000
MIN_INTERVAL_MS = 100


def _noop_log(message: str, *args: object) -> None:
    return None


class ReconcileTimer:
    """Re-arming host timer that runs bubble reconciliation about once a second."""

    def __init__(
        self,
        *,
        after: AfterFn,
        after_cancel: AfterCancelFn,
        interval_ms: int = RECONCILE_INTERVAL_MS,
        logger: Optional[LoggerFn] = None,
    ) -> None:
        self._after = after
        self._after_cancel = after_cancel
        self.interval_ms = self._clamp_interval(interval_ms)
        self._logger = logger or _noop_log
        self._handle: object | None = None
        self._callback: Callable[[], None] | None = None
        self._running = False

    @property
    def running(self) -> bool:
        return self._running

    def start(self, callback: Callable[[], None]) -> bool:
        """Begin ticking; returns False when the host offers no timer."""
        self.stop()
        self._callback = callback
        handle = self._after(self.interval_ms, self._run)
        if handle is None:
            self._log("Host timer unavailable; reconciliation relies on host ticks")
            return False
        self._handle = handle
        self._running = True
        return True

    def stop(self) -> None:
        self._running = False
        handle = self._handle
        self._handle = None
        if handle is not None:
            try:
                self._after_cancel(handle)
            except Exception as exc:
                self._log("Cancelling reconcile timer failed: %s", exc)

    def _run(self) -> None:
        self._handle = None
        if not self._running:
            return
        try:
            if self._callback is not None:
                self._callback()
        finally:
            if self._running:
                self._handle = self._after(self.interval_ms, self._run)
                if self._handle is None:
                    self._running = False
                    self._log("Host timer stopped re-arming; reconciliation relies on host ticks")

    @staticmethod
    def _clamp_interval(value: int) -> int:
        return max(MIN_INTERVAL_MS, int(value))

    def _log(self, message: str, *args: object) -> None:
        self._logger(message, *args)
