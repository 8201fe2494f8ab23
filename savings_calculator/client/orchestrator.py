"""Debounced request orchestration for the calculator form.

The orchestrator owns the only mutable copy of the form state. Each edit is
validated immediately; when the whole form is valid a debounce timer is
(re)started and, once it fires, exactly one request carrying the form state
at fire time is sent. Responses carry a sequence token so an older response
can never overwrite a newer one.
"""

from __future__ import annotations

import logging
import threading
from typing import Any, Callable, Dict, Optional, Protocol

from savings_calculator.client.form import FormState, RawValue, field_errors, to_numeric
from savings_calculator.client.messages import NETWORK_ERROR_MESSAGE, error_message
from savings_calculator.client.transport import ApiResponse, ConnectionFailure
from savings_calculator.config import CalculationLimits, settings

logger = logging.getLogger(__name__)

DEBOUNCE_SECONDS = 0.5
FORM_ERROR_MESSAGE = (
    "Please fix the form errors before calculating. Check highlighted fields for specific issues."
)


class TimerHandle(Protocol):
    def cancel(self) -> None: ...


class Scheduler(Protocol):
    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle: ...


class Transport(Protocol):
    def calculate(self, payload: Dict[str, Any]) -> ApiResponse: ...


class ThreadingScheduler:
    """Runs callbacks on ``threading.Timer`` worker threads."""

    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle:
        timer = threading.Timer(delay, callback)
        timer.daemon = True
        timer.start()
        return timer


class CalculationOrchestrator:
    def __init__(
        self,
        client: Transport,
        scheduler: Optional[Scheduler] = None,
        debounce_seconds: float = DEBOUNCE_SECONDS,
        state: Optional[FormState] = None,
        limits: Optional[CalculationLimits] = None,
        on_change: Optional[Callable[["CalculationOrchestrator"], None]] = None,
    ):
        self.client = client
        self.scheduler = scheduler or ThreadingScheduler()
        self.debounce_seconds = debounce_seconds
        self.limits = limits or settings.limits
        self.on_change = on_change

        self.state = state or FormState()
        self.errors: Dict[str, str] = field_errors(self.state, self.limits)
        self.result: Optional[Dict[str, Any]] = None
        self.error: Optional[str] = None
        self.form_error: Optional[str] = None
        self.is_loading = False
        self.last_payload: Optional[Dict[str, Any]] = None

        self._pending: Optional[TimerHandle] = None
        self._generation = 0
        self._sequence = 0
        self._applied = 0
        self._lock = threading.RLock()

    @property
    def is_valid(self) -> bool:
        return not self.errors

    def update(self, name: str, value: RawValue) -> None:
        """Record an edit and schedule a debounced calculation if the form is valid."""
        with self._lock:
            self.state = self.state.with_field(name, value)
            self.errors = field_errors(self.state, self.limits)
            self._cancel_pending()
            if self.errors:
                self.is_loading = self._sequence > self._applied
            else:
                self.is_loading = True
                self.error = None
                generation = self._generation
                self._pending = self.scheduler.call_later(
                    self.debounce_seconds, lambda: self._fire(generation)
                )
        self._notify()

    def calculate(self) -> bool:
        """Validate and send immediately, bypassing the debounce timer."""
        with self._lock:
            self._cancel_pending()
            self.errors = field_errors(self.state, self.limits)
            if self.errors:
                self.form_error = FORM_ERROR_MESSAGE
                self.is_loading = self._sequence > self._applied
                payload = None
            else:
                self.form_error = None
                payload = to_numeric(self.state)

        if payload is None:
            self._notify()
            return False
        self._send(payload)
        return True

    def retry(self) -> bool:
        """Re-issue the last request, or run a manual calculation if none was sent."""
        with self._lock:
            payload = dict(self.last_payload) if self.last_payload is not None else None
        if payload is None:
            return self.calculate()
        self._send(payload)
        return True

    def close(self) -> None:
        with self._lock:
            self._cancel_pending()

    def _cancel_pending(self) -> None:
        # a timer that already started waits on the lock; bumping the generation makes it a no-op
        self._generation += 1
        if self._pending is not None:
            self._pending.cancel()
            self._pending = None

    def _fire(self, generation: int) -> None:
        with self._lock:
            if generation != self._generation:
                return
            self._pending = None
            payload = to_numeric(self.state)
        self._send(payload)

    def _send(self, payload: Dict[str, Any]) -> None:
        with self._lock:
            self._sequence += 1
            token = self._sequence
            self.last_payload = payload
            self.is_loading = True
            self.error = None
        self._notify()

        logger.debug("Sending calculation #%d: %s", token, payload)
        try:
            response = self.client.calculate(payload)
        except ConnectionFailure as exc:
            logger.warning("Calculation #%d failed to reach the API: %s", token, exc)
            self._apply(token, error=NETWORK_ERROR_MESSAGE)
            return

        if response.ok:
            self._apply(token, result=response.body)
        else:
            self._apply(token, error=error_message(response.body))

    def _apply(
        self,
        token: int,
        result: Optional[Dict[str, Any]] = None,
        error: Optional[str] = None,
    ) -> None:
        with self._lock:
            if token < self._applied:
                logger.debug("Dropping stale response #%d (latest applied #%d)", token, self._applied)
                return
            self._applied = token
            if error is not None:
                self.error = error
            else:
                self.result = result
                self.error = None
            self.is_loading = self._pending is not None or self._sequence > token
        self._notify()

    def _notify(self) -> None:
        if self.on_change is not None:
            self.on_change(self)
