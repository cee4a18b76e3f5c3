"""Structured telemetry for the batch pipeline stages."""

from __future__ import annotations

import logging
import time
from contextlib import contextmanager
from copy import deepcopy
from typing import Any, Callable, Dict, Iterable, Iterator, List, Optional

from .observability import get_logger

TelemetryListener = Callable[[str, Dict[str, Any]], None]


class StructuredTelemetry:
    """Collects stage timings, counters and run metadata.

    The pipeline is single threaded, so state is plain dictionaries. A run is
    delimited by :meth:`start_trace`; :meth:`snapshot` returns a copy that is
    safe to serialise next to the run outputs.
    """

    def __init__(
        self,
        time_fn: Optional[Callable[[], float]] = None,
        *,
        max_events: int = 256,
        listeners: Optional[Iterable[TelemetryListener]] = None,
    ) -> None:
        self._time_fn = time_fn or time.perf_counter
        self._max_events = max(1, int(max_events))
        self._trace_id = 0
        self._listeners: List[TelemetryListener] = list(listeners or [])
        self._reset_state()

    def _reset_state(self) -> None:
        self._timings: Dict[str, Dict[str, float]] = {}
        self._counters: Dict[str, float] = {}
        self._events: List[Dict[str, Any]] = []
        self._metadata: Dict[str, Any] = {}
        self._trace_name: Optional[str] = None

    def _notify_listeners(self, event_type: str, payload: Dict[str, Any]) -> None:
        for listener in tuple(self._listeners):
            listener(event_type, dict(payload))

    def now(self) -> float:
        return float(self._time_fn())

    def start_trace(self, name: str) -> int:
        """Reset collected state and start a new trace called ``name``."""

        self._trace_id += 1
        self._reset_state()
        self._trace_name = name
        self._metadata["trace_name"] = name
        self._metadata["start_time"] = self.now()
        self._notify_listeners("trace_started", {"trace_id": self._trace_id, "name": name})
        return self._trace_id

    def record_timing(
        self,
        name: str,
        duration: float,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> None:
        duration = max(0.0, float(duration))
        payload = dict(metadata) if metadata else {}
        bucket = self._timings.setdefault(
            name, {"count": 0, "total": 0.0, "min": duration, "max": duration}
        )
        bucket["count"] += 1
        bucket["total"] += duration
        bucket["min"] = min(bucket["min"], duration)
        bucket["max"] = max(bucket["max"], duration)
        bucket["avg"] = bucket["total"] / bucket["count"]

        event: Dict[str, Any] = {"name": name, "duration": duration}
        if payload:
            event["metadata"] = payload
        self._events.append(event)
        if len(self._events) > self._max_events:
            self._events = self._events[-self._max_events :]

        self._notify_listeners(
            "timing", {"name": name, "duration": duration, "metadata": payload}
        )

    @contextmanager
    def timer(
        self,
        name: str,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> Iterator[Dict[str, Any]]:
        """Time the enclosed block; the yielded dict is stored as metadata."""

        payload: Dict[str, Any] = dict(metadata) if metadata else {}
        start = self.now()
        self._notify_listeners("timer_started", {"name": name, "metadata": dict(payload)})
        try:
            yield payload
        finally:
            self.record_timing(name, self.now() - start, payload)

    def increment(self, name: str, amount: float = 1.0) -> None:
        value = float(amount)
        self._counters[name] = self._counters.get(name, 0.0) + value
        self._notify_listeners(
            "counter", {"name": name, "delta": value, "value": self._counters[name]}
        )

    def annotate(self, key: str, value: Any) -> None:
        self._metadata[key] = value
        self._notify_listeners("metadata", {"key": key, "value": value})

    def snapshot(self) -> Dict[str, Any]:
        return deepcopy(
            {
                "trace_id": self._trace_id,
                "name": self._trace_name,
                "timings": self._timings,
                "counters": self._counters,
                "events": self._events,
                "metadata": self._metadata,
            }
        )

    def add_listener(self, listener: TelemetryListener) -> None:
        self._listeners.append(listener)

    def remove_listener(self, listener: TelemetryListener) -> None:
        self._listeners = [entry for entry in self._listeners if entry is not listener]


class TelemetryLogger:
    """Listener that echoes telemetry activity to the project logger."""

    def __init__(
        self,
        *,
        logger: Optional[logging.LoggerAdapter] = None,
        level: int = logging.INFO,
        level_map: Optional[Dict[str, int]] = None,
    ) -> None:
        self._logger = logger or get_logger(__name__).bind(component="telemetry")
        self._default_level = level
        self._level_map = dict(level_map or {})

    def __call__(self, event_type: str, payload: Dict[str, Any]) -> None:
        level = self._level_map.get(event_type, self._default_level)
        if not self._logger.isEnabledFor(level):
            return

        context = {"telemetry.event": event_type}
        context.update({str(key): value for key, value in payload.items()})
        name = payload.get("name") or payload.get("key") or payload.get("trace_id") or "event"
        self._logger.log(level, f"Telemetry {event_type}: {name}", context=context)


__all__ = ["StructuredTelemetry", "TelemetryLogger", "TelemetryListener"]
