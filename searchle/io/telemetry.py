"""Telemetry sinks for game events.

The engine reports ``game_win``, ``game_over`` and ``error`` events through an
injected sink. Delivery is best effort: a failing sink is logged and ignored.
"""

from __future__ import annotations

import os
import time
from dataclasses import asdict, dataclass
from typing import Any, Dict, List, Optional, Protocol

import requests

from ..utils.logger import get_logger

LOGGER = get_logger(__name__)

GAME_WIN = "game_win"
GAME_OVER = "game_over"
ERROR = "error"


@dataclass(frozen=True)
class TelemetryEvent:
    type: str
    attempts: Optional[int] = None
    message: Optional[str] = None

    def to_payload(self) -> Dict[str, Any]:
        payload = {key: value for key, value in asdict(self).items() if value is not None}
        payload["ts"] = int(time.time() * 1000)
        return payload


class TelemetrySink(Protocol):
    def emit(self, event: TelemetryEvent) -> None:
        ...


class NullTelemetrySink:
    def emit(self, event: TelemetryEvent) -> None:
        return None


class LoggingTelemetrySink:
    """Write events to the ``searchle.telemetry`` logger."""

    def __init__(self, logger_name: str = "searchle.telemetry") -> None:
        self._logger = get_logger(logger_name)

    def emit(self, event: TelemetryEvent) -> None:
        if event.type == ERROR:
            self._logger.error("telemetry %s: %s", event.type, event.message)
        else:
            self._logger.info("telemetry %s after %s attempts", event.type, event.attempts)


class RecordingTelemetrySink:
    """Keep events in memory; handy for front ends that batch or display them."""

    def __init__(self) -> None:
        self.events: List[TelemetryEvent] = []

    def emit(self, event: TelemetryEvent) -> None:
        self.events.append(event)


class HttpTelemetrySink:
    """POST events as JSON to a collector endpoint."""

    def __init__(
        self,
        endpoint: Optional[str] = None,
        endpoint_env: str = "SEARCHLE_TELEMETRY_URL",
        timeout_seconds: float = 5.0,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.endpoint = endpoint or os.environ.get(endpoint_env)
        if not self.endpoint:
            raise RuntimeError(
                f"Missing telemetry endpoint (argument or environment variable {endpoint_env})"
            )
        self.timeout_seconds = timeout_seconds
        self._session = session or requests.Session()

    def emit(self, event: TelemetryEvent) -> None:
        try:
            response = self._session.post(
                self.endpoint,
                json=event.to_payload(),
                timeout=self.timeout_seconds,
            )
            response.raise_for_status()
        except requests.RequestException as exc:
            LOGGER.warning("Telemetry delivery failed (%s): %s", event.type, exc)


def emit_safely(sink: Optional[TelemetrySink], event: TelemetryEvent) -> None:
    """Deliver ``event`` without letting sink failures reach the caller."""

    if sink is None:
        return
    try:
        sink.emit(event)
    except Exception as exc:
        LOGGER.warning("Telemetry sink %s failed: %s", sink, exc)
