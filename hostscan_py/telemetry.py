"""
Usage telemetry for Hostscan.

Commands record an ``Event`` describing what they did and hand it to an
``EventSink``. Sinks are fire-and-forget: a failure to deliver an event is
logged and never interrupts the command.
"""

import abc
import logging
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

import orjson

logger = logging.getLogger("hostscan.telemetry")


@dataclass
class Event:
    """A single telemetry event."""

    feature: str = ""
    feature_data: Dict[str, Any] = field(default_factory=dict)
    duration_ms: int = 0
    error: Optional[str] = None

    def add_feature_field(self, key: str, value: Any) -> None:
        self.feature_data[key] = value

    def to_json(self) -> bytes:
        return orjson.dumps(asdict(self))


class EventSink(abc.ABC):
    """Base class for telemetry destinations."""

    @abc.abstractmethod
    def send(self, event: Event) -> None:
        """Deliver *event*."""
        pass


class NullEventSink(EventSink):
    """Discards every event; used when telemetry is disabled."""

    def send(self, event: Event) -> None:
        pass


class LoggingEventSink(EventSink):
    """Writes events to the ``hostscan.telemetry`` logger at debug level."""

    def send(self, event: Event) -> None:
        logger.debug(f"Event: {event.to_json().decode('utf-8')}")


class JsonLinesEventSink(EventSink):
    """Appends one JSON document per event to a file."""

    def __init__(self, path: Path):
        self.path = path

    def send(self, event: Event) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "ab") as f:
                f.write(event.to_json() + b"\n")
        except OSError as e:
            logger.warning(f"Unable to write telemetry event to {self.path}: {e}")
