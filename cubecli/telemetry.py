"""Anonymous usage events.

Events are posted to the tracking endpoint with a short timeout.  Transport
failures are dropped: telemetry never changes the outcome of a command.
"""

from __future__ import annotations

import time
import uuid
from typing import Any, Protocol

import httpx

from . import __version__
from .config import TelemetryConfig


class EventSink(Protocol):
    async def event(self, name: str, **props: Any) -> None: ...


class Telemetry:
    """Posts ``{event, anonymousId, ...}`` JSON payloads with ``httpx``."""

    def __init__(self, config: TelemetryConfig | None = None) -> None:
        self.config = config or TelemetryConfig()
        self.anonymous_id = str(uuid.uuid4())

    def _payload(self, name: str, props: dict[str, Any]) -> dict[str, Any]:
        return {
            "event": name,
            "anonymousId": self.anonymous_id,
            "clientTimestamp": int(time.time() * 1000),
            "cliVersion": __version__,
            **{k: v for k, v in props.items() if v is not None},
        }

    async def event(self, name: str, **props: Any) -> None:
        if not self.config.enabled:
            return
        try:
            async with httpx.AsyncClient(
                timeout=httpx.Timeout(self.config.timeout, connect=self.config.timeout)
            ) as client:
                await client.post(self.config.url, json=[self._payload(name, props)])
        except httpx.HTTPError:
            pass


class NullTelemetry:
    """Discards every event."""

    async def event(self, name: str, **props: Any) -> None:
        return None
