# iotworkbench/core/telemetry.py
"""
Best-effort telemetry.

Events are handed to a host provided sink. A failing sink must never block
the user, so every error raised while sending is swallowed here.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field

from iotworkbench.contracts.host import TelemetrySink

logger = logging.getLogger(__name__)


class EventNames:
    PROJECT_LOAD = "IoTWorkbench.ProjectLoad"
    CREATE_NEW_PROJECT = "IoTWorkbench.New"


@dataclass
class TelemetryContext:
    properties: dict[str, str] = field(
        default_factory=lambda: {"result": "Succeeded", "error": "", "errorMessage": ""}
    )
    measurements: dict[str, float] = field(default_factory=lambda: {"duration": 0})


class LoggingTelemetrySink:
    """Sink that only records events in the log."""

    def send_event(self, name: str, context: TelemetryContext) -> None:
        logger.info(
            "Telemetry event %s",
            name,
            extra={"properties": context.properties, "measurements": context.measurements},
        )


def send_event_safely(
    sink: TelemetrySink | None, name: str, context: TelemetryContext
) -> None:
    if sink is None:
        return
    try:
        sink.send_event(name, context)
    except Exception:
        logger.debug("Failed sending telemetry event %s", name, exc_info=True)
