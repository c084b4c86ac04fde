# iotworkbench/main.py
"""
Project factory.

Wires the orchestration core to the collaborators provided by the IDE host
and configures logging from the environment-driven settings.
"""
from __future__ import annotations

import logging

from iotworkbench.contracts.host import (
    AzureSession,
    ConfigStore,
    DeviceToolchain,
    ProjectOpener,
    Prompter,
    TelemetrySink,
)
from iotworkbench.core.config import Settings, settings
from iotworkbench.core.logging import configure_logging
from iotworkbench.core.project import IoTWorkspaceProject
from iotworkbench.core.telemetry import LoggingTelemetrySink
from iotworkbench.core.templates import load_template_catalog

logger = logging.getLogger(__name__)


def create_project(
    *,
    prompter: Prompter,
    session: AzureSession,
    config: ConfigStore | None = None,
    telemetry: TelemetrySink | None = None,
    toolchain: DeviceToolchain | None = None,
    opener: ProjectOpener | None = None,
    app_settings: Settings | None = None,
) -> IoTWorkspaceProject:
    cfg = app_settings or settings
    configure_logging(cfg)

    templates = load_template_catalog(cfg.templates_config_paths)
    logger.info(
        "IoT Workbench core ready (env=%s, templates=%s)",
        cfg.app_env,
        [t.value for t in templates.types()],
    )

    return IoTWorkspaceProject(
        prompter=prompter,
        session=session,
        config=config,
        telemetry=telemetry or LoggingTelemetrySink(),
        toolchain=toolchain,
        opener=opener,
        templates=templates,
    )
