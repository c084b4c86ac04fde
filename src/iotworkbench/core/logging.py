# iotworkbench/core/logging.py
"""
Logging setup for the workbench core.

Only the ``iotworkbench`` logger tree is configured; the IDE host keeps
ownership of the root logger and its handlers.
"""
from __future__ import annotations

import logging
import sys

from pythonjsonlogger import jsonlogger

from iotworkbench.core.config import Settings, settings

PACKAGE_LOGGER = "iotworkbench"

_TEXT_FORMAT = "%(asctime)s %(levelname)-8s [%(app_env)s] %(name)s  %(message)s"
_JSON_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


class _EnvFilter(logging.Filter):
    def __init__(self, app_env: str) -> None:
        super().__init__()
        self.app_env = app_env

    def filter(self, record: logging.LogRecord) -> bool:
        record.app_env = self.app_env
        return True


def configure_logging(cfg: Settings | None = None) -> logging.Handler:
    """Install a single stdout handler on the package logger and return it."""
    cfg = cfg or settings
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(cfg.log_level.upper())

    handler = logging.StreamHandler(sys.stdout)
    if cfg.log_json:
        handler.setFormatter(
            jsonlogger.JsonFormatter(_JSON_FORMAT, static_fields={"app_env": cfg.app_env})
        )
    else:
        handler.addFilter(_EnvFilter(cfg.app_env))
        handler.setFormatter(logging.Formatter(_TEXT_FORMAT))

    # Repeated activation replaces the handler instead of stacking another
    logger.handlers = [handler]
    logger.propagate = False
    return handler
