# iotworkbench/core/descriptor/workspace_settings.py
"""Config store backed by the settings of a ``.code-workspace`` file."""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from iotworkbench.core.config import settings

logger = logging.getLogger(__name__)


class WorkspaceConfigStore:
    """
    Reads namespaced keys (``IoTWorkbench.<key>``) from a workspace file.

    The file is read on every lookup so edits made by the IDE are picked up.
    """

    def __init__(self, workspace_file: Path, namespace: str | None = None) -> None:
        self.workspace_file = workspace_file
        self.namespace = namespace or settings.settings_namespace

    def _key(self, key: str) -> str:
        return f"{self.namespace}.{key}"

    def _read(self) -> dict[str, Any]:
        if not self.workspace_file.is_file():
            return {}
        try:
            with open(self.workspace_file, "r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError:
            logger.warning("Malformed workspace file %s", self.workspace_file)
            return {}
        return data if isinstance(data, dict) else {}

    def get(self, key: str) -> Any | None:
        return (self._read().get("settings") or {}).get(self._key(key))

    def update(self, key: str, value: Any) -> None:
        data = self._read()
        data.setdefault("folders", [])
        data.setdefault("settings", {})[self._key(key)] = value
        with open(self.workspace_file, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=4)
