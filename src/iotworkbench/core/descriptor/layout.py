# iotworkbench/core/descriptor/layout.py
"""Filesystem layout of an IoT Workbench project.

Layout (root = project root):
  {root}/
    {root name}.code-workspace      folders + namespaced settings
    .vscode/projectConfig.json      flat config record (boardId, projectType, paths)
    .azurecomponent/azureconfig.json  component config store
    Device/.iotworkbenchproject     device marker
    Functions/                      Azure Functions app (optional)
    StreamAnalytics/query.asaql     Stream Analytics query (optional)
"""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from iotworkbench.contracts.descriptor import WorkspaceDescriptor
from iotworkbench.core.filesystem import FileUtility

logger = logging.getLogger(__name__)


class ConfigKey:
    BOARD_ID = "boardId"
    DEVICE_PATH = "devicePath"
    PROJECT_TYPE = "projectType"
    FUNCTION_PATH = "functionPath"
    ASA_PATH = "asaPath"
    IOT_HUB_CONNECTION_STRING = "iotHubConnectionString"
    IOT_HUB_DEVICE_CONNECTION_STRING = "iotHubDeviceConnectionString"


class FolderNames:
    DEVICE = "Device"
    FUNCTIONS = "Functions"
    STREAM_ANALYTICS = "StreamAnalytics"
    VSCODE_SETTINGS = ".vscode"
    AZURE_COMPONENTS = ".azurecomponent"


class FileNames:
    IOT_WORKBENCH_PROJECT = ".iotworkbenchproject"
    PROJECT_CONFIG = "projectConfig.json"
    AZURE_CONFIG = "azureconfig.json"
    ASA_QUERY = "query.asaql"
    WORKSPACE_EXTENSION = ".code-workspace"


@dataclass(frozen=True)
class ProjectLayout:
    root: Path

    @property
    def device_dir(self) -> Path:
        return self.root / FolderNames.DEVICE

    @property
    def asa_dir(self) -> Path:
        return self.root / FolderNames.STREAM_ANALYTICS

    @property
    def asa_query_file(self) -> Path:
        return self.asa_dir / FileNames.ASA_QUERY

    @property
    def workspace_file(self) -> Path:
        return self.root / f"{self.root.name}{FileNames.WORKSPACE_EXTENSION}"

    @property
    def project_config_file(self) -> Path:
        return self.root / FolderNames.VSCODE_SETTINGS / FileNames.PROJECT_CONFIG

    @property
    def component_config_file(self) -> Path:
        return self.root / FolderNames.AZURE_COMPONENTS / FileNames.AZURE_CONFIG

    @staticmethod
    def device_marker(device_dir: Path) -> Path:
        return device_dir / FileNames.IOT_WORKBENCH_PROJECT

    async def write_workspace(self, workspace: WorkspaceDescriptor) -> Path:
        return await FileUtility.write_json(
            self.workspace_file, workspace.model_dump(mode="json")
        )

    async def write_project_config(self, config: dict[str, str]) -> bool:
        """Write the project config record unless one already exists."""
        if await FileUtility.file_exists(self.project_config_file):
            logger.info("Keeping existing project config %s", self.project_config_file)
            return False
        await FileUtility.write_json(self.project_config_file, config)
        return True

    async def read_project_config(self) -> dict[str, Any] | None:
        if not await FileUtility.file_exists(self.project_config_file):
            return None
        try:
            data = await FileUtility.read_json(self.project_config_file)
        except json.JSONDecodeError:
            logger.warning("Malformed project config %s", self.project_config_file)
            return None
        return data if isinstance(data, dict) else None
