# iotworkbench/core/descriptor/store.py
"""
Component config store.

Persists, for every cloud component of a project, its type, id and ordered
dependency list, plus the resource settings captured at provision time.
Stored as ``.azurecomponent/azureconfig.json`` below the scope root.
"""
from __future__ import annotations

import enum
import json
import logging
from pathlib import Path
from typing import Any, Mapping

from pydantic import ValidationError

from iotworkbench.contracts.descriptor import ComponentConfig, ComponentConfigFile
from iotworkbench.core.descriptor.layout import FileNames, FolderNames
from iotworkbench.core.exceptions import DescriptorError
from iotworkbench.core.filesystem import FileUtility

logger = logging.getLogger(__name__)


class ScaffoldType(str, enum.Enum):
    """Which store a call targets: the project-local or the workspace-wide one."""

    LOCAL = "Local"
    WORKSPACE = "Workspace"


def sort_by_dependencies(configs: list[ComponentConfig]) -> list[ComponentConfig]:
    """
    Order records so that producers come before consumers.

    Stable: among ready records declaration order is kept. Records that can
    never be placed (missing dependency or cycle) are appended in declaration
    order so the resolver reports them.
    """
    ordered: list[ComponentConfig] = []
    placed: set[str] = set()
    pending = list(configs)

    progressed = True
    while pending and progressed:
        progressed = False
        remaining: list[ComponentConfig] = []
        for config in pending:
            if all(dep_id in placed for dep_id in config.dependency_ids):
                ordered.append(config)
                placed.add(config.id)
                progressed = True
            else:
                remaining.append(config)
        pending = remaining

    if pending:
        logger.warning(
            "Unresolvable component dependencies for %s",
            [config.id for config in pending],
        )
    return ordered + pending


class ComponentConfigStore:
    def __init__(self, roots: Path | Mapping[ScaffoldType, Path]) -> None:
        if isinstance(roots, Path):
            roots = {scope: roots for scope in ScaffoldType}
        self._roots: dict[ScaffoldType, Path] = dict(roots)

    def path(self, scope: ScaffoldType) -> Path:
        try:
            root = self._roots[scope]
        except KeyError:
            raise DescriptorError(f"No root configured for scope {scope.value}") from None
        return root / FolderNames.AZURE_COMPONENTS / FileNames.AZURE_CONFIG

    async def create_if_not_exists(self, scope: ScaffoldType) -> Path:
        path = self.path(scope)
        if not await FileUtility.file_exists(path):
            await self._write(scope, ComponentConfigFile())
            logger.info("Initialized component config store %s", path)
        return path

    async def get_component_configs(self, scope: ScaffoldType) -> list[ComponentConfig]:
        return (await self._read(scope)).component_configs

    async def get_sorted_components(self, scope: ScaffoldType) -> list[ComponentConfig]:
        return sort_by_dependencies(await self.get_component_configs(scope))

    async def get_component_by_id(
        self, scope: ScaffoldType, component_id: str
    ) -> ComponentConfig | None:
        for config in await self.get_component_configs(scope):
            if config.id == component_id:
                return config
        return None

    async def update_component_settings(
        self, scope: ScaffoldType, record: ComponentConfig
    ) -> None:
        """Replace the record with the same id, or append it."""
        data = await self._read(scope)
        for index, existing in enumerate(data.component_configs):
            if existing.id == record.id:
                data.component_configs[index] = record
                break
        else:
            data.component_configs.append(record)
        await self._write(scope, data)

    async def update_component_info(
        self, scope: ScaffoldType, component_id: str, info: dict[str, Any]
    ) -> None:
        data = await self._read(scope)
        for record in data.component_configs:
            if record.id == component_id:
                record.component_info = info
                await self._write(scope, data)
                return
        raise DescriptorError(f"Component '{component_id}' not found in config store")

    async def _read(self, scope: ScaffoldType) -> ComponentConfigFile:
        path = self.path(scope)
        if not await FileUtility.file_exists(path):
            return ComponentConfigFile()
        try:
            raw = await FileUtility.read_json(path)
            return ComponentConfigFile.model_validate(raw)
        except (json.JSONDecodeError, ValidationError) as exc:
            raise DescriptorError(f"Invalid component config store {path}") from exc

    async def _write(self, scope: ScaffoldType, data: ComponentConfigFile) -> None:
        await FileUtility.write_json(
            self.path(scope), data.model_dump(mode="json", by_alias=True)
        )
