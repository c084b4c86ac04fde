# iotworkbench/components/base.py
"""Shared plumbing for concrete components."""
from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from pathlib import Path
from typing import Any, ClassVar

from iotworkbench.contracts.component import ComponentType, Dependency
from iotworkbench.contracts.descriptor import ComponentConfig, DependencyConfig
from iotworkbench.contracts.host import (
    AzureSession,
    ConfigStore,
    DeviceToolchain,
    WritableConfigStore,
)
from iotworkbench.core.descriptor import ComponentConfigStore, ProjectLayout, ScaffoldType

logger = logging.getLogger(__name__)


@dataclass
class ComponentContext:
    """What a component needs to locate and persist its state."""

    project_root: Path
    store: ComponentConfigStore
    config: ConfigStore | None = None
    toolchain: DeviceToolchain | None = None
    scope: ScaffoldType = ScaffoldType.WORKSPACE

    @property
    def layout(self) -> ProjectLayout:
        return ProjectLayout(self.project_root)

    def setting(self, key: str) -> Any | None:
        if self.config is None:
            return None
        return self.config.get(key)

    def update_setting(self, key: str, value: Any) -> bool:
        if not isinstance(self.config, WritableConfigStore):
            logger.debug("Config store is read-only, not writing %s", key)
            return False
        self.config.update(key, value)
        return True


class AzureComponent:
    """
    Base class for cloud components.

    The resource settings returned by the session at provision time are kept
    in ``component_info`` and persisted in the component config store.
    """

    component_type: ClassVar[ComponentType]
    display_name: ClassVar[str]
    folder: ClassVar[str] = ""
    persisted: ClassVar[bool] = True
    # Key of the provisioned value also written to the workspace settings
    connection_setting: ClassVar[str | None] = None

    def __init__(
        self,
        context: ComponentContext,
        dependencies: list[Dependency] | None = None,
        component_id: str | None = None,
    ) -> None:
        self.context = context
        self._id = component_id or str(uuid.uuid4())
        self._dependencies = list(dependencies or [])
        self.component_info: dict[str, Any] | None = None

    @property
    def id(self) -> str:
        return self._id

    @property
    def name(self) -> str:
        return self.display_name

    @property
    def dependencies(self) -> list[Dependency]:
        return self._dependencies

    def dependency_of_type(self, component_type: ComponentType) -> Dependency | None:
        for dep in self._dependencies:
            if dep.component.component_type == component_type:
                return dep
        return None

    def to_config(self) -> ComponentConfig:
        return ComponentConfig(
            id=self.id,
            type=self.component_type.value,
            name=self.name,
            folder=self.folder,
            dependencies=[
                DependencyConfig(id=dep.component.id, type=dep.type)
                for dep in self._dependencies
            ],
            component_info=self.component_info,
        )

    async def check_prerequisites(self) -> bool:
        return True

    async def load(self) -> bool:
        if not self.persisted:
            return True
        record = await self.context.store.get_component_by_id(self.context.scope, self.id)
        if record is None:
            return False
        self.component_info = record.component_info
        return True

    async def create(self) -> bool:
        return True

    async def update_config_settings(self, scope: ScaffoldType | None = None) -> None:
        """Write this component's record into the config store."""
        if not self.persisted:
            return
        await self.context.store.update_component_settings(
            scope or self.context.scope, self.to_config()
        )

    async def provision(self, session: AzureSession) -> bool:
        dependencies = [
            (dep.type, getattr(dep.component, "component_info", None) or {})
            for dep in self._dependencies
        ]
        info = await session.provision_resource(self.component_type, self.name, dependencies)
        if info is None:
            logger.info("Provision of %s cancelled", self.name)
            return False

        self.component_info = info
        await self.update_config_settings()
        if self.connection_setting and info.get(self.connection_setting):
            self.context.update_setting(self.connection_setting, info[self.connection_setting])
        logger.info("Provisioned %s (%s)", self.name, self.id)
        return True
