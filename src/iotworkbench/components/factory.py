# iotworkbench/components/factory.py
"""Closed mapping from persisted component type to concrete component."""
from __future__ import annotations

import uuid
from typing import Callable, Mapping

from iotworkbench.components.azure import (
    AzureFunctions,
    CosmosDB,
    IoTHub,
    IoTHubDevice,
    StreamAnalyticsJob,
)
from iotworkbench.components.base import ComponentContext
from iotworkbench.contracts.component import Component, ComponentType, Dependency
from iotworkbench.contracts.descriptor import ComponentConfig
from iotworkbench.core.descriptor import ConfigKey, FileNames, FolderNames
from iotworkbench.core.exceptions import MissingSettingError, UnsupportedComponentTypeError

Builder = Callable[[ComponentConfig, list[Dependency], ComponentContext], Component]


def _build_iot_hub(record, deps, ctx):
    return IoTHub(ctx, deps, record.id)


def _build_iot_hub_device(record, deps, ctx):
    return IoTHubDevice(ctx, deps, record.id)


def _build_cosmos_db(record, deps, ctx):
    return CosmosDB(ctx, deps, record.id)


def _build_azure_functions(record, deps, ctx):
    function_path = ctx.setting(ConfigKey.FUNCTION_PATH) or record.folder
    if not function_path:
        raise MissingSettingError(ConfigKey.FUNCTION_PATH)
    return AzureFunctions(ctx, ctx.project_root / function_path, deps, record.id)


def _build_stream_analytics_job(record, deps, ctx):
    asa_folder = ctx.setting(ConfigKey.ASA_PATH) or FolderNames.STREAM_ANALYTICS
    query_path = ctx.project_root / asa_folder / FileNames.ASA_QUERY
    return StreamAnalyticsJob(ctx, query_path, deps, record.id)


DEFAULT_BUILDERS: dict[ComponentType, Builder] = {
    ComponentType.IOT_HUB: _build_iot_hub,
    ComponentType.IOT_HUB_DEVICE: _build_iot_hub_device,
    ComponentType.COSMOS_DB: _build_cosmos_db,
    ComponentType.AZURE_FUNCTIONS: _build_azure_functions,
    ComponentType.STREAM_ANALYTICS_JOB: _build_stream_analytics_job,
}


class ComponentFactory:
    def __init__(
        self,
        context: ComponentContext,
        builders: Mapping[ComponentType, Builder] | None = None,
    ) -> None:
        self.context = context
        self._builders = dict(DEFAULT_BUILDERS if builders is None else builders)

    def build(self, record: ComponentConfig, dependencies: list[Dependency]) -> Component:
        """
        Raises:
            UnsupportedComponentTypeError: If the record type has no builder
            MissingSettingError: If a setting the component needs is absent
        """
        try:
            component_type = ComponentType(record.type)
        except ValueError:
            raise UnsupportedComponentTypeError(record.type) from None

        builder = self._builders.get(component_type)
        if builder is None:
            raise UnsupportedComponentTypeError(record.type)
        return builder(record, dependencies, self.context)

    def new(
        self,
        component_type: ComponentType,
        dependencies: list[Dependency] | None = None,
        folder: str = "",
    ) -> Component:
        """Build a fresh component with a new id (create path)."""
        record = ComponentConfig(id=str(uuid.uuid4()), type=component_type.value, folder=folder)
        return self.build(record, list(dependencies or []))
