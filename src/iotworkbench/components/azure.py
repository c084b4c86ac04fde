# iotworkbench/components/azure.py
"""Cloud components: IoT Hub, hub device identity, Cosmos DB, Functions, ASA."""
from __future__ import annotations

import logging
from pathlib import Path

from iotworkbench.components.base import AzureComponent, ComponentContext
from iotworkbench.contracts.component import ComponentType, Dependency, DependencyType
from iotworkbench.contracts.host import AzureSession
from iotworkbench.core.config import RESOURCES_DIR
from iotworkbench.core.descriptor import ConfigKey, FolderNames
from iotworkbench.core.exceptions import ProjectError
from iotworkbench.core.filesystem import FileUtility

logger = logging.getLogger(__name__)


class IoTHub(AzureComponent):
    component_type = ComponentType.IOT_HUB
    display_name = "IoT Hub"
    connection_setting = ConfigKey.IOT_HUB_CONNECTION_STRING


class IoTHubDevice(AzureComponent):
    """Device identity registered on the project's IoT Hub."""

    component_type = ComponentType.IOT_HUB_DEVICE
    display_name = "IoT Hub Device"
    persisted = False
    connection_setting = ConfigKey.IOT_HUB_DEVICE_CONNECTION_STRING

    async def provision(self, session: AzureSession) -> bool:
        hub = self.dependency_of_type(ComponentType.IOT_HUB)
        if hub is None or not getattr(hub.component, "component_info", None):
            raise ProjectError(
                "Unable to find IoT Hub connection in the project. "
                "Please retry Azure Provision."
            )
        return await super().provision(session)


class CosmosDB(AzureComponent):
    component_type = ComponentType.COSMOS_DB
    display_name = "Cosmos DB"


class AzureFunctions(AzureComponent):
    component_type = ComponentType.AZURE_FUNCTIONS
    display_name = "Azure Functions"
    folder = FolderNames.FUNCTIONS

    def __init__(
        self,
        context: ComponentContext,
        function_path: Path,
        dependencies: list[Dependency] | None = None,
        component_id: str | None = None,
    ) -> None:
        super().__init__(context, dependencies, component_id)
        self.function_path = function_path

    async def create(self) -> bool:
        await FileUtility.mkdir_recursively(self.function_path)
        host_file = self.function_path / "host.json"
        if not await FileUtility.file_exists(host_file):
            await FileUtility.write_json(host_file, {"version": "2.0"})
        return True

    async def deploy(self, session: AzureSession) -> bool:
        if not self.component_info:
            raise ProjectError(
                "Unable to find the Azure Functions app, please provision it first."
            )
        return await session.deploy_resource(
            self.component_type, self.component_info, self.function_path
        )


class StreamAnalyticsJob(AzureComponent):
    component_type = ComponentType.STREAM_ANALYTICS_JOB
    display_name = "Stream Analytics Job"
    folder = FolderNames.STREAM_ANALYTICS

    query_template = RESOURCES_DIR / "query.asaql"

    def __init__(
        self,
        context: ComponentContext,
        query_path: Path,
        dependencies: list[Dependency] | None = None,
        component_id: str | None = None,
    ) -> None:
        super().__init__(context, dependencies, component_id)
        self.query_path = query_path

    def _endpoint(self, kind: DependencyType, component_type: ComponentType) -> str | None:
        for dep in self.dependencies:
            if dep.type == kind and dep.component.component_type == component_type:
                return dep.component.id
        return None

    async def create(self) -> bool:
        content = await FileUtility.read_file(self.query_template)
        hub_id = self._endpoint(DependencyType.INPUT, ComponentType.IOT_HUB)
        cosmos_id = self._endpoint(DependencyType.OTHER, ComponentType.COSMOS_DB)
        if hub_id:
            content = content.replace("[input]", f'"iothub-{hub_id}"', 1)
        if cosmos_id:
            content = content.replace("[output]", f'"cosmosdb-{cosmos_id}"', 1)
        await FileUtility.write_file(self.query_path, content)
        return True

    async def deploy(self, session: AzureSession) -> bool:
        if not self.component_info:
            raise ProjectError(
                "Unable to find the Stream Analytics job, please provision it first."
            )
        return await session.deploy_resource(
            self.component_type, self.component_info, self.query_path
        )
