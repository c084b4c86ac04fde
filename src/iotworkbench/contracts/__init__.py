"""Public contracts for the IoT Workbench orchestration core."""
from iotworkbench.contracts.component import (
    Capability,
    Compilable,
    Component,
    ComponentType,
    Dependency,
    DependencyType,
    Deployable,
    Device,
    Provisionable,
    Uploadable,
    capabilities_of,
)
from iotworkbench.contracts.descriptor import (
    ComponentConfig,
    ComponentConfigFile,
    DependencyConfig,
    WorkspaceDescriptor,
    WorkspaceFolder,
)
from iotworkbench.contracts.host import (
    AzureSession,
    ConfigStore,
    DeviceToolchain,
    ProjectOpener,
    Prompter,
    TelemetrySink,
    WritableConfigStore,
)

__all__ = [
    "Capability", "capabilities_of",
    "Component", "ComponentType", "Dependency", "DependencyType",
    "Compilable", "Uploadable", "Provisionable", "Deployable", "Device",
    "ComponentConfig", "ComponentConfigFile", "DependencyConfig",
    "WorkspaceDescriptor", "WorkspaceFolder",
    "AzureSession", "ConfigStore", "DeviceToolchain", "ProjectOpener",
    "Prompter", "TelemetrySink", "WritableConfigStore",
]
