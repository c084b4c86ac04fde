# iotworkbench/contracts/component.py
"""
Component contracts for IoT Workbench projects.

A project is a list of components: one device target plus zero or more
cloud components. Every component can check its prerequisites, be created
(first-time scaffolding) and be loaded (rehydrated from the persisted
descriptor). On top of that a component implements any subset of the
capability protocols below.

Return contract shared by every async operation:
- True: the operation completed
- False: the user cancelled or a soft precondition failed, the caller stops
- raise: unrecoverable error, the caller stops and surfaces it
"""
from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from iotworkbench.contracts.host import AzureSession


class ComponentType(str, enum.Enum):
    DEVICE = "Device"
    IOT_HUB = "IoTHub"
    IOT_HUB_DEVICE = "IoTHubDevice"
    AZURE_FUNCTIONS = "AzureFunctions"
    STREAM_ANALYTICS_JOB = "StreamAnalyticsJob"
    COSMOS_DB = "CosmosDB"


class DependencyType(str, enum.Enum):
    """How a component relates to one it depends on."""

    INPUT = "Input"
    OTHER = "Other"


@dataclass(frozen=True)
class Dependency:
    component: Component
    type: DependencyType


@runtime_checkable
class Component(Protocol):
    """Base contract every project component satisfies."""

    @property
    def id(self) -> str: ...

    @property
    def name(self) -> str: ...

    @property
    def component_type(self) -> ComponentType: ...

    @property
    def dependencies(self) -> list[Dependency]: ...

    async def check_prerequisites(self) -> bool:
        """Verify tools and credentials. Must not have side effects."""
        ...

    async def load(self) -> bool:
        """Rehydrate from the persisted descriptor. False if state is missing."""
        ...

    async def create(self) -> bool:
        """First-time scaffolding. False means cancelled; the caller rolls back."""
        ...


@runtime_checkable
class Compilable(Protocol):
    async def compile(self) -> bool: ...


@runtime_checkable
class Uploadable(Protocol):
    async def upload(self) -> bool: ...


@runtime_checkable
class Provisionable(Protocol):
    async def provision(self, session: AzureSession) -> bool: ...


@runtime_checkable
class Deployable(Protocol):
    async def deploy(self, session: AzureSession) -> bool: ...


@runtime_checkable
class Device(Protocol):
    async def config_device_settings(self) -> bool: ...


class Capability(enum.Flag):
    NONE = 0
    COMPILE = enum.auto()
    UPLOAD = enum.auto()
    PROVISION = enum.auto()
    DEPLOY = enum.auto()
    DEVICE = enum.auto()


_CAPABILITY_PROTOCOLS: tuple[tuple[Capability, type], ...] = (
    (Capability.COMPILE, Compilable),
    (Capability.UPLOAD, Uploadable),
    (Capability.PROVISION, Provisionable),
    (Capability.DEPLOY, Deployable),
    (Capability.DEVICE, Device),
)


def capabilities_of(component: object) -> Capability:
    """Inspect a component once and return the capabilities it implements."""
    caps = Capability.NONE
    for cap, protocol in _CAPABILITY_PROTOCOLS:
        if isinstance(component, protocol):
            caps |= cap
    return caps
