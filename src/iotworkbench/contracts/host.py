# iotworkbench/contracts/host.py
"""
Collaborator contracts consumed by the orchestration core.

The IDE host provides these: settings lookup, interactive prompts, the
cloud session, telemetry, the device build toolchain and the action that
opens a freshly created project. The core only depends on the narrow
request/response surface declared here.
"""
from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Any, Protocol, Sequence, TypeVar, runtime_checkable

if TYPE_CHECKING:
    from iotworkbench.contracts.component import ComponentType, DependencyType
    from iotworkbench.core.telemetry import TelemetryContext

T = TypeVar("T")


@runtime_checkable
class ConfigStore(Protocol):
    """Key/value settings of the opened workspace."""

    def get(self, key: str) -> Any | None: ...


@runtime_checkable
class WritableConfigStore(ConfigStore, Protocol):
    """Config store that also accepts write-back of provisioned settings."""

    def update(self, key: str, value: Any) -> None: ...


class Prompter(Protocol):
    """Interactive surface of the IDE."""

    async def choose(
        self, options: Sequence[T], *, placeholder: str = ""
    ) -> T | None:
        """Return the selected option, or None when the user cancels."""
        ...

    async def show_info(self, message: str) -> None: ...

    async def show_warning(self, message: str) -> None: ...

    async def ask_and_open_project(self, root: Path, workspace_file: str) -> None: ...

    async def ask_and_new_project(self) -> None: ...


class AzureSession(Protocol):
    """
    Explicit cloud session handle.

    Passed into provision and deploy instead of relying on ambient
    login state.
    """

    @property
    def subscription_id(self) -> str | None: ...

    async def check_login(self) -> bool: ...

    async def get_resource_group(self) -> str | None: ...

    async def provision_resource(
        self,
        component_type: ComponentType,
        name: str,
        dependencies: list[tuple[DependencyType, dict[str, Any]]],
    ) -> dict[str, Any] | None:
        """
        Create (or select) the cloud resource backing a component.

        Returns the resource settings to persist, or None when cancelled.
        """
        ...

    async def deploy_resource(
        self,
        component_type: ComponentType,
        component_info: dict[str, Any],
        source: Path,
    ) -> bool: ...


class TelemetrySink(Protocol):
    def send_event(self, name: str, context: TelemetryContext) -> None: ...


class DeviceToolchain(Protocol):
    """Board specific build tooling (compiler, flasher, settings writer)."""

    async def check_prerequisites(self, board_id: str) -> bool: ...

    async def compile(self, board_id: str, device_path: Path) -> bool: ...

    async def upload(self, board_id: str, device_path: Path) -> bool: ...

    async def configure(self, board_id: str, device_path: Path) -> bool: ...


class ProjectOpener(Protocol):
    async def open(self, root: Path, open_in_new_window: bool) -> bool: ...
