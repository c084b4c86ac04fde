# tests/helpers/fakes.py
"""In-memory collaborators and scripted components for tests."""
from __future__ import annotations

import uuid
from pathlib import Path
from typing import Any

from iotworkbench.contracts.component import ComponentType, Dependency


class DictConfigStore:
    def __init__(self, values: dict[str, Any] | None = None) -> None:
        self.values = dict(values or {})

    def get(self, key: str) -> Any | None:
        return self.values.get(key)

    def update(self, key: str, value: Any) -> None:
        self.values[key] = value


class FakePrompter:
    """Accepts every confirmation unless told to decline the n-th one."""

    def __init__(self, decline_at: int | None = None) -> None:
        self.decline_at = decline_at
        self.choices: list[dict[str, Any]] = []
        self.placeholders: list[str] = []
        self.infos: list[str] = []
        self.warnings: list[str] = []
        self.opened: list[tuple[Path, str]] = []
        self.new_project_requests = 0

    async def choose(self, options, *, placeholder: str = ""):
        index = len(self.choices)
        self.choices.append(options[0])
        self.placeholders.append(placeholder)
        if self.decline_at is not None and index == self.decline_at:
            return None
        return options[0]

    async def show_info(self, message: str) -> None:
        self.infos.append(message)

    async def show_warning(self, message: str) -> None:
        self.warnings.append(message)

    async def ask_and_open_project(self, root: Path, workspace_file: str) -> None:
        self.opened.append((root, workspace_file))

    async def ask_and_new_project(self) -> None:
        self.new_project_requests += 1


class FakeSession:
    def __init__(
        self,
        logged_in: bool = True,
        resource_group: str | None = "rg-test",
        subscription_id: str | None = "sub-test",
    ) -> None:
        self.logged_in = logged_in
        self.resource_group = resource_group
        self._subscription_id = subscription_id
        self.login_checks = 0
        self.resource_group_requests = 0
        self.provisioned: list[tuple[ComponentType, str, list]] = []
        self.deployed: list[tuple[ComponentType, dict, Path]] = []
        self.cancel_types: set[ComponentType] = set()
        self.deploy_result = True

    @property
    def subscription_id(self) -> str | None:
        return self._subscription_id

    async def check_login(self) -> bool:
        self.login_checks += 1
        return self.logged_in

    async def get_resource_group(self) -> str | None:
        self.resource_group_requests += 1
        return self.resource_group

    async def provision_resource(self, component_type, name, dependencies):
        if component_type in self.cancel_types:
            return None
        self.provisioned.append((component_type, name, dependencies))
        info = {"name": name, "connectionString": f"{component_type.value}-conn"}
        if component_type == ComponentType.IOT_HUB:
            info["iotHubConnectionString"] = "HostName=hub.azure-devices.net"
        elif component_type == ComponentType.IOT_HUB_DEVICE:
            info["iotHubDeviceConnectionString"] = "HostName=hub.azure-devices.net;DeviceId=dev"
        return info

    async def deploy_resource(self, component_type, component_info, source):
        self.deployed.append((component_type, component_info, source))
        return self.deploy_result


class FakeToolchain:
    def __init__(self, ready: bool = True, result: bool = True) -> None:
        self.ready = ready
        self.result = result
        self.calls: list[tuple[str, str, Path | None]] = []

    async def check_prerequisites(self, board_id: str) -> bool:
        self.calls.append(("check", board_id, None))
        return self.ready

    async def compile(self, board_id: str, device_path: Path) -> bool:
        self.calls.append(("compile", board_id, device_path))
        return self.result

    async def upload(self, board_id: str, device_path: Path) -> bool:
        self.calls.append(("upload", board_id, device_path))
        return self.result

    async def configure(self, board_id: str, device_path: Path) -> bool:
        self.calls.append(("configure", board_id, device_path))
        return self.result


class RecordingTelemetry:
    def __init__(self, fail: bool = False) -> None:
        self.fail = fail
        self.events: list[str] = []

    def send_event(self, name, context) -> None:
        if self.fail:
            raise RuntimeError("telemetry backend unavailable")
        self.events.append(name)


class RecordingOpener:
    def __init__(self, result: bool = True) -> None:
        self.result = result
        self.opened: list[tuple[Path, bool]] = []

    async def open(self, root: Path, open_in_new_window: bool) -> bool:
        self.opened.append((root, open_in_new_window))
        return self.result


# ---- scripted components ---------------------------------------------------


class ScriptedComponent:
    """Component whose results are set per test; records every call in ``log``."""

    component_type = ComponentType.IOT_HUB

    def __init__(
        self,
        name: str,
        log: list[str],
        *,
        ready: bool = True,
        result: bool | Exception = True,
        dependencies: list[Dependency] | None = None,
    ) -> None:
        self._id = f"{name}-{uuid.uuid4().hex[:6]}"
        self._name = name
        self.log = log
        self.ready = ready
        self.result = result
        self._dependencies = list(dependencies or [])

    @property
    def id(self) -> str:
        return self._id

    @property
    def name(self) -> str:
        return self._name

    @property
    def dependencies(self) -> list[Dependency]:
        return self._dependencies

    async def _act(self, action: str) -> bool:
        self.log.append(f"{action}:{self._name}")
        if isinstance(self.result, Exception):
            raise self.result
        return self.result

    async def check_prerequisites(self) -> bool:
        self.log.append(f"check:{self._name}")
        return self.ready

    async def load(self) -> bool:
        return True

    async def create(self) -> bool:
        return await self._act("create")


class BuildableComponent(ScriptedComponent):
    component_type = ComponentType.DEVICE

    async def compile(self) -> bool:
        return await self._act("compile")

    async def upload(self) -> bool:
        return await self._act("upload")

    async def config_device_settings(self) -> bool:
        return await self._act("configure")


class CloudComponent(ScriptedComponent):
    async def provision(self, session) -> bool:
        return await self._act("provision")

    async def deploy(self, session) -> bool:
        return await self._act("deploy")


class ProvisionOnlyComponent(ScriptedComponent):
    async def provision(self, session) -> bool:
        return await self._act("provision")
