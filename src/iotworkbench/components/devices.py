# iotworkbench/components/devices.py
"""
Device targets.

Building and flashing are delegated to the host's ``DeviceToolchain``; the
device component owns its folder, the project marker file and the template
files generated for it.
"""
from __future__ import annotations

import json
import logging
import uuid
from pathlib import Path
from typing import ClassVar

from iotworkbench.components.base import ComponentContext
from iotworkbench.contracts.component import ComponentType, Dependency
from iotworkbench.contracts.host import DeviceToolchain
from iotworkbench.core.descriptor import ProjectLayout
from iotworkbench.core.exceptions import ProjectError
from iotworkbench.core.filesystem import FileUtility
from iotworkbench.core.templates import TemplateFileInfo

logger = logging.getLogger(__name__)


class BoardDevice:
    board_id: ClassVar[str]
    display_name: ClassVar[str]
    component_type = ComponentType.DEVICE

    def __init__(
        self,
        context: ComponentContext,
        device_path: Path,
        template_files: list[TemplateFileInfo] | None = None,
        component_id: str | None = None,
    ) -> None:
        self.context = context
        self.device_path = device_path
        self.template_files = list(template_files or [])
        self._id = component_id or str(uuid.uuid4())

    @property
    def id(self) -> str:
        return self._id

    @property
    def name(self) -> str:
        return self.display_name

    @property
    def dependencies(self) -> list[Dependency]:
        return []

    def _toolchain(self) -> DeviceToolchain:
        if self.context.toolchain is None:
            raise ProjectError(f"No device toolchain available for {self.display_name}")
        return self.context.toolchain

    async def check_prerequisites(self) -> bool:
        if self.context.toolchain is None:
            return True
        return await self.context.toolchain.check_prerequisites(self.board_id)

    async def load(self) -> bool:
        return await FileUtility.file_exists(ProjectLayout.device_marker(self.device_path))

    async def create(self) -> bool:
        await FileUtility.mkdir_recursively(self.device_path)
        await FileUtility.write_file(
            ProjectLayout.device_marker(self.device_path),
            json.dumps({"boardId": self.board_id}, indent=4),
        )
        for info in self.template_files:
            target = self.device_path / info.target_path / info.file_name
            await FileUtility.write_file(target, info.content)
        logger.info("Created %s device in %s", self.board_id, self.device_path)
        return True

    async def config_device_settings(self) -> bool:
        return await self._toolchain().configure(self.board_id, self.device_path)


class ToolchainBuildMixin:
    board_id: ClassVar[str]
    device_path: Path

    async def compile(self) -> bool:
        return await self._toolchain().compile(self.board_id, self.device_path)  # type: ignore[attr-defined]

    async def upload(self) -> bool:
        return await self._toolchain().upload(self.board_id, self.device_path)  # type: ignore[attr-defined]


class RaspberryPiDevice(ToolchainBuildMixin, BoardDevice):
    board_id = "raspberrypi"
    display_name = "Raspberry Pi"


class AZ3166Device(ToolchainBuildMixin, BoardDevice):
    board_id = "devkit"
    display_name = "MXChip IoT DevKit"


class Esp32Device(ToolchainBuildMixin, BoardDevice):
    board_id = "esp32"
    display_name = "ESP32 Arduino"


class IoTButtonDevice(BoardDevice):
    """Configured over its soft AP; there is nothing to build or flash."""

    board_id = "iotbutton"
    display_name = "IoT Button"


BOARDS: dict[str, type[BoardDevice]] = {
    cls.board_id: cls
    for cls in (RaspberryPiDevice, AZ3166Device, Esp32Device, IoTButtonDevice)
}


def device_for_board(
    board_id: str,
    context: ComponentContext,
    device_path: Path,
    template_files: list[TemplateFileInfo] | None = None,
) -> BoardDevice | None:
    cls = BOARDS.get(board_id)
    if cls is None:
        return None
    return cls(context, device_path, template_files)
