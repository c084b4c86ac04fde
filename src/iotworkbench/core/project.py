# iotworkbench/core/project.py
"""
IoT Workbench workspace project.

Owns the component registry of the opened project. The registry is either
rebuilt from the persisted descriptor (``load``) or built fresh from a
project template (``create``); every other action is delegated to the
lifecycle driver, which only ever sees the in-memory registry.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Sequence

from iotworkbench.components import (
    AzureComponent,
    ComponentContext,
    ComponentFactory,
    device_for_board,
)
from iotworkbench.contracts.component import (
    Component,
    ComponentType,
    Dependency,
    DependencyType,
)
from iotworkbench.contracts.descriptor import WorkspaceDescriptor
from iotworkbench.contracts.host import (
    AzureSession,
    ConfigStore,
    DeviceToolchain,
    ProjectOpener,
    Prompter,
    TelemetrySink,
)
from iotworkbench.core.config import settings
from iotworkbench.core.descriptor import (
    ComponentConfigStore,
    ConfigKey,
    FileNames,
    FolderNames,
    ProjectLayout,
    ScaffoldType,
    WorkspaceConfigStore,
)
from iotworkbench.core.exceptions import MissingSettingError, ProjectError
from iotworkbench.core.filesystem import FileUtility
from iotworkbench.core.lifecycle import LifecycleDriver
from iotworkbench.core.registry import ComponentRegistry
from iotworkbench.core.resolver import resolve_components
from iotworkbench.core.telemetry import EventNames, TelemetryContext, send_event_safely
from iotworkbench.core.templates import (
    ProjectTemplateType,
    TemplateCatalog,
    TemplateFileInfo,
    load_template_catalog,
)

logger = logging.getLogger(__name__)

# Component types that own a top-level project folder, and the config key
# recording that folder.
COMPONENT_FOLDERS: dict[ComponentType, tuple[str, str]] = {
    ComponentType.AZURE_FUNCTIONS: (FolderNames.FUNCTIONS, ConfigKey.FUNCTION_PATH),
    ComponentType.STREAM_ANALYTICS_JOB: (FolderNames.STREAM_ANALYTICS, ConfigKey.ASA_PATH),
}


class IoTWorkspaceProject:
    def __init__(
        self,
        *,
        prompter: Prompter,
        session: AzureSession,
        config: ConfigStore | None = None,
        telemetry: TelemetrySink | None = None,
        toolchain: DeviceToolchain | None = None,
        opener: ProjectOpener | None = None,
        templates: TemplateCatalog | None = None,
    ) -> None:
        self.prompter = prompter
        self.session = session
        self.config = config
        self.telemetry = telemetry
        self.toolchain = toolchain
        self.opener = opener
        self._templates = templates

        self.registry = ComponentRegistry()
        self.driver = LifecycleDriver(self.registry, prompter, session)
        self.project_root: Path | None = None

    # ---- helpers -------------------------------------------------

    @property
    def templates(self) -> TemplateCatalog:
        if self._templates is None:
            self._templates = load_template_catalog(settings.templates_config_paths)
        return self._templates

    def _config_for(self, root: Path) -> ConfigStore | None:
        if self.config is not None:
            return self.config
        workspace_file = ProjectLayout(root).workspace_file
        if not workspace_file.is_file():
            candidates = sorted(root.glob(f"*{FileNames.WORKSPACE_EXTENSION}"))
            if not candidates:
                return None
            workspace_file = candidates[0]
        return WorkspaceConfigStore(workspace_file)

    @staticmethod
    async def _persist(component: Component, scope: ScaffoldType) -> None:
        if isinstance(component, AzureComponent):
            await component.update_config_settings(scope)

    # ---- load ----------------------------------------------------

    async def load(self, workspace_folders: Sequence[Path], init_load: bool = False) -> bool:
        async with self.driver.exclusive("load"):
            return await self._load(workspace_folders, init_load)

    async def _load(self, workspace_folders: Sequence[Path], init_load: bool) -> bool:
        if not workspace_folders:
            return False

        root = Path(workspace_folders[0]).resolve().parent
        config = self._config_for(root)
        if config is None:
            return False

        device_path = config.get(ConfigKey.DEVICE_PATH)
        if not device_path:
            return False

        device_location = root / device_path
        if not await FileUtility.file_exists(ProjectLayout.device_marker(device_location)):
            return False

        layout = ProjectLayout(root)
        project_config = await layout.read_project_config()
        if project_config is None:
            return False

        self.project_root = root

        # Only report the load that happens when the IDE opens
        if init_load:
            send_event_safely(self.telemetry, EventNames.PROJECT_LOAD, TelemetryContext())

        store = ComponentConfigStore(root)
        await store.create_if_not_exists(ScaffoldType.WORKSPACE)

        board_id = config.get(ConfigKey.BOARD_ID)
        if not board_id:
            return False
        if not project_config.get(ConfigKey.PROJECT_TYPE):
            return False

        context = ComponentContext(
            project_root=root,
            store=store,
            config=config,
            toolchain=self.toolchain,
            scope=ScaffoldType.WORKSPACE,
        )
        factory = ComponentFactory(context)
        components: list[Component] = []

        device = device_for_board(board_id, context, device_location)
        if device is not None:
            await device.load()
            components.append(device)
        else:
            logger.warning("Unknown board '%s', loading project without device", board_id)

        records = await store.get_sorted_components(ScaffoldType.WORKSPACE)
        try:
            if not records:
                components.extend(await self._load_legacy(factory, config))
            else:
                resolved = await resolve_components(records, factory)
                components.extend(self._with_hub_devices(resolved, factory))
        except MissingSettingError as exc:
            logger.warning("Cannot load project: %s", exc)
            return False

        self.registry.clear()
        self.registry.extend(components)

        for component in self.registry:
            try:
                if not await component.check_prerequisites():
                    logger.warning("Prerequisites of %s are not met", component.name)
            except Exception:
                logger.exception("Prerequisite check of %s failed", component.name)

        logger.info("Loaded project %s with %d components", root, len(self.registry))
        return True

    async def _load_legacy(self, factory: ComponentFactory, config: ConfigStore) -> list[Component]:
        """Registry for projects created before the component config store existed."""
        logger.info("No component config found, using legacy project layout")

        iot_hub = factory.new(ComponentType.IOT_HUB)
        await self._persist(iot_hub, ScaffoldType.WORKSPACE)
        await iot_hub.load()
        hub_device = factory.new(
            ComponentType.IOT_HUB_DEVICE, [Dependency(iot_hub, DependencyType.OTHER)]
        )
        components = [iot_hub, hub_device]

        function_path = config.get(ConfigKey.FUNCTION_PATH)
        if function_path:
            functions = factory.new(
                ComponentType.AZURE_FUNCTIONS,
                [Dependency(iot_hub, DependencyType.INPUT)],
                folder=function_path,
            )
            await self._persist(functions, ScaffoldType.WORKSPACE)
            await functions.load()
            components.append(functions)

        return components

    @staticmethod
    def _with_hub_devices(
        resolved: list[Component], factory: ComponentFactory
    ) -> list[Component]:
        """Follow every IoT Hub with the device identity registered on it."""
        out: list[Component] = []
        for component in resolved:
            out.append(component)
            if component.component_type == ComponentType.IOT_HUB:
                out.append(
                    factory.new(
                        ComponentType.IOT_HUB_DEVICE,
                        [Dependency(component, DependencyType.OTHER)],
                    )
                )
        return out

    async def handle_load_failure(self, workspace_folders: Sequence[Path]) -> None:
        if not workspace_folders:
            await self.prompter.ask_and_new_project()
            return

        root = Path(workspace_folders[0])
        marker = ProjectLayout.device_marker(root / FolderNames.DEVICE)
        workspace_files = (
            sorted(p.name for p in root.glob(f"*{FileNames.WORKSPACE_EXTENSION}"))
            if root.is_dir()
            else []
        )

        if marker.is_file() and workspace_files:
            await self.prompter.ask_and_open_project(root, workspace_files[0])
        else:
            await self.prompter.ask_and_new_project()

    # ---- create --------------------------------------------------

    async def create(
        self,
        root: Path,
        template_files: list[TemplateFileInfo],
        project_type: ProjectTemplateType | str,
        board_id: str,
        open_in_new_window: bool = False,
    ) -> bool:
        root = Path(root)
        async with self.driver.exclusive("create"):
            if not await self._create(root, template_files, project_type, board_id):
                return False

        if not open_in_new_window:
            # Reported here since the new window starts a fresh session
            send_event_safely(
                self.telemetry, EventNames.CREATE_NEW_PROJECT, TelemetryContext()
            )

        if self.opener is not None:
            return await self.opener.open(root, open_in_new_window)
        return True

    async def _create(
        self,
        root: Path,
        template_files: list[TemplateFileInfo],
        project_type: ProjectTemplateType | str,
        board_id: str,
    ) -> bool:
        if not await FileUtility.directory_exists(root):
            raise ProjectError(
                "Unable to find the root path, please open the folder and "
                "initialize project again."
            )

        try:
            project_type = ProjectTemplateType(project_type)
        except ValueError:
            raise ProjectError(f"Unknown project type '{project_type}'.") from None
        template = self.templates.get(project_type)
        layout = ProjectLayout(root)
        store = ComponentConfigStore(root)
        context = ComponentContext(
            project_root=root,
            store=store,
            config=self.config or WorkspaceConfigStore(layout.workspace_file),
            toolchain=self.toolchain,
            scope=ScaffoldType.LOCAL,
        )
        factory = ComponentFactory(context)
        namespace = settings.settings_namespace

        # Whatever the template is, we will always create the device.
        device = device_for_board(board_id, context, layout.device_dir, template_files)
        if device is None:
            raise ProjectError("The specified board is not supported.")
        if not await device.check_prerequisites():
            return False

        workspace = WorkspaceDescriptor()
        workspace.add_folder(FolderNames.DEVICE)
        workspace.settings[f"{namespace}.{ConfigKey.BOARD_ID}"] = board_id
        workspace.settings[f"{namespace}.{ConfigKey.DEVICE_PATH}"] = FolderNames.DEVICE
        project_config = {
            ConfigKey.BOARD_ID: board_id,
            ConfigKey.PROJECT_TYPE: project_type.value,
        }

        components: list[Component] = [device]
        by_ref: dict[str, Component] = {}
        for item in template.components:
            dependencies = [Dependency(by_ref[d.ref], d.kind) for d in item.depends_on]
            folder, key = COMPONENT_FOLDERS.get(item.type, ("", ""))
            component = factory.new(item.type, dependencies, folder=folder)
            if not await component.check_prerequisites():
                return False

            if folder:
                workspace.add_folder(folder)
                workspace.settings[f"{namespace}.{key}"] = folder
                project_config[key] = folder

            by_ref[item.ref] = component
            components.append(component)

        for component in components:
            if not await component.create():
                logger.info("Creation of %s cancelled, removing %s", component.name, root)
                await FileUtility.remove_recursively(root)
                await self.prompter.show_warning("Project initialize canceled.")
                return False

        await store.create_if_not_exists(ScaffoldType.LOCAL)
        for component in components:
            await self._persist(component, ScaffoldType.LOCAL)
        await layout.write_workspace(workspace)
        await layout.write_project_config(project_config)
        self.registry.clear()
        self.registry.extend(components)
        self.project_root = root
        logger.info("Created %s project in %s", project_type.value, root)
        return True

    # ---- actions -------------------------------------------------

    async def compile(self) -> bool:
        return await self.driver.compile()

    async def upload(self) -> bool:
        return await self.driver.upload()

    async def provision(self) -> bool:
        config = self._config_for(self.project_root) if self.project_root else self.config
        if config is None or not config.get(ConfigKey.DEVICE_PATH):
            raise ProjectError(
                "Cannot run IoT Device Workbench command in a non-IoTWorkbench project. "
                "Please initialize an IoT Device Workbench project first."
            )
        return await self.driver.provision()

    async def deploy(self) -> bool:
        return await self.driver.deploy()

    async def config_device_settings(self) -> bool:
        return await self.driver.config_device_settings()
