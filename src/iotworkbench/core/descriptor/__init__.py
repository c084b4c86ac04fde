"""Persisted project descriptor: layout, config store and workspace settings."""
from iotworkbench.core.descriptor.layout import ConfigKey, FileNames, FolderNames, ProjectLayout
from iotworkbench.core.descriptor.store import (
    ComponentConfigStore,
    ScaffoldType,
    sort_by_dependencies,
)
from iotworkbench.core.descriptor.workspace_settings import WorkspaceConfigStore

__all__ = [
    "ComponentConfigStore",
    "ConfigKey",
    "FileNames",
    "FolderNames",
    "ProjectLayout",
    "ScaffoldType",
    "WorkspaceConfigStore",
    "sort_by_dependencies",
]
