# iotworkbench/contracts/descriptor.py
"""Persisted shapes of the project descriptor (JSON on disk)."""
from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from iotworkbench.contracts.component import DependencyType


class DependencyConfig(BaseModel):
    id: str
    type: DependencyType


class ComponentConfig(BaseModel):
    """One entry of the component config store."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str
    type: str
    name: str = ""
    folder: str = ""
    dependencies: list[DependencyConfig] = Field(default_factory=list)
    component_info: dict[str, Any] | None = Field(
        default=None, alias="componentInfo"
    )

    @property
    def dependency_ids(self) -> list[str]:
        return [dep.id for dep in self.dependencies]


class ComponentConfigFile(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    component_configs: list[ComponentConfig] = Field(
        default_factory=list, alias="componentConfigs"
    )


class WorkspaceFolder(BaseModel):
    path: str


class WorkspaceDescriptor(BaseModel):
    """Content of the ``.code-workspace`` file."""

    folders: list[WorkspaceFolder] = Field(default_factory=list)
    settings: dict[str, Any] = Field(default_factory=dict)

    def add_folder(self, path: str) -> None:
        if all(folder.path != path for folder in self.folders):
            self.folders.append(WorkspaceFolder(path=path))
