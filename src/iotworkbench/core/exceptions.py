# iotworkbench/core/exceptions.py
"""Hard failures raised by the orchestration core.

Soft failures (missing prerequisite, user cancelled, nothing to do) are
reported as ``False`` return values and never raise.
"""
from __future__ import annotations

__all__ = [
    "WorkbenchError",
    "ComponentActionError",
    "DescriptorError",
    "MissingSettingError",
    "PhaseInProgressError",
    "ProjectError",
    "TemplateError",
    "UnresolvedDependencyError",
    "UnsupportedComponentTypeError",
]


class WorkbenchError(Exception):
    pass


class ProjectError(WorkbenchError):
    pass


class DescriptorError(WorkbenchError):
    pass


class TemplateError(WorkbenchError):
    pass


class PhaseInProgressError(WorkbenchError):
    pass


class UnresolvedDependencyError(WorkbenchError):
    def __init__(self, component_id: str, dependency_id: str) -> None:
        self.component_id = component_id
        self.dependency_id = dependency_id
        super().__init__(
            f"Cannot find component with id {dependency_id} "
            f"(required by {component_id})."
        )


class UnsupportedComponentTypeError(WorkbenchError):
    def __init__(self, component_type: str) -> None:
        self.component_type = component_type
        super().__init__(f"Component not supported with type of {component_type}.")


class MissingSettingError(WorkbenchError):
    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(f"Required setting '{key}' is not configured.")


class ComponentActionError(WorkbenchError):
    """A component action failed during compile, upload, provision or deploy."""

    def __init__(self, action: str, component_name: str, message: str | None = None) -> None:
        self.action = action
        self.component_name = component_name
        super().__init__(message or f"Unable to {action} {component_name}.")
