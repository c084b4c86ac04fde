# iotworkbench/core/templates.py
"""
Project templates.

A template type expands into a fixed list of cloud components. Each entry
has a local ``ref`` and may depend on refs declared before it in the same
template, so the expansion is already in dependency order.

Catalog YAML:

    templates:
      StreamAnalytics:
        components:
          - {ref: iothub, type: IoTHub}
          - {ref: cosmosdb, type: CosmosDB}
          - ref: asa
            type: StreamAnalyticsJob
            depends_on:
              - {ref: iothub, kind: Input}
              - {ref: cosmosdb, kind: Other}
"""
from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field
from glob import glob
from pathlib import Path
from typing import Any, Iterable

import yaml

from iotworkbench.contracts.component import ComponentType, DependencyType
from iotworkbench.core.exceptions import TemplateError

logger = logging.getLogger(__name__)


class ProjectTemplateType(str, enum.Enum):
    BASIC = "Basic"
    IOT_HUB = "IotHub"
    AZURE_FUNCTIONS = "AzureFunctions"
    STREAM_ANALYTICS = "StreamAnalytics"


@dataclass(frozen=True)
class TemplateFileInfo:
    """A generated template file to be written into the device folder."""

    file_name: str
    source_path: str
    target_path: str = "."
    content: str = ""


@dataclass(frozen=True)
class TemplateDependency:
    ref: str
    kind: DependencyType


@dataclass(frozen=True)
class TemplateComponent:
    ref: str
    type: ComponentType
    depends_on: list[TemplateDependency] = field(default_factory=list)


@dataclass(frozen=True)
class ProjectTemplate:
    type: ProjectTemplateType
    components: list[TemplateComponent]


class TemplateCatalog:
    def __init__(self, templates: Iterable[ProjectTemplate]) -> None:
        self._templates = {t.type: t for t in templates}

    def get(self, template_type: ProjectTemplateType) -> ProjectTemplate:
        if template_type not in self._templates:
            raise TemplateError(f"Unknown project template '{template_type.value}'")
        return self._templates[template_type]

    def types(self) -> list[ProjectTemplateType]:
        return list(self._templates)


def _parse_template(name: str, data: dict[str, Any]) -> ProjectTemplate:
    try:
        template_type = ProjectTemplateType(name)
    except ValueError:
        raise TemplateError(f"Unknown project template '{name}'") from None

    components: list[TemplateComponent] = []
    seen: set[str] = set()
    for item in data.get("components") or []:
        ref = item.get("ref")
        if not ref:
            raise TemplateError(f"Template '{name}' has a component without 'ref'")
        try:
            component_type = ComponentType(item.get("type"))
        except ValueError:
            raise TemplateError(
                f"Template '{name}' uses unknown component type '{item.get('type')}'"
            ) from None

        deps: list[TemplateDependency] = []
        for dep in item.get("depends_on") or []:
            dep_ref = dep.get("ref")
            if dep_ref not in seen:
                raise TemplateError(
                    f"Template '{name}': '{ref}' depends on '{dep_ref}' "
                    "which is not declared before it"
                )
            try:
                kind = DependencyType(dep.get("kind", "Other"))
            except ValueError:
                raise TemplateError(
                    f"Template '{name}': unknown dependency kind '{dep.get('kind')}'"
                ) from None
            deps.append(TemplateDependency(ref=dep_ref, kind=kind))

        if ref in seen:
            raise TemplateError(f"Template '{name}' declares '{ref}' twice")
        seen.add(ref)
        components.append(TemplateComponent(ref=ref, type=component_type, depends_on=deps))

    return ProjectTemplate(type=template_type, components=components)


def _load_yaml_files(patterns: Iterable[str]) -> list[dict[str, Any]]:
    files: list[Path] = []
    for pattern in patterns:
        files.extend(Path(m).resolve() for m in glob(pattern))

    logger.info("Loading template config files: %s", [str(f) for f in files])

    out: list[dict[str, Any]] = []
    for f in files:
        with f.open("r", encoding="utf-8") as fh:
            out.append(yaml.safe_load(fh) or {})
    return out


def load_template_catalog(patterns: Iterable[str]) -> TemplateCatalog:
    templates_map: dict[str, dict[str, Any]] = {}
    for data in _load_yaml_files(patterns):
        for name, body in (data.get("templates") or {}).items():
            templates_map[name] = body or {}  # override by later files

    if not templates_map:
        raise TemplateError("No project templates found")

    return TemplateCatalog(_parse_template(n, b) for n, b in templates_map.items())
