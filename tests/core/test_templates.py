# tests/core/test_templates.py
"""Tests for the project template catalog."""
from __future__ import annotations

from pathlib import Path

import pytest

from iotworkbench.contracts.component import ComponentType, DependencyType
from iotworkbench.core.config import RESOURCES_DIR
from iotworkbench.core.exceptions import TemplateError
from iotworkbench.core.templates import ProjectTemplateType, TemplateCatalog, load_template_catalog


def _expansion(catalog: TemplateCatalog, template_type: ProjectTemplateType):
    return [
        (c.type, [(d.ref, d.kind) for d in c.depends_on])
        for c in catalog.get(template_type).components
    ]


def test_packaged_catalog_has_all_template_types(catalog: TemplateCatalog):
    assert set(catalog.types()) == set(ProjectTemplateType)


def test_template_expansions(catalog: TemplateCatalog):
    assert _expansion(catalog, ProjectTemplateType.BASIC) == []
    assert _expansion(catalog, ProjectTemplateType.IOT_HUB) == [(ComponentType.IOT_HUB, [])]
    assert _expansion(catalog, ProjectTemplateType.AZURE_FUNCTIONS) == [
        (ComponentType.IOT_HUB, []),
        (ComponentType.AZURE_FUNCTIONS, [("iothub", DependencyType.INPUT)]),
    ]
    assert _expansion(catalog, ProjectTemplateType.STREAM_ANALYTICS) == [
        (ComponentType.IOT_HUB, []),
        (ComponentType.COSMOS_DB, []),
        (
            ComponentType.STREAM_ANALYTICS_JOB,
            [("iothub", DependencyType.INPUT), ("cosmosdb", DependencyType.OTHER)],
        ),
    ]


def test_later_files_override(tmp_path: Path):
    override = tmp_path / "override.yaml"
    override.write_text("templates:\n  IotHub:\n    components: []\n")

    catalog = load_template_catalog([str(RESOURCES_DIR / "templates.yaml"), str(override)])

    assert catalog.get(ProjectTemplateType.IOT_HUB).components == []
    assert len(catalog.get(ProjectTemplateType.STREAM_ANALYTICS).components) == 3


def test_dependency_on_later_ref_raises(tmp_path: Path):
    bad = tmp_path / "bad.yaml"
    bad.write_text(
        "templates:\n"
        "  IotHub:\n"
        "    components:\n"
        "      - {ref: asa, type: StreamAnalyticsJob, depends_on: [{ref: hub, kind: Input}]}\n"
        "      - {ref: hub, type: IoTHub}\n"
    )

    with pytest.raises(TemplateError, match="not declared before"):
        load_template_catalog([str(bad)])


def test_unknown_component_type_raises(tmp_path: Path):
    bad = tmp_path / "bad.yaml"
    bad.write_text("templates:\n  Basic:\n    components:\n      - {ref: x, type: Kafka}\n")

    with pytest.raises(TemplateError, match="Kafka"):
        load_template_catalog([str(bad)])


@pytest.mark.parametrize(
    "component, match",
    [
        ("{type: IoTHub}", "without 'ref'"),
        ("{ref: hub}", "unknown component type"),
    ],
)
def test_malformed_component_raises(tmp_path: Path, component, match):
    bad = tmp_path / "bad.yaml"
    bad.write_text(f"templates:\n  Basic:\n    components:\n      - {component}\n")

    with pytest.raises(TemplateError, match=match):
        load_template_catalog([str(bad)])


def test_unknown_dependency_kind_raises(tmp_path: Path):
    bad = tmp_path / "bad.yaml"
    bad.write_text(
        "templates:\n"
        "  IotHub:\n"
        "    components:\n"
        "      - {ref: hub, type: IoTHub}\n"
        "      - {ref: db, type: CosmosDB, depends_on: [{ref: hub, kind: Output}]}\n"
    )

    with pytest.raises(TemplateError, match="Output"):
        load_template_catalog([str(bad)])


def test_no_files_raises(tmp_path: Path):
    with pytest.raises(TemplateError):
        load_template_catalog([str(tmp_path / "*.yaml")])
