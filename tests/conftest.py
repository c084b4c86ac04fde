# tests/conftest.py
from __future__ import annotations

from pathlib import Path

import pytest

from helpers.fakes import (
    FakePrompter,
    FakeSession,
    FakeToolchain,
    RecordingTelemetry,
)
from iotworkbench.components import ComponentContext
from iotworkbench.core.config import RESOURCES_DIR
from iotworkbench.core.descriptor import ComponentConfigStore
from iotworkbench.core.templates import TemplateCatalog, load_template_catalog


@pytest.fixture
def prompter() -> FakePrompter:
    return FakePrompter()


@pytest.fixture
def session() -> FakeSession:
    return FakeSession()


@pytest.fixture
def toolchain() -> FakeToolchain:
    return FakeToolchain()


@pytest.fixture
def telemetry() -> RecordingTelemetry:
    return RecordingTelemetry()


@pytest.fixture
def catalog() -> TemplateCatalog:
    return load_template_catalog([str(RESOURCES_DIR / "templates.yaml")])


@pytest.fixture
def project_root(tmp_path: Path) -> Path:
    root = tmp_path / "myproject"
    root.mkdir()
    return root


@pytest.fixture
def store(project_root: Path) -> ComponentConfigStore:
    return ComponentConfigStore(project_root)


@pytest.fixture
def context(project_root: Path, store: ComponentConfigStore, toolchain: FakeToolchain) -> ComponentContext:
    return ComponentContext(project_root=project_root, store=store, toolchain=toolchain)
