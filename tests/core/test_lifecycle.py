# tests/core/test_lifecycle.py
"""Tests for the lifecycle driver phases."""
from __future__ import annotations

import pytest

from helpers.fakes import (
    BuildableComponent,
    CloudComponent,
    FakePrompter,
    FakeSession,
    ProvisionOnlyComponent,
    ScriptedComponent,
)
from iotworkbench.core.exceptions import ComponentActionError, PhaseInProgressError
from iotworkbench.core.lifecycle import LifecycleDriver, PhaseState, progress_label
from iotworkbench.core.registry import ComponentRegistry


def _driver(components, prompter=None, session=None) -> LifecycleDriver:
    registry = ComponentRegistry()
    registry.extend(components)
    return LifecycleDriver(registry, prompter or FakePrompter(), session or FakeSession())


def test_progress_label_marks_current_item():
    assert progress_label(["IoT Hub", "Cosmos DB", "ASA"], 1) == (
        "1. IoT Hub   -   >> 2. Cosmos DB   -   3. ASA"
    )


class TestCompileUpload:
    @pytest.mark.asyncio
    async def test_only_capable_components_act(self):
        log: list[str] = []
        driver = _driver(
            [CloudComponent("hub", log), BuildableComponent("device", log), ScriptedComponent("x", log)]
        )

        assert await driver.compile() is True
        assert log == ["check:device", "compile:device"]
        assert driver.state == PhaseState.COMPLETED

    @pytest.mark.asyncio
    async def test_upload_runs_in_registry_order(self):
        log: list[str] = []
        driver = _driver([BuildableComponent("a", log), BuildableComponent("b", log)])

        assert await driver.upload() is True
        assert log == ["check:a", "upload:a", "check:b", "upload:b"]

    @pytest.mark.asyncio
    async def test_failed_prerequisite_returns_false(self):
        log: list[str] = []
        driver = _driver([BuildableComponent("a", log, ready=False), BuildableComponent("b", log)])

        assert await driver.compile() is False
        assert log == ["check:a"]
        assert driver.state == PhaseState.FAILED

    @pytest.mark.asyncio
    async def test_false_result_raises_and_halts(self):
        log: list[str] = []
        driver = _driver([BuildableComponent("a", log, result=False), BuildableComponent("b", log)])

        with pytest.raises(ComponentActionError, match="Unable to compile the device code"):
            await driver.compile()

        assert "compile:b" not in log
        assert driver.state == PhaseState.FAILED

    @pytest.mark.asyncio
    async def test_upload_false_message(self):
        driver = _driver([BuildableComponent("a", [], result=False)])

        with pytest.raises(ComponentActionError, match="Unable to upload the sketch"):
            await driver.upload()

    @pytest.mark.asyncio
    async def test_nothing_to_compile_completes(self):
        driver = _driver([CloudComponent("hub", [])])

        assert await driver.compile() is True
        assert driver.state == PhaseState.COMPLETED


class TestProvision:
    @pytest.mark.asyncio
    async def test_nothing_eligible_skips_session(self):
        session = FakeSession()
        prompter = FakePrompter()
        driver = _driver([BuildableComponent("device", [])], prompter, session)

        assert await driver.provision() is False
        assert session.login_checks == 0
        assert session.resource_group_requests == 0
        assert prompter.infos == [
            "Congratulations! There is no Azure service to provision in this project."
        ]
        assert driver.state == PhaseState.ABORTED_NO_OP

    @pytest.mark.asyncio
    async def test_provisions_each_component_with_confirmation(self):
        log: list[str] = []
        prompter = FakePrompter()
        driver = _driver(
            [CloudComponent("hub", log), BuildableComponent("dev", log), CloudComponent("db", log)],
            prompter,
        )

        assert await driver.provision() is True
        assert log == ["check:hub", "check:db", "provision:hub", "provision:db"]
        assert [c["label"] for c in prompter.choices] == [
            ">> 1. hub   -   2. db",
            "1. hub   -   >> 2. db",
        ]
        assert set(prompter.placeholders) == {"Provision process"}
        assert driver.state == PhaseState.COMPLETED

    @pytest.mark.asyncio
    async def test_failed_prerequisite_returns_false(self):
        session = FakeSession()
        driver = _driver([CloudComponent("hub", [], ready=False)], session=session)

        assert await driver.provision() is False
        assert session.login_checks == 0

    @pytest.mark.asyncio
    async def test_login_required(self):
        log: list[str] = []
        driver = _driver([CloudComponent("hub", log)], session=FakeSession(logged_in=False))

        assert await driver.provision() is False
        assert "provision:hub" not in log

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "session",
        [FakeSession(resource_group=None), FakeSession(subscription_id=None)],
    )
    async def test_resource_group_and_subscription_required(self, session):
        log: list[str] = []
        driver = _driver([CloudComponent("hub", log)], session=session)

        assert await driver.provision() is False
        assert "provision:hub" not in log

    @pytest.mark.asyncio
    async def test_decline_keeps_completed_components(self):
        log: list[str] = []
        driver = _driver(
            [CloudComponent("hub", log), CloudComponent("db", log)],
            FakePrompter(decline_at=1),
        )

        assert await driver.provision() is False
        assert log[-1] == "provision:hub"
        assert "provision:db" not in log
        assert driver.state == PhaseState.ABORTED_DECLINED

    @pytest.mark.asyncio
    async def test_false_result_warns_and_stops(self):
        log: list[str] = []
        prompter = FakePrompter()
        driver = _driver(
            [CloudComponent("hub", log, result=False), CloudComponent("db", log)], prompter
        )

        assert await driver.provision() is False
        assert prompter.warnings == ["Provision canceled."]
        assert "provision:db" not in log

    @pytest.mark.asyncio
    async def test_error_names_component(self):
        driver = _driver([CloudComponent("hub", [], result=RuntimeError("quota"))])

        with pytest.raises(ComponentActionError, match="hub") as exc_info:
            await driver.provision()

        assert isinstance(exc_info.value.__cause__, RuntimeError)
        assert driver.state == PhaseState.FAILED


class TestDeploy:
    @pytest.mark.asyncio
    async def test_nothing_eligible(self):
        session = FakeSession()
        prompter = FakePrompter()
        driver = _driver([ProvisionOnlyComponent("hub", [])], prompter, session)

        assert await driver.deploy() is False
        assert session.login_checks == 0
        assert "does not contain any Azure components" in prompter.infos[0]

    @pytest.mark.asyncio
    async def test_deploys_only_deployable(self):
        log: list[str] = []
        prompter = FakePrompter()
        driver = _driver(
            [ProvisionOnlyComponent("hub", log), CloudComponent("fn", log)], prompter
        )

        assert await driver.deploy() is True
        assert log == ["check:fn", "deploy:fn"]
        assert prompter.infos == ["Azure deploy succeeded."]
        assert prompter.placeholders == ["Deploy process"]

    @pytest.mark.asyncio
    async def test_false_result_raises(self):
        driver = _driver([CloudComponent("fn", [], result=False)])

        with pytest.raises(ComponentActionError, match="The deployment of fn failed."):
            await driver.deploy()

    @pytest.mark.asyncio
    async def test_decline_aborts(self):
        log: list[str] = []
        driver = _driver([CloudComponent("fn", log)], FakePrompter(decline_at=0))

        assert await driver.deploy() is False
        assert "deploy:fn" not in log


class TestDriverState:
    @pytest.mark.asyncio
    async def test_config_device_settings(self):
        log: list[str] = []
        driver = _driver([CloudComponent("hub", log), BuildableComponent("dev", log)])

        assert await driver.config_device_settings() is True
        assert log == ["configure:dev"]

    @pytest.mark.asyncio
    async def test_phases_are_exclusive(self):
        driver = _driver([])

        async with driver.exclusive("compile"):
            with pytest.raises(PhaseInProgressError):
                await driver.upload()

        assert await driver.upload() is True
