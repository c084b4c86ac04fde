# iotworkbench/core/lifecycle.py
"""
Lifecycle driver.

Runs one phase (compile, upload, provision, deploy, device settings) across
the component registry. Components are processed one at a time in registry
order; the first soft or hard failure stops the phase. Components that
already completed keep their side effects.

Per phase run:

    IDLE -> CHECKING_PREREQUISITES -> ACTING -> COMPLETED | FAILED
                                   -> ABORTED_NO_OP      (nothing eligible)
                                   -> ABORTED_DECLINED   (user declined)
"""
from __future__ import annotations

import enum
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from iotworkbench.contracts.component import Capability, Component
from iotworkbench.contracts.host import AzureSession, Prompter
from iotworkbench.core.exceptions import ComponentActionError, PhaseInProgressError
from iotworkbench.core.registry import ComponentRegistry

logger = logging.getLogger(__name__)

STEP_SEPARATOR = "   -   "


class PhaseState(str, enum.Enum):
    IDLE = "idle"
    CHECKING_PREREQUISITES = "checking_prerequisites"
    ACTING = "acting"
    ABORTED_NO_OP = "aborted_no_op"
    ABORTED_DECLINED = "aborted_declined"
    COMPLETED = "completed"
    FAILED = "failed"


def progress_label(names: list[str], current: int) -> str:
    """Numbered step list with the acting item marked, e.g. ``>> 1. IoT Hub   -   2. Cosmos DB``."""
    steps = []
    for index, name in enumerate(names):
        marker = ">> " if index == current else ""
        steps.append(f"{marker}{index + 1}. {name}")
    return STEP_SEPARATOR.join(steps)


class LifecycleDriver:
    def __init__(
        self,
        registry: ComponentRegistry,
        prompter: Prompter,
        session: AzureSession,
    ) -> None:
        self.registry = registry
        self.prompter = prompter
        self.session = session
        self.state = PhaseState.IDLE
        self.phase: str | None = None
        self._running = False

    # ---- state ---------------------------------------------------

    def _transition(self, state: PhaseState) -> None:
        logger.debug("Phase %s: %s -> %s", self.phase, self.state.value, state.value)
        self.state = state

    @asynccontextmanager
    async def exclusive(self, phase: str) -> AsyncIterator[None]:
        """Hold the registry for one phase; load and create enter this too."""
        if self._running:
            raise PhaseInProgressError(
                f"Cannot start {phase} while {self.phase} is running"
            )
        self._running = True
        self.phase = phase
        self.state = PhaseState.IDLE
        self._transition(PhaseState.CHECKING_PREREQUISITES)
        try:
            yield
        except Exception:
            self._transition(PhaseState.FAILED)
            raise
        else:
            # load and create do not step through the states themselves
            if self.state in (PhaseState.CHECKING_PREREQUISITES, PhaseState.ACTING):
                self._transition(PhaseState.COMPLETED)
        finally:
            self._running = False

    # ---- compile / upload ----------------------------------------

    async def compile(self) -> bool:
        async with self.exclusive("compile"):
            return await self._build_phase(
                Capability.COMPILE,
                "compile",
                "Unable to compile the device code, please check output window for detail.",
            )

    async def upload(self) -> bool:
        async with self.exclusive("upload"):
            return await self._build_phase(
                Capability.UPLOAD,
                "upload",
                "Unable to upload the sketch, please check output window for detail.",
            )

    async def _build_phase(self, capability: Capability, action: str, failure: str) -> bool:
        for component in self.registry.with_capability(capability):
            if self.state != PhaseState.CHECKING_PREREQUISITES:
                self._transition(PhaseState.CHECKING_PREREQUISITES)
            if not await component.check_prerequisites():
                logger.warning("Prerequisites of %s not met, skipping %s", component.name, action)
                self._transition(PhaseState.FAILED)
                return False

            self._transition(PhaseState.ACTING)
            logger.info("Running %s on %s", action, component.name)
            result = await getattr(component, action)()
            if result is False:
                raise ComponentActionError(action, component.name, failure)

        self._transition(PhaseState.COMPLETED)
        return True

    # ---- provision / deploy --------------------------------------

    async def _eligible(self, capability: Capability) -> list[Component] | None:
        """Components to act on, or None if one of them is not ready."""
        eligible: list[Component] = []
        for component in self.registry.with_capability(capability):
            if not await component.check_prerequisites():
                logger.warning("Prerequisites of %s not met", component.name)
                return None
            eligible.append(component)
        return eligible

    async def _confirm(self, names: list[str], current: int, placeholder: str) -> bool:
        option = {
            "label": progress_label(names, current),
            "description": "",
            "detail": "Click to continue",
        }
        selection = await self.prompter.choose([option], placeholder=placeholder)
        return selection is not None

    async def provision(self) -> bool:
        async with self.exclusive("provision"):
            eligible = await self._eligible(Capability.PROVISION)
            if eligible is None:
                self._transition(PhaseState.FAILED)
                return False
            if not eligible:
                await self.prompter.show_info(
                    "Congratulations! There is no Azure service to provision in this project."
                )
                self._transition(PhaseState.ABORTED_NO_OP)
                return False

            # Ensure azure login before component provision
            if not await self.session.check_login():
                logger.info("Azure login not available, aborting provision")
                self._transition(PhaseState.FAILED)
                return False
            resource_group = await self.session.get_resource_group()
            if not resource_group or not self.session.subscription_id:
                logger.info("No resource group or subscription selected, aborting provision")
                self._transition(PhaseState.FAILED)
                return False

            names = [c.name for c in eligible]
            for index, component in enumerate(eligible):
                if not await self._confirm(names, index, "Provision process"):
                    self._transition(PhaseState.ABORTED_DECLINED)
                    return False

                self._transition(PhaseState.ACTING)
                try:
                    result = await component.provision(self.session)  # type: ignore[attr-defined]
                except Exception as exc:
                    logger.exception("Provision of %s failed", component.name)
                    raise ComponentActionError(
                        "provision", component.name, f"Provision of {component.name} failed: {exc}"
                    ) from exc
                if result is False:
                    await self.prompter.show_warning("Provision canceled.")
                    self._transition(PhaseState.FAILED)
                    return False

            self._transition(PhaseState.COMPLETED)
            return True

    async def deploy(self) -> bool:
        async with self.exclusive("deploy"):
            eligible = await self._eligible(Capability.DEPLOY)
            if eligible is None:
                self._transition(PhaseState.FAILED)
                return False
            if not eligible:
                await self.prompter.show_info(
                    "Congratulations! The project does not contain any Azure "
                    "components to be deployed."
                )
                self._transition(PhaseState.ABORTED_NO_OP)
                return False

            if not await self.session.check_login():
                logger.warning("Azure login check failed, deploying with current session")

            names = [c.name for c in eligible]
            for index, component in enumerate(eligible):
                if not await self._confirm(names, index, "Deploy process"):
                    self._transition(PhaseState.ABORTED_DECLINED)
                    return False

                self._transition(PhaseState.ACTING)
                try:
                    result = await component.deploy(self.session)  # type: ignore[attr-defined]
                except Exception as exc:
                    logger.exception("Deployment of %s failed", component.name)
                    raise ComponentActionError(
                        "deploy", component.name, f"The deployment of {component.name} failed: {exc}"
                    ) from exc
                if result is False:
                    raise ComponentActionError(
                        "deploy", component.name, f"The deployment of {component.name} failed."
                    )

            await self.prompter.show_info("Azure deploy succeeded.")
            self._transition(PhaseState.COMPLETED)
            return True

    # ---- device settings -----------------------------------------

    async def config_device_settings(self) -> bool:
        async with self.exclusive("config_device_settings"):
            self._transition(PhaseState.ACTING)
            for component in self.registry.with_capability(Capability.DEVICE):
                await component.config_device_settings()  # type: ignore[attr-defined]
            self._transition(PhaseState.COMPLETED)
            return True
