# iotworkbench/core/registry.py
"""
Registry of the components of the current project.

Insertion order is the dependency-safe order: a component is always added
after the components it depends on. An id index is kept next to the ordered
list so dependencies resolve in O(1).
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterator

from iotworkbench.contracts.component import Capability, Component, capabilities_of

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RegistryEntry:
    component: Component
    capabilities: Capability


class ComponentRegistry:
    def __init__(self) -> None:
        self._entries: list[RegistryEntry] = []
        self._by_id: dict[str, RegistryEntry] = {}

    def add(self, component: Component) -> None:
        """
        Append a component.

        Raises:
            ValueError: If a component with the same id is already registered
        """
        if component.id in self._by_id:
            raise ValueError(f"Component '{component.id}' is already registered")

        entry = RegistryEntry(component=component, capabilities=capabilities_of(component))
        self._entries.append(entry)
        self._by_id[component.id] = entry
        logger.debug(
            "Registered component %s (%s) with %s",
            component.name,
            component.component_type.value,
            entry.capabilities,
        )

    def extend(self, components: list[Component]) -> None:
        for component in components:
            self.add(component)

    def get(self, component_id: str) -> Component:
        if component_id not in self._by_id:
            available = ", ".join(self._by_id) or "(none)"
            raise KeyError(f"Component '{component_id}' not found. Available: {available}")
        return self._by_id[component_id].component

    def has(self, component_id: str) -> bool:
        return component_id in self._by_id

    def capabilities(self, component_id: str) -> Capability:
        if component_id not in self._by_id:
            raise KeyError(f"Component '{component_id}' not found")
        return self._by_id[component_id].capabilities

    def with_capability(self, capability: Capability) -> list[Component]:
        """Components carrying ``capability``, in registry order."""
        return [e.component for e in self._entries if capability in e.capabilities]

    def components(self) -> list[Component]:
        return [e.component for e in self._entries]

    def ids(self) -> list[str]:
        return [e.component.id for e in self._entries]

    def clear(self) -> None:
        self._entries.clear()
        self._by_id.clear()

    def __contains__(self, component_id: object) -> bool:
        return component_id in self._by_id

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[Component]:
        return iter(self.components())
