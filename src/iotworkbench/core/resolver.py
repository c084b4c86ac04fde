# iotworkbench/core/resolver.py
"""Rebuild live components from persisted component records."""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Iterable

from iotworkbench.contracts.component import Component, Dependency
from iotworkbench.contracts.descriptor import ComponentConfig
from iotworkbench.core.exceptions import DescriptorError, UnresolvedDependencyError

if TYPE_CHECKING:
    from iotworkbench.components.factory import ComponentFactory

logger = logging.getLogger(__name__)


async def resolve_components(
    records: Iterable[ComponentConfig], factory: ComponentFactory
) -> list[Component]:
    """
    Instantiate and load one component per record, in record order.

    A dependency may only reference a record that appears earlier; the
    records are expected in the order returned by
    ``ComponentConfigStore.get_sorted_components``.

    Raises:
        UnresolvedDependencyError: A dependency id was not built yet
        UnsupportedComponentTypeError: A record has an unknown type
        DescriptorError: Two records share an id
    """
    built: dict[str, Component] = {}
    ordered: list[Component] = []

    for record in records:
        if record.id in built:
            raise DescriptorError(f"Component id '{record.id}' is declared twice.")

        dependencies: list[Dependency] = []
        for dep in record.dependencies:
            target = built.get(dep.id)
            if target is None:
                raise UnresolvedDependencyError(record.id, dep.id)
            dependencies.append(Dependency(component=target, type=dep.type))

        component = factory.build(record, dependencies)
        loaded = await component.load()
        if not loaded:
            logger.warning("Component %s (%s) loaded without persisted state", record.id, record.type)

        built[component.id] = component
        ordered.append(component)

    return ordered
