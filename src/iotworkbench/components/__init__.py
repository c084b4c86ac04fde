"""Concrete project components."""
from iotworkbench.components.azure import (
    AzureFunctions,
    CosmosDB,
    IoTHub,
    IoTHubDevice,
    StreamAnalyticsJob,
)
from iotworkbench.components.base import AzureComponent, ComponentContext
from iotworkbench.components.devices import (
    BOARDS,
    AZ3166Device,
    BoardDevice,
    Esp32Device,
    IoTButtonDevice,
    RaspberryPiDevice,
    device_for_board,
)
from iotworkbench.components.factory import ComponentFactory

__all__ = [
    "AzureComponent", "ComponentContext", "ComponentFactory",
    "AzureFunctions", "CosmosDB", "IoTHub", "IoTHubDevice", "StreamAnalyticsJob",
    "BOARDS", "BoardDevice", "AZ3166Device", "Esp32Device", "IoTButtonDevice",
    "RaspberryPiDevice", "device_for_board",
]
