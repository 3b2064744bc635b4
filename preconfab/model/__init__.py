"""preconfab data model module.

This module contains the models consumed by the pre-configured top module
generator. They are produced by upstream tools and are read-only to the generator.

The model includes:
- define: Common enumerations and naming constants
- fabric: Structural hierarchy of the fabric (modules and typed ports)
- circuit_library: Circuit models and the electrical attributes of their ports
- bitstream: Configuration hierarchy and configuration bits
- benchmark: Logical blocks of the benchmark circuit
- placement: Mapping of benchmark pads to fabric I/O pins
"""

from preconfab.model.benchmark import Benchmark, LogicalBlock
from preconfab.model.bitstream import BitstreamManager, ConfigBit, ConfigBlock
from preconfab.model.circuit_library import CircuitLibrary, CircuitModel, CircuitPort
from preconfab.model.fabric import Module, ModuleManager, ModulePort
from preconfab.model.placement import (
    BlockPlacement,
    DeviceGeometry,
    GridPlacementIndex,
    PinMapPlacementIndex,
    PlacementIndex,
)

__all__ = [
    "Benchmark",
    "LogicalBlock",
    "BitstreamManager",
    "ConfigBit",
    "ConfigBlock",
    "CircuitLibrary",
    "CircuitModel",
    "CircuitPort",
    "Module",
    "ModuleManager",
    "ModulePort",
    "BlockPlacement",
    "DeviceGeometry",
    "GridPlacementIndex",
    "PinMapPlacementIndex",
    "PlacementIndex",
]
