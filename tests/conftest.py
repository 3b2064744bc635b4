"""Shared fixtures: the models of a small fabric and of a benchmark mapped on it."""

from collections.abc import Callable, Generator
from pathlib import Path

import pytest
import yaml
from loguru import logger

from preconfab.backend.hdl.verilog_generator import VerilogCodeGenerator
from preconfab.model.benchmark import Benchmark, LogicalBlock
from preconfab.model.bitstream import BitstreamManager
from preconfab.model.circuit_library import CircuitLibrary, CircuitModel, CircuitPort
from preconfab.model.define import (
    CircuitModelType,
    CircuitPortType,
    LogicalBlockRole,
    PortCategory,
)
from preconfab.model.fabric import Module, ModuleManager, ModulePort
from preconfab.model.placement import PinMapPlacementIndex
from preconfab.utils.settings import PreconfabSettings, init_context, reset_context


@pytest.fixture(autouse=True)
def settings(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> Generator[PreconfabSettings]:
    """Initialize the settings context in a temporary project directory."""
    for key in (
        "PRECONFAB_PORT_POSTFIX",
        "PRECONFAB_INSTANCE_NAME",
        "PRECONFAB_INCLUDE_FILES",
        "PRECONFAB_DEFAULT_IO_VALUE",
    ):
        monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)
    project_dir = tmp_path / "project"
    project_dir.mkdir()
    yield init_context(project_dir)
    reset_context()


@pytest.fixture
def caplog(caplog: pytest.LogCaptureFixture) -> Generator[pytest.LogCaptureFixture]:
    """Route loguru records to the pytest log capture."""
    handler_id = logger.add(caplog.handler, format="{message}", level=0)
    yield caplog
    logger.remove(handler_id)


@pytest.fixture
def writer() -> VerilogCodeGenerator:
    return VerilogCodeGenerator()


@pytest.fixture
def module_manager() -> ModuleManager:
    """Fabric with a clock, a reset, four I/O pins and a configuration chain head."""
    manager = ModuleManager()
    manager.addModule(
        Module(
            "fpga_top",
            [
                ModulePort("clk", 1, PortCategory.GLOBAL),
                ModulePort("rst", 1, PortCategory.GLOBAL),
                ModulePort("gfpga_pad", 4, PortCategory.IO_AGGREGATE),
                ModulePort("ccff_head", 1, PortCategory.CONFIG_INPUT),
            ],
        )
    )
    return manager


@pytest.fixture
def top_module(module_manager: ModuleManager) -> Module:
    return module_manager.findModule("fpga_top")


@pytest.fixture
def circuit_library() -> CircuitLibrary:
    """A library passing every circuit library check, with clk and rst as globals."""
    return CircuitLibrary(
        [
            CircuitModel(
                "iopad",
                CircuitModelType.IOPAD,
                "iopad",
                True,
                [
                    CircuitPort("pad_in", CircuitPortType.INPUT),
                    CircuitPort("pad_out", CircuitPortType.OUTPUT),
                    CircuitPort("pad", CircuitPortType.INOUT),
                    CircuitPort("en", CircuitPortType.SRAM),
                ],
            ),
            CircuitModel(
                "mux_tree",
                CircuitModelType.MUX,
                "mux",
                True,
                [
                    CircuitPort("in", CircuitPortType.INPUT, 4),
                    CircuitPort("out", CircuitPortType.OUTPUT),
                    CircuitPort("sram", CircuitPortType.SRAM, 2),
                ],
            ),
            CircuitModel("chan_segment", CircuitModelType.CHAN_WIRE, "track", True),
            CircuitModel("direct", CircuitModelType.WIRE, "direct", True),
            CircuitModel(
                "dff",
                CircuitModelType.FF,
                "dff",
                True,
                [
                    CircuitPort("clk", CircuitPortType.CLOCK, isGlobal=True),
                    CircuitPort(
                        "rst", CircuitPortType.INPUT, isGlobal=True, isReset=True
                    ),
                    CircuitPort("D", CircuitPortType.INPUT),
                    CircuitPort("Q", CircuitPortType.OUTPUT),
                ],
            ),
            CircuitModel(
                "ccff",
                CircuitModelType.SCFF,
                "ccff",
                True,
                [
                    CircuitPort(
                        "prog_clk", CircuitPortType.CLOCK, isGlobal=True, isProg=True
                    ),
                    CircuitPort("D", CircuitPortType.INPUT),
                    CircuitPort("Q", CircuitPortType.OUTPUT),
                ],
            ),
        ]
    )


@pytest.fixture
def global_ports() -> list[CircuitPort]:
    """The operating clock and an active high reset defaulting to 0."""
    return [
        CircuitPort("clk", CircuitPortType.CLOCK, isGlobal=True),
        CircuitPort(
            "rst",
            CircuitPortType.INPUT,
            isGlobal=True,
            isReset=True,
            defaultValue=0,
        ),
    ]


@pytest.fixture
def benchmark() -> Benchmark:
    return Benchmark(
        "test_design",
        [
            LogicalBlock("in1", LogicalBlockRole.INPUT_PAD),
            LogicalBlock("clk", LogicalBlockRole.INPUT_PAD, isClock=True),
            LogicalBlock("lut_n1", LogicalBlockRole.OTHER),
            LogicalBlock("out1", LogicalBlockRole.OUTPUT_PAD),
        ],
    )


@pytest.fixture
def placement() -> PinMapPlacementIndex:
    return PinMapPlacementIndex({"in1": 1, "out1": 3})


@pytest.fixture
def bitstream_manager() -> BitstreamManager:
    """Hierarchy fpga_top -> grid_clb_1_1 -> lut4_0 and fpga_top -> cbx_1_0.

    Bits in loading order: grid_clb_1_1 [0, 1, 1], lut4_0 [1], cbx_1_0 [0].
    """
    manager = BitstreamManager()
    root = manager.addBlock("fpga_top")
    clb = manager.addBlock("grid_clb_1_1", root)
    for v in (0, 1, 1):
        manager.addBit(clb, v)
    lut = manager.addBlock("lut4_0", clb)
    manager.addBit(lut, 1)
    cbx = manager.addBlock("cbx_1_0", root)
    manager.addBit(cbx, 0)
    return manager


@pytest.fixture
def write_yaml(tmp_path: Path) -> Callable[[str, dict], Path]:
    """Dump a mapping to a YAML file in the temporary directory."""

    def _write(name: str, data: dict) -> Path:
        path = tmp_path / name
        path.write_text(yaml.safe_dump(data, sort_keys=False))
        return path

    return _write


@pytest.fixture
def scenario_files(write_yaml: Callable[[str, dict], Path]) -> dict[str, Path]:
    """The fabric, circuit library, bitstream, benchmark and pin map as YAML files."""
    return {
        "fabric": write_yaml(
            "fabric.yaml",
            {
                "version": "1.0",
                "modules": [
                    {
                        "name": "fpga_top",
                        "ports": [
                            {"name": "clk", "width": 1, "category": "global"},
                            {"name": "rst", "width": 1, "category": "global"},
                            {"name": "gfpga_pad", "width": 4, "category": "io"},
                            {
                                "name": "ccff_head",
                                "width": 1,
                                "category": "config_input",
                            },
                        ],
                    }
                ],
            },
        ),
        "circuit_lib": write_yaml(
            "circuit_library.yaml",
            {
                "circuit_models": [
                    {
                        "name": "iopad",
                        "type": "iopad",
                        "ports": [
                            {"name": "pad_in", "type": "input"},
                            {"name": "pad_out", "type": "output"},
                            {"name": "pad", "type": "inout"},
                            {"name": "en", "type": "sram"},
                        ],
                    },
                    {
                        "name": "mux_tree",
                        "type": "mux",
                        "default": True,
                        "ports": [
                            {"name": "in", "type": "input", "size": 4},
                            {"name": "out", "type": "output"},
                            {"name": "sram", "type": "sram", "size": 2},
                        ],
                    },
                    {"name": "chan_segment", "type": "chan_wire", "default": True},
                    {"name": "direct", "type": "wire", "default": True},
                    {
                        "name": "ccff",
                        "type": "scff",
                        "ports": [
                            {"name": "clk", "type": "clock", "global": True},
                            {
                                "name": "rst",
                                "type": "input",
                                "global": True,
                                "reset": True,
                                "default_val": 0,
                            },
                            {"name": "D", "type": "input"},
                            {"name": "Q", "type": "output"},
                        ],
                    },
                ]
            },
        ),
        "bitstream": write_yaml(
            "bitstream.yaml",
            {
                "blocks": [
                    {
                        "name": "fpga_top",
                        "children": [
                            {
                                "name": "grid_clb_1_1",
                                "bits": "011",
                                "children": [{"name": "lut4_0", "bits": "1"}],
                            },
                            {"name": "cbx_1_0", "bits": "0"},
                        ],
                    }
                ]
            },
        ),
        "benchmark": write_yaml(
            "test_design.yaml",
            {
                "name": "test_design",
                "blocks": [
                    {"name": "in1", "type": "input"},
                    {"name": "clk", "type": "input", "clock": True},
                    {"name": "out1", "type": "output"},
                ],
            },
        ),
        "pin_map": write_yaml("pins.yaml", {"pins": {"in1": 1, "out1": 3}}),
    }
