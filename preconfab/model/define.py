"""Enumerations and naming constants shared by the preconfab data model."""

from enum import Enum

FABRIC_TOP_MODULE_NAME = "fpga_top"
FORMAL_VERIFICATION_TOP_MODULE_POSTFIX = "_top_formal_verification"
FORMAL_VERIFICATION_TOP_MODULE_PORT_POSTFIX = "_v"
FORMAL_VERIFICATION_TOP_MODULE_UUT_NAME = "U0_formal_verification"
CONFIGURATION_CHAIN_DATA_OUT_NAME = "mem_out"
HIERARCHY_SEPARATOR = "."
DEFAULT_SIGNAL_INIT_VALUE = 0

DEFINES_VERILOG_FILE_NAME = "fpga_defines.v"
DEFINES_VERILOG_SIMULATION_FILE_NAME = "define_simulation.v"


class PortCategory(Enum):
    """Category of a port on a structural module.

    GLOBAL ports are shared across the whole fabric (clocks, resets, enables),
    IO_AGGREGATE is the multi-bit port carrying all physical user I/Os and
    CONFIG_INPUT ports belong to the configuration protocol.
    """

    GLOBAL = "global"
    IO_AGGREGATE = "io"
    CONFIG_INPUT = "config_input"


class LogicalBlockRole(Enum):
    """Role of a logical block of the benchmark netlist."""

    INPUT_PAD = "input"
    OUTPUT_PAD = "output"
    OTHER = "other"


class AttributeRole(Enum):
    """Electrical role of a circuit port, as seen by the global port resolver."""

    CLOCK = "clock"
    SET = "set"
    RESET = "reset"
    CONFIG_ENABLE = "config_enable"
    OTHER = "other"


class CircuitPortType(Enum):
    """Port types of a circuit model."""

    INPUT = "input"
    OUTPUT = "output"
    INOUT = "inout"
    CLOCK = "clock"
    SRAM = "sram"
    BL = "bl"
    WL = "wl"


class CircuitModelType(Enum):
    """Circuit model types found in a circuit library."""

    CHAN_WIRE = "chan_wire"
    WIRE = "wire"
    MUX = "mux"
    LUT = "lut"
    FF = "ff"
    SRAM = "sram"
    HARDLOGIC = "hard_logic"
    SCFF = "scff"
    IOPAD = "iopad"
    INVBUF = "inv_buf"
    PASSGATE = "pass_gate"
    GATE = "gate"


class VerilogPortType(Enum):
    """Keyword used when a port is declared in Verilog."""

    INPUT = "input"
    OUTPUT = "output"
    INOUT = "inout"
    WIRE = "wire"
    REG = "reg"


# Direction of the verification-facing port generated for each pad role.
PAD_ROLE_TO_VERILOG_PORT: dict[LogicalBlockRole, VerilogPortType] = {
    LogicalBlockRole.INPUT_PAD: VerilogPortType.INPUT,
    LogicalBlockRole.OUTPUT_PAD: VerilogPortType.OUTPUT,
}
