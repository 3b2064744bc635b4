"""preconfab - pre-configured FPGA fabric netlists for formal verification.

Builds a Verilog wrapper that instantiates a fabric, connects it to the I/Os of a
benchmark circuit and forces every configuration memory to its bitstream value,
so that the fabric can be checked for equivalence against the benchmark.
"""

from preconfab.backend.hdl import (
    CodeGenerator,
    GenerationResult,
    VerilogCodeGenerator,
    generatePreconfigTopModule,
)
from preconfab.core import PreconfigContext

__all__ = [
    "CodeGenerator",
    "VerilogCodeGenerator",
    "GenerationResult",
    "generatePreconfigTopModule",
    "PreconfigContext",
]
