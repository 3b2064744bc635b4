"""preconfab HDL exporters module.

This module contains the code generators and the exporter producing the
pre-configured fabric wrapper.

Components:
- code_generator: Base CodeGenerator class
- verilog_generator: Verilog HDL generation
- preconfig_top: Pre-configured top module generation (generatePreconfigTopModule)
"""

from preconfab.backend.hdl.code_generator import CodeGenerator
from preconfab.backend.hdl.preconfig_top import (
    GenerationResult,
    generatePreconfigTopModule,
)
from preconfab.backend.hdl.verilog_generator import VerilogCodeGenerator

__all__ = [
    "CodeGenerator",
    "VerilogCodeGenerator",
    "GenerationResult",
    "generatePreconfigTopModule",
]
