"""Core generation pipeline.

This module provides the pipeline producing a pre-configured fabric netlist:
- BenchmarkReader: Parses benchmark formats (BLIF, YAML) -> Benchmark
- PreconfigContext: Holds the loaded models and the writer

Example Pipeline
----------------
::

    from preconfab.core import PreconfigContext
    from preconfab.backend.hdl import VerilogCodeGenerator

    context = PreconfigContext(VerilogCodeGenerator())
    context.load_fabric("fabric.yaml")
    context.load_circuit_library("circuit_library.yaml")
    context.load_bitstream("bitstream.yaml")
    context.load_benchmark("counter.blif")  # Auto-uses BlifReader
    context.load_placement("counter.place")
    result = context.generate("counter_top_formal_verification.v")
"""

from preconfab.core.context import PreconfigContext
from preconfab.core.reader import (
    BenchmarkReader,
    BlifReader,
    YAMLBenchmarkReader,
    create_benchmark_reader,
)

__all__ = [
    "PreconfigContext",
    "BenchmarkReader",
    "BlifReader",
    "YAMLBenchmarkReader",
    "create_benchmark_reader",
]
