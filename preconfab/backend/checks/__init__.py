"""Validation of the models consumed by the generator."""

from preconfab.backend.checks.circuit_library_check import checkCircuitLibrary

__all__ = ["checkCircuitLibrary"]
