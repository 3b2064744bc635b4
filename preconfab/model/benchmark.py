"""Benchmark circuit model: the logical blocks mapped onto the fabric."""

from dataclasses import dataclass, field

from preconfab.model.define import LogicalBlockRole


@dataclass(frozen=True)
class LogicalBlock:
    """A logical block of the benchmark netlist.

    Attributes
    ----------
    name : str
        Block name. For pads this is the name of the benchmark I/O signal.
    role : LogicalBlockRole
        INPUT_PAD, OUTPUT_PAD or OTHER.
    isClock : bool
        Whether the block drives a clock net of the benchmark.
    """

    name: str
    role: LogicalBlockRole
    isClock: bool = False

    @property
    def isPad(self) -> bool:
        return self.role in (LogicalBlockRole.INPUT_PAD, LogicalBlockRole.OUTPUT_PAD)


@dataclass
class Benchmark:
    """A benchmark circuit: its name and its logical blocks in netlist order."""

    name: str
    blocks: list[LogicalBlock] = field(default_factory=list)

    def pads(self) -> list[LogicalBlock]:
        return [b for b in self.blocks if b.isPad]

    def clockPortNames(self) -> list[str]:
        """Return the names of the input pads acting as clocks, in netlist order."""
        return [
            b.name
            for b in self.blocks
            if b.role == LogicalBlockRole.INPUT_PAD and b.isClock
        ]
