"""Placement index: maps benchmark pads to pins of the fabric I/O aggregate port.

Follows the strategy pattern so that the generator does not care whether the pin
indices come from an explicit table or are derived from a placed device grid.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass

from preconfab.model.benchmark import LogicalBlock
from preconfab.model.define import LogicalBlockRole
from preconfab.utils.exceptions import PlacementFailure


class PlacementIndex(ABC):
    """Abstract lookup of the physical pin a benchmark pad is placed on."""

    @abstractmethod
    def pinIndexOf(self, block: LogicalBlock) -> int | None:
        """Return the pin index of ``block`` in the I/O aggregate port.

        Parameters
        ----------
        block : LogicalBlock
            A pad of the benchmark.

        Returns
        -------
        int | None
            The pin index, or None when the block has no placement.
        """
        ...


class PinMapPlacementIndex(PlacementIndex):
    """Placement given as an explicit pad name to pin index table."""

    def __init__(self, pins: dict[str, int]) -> None:
        self.pins = dict(pins)

    def pinIndexOf(self, block: LogicalBlock) -> int | None:
        return self.pins.get(block.name)


@dataclass(frozen=True)
class BlockPlacement:
    """Location of a placed block on the device grid."""

    name: str
    x: int
    y: int
    subblk: int = 0


@dataclass(frozen=True)
class DeviceGeometry:
    """Size of the device grid and capacity of its I/O tiles.

    The grid includes the I/O ring, so a device with a ``W x H`` logic array has
    ``width = W + 2`` and ``height = H + 2``. I/O tiles are the perimeter tiles
    except the four corners.
    """

    width: int
    height: int
    ioCapacity: int = 1

    def isIOTile(self, x: int, y: int) -> bool:
        if not (0 <= x < self.width and 0 <= y < self.height):
            return False
        onBorderX = x in (0, self.width - 1)
        onBorderY = y in (0, self.height - 1)
        return onBorderX != onBorderY

    def ioTiles(self) -> list[tuple[int, int]]:
        """Return the I/O tiles in pin order: x ascending, then y ascending."""
        return [
            (x, y)
            for x in range(self.width)
            for y in range(self.height)
            if self.isIOTile(x, y)
        ]

    @property
    def numIOs(self) -> int:
        return len(self.ioTiles()) * self.ioCapacity


class GridPlacementIndex(PlacementIndex):
    """Derive pin indices from block locations on the device grid.

    Pins are numbered by scanning the I/O tiles column by column and accumulating
    their capacity; a pad on sub-block ``z`` of a tile gets the tile offset plus
    ``z``. VPR names the block of an output pad ``out:<name>``; the plain name is
    used when no such block exists.
    """

    OUTPUT_PAD_PREFIX = "out:"

    def __init__(
        self, geometry: DeviceGeometry, placements: dict[str, BlockPlacement]
    ) -> None:
        self.geometry = geometry
        self.placements = placements
        self._tileOffsets: dict[tuple[int, int], int] = {
            tile: i * geometry.ioCapacity for i, tile in enumerate(geometry.ioTiles())
        }

    def placementOf(self, block: LogicalBlock) -> BlockPlacement | None:
        """Return the grid location of a pad, or None when it is not placed."""
        if block.role == LogicalBlockRole.OUTPUT_PAD:
            loc = self.placements.get(f"{self.OUTPUT_PAD_PREFIX}{block.name}")
            if loc is not None:
                return loc
        return self.placements.get(block.name)

    def pinIndexOf(self, block: LogicalBlock) -> int | None:
        """Return the pin of a pad, or None when the pad is absent from the placement.

        Raises
        ------
        PlacementFailure
            If the pad is placed on a tile that is not an I/O tile, or on a
            sub-block beyond the capacity of its tile.
        """
        if not block.isPad:
            return None
        loc = self.placementOf(block)
        if loc is None:
            return None
        offset = self._tileOffsets.get((loc.x, loc.y))
        if offset is None:
            raise PlacementFailure(
                f"Benchmark I/O {block.name} is placed on ({loc.x}, {loc.y}), "
                "which is not an I/O tile"
            )
        if not 0 <= loc.subblk < self.geometry.ioCapacity:
            raise PlacementFailure(
                f"Benchmark I/O {block.name} is placed on sub-block {loc.subblk} "
                f"of ({loc.x}, {loc.y}), "
                f"but I/O tiles hold {self.geometry.ioCapacity} pads"
            )
        return offset + loc.subblk
