"""Parse VPR placement files.

Format reference: https://docs.verilogtorouting.org/en/latest/vpr/file_formats/#placement-file-format-place
"""

import re
from pathlib import Path

from preconfab.model.placement import BlockPlacement, DeviceGeometry, GridPlacementIndex
from preconfab.utils.exceptions import InvalidFileType

ARRAY_SIZE_RE = re.compile(r"Array size:\s*(\d+)\s*x\s*(\d+)")


def parsePlaceFile(path: Path) -> tuple[tuple[int, int], dict[str, BlockPlacement]]:
    """Read the logic array size and the block locations of a ``.place`` file.

    Returns
    -------
    tuple[tuple[int, int], dict[str, BlockPlacement]]
        The ``(W, H)`` size of the logic array and the placement of each block.

    Raises
    ------
    InvalidFileType
        If the array size is missing or a block line is malformed.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"File {path} does not exist")

    arraySize: tuple[int, int] | None = None
    placements: dict[str, BlockPlacement] = {}
    lines = path.read_text(encoding="utf-8").splitlines()
    for lineNo, line in enumerate(lines, start=1):
        if arraySize is None:
            if m := ARRAY_SIZE_RE.search(line):
                arraySize = (int(m.group(1)), int(m.group(2)))
            continue
        if not line.strip() or line.lstrip().startswith("#"):
            continue
        malformed = f"{path}:{lineNo}: malformed placement line '{line}'"
        parts = line.split()
        if len(parts) < 4:
            raise InvalidFileType(malformed)
        name, x, y, subblk = parts[:4]
        try:
            placements[name] = BlockPlacement(name, int(x), int(y), int(subblk))
        except ValueError:
            raise InvalidFileType(malformed) from None

    if arraySize is None:
        raise InvalidFileType(f"{path} does not declare an array size")
    return arraySize, placements


def loadGridPlacement(path: Path, ioCapacity: int = 1) -> GridPlacementIndex:
    """Build a placement index from a ``.place`` file.

    The device grid is the logic array surrounded by a ring of I/O tiles, each
    holding ``ioCapacity`` pads.
    """
    (width, height), placements = parsePlaceFile(path)
    geometry = DeviceGeometry(width + 2, height + 2, ioCapacity)
    return GridPlacementIndex(geometry, placements)
