"""Extract the logical I/Os of a BLIF benchmark."""

from pathlib import Path

from loguru import logger

from preconfab.model.benchmark import Benchmark, LogicalBlock
from preconfab.model.define import LogicalBlockRole
from preconfab.utils.exceptions import InvalidFileType


def _logicalLines(text: str) -> list[list[str]]:
    """Split BLIF text into token lists.

    ``\\`` continuations are joined and comments are dropped.
    """
    lines: list[list[str]] = []
    pending = ""
    for raw in text.splitlines():
        line = raw.split("#", 1)[0].rstrip()
        if line.endswith("\\"):
            pending += line[:-1] + " "
            continue
        line = pending + line
        pending = ""
        if line.strip():
            lines.append(line.split())
    if pending.strip():
        lines.append(pending.split())
    return lines


def parseBlif(path: Path) -> Benchmark:
    """Parse the first model of a BLIF file into a benchmark.

    Inputs become INPUT_PAD blocks and outputs OUTPUT_PAD blocks, inputs first, each
    in declaration order. An input driving the control of a ``.latch`` is a clock.

    Parameters
    ----------
    path : Path
        BLIF file.

    Returns
    -------
    Benchmark
        The benchmark, named after its ``.model``.

    Raises
    ------
    InvalidFileType
        If the file has no ``.model``.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"File {path} does not exist")

    name: str | None = None
    inputs: list[str] = []
    outputs: list[str] = []
    clocks: set[str] = set()
    for tokens in _logicalLines(path.read_text(encoding="utf-8")):
        keyword = tokens[0]
        if keyword == ".model":
            if name is not None:
                break
            name = tokens[1] if len(tokens) > 1 else path.stem
        elif keyword == ".inputs":
            inputs.extend(tokens[1:])
        elif keyword == ".outputs":
            outputs.extend(tokens[1:])
        elif keyword == ".latch" and len(tokens) >= 5:
            # .latch <input> <output> <type> <control> [<init>]
            clocks.add(tokens[4])
        elif keyword == ".end":
            break

    if name is None:
        raise InvalidFileType(f"{path} does not contain a .model")

    blocks = [LogicalBlock(i, LogicalBlockRole.INPUT_PAD, i in clocks) for i in inputs]
    blocks += [LogicalBlock(o, LogicalBlockRole.OUTPUT_PAD) for o in outputs]
    logger.debug(
        f"Benchmark {name}: {len(inputs)} inputs, {len(outputs)} outputs, "
        f"clocks {sorted(clocks)}"
    )
    return Benchmark(name, blocks)
