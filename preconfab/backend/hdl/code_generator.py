"""Base class of the HDL code generators.

Generated lines are buffered in memory and only reach the disk when
``writeToFile`` is called, so an aborted generation never leaves a truncated file.
"""

import abc
import os
import tempfile
from pathlib import Path

from loguru import logger

from preconfab.model.define import VerilogPortType
from preconfab.model.fabric import ModulePort


class CodeGenerator(abc.ABC):
    """Buffered HDL writer.

    Attributes
    ----------
    outFileName : Path | None
        Destination of the generated code.
    """

    def __init__(self) -> None:
        self._content: list[str] = []
        self.outFileName: Path | None = None

    @property
    def content(self) -> str:
        return "\n".join(self._content) + "\n" if self._content else ""

    def _add(self, line: str, indentLevel: int = 0) -> None:
        self._content.append("\t" * indentLevel + line if line else "")

    def addNewLine(self) -> None:
        self._add("")

    def discard(self) -> None:
        """Drop everything generated so far."""
        self._content = []

    def writeToFile(self) -> Path:
        """Write the buffered content to ``outFileName`` and clear the buffer.

        The content goes to a temporary file next to the destination, which is then
        renamed over it.

        Returns
        -------
        Path
            The written file.

        Raises
        ------
        ValueError
            If no output file has been set.
        """
        if self.outFileName is None:
            raise ValueError("Output file name is not set")
        path = Path(self.outFileName)
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmpName = tempfile.mkstemp(
            dir=path.parent, prefix=f".{path.name}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8", newline="\n") as f:
                f.write(self.content)
            os.replace(tmpName, path)
        except BaseException:
            Path(tmpName).unlink(missing_ok=True)
            raise
        logger.debug(f"Wrote {len(self._content)} lines to {path}")
        self._content = []
        return path

    @abc.abstractmethod
    def addComment(self, comment: str, indentLevel: int = 0) -> None:
        pass

    @abc.abstractmethod
    def addFileHeader(self, title: str) -> None:
        pass

    @abc.abstractmethod
    def addInclude(self, path: Path) -> None:
        pass

    @abc.abstractmethod
    def addModuleHeader(
        self, name: str, ports: list[tuple[VerilogPortType, str, int]]
    ) -> None:
        pass

    @abc.abstractmethod
    def addModuleEnd(self, name: str) -> None:
        pass

    @abc.abstractmethod
    def addWireDeclaration(self, port: ModulePort, indentLevel: int = 0) -> None:
        pass

    @abc.abstractmethod
    def addInstantiation(
        self,
        compName: str,
        compInsName: str,
        ports: list[ModulePort],
        indentLevel: int = 0,
    ) -> None:
        pass

    @abc.abstractmethod
    def addAssignPin(
        self, target: str, pin: int, source: str, sourcePin: int, indentLevel: int = 0
    ) -> None:
        pass

    @abc.abstractmethod
    def addAssignConstant(
        self, target: str, lsb: int, msb: int, values: list[int], indentLevel: int = 0
    ) -> None:
        pass
