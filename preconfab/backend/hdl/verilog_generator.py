from pathlib import Path

from preconfab.backend.hdl.code_generator import CodeGenerator
from preconfab.model.define import VerilogPortType
from preconfab.model.fabric import ModulePort


def verilogPortRange(lsb: int, msb: int) -> str:
    return f"[{lsb}:{msb}]"


def verilogConstant(values: list[int]) -> str:
    """Format a list of bits as a sized binary literal, first bit as MSB."""
    if not values:
        raise ValueError("Constant must have at least one bit")
    if any(v not in (0, 1) for v in values):
        raise ValueError(f"Constant bits must be 0 or 1, got {values}")
    return f"{len(values)}'b" + "".join(str(v) for v in values)


class VerilogCodeGenerator(CodeGenerator):
    """Verilog-2001 code generator."""

    def addComment(self, comment: str, indentLevel: int = 0) -> None:
        self._add(f"// ----- {comment} -----", indentLevel)

    def addFileHeader(self, title: str) -> None:
        self._add("//-------------------------------------------")
        self._add("//\tFPGA Synthesizable Verilog Netlist")
        self._add(f"//\tDescription: {title}")
        self._add("//-------------------------------------------")
        self._add("//----- Time scale -----")
        self._add("`timescale 1ns / 1ps")
        self.addNewLine()

    def addInclude(self, path: Path) -> None:
        self._add(f'`include "{Path(path).as_posix()}"')

    def addModuleHeader(
        self, name: str, ports: list[tuple[VerilogPortType, str, int]]
    ) -> None:
        """Add a module declaration with an ANSI style port list.

        Parameters
        ----------
        name : str
            Module name.
        ports : list[tuple[VerilogPortType, str, int]]
            (direction, name, width) of each port, in order.
        """
        self._add(f"module {name} (")
        decls = [
            f"{kind.value} {verilogPortRange(0, width - 1)} {port}"
            for kind, port, width in ports
        ]
        for i, decl in enumerate(decls):
            self._add(decl + ("," if i < len(decls) - 1 else ""))
        self._add(");")
        self.addNewLine()

    def addModuleEnd(self, name: str) -> None:
        self._add("endmodule")
        self._add(f"// ----- END Verilog module for {name} -----")
        self.addNewLine()

    def addWireDeclaration(self, port: ModulePort, indentLevel: int = 0) -> None:
        portRange = verilogPortRange(port.lsb, port.msb)
        self._add(f"{VerilogPortType.WIRE.value} {portRange} {port.name};", indentLevel)

    def addInstantiation(
        self,
        compName: str,
        compInsName: str,
        ports: list[ModulePort],
        indentLevel: int = 0,
    ) -> None:
        """Instantiate ``compName``, connecting each port to the wire of its name."""
        self._add(f"{compName} {compInsName} (", indentLevel)
        for i, port in enumerate(ports):
            sep = "," if i < len(ports) - 1 else ""
            portRange = verilogPortRange(port.lsb, port.msb)
            self._add(f".{port.name}({port.name}{portRange}){sep}", indentLevel + 1)
        self._add(");", indentLevel)

    def addAssignPin(
        self, target: str, pin: int, source: str, sourcePin: int, indentLevel: int = 0
    ) -> None:
        self._add(f"assign {target}[{pin}] = {source}[{sourcePin}];", indentLevel)

    def addAssignConstant(
        self, target: str, lsb: int, msb: int, values: list[int], indentLevel: int = 0
    ) -> None:
        if len(values) != msb - lsb + 1:
            portRange = verilogPortRange(lsb, msb)
            raise ValueError(f"{len(values)} values cannot drive {target}{portRange}")
        if lsb == msb:
            ref = f"{target}[{lsb}]"
        else:
            ref = f"{target}{verilogPortRange(lsb, msb)}"
        self._add(f"assign {ref} = {verilogConstant(values)};", indentLevel)
