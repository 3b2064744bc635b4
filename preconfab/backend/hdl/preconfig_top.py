"""Generation of a pre-configured FPGA fabric wrapper for formal verification.

The wrapper instantiates the fabric top module once, drives its global ports from
the benchmark clock or from constants, wires the benchmark I/Os to the pads they are
placed on and forces every configuration memory to its bitstream value::

    Pre-configured FPGA fabric
                         +--------------------------------------------
                         |
                         |          FPGA fabric
                         |          +-------------------------------+
                         |  0/1---->|FPGA global ports              |
    benchmark_clock----->|--------->|FPGA_clock                     |
    benchmark_inputs---->|--------->|FPGA mapped I/Os               |
    benchmark_outputs<---|<---------|FPGA mapped I/Os               |
                         |  0/1---->|FPGA unmapped I/Os             |
    fabric_bitstream---->|--------->|Internal_configuration_ports   |
                         |          +-------------------------------+
                         +--------------------------------------------

The wrapper is not added to the module manager: it forces internal signals of the
fabric and only exists to match the port map of the benchmark.
"""

import time
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from loguru import logger

from preconfab.backend.hdl.code_generator import CodeGenerator
from preconfab.model.benchmark import Benchmark, LogicalBlock
from preconfab.model.bitstream import BitstreamManager, ConfigBit
from preconfab.model.circuit_library import CircuitPort
from preconfab.model.define import (
    CONFIGURATION_CHAIN_DATA_OUT_NAME,
    DEFAULT_SIGNAL_INIT_VALUE,
    FORMAL_VERIFICATION_TOP_MODULE_PORT_POSTFIX,
    FORMAL_VERIFICATION_TOP_MODULE_UUT_NAME,
    HIERARCHY_SEPARATOR,
    PAD_ROLE_TO_VERILOG_PORT,
    AttributeRole,
    PortCategory,
)
from preconfab.model.fabric import Module, ModuleManager
from preconfab.model.placement import PlacementIndex
from preconfab.utils.exceptions import (
    GenerationError,
    InvariantViolation,
    ModelLookupFailure,
    PlacementFailure,
)
from preconfab.utils.settings import PreconfabSettings, get_context


@dataclass
class GenerationResult:
    """Outcome of one generation request.

    Attributes
    ----------
    circuitName : str
        Name of the benchmark circuit.
    outputPath : Path
        Requested destination of the netlist. Only exists on disk when ``ok``.
    error : GenerationError | None
        The error that aborted the generation, if any.
    numPorts : int
        Number of ports of the generated module.
    numGlobalConnections : int
        Number of global port pins wired to a benchmark clock.
    numPlacedIOs : int
        Number of fabric I/O pins wired to a benchmark pad.
    numDefaultIOs : int
        Number of fabric I/O pins tied to the default value.
    numBitsLoaded : int
        Number of configuration bits forced.
    """

    circuitName: str
    outputPath: Path
    error: GenerationError | None = None
    numPorts: int = 0
    numGlobalConnections: int = 0
    numPlacedIOs: int = 0
    numDefaultIOs: int = 0
    numBitsLoaded: int = 0

    @property
    def ok(self) -> bool:
        return self.error is None


def benchmarkPortName(
    block: LogicalBlock, postfix: str = FORMAL_VERIFICATION_TOP_MODULE_PORT_POSTFIX
) -> str:
    return f"{block.name}{postfix}"


def genPreconfigTopModulePorts(
    writer: CodeGenerator,
    moduleName: str,
    blocks: Sequence[LogicalBlock],
    *,
    portPostfix: str = FORMAL_VERIFICATION_TOP_MODULE_PORT_POSTFIX,
) -> list[str]:
    """Declare the wrapper module with one 1-bit port per benchmark pad.

    Parameters
    ----------
    writer : CodeGenerator
        Output writer.
    moduleName : str
        Name of the wrapper module.
    blocks : Sequence[LogicalBlock]
        Logical blocks of the benchmark. Blocks other than pads are skipped.
    portPostfix : str, optional
        Suffix appended to the block name to form the port name.

    Returns
    -------
    list[str]
        The port names, in block order.
    """
    ports = [
        (PAD_ROLE_TO_VERILOG_PORT[b.role], benchmarkPortName(b, portPostfix), 1)
        for b in blocks
        if b.isPad
    ]
    writer.addModuleHeader(moduleName, ports)
    return [name for _, name, _ in ports]


def genInternalWires(
    writer: CodeGenerator, moduleManager: ModuleManager, topModule: Module
) -> None:
    """Declare one wire per global, I/O and configuration port of the fabric."""
    sections = [
        ("Global ports of FPGA fabric", PortCategory.GLOBAL),
        ("I/Os of FPGA fabric", PortCategory.IO_AGGREGATE),
        ("Configuration protocols of FPGA fabric", PortCategory.CONFIG_INPUT),
    ]
    for comment, category in sections:
        writer.addComment(comment)
        for port in moduleManager.portsByCategory(topModule, category):
            writer.addWireDeclaration(port)
        writer.addNewLine()


def genFabricInstance(
    writer: CodeGenerator,
    moduleManager: ModuleManager,
    topModule: Module,
    *,
    instanceName: str = FORMAL_VERIFICATION_TOP_MODULE_UUT_NAME,
) -> None:
    """Instantiate the fabric, each port wired to the internal wire of the same name."""
    writer.addComment("FPGA top-level module to be capsulated")
    writer.addInstantiation(
        moduleManager.moduleName(topModule), instanceName, topModule.ports
    )
    writer.addNewLine()


def genGlobalPortConnections(
    writer: CodeGenerator,
    moduleManager: ModuleManager,
    topModule: Module,
    globalPorts: Sequence[CircuitPort],
    benchmarkClockPortNames: Sequence[str],
    *,
    portPostfix: str = FORMAL_VERIFICATION_TOP_MODULE_PORT_POSTFIX,
) -> int:
    """Drive the global ports of the fabric.

    Global ports of the fabric carry no attribute, so each one is linked by name to
    the global circuit port holding its attributes. The operating clock (a clock
    which is not a programming clock) is wired pin by pin to every benchmark clock;
    every other global port is tied to the default value of its circuit port.

    Parameters
    ----------
    writer : CodeGenerator
        Output writer.
    moduleManager : ModuleManager
        Structural hierarchy of the fabric.
    topModule : Module
        Fabric top module.
    globalPorts : Sequence[CircuitPort]
        Global ports of the circuit library.
    benchmarkClockPortNames : Sequence[str]
        Names of the benchmark clock signals.
    portPostfix : str, optional
        Suffix of the wrapper ports.

    Returns
    -------
    int
        Number of clock connections emitted.

    Raises
    ------
    InvariantViolation
        If a fabric global port does not match exactly one circuit port, or if the
        widths of the matched ports differ.
    """
    byName: dict[str, list[CircuitPort]] = {}
    for cport in globalPorts:
        byName.setdefault(cport.name, []).append(cport)

    if len(benchmarkClockPortNames) > 1:
        logger.warning(
            f"Benchmark has {len(benchmarkClockPortNames)} clocks "
            f"({', '.join(benchmarkClockPortNames)}), "
            "each of them will be wired to every pin of the operating clock"
        )

    numConnections = 0
    writer.addComment("Begin Connect Global ports of FPGA top module")
    for port in moduleManager.portsByCategory(topModule, PortCategory.GLOBAL):
        matches = byName.get(port.name, [])
        if len(matches) != 1:
            raise InvariantViolation(
                f"Global port {port.name} of {topModule.name} matches "
                f"{len(matches)} circuit ports, expected exactly 1"
            )
        linked = matches[0]
        if linked.size != port.width:
            raise InvariantViolation(
                f"Global port {port.name} has width {port.width} "
                f"but its circuit port has size {linked.size}"
            )

        if linked.role == AttributeRole.CLOCK and not linked.isProg:
            if not benchmarkClockPortNames:
                logger.warning(
                    f"Operating clock {port.name} is left unconnected: "
                    "the benchmark has no clock"
                )
            for pin in port.pins():
                for clockName in benchmarkClockPortNames:
                    writer.addAssignPin(port.name, pin, f"{clockName}{portPostfix}", 0)
                    numConnections += 1
            logger.debug(
                f"Wired operating clock {port.name} to {list(benchmarkClockPortNames)}"
            )
            continue

        writer.addAssignConstant(
            port.name, port.lsb, port.msb, [linked.defaultValue] * port.width
        )
        logger.debug(f"Tied global port {port.name} to {linked.defaultValue}")

    writer.addComment("End Connect Global ports of FPGA top module")
    writer.addNewLine()
    return numConnections


def genIOConnections(
    writer: CodeGenerator,
    moduleManager: ModuleManager,
    topModule: Module,
    blocks: Sequence[LogicalBlock],
    placementIndex: PlacementIndex,
    *,
    portPostfix: str = FORMAL_VERIFICATION_TOP_MODULE_PORT_POSTFIX,
    defaultValue: int = DEFAULT_SIGNAL_INIT_VALUE,
) -> tuple[int, int]:
    """Wire the fabric I/O pins.

    Pins a benchmark pad is placed on are wired to the wrapper port of that pad, in
    block order. A clock pad without placement is skipped, as it is driven through
    the operating clock. All remaining pins are then tied to ``defaultValue`` in
    ascending pin order.

    Returns
    -------
    tuple[int, int]
        Number of placed pins and number of pins tied to the default value.

    Raises
    ------
    InvariantViolation
        If the fabric does not have exactly one I/O aggregate port.
    PlacementFailure
        If a non clock pad has no placement, a pad is placed outside the port, or
        two pads share a pin.
    """
    ioPorts = moduleManager.portsByCategory(topModule, PortCategory.IO_AGGREGATE)
    if len(ioPorts) != 1:
        raise InvariantViolation(
            f"{topModule.name} must have exactly one I/O port, found {len(ioPorts)}"
        )
    ioPort = ioPorts[0]

    used = [False] * ioPort.width

    writer.addComment("Link BLIF Benchmark I/Os to FPGA I/Os")
    numPlaced = 0
    for block in blocks:
        if not block.isPad:
            continue
        index = placementIndex.pinIndexOf(block)
        if index is None and block.isClock:
            # Reaches the fabric through the operating clock
            logger.debug(f"Benchmark clock {block.name} has no I/O placement, skipped")
            continue
        if index is None:
            raise PlacementFailure(f"Benchmark I/O {block.name} has no placement")
        if not 0 <= index < ioPort.width:
            raise PlacementFailure(
                f"Benchmark I/O {block.name} is placed on pin {index} "
                f"but {ioPort.name} only has {ioPort.width} pins"
            )
        if used[index]:
            raise PlacementFailure(
                f"Benchmark I/O {block.name} is placed on pin {index}, "
                "which is already used"
            )

        writer.addComment(
            f"Blif Benchmark inout {block.name} "
            f"is mapped to FPGA IOPAD {ioPort.name}[{index}]"
        )
        portName = benchmarkPortName(block, portPostfix)
        writer.addAssignPin(ioPort.name, index, portName, 0)
        used[index] = True
        numPlaced += 1
    writer.addNewLine()

    writer.addComment("Wire unused FPGA I/Os to constants")
    numDefault = 0
    for index, isUsed in enumerate(used):
        if isUsed:
            continue
        writer.addAssignConstant(ioPort.name, index, index, [defaultValue])
        numDefault += 1
    writer.addNewLine()

    logger.debug(f"{numPlaced} I/Os placed, {numDefault} tied to {defaultValue}")
    return numPlaced, numDefault


def configBitPath(
    bitstreamManager: BitstreamManager,
    bit: ConfigBit,
    topModuleName: str,
    *,
    instanceName: str = FORMAL_VERIFICATION_TOP_MODULE_UUT_NAME,
    configChainOutName: str = CONFIGURATION_CHAIN_DATA_OUT_NAME,
    separator: str = HIERARCHY_SEPARATOR,
) -> str:
    """Build the hierarchical name of the memory register holding ``bit``.

    The root of the configuration hierarchy is the fabric top module, which is
    replaced by the instance name of the fabric in the wrapper.

    Raises
    ------
    InvariantViolation
        If the root block is not named after the fabric top module.
    """
    hierarchy = bitstreamManager.ascendToRoot(bitstreamManager.parentBlock(bit))
    rootName = bitstreamManager.blockName(hierarchy[0])
    if rootName != topModuleName:
        raise InvariantViolation(
            f"Configuration hierarchy root {rootName} "
            f"does not match fabric top module {topModuleName}"
        )
    names = [instanceName]
    names += [bitstreamManager.blockName(b) for b in hierarchy[1:]]
    names.append(configChainOutName)
    return separator.join(names)


def genBitstreamLoading(
    writer: CodeGenerator,
    moduleManager: ModuleManager,
    topModule: Module,
    bitstreamManager: BitstreamManager,
    fabricBitstream: Sequence[ConfigBit],
    *,
    instanceName: str = FORMAL_VERIFICATION_TOP_MODULE_UUT_NAME,
    configChainOutName: str = CONFIGURATION_CHAIN_DATA_OUT_NAME,
    separator: str = HIERARCHY_SEPARATOR,
) -> int:
    """Force every configuration bit to its value, in bitstream order.

    Returns
    -------
    int
        Number of bits forced, always ``len(fabricBitstream)``.
    """
    topModuleName = moduleManager.moduleName(topModule)
    writer.addComment("Begin load bitstream to configuration memories")
    for bit in fabricBitstream:
        path = configBitPath(
            bitstreamManager,
            bit,
            topModuleName,
            instanceName=instanceName,
            configChainOutName=configChainOutName,
            separator=separator,
        )
        index = bitstreamManager.localIndex(bit)
        writer.addAssignConstant(path, index, index, [bitstreamManager.value(bit)])
    writer.addComment("End load bitstream to configuration memories")
    return len(fabricBitstream)


def generatePreconfigTopModule(
    writer: CodeGenerator,
    moduleManager: ModuleManager,
    bitstreamManager: BitstreamManager,
    fabricBitstream: Sequence[ConfigBit],
    globalPorts: Sequence[CircuitPort],
    benchmark: Benchmark,
    placementIndex: PlacementIndex,
    outputPath: Path,
    settings: PreconfabSettings | None = None,
) -> GenerationResult:
    """Generate the Verilog netlist of a pre-configured FPGA fabric.

    The whole netlist is built in memory and only written to ``outputPath`` once
    every stage succeeded. On failure nothing is written and any previous file at
    ``outputPath`` is removed.

    Parameters
    ----------
    writer : CodeGenerator
        Output writer. Its buffer is cleared before generation starts.
    moduleManager : ModuleManager
        Structural hierarchy of the fabric.
    bitstreamManager : BitstreamManager
        Configuration hierarchy of the fabric.
    fabricBitstream : Sequence[ConfigBit]
        Bits to force, in the order they are emitted.
    globalPorts : Sequence[CircuitPort]
        Global ports of the circuit library.
    benchmark : Benchmark
        Benchmark circuit mapped on the fabric.
    placementIndex : PlacementIndex
        Pin index of each benchmark pad.
    outputPath : Path
        Destination file.
    settings : PreconfabSettings | None, optional
        Naming settings. Defaults to the global context.

    Returns
    -------
    GenerationResult
        Statistics of the generation, or the error that aborted it.
    """
    if settings is None:
        settings = get_context()
    outputPath = Path(outputPath)
    circuitName = benchmark.name
    moduleName = f"{circuitName}{settings.module_postfix}"
    result = GenerationResult(circuitName, outputPath)

    logger.info(
        "Writing pre-configured FPGA top-level Verilog netlist "
        f"for design {circuitName}"
    )
    start = time.perf_counter()

    writer.discard()
    writer.outFileName = outputPath
    try:
        writer.addFileHeader(
            f"Verilog netlist for pre-configured FPGA fabric by design: {circuitName}"
        )
        for include in settings.include_files or []:
            writer.addInclude(include)
        writer.addNewLine()

        result.numPorts = len(
            genPreconfigTopModulePorts(
                writer, moduleName, benchmark.blocks, portPostfix=settings.port_postfix
            )
        )

        topModule = moduleManager.findModule(settings.fabric_top_name)
        if not moduleManager.isValid(topModule):
            raise ModelLookupFailure(
                f"Fabric top module {settings.fabric_top_name} not found"
            )

        genInternalWires(writer, moduleManager, topModule)
        genFabricInstance(
            writer, moduleManager, topModule, instanceName=settings.instance_name
        )

        result.numGlobalConnections = genGlobalPortConnections(
            writer,
            moduleManager,
            topModule,
            globalPorts,
            benchmark.clockPortNames(),
            portPostfix=settings.port_postfix,
        )
        result.numPlacedIOs, result.numDefaultIOs = genIOConnections(
            writer,
            moduleManager,
            topModule,
            benchmark.blocks,
            placementIndex,
            portPostfix=settings.port_postfix,
            defaultValue=settings.default_io_value,
        )
        result.numBitsLoaded = genBitstreamLoading(
            writer,
            moduleManager,
            topModule,
            bitstreamManager,
            fabricBitstream,
            instanceName=settings.instance_name,
            configChainOutName=settings.config_chain_out_name,
            separator=settings.hierarchy_separator,
        )
        writer.addModuleEnd(moduleName)
    except GenerationError as e:
        writer.discard()
        if outputPath.exists():
            logger.warning(f"Removing stale netlist {outputPath}")
            outputPath.unlink()
        logger.error(
            f"Failed to generate pre-configured netlist for {circuitName}: {e}"
        )
        result.error = e
        return result

    writer.writeToFile()
    logger.info(f"Output file: {outputPath}")
    logger.info(f"took {time.perf_counter() - start:.3f} seconds")
    return result
