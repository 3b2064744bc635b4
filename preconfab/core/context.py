"""Generation context - holds the models and writer of a generation request.

Similar to request context in web frameworks, this holds the loaded models and the
writer throughout the generation pipeline. The exporter reads from it.
"""

from pathlib import Path

from loguru import logger

from preconfab.backend.hdl.code_generator import CodeGenerator
from preconfab.backend.hdl.preconfig_top import (
    GenerationResult,
    generatePreconfigTopModule,
)
from preconfab.core.reader import BenchmarkReader
from preconfab.model.benchmark import Benchmark
from preconfab.model.bitstream import BitstreamManager
from preconfab.model.circuit_library import CircuitLibrary
from preconfab.model.fabric import ModuleManager
from preconfab.model.placement import PlacementIndex
from preconfab.utils.settings import PreconfabSettings, get_context


class PreconfigContext:
    """Generation context - holds state for the generation pipeline.

    Parameters
    ----------
    writer : CodeGenerator
        Code generator producing the netlist
    settings : PreconfabSettings | None, optional
        Naming settings. Defaults to the global context.

    Attributes
    ----------
    writer : CodeGenerator
        Code generator for HDL output
    moduleManager : ModuleManager | None
        Structural hierarchy of the fabric
    circuitLibrary : CircuitLibrary | None
        Circuit library of the fabric
    bitstreamManager : BitstreamManager | None
        Configuration hierarchy of the fabric
    benchmark : Benchmark | None
        Benchmark mapped on the fabric
    placementIndex : PlacementIndex | None
        Pin index of the benchmark pads
    """

    def __init__(
        self, writer: CodeGenerator, settings: PreconfabSettings | None = None
    ) -> None:
        self.writer = writer
        self.settings = settings if settings is not None else get_context()
        self.moduleManager: ModuleManager | None = None
        self.circuitLibrary: CircuitLibrary | None = None
        self.bitstreamManager: BitstreamManager | None = None
        self.benchmark: Benchmark | None = None
        self.placementIndex: PlacementIndex | None = None

    def load_fabric(self, fabric_path: Path) -> None:
        from preconfab.parsers.yaml_parser import parseFabricYAML

        self.moduleManager = parseFabricYAML(Path(fabric_path))

    def load_circuit_library(self, library_path: Path, *, check: bool = True) -> None:
        """Load the circuit library, then check it unless ``check`` is False.

        Raises
        ------
        InvariantViolation
            If the checks fail
        """
        from preconfab.backend.checks import checkCircuitLibrary
        from preconfab.parsers.yaml_parser import parseCircuitLibraryYAML

        library = parseCircuitLibraryYAML(Path(library_path))
        if check:
            checkCircuitLibrary(library)
        self.circuitLibrary = library

    def load_bitstream(self, bitstream_path: Path) -> None:
        from preconfab.parsers.yaml_parser import parseBitstreamYAML

        self.bitstreamManager = parseBitstreamYAML(Path(bitstream_path))

    def load_benchmark(
        self, benchmark_path: Path, reader: BenchmarkReader | None = None
    ) -> None:
        """Load the benchmark using appropriate reader.

        Parameters
        ----------
        benchmark_path : Path
            Path to benchmark file
        reader : BenchmarkReader | None, optional
            Optional explicit reader. If None, auto-detects from file extension.

        Raises
        ------
        InvalidFileType
            If file format is not supported
        """
        if reader is None:
            from preconfab.core.reader import create_benchmark_reader

            reader = create_benchmark_reader(Path(benchmark_path))
        self.benchmark = reader.read(Path(benchmark_path))

    def load_placement(self, placement_path: Path, *, io_capacity: int = 1) -> None:
        """Load the placement of the benchmark pads.

        ``.place`` files are VPR placements resolved on the device grid, any other
        file is read as a YAML pin map.
        """
        placement_path = Path(placement_path)
        if placement_path.suffix.lower() == ".place":
            from preconfab.parsers.place_parser import loadGridPlacement

            self.placementIndex = loadGridPlacement(placement_path, io_capacity)
        else:
            from preconfab.parsers.yaml_parser import parsePinMapYAML

            self.placementIndex = parsePinMapYAML(placement_path)

    def set_output(self, output_path: Path) -> None:
        self.writer.outFileName = Path(output_path)

    def generate(self, output_path: Path | None = None) -> GenerationResult:
        """Generate the pre-configured netlist from the loaded models.

        Parameters
        ----------
        output_path : Path | None, optional
            Destination file. Defaults to the current output of the writer.

        Returns
        -------
        GenerationResult
            Statistics of the generation, or the error that aborted it.

        Raises
        ------
        RuntimeError
            If a model is missing or no output is set
        """
        missing = [
            name
            for name, value in (
                ("fabric", self.moduleManager),
                ("circuit library", self.circuitLibrary),
                ("bitstream", self.bitstreamManager),
                ("benchmark", self.benchmark),
                ("placement", self.placementIndex),
            )
            if value is None
        ]
        if missing:
            raise RuntimeError(f"Cannot generate, missing models: {', '.join(missing)}")
        if output_path is not None:
            self.set_output(output_path)
        if self.writer.outFileName is None:
            raise RuntimeError("No output file set")

        logger.debug(
            f"Generating {self.writer.outFileName} "
            f"for benchmark {self.benchmark.name}"
        )
        return generatePreconfigTopModule(
            self.writer,
            self.moduleManager,
            self.bitstreamManager,
            self.bitstreamManager.fabricBitstream(),
            self.circuitLibrary.globalPorts(),
            self.benchmark,
            self.placementIndex,
            self.writer.outFileName,
            self.settings,
        )
