"""Benchmark input readers - parse the various netlist formats into Benchmark objects.

The generator only needs the logical I/Os of a benchmark, which can come either
from the synthesized BLIF netlist or from a YAML listing of its logical blocks.
"""

from abc import ABC, abstractmethod
from pathlib import Path

from preconfab.model.benchmark import Benchmark
from preconfab.utils.exceptions import InvalidFileType


class BenchmarkReader(ABC):
    """Abstract base for benchmark input parsers.

    Follows strategy pattern - allows switching between input formats
    without changing the rest of the pipeline.
    """

    @abstractmethod
    def read(self, path: Path) -> Benchmark:
        """Parse input file and return Benchmark object.

        Parameters
        ----------
        path : Path
            Path to benchmark file

        Returns
        -------
        Benchmark
            Parsed benchmark
        """
        ...


class BlifReader(BenchmarkReader):
    """BLIF benchmark reader."""

    def read(self, path: Path) -> Benchmark:
        from preconfab.parsers.blif_parser import parseBlif

        return parseBlif(path)


class YAMLBenchmarkReader(BenchmarkReader):
    """YAML logical block listing reader."""

    def read(self, path: Path) -> Benchmark:
        from preconfab.parsers.yaml_parser import parseBenchmarkYAML

        return parseBenchmarkYAML(path)


def create_benchmark_reader(path: Path) -> BenchmarkReader:
    """Create appropriate reader based on file extension.

    Parameters
    ----------
    path : Path
        Path to benchmark file

    Returns
    -------
    BenchmarkReader
        Appropriate reader instance

    Raises
    ------
    InvalidFileType
        If the extension is not supported
    """
    suffix = Path(path).suffix.lower()
    if suffix == ".blif":
        return BlifReader()
    if suffix in (".yaml", ".yml"):
        return YAMLBenchmarkReader()
    raise InvalidFileType(f"Unsupported benchmark file type {suffix!r} for {path}")
