"""Command line entry point of preconfab.

Generates the pre-configured wrapper of a fabric for a benchmark and validates
circuit libraries::

    preconfab generate fabric.yaml circuit_library.yaml bitstream.yaml counter.blif \\
        --place counter.place --io-capacity 8 --output counter_top_formal_verification.v
    preconfab check circuit_library.yaml
"""

import sys
from pathlib import Path
from typing import Annotated

import typer
from loguru import logger

from preconfab.backend.hdl.verilog_generator import VerilogCodeGenerator
from preconfab.core.context import PreconfigContext
from preconfab.utils.exceptions import CommandError, GenerationError, InvalidFileType
from preconfab.utils.settings import init_context

app = typer.Typer(
    name="preconfab",
    help="Generate pre-configured FPGA fabric netlists for formal verification.",
    no_args_is_help=True,
)

LOG_FORMAT = (
    "<level>{level: <8}</level> | <cyan>{name}</cyan> - <level>{message}</level>"
)


def setup_logger(verbose: bool) -> None:
    logger.remove()
    logger.add(sys.stderr, level="DEBUG" if verbose else "INFO", format=LOG_FORMAT)


@app.command()
def generate(
    fabric: Annotated[
        Path,
        typer.Argument(
            help="Fabric structural hierarchy (YAML)", exists=True, dir_okay=False
        ),
    ],
    circuit_lib: Annotated[
        Path,
        typer.Argument(help="Circuit library (YAML)", exists=True, dir_okay=False),
    ],
    bitstream: Annotated[
        Path,
        typer.Argument(
            help="Configuration hierarchy and bits (YAML)", exists=True, dir_okay=False
        ),
    ],
    benchmark: Annotated[
        Path,
        typer.Argument(
            help="Benchmark netlist (BLIF or YAML)", exists=True, dir_okay=False
        ),
    ],
    output: Annotated[Path, typer.Option("--output", "-o", help="Netlist to write")],
    pin_map: Annotated[
        Path | None,
        typer.Option(
            "--pin-map",
            help="Explicit pad to pin placement (YAML)",
            exists=True,
            dir_okay=False,
        ),
    ] = None,
    place: Annotated[
        Path | None,
        typer.Option(
            "--place", help="VPR placement file", exists=True, dir_okay=False
        ),
    ] = None,
    io_capacity: Annotated[
        int,
        typer.Option(
            "--io-capacity", min=1, help="Pads per I/O tile of the device grid"
        ),
    ] = 1,
    circuit_name: Annotated[
        str | None,
        typer.Option("--circuit-name", help="Override the benchmark name"),
    ] = None,
    check: Annotated[
        bool,
        typer.Option("--check/--no-check", help="Validate the circuit library first"),
    ] = True,
    project_dir: Annotated[
        Path | None,
        typer.Option(
            "--project-dir",
            help="Project directory holding the .preconfab/.env file",
        ),
    ] = None,
    verbose: Annotated[
        bool, typer.Option("--verbose", "-v", help="Show debug messages")
    ] = False,
) -> None:
    """Generate the pre-configured top module of a fabric for a benchmark."""
    setup_logger(verbose)
    try:
        if (pin_map is None) == (place is None):
            raise CommandError("Exactly one of --pin-map and --place must be given")

        settings = init_context(project_dir=project_dir)
        context = PreconfigContext(VerilogCodeGenerator(), settings)
        context.load_fabric(fabric)
        context.load_circuit_library(circuit_lib, check=check)
        context.load_bitstream(bitstream)
        context.load_benchmark(benchmark)
        if circuit_name:
            context.benchmark.name = circuit_name
        if place is not None:
            context.load_placement(place, io_capacity=io_capacity)
        else:
            context.load_placement(pin_map)
    except (CommandError, GenerationError, InvalidFileType) as e:
        logger.error(str(e))
        raise typer.Exit(code=1) from None

    result = context.generate(output)
    if not result.ok:
        raise typer.Exit(code=1)
    logger.info(
        f"{result.numPorts} ports, {result.numGlobalConnections} global connections, "
        f"{result.numPlacedIOs} placed I/Os, {result.numDefaultIOs} unused I/Os, "
        f"{result.numBitsLoaded} configuration bits"
    )


@app.command("check")
def check_library(
    circuit_lib: Annotated[
        Path,
        typer.Argument(help="Circuit library (YAML)", exists=True, dir_okay=False),
    ],
    verbose: Annotated[
        bool, typer.Option("--verbose", "-v", help="Show debug messages")
    ] = False,
) -> None:
    """Validate a circuit library."""
    from preconfab.backend.checks import checkCircuitLibrary
    from preconfab.parsers.yaml_parser import parseCircuitLibraryYAML

    setup_logger(verbose)
    try:
        checkCircuitLibrary(parseCircuitLibraryYAML(circuit_lib))
    except (GenerationError, InvalidFileType) as e:
        logger.error(str(e))
        raise typer.Exit(code=1) from None
    logger.info(f"Circuit library {circuit_lib} is valid")


def main() -> None:
    app()


if __name__ == "__main__":
    main()
