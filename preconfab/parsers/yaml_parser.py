"""Parse the YAML descriptions of the fabric, circuit library, bitstream and pin map."""

from pathlib import Path
from typing import Any

import yaml
from loguru import logger
from packaging.version import InvalidVersion, Version

from preconfab.model.benchmark import Benchmark, LogicalBlock
from preconfab.model.bitstream import BitstreamManager, ConfigBlock
from preconfab.model.circuit_library import CircuitLibrary, CircuitModel, CircuitPort
from preconfab.model.define import (
    CircuitModelType,
    CircuitPortType,
    LogicalBlockRole,
    PortCategory,
)
from preconfab.model.fabric import Module, ModuleManager, ModulePort
from preconfab.model.placement import PinMapPlacementIndex
from preconfab.utils.exceptions import InvalidFileType

SUPPORTED_FORMAT_VERSION = Version("1.0")


def loadYAML(path: Path) -> dict[str, Any]:
    """Load a YAML model file and check its format version.

    Parameters
    ----------
    path : Path
        File to load.

    Returns
    -------
    dict[str, Any]
        The top level mapping of the document.

    Raises
    ------
    FileNotFoundError
        If the file does not exist.
    InvalidFileType
        If the file is not a YAML mapping or has an unsupported version.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"File {path} does not exist")
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise InvalidFileType(f"{path} is not a valid YAML file: {e}") from e
    if not isinstance(data, dict):
        raise InvalidFileType(f"{path} must contain a YAML mapping")

    if "version" in data:
        try:
            version = Version(str(data["version"]))
        except InvalidVersion as e:
            raise InvalidFileType(
                f"{path} has an invalid version {data['version']}"
            ) from e
        if version > SUPPORTED_FORMAT_VERSION:
            raise InvalidFileType(
                f"{path} uses format version {version}, "
                f"only up to {SUPPORTED_FORMAT_VERSION} is supported"
            )
    return data


def _enum(enumType: type, value: str, path: Path) -> Any:  # noqa: ANN401
    try:
        return enumType(str(value).strip().lower())
    except ValueError:
        valid = ", ".join(e.value for e in enumType)
        raise InvalidFileType(
            f"{path}: invalid value '{value}', expected one of {valid}"
        ) from None


def _require(entry: dict, key: str, path: Path) -> Any:  # noqa: ANN401
    if not isinstance(entry, dict):
        raise InvalidFileType(f"{path}: expected a mapping, got {entry!r}")
    if key not in entry:
        raise InvalidFileType(f"{path}: missing key '{key}' in {entry}")
    return entry[key]


def _list(entry: dict, key: str, path: Path) -> list:
    value = entry.get(key, [])
    if not isinstance(value, list):
        raise InvalidFileType(f"{path}: '{key}' must be a list, got {value!r}")
    return value


def _invalidEntry(
    path: Path, kind: str, entry: Any, e: Exception  # noqa: ANN401
) -> InvalidFileType:
    return InvalidFileType(f"{path}: invalid {kind} {entry!r}: {e}")


def parseFabricYAML(path: Path) -> ModuleManager:
    """Parse the structural hierarchy of a fabric.

    Expected format::

        modules:
          - name: fpga_top
            ports:
              - {name: clk, width: 1, category: global}
    """
    data = loadYAML(path)
    manager = ModuleManager()
    for entry in _list(data, "modules", path):
        module = Module(str(_require(entry, "name", path)))
        for p in _list(entry, "ports", path):
            try:
                port = ModulePort(
                    str(_require(p, "name", path)),
                    int(p.get("width", 1)),
                    _enum(PortCategory, _require(p, "category", path), path),
                )
            except (ValueError, TypeError) as e:
                raise _invalidEntry(path, "port", p, e) from e
            module.addPort(port)
        manager.addModule(module)
    logger.debug(f"Loaded {len(manager.modules)} modules from {path}")
    return manager


def _parseCircuitPort(p: dict, path: Path) -> CircuitPort:
    try:
        return CircuitPort(
            name=str(_require(p, "name", path)),
            type=_enum(CircuitPortType, _require(p, "type", path), path),
            size=int(p.get("size", 1)),
            isGlobal=bool(p.get("global", False)),
            isProg=bool(p.get("prog", False)),
            isSet=bool(p.get("set", False)),
            isReset=bool(p.get("reset", False)),
            isConfigEnable=bool(p.get("config_enable", False)),
            defaultValue=int(p.get("default_val", 0)),
        )
    except (ValueError, TypeError) as e:
        raise _invalidEntry(path, "circuit port", p, e) from e


def parseCircuitLibraryYAML(path: Path) -> CircuitLibrary:
    """Parse a circuit library.

    Expected format::

        circuit_models:
          - name: static_dff
            type: ff
            prefix: dff
            default: true
            ports:
              - {name: clk, type: clock, size: 1, global: true, default_val: 0}
    """
    data = loadYAML(path)
    library = CircuitLibrary()
    for entry in _list(data, "circuit_models", path):
        name = str(_require(entry, "name", path))
        ports = [_parseCircuitPort(p, path) for p in _list(entry, "ports", path)]
        library.addModel(
            CircuitModel(
                name=name,
                type=_enum(CircuitModelType, _require(entry, "type", path), path),
                prefix=str(entry.get("prefix", name)),
                isDefault=bool(entry.get("default", False)),
                ports=ports,
            )
        )
    logger.debug(f"Loaded {len(library.models)} circuit models from {path}")
    return library


def parseBitstreamYAML(path: Path) -> BitstreamManager:
    """Parse a configuration hierarchy and its bits.

    Expected format, with a single root block::

        blocks:
          - name: fpga_top
            children:
              - name: grid_clb_1_1
                bits: "0110"
    """
    data = loadYAML(path)
    roots = data.get("blocks", [])
    if not isinstance(roots, list) or len(roots) != 1:
        raise InvalidFileType(
            f"{path}: the configuration hierarchy must have exactly one root block"
        )

    manager = BitstreamManager()

    def addBlock(entry: dict, parent: ConfigBlock | None) -> None:
        block = manager.addBlock(str(_require(entry, "name", path)), parent)
        bits = str(entry.get("bits", "")).replace("_", "")
        for c in bits:
            if c not in "01":
                raise InvalidFileType(
                    f"{path}: block {block.name} has an invalid bit '{c}'"
                )
            manager.addBit(block, int(c))
        for child in _list(entry, "children", path):
            addBlock(child, block)

    addBlock(roots[0], None)
    logger.debug(f"Loaded {manager.numBits} configuration bits from {path}")
    return manager


def parsePinMapYAML(path: Path) -> PinMapPlacementIndex:
    """Parse an explicit pad to pin placement.

    Expected format::

        pins:
          in1: 1
          out1: 3
    """
    data = loadYAML(path)
    pins = data.get("pins", {})
    if not isinstance(pins, dict):
        raise InvalidFileType(
            f"{path}: 'pins' must be a mapping of pad names to pin indices"
        )
    pinMap: dict[str, int] = {}
    for name, pin in pins.items():
        if isinstance(pin, bool):
            raise InvalidFileType(f"{path}: invalid pin {pin!r} for pad {name}")
        try:
            pinMap[str(name)] = int(pin)
        except (ValueError, TypeError) as e:
            raise InvalidFileType(f"{path}: invalid pin {pin!r} for pad {name}") from e
    return PinMapPlacementIndex(pinMap)


def parseBenchmarkYAML(path: Path) -> Benchmark:
    """Parse a benchmark given as a list of logical blocks.

    Expected format::

        name: counter
        blocks:
          - {name: clk, type: input, clock: true}
          - {name: q, type: output}
    """
    data = loadYAML(path)
    blocks = [
        LogicalBlock(
            str(_require(b, "name", path)),
            _enum(LogicalBlockRole, b.get("type", "other"), path),
            bool(b.get("clock", False)),
        )
        for b in _list(data, "blocks", path)
    ]
    return Benchmark(str(data.get("name", Path(path).stem)), blocks)
