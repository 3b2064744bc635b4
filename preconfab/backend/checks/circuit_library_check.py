"""Fundamental checks of a circuit library.

Run before generation. The generator relies on the global ports of the library
being unique by name, which these checks guarantee, together with the presence of
the circuit models every fabric needs.
"""

from loguru import logger

from preconfab.model.circuit_library import CircuitLibrary, CircuitModel, CircuitPort
from preconfab.model.define import CircuitModelType, CircuitPortType
from preconfab.utils.exceptions import InvariantViolation

REQUIRED_PORT_TYPES: dict[CircuitModelType, list[CircuitPortType]] = {
    CircuitModelType.IOPAD: [
        CircuitPortType.INPUT,
        CircuitPortType.OUTPUT,
        CircuitPortType.INOUT,
        CircuitPortType.SRAM,
    ],
    CircuitModelType.MUX: [
        CircuitPortType.INPUT,
        CircuitPortType.OUTPUT,
        CircuitPortType.SRAM,
    ],
    CircuitModelType.SRAM: [CircuitPortType.INPUT, CircuitPortType.OUTPUT],
    CircuitModelType.SCFF: [
        CircuitPortType.CLOCK,
        CircuitPortType.INPUT,
        CircuitPortType.OUTPUT,
    ],
    CircuitModelType.FF: [
        CircuitPortType.CLOCK,
        CircuitPortType.INPUT,
        CircuitPortType.OUTPUT,
    ],
    CircuitModelType.LUT: [
        CircuitPortType.SRAM,
        CircuitPortType.INPUT,
        CircuitPortType.OUTPUT,
    ],
}

REQUIRED_MODEL_TYPES = [CircuitModelType.IOPAD, CircuitModelType.MUX]

REQUIRED_DEFAULT_MODEL_TYPES = [
    CircuitModelType.MUX,
    CircuitModelType.CHAN_WIRE,
    CircuitModelType.WIRE,
]


def checkUniqueNames(library: CircuitLibrary) -> int:
    numErr = 0
    seen: dict[str, int] = {}
    for i, model in enumerate(library.models):
        if model.name in seen:
            logger.error(
                f"Circuit model(index={seen[model.name]}) and (index={i}) "
                f"share the same name {model.name}"
            )
            numErr += 1
        else:
            seen[model.name] = i
    return numErr


def checkUniquePrefix(library: CircuitLibrary) -> int:
    numErr = 0
    seen: dict[str, CircuitModel] = {}
    for model in library.models:
        if model.prefix in seen:
            logger.error(
                f"Circuit model(name={seen[model.prefix].name}) "
                f"and (name={model.name}) share the same prefix {model.prefix}"
            )
            numErr += 1
        else:
            seen[model.prefix] = model
    return numErr


def checkPorts(library: CircuitLibrary) -> int:
    """Check global ports are inputs and set/reset/config_enable ports are global."""
    numErr = 0
    for model, port in library.ports():
        if port.isGlobal and not port.isInput():
            logger.error(
                f"Circuit port {port.name} (type={port.type.value}) "
                f"of model {model.name} is defined as global but not an input port"
            )
            numErr += 1
        if (port.isSet or port.isReset or port.isConfigEnable) and not port.isGlobal:
            logger.error(
                f"Circuit port {port.name} (type={port.type.value}) "
                f"of model {model.name} is defined as a set/reset/config_enable port "
                "but it is not global"
            )
            numErr += 1
    return numErr


def checkGlobalPortConsistency(library: CircuitLibrary) -> int:
    """Check that global ports sharing a name share their attributes."""
    numErr = 0
    first: dict[str, tuple[CircuitModel, CircuitPort]] = {}
    for model, port in library.ports():
        if not port.isGlobal:
            continue
        if port.name not in first:
            first[port.name] = (model, port)
            continue
        refModel, refPort = first[port.name]
        if not port.sameAttributes(refPort):
            logger.error(
                f"Global port {port.name} of model {model.name} "
                f"has different attributes than the one of model {refModel.name}"
            )
            numErr += 1
    return numErr


def checkModelRequired(library: CircuitLibrary, modelType: CircuitModelType) -> int:
    if not library.modelsByType(modelType):
        logger.error(f"At least one {modelType.value} circuit model is required")
        return 1
    return 0


def checkModelPortsRequired(
    library: CircuitLibrary, modelType: CircuitModelType
) -> int:
    numErr = 0
    for model in library.modelsByType(modelType):
        for portType in REQUIRED_PORT_TYPES[modelType]:
            if not model.portsByType(portType):
                logger.error(
                    f"{modelType.value} circuit model(name={model.name}) "
                    f"does not have {portType.value} port"
                )
                numErr += 1
    return numErr


def checkDefaultModel(library: CircuitLibrary, modelType: CircuitModelType) -> int:
    if library.defaultModel(modelType) is None:
        logger.error(
            f"A default circuit model for the type {modelType.value} is required"
        )
        return 1
    return 0


def checkCircuitLibrary(library: CircuitLibrary) -> int:
    """Check that a circuit library is valid.

    Checkpoints:
    1. Circuit models have unique names
    2. Circuit models have unique prefixes
    3. Global ports are inputs, set/reset/config_enable ports are global
    4. Global ports sharing a name share their attributes
    5. IOPADs and MUXes are defined and have their mandatory ports
    6. At least one SRAM or SCFF is defined
    7. SRAM, SCFF, FF and LUT models have their mandatory ports
    8. MUX, channel wire and wire types have a default model

    Parameters
    ----------
    library : CircuitLibrary
        The library to check.

    Returns
    -------
    int
        Number of errors, always 0 as errors raise.

    Raises
    ------
    InvariantViolation
        If any check fails. Every failure is logged before raising.
    """
    logger.info("Checking circuit models...")
    numErr = 0
    numErr += checkUniqueNames(library)
    numErr += checkUniquePrefix(library)
    numErr += checkPorts(library)
    numErr += checkGlobalPortConsistency(library)

    for modelType in REQUIRED_MODEL_TYPES:
        numErr += checkModelRequired(library, modelType)
        numErr += checkModelPortsRequired(library, modelType)

    hasSram = library.modelsByType(CircuitModelType.SRAM)
    if not hasSram and not library.modelsByType(CircuitModelType.SCFF):
        logger.error("At least one sram or scff circuit model is required")
        numErr += 1

    for modelType in (
        CircuitModelType.SRAM,
        CircuitModelType.SCFF,
        CircuitModelType.FF,
        CircuitModelType.LUT,
    ):
        numErr += checkModelPortsRequired(library, modelType)

    for modelType in REQUIRED_DEFAULT_MODEL_TYPES:
        numErr += checkDefaultModel(library, modelType)

    logger.info(f"Finished checking circuit library with {numErr} errors")
    if numErr > 0:
        raise InvariantViolation(f"Circuit library has {numErr} errors")
    return numErr
