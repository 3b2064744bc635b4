"""Circuit library: catalogue of circuit models and the attributes of their ports.

The pre-configured top module generator only needs the global ports of the library,
which it links by name to the global ports of the fabric top module. The remaining
structure is kept so that the library can be validated before generation.
"""

from dataclasses import dataclass, field

from preconfab.model.define import AttributeRole, CircuitModelType, CircuitPortType


@dataclass(frozen=True)
class CircuitPort:
    """A port of a circuit model together with its electrical attributes.

    Attributes
    ----------
    name : str
        Port name, matched against global port names of the fabric.
    type : CircuitPortType
        Port type.
    size : int
        Port width.
    isGlobal : bool
        Whether the port is shared across the whole fabric.
    isProg : bool
        Whether the port belongs to the programming (configuration) circuitry.
    isSet : bool
        Whether the port is a set signal.
    isReset : bool
        Whether the port is a reset signal.
    isConfigEnable : bool
        Whether the port is a configuration enable signal.
    defaultValue : int
        Value driven on the port when nothing else drives it.
    """

    name: str
    type: CircuitPortType
    size: int = 1
    isGlobal: bool = False
    isProg: bool = False
    isSet: bool = False
    isReset: bool = False
    isConfigEnable: bool = False
    defaultValue: int = 0

    def __post_init__(self) -> None:
        if self.defaultValue not in (0, 1):
            raise ValueError(
                f"Default value of port {self.name} must be 0 or 1, "
                f"got {self.defaultValue}"
            )
        if self.size < 1:
            raise ValueError(
                f"Port {self.name} must have a positive size, got {self.size}"
            )

    @property
    def role(self) -> AttributeRole:
        if self.type == CircuitPortType.CLOCK:
            return AttributeRole.CLOCK
        if self.isSet:
            return AttributeRole.SET
        if self.isReset:
            return AttributeRole.RESET
        if self.isConfigEnable:
            return AttributeRole.CONFIG_ENABLE
        return AttributeRole.OTHER

    def isInput(self) -> bool:
        return self.type in (CircuitPortType.INPUT, CircuitPortType.CLOCK)

    def sameAttributes(self, other: "CircuitPort") -> bool:
        """Check whether two ports carry identical electrical attributes."""
        return (
            self.type == other.type
            and self.size == other.size
            and self.isProg == other.isProg
            and self.isSet == other.isSet
            and self.isReset == other.isReset
            and self.isConfigEnable == other.isConfigEnable
            and self.defaultValue == other.defaultValue
        )


@dataclass
class CircuitModel:
    """A circuit model (MUX, LUT, SRAM, IOPAD, ...) of the library."""

    name: str
    type: CircuitModelType
    prefix: str = ""
    isDefault: bool = False
    ports: list[CircuitPort] = field(default_factory=list)

    def portsByType(
        self, portType: CircuitPortType, includeGlobal: bool = True
    ) -> list[CircuitPort]:
        return [
            p
            for p in self.ports
            if p.type == portType and (includeGlobal or not p.isGlobal)
        ]


class CircuitLibrary:
    """Ordered collection of circuit models."""

    def __init__(self, models: list[CircuitModel] | None = None) -> None:
        self.models: list[CircuitModel] = list(models) if models else []

    def addModel(self, model: CircuitModel) -> CircuitModel:
        self.models.append(model)
        return model

    def modelsByType(self, modelType: CircuitModelType) -> list[CircuitModel]:
        return [m for m in self.models if m.type == modelType]

    def defaultModel(self, modelType: CircuitModelType) -> CircuitModel | None:
        """Return the default model of a type.

        A type with a single model uses it as default even when it is not flagged.
        """
        candidates = self.modelsByType(modelType)
        for m in candidates:
            if m.isDefault:
                return m
        if len(candidates) == 1:
            return candidates[0]
        return None

    def ports(self) -> list[tuple[CircuitModel, CircuitPort]]:
        return [(m, p) for m in self.models for p in m.ports]

    def globalPorts(self) -> list[CircuitPort]:
        """Return the global ports of the library, one per distinct name.

        The first declaration of each name wins. Same-name global ports are
        required to share their attributes, which ``checkCircuitLibrary`` enforces.
        """
        seen: dict[str, CircuitPort] = {}
        for _, port in self.ports():
            if port.isGlobal and port.name not in seen:
                seen[port.name] = port
        return list(seen.values())
