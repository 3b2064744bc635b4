"""Structural hierarchy model of a synthesized FPGA fabric."""

from dataclasses import dataclass, field

from preconfab.model.define import PortCategory


@dataclass(frozen=True)
class ModulePort:
    """A port of a structural module.

    Attributes
    ----------
    name : str
        Port name.
    width : int
        Number of pins of the port.
    category : PortCategory
        Whether the port is global, the I/O aggregate or a configuration input.
    """

    name: str
    width: int
    category: PortCategory

    def __post_init__(self) -> None:
        if self.width < 1:
            raise ValueError(
                f"Port {self.name} must have a positive width, got {self.width}"
            )

    @property
    def lsb(self) -> int:
        return 0

    @property
    def msb(self) -> int:
        return self.width - 1

    def pins(self) -> range:
        """Return the pin indices of the port, from LSB to MSB."""
        return range(self.lsb, self.msb + 1)


@dataclass
class Module:
    """A named module of the structural hierarchy.

    Attributes
    ----------
    name : str
        Module name.
    ports : list[ModulePort]
        Ports in declaration order.
    """

    name: str
    ports: list[ModulePort] = field(default_factory=list)

    def addPort(self, port: ModulePort) -> None:
        if any(p.name == port.name for p in self.ports):
            raise ValueError(f"Port {port.name} already exists on module {self.name}")
        self.ports.append(port)


class ModuleManager:
    """Name-indexed collection of the modules of a fabric.

    Modules keep their insertion order so every query is deterministic.
    """

    def __init__(self) -> None:
        self._modules: dict[str, Module] = {}

    def addModule(self, module: Module) -> Module:
        if module.name in self._modules:
            raise ValueError(f"Module {module.name} is already defined")
        self._modules[module.name] = module
        return module

    def findModule(self, name: str) -> Module | None:
        return self._modules.get(name)

    def isValid(self, module: Module | None) -> bool:
        return module is not None and self._modules.get(module.name) is module

    def moduleName(self, module: Module) -> str:
        return module.name

    def portsByCategory(
        self, module: Module, category: PortCategory
    ) -> list[ModulePort]:
        """Return the ports of ``module`` in ``category``, in declaration order."""
        return [p for p in module.ports if p.category == category]

    @property
    def modules(self) -> list[Module]:
        return list(self._modules.values())
