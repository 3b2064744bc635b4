"""Configuration hierarchy model: configuration blocks and the bits they own."""

from collections.abc import Iterator
from dataclasses import dataclass, field


@dataclass(eq=False)
class ConfigBlock:
    """A node of the configuration hierarchy.

    Attributes
    ----------
    name : str
        Block name, which is also the instance name of the block in the fabric.
    parent : ConfigBlock | None
        Parent block, None for the root.
    children : list[ConfigBlock]
        Child blocks in insertion order.
    bits : list[ConfigBit]
        Local register of the block, index i holds the bit with local index i.
    """

    name: str
    parent: "ConfigBlock | None" = None
    children: list["ConfigBlock"] = field(default_factory=list)
    bits: list["ConfigBit"] = field(default_factory=list)

    def __repr__(self) -> str:
        return f"ConfigBlock({self.name!r})"


@dataclass(frozen=True, eq=False)
class ConfigBit:
    """A single configuration bit.

    Attributes
    ----------
    parentBlock : ConfigBlock
        Block owning the bit.
    localIndex : int
        Position of the bit inside the register of its block.
    value : int
        Bit value, 0 or 1.
    """

    parentBlock: ConfigBlock
    localIndex: int
    value: int

    def __post_init__(self) -> None:
        if self.value not in (0, 1):
            raise ValueError(
                f"Bit {self.localIndex} of {self.parentBlock.name} must be 0 or 1, "
                f"got {self.value}"
            )

    def __repr__(self) -> str:
        return f"ConfigBit({self.parentBlock.name!r}[{self.localIndex}]={self.value})"


class BitstreamManager:
    """Owner of the configuration hierarchy and of every configuration bit."""

    def __init__(self) -> None:
        self.roots: list[ConfigBlock] = []

    def addBlock(self, name: str, parent: ConfigBlock | None = None) -> ConfigBlock:
        block = ConfigBlock(name, parent)
        if parent is None:
            self.roots.append(block)
        else:
            parent.children.append(block)
        return block

    def addBit(self, block: ConfigBlock, value: int) -> ConfigBit:
        bit = ConfigBit(block, len(block.bits), value)
        block.bits.append(bit)
        return bit

    def parentBlock(self, bit: ConfigBit) -> ConfigBlock:
        return bit.parentBlock

    def blockName(self, block: ConfigBlock) -> str:
        return block.name

    def localIndex(self, bit: ConfigBit) -> int:
        return bit.localIndex

    def value(self, bit: ConfigBit) -> int:
        return bit.value

    def ascendToRoot(self, block: ConfigBlock) -> list[ConfigBlock]:
        """Return the chain of blocks from the root down to ``block`` (inclusive)."""
        chain = [block]
        while chain[-1].parent is not None:
            chain.append(chain[-1].parent)
        chain.reverse()
        return chain

    def walk(self) -> Iterator[ConfigBlock]:
        """Iterate over all blocks, depth first, parents before children."""
        stack = list(reversed(self.roots))
        while stack:
            block = stack.pop()
            yield block
            stack.extend(reversed(block.children))

    def fabricBitstream(self) -> list[ConfigBit]:
        """Return every bit in loading order.

        Blocks are visited depth first, and the register of a block precedes the
        registers of its children.
        """
        return [bit for block in self.walk() for bit in block.bits]

    @property
    def numBits(self) -> int:
        return sum(len(block.bits) for block in self.walk())
