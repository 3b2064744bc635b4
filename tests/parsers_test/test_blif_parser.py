"""Tests of the BLIF benchmark parser."""

from pathlib import Path

import pytest

from preconfab.model.define import LogicalBlockRole
from preconfab.parsers.blif_parser import parseBlif
from preconfab.utils.exceptions import InvalidFileType

COUNTER_BLIF = """\
# counter benchmark
.model counter
.inputs clk rst \\
    en
.outputs q0 q1
.latch n0 q0 re clk 0
.latch n1 q1 re clk 0
.names rst en q0 n0
011 1
.names rst q0 q1 n1
011 1
.end

.model unused_submodel
.inputs x
.end
"""


@pytest.fixture
def counter_blif(tmp_path: Path) -> Path:
    path = tmp_path / "counter.blif"
    path.write_text(COUNTER_BLIF)
    return path


def test_inputs_before_outputs(counter_blif: Path) -> None:
    benchmark = parseBlif(counter_blif)

    assert benchmark.name == "counter"
    assert [(b.name, b.role) for b in benchmark.blocks] == [
        ("clk", LogicalBlockRole.INPUT_PAD),
        ("rst", LogicalBlockRole.INPUT_PAD),
        ("en", LogicalBlockRole.INPUT_PAD),
        ("q0", LogicalBlockRole.OUTPUT_PAD),
        ("q1", LogicalBlockRole.OUTPUT_PAD),
    ]


def test_latch_control_is_clock(counter_blif: Path) -> None:
    assert parseBlif(counter_blif).clockPortNames() == ["clk"]


def test_combinational(tmp_path: Path) -> None:
    path = tmp_path / "and2.blif"
    path.write_text(".model and2\n.inputs a b\n.outputs c\n.names a b c\n11 1\n.end\n")

    benchmark = parseBlif(path)

    assert [b.name for b in benchmark.pads()] == ["a", "b", "c"]
    assert benchmark.clockPortNames() == []


def test_no_model(tmp_path: Path) -> None:
    path = tmp_path / "empty.blif"
    path.write_text("# nothing here\n")
    with pytest.raises(InvalidFileType, match=r"\.model"):
        parseBlif(path)


def test_missing_file(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        parseBlif(tmp_path / "missing.blif")
