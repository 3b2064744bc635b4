"""preconfab input parsers module.

This module contains parsers for the files describing the fabric, its circuit
library, its bitstream and the benchmark mapped on it.

Parsers:
- yaml_parser: Parse the YAML fabric, circuit library, bitstream, pin map and
  benchmark files
- blif_parser: Parse the I/Os and clocks of BLIF benchmarks
- place_parser: Parse VPR placement files
"""

from preconfab.parsers.blif_parser import *  # noqa: F401, F403
from preconfab.parsers.place_parser import *  # noqa: F401, F403
from preconfab.parsers.yaml_parser import *  # noqa: F401, F403
