"""preconfab utilities module.

This module contains shared utilities used across preconfab.

Components:
- exceptions: Custom exception classes
- settings: Configuration and settings management
"""

from preconfab.utils.exceptions import *  # noqa: F401, F403
from preconfab.utils.settings import *  # noqa: F401, F403
