"""
Shared test infrastructure: deterministic scheduler/clock, CLI runner, file helpers.
"""

from .cli_utils import run_cli, jload
from .file_utils import write
from .scheduler import ManualScheduler, ManualHandle, FixedClock

__all__ = [
    "run_cli",
    "jload",
    "write",
    "ManualScheduler",
    "ManualHandle",
    "FixedClock",
]
