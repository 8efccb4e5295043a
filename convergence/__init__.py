"""Wait for conditions to become, or stay, true within a time budget.

Public surface::

    from convergence import Convergence, when, always, is_convergence
"""

from .config import CONFIG_SCHEMA, load_config
from .convergence import Convergence, always, is_convergence, when
from .deferred import Deferred
from .errors import (
    ConvergenceAssertionError,
    ConvergenceConfigError,
    ConvergenceError,
    UnexpectedAsyncError,
)
from .poller import converge_on
from .stats import ConvergeMode, Stats

__all__ = [
    "Convergence",
    "when",
    "always",
    "is_convergence",
    "converge_on",
    "ConvergeMode",
    "Stats",
    "Deferred",
    "CONFIG_SCHEMA",
    "load_config",
    "ConvergenceError",
    "ConvergenceAssertionError",
    "ConvergenceConfigError",
    "UnexpectedAsyncError",
]
