"""
Shared compute infrastructure for pylikelihood.

This module provides timing utilities, optimizer settings, special
functions and the generic minimizers that every estimation domain uses.

IMPORTANT: This is NOT where likelihood models live. Those go in
mle/models/. This module contains shared NUMERIC infrastructure.

Submodules:
    timing: Execution timing utilities
    tolerances: Optimizer settings (tolerances, budgets, step scales)
    special: log-gamma, digamma, normal CDF/PDF
    optimization: Simplex and BFGS steppers plus the shared loop
"""

from pylikelihood.core.compute.timing import Timer, timed
from pylikelihood.core.compute.tolerances import (
    OptimizerSettings,
    SIMPLEX,
    BFGS,
    select_settings,
)

__all__ = [
    # Timing
    "Timer",
    "timed",
    # Settings
    "OptimizerSettings",
    "SIMPLEX",
    "BFGS",
    "select_settings",
]
