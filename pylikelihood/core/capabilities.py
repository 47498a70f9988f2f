"""
Capability string constants for pylikelihood.

This module is the SINGLE SOURCE OF TRUTH for capability strings.
Import from here, never use raw strings.

Usage:
    from pylikelihood.core.capabilities import CAPABILITY_GRADIENT

    if model.supports(CAPABILITY_GRADIENT):
        g = model.gradient(beta, data)
"""

# Model provides an analytic gradient (and a combined value+gradient)
CAPABILITY_GRADIENT = 'gradient'

# Model likelihood is meaningful on a single observation (row)
CAPABILITY_ROWWISE = 'rowwise'

# All capabilities as a frozenset for validation
ALL_CAPABILITIES = frozenset({
    CAPABILITY_GRADIENT,
    CAPABILITY_ROWWISE,
})

__all__ = [
    'CAPABILITY_GRADIENT',
    'CAPABILITY_ROWWISE',
    'ALL_CAPABILITIES',
]
