"""
MLE backends.
"""

from pylikelihood.mle.backends.cpu import CPUBFGSBackend, CPUSimplexBackend

__all__ = ['CPUBFGSBackend', 'CPUSimplexBackend']
