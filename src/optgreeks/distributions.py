# distributions.py
# Standard-normal primitives shared by every pricing path.
# Both accept scalars *or* NumPy arrays.

from __future__ import annotations
import numpy as np
from scipy.special import erfc

_SQRT_2PI = np.sqrt(2.0 * np.pi)
_SQRT1_2 = np.sqrt(0.5)


def normal_pdf(x):
    """Standard normal density."""
    return np.exp(-0.5 * x * x) / _SQRT_2PI


def normal_cdf(x):
    """Standard normal CDF via ``erfc`` (accurate deep in the left tail)."""
    return 0.5 * erfc(-x * _SQRT1_2)
