"""Precision and tolerance details."""
import numpy as np


_REAL_T_FROM_PRECISION = {"single": np.float32, "double": np.float64}


def get_real_t(precision: str = "single") -> type:
    """Return the real data type based on precision."""
    try:
        return _REAL_T_FROM_PRECISION[precision]
    except KeyError:
        raise ValueError("Precision argument must be single or double") from None


def get_test_tol(precision: str = "single") -> float:
    """Return the testing tolerance based on precision.

    Scaled machine epsilon, loose enough for a handful of fused stencil
    operations per grid point.
    """
    real_t = get_real_t(precision=precision)
    return real_t(1e3) * np.finfo(real_t).eps
