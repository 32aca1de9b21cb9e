"""Debug diagnostics for in-place grid kernels."""
import inspect
import logging
import numpy as np
from typing import Callable


def check_finite_field(field: np.ndarray, field_name: str, kernel_name: str) -> None:
    """Raise FloatingPointError if field holds any NaN or Inf value."""
    non_finite_mask = ~np.isfinite(field)
    if not non_finite_mask.any():
        return
    num_nan = int(np.count_nonzero(np.isnan(field)))
    num_inf = int(np.count_nonzero(np.isinf(field)))
    first_idx = tuple(int(idx) for idx in np.argwhere(non_finite_mask)[0])
    message = (
        f"{kernel_name}: {field_name} has {num_nan} NaN and {num_inf} Inf "
        f"values, first at index {first_idx}"
    )
    log = logging.getLogger()
    log.error(message)
    raise FloatingPointError(message)


def gen_finite_check_wrapper(
    kernel: Callable, kernel_name: str, checked_field_names: tuple[str, ...]
) -> Callable:
    """Wrap a grid kernel with a NaN/Inf check of its written fields.

    The check runs right after each call and costs one extra pass over
    every checked field, so it is meant for debugging unstable runs.
    """
    log = logging.getLogger()
    log.warning(
        "==============================================="
        f"\nFinite value checks enabled for {kernel_name}"
        f"\non fields: {', '.join(checked_field_names)}"
        "\nExpect a slowdown, use only for debugging!"
        "\n==============================================="
    )
    kernel_signature = inspect.signature(kernel)

    def kernel_with_finite_check(*args, **kwargs) -> None:
        kernel(*args, **kwargs)
        kernel_args = kernel_signature.bind(*args, **kwargs).arguments
        for field_name in checked_field_names:
            check_finite_field(
                field=kernel_args[field_name],
                field_name=field_name,
                kernel_name=kernel_name,
            )

    kernel_with_finite_check.__doc__ = kernel.__doc__
    return kernel_with_finite_check
