from .field import VectorField, check_grid_fields
from .diagnostics import check_finite_field, gen_finite_check_wrapper
from .precision import get_real_t, get_test_tol
from .pyst_kernel_config import (
    get_interior_iteration_slice,
    get_pyst_dtype,
    get_pyst_grid_info,
    get_pyst_kernel_config,
)
