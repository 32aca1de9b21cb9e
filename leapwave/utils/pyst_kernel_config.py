"""pystencils kernel configuration helpers."""
import numpy as np
import pystencils as ps


def get_pyst_dtype(real_t: type) -> str:
    """Return the pystencils data type based on real dtype."""
    if real_t == np.float32:
        return "float32"
    elif real_t == np.float64:
        return "float64"
    else:
        raise ValueError("Invalid real type")


def get_pyst_grid_info(
    fixed_grid_size: tuple[int, int, int] | bool = False,
) -> str:
    """Return the pystencils field shape description for a 3D grid.

    A fixed grid size bakes the extents into the compiled kernel, otherwise
    the kernel accepts any 3D shape.
    """
    if isinstance(fixed_grid_size, tuple):
        if len(fixed_grid_size) != 3:
            raise ValueError("Fixed grid size must have 3 extents")
        return f"{fixed_grid_size[0]}, {fixed_grid_size[1]}, {fixed_grid_size[2]}"
    return "3D"


def get_interior_iteration_slice(boundary_width: int = 1) -> tuple:
    """Iteration slice covering the 3D grid minus a border on every face.

    Pointwise kernels compiled with this slice run over a launch domain of
    shape - 2 * boundary_width, offset by boundary_width along each axis, so
    the border cells are never touched.
    """
    assert boundary_width > 0 and isinstance(boundary_width, int), "invalid width"
    return ps.make_slice[
        boundary_width:-boundary_width,
        boundary_width:-boundary_width,
        boundary_width:-boundary_width,
    ]


def get_pyst_kernel_config(
    real_t: type, num_threads: bool | int = False, iteration_slice: tuple = None
) -> ps.CreateKernelConfig:
    """Returns the pystencils kernel config based on the data
    dtype, number of threads and (optional) iteration slice."""
    pyst_dtype = get_pyst_dtype(real_t)
    kernel_config = ps.CreateKernelConfig(
        data_type=pyst_dtype,
        default_number_float=pyst_dtype,
        cpu_openmp=num_threads,
        iteration_slice=iteration_slice,
    )
    return kernel_config
