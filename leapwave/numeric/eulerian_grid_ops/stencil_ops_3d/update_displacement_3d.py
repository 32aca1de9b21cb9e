"""Kernels for updating displacement from velocity in 3D."""
import numpy as np
import pystencils as ps
import sympy as sp
import leapwave.utils as lwu
from typing import Callable, Literal


def gen_update_displacement_euler_forward_pyst_kernel_3d(
    real_t: type,
    num_threads: bool | int = False,
    fixed_grid_size: tuple[int, int, int] | bool = False,
    field_type: Literal["scalar", "vector"] = "scalar",
    check_finite: bool = False,
) -> Callable:
    """3D displacement Euler forward update kernel generator.

    The generated kernel performs u = u + dt * v in place.

    Launch convention: offset. The compiled loop spans the interior slice
    [1:-1, 1:-1, 1:-1], i.e. a launch domain of shape(u) - 2 shifted by one
    cell along each axis. The one-cell border on every face is never
    written and there is no per-point bounds check.
    """
    pyst_dtype = lwu.get_pyst_dtype(real_t)
    kernel_config = lwu.get_pyst_kernel_config(
        real_t, num_threads, iteration_slice=lwu.get_interior_iteration_slice()
    )
    grid_info = lwu.get_pyst_grid_info(fixed_grid_size)

    @ps.kernel
    def _update_displacement_stencil_3d():
        displacement_field, velocity_field = ps.fields(
            f"displacement_field, velocity_field : {pyst_dtype}[{grid_info}]"
        )
        dt = sp.symbols("dt")
        displacement_field[0, 0, 0] @= (
            displacement_field[0, 0, 0] + dt * velocity_field[0, 0, 0]
        )

    _update_displacement_kernel_3d = ps.create_kernel(
        _update_displacement_stencil_3d, config=kernel_config
    ).compile()

    match field_type:
        case "scalar":

            def update_displacement_euler_forward_pyst_kernel_3d(
                displacement_field: np.ndarray,
                velocity_field: np.ndarray,
                dt: float,
            ) -> None:
                """3D displacement Euler forward update (scalar field).

                Updates one (nx, ny, nz) displacement component in place
                using the matching velocity component, interior only.
                """
                lwu.check_grid_fields(
                    real_t=real_t,
                    scalar_fields=dict(
                        displacement_field=displacement_field,
                        velocity_field=velocity_field,
                    ),
                    written_field_names=("displacement_field",),
                    fixed_grid_size=fixed_grid_size,
                )
                _update_displacement_kernel_3d(
                    displacement_field=displacement_field,
                    velocity_field=velocity_field,
                    dt=dt,
                )

            update_displacement_pyst_kernel_3d = (
                update_displacement_euler_forward_pyst_kernel_3d
            )
        case "vector":
            x_axis_idx = lwu.VectorField.x_axis_idx()
            y_axis_idx = lwu.VectorField.y_axis_idx()
            z_axis_idx = lwu.VectorField.z_axis_idx()

            def vector_field_update_displacement_euler_forward_pyst_kernel_3d(
                displacement_field: np.ndarray,
                velocity_field: np.ndarray,
                dt: float,
            ) -> None:
                """3D displacement Euler forward update (vector field).

                Updates all components of a (3, nx, ny, nz) displacement
                field in place, interior only.
                """
                lwu.check_grid_fields(
                    real_t=real_t,
                    vector_fields=dict(
                        displacement_field=displacement_field,
                        velocity_field=velocity_field,
                    ),
                    written_field_names=("displacement_field",),
                    fixed_grid_size=fixed_grid_size,
                )
                for axis_idx in (x_axis_idx, y_axis_idx, z_axis_idx):
                    _update_displacement_kernel_3d(
                        displacement_field=displacement_field[axis_idx],
                        velocity_field=velocity_field[axis_idx],
                        dt=dt,
                    )

            update_displacement_pyst_kernel_3d = (
                vector_field_update_displacement_euler_forward_pyst_kernel_3d
            )
        case _:
            raise ValueError("Invalid field type")

    match check_finite:
        case False:
            return update_displacement_pyst_kernel_3d
        case _:  # True
            return lwu.gen_finite_check_wrapper(
                kernel=update_displacement_pyst_kernel_3d,
                kernel_name="update_displacement_euler_forward",
                checked_field_names=("displacement_field",),
            )
