"""Kernels for updating velocity from the displacement Laplacian in 3D."""
import numpy as np
import pystencils as ps
import sympy as sp
import leapwave.utils as lwu
from typing import Callable, Literal


def gen_update_velocity_from_laplacian_pyst_kernel_3d(
    real_t: type,
    num_threads: bool | int = False,
    fixed_grid_size: tuple[int, int, int] | bool = False,
    field_type: Literal["scalar", "vector"] = "scalar",
    check_finite: bool = False,
) -> Callable:
    """3D velocity update from displacement Laplacian kernel generator.

    The generated kernel performs, in place,

        v = v + dt * alpha * laplacian(u)

    with the 7 point second difference Laplacian, each axis scaled by its
    own inverse squared spacing (inv_dx2 = 1 / dx^2 etc.). alpha is read at
    the updated point.

    Launch convention: guarded. The kernel is launched over the full array
    and the stencil's +-1 neighbour accesses give it a one-cell ghost layer,
    so only points with a complete neighbourhood (indices 1 to n - 2 on each
    axis) are updated. Fields therefore need at least one halo cell on
    every face.
    """
    pyst_dtype = lwu.get_pyst_dtype(real_t)
    kernel_config = lwu.get_pyst_kernel_config(real_t, num_threads)
    grid_info = lwu.get_pyst_grid_info(fixed_grid_size)

    @ps.kernel
    def _update_velocity_from_laplacian_stencil_3d():
        velocity_field, displacement_field, alpha_field = ps.fields(
            f"velocity_field, displacement_field, alpha_field : "
            f"{pyst_dtype}[{grid_info}]"
        )
        dt, inv_dx2, inv_dy2, inv_dz2 = sp.symbols("dt, inv_dx2, inv_dy2, inv_dz2")
        velocity_field[0, 0, 0] @= velocity_field[0, 0, 0] + dt * alpha_field[
            0, 0, 0
        ] * (
            (
                displacement_field[1, 0, 0]
                - 2 * displacement_field[0, 0, 0]
                + displacement_field[-1, 0, 0]
            )
            * inv_dx2
            + (
                displacement_field[0, 1, 0]
                - 2 * displacement_field[0, 0, 0]
                + displacement_field[0, -1, 0]
            )
            * inv_dy2
            + (
                displacement_field[0, 0, 1]
                - 2 * displacement_field[0, 0, 0]
                + displacement_field[0, 0, -1]
            )
            * inv_dz2
        )

    _update_velocity_from_laplacian_kernel_3d = ps.create_kernel(
        _update_velocity_from_laplacian_stencil_3d, config=kernel_config
    ).compile()

    match field_type:
        case "scalar":

            def update_velocity_from_laplacian_pyst_kernel_3d(
                velocity_field: np.ndarray,
                displacement_field: np.ndarray,
                alpha_field: np.ndarray,
                dt: float,
                inv_dx2: float,
                inv_dy2: float,
                inv_dz2: float,
            ) -> None:
                """3D velocity update from displacement Laplacian (scalar field).

                Updates one (nx, ny, nz) velocity component in place from
                the matching displacement component.
                """
                lwu.check_grid_fields(
                    real_t=real_t,
                    scalar_fields=dict(
                        velocity_field=velocity_field,
                        displacement_field=displacement_field,
                        alpha_field=alpha_field,
                    ),
                    written_field_names=("velocity_field",),
                    fixed_grid_size=fixed_grid_size,
                )
                _update_velocity_from_laplacian_kernel_3d(
                    velocity_field=velocity_field,
                    displacement_field=displacement_field,
                    alpha_field=alpha_field,
                    dt=dt,
                    inv_dx2=inv_dx2,
                    inv_dy2=inv_dy2,
                    inv_dz2=inv_dz2,
                )

            update_velocity_pyst_kernel_3d = (
                update_velocity_from_laplacian_pyst_kernel_3d
            )
        case "vector":
            x_axis_idx = lwu.VectorField.x_axis_idx()
            y_axis_idx = lwu.VectorField.y_axis_idx()
            z_axis_idx = lwu.VectorField.z_axis_idx()

            def vector_field_update_velocity_from_laplacian_pyst_kernel_3d(
                velocity_field: np.ndarray,
                displacement_field: np.ndarray,
                alpha_field: np.ndarray,
                dt: float,
                inv_dx2: float,
                inv_dy2: float,
                inv_dz2: float,
            ) -> None:
                """3D velocity update from displacement Laplacian (vector field).

                Computes the vector Laplacian of a (3, nx, ny, nz)
                displacement field component by component and updates the
                velocity field in place, sharing the scalar alpha field.
                """
                lwu.check_grid_fields(
                    real_t=real_t,
                    vector_fields=dict(
                        velocity_field=velocity_field,
                        displacement_field=displacement_field,
                    ),
                    scalar_fields=dict(alpha_field=alpha_field),
                    written_field_names=("velocity_field",),
                    fixed_grid_size=fixed_grid_size,
                )
                for axis_idx in (x_axis_idx, y_axis_idx, z_axis_idx):
                    _update_velocity_from_laplacian_kernel_3d(
                        velocity_field=velocity_field[axis_idx],
                        displacement_field=displacement_field[axis_idx],
                        alpha_field=alpha_field,
                        dt=dt,
                        inv_dx2=inv_dx2,
                        inv_dy2=inv_dy2,
                        inv_dz2=inv_dz2,
                    )

            update_velocity_pyst_kernel_3d = (
                vector_field_update_velocity_from_laplacian_pyst_kernel_3d
            )
        case _:
            raise ValueError("Invalid field type")

    match check_finite:
        case False:
            return update_velocity_pyst_kernel_3d
        case _:  # True
            return lwu.gen_finite_check_wrapper(
                kernel=update_velocity_pyst_kernel_3d,
                kernel_name="update_velocity_from_laplacian",
                checked_field_names=("velocity_field",),
            )
