"""Kernels for updating velocity from local damping and coupling in 3D."""
import numpy as np
import pystencils as ps
import sympy as sp
import leapwave.utils as lwu
from typing import Callable, Literal


def gen_update_velocity_from_local_coupling_pyst_kernel_3d(
    real_t: type,
    num_threads: bool | int = False,
    fixed_grid_size: tuple[int, int, int] | bool = False,
    field_type: Literal["scalar", "vector"] = "scalar",
    check_finite: bool = False,
) -> Callable:
    """3D velocity update from local coupling kernel generator.

    The generated kernel performs, in place and per component,

        v = (1 + dt * gamma) * v + dt * beta * u

    where gamma models local attenuation and beta a local coupling to the
    displacement. No spatial derivatives are involved and components do
    not mix.

    Launch convention: offset, as for the displacement update. Only the
    interior slice [1:-1, 1:-1, 1:-1] is compiled into the loop, leaving the
    one-cell border untouched.
    """
    pyst_dtype = lwu.get_pyst_dtype(real_t)
    kernel_config = lwu.get_pyst_kernel_config(
        real_t, num_threads, iteration_slice=lwu.get_interior_iteration_slice()
    )
    grid_info = lwu.get_pyst_grid_info(fixed_grid_size)

    @ps.kernel
    def _update_velocity_from_local_coupling_stencil_3d():
        velocity_field, displacement_field, beta_field, gamma_field = ps.fields(
            f"velocity_field, displacement_field, beta_field, gamma_field : "
            f"{pyst_dtype}[{grid_info}]"
        )
        dt = sp.symbols("dt")
        velocity_field[0, 0, 0] @= (1 + dt * gamma_field[0, 0, 0]) * velocity_field[
            0, 0, 0
        ] + dt * beta_field[0, 0, 0] * displacement_field[0, 0, 0]

    _update_velocity_from_local_coupling_kernel_3d = ps.create_kernel(
        _update_velocity_from_local_coupling_stencil_3d, config=kernel_config
    ).compile()

    match field_type:
        case "scalar":

            def update_velocity_from_local_coupling_pyst_kernel_3d(
                velocity_field: np.ndarray,
                displacement_field: np.ndarray,
                beta_field: np.ndarray,
                gamma_field: np.ndarray,
                dt: float,
            ) -> None:
                """3D velocity update from local coupling (scalar field)."""
                lwu.check_grid_fields(
                    real_t=real_t,
                    scalar_fields=dict(
                        velocity_field=velocity_field,
                        displacement_field=displacement_field,
                        beta_field=beta_field,
                        gamma_field=gamma_field,
                    ),
                    written_field_names=("velocity_field",),
                    fixed_grid_size=fixed_grid_size,
                )
                _update_velocity_from_local_coupling_kernel_3d(
                    velocity_field=velocity_field,
                    displacement_field=displacement_field,
                    beta_field=beta_field,
                    gamma_field=gamma_field,
                    dt=dt,
                )

            update_velocity_pyst_kernel_3d = (
                update_velocity_from_local_coupling_pyst_kernel_3d
            )
        case "vector":
            x_axis_idx = lwu.VectorField.x_axis_idx()
            y_axis_idx = lwu.VectorField.y_axis_idx()
            z_axis_idx = lwu.VectorField.z_axis_idx()

            def vector_field_update_velocity_from_local_coupling_pyst_kernel_3d(
                velocity_field: np.ndarray,
                displacement_field: np.ndarray,
                beta_field: np.ndarray,
                gamma_field: np.ndarray,
                dt: float,
            ) -> None:
                """3D velocity update from local coupling (vector field).

                vx is coupled to ux only, vy to uy and vz to uz; beta and
                gamma are scalar fields shared by all components.
                """
                lwu.check_grid_fields(
                    real_t=real_t,
                    vector_fields=dict(
                        velocity_field=velocity_field,
                        displacement_field=displacement_field,
                    ),
                    scalar_fields=dict(beta_field=beta_field, gamma_field=gamma_field),
                    written_field_names=("velocity_field",),
                    fixed_grid_size=fixed_grid_size,
                )
                for axis_idx in (x_axis_idx, y_axis_idx, z_axis_idx):
                    _update_velocity_from_local_coupling_kernel_3d(
                        velocity_field=velocity_field[axis_idx],
                        displacement_field=displacement_field[axis_idx],
                        beta_field=beta_field,
                        gamma_field=gamma_field,
                        dt=dt,
                    )

            update_velocity_pyst_kernel_3d = (
                vector_field_update_velocity_from_local_coupling_pyst_kernel_3d
            )
        case _:
            raise ValueError("Invalid field type")

    match check_finite:
        case False:
            return update_velocity_pyst_kernel_3d
        case _:  # True
            return lwu.gen_finite_check_wrapper(
                kernel=update_velocity_pyst_kernel_3d,
                kernel_name="update_velocity_from_local_coupling",
                checked_field_names=("velocity_field",),
            )
