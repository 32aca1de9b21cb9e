"""Kernels for updating velocity from a weighted displacement gradient in 3D."""
import numpy as np
import pystencils as ps
import sympy as sp
import leapwave.utils as lwu
from typing import Callable


def _gen_weighted_gradient_component_kernel_3d(
    pyst_dtype: str,
    grid_info: str,
    kernel_config: ps.CreateKernelConfig,
    offset: tuple[int, int, int],
) -> Callable:
    """Compile the update of one velocity component.

    offset is the unit step along the differencing axis, e.g. (1, 0, 0)
    for the x component.
    """
    back_offset = tuple(-idx for idx in offset)

    @ps.kernel
    def _update_velocity_component_from_weighted_gradient_stencil_3d():
        (
            velocity_field_comp,
            displacement_field_x,
            displacement_field_y,
            displacement_field_z,
            alpha_field,
            eta_field_x,
            eta_field_y,
            eta_field_z,
        ) = ps.fields(
            f"velocity_field_comp, displacement_field_x, displacement_field_y, "
            f"displacement_field_z, alpha_field, eta_field_x, eta_field_y, "
            f"eta_field_z : {pyst_dtype}[{grid_info}]"
        )
        dt, inv_2dh = sp.symbols("dt, inv_2dh")
        # d(eta . u) / dh with central differences
        velocity_field_comp[0, 0, 0] @= velocity_field_comp[
            0, 0, 0
        ] + dt * alpha_field[0, 0, 0] * inv_2dh * (
            eta_field_x[offset] * displacement_field_x[offset]
            - eta_field_x[back_offset] * displacement_field_x[back_offset]
            + eta_field_y[offset] * displacement_field_y[offset]
            - eta_field_y[back_offset] * displacement_field_y[back_offset]
            + eta_field_z[offset] * displacement_field_z[offset]
            - eta_field_z[back_offset] * displacement_field_z[back_offset]
        )

    return ps.create_kernel(
        _update_velocity_component_from_weighted_gradient_stencil_3d,
        config=kernel_config,
    ).compile()


def gen_update_velocity_from_weighted_gradient_pyst_kernel_3d(
    real_t: type,
    num_threads: bool | int = False,
    fixed_grid_size: tuple[int, int, int] | bool = False,
    check_finite: bool = False,
) -> Callable:
    """3D velocity update from weighted displacement gradient kernel generator.

    The generated kernel performs, in place,

        v = v + dt * alpha * grad(eta . u)

    where eta is a vector coefficient field and the gradient uses central
    differences scaled by the inverse double spacings (inv_2dx = 1 / (2 dx)
    etc.). Each velocity component is differenced along its own axis but
    depends on all three displacement and eta components.

    Launch convention: guarded. The kernel is launched over the full array
    and the +-1 neighbour accesses give it a one-cell ghost layer on every
    face, so only indices 1 to n - 2 on each axis are updated.
    """
    pyst_dtype = lwu.get_pyst_dtype(real_t)
    kernel_config = lwu.get_pyst_kernel_config(real_t, num_threads)
    grid_info = lwu.get_pyst_grid_info(fixed_grid_size)
    x_axis_idx = lwu.VectorField.x_axis_idx()
    y_axis_idx = lwu.VectorField.y_axis_idx()
    z_axis_idx = lwu.VectorField.z_axis_idx()

    _update_velocity_x_comp_kernel_3d = _gen_weighted_gradient_component_kernel_3d(
        pyst_dtype, grid_info, kernel_config, offset=(1, 0, 0)
    )
    _update_velocity_y_comp_kernel_3d = _gen_weighted_gradient_component_kernel_3d(
        pyst_dtype, grid_info, kernel_config, offset=(0, 1, 0)
    )
    _update_velocity_z_comp_kernel_3d = _gen_weighted_gradient_component_kernel_3d(
        pyst_dtype, grid_info, kernel_config, offset=(0, 0, 1)
    )

    def update_velocity_from_weighted_gradient_pyst_kernel_3d(
        velocity_field: np.ndarray,
        displacement_field: np.ndarray,
        alpha_field: np.ndarray,
        eta_field: np.ndarray,
        dt: float,
        inv_2dx: float,
        inv_2dy: float,
        inv_2dz: float,
    ) -> None:
        """3D velocity update from weighted displacement gradient.

        velocity_field, displacement_field and eta_field are (3, nx, ny, nz)
        vector fields, alpha_field is a (nx, ny, nz) scalar field.
        """
        lwu.check_grid_fields(
            real_t=real_t,
            vector_fields=dict(
                velocity_field=velocity_field,
                displacement_field=displacement_field,
                eta_field=eta_field,
            ),
            scalar_fields=dict(alpha_field=alpha_field),
            written_field_names=("velocity_field",),
            fixed_grid_size=fixed_grid_size,
        )
        for update_velocity_comp_kernel_3d, axis_idx, inv_2dh in (
            (_update_velocity_x_comp_kernel_3d, x_axis_idx, inv_2dx),
            (_update_velocity_y_comp_kernel_3d, y_axis_idx, inv_2dy),
            (_update_velocity_z_comp_kernel_3d, z_axis_idx, inv_2dz),
        ):
            update_velocity_comp_kernel_3d(
                velocity_field_comp=velocity_field[axis_idx],
                displacement_field_x=displacement_field[x_axis_idx],
                displacement_field_y=displacement_field[y_axis_idx],
                displacement_field_z=displacement_field[z_axis_idx],
                alpha_field=alpha_field,
                eta_field_x=eta_field[x_axis_idx],
                eta_field_y=eta_field[y_axis_idx],
                eta_field_z=eta_field[z_axis_idx],
                dt=dt,
                inv_2dh=inv_2dh,
            )

    match check_finite:
        case False:
            return update_velocity_from_weighted_gradient_pyst_kernel_3d
        case _:  # True
            return lwu.gen_finite_check_wrapper(
                kernel=update_velocity_from_weighted_gradient_pyst_kernel_3d,
                kernel_name="update_velocity_from_weighted_gradient",
                checked_field_names=("velocity_field",),
            )
