"""Stencil based grid operations in 3D."""
from .update_displacement_3d import (
    gen_update_displacement_euler_forward_pyst_kernel_3d,
)
from .update_velocity_from_laplacian_3d import (
    gen_update_velocity_from_laplacian_pyst_kernel_3d,
)
from .update_velocity_from_local_coupling_3d import (
    gen_update_velocity_from_local_coupling_pyst_kernel_3d,
)
from .update_velocity_from_weighted_gradient_3d import (
    gen_update_velocity_from_weighted_gradient_pyst_kernel_3d,
)
