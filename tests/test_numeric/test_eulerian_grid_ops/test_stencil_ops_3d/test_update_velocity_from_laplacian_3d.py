import numpy as np
import psutil
import pytest
from leapwave.numeric.eulerian_grid_ops import (
    gen_update_velocity_from_laplacian_pyst_kernel_3d,
)
from leapwave.utils.precision import get_real_t, get_test_tol
from tests.test_numeric.test_eulerian_grid_ops.test_stencil_ops_3d.grid_checks import (
    check_boundary_faces_unchanged,
    check_interior_updated,
)


def update_velocity_from_laplacian_reference(
    velocity_field, displacement_field, alpha_field, dt, inv_dx2, inv_dy2, inv_dz2
):
    new_velocity_field = velocity_field.copy()
    inner = displacement_field[..., 1:-1, 1:-1, 1:-1]
    laplacian = (
        (
            displacement_field[..., 2:, 1:-1, 1:-1]
            - 2 * inner
            + displacement_field[..., :-2, 1:-1, 1:-1]
        )
        * inv_dx2
        + (
            displacement_field[..., 1:-1, 2:, 1:-1]
            - 2 * inner
            + displacement_field[..., 1:-1, :-2, 1:-1]
        )
        * inv_dy2
        + (
            displacement_field[..., 1:-1, 1:-1, 2:]
            - 2 * inner
            + displacement_field[..., 1:-1, 1:-1, :-2]
        )
        * inv_dz2
    )
    new_velocity_field[..., 1:-1, 1:-1, 1:-1] += (
        dt * alpha_field[1:-1, 1:-1, 1:-1] * laplacian
    )
    return new_velocity_field


class UpdateVelocityFromLaplacianSolution:
    def __init__(self, n_samples, precision="single"):
        real_t = get_real_t(precision)
        self.test_tol = get_test_tol(precision)
        self.dt = real_t(0.1)
        # anisotropic spacing
        self.inv_dx2 = real_t(0.3)
        self.inv_dy2 = real_t(0.2)
        self.inv_dz2 = real_t(0.1)
        self.alpha_field = np.random.rand(n_samples, n_samples, n_samples).astype(
            real_t
        )
        self.ref_velocity_vector_field = np.random.randn(
            3, n_samples, n_samples, n_samples
        ).astype(real_t)
        self.ref_displacement_vector_field = np.random.randn(
            3, n_samples, n_samples, n_samples
        ).astype(real_t)
        self.ref_new_velocity_vector_field = update_velocity_from_laplacian_reference(
            self.ref_velocity_vector_field,
            self.ref_displacement_vector_field,
            self.alpha_field,
            self.dt,
            self.inv_dx2,
            self.inv_dy2,
            self.inv_dz2,
        )

    @property
    def spacing_kwargs(self):
        return dict(inv_dx2=self.inv_dx2, inv_dy2=self.inv_dy2, inv_dz2=self.inv_dz2)

    def check_equals(self, new_velocity_field, axis_idx):
        np.testing.assert_allclose(
            self.ref_new_velocity_vector_field[axis_idx],
            new_velocity_field,
            atol=self.test_tol,
        )

    def check_vector_field_equals(self, new_velocity_vector_field):
        np.testing.assert_allclose(
            self.ref_new_velocity_vector_field,
            new_velocity_vector_field,
            atol=self.test_tol,
        )


@pytest.mark.parametrize("precision", ["single", "double"])
@pytest.mark.parametrize("n_values", [16])
def test_update_velocity_from_laplacian_3d(n_values, precision):
    real_t = get_real_t(precision)
    solution = UpdateVelocityFromLaplacianSolution(n_values, precision)
    axis_idx = 1
    velocity_field = solution.ref_velocity_vector_field[axis_idx].copy()
    update_velocity_from_laplacian_pyst_kernel = (
        gen_update_velocity_from_laplacian_pyst_kernel_3d(
            real_t=real_t,
            fixed_grid_size=(n_values, n_values, n_values),
            num_threads=psutil.cpu_count(logical=False),
            field_type="scalar",
        )
    )
    update_velocity_from_laplacian_pyst_kernel(
        velocity_field=velocity_field,
        displacement_field=solution.ref_displacement_vector_field[axis_idx],
        alpha_field=solution.alpha_field,
        dt=solution.dt,
        **solution.spacing_kwargs,
    )
    solution.check_equals(velocity_field, axis_idx)


@pytest.mark.parametrize("precision", ["single", "double"])
@pytest.mark.parametrize("n_values", [16])
def test_vector_field_update_velocity_from_laplacian_3d(n_values, precision):
    real_t = get_real_t(precision)
    solution = UpdateVelocityFromLaplacianSolution(n_values, precision)
    velocity_vector_field = solution.ref_velocity_vector_field.copy()
    vector_field_update_velocity_from_laplacian_pyst_kernel = (
        gen_update_velocity_from_laplacian_pyst_kernel_3d(
            real_t=real_t,
            fixed_grid_size=(n_values, n_values, n_values),
            num_threads=psutil.cpu_count(logical=False),
            field_type="vector",
        )
    )
    vector_field_update_velocity_from_laplacian_pyst_kernel(
        velocity_field=velocity_vector_field,
        displacement_field=solution.ref_displacement_vector_field,
        alpha_field=solution.alpha_field,
        dt=solution.dt,
        **solution.spacing_kwargs,
    )
    solution.check_vector_field_equals(velocity_vector_field)
    check_boundary_faces_unchanged(
        velocity_vector_field, solution.ref_velocity_vector_field
    )
    check_interior_updated(velocity_vector_field, solution.ref_velocity_vector_field)


@pytest.mark.parametrize("precision", ["single", "double"])
def test_update_velocity_from_laplacian_with_zero_alpha(precision):
    real_t = get_real_t(precision)
    n_values = 12
    solution = UpdateVelocityFromLaplacianSolution(n_values, precision)
    velocity_vector_field = solution.ref_velocity_vector_field.copy()
    vector_field_update_velocity_from_laplacian_pyst_kernel = (
        gen_update_velocity_from_laplacian_pyst_kernel_3d(
            real_t=real_t,
            num_threads=psutil.cpu_count(logical=False),
            field_type="vector",
        )
    )
    vector_field_update_velocity_from_laplacian_pyst_kernel(
        velocity_field=velocity_vector_field,
        displacement_field=solution.ref_displacement_vector_field,
        alpha_field=np.zeros_like(solution.alpha_field),
        dt=solution.dt,
        **solution.spacing_kwargs,
    )
    np.testing.assert_array_equal(
        velocity_vector_field, solution.ref_velocity_vector_field
    )


@pytest.mark.parametrize("precision", ["single", "double"])
def test_update_velocity_from_laplacian_of_affine_field(precision):
    real_t = get_real_t(precision)
    grid_size = (9, 10, 11)
    x_idx, y_idx, z_idx = np.indices(grid_size).astype(real_t)
    # integer valued, so second differences are exact
    displacement_vector_field = np.array(
        [
            2 * x_idx - 3 * y_idx + z_idx + 5,
            -x_idx + 4 * y_idx + 7 * z_idx,
            6 * x_idx + y_idx - 2 * z_idx - 1,
        ]
    ).astype(real_t)
    ref_velocity_vector_field = np.random.randn(3, *grid_size).astype(real_t)
    velocity_vector_field = ref_velocity_vector_field.copy()
    vector_field_update_velocity_from_laplacian_pyst_kernel = (
        gen_update_velocity_from_laplacian_pyst_kernel_3d(
            real_t=real_t,
            num_threads=psutil.cpu_count(logical=False),
            field_type="vector",
        )
    )
    vector_field_update_velocity_from_laplacian_pyst_kernel(
        velocity_field=velocity_vector_field,
        displacement_field=displacement_vector_field,
        alpha_field=np.ones(grid_size, dtype=real_t),
        dt=real_t(0.5),
        inv_dx2=real_t(0.25),
        inv_dy2=real_t(1.0),
        inv_dz2=real_t(4.0),
    )
    np.testing.assert_array_equal(velocity_vector_field, ref_velocity_vector_field)


@pytest.mark.parametrize("precision", ["single", "double"])
def test_update_velocity_from_laplacian_of_unit_impulse(precision):
    real_t = get_real_t(precision)
    test_tol = get_test_tol(precision)
    n_values = 5
    dt = real_t(0.1)
    center = n_values // 2
    displacement_vector_field = np.zeros((3, n_values, n_values, n_values), dtype=real_t)
    displacement_vector_field[:, center, center, center] = 1
    velocity_vector_field = np.zeros_like(displacement_vector_field)
    vector_field_update_velocity_from_laplacian_pyst_kernel = (
        gen_update_velocity_from_laplacian_pyst_kernel_3d(
            real_t=real_t, field_type="vector"
        )
    )
    vector_field_update_velocity_from_laplacian_pyst_kernel(
        velocity_field=velocity_vector_field,
        displacement_field=displacement_vector_field,
        alpha_field=np.ones((n_values, n_values, n_values), dtype=real_t),
        dt=dt,
        inv_dx2=real_t(1),
        inv_dy2=real_t(1),
        inv_dz2=real_t(1),
    )
    expected_velocity_vector_field = np.zeros_like(velocity_vector_field)
    expected_velocity_vector_field[:, center, center, center] = -6 * dt
    for offset in ((1, 0, 0), (0, 1, 0), (0, 0, 1)):
        for sign in (1, -1):
            neighbour = tuple(center + sign * idx for idx in offset)
            expected_velocity_vector_field[(slice(None),) + neighbour] = dt
    np.testing.assert_allclose(
        velocity_vector_field, expected_velocity_vector_field, atol=test_tol
    )


def test_update_velocity_from_laplacian_rejects_grid_without_interior():
    real_t = get_real_t("double")
    update_velocity_from_laplacian_pyst_kernel = (
        gen_update_velocity_from_laplacian_pyst_kernel_3d(real_t=real_t)
    )
    with pytest.raises(ValueError, match="no interior"):
        update_velocity_from_laplacian_pyst_kernel(
            velocity_field=np.zeros((8, 2, 8), dtype=real_t),
            displacement_field=np.zeros((8, 2, 8), dtype=real_t),
            alpha_field=np.zeros((8, 2, 8), dtype=real_t),
            dt=0.1,
            inv_dx2=1.0,
            inv_dy2=1.0,
            inv_dz2=1.0,
        )


def test_update_velocity_from_laplacian_rejects_scalar_alpha_of_wrong_shape():
    real_t = get_real_t("double")
    vector_field_update_velocity_from_laplacian_pyst_kernel = (
        gen_update_velocity_from_laplacian_pyst_kernel_3d(
            real_t=real_t, field_type="vector"
        )
    )
    with pytest.raises(ValueError, match="alpha_field must be a scalar field"):
        vector_field_update_velocity_from_laplacian_pyst_kernel(
            velocity_field=np.zeros((3, 6, 6, 6), dtype=real_t),
            displacement_field=np.zeros((3, 6, 6, 6), dtype=real_t),
            alpha_field=np.zeros((3, 6, 6, 6), dtype=real_t),
            dt=0.1,
            inv_dx2=1.0,
            inv_dy2=1.0,
            inv_dz2=1.0,
        )


def test_update_velocity_from_laplacian_finite_check():
    real_t = get_real_t("double")
    update_velocity_from_laplacian_pyst_kernel = (
        gen_update_velocity_from_laplacian_pyst_kernel_3d(
            real_t=real_t, check_finite=True
        )
    )
    displacement_field = np.zeros((6, 6, 6), dtype=real_t)
    displacement_field[3, 3, 3] = np.nan
    with pytest.raises(FloatingPointError, match="update_velocity_from_laplacian"):
        update_velocity_from_laplacian_pyst_kernel(
            velocity_field=np.zeros_like(displacement_field),
            displacement_field=displacement_field,
            alpha_field=np.ones_like(displacement_field),
            dt=0.1,
            inv_dx2=1.0,
            inv_dy2=1.0,
            inv_dz2=1.0,
        )
