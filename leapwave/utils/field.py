"""Vector field layout and kernel argument checks."""
import numpy as np


class VectorField:
    """
    Layout of vector fields on the 3D grid.

    A vector field is stored as a single (3, nx, ny, nz) array, the leading
    axis holding the x, y and z components. Grid axis 0 is x, axis 1 is y and
    axis 2 is z.
    """

    @staticmethod
    def x_axis_idx() -> int:
        """
        Returns index of X component in a vector field

        Returns
        -------
        0, static value
        """
        return 0

    @staticmethod
    def y_axis_idx() -> int:
        """
        Returns index of Y component in a vector field

        Returns
        -------
        1, static value
        """
        return 1

    @staticmethod
    def z_axis_idx() -> int:
        """
        Returns index of Z component in a vector field

        Returns
        -------
        2, static value
        """
        return 2

    @staticmethod
    def num_components() -> int:
        """Number of components of a 3D vector field."""
        return 3


def check_grid_fields(
    real_t: type,
    vector_fields: dict[str, np.ndarray] | None = None,
    scalar_fields: dict[str, np.ndarray] | None = None,
    written_field_names: tuple[str, ...] = (),
    fixed_grid_size: tuple[int, int, int] | bool = False,
    boundary_width: int = 1,
) -> tuple[int, int, int]:
    """Check the arrays handed to a grid kernel before it runs.

    Parameters
    ----------
    real_t : type
        Expected dtype of every array.
    vector_fields : dict
        Name to (3, nx, ny, nz) array.
    scalar_fields : dict
        Name to (nx, ny, nz) array.
    written_field_names : tuple of str
        Fields updated in place by the kernel. These may not share memory
        with any other field of the call.
    fixed_grid_size : tuple or bool
        Grid size the kernel was compiled for, if any.
    boundary_width : int
        Width of the border excluded by the kernel; every extent must leave
        at least one interior point.

    Returns
    -------
    grid_size : tuple of int
        The common (nx, ny, nz) of all fields.

    Raises
    ------
    ValueError
        On rank, shape, dtype or aliasing violations.
    """
    vector_fields = {} if vector_fields is None else vector_fields
    scalar_fields = {} if scalar_fields is None else scalar_fields
    num_components = VectorField.num_components()
    grid_sizes = {}
    for name, field in vector_fields.items():
        if field.ndim != 4 or field.shape[0] != num_components:
            raise ValueError(
                f"{name} must be a vector field of shape (3, nx, ny, nz), "
                f"got {field.shape}"
            )
        grid_sizes[name] = field.shape[1:]
    for name, field in scalar_fields.items():
        if field.ndim != 3:
            raise ValueError(
                f"{name} must be a scalar field of shape (nx, ny, nz), "
                f"got {field.shape}"
            )
        grid_sizes[name] = field.shape

    if len(set(grid_sizes.values())) > 1:
        raise ValueError(f"Grid shape mismatch between fields: {grid_sizes}")
    (grid_size,) = set(grid_sizes.values())

    min_extent = 2 * boundary_width + 1
    if min(grid_size) < min_extent:
        raise ValueError(
            f"Grid shape {grid_size} has no interior for a border of width "
            f"{boundary_width}, every extent must be at least {min_extent}"
        )
    if isinstance(fixed_grid_size, tuple) and grid_size != tuple(fixed_grid_size):
        raise ValueError(
            f"Kernel compiled for grid shape {tuple(fixed_grid_size)}, "
            f"got {grid_size}"
        )

    all_fields = {**vector_fields, **scalar_fields}
    for name, field in all_fields.items():
        if field.dtype != real_t:
            raise ValueError(
                f"{name} has dtype {field.dtype}, expected {np.dtype(real_t)}"
            )
    for written_name in written_field_names:
        written_field = all_fields[written_name]
        for name, field in all_fields.items():
            if name != written_name and np.shares_memory(written_field, field):
                raise ValueError(f"{written_name} shares memory with {name}")
    return grid_size
