"""
Uniform structured meshes with ghost-cell layout.

Cell-centered finite volume meshes. Layout and index slices are fixed at
construction; the solver reuses them for every residual evaluation.
"""

from dataclasses import dataclass, field

import numpy as np

from .errors import ConfigurationError


@dataclass
class Mesh1D:
    """
    Uniform 1D mesh with n_ghost ghost cells on each end.

    - x_faces: Face locations of the interior cells (n_cells + 1)
    - x_cells: Interior cell centers (n_cells)
    - dx: Cell width
    - interior: Slice selecting interior cells from a ghosted array
    """
    x_faces: np.ndarray
    n_ghost: int = 3

    def __post_init__(self):
        self.x_faces = np.asarray(self.x_faces, dtype=float)
        self.n_cells = len(self.x_faces) - 1
        if self.n_cells < 1:
            raise ConfigurationError("Mesh needs at least one cell")

        widths = np.diff(self.x_faces)
        self.dx = float(widths[0])
        if self.dx <= 0 or not np.allclose(widths, self.dx, rtol=1e-10, atol=0.0):
            raise ConfigurationError("Mesh1D requires uniform, increasing face locations")

        self.x_cells = 0.5 * (self.x_faces[:-1] + self.x_faces[1:])
        self.n_total = self.n_cells + 2 * self.n_ghost
        self.interior = slice(self.n_ghost, self.n_ghost + self.n_cells)

    @classmethod
    def uniform(cls, x_min: float, x_max: float, n_cells: int,
                n_ghost: int = 3) -> 'Mesh1D':
        """
        Create a uniform mesh.

        Args:
            x_min, x_max: Domain bounds
            n_cells: Number of interior cells
            n_ghost: Ghost cells on each end
        """
        x_faces = np.linspace(x_min, x_max, n_cells + 1)
        return cls(x_faces=x_faces, n_ghost=n_ghost)

    def with_ghosts(self, U: np.ndarray) -> np.ndarray:
        """Embed interior values (n_vars, n_cells) in a zeroed ghosted array."""
        U_ghost = np.zeros((U.shape[0], self.n_total))
        U_ghost[:, self.interior] = U
        return U_ghost


@dataclass
class Mesh2D:
    """
    Uniform 2D mesh with one ghost layer on every side.

    Arrays are indexed [component, i, j] with i along x and j along y.
    """
    nx: int
    ny: int
    dx: float
    dy: float
    x_min: float = 0.0
    y_min: float = 0.0
    n_ghost: int = field(default=1, init=False)

    def __post_init__(self):
        if self.nx < 2 or self.ny < 2:
            raise ConfigurationError(f"Mesh2D needs at least 2x2 cells, got {self.nx}x{self.ny}")
        if self.dx <= 0 or self.dy <= 0:
            raise ConfigurationError("Mesh2D spacings must be positive")

        self.x_cells = self.x_min + (np.arange(self.nx) + 0.5) * self.dx
        self.y_cells = self.y_min + (np.arange(self.ny) + 0.5) * self.dy
        self.shape = (self.nx + 2, self.ny + 2)
        self.interior = (slice(1, -1), slice(1, -1))

    @classmethod
    def uniform(cls, x_range, y_range, nx: int, ny: int) -> 'Mesh2D':
        """Create a uniform mesh over x_range x y_range."""
        (x0, x1), (y0, y1) = x_range, y_range
        return cls(nx=nx, ny=ny, dx=(x1 - x0) / nx, dy=(y1 - y0) / ny,
                   x_min=x0, y_min=y0)

    def cell_centers(self):
        """Meshgrid of interior cell centers, each (nx, ny)."""
        return np.meshgrid(self.x_cells, self.y_cells, indexing='ij')

    def with_ghosts(self, U: np.ndarray) -> np.ndarray:
        """Embed interior values (n_vars, nx, ny) in a zeroed ghosted array."""
        U_ghost = np.zeros((U.shape[0],) + self.shape)
        U_ghost[(slice(None),) + self.interior] = U
        return U_ghost
