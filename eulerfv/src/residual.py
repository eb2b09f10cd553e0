"""
Residual assembly for the semi-discrete system dU/dt = -L(U).

Every face flux is computed once into a single array and the residual is
the difference of that array, so the flux leaving one cell is bit-for-bit
the flux entering its neighbour:

    L_i = (F_{i+1/2} - F_{i-1/2}) / dx

Ghost cells keep a zero residual.
"""

from typing import Tuple

import numpy as np

from .boundary import BoundaryCondition
from .errors import ConfigurationError
from .flux import FluxScheme
from .flux2d import hlle_corner_flux, hlle_flux_normal
from .gas import GasProperties
from .mesh import Mesh1D, Mesh2D
from .reconstruction import reconstruct
from .schemes import FluxMethod2D, ReconstructionMethod
from .state import primitives


def compute_face_fluxes_1d(U: np.ndarray, mesh: Mesh1D, gas: GasProperties,
                           reconstruction: ReconstructionMethod, flux_scheme: FluxScheme,
                           bc_left: BoundaryCondition, bc_right: BoundaryCondition) -> np.ndarray:
    """
    Numerical fluxes at all n_cells + 1 faces of the interior cells.

    Args:
        U: Conservative variables with ghost cells (3, n_cells + 2*R)
        mesh: Computational mesh, n_ghost must equal the stencil half-width R
        gas: Gas properties
        reconstruction: Reconstruction method
        flux_scheme: Numerical flux scheme
        bc_left, bc_right: Boundary conditions

    Returns:
        F: Face fluxes (3, n_cells + 1); F[:, 0] and F[:, -1] are the domain edges
    """
    reconstruction = ReconstructionMethod.parse(reconstruction)
    if reconstruction.n_ghost != mesh.n_ghost:
        raise ConfigurationError(f"{reconstruction.name} needs {reconstruction.n_ghost} "
                                 f"ghost cells, mesh has {mesh.n_ghost}")
    if U.shape[-1] != mesh.n_total:
        raise ConfigurationError(f"State has {U.shape[-1]} cells, mesh expects {mesh.n_total}")

    # Ghost cells are filled on a copy; the caller's state is left untouched
    U_ghost = U.copy()
    bc_left.apply(U_ghost, mesh.n_ghost, 'left')
    bc_right.apply(U_ghost, mesh.n_ghost, 'right')
    primitives(U_ghost, gas, where='reconstruction input')

    UL, UR = reconstruct(U_ghost, reconstruction)

    # Domain-edge faces take their exterior state from the interior face state
    UL[:, 0] = bc_left.exterior_state(UR[:, 0])
    UR[:, -1] = bc_right.exterior_state(UL[:, -1])

    return flux_scheme.compute_flux_vectorized(UL, UR, gas)


def compute_residual_1d(U: np.ndarray, mesh: Mesh1D, gas: GasProperties,
                        reconstruction: ReconstructionMethod, flux_scheme: FluxScheme,
                        bc_left: BoundaryCondition, bc_right: BoundaryCondition) -> np.ndarray:
    """
    Residual L(U) of the 1D finite volume discretisation.

    Returns:
        L: Residual with the shape of U, zero in the ghost cells
    """
    F = compute_face_fluxes_1d(U, mesh, gas, reconstruction, flux_scheme, bc_left, bc_right)

    L = np.zeros_like(U)
    L[:, mesh.interior] = (F[:, 1:] - F[:, :-1]) / mesh.dx
    return L


def fill_transmissive_2d(U: np.ndarray) -> np.ndarray:
    """Copy the edge cells into the single ghost layer, corners included."""
    U[:, 0, :] = U[:, 1, :]
    U[:, -1, :] = U[:, -2, :]
    U[:, :, 0] = U[:, :, 1]
    U[:, :, -1] = U[:, :, -2]
    return U


def compute_face_fluxes_2d(U: np.ndarray, mesh: Mesh2D, gas: GasProperties,
                           flux_method: FluxMethod2D) -> Tuple[np.ndarray, np.ndarray]:
    """
    Numerical fluxes through all faces of the interior cells.

    Face (i+1/2, j) is bounded by the vertices (i+1/2, j-1/2) and
    (i+1/2, j+1/2), which are corners c(i, j-1) and c(i, j). For HLLE2D the
    face flux integrates the edge with Simpson's rule:

        F_{i+1/2,j} = (F_c(i,j) + 4 F_x(i,j) + F_c(i,j-1)) / 6
        G_{i,j+1/2} = (G_c(i,j) + 4 G_y(i,j) + G_c(i-1,j)) / 6

    The ghost layer is a copy of the edge cells, so every domain-edge face
    sees an exterior state equal to its interior neighbour, corners
    included.

    Args:
        U: Conservative variables with one ghost layer (4, nx + 2, ny + 2)
        mesh: Computational mesh
        gas: Gas properties
        flux_method: HLLE1D (dimensionally split) or HLLE2D (corner blend)

    Returns:
        Fx: x-face fluxes (4, nx + 1, ny), Fx[:, 0] and Fx[:, -1] at the domain edges
        Gy: y-face fluxes (4, nx, ny + 1), Gy[:, :, 0] and Gy[:, :, -1] at the domain edges
    """
    flux_method = FluxMethod2D.parse(flux_method)
    if U.shape[1:] != mesh.shape:
        raise ConfigurationError(f"State shape {U.shape[1:]} does not match mesh {mesh.shape}")

    U_ghost = fill_transmissive_2d(U.copy())
    primitives(U_ghost, gas, where='reconstruction input')

    # Normal fluxes between every pair of neighbouring cells
    Fx = hlle_flux_normal(U_ghost[:, :-1, :], U_ghost[:, 1:, :], 1.0, 0.0, gas)
    Gy = hlle_flux_normal(U_ghost[:, :, :-1], U_ghost[:, :, 1:], 0.0, 1.0, gas)

    if flux_method is FluxMethod2D.HLLE1D:
        return Fx[:, :, 1:-1], Gy[:, 1:-1, :]

    # Corner (i, j) sits at the vertex (i+1/2, j+1/2)
    Fc, Gc = hlle_corner_flux(U_ghost[:, :-1, :-1], U_ghost[:, 1:, :-1],
                              U_ghost[:, :-1, 1:], U_ghost[:, 1:, 1:], gas)
    Fx_faces = (Fc[:, :, 1:] + 4.0 * Fx[:, :, 1:-1] + Fc[:, :, :-1]) / 6.0
    Gy_faces = (Gc[:, 1:, :] + 4.0 * Gy[:, 1:-1, :] + Gc[:, :-1, :]) / 6.0
    return Fx_faces, Gy_faces


def compute_residual_2d(U: np.ndarray, mesh: Mesh2D, gas: GasProperties,
                        flux_method: FluxMethod2D) -> np.ndarray:
    """
    Residual L(U) of the 2D finite volume discretisation.

    Returns:
        L: Residual with the shape of U, zero in the ghost layer
    """
    Fx, Gy = compute_face_fluxes_2d(U, mesh, gas, flux_method)

    L = np.zeros_like(U)
    L[:, 1:-1, 1:-1] = ((Fx[:, 1:, :] - Fx[:, :-1, :]) / mesh.dx
                        + (Gy[:, :, 1:] - Gy[:, :, :-1]) / mesh.dy)
    return L
