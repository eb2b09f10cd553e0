"""
Boundary conditions for the 1D solver.

A boundary condition does two things:

- fills the ghost cells so interior stencils can be evaluated uniformly;
- supplies the exterior state at the domain-edge face from the interior
  face state, instead of a stencil reconstruction.
"""

from abc import ABC, abstractmethod

import numpy as np


class BoundaryCondition(ABC):
    """Abstract base class for boundary conditions."""

    @abstractmethod
    def apply(self, U: np.ndarray, n_ghost: int, side: str) -> np.ndarray:
        """
        Fill ghost cells in place.

        Args:
            U: Conservative variables including ghost cells (n_vars, n_total)
            n_ghost: Ghost cells on each side
            side: 'left' or 'right'

        Returns:
            Modified U with ghost cells set
        """

    @abstractmethod
    def exterior_state(self, U_face: np.ndarray) -> np.ndarray:
        """Exterior state at the edge face from the interior-side face state (n_vars,)."""


class TransmissiveBC(BoundaryCondition):
    """
    Zero-gradient outflow: ghost cells copy the edge cell and the exterior
    face state copies the interior one.
    """

    def apply(self, U, n_ghost, side):
        if side == 'left':
            U[:, :n_ghost] = U[:, n_ghost:n_ghost + 1]
        elif side == 'right':
            U[:, -n_ghost:] = U[:, -n_ghost - 1:-n_ghost]
        return U

    def exterior_state(self, U_face):
        return U_face.copy()


class ReflectiveBC(BoundaryCondition):
    """
    Inviscid wall (slip): zero normal velocity.
    Mirrors the interior cells and reflects the momentum.
    """

    def apply(self, U, n_ghost, side):
        if side == 'left':
            # Ghost k mirrors interior cell 2*n_ghost - 1 - k
            mirror = U[:, n_ghost:2 * n_ghost][:, ::-1]
            U[:, :n_ghost] = mirror
            U[1, :n_ghost] = -mirror[1]
        elif side == 'right':
            mirror = U[:, -2 * n_ghost:-n_ghost][:, ::-1]
            U[:, -n_ghost:] = mirror
            U[1, -n_ghost:] = -mirror[1]
        return U

    def exterior_state(self, U_face):
        U_ext = U_face.copy()
        U_ext[1] = -U_face[1]
        return U_ext
