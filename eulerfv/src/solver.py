"""
Solver classes driving the time-marching loop for 1D and 2D flows.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Dict, Optional

import numpy as np

from .boundary import BoundaryCondition, TransmissiveBC
from .errors import ConfigurationError
from .flux import get_flux_scheme
from .gas import GasProperties
from .mesh import Mesh1D, Mesh2D
from .residual import compute_residual_1d, compute_residual_2d, fill_transmissive_2d
from .schemes import FluxMethod2D, ReconstructionMethod, TimeScheme
from .state import FlowState, primitives
from .timestepping import TIME_SCHEMES, compute_timestep_1d, compute_timestep_2d

logger = logging.getLogger(__name__)


@dataclass
class SolverConfig:
    """Configuration for the finite volume solvers."""
    cfl: float = 0.55
    t_final: float = 0.2
    reconstruction: str = 'WENO5'   # WENO5, WENO7, POLY5, POLY7, MUSCL
    flux: str = 'HLLC'              # HLLE, HLLC, ROE, LF, RUS, AUSM
    flux_2d: str = 'HLLE2D'         # HLLE1D, HLLE2D
    time_scheme: str = 'ssprk3'     # ssprk3, ssprk2, euler
    max_iter: int = 100000
    print_interval: int = 100


class BaseSolver(ABC):
    """
    Shared time-marching loop.

    The solver exclusively owns the ghosted state U, the time, the last time
    step and the iteration counter. A step either completes and replaces U,
    or raises and leaves the previous state in place.
    """

    def __init__(self, gas: GasProperties, config: Optional[SolverConfig] = None):
        self.gas = gas
        self.config = config if config is not None else SolverConfig()

        if not self.config.cfl > 0:
            raise ConfigurationError(f"CFL number must be positive, got {self.config.cfl}")
        if not self.config.t_final >= 0:
            raise ConfigurationError(f"Final time must be non-negative, got {self.config.t_final}")
        if self.config.max_iter < 0:
            raise ConfigurationError(f"max_iter must be non-negative, got {self.config.max_iter}")
        if self.config.print_interval <= 0:
            raise ConfigurationError(f"print_interval must be positive, "
                                     f"got {self.config.print_interval}")

        self.time_scheme = TimeScheme.parse(self.config.time_scheme)
        self.time_step_func = TIME_SCHEMES[self.time_scheme]

        # Solution storage
        self.U = None
        self.time = 0.0
        self.dt = None
        self.iteration = 0

    @abstractmethod
    def residual(self, U: np.ndarray) -> np.ndarray:
        """Residual L(U) of dU/dt = -L(U) on the ghosted state."""

    @abstractmethod
    def interior(self, U: np.ndarray) -> np.ndarray:
        """View of the interior cells of a ghosted state."""

    @abstractmethod
    def compute_timestep(self) -> float:
        """CFL-limited time step of the current state."""

    @abstractmethod
    def scheme_label(self) -> str:
        pass

    def get_state(self) -> FlowState:
        """Current flow state without ghost cells."""
        self._require_initial_condition()
        return FlowState.from_array(self.interior(self.U).copy(), self.gas)

    def _require_initial_condition(self):
        if self.U is None:
            raise ConfigurationError("Initial condition must be set before stepping")

    def _reset(self, U: np.ndarray):
        self.U = U
        self.time = 0.0
        self.iteration = 0
        self.dt = self.compute_timestep()

    def advance(self, dt: float) -> FlowState:
        """
        Perform one full time step of size dt.

        Returns:
            The new flow state
        """
        self._require_initial_condition()
        U_new = self.time_step_func(self.U, dt, self.residual)
        primitives(self.interior(U_new), self.gas, where='post-step state')

        self.U = U_new
        self.time += dt
        self.iteration += 1
        return self.get_state()

    def step(self) -> float:
        """
        Perform one CFL-limited time step, clipped at the final time.
        Once the final time is reached this is a no-op returning 0.

        Returns:
            dt: Time step taken
        """
        self._require_initial_condition()
        t_final = self.config.t_final
        if self.time >= t_final:
            return 0.0
        dt = self.compute_timestep()

        last = self.time + dt >= t_final
        if last:
            dt = t_final - self.time

        self.advance(dt)
        if last:
            self.time = t_final
        self.dt = dt
        return dt

    def solve(self) -> Dict:
        """
        Run the solver to the final time.

        Returns:
            Dictionary with run info
        """
        self._require_initial_condition()
        t_final = self.config.t_final

        logger.info("Starting %s solver: %s, CFL = %g, t_final = %g",
                    type(self).__name__, self.scheme_label(), self.config.cfl, t_final)

        while self.time < t_final:
            if self.iteration >= self.config.max_iter:
                logger.warning("Stopped at max_iter = %d before t_final (t = %.6e)",
                               self.config.max_iter, self.time)
                break

            dt = self.step()

            if self.iteration % self.config.print_interval == 0:
                logger.info("Iter %6d, t = %.6e, dt = %.6e", self.iteration, self.time, dt)

        completed = self.time >= t_final
        if completed:
            logger.info("Reached t = %.6e in %d iterations", self.time, self.iteration)

        return {
            'completed': completed,
            'iterations': self.iteration,
            'time': self.time,
            'dt': self.dt,
        }


class Solver1D(BaseSolver):
    """
    1D Euler solver: WENO/polynomial reconstruction, approximate Riemann
    fluxes and SSP Runge-Kutta time stepping.

    The ghost-cell width follows the reconstruction stencil, so the mesh is
    re-laid out with R ghost cells if it was built with a different width.
    """

    def __init__(self, mesh: Mesh1D, gas: GasProperties, config: Optional[SolverConfig] = None,
                 bc_left: Optional[BoundaryCondition] = None,
                 bc_right: Optional[BoundaryCondition] = None):
        super().__init__(gas, config)

        # Scheme names are resolved once here
        self.reconstruction = ReconstructionMethod.parse(self.config.reconstruction)
        self.flux_scheme = get_flux_scheme(self.config.flux)

        R = self.reconstruction.n_ghost
        if mesh.n_cells <= 2 * R:
            raise ConfigurationError(f"{mesh.n_cells} cells are too few for "
                                     f"{self.reconstruction.name} (needs more than {2 * R})")
        self.mesh = mesh if mesh.n_ghost == R else Mesh1D(mesh.x_faces, n_ghost=R)

        self.bc_left = bc_left if bc_left is not None else TransmissiveBC()
        self.bc_right = bc_right if bc_right is not None else TransmissiveBC()

    def scheme_label(self) -> str:
        return (f"{self.reconstruction.name}-{type(self.flux_scheme).__name__}-"
                f"{self.time_scheme.name}, {self.mesh.n_cells} cells")

    def set_boundary_conditions(self, bc_left: BoundaryCondition,
                                bc_right: BoundaryCondition):
        """Set boundary conditions."""
        self.bc_left = bc_left
        self.bc_right = bc_right

    def set_initial_condition(self, state: FlowState):
        """Set the initial flow state (interior cells)."""
        if np.shape(state.rho) != (self.mesh.n_cells,):
            raise ConfigurationError(f"Initial state has shape {np.shape(state.rho)}, "
                                     f"mesh has {self.mesh.n_cells} cells")
        state.validate('initial condition')
        U = self.mesh.with_ghosts(state.to_array())
        self.bc_left.apply(U, self.mesh.n_ghost, 'left')
        self.bc_right.apply(U, self.mesh.n_ghost, 'right')
        self._reset(U)

    def residual(self, U):
        return compute_residual_1d(U, self.mesh, self.gas, self.reconstruction,
                                   self.flux_scheme, self.bc_left, self.bc_right)

    def interior(self, U):
        return U[:, self.mesh.interior]

    def compute_timestep(self):
        return compute_timestep_1d(self.interior(self.U), self.mesh, self.gas, self.config.cfl)


class Solver2D(BaseSolver):
    """
    2D Euler solver on a uniform grid with transmissive boundaries, using
    dimensionally split (HLLE1D) or corner-blended (HLLE2D) HLLE fluxes.
    """

    def __init__(self, mesh: Mesh2D, gas: GasProperties, config: Optional[SolverConfig] = None):
        super().__init__(gas, config)
        self.mesh = mesh
        self.flux_method = FluxMethod2D.parse(self.config.flux_2d)

    def scheme_label(self) -> str:
        return (f"{self.flux_method.name}-{self.time_scheme.name}, "
                f"{self.mesh.nx}x{self.mesh.ny} cells")

    def set_initial_condition(self, state: FlowState):
        """Set the initial flow state (interior cells, 2D)."""
        if state.rhoV is None:
            raise ConfigurationError("Solver2D needs a 2D state (rhoV is missing)")
        if np.shape(state.rho) != (self.mesh.nx, self.mesh.ny):
            raise ConfigurationError(f"Initial state has shape {np.shape(state.rho)}, "
                                     f"mesh has {self.mesh.nx}x{self.mesh.ny} cells")
        state.validate('initial condition')
        U = fill_transmissive_2d(self.mesh.with_ghosts(state.to_array()))
        self._reset(U)

    def residual(self, U):
        return compute_residual_2d(U, self.mesh, self.gas, self.flux_method)

    def interior(self, U):
        return U[:, 1:-1, 1:-1]

    def compute_timestep(self):
        return compute_timestep_2d(self.interior(self.U), self.mesh, self.gas, self.config.cfl)
