"""
High-Order Finite Volume Euler Solver Package
=============================================

Explicit finite volume solvers for the compressible Euler equations of an
ideal gas on uniform structured grids.

Features:
- WENO5 / WENO7 reconstruction, POLY5 / POLY7 polynomial fallback, MUSCL
- HLLE, HLLC, Roe, Lax-Friedrichs, Rusanov and AUSM fluxes in 1D
- Dimensionally split and genuinely 2D (corner-blended) HLLE fluxes in 2D
- SSP-RK3 time integration (SSP-RK2 and forward Euler also available)

State representation (conservative variables):
    rho   - density
    rhoU  - x-momentum per volume
    rhoV  - y-momentum per volume (2D)
    rhoE  - total energy per volume

Example:
    gas = GasProperties(gamma=1.4)
    mesh = Mesh1D.uniform(0.0, 1.0, 200)
    solver = Solver1D(mesh, gas, SolverConfig(reconstruction='WENO7', flux='HLLC'))

    rho = np.where(mesh.x_cells < 0.5, 1.0, 0.125)
    p = np.where(mesh.x_cells < 0.5, 1.0, 0.1)
    solver.set_initial_condition(FlowState.from_primitives(rho, 0.0, p, gas))
    solver.solve()

    state = solver.get_state()
    print(state.rho, state.u, state.p)
"""

from .errors import (EulerFVError, InvalidStateError, ConfigurationError,
                     NumericDegeneracyError)
from .gas import GasProperties
from .state import FlowState, Primitives, primitives, conserved
from .mesh import Mesh1D, Mesh2D
from .schemes import ReconstructionMethod, FluxMethod, FluxMethod2D, TimeScheme
from .reconstruction import reconstruct, reconstruct_face
from .flux import (FluxScheme, HLLEFlux, HLLCFlux, RoeFlux, LaxFriedrichsFlux,
                   RusanovFlux, AUSMFlux, get_flux_scheme)
from .flux2d import hlle_flux_normal, hlle_corner_flux
from .boundary import BoundaryCondition, TransmissiveBC, ReflectiveBC
from .residual import compute_residual_1d, compute_residual_2d
from .timestepping import ssp_rk3_step
from .solver import Solver1D, Solver2D, SolverConfig

__all__ = [
    # Errors
    'EulerFVError',
    'InvalidStateError',
    'ConfigurationError',
    'NumericDegeneracyError',

    # Gas properties and state
    'GasProperties',
    'FlowState',
    'Primitives',
    'primitives',
    'conserved',

    # Mesh
    'Mesh1D',
    'Mesh2D',

    # Scheme selection
    'ReconstructionMethod',
    'FluxMethod',
    'FluxMethod2D',
    'TimeScheme',

    # Reconstruction
    'reconstruct',
    'reconstruct_face',

    # Flux schemes
    'FluxScheme',
    'HLLEFlux',
    'HLLCFlux',
    'RoeFlux',
    'LaxFriedrichsFlux',
    'RusanovFlux',
    'AUSMFlux',
    'get_flux_scheme',
    'hlle_flux_normal',
    'hlle_corner_flux',

    # Boundary conditions
    'BoundaryCondition',
    'TransmissiveBC',
    'ReflectiveBC',

    # Residuals and time stepping
    'compute_residual_1d',
    'compute_residual_2d',
    'ssp_rk3_step',

    # Solver
    'Solver1D',
    'Solver2D',
    'SolverConfig',
]

__version__ = '1.0.0'
