"""
Explicit strong-stability-preserving time integration and CFL time steps.

The integrators take the full ghosted state and a residual callable L with
dU/dt = -L(U). They never inspect the spatial discretisation.
"""

from typing import Callable

import numpy as np

from .gas import GasProperties
from .mesh import Mesh1D, Mesh2D
from .schemes import TimeScheme
from .state import primitives

Residual = Callable[[np.ndarray], np.ndarray]


def forward_euler_step(U: np.ndarray, dt: float, residual: Residual) -> np.ndarray:
    """
    Forward Euler time step (1 residual evaluation).

    The building block of the SSP schemes below: they are stable under the
    same dt bound as this step.
    """
    return U - dt * residual(U)


def ssp_rk2_step(U: np.ndarray, dt: float, residual: Residual) -> np.ndarray:
    """2nd-order Strong Stability Preserving Runge-Kutta (Heun form)."""
    U1 = U - dt * residual(U)
    return 0.5 * U + 0.5 * (U1 - dt * residual(U1))


def ssp_rk3_step(U: np.ndarray, dt: float, residual: Residual) -> np.ndarray:
    """
    3rd-order Strong Stability Preserving Runge-Kutta (Shu-Osher).

        U1 = U0 - dt L(U0)
        U2 = 3/4 U0 + 1/4 (U1 - dt L(U1))
        U  = 1/3 U0 + 2/3 (U2 - dt L(U2))

    Args:
        U: Conservative variables including ghost cells
        dt: Time step
        residual: Callable returning L(U)

    Returns:
        U_new: Updated conservative variables
    """
    U0 = U
    U1 = U0 - dt * residual(U0)
    U2 = 0.75 * U0 + 0.25 * (U1 - dt * residual(U1))
    return (U0 + 2.0 * (U2 - dt * residual(U2))) / 3.0


TIME_SCHEMES = {
    TimeScheme.SSPRK3: ssp_rk3_step,
    TimeScheme.SSPRK2: ssp_rk2_step,
    TimeScheme.EULER: forward_euler_step,
}


def compute_timestep_1d(U: np.ndarray, mesh: Mesh1D, gas: GasProperties,
                        cfl: float) -> float:
    """
    Compute time step based on CFL condition: dt = cfl * dx / max(|u| + a).

    Args:
        U: Conservative variables of the interior cells
        mesh: Computational mesh
        gas: Gas properties
        cfl: CFL number
    """
    W = primitives(U, gas, where='time step')
    wave_speed = np.max(np.abs(W.u) + W.a)
    return cfl * mesh.dx / wave_speed


def compute_timestep_2d(U: np.ndarray, mesh: Mesh2D, gas: GasProperties,
                        cfl: float) -> float:
    """Unsplit CFL condition: dt = cfl / max((|u| + a)/dx + (|v| + a)/dy)."""
    W = primitives(U, gas, where='time step')
    rate = (np.abs(W.u) + W.a) / mesh.dx + (np.abs(W.v) + W.a) / mesh.dy
    return cfl / np.max(rate)
