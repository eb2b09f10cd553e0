"""
Flow state representation using conservative variables.

State is defined by:
    rho   - density
    rhoU  - x-momentum per volume
    rhoV  - y-momentum per volume (2D only)
    rhoE  - total energy per volume

Arrays carry the component index first: (3, ...) in 1D, (4, ...) in 2D.
"""

from dataclasses import dataclass
from typing import NamedTuple, Optional

import numpy as np

from .errors import check_physical
from .gas import GasProperties


class Primitives(NamedTuple):
    """Primitive and derived quantities of a conserved state."""
    rho: np.ndarray
    u: np.ndarray
    v: Optional[np.ndarray]
    p: np.ndarray
    a: np.ndarray
    H: np.ndarray
    E: np.ndarray


def primitives(U: np.ndarray, gas: GasProperties, check: bool = True,
               where: str = 'state') -> Primitives:
    """
    Convert conservative variables to primitives.

    Args:
        U: Conservative variables, shape (3, ...) or (4, ...)
        gas: Gas properties
        check: Raise InvalidStateError on non-positive density or pressure
        where: Location label used in the error message

    Returns:
        Primitives(rho, u, v, p, a, H, E); v is None for 1D states
    """
    rho = U[0]
    if check:
        check_physical(rho, np.ones_like(rho), where)

    u = U[1] / rho
    if U.shape[0] == 4:
        v = U[2] / rho
        ke = 0.5 * rho * (u**2 + v**2)
    else:
        v = None
        ke = 0.5 * rho * u**2
    rhoE = U[-1]

    # p = (gamma - 1) * (rhoE - 0.5 * rho * |u|²)
    p = gas.gm1 * (rhoE - ke)
    if check:
        check_physical(rho, p, where)

    a = np.sqrt(gas.gamma * p / rho)
    H = (rhoE + p) / rho
    E = rhoE / rho
    return Primitives(rho=rho, u=u, v=v, p=p, a=a, H=H, E=E)


def conserved(rho, u, p, gas: GasProperties, v=None) -> np.ndarray:
    """
    Convert primitive variables to conservative variables.

    Returns:
        U: [rho, rhoU, rhoE] or [rho, rhoU, rhoV, rhoE] when v is given
    """
    rho = np.asarray(rho, dtype=float)
    u = np.broadcast_to(np.asarray(u, dtype=float), rho.shape)
    p = np.broadcast_to(np.asarray(p, dtype=float), rho.shape)
    check_physical(rho, p, 'initial condition')

    if v is None:
        # rhoE = p / (gamma - 1) + 0.5 * rho * u²
        return np.stack([rho, rho * u, p / gas.gm1 + 0.5 * rho * u**2])

    v = np.broadcast_to(np.asarray(v, dtype=float), rho.shape)
    return np.stack([rho, rho * u, rho * v,
                     p / gas.gm1 + 0.5 * rho * (u**2 + v**2)])


@dataclass
class FlowState:
    """
    Represents the flow state at a point or cell using conservative variables.

    Conservative variables (stored directly):
        rho  : Density
        rhoU : x-momentum per volume
        rhoE : Total energy per volume
        rhoV : y-momentum per volume, None for 1D flows

    Primitive variables (computed as properties):
        u, v, p, T, a, M, H, E, e
    """
    rho: np.ndarray
    rhoU: np.ndarray
    rhoE: np.ndarray
    gas: GasProperties
    rhoV: Optional[np.ndarray] = None

    @property
    def ndim(self) -> int:
        return 1 if self.rhoV is None else 2

    # --- Primitive variables as properties ---

    @property
    def u(self) -> np.ndarray:
        """x-velocity."""
        return self.rhoU / self.rho

    @property
    def v(self) -> np.ndarray:
        """y-velocity (zero for 1D flows)."""
        if self.rhoV is None:
            return np.zeros_like(self.rho)
        return self.rhoV / self.rho

    @property
    def p(self) -> np.ndarray:
        """Pressure from total energy."""
        return self.gas.gm1 * (self.rhoE - 0.5 * self.rho * (self.u**2 + self.v**2))

    @property
    def T(self) -> np.ndarray:
        """Temperature from ideal gas law, for reporting only."""
        return self.p / (self.rho * self.gas.R)

    @property
    def e(self) -> np.ndarray:
        """Specific internal energy."""
        return self.p / (self.rho * self.gas.gm1)

    @property
    def E(self) -> np.ndarray:
        """Total specific energy."""
        return self.rhoE / self.rho

    @property
    def H(self) -> np.ndarray:
        """Total specific enthalpy."""
        return self.E + self.p / self.rho

    @property
    def a(self) -> np.ndarray:
        """Speed of sound."""
        return np.sqrt(self.gas.gamma * self.p / self.rho)

    @property
    def M(self) -> np.ndarray:
        """Mach number."""
        return np.sqrt(self.u**2 + self.v**2) / self.a

    def validate(self, where: str = 'state') -> 'FlowState':
        """Raise InvalidStateError if density or pressure is non-positive."""
        check_physical(self.rho, self.p, where)
        return self

    # --- Array conversion methods ---

    def to_array(self) -> np.ndarray:
        """
        Convert to conservative variable array.

        Returns:
            U: [rho, rhoU, rhoE] (1D) or [rho, rhoU, rhoV, rhoE] (2D)
        """
        if self.rhoV is None:
            return np.stack([self.rho, self.rhoU, self.rhoE])
        return np.stack([self.rho, self.rhoU, self.rhoV, self.rhoE])

    @classmethod
    def from_array(cls, U: np.ndarray, gas: GasProperties) -> 'FlowState':
        """
        Create FlowState from conservative variable array.

        Args:
            U: Conservative variables with 3 (1D) or 4 (2D) components
            gas: Gas properties
        """
        if U.shape[0] == 4:
            return cls(rho=U[0], rhoU=U[1], rhoV=U[2], rhoE=U[3], gas=gas)
        return cls(rho=U[0], rhoU=U[1], rhoE=U[2], gas=gas)

    @classmethod
    def from_primitives(cls, rho, u, p, gas: GasProperties, v=None) -> 'FlowState':
        """
        Create FlowState from primitive variables.

        Args:
            rho: Density
            u: x-velocity
            p: Pressure
            gas: Gas properties
            v: y-velocity, gives a 2D state when provided
        """
        return cls.from_array(conserved(rho, u, p, gas, v=v), gas)
