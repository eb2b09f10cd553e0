"""
HLLE fluxes for the 2D Euler equations.

States are (4, ...) arrays of [rho, rhoU, rhoV, rhoE]; any trailing shape
is accepted, so whole face or vertex arrays can be passed at once.

Corner flux
-----------
At a vertex shared by the cells SW, SE, NW, NE the strongly interacting
region is bounded by four signal speeds:

    sW, sE : x-speeds from the south (SW|SE) and north (NW|NE) Roe pairs
    sS, sN : y-speeds from the west (SW|NW) and east (SE|NE) Roe pairs

each clipped so the interval contains zero. The corner x-flux is the HLL
blend of the west column average against the east column average using
(sW, sE); the corner y-flux blends the south row against the north row
using (sS, sN). A uniform neighbourhood returns the physical flux.
"""

from typing import Tuple

import numpy as np

from .flux import hll_blend
from .gas import GasProperties
from .state import Primitives, primitives


def physical_flux_normal(W: Primitives, nx: float, ny: float) -> np.ndarray:
    """Physical flux through a face with unit normal (nx, ny)."""
    vn = W.u * nx + W.v * ny
    rho_vn = W.rho * vn
    return np.stack([rho_vn,
                     rho_vn * W.u + W.p * nx,
                     rho_vn * W.v + W.p * ny,
                     rho_vn * W.H])


def roe_average_2d(WL: Primitives, WR: Primitives, gas: GasProperties):
    """
    Roe averages across a pair of 2D states.

    Returns:
        u_roe, v_roe, a_roe
    """
    RT = np.sqrt(WR.rho / WL.rho)
    u = (WL.u + RT * WR.u) / (1.0 + RT)
    v = (WL.v + RT * WR.v) / (1.0 + RT)
    H = (WL.H + RT * WR.H) / (1.0 + RT)
    a = np.sqrt(gas.gm1 * (H - 0.5 * (u**2 + v**2)))
    return u, v, a


def hlle_flux_normal(UL: np.ndarray, UR: np.ndarray, nx: float, ny: float,
                     gas: GasProperties) -> np.ndarray:
    """
    HLLE flux through a face with unit normal (nx, ny).

    Args:
        UL: States on the side the normal points away from (4, ...)
        UR: States on the side the normal points into (4, ...)
        nx, ny: Face normal components
        gas: Gas properties
    """
    WL = primitives(UL, gas, where='left face states')
    WR = primitives(UR, gas, where='right face states')

    vnL = WL.u * nx + WL.v * ny
    vnR = WR.u * nx + WR.v * ny
    u, v, a = roe_average_2d(WL, WR, gas)
    vn = u * nx + v * ny

    SL = np.minimum(np.minimum(vnL - WL.a, vn - a), 0.0)
    SR = np.maximum(np.maximum(vnR + WR.a, vn + a), 0.0)

    FL = physical_flux_normal(WL, nx, ny)
    FR = physical_flux_normal(WR, nx, ny)
    return hll_blend(FL, FR, UL, UR, SL, SR)


def _pair_bounds(WA: Primitives, WB: Primitives, gas: GasProperties, axis: int):
    """Lower bound from A and upper bound from B along one axis."""
    u, v, a = roe_average_2d(WA, WB, gas)
    qA, qB, q_roe = (WA.u, WB.u, u) if axis == 0 else (WA.v, WB.v, v)
    s_min = np.minimum(qA - WA.a, q_roe - a)
    s_max = np.maximum(qB + WB.a, q_roe + a)
    return s_min, s_max


def hlle_corner_flux(USW: np.ndarray, USE: np.ndarray, UNW: np.ndarray,
                     UNE: np.ndarray, gas: GasProperties) -> Tuple[np.ndarray, np.ndarray]:
    """
    Genuinely two-dimensional HLLE flux at the vertex shared by four cells.

    Args:
        USW, USE, UNW, UNE: Conservative states of the four cells (4, ...)
        gas: Gas properties

    Returns:
        F: Corner x-flux (4, ...)
        G: Corner y-flux (4, ...)
    """
    WSW = primitives(USW, gas, where='corner states')
    WSE = primitives(USE, gas, where='corner states')
    WNW = primitives(UNW, gas, where='corner states')
    WNE = primitives(UNE, gas, where='corner states')

    # x-bounds along the south and north rows
    sS_min, sS_max = _pair_bounds(WSW, WSE, gas, axis=0)
    sN_min, sN_max = _pair_bounds(WNW, WNE, gas, axis=0)
    # y-bounds along the west and east columns
    sW_min, sW_max = _pair_bounds(WSW, WNW, gas, axis=1)
    sE_min, sE_max = _pair_bounds(WSE, WNE, gas, axis=1)

    # The interaction region is the square [sW, sE] x [sS, sN]
    sW = np.minimum(np.minimum(sS_min, sN_min), 0.0)
    sE = np.maximum(np.maximum(sS_max, sN_max), 0.0)
    sS = np.minimum(np.minimum(sW_min, sE_min), 0.0)
    sN = np.maximum(np.maximum(sW_max, sE_max), 0.0)

    # x-flux: west column against east column
    F_west = 0.5 * (physical_flux_normal(WSW, 1.0, 0.0) + physical_flux_normal(WNW, 1.0, 0.0))
    F_east = 0.5 * (physical_flux_normal(WSE, 1.0, 0.0) + physical_flux_normal(WNE, 1.0, 0.0))
    F = hll_blend(F_west, F_east, 0.5 * (USW + UNW), 0.5 * (USE + UNE), sW, sE)

    # y-flux: south row against north row
    G_south = 0.5 * (physical_flux_normal(WSW, 0.0, 1.0) + physical_flux_normal(WSE, 0.0, 1.0))
    G_north = 0.5 * (physical_flux_normal(WNW, 0.0, 1.0) + physical_flux_normal(WNE, 0.0, 1.0))
    G = hll_blend(G_south, G_north, 0.5 * (USW + USE), 0.5 * (UNW + UNE), sS, sN)

    return F, G
