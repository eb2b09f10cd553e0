"""
Numerical flux schemes for the 1D Euler equations.

All schemes are vectorized over faces: states are (3, n_faces) arrays of
[rho, rhoU, rhoE]. Face states are validated before any flux is formed.
"""

from abc import ABC, abstractmethod

import numpy as np

from .errors import NumericDegeneracyError
from .gas import GasProperties
from .schemes import FluxMethod
from .state import Primitives, primitives

# Harten entropy fix threshold, as a fraction of the Roe sound speed
ENTROPY_FIX = 0.1


def euler_flux(W: Primitives) -> np.ndarray:
    """Physical x-flux [rho u, rho u² + p, rho u H] from primitives."""
    rho_u = W.rho * W.u
    return np.stack([rho_u, rho_u * W.u + W.p, rho_u * W.H])


def roe_average(WL: Primitives, WR: Primitives, gas: GasProperties):
    """
    Roe-averaged velocity, total enthalpy and sound speed.

    Returns:
        u_roe, H_roe, a_roe
    """
    sqrt_rhoL = np.sqrt(WL.rho)
    sqrt_rhoR = np.sqrt(WR.rho)
    denom_inv = 1.0 / (sqrt_rhoL + sqrt_rhoR)

    u_roe = (sqrt_rhoL * WL.u + sqrt_rhoR * WR.u) * denom_inv
    H_roe = (sqrt_rhoL * WL.H + sqrt_rhoR * WR.H) * denom_inv
    a_roe = np.sqrt(gas.gm1 * (H_roe - 0.5 * u_roe**2))

    return u_roe, H_roe, a_roe


def hll_blend(FL: np.ndarray, FR: np.ndarray, UL: np.ndarray, UR: np.ndarray,
              SL: np.ndarray, SR: np.ndarray) -> np.ndarray:
    """
    Two-wave HLL flux given bounding signal speeds.

        S_L >= 0        : F_L
        S_R <= 0        : F_R
        S_L < 0 < S_R   : (S_R F_L - S_L F_R + S_L S_R (U_R - U_L)) / (S_R - S_L)
    """
    F = FR.copy()
    mask_left = SL >= 0
    F[:, mask_left] = FL[:, mask_left]

    mask_mid = (SL < 0) & (SR > 0)
    if np.any(mask_mid):
        SL_m = SL[mask_mid]
        SR_m = SR[mask_mid]
        denom = SR_m - SL_m
        if not np.all(np.isfinite(denom) & (denom > 0)):
            raise NumericDegeneracyError("Degenerate wave-speed estimate: S_R == S_L")

        F[:, mask_mid] = (SR_m * FL[:, mask_mid] - SL_m * FR[:, mask_mid]
                          + SL_m * SR_m * (UR[:, mask_mid] - UL[:, mask_mid])) / denom

    return F


class FluxScheme(ABC):
    """Abstract base class for numerical flux schemes."""

    @abstractmethod
    def compute_flux_vectorized(self, UL: np.ndarray, UR: np.ndarray,
                                gas: GasProperties) -> np.ndarray:
        """
        Compute numerical fluxes at all faces (vectorized).

        Args:
            UL: Left states (3, n_faces)
            UR: Right states (3, n_faces)
            gas: Gas properties

        Returns:
            Fluxes at all faces (3, n_faces)
        """

    def compute_flux(self, UL: np.ndarray, UR: np.ndarray,
                     gas: GasProperties) -> np.ndarray:
        """Single-face flux computation."""
        UL_2d = np.asarray(UL, dtype=float).reshape(-1, 1)
        UR_2d = np.asarray(UR, dtype=float).reshape(-1, 1)
        F_2d = self.compute_flux_vectorized(UL_2d, UR_2d, gas)
        return F_2d[:, 0]

    @staticmethod
    def face_primitives(UL: np.ndarray, UR: np.ndarray, gas: GasProperties):
        """Primitives of both face states; raises InvalidStateError if non-physical."""
        return (primitives(UL, gas, where='left face states'),
                primitives(UR, gas, where='right face states'))


class HLLEFlux(FluxScheme):
    """
    HLLE (Harten-Lax-van Leer-Einfeldt) two-wave solver.

    Signal speeds bound the Roe-averaged and the one-sided characteristic
    speeds, and are forced to bracket zero.
    """

    def compute_flux_vectorized(self, UL, UR, gas):
        WL, WR = self.face_primitives(UL, UR, gas)
        u_roe, _, a_roe = roe_average(WL, WR, gas)

        SL = np.minimum(np.minimum(WL.u - WL.a, u_roe - a_roe), 0.0)
        SR = np.maximum(np.maximum(WR.u + WR.a, u_roe + a_roe), 0.0)

        return hll_blend(euler_flux(WL), euler_flux(WR), UL, UR, SL, SR)


class HLLCFlux(FluxScheme):
    """
    HLLC approximate Riemann solver with vectorized implementation.

    Restores the contact wave missing from HLLE, so contact discontinuities
    are far less diffused.
    """

    def compute_flux_vectorized(self, UL, UR, gas):
        WL, WR = self.face_primitives(UL, UR, gas)
        rhoL, uL, pL, HL, EL = WL.rho, WL.u, WL.p, WL.H, WL.E
        rhoR, uR, pR, HR, ER = WR.rho, WR.u, WR.p, WR.H, WR.E

        # Roe averages for wave speed estimates
        u_roe, _, a_roe = roe_average(WL, WR, gas)

        SL = np.minimum(uL - WL.a, u_roe - a_roe)
        SR = np.maximum(uR + WR.a, u_roe + a_roe)

        # Contact wave speed
        denom = rhoL * (SL - uL) - rhoR * (SR - uR)
        if not np.all(np.isfinite(denom) & (denom != 0)):
            raise NumericDegeneracyError("Degenerate HLLC contact speed denominator")
        SM = (pR - pL + rhoL * uL * (SL - uL) - rhoR * uR * (SR - uR)) / denom

        # Start from the left flux, overwrite region by region
        F = euler_flux(WL)

        mask_right = SR <= 0
        mask_star_left = (SM >= 0) & (SL < 0) & (SR > 0)
        mask_star_right = (SM < 0) & (SL < 0) & (SR > 0)

        if np.any(mask_right):
            rhoR_uR = rhoR[mask_right] * uR[mask_right]
            F[0, mask_right] = rhoR_uR
            F[1, mask_right] = rhoR_uR * uR[mask_right] + pR[mask_right]
            F[2, mask_right] = rhoR_uR * HR[mask_right]

        # Left star state correction: F* = F_L + S_L (U*_L - U_L)
        if np.any(mask_star_left):
            SL_m = SL[mask_star_left]
            uL_m = uL[mask_star_left]
            rhoL_m = rhoL[mask_star_left]
            SM_m = SM[mask_star_left]

            coeffL = rhoL_m * (SL_m - uL_m) / (SL_m - SM_m)

            dU0 = coeffL - rhoL_m
            dU1 = coeffL * SM_m - rhoL_m * uL_m
            dU2 = coeffL * (EL[mask_star_left] + (SM_m - uL_m) *
                            (SM_m + pL[mask_star_left] / (rhoL_m * (SL_m - uL_m)))) - UL[2, mask_star_left]

            F[0, mask_star_left] += SL_m * dU0
            F[1, mask_star_left] += SL_m * dU1
            F[2, mask_star_left] += SL_m * dU2

        # Right star state correction: F* = F_R + S_R (U*_R - U_R)
        if np.any(mask_star_right):
            SR_m = SR[mask_star_right]
            uR_m = uR[mask_star_right]
            rhoR_m = rhoR[mask_star_right]
            SM_m = SM[mask_star_right]

            coeffR = rhoR_m * (SR_m - uR_m) / (SR_m - SM_m)

            rhoR_uR_m = rhoR_m * uR_m
            FR0 = rhoR_uR_m
            FR1 = rhoR_uR_m * uR_m + pR[mask_star_right]
            FR2 = rhoR_uR_m * HR[mask_star_right]

            dU0 = coeffR - rhoR_m
            dU1 = coeffR * SM_m - rhoR_m * uR_m
            dU2 = coeffR * (ER[mask_star_right] + (SM_m - uR_m) *
                            (SM_m + pR[mask_star_right] / (rhoR_m * (SR_m - uR_m)))) - UR[2, mask_star_right]

            F[0, mask_star_right] = FR0 + SR_m * dU0
            F[1, mask_star_right] = FR1 + SR_m * dU1
            F[2, mask_star_right] = FR2 + SR_m * dU2

        return F


class RoeFlux(FluxScheme):
    """Roe-Pike flux-difference splitting with Harten's entropy fix."""

    def compute_flux_vectorized(self, UL, UR, gas):
        WL, WR = self.face_primitives(UL, UR, gas)
        u, H, a = roe_average(WL, WR, gas)
        rho = np.sqrt(WL.rho * WR.rho)

        d_rho = WR.rho - WL.rho
        d_u = WR.u - WL.u
        d_p = WR.p - WL.p

        # Wave strengths
        alpha1 = (d_p - rho * a * d_u) / (2.0 * a**2)
        alpha2 = d_rho - d_p / a**2
        alpha3 = (d_p + rho * a * d_u) / (2.0 * a**2)

        lam1 = np.abs(u - a)
        lam2 = np.abs(u)
        lam3 = np.abs(u + a)

        # Entropy fix on the acoustic waves
        delta = ENTROPY_FIX * a
        lam1 = np.where(lam1 < delta, (lam1**2 + delta**2) / (2.0 * delta), lam1)
        lam3 = np.where(lam3 < delta, (lam3**2 + delta**2) / (2.0 * delta), lam3)

        ones = np.ones_like(u)
        r1 = np.stack([ones, u - a, H - u * a])
        r2 = np.stack([ones, u, 0.5 * u**2])
        r3 = np.stack([ones, u + a, H + u * a])

        dissipation = lam1 * alpha1 * r1 + lam2 * alpha2 * r2 + lam3 * alpha3 * r3
        return 0.5 * (euler_flux(WL) + euler_flux(WR)) - 0.5 * dissipation


class LaxFriedrichsFlux(FluxScheme):
    """
    Global Lax-Friedrichs flux.

    Uses the largest wave speed over all faces of the call, so the whole
    face array should be passed at once.
    """

    def compute_flux_vectorized(self, UL, UR, gas):
        WL, WR = self.face_primitives(UL, UR, gas)
        smax = max(np.max(np.abs(WL.u) + WL.a), np.max(np.abs(WR.u) + WR.a))
        return 0.5 * (euler_flux(WL) + euler_flux(WR)) - 0.5 * smax * (UR - UL)


class RusanovFlux(FluxScheme):
    """
    Rusanov (Local Lax-Friedrichs) flux - much simpler and faster than HLLC.

    Less accurate for contact discontinuities but very robust.
    """

    def compute_flux_vectorized(self, UL, UR, gas):
        WL, WR = self.face_primitives(UL, UR, gas)

        # Maximum wave speed
        smax = np.maximum(np.abs(WL.u) + WL.a, np.abs(WR.u) + WR.a)

        # F = 0.5 * (FL + FR) - 0.5 * smax * (UR - UL)
        return 0.5 * (euler_flux(WL) + euler_flux(WR)) - 0.5 * smax * (UR - UL)


class AUSMFlux(FluxScheme):
    """Liou-Steffen AUSM: separate upwinding of convective and pressure terms."""

    def compute_flux_vectorized(self, UL, UR, gas):
        WL, WR = self.face_primitives(UL, UR, gas)
        ML = WL.u / WL.a
        MR = WR.u / WR.a

        # Split Mach numbers and pressures
        subL = np.abs(ML) <= 1.0
        subR = np.abs(MR) <= 1.0
        M_plus = np.where(subL, 0.25 * (ML + 1.0)**2, 0.5 * (ML + np.abs(ML)))
        M_minus = np.where(subR, -0.25 * (MR - 1.0)**2, 0.5 * (MR - np.abs(MR)))
        P_plus = np.where(subL, 0.25 * (ML + 1.0)**2 * (2.0 - ML), 0.5 * (1.0 + np.sign(ML)))
        P_minus = np.where(subR, 0.25 * (MR - 1.0)**2 * (2.0 + MR), 0.5 * (1.0 - np.sign(MR)))

        m_half = M_plus + M_minus
        p_half = P_plus * WL.p + P_minus * WR.p

        # Convected quantities times sound speed
        PhiL = np.stack([WL.rho * WL.a, WL.rho * WL.a * WL.u, WL.rho * WL.a * WL.H])
        PhiR = np.stack([WR.rho * WR.a, WR.rho * WR.a * WR.u, WR.rho * WR.a * WR.H])

        F = 0.5 * m_half * (PhiL + PhiR) - 0.5 * np.abs(m_half) * (PhiR - PhiL)
        F[1] += p_half
        return F


FLUX_SCHEMES = {
    FluxMethod.HLLE: HLLEFlux,
    FluxMethod.HLLC: HLLCFlux,
    FluxMethod.ROE: RoeFlux,
    FluxMethod.LF: LaxFriedrichsFlux,
    FluxMethod.RUS: RusanovFlux,
    FluxMethod.AUSM: AUSMFlux,
}


def get_flux_scheme(method) -> FluxScheme:
    """Instantiate the flux scheme for a FluxMethod member or name."""
    return FLUX_SCHEMES[FluxMethod.parse(method)]()
