"""
Spatial reconstruction of face states from cell averages.

WENO5/WENO7 blend 3/4 candidate polynomials with smoothness-dependent
weights. POLY5/POLY7 use the same candidates with the fixed linear weights,
which is the plain 5th/7th-order upwind-biased polynomial. MUSCL is the
2nd-order minmod-limited scheme.

Reconstruction is componentwise: each conserved variable is treated
independently, without projecting onto characteristic fields. This is
cheaper than characteristic-wise WENO and slightly more oscillatory near
strong shocks.
"""

from typing import Sequence, Tuple

import numpy as np

from .errors import NumericDegeneracyError
from .schemes import ReconstructionMethod

# Regularisation of the nonlinear weights
WENO_EPS = 1e-6

# Linear (optimal) weights
D5 = (1.0 / 10.0, 6.0 / 10.0, 3.0 / 10.0)
D7 = (1.0 / 35.0, 12.0 / 35.0, 18.0 / 35.0, 4.0 / 35.0)


def _nonlinear_weights(d: Sequence[float], betas: Sequence[np.ndarray]):
    alphas = [dk / (WENO_EPS + bk)**2 for dk, bk in zip(d, betas)]
    total = sum(alphas)
    if not np.all(np.isfinite(total) & (total > 0)):
        raise NumericDegeneracyError("WENO weights are not finite or sum to zero")
    return [alpha / total for alpha in alphas]


def weno5(u: Sequence[np.ndarray], nonlinear: bool = True) -> np.ndarray:
    """
    Left-biased 5th-order value at x_{i+1/2}.

    Args:
        u: Cell averages (u_{i-2}, u_{i-1}, u_i, u_{i+1}, u_{i+2})
        nonlinear: Use smoothness-dependent weights (False gives POLY5)
    """
    um2, um1, u0, up1, up2 = u

    p0 = (2.0 * um2 - 7.0 * um1 + 11.0 * u0) / 6.0
    p1 = (-um1 + 5.0 * u0 + 2.0 * up1) / 6.0
    p2 = (2.0 * u0 + 5.0 * up1 - up2) / 6.0

    if not nonlinear:
        return D5[0] * p0 + D5[1] * p1 + D5[2] * p2

    # Jiang & Shu smoothness indicators
    b0 = 13.0 / 12.0 * (um2 - 2.0 * um1 + u0)**2 + 0.25 * (um2 - 4.0 * um1 + 3.0 * u0)**2
    b1 = 13.0 / 12.0 * (um1 - 2.0 * u0 + up1)**2 + 0.25 * (um1 - up1)**2
    b2 = 13.0 / 12.0 * (u0 - 2.0 * up1 + up2)**2 + 0.25 * (3.0 * u0 - 4.0 * up1 + up2)**2

    w0, w1, w2 = _nonlinear_weights(D5, (b0, b1, b2))
    return w0 * p0 + w1 * p1 + w2 * p2


def weno7(u: Sequence[np.ndarray], nonlinear: bool = True) -> np.ndarray:
    """
    Left-biased 7th-order value at x_{i+1/2}.

    Args:
        u: Cell averages (u_{i-3}, ..., u_{i+3})
        nonlinear: Use smoothness-dependent weights (False gives POLY7)
    """
    um3, um2, um1, u0, up1, up2, up3 = u

    p0 = (-3.0 * um3 + 13.0 * um2 - 23.0 * um1 + 25.0 * u0) / 12.0
    p1 = (um2 - 5.0 * um1 + 13.0 * u0 + 3.0 * up1) / 12.0
    p2 = (-um1 + 7.0 * u0 + 7.0 * up1 - up2) / 12.0
    p3 = (3.0 * u0 + 13.0 * up1 - 5.0 * up2 + up3) / 12.0

    if not nonlinear:
        return D7[0] * p0 + D7[1] * p1 + D7[2] * p2 + D7[3] * p3

    # Balsara & Shu smoothness indicators
    b0 = (um3 * (547.0 * um3 - 3882.0 * um2 + 4642.0 * um1 - 1854.0 * u0)
          + um2 * (7043.0 * um2 - 17246.0 * um1 + 7042.0 * u0)
          + um1 * (11003.0 * um1 - 9402.0 * u0)
          + 2107.0 * u0**2)
    b1 = (um2 * (267.0 * um2 - 1642.0 * um1 + 1602.0 * u0 - 494.0 * up1)
          + um1 * (2843.0 * um1 - 5966.0 * u0 + 1922.0 * up1)
          + u0 * (3443.0 * u0 - 2522.0 * up1)
          + 547.0 * up1**2)
    b2 = (um1 * (547.0 * um1 - 2522.0 * u0 + 1922.0 * up1 - 494.0 * up2)
          + u0 * (3443.0 * u0 - 5966.0 * up1 + 1602.0 * up2)
          + up1 * (2843.0 * up1 - 1642.0 * up2)
          + 267.0 * up2**2)
    b3 = (u0 * (2107.0 * u0 - 9402.0 * up1 + 7042.0 * up2 - 1854.0 * up3)
          + up1 * (11003.0 * up1 - 17246.0 * up2 + 4642.0 * up3)
          + up2 * (7043.0 * up2 - 3882.0 * up3)
          + 547.0 * up3**2)

    w0, w1, w2, w3 = _nonlinear_weights(D7, (b0, b1, b2, b3))
    return w0 * p0 + w1 * p1 + w2 * p2 + w3 * p3


def muscl(u: Sequence[np.ndarray], nonlinear: bool = True) -> np.ndarray:
    """Left-biased minmod-limited value at x_{i+1/2} from (u_{i-1}, u_i, u_{i+1})."""
    um1, u0, up1 = u
    dL = u0 - um1
    dR = up1 - u0

    same_sign = (dL * dR) > 0
    slope = np.where(np.abs(dL) < np.abs(dR), dL, dR)
    slope = np.where(same_sign, slope, 0.0)

    return u0 + 0.5 * slope


_FACE_VALUE = {
    ReconstructionMethod.WENO5: weno5,
    ReconstructionMethod.WENO7: weno7,
    ReconstructionMethod.POLY5: weno5,
    ReconstructionMethod.POLY7: weno7,
    ReconstructionMethod.MUSCL: muscl,
}


def reconstruct_face(stencil: np.ndarray,
                     method=ReconstructionMethod.WENO5) -> Tuple[np.ndarray, np.ndarray]:
    """
    Reconstruct both states at a single face.

    Args:
        stencil: 2R cell averages centred on the face, cells along the last
                 axis, shape (2R,) or (n_vars, 2R)
        method: Reconstruction method (member or name)

    Returns:
        qL: State on the left of the face
        qR: State on the right of the face
    """
    method = ReconstructionMethod.parse(method)
    stencil = np.asarray(stencil, dtype=float)
    R = method.n_ghost
    if stencil.shape[-1] != 2 * R:
        raise ValueError(f"{method.name} needs a stencil of {2 * R} cells, "
                         f"got {stencil.shape[-1]}")

    face_value = _FACE_VALUE[method]
    left = [stencil[..., k] for k in range(2 * R - 1)]
    right = [stencil[..., k] for k in range(2 * R - 1, 0, -1)]
    return (face_value(left, method.nonlinear),
            face_value(right, method.nonlinear))


def reconstruct(U: np.ndarray, method=ReconstructionMethod.WENO5) -> Tuple[np.ndarray, np.ndarray]:
    """
    Reconstruct left and right states at every face of the interior cells.

    Fully vectorised: each stencil point is a shifted slice of U.

    Args:
        U: Conservative variables with ghost cells (n_vars, n_cells + 2*R)
        method: Reconstruction method (member or name)

    Returns:
        UL: Left states at each face (n_vars, n_cells + 1)
        UR: Right states at each face (n_vars, n_cells + 1)
    """
    method = ReconstructionMethod.parse(method)
    R = method.n_ghost
    n_total = U.shape[-1]
    n_faces = n_total - 2 * R + 1

    # Face f separates cells c = R - 1 + f and c + 1
    def cells(offset):
        start = R - 1 + offset
        return U[..., start:start + n_faces]

    face_value = _FACE_VALUE[method]
    offsets = range(-(R - 1), R)
    UL = face_value([cells(k) for k in offsets], method.nonlinear)
    UR = face_value([cells(1 - k) for k in offsets], method.nonlinear)

    return UL, UR
