"""
Tests for WENO / polynomial / MUSCL reconstruction.

Tests verify:
1. Constants are reproduced exactly
2. Convergence order on smooth data
3. Oscillation control at a discontinuity
4. Single-face and vectorised reconstruction agree
"""

import numpy as np
import pytest

from eulerfv.src import (ConfigurationError, NumericDegeneracyError, ReconstructionMethod,
                         reconstruct, reconstruct_face)

ALL_METHODS = list(ReconstructionMethod)


def cell_averages_exp(n_cells, R):
    """Exact cell averages of exp(x) on [0, 1] (ghost cells included) and face values."""
    h = 1.0 / n_cells
    x_faces = (np.arange(-R, n_cells + R + 1)) * h
    averages = (np.exp(x_faces[1:]) - np.exp(x_faces[:-1])) / h
    interior_faces = np.exp(np.arange(n_cells + 1) * h)
    return averages[np.newaxis, :], interior_faces


def reconstruction_error(method, n_cells):
    U, exact = cell_averages_exp(n_cells, method.n_ghost)
    UL, UR = reconstruct(U, method)
    return 0.5 * (np.mean(np.abs(UL[0] - exact)) + np.mean(np.abs(UR[0] - exact)))


def observed_order(method, n_coarse):
    e_coarse = reconstruction_error(method, n_coarse)
    e_fine = reconstruction_error(method, 2 * n_coarse)
    return np.log2(e_coarse / e_fine)


class TestMethodProperties:

    def test_ghost_width(self):
        assert ReconstructionMethod.WENO5.n_ghost == 3
        assert ReconstructionMethod.POLY5.n_ghost == 3
        assert ReconstructionMethod.WENO7.n_ghost == 4
        assert ReconstructionMethod.POLY7.n_ghost == 4
        assert ReconstructionMethod.MUSCL.n_ghost == 2

    def test_parse_names(self):
        assert ReconstructionMethod.parse('weno7') is ReconstructionMethod.WENO7
        assert ReconstructionMethod.parse(' Poly5 ') is ReconstructionMethod.POLY5

    def test_unknown_name(self):
        with pytest.raises(ConfigurationError):
            ReconstructionMethod.parse('WENO9')


class TestConstantData:

    @pytest.mark.parametrize('method', ALL_METHODS, ids=lambda m: m.name)
    def test_constant_is_preserved(self, method):
        U = np.full((3, 20 + 2 * method.n_ghost), 2.5)
        UL, UR = reconstruct(U, method)
        assert UL.shape == (3, 21)
        np.testing.assert_allclose(UL, 2.5, rtol=1e-14)
        np.testing.assert_allclose(UR, 2.5, rtol=1e-14)

    @pytest.mark.parametrize('method', ALL_METHODS, ids=lambda m: m.name)
    def test_linear_data(self, method):
        """Every candidate stencil is exact for linear data."""
        n_total = 16 + 2 * method.n_ghost
        U = np.arange(n_total, dtype=float)[np.newaxis, :]
        UL, UR = reconstruct(U, method)
        faces = method.n_ghost - 0.5 + np.arange(17)
        np.testing.assert_allclose(UL[0], faces, atol=1e-12)
        np.testing.assert_allclose(UR[0], faces, atol=1e-12)


class TestConvergenceOrder:

    def test_poly5_fifth_order(self):
        assert observed_order(ReconstructionMethod.POLY5, 40) > 4.8

    def test_poly7_seventh_order(self):
        assert observed_order(ReconstructionMethod.POLY7, 20) > 6.7

    def test_weno5_fifth_order(self):
        assert observed_order(ReconstructionMethod.WENO5, 40) > 4.8

    def test_weno7_seventh_order(self):
        order = observed_order(ReconstructionMethod.WENO7, 20)
        assert order > 6.7
        assert reconstruction_error(ReconstructionMethod.WENO7, 40) < \
            reconstruction_error(ReconstructionMethod.WENO5, 40)

    def test_muscl_second_order(self):
        assert observed_order(ReconstructionMethod.MUSCL, 40) > 1.8


class TestDiscontinuity:

    @staticmethod
    def step(method, n_cells=40):
        n_total = n_cells + 2 * method.n_ghost
        U = np.where(np.arange(n_total) < n_total // 2, 1.0, 0.1)[np.newaxis, :]
        return reconstruct(U, method)

    @staticmethod
    def overshoot(UL, UR):
        values = np.concatenate([UL[0], UR[0]])
        return max(np.max(values) - 1.0, 0.1 - np.min(values), 0.0)

    @pytest.mark.parametrize('method', [ReconstructionMethod.POLY5, ReconstructionMethod.POLY7],
                             ids=lambda m: m.name)
    def test_polynomial_oscillates(self, method):
        UL, UR = self.step(method)
        assert self.overshoot(UL, UR) > 1e-2

    @pytest.mark.parametrize('method', [ReconstructionMethod.WENO5, ReconstructionMethod.WENO7,
                                        ReconstructionMethod.MUSCL], ids=lambda m: m.name)
    def test_nonlinear_methods_suppress_oscillations(self, method):
        UL, UR = self.step(method)
        assert self.overshoot(UL, UR) < 1e-8


class TestSingleFace:

    @pytest.mark.parametrize('method', ALL_METHODS, ids=lambda m: m.name)
    def test_matches_vectorised(self, method):
        R = method.n_ghost
        rng = np.random.default_rng(3)
        U = 1.0 + rng.random((3, 12 + 2 * R))
        UL, UR = reconstruct(U, method)

        # Face 5 separates cells R - 1 + 5 and R + 5
        c = R - 1 + 5
        qL, qR = reconstruct_face(U[:, c - R + 1:c + R + 1], method)
        np.testing.assert_allclose(qL, UL[:, 5], rtol=1e-14)
        np.testing.assert_allclose(qR, UR[:, 5], rtol=1e-14)

    def test_mirror_symmetry(self):
        """Reversing the stencil swaps the left and right states."""
        stencil = np.array([1.0, 1.2, 1.1, 3.0, 2.9, 3.3])
        qL, qR = reconstruct_face(stencil, 'WENO5')
        qL_rev, qR_rev = reconstruct_face(stencil[::-1], 'WENO5')
        assert qL == pytest.approx(qR_rev, rel=1e-14)
        assert qR == pytest.approx(qL_rev, rel=1e-14)

    def test_wrong_stencil_width(self):
        with pytest.raises(ValueError):
            reconstruct_face(np.ones(6), 'WENO7')

    def test_non_finite_data_is_degenerate(self):
        stencil = np.array([1.0, 1.0, np.inf, 1.0, 1.0, 1.0])
        with pytest.raises(NumericDegeneracyError):
            reconstruct_face(stencil, 'WENO5')
