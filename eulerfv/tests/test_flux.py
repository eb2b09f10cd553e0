"""
Tests for the 1D numerical flux schemes.

Tests verify:
1. Consistency: F(U, U) equals the physical flux
2. Upwinding for supersonic flow
3. Mirror symmetry
4. Contact preservation (HLLC) versus contact diffusion (HLLE)
"""

import numpy as np
import pytest

from eulerfv.src import (AUSMFlux, ConfigurationError, FluxMethod, HLLCFlux, HLLEFlux,
                         InvalidStateError, LaxFriedrichsFlux, NumericDegeneracyError,
                         RoeFlux, RusanovFlux, conserved, get_flux_scheme, primitives)
from eulerfv.src.flux import euler_flux, hll_blend

ALL_SCHEMES = [HLLEFlux, HLLCFlux, RoeFlux, LaxFriedrichsFlux, RusanovFlux, AUSMFlux]
UPWIND_SCHEMES = [HLLEFlux, HLLCFlux, RoeFlux, AUSMFlux]


def mirror(U):
    """Reflect x -> -x: the momentum changes sign."""
    U_m = U.copy()
    U_m[1] = -U[1]
    return U_m


@pytest.fixture
def face_states(gas):
    """A handful of random left/right face states, subsonic and supersonic."""
    rng = np.random.default_rng(7)
    n = 12
    UL = conserved(0.2 + rng.random(n), 2.0 * rng.random(n) - 1.0, 0.1 + rng.random(n), gas)
    UR = conserved(0.2 + rng.random(n), 2.0 * rng.random(n) - 1.0, 0.1 + rng.random(n), gas)
    return UL, UR


class TestConsistency:

    @pytest.mark.parametrize('scheme_cls', ALL_SCHEMES, ids=lambda c: c.__name__)
    @pytest.mark.parametrize('u', [0.0, 0.3, -0.5, 2.5, -3.0])
    def test_equal_states_give_physical_flux(self, gas, scheme_cls, u):
        U = conserved(np.array([1.0, 0.4]), u, np.array([1.0, 0.7]), gas)
        F = scheme_cls().compute_flux_vectorized(U, U, gas)
        np.testing.assert_allclose(F, euler_flux(primitives(U, gas)), rtol=1e-12, atol=1e-12)

    @pytest.mark.parametrize('scheme_cls', UPWIND_SCHEMES, ids=lambda c: c.__name__)
    def test_supersonic_flow_takes_left_flux(self, gas, scheme_cls):
        # u = 3a on both sides
        UL = conserved(np.array([1.0]), np.array([3.0 * np.sqrt(1.4)]), np.array([1.0]), gas)
        UR = conserved(np.array([0.8]), np.array([3.0 * np.sqrt(1.4)]), np.array([0.9]), gas)
        F = scheme_cls().compute_flux_vectorized(UL, UR, gas)
        np.testing.assert_allclose(F, euler_flux(primitives(UL, gas)), rtol=1e-12)

    @pytest.mark.parametrize('scheme_cls', UPWIND_SCHEMES, ids=lambda c: c.__name__)
    def test_supersonic_left_running_flow_takes_right_flux(self, gas, scheme_cls):
        UL = conserved(np.array([1.0]), np.array([-3.0 * np.sqrt(1.4)]), np.array([1.0]), gas)
        UR = conserved(np.array([0.8]), np.array([-3.0 * np.sqrt(1.4)]), np.array([0.9]), gas)
        F = scheme_cls().compute_flux_vectorized(UL, UR, gas)
        np.testing.assert_allclose(F, euler_flux(primitives(UR, gas)), rtol=1e-12)


class TestSymmetry:

    @pytest.mark.parametrize('scheme_cls', ALL_SCHEMES, ids=lambda c: c.__name__)
    def test_mirror_symmetry(self, gas, face_states, scheme_cls):
        """F(UL, UR) and the flux of the mirrored problem differ only in sign."""
        UL, UR = face_states
        scheme = scheme_cls()
        F = scheme.compute_flux_vectorized(UL, UR, gas)
        F_m = scheme.compute_flux_vectorized(mirror(UR), mirror(UL), gas)

        np.testing.assert_allclose(F_m[0], -F[0], rtol=1e-10, atol=1e-12)
        np.testing.assert_allclose(F_m[1], F[1], rtol=1e-10, atol=1e-12)
        np.testing.assert_allclose(F_m[2], -F[2], rtol=1e-10, atol=1e-12)

    @pytest.mark.parametrize('scheme_cls', ALL_SCHEMES, ids=lambda c: c.__name__)
    def test_single_face_matches_vectorised(self, gas, face_states, scheme_cls):
        UL, UR = face_states
        scheme = scheme_cls()
        if scheme_cls is LaxFriedrichsFlux:
            # Global wave speed depends on the faces passed together
            UL, UR = UL[:, :1], UR[:, :1]
        F = scheme.compute_flux_vectorized(UL, UR, gas)
        np.testing.assert_allclose(scheme.compute_flux(UL[:, 0], UR[:, 0], gas), F[:, 0],
                                   rtol=1e-14)


class TestContact:

    @staticmethod
    def stationary_contact(gas):
        UL = conserved(np.array([1.0]), 0.0, np.array([1.0]), gas)
        UR = conserved(np.array([0.125]), 0.0, np.array([1.0]), gas)
        return UL, UR

    def test_hllc_preserves_stationary_contact(self, gas):
        UL, UR = self.stationary_contact(gas)
        F = HLLCFlux().compute_flux_vectorized(UL, UR, gas)
        np.testing.assert_allclose(F[:, 0], [0.0, 1.0, 0.0], atol=1e-14)

    def test_roe_preserves_stationary_contact(self, gas):
        UL, UR = self.stationary_contact(gas)
        F = RoeFlux().compute_flux_vectorized(UL, UR, gas)
        np.testing.assert_allclose(F[:, 0], [0.0, 1.0, 0.0], atol=1e-12)

    def test_hlle_diffuses_stationary_contact(self, gas):
        UL, UR = self.stationary_contact(gas)
        F = HLLEFlux().compute_flux_vectorized(UL, UR, gas)
        assert abs(F[0, 0]) > 1e-3


class TestFaultsAndSelection:

    @pytest.mark.parametrize('scheme_cls', ALL_SCHEMES, ids=lambda c: c.__name__)
    def test_negative_pressure_face_state_raises(self, gas, scheme_cls):
        UL = conserved(np.array([1.0]), 0.0, np.array([1.0]), gas)
        UR = np.array([[1.0], [3.0], [1.0]])
        with pytest.raises(InvalidStateError):
            scheme_cls().compute_flux_vectorized(UL, UR, gas)

    def test_degenerate_wave_speeds_raise(self):
        F = np.ones((3, 1))
        with pytest.raises(NumericDegeneracyError):
            hll_blend(F, F, F, F, np.array([-np.inf]), np.array([1.0]))

    def test_hll_blend_picks_upwind_side(self):
        FL = np.full((3, 2), 1.0)
        FR = np.full((3, 2), 2.0)
        F = hll_blend(FL, FR, FL, FR, np.array([0.5, -2.0]), np.array([1.0, -1.0]))
        np.testing.assert_array_equal(F[:, 0], 1.0)
        np.testing.assert_array_equal(F[:, 1], 2.0)

    @pytest.mark.parametrize('name,expected', [
        ('HLLE', HLLEFlux), ('hll', HLLEFlux), ('hllc', HLLCFlux), ('Roe', RoeFlux),
        ('LF', LaxFriedrichsFlux), ('rusanov', RusanovFlux), ('RUS', RusanovFlux),
        ('ausm', AUSMFlux), (FluxMethod.HLLC, HLLCFlux),
    ])
    def test_get_flux_scheme(self, name, expected):
        assert isinstance(get_flux_scheme(name), expected)

    def test_unknown_scheme(self):
        with pytest.raises(ConfigurationError):
            get_flux_scheme('HLLD')
