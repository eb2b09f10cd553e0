"""
Test cases for the finite volume Euler solver.

Run tests with pytest:
    pytest eulerfv/tests/ -v

Or run individual test files:
    pytest eulerfv/tests/test_reconstruction.py -v
    pytest eulerfv/tests/test_shock_tube.py -v
"""

from .exact_riemann import exact_riemann, sod_exact, star_state

__all__ = [
    'exact_riemann',
    'sod_exact',
    'star_state',
]
