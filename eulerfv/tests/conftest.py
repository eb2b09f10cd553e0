"""Pytest configuration and fixtures for the Euler solver tests."""

import numpy as np
import pytest

from eulerfv.src import FlowState, GasProperties, Mesh1D, Solver1D, SolverConfig


@pytest.fixture
def gas():
    """Diatomic ideal gas, gamma = 1.4."""
    return GasProperties(gamma=1.4)


@pytest.fixture
def sod_mesh():
    """200-cell mesh on [0, 1]."""
    return Mesh1D.uniform(0.0, 1.0, 200)


def sod_initial_state(mesh, gas):
    """Sod's shock tube: (1, 0, 1) | (0.125, 0, 0.1) with the diaphragm at x = 0.5."""
    rho = np.where(mesh.x_cells < 0.5, 1.0, 0.125)
    p = np.where(mesh.x_cells < 0.5, 1.0, 0.1)
    return FlowState.from_primitives(rho, np.zeros(mesh.n_cells), p, gas)


def create_sod_solver(mesh, gas, **config_kwargs):
    """Create a shock tube solver with the Sod initial condition set."""
    config = SolverConfig(**config_kwargs)
    solver = Solver1D(mesh, gas, config)
    solver.set_initial_condition(sod_initial_state(solver.mesh, gas))
    return solver


def random_smooth_state(n, gas, seed=0):
    """Positive, smooth-ish 1D state with ghost-free shape (3, n)."""
    rng = np.random.default_rng(seed)
    x = np.linspace(0.0, 1.0, n)
    rho = 1.0 + 0.3 * np.sin(2 * np.pi * x) + 0.05 * rng.random(n)
    u = 0.4 * np.cos(2 * np.pi * x) + 0.05 * rng.random(n)
    p = 1.0 + 0.2 * np.cos(4 * np.pi * x) + 0.05 * rng.random(n)
    return FlowState.from_primitives(rho, u, p, gas).to_array()
