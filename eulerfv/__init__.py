"""
eulerfv - High-Order Finite Volume Euler Solver
===============================================

Re-exports all public components from eulerfv.src
"""

from eulerfv.src import (
    # Errors
    EulerFVError,
    InvalidStateError,
    ConfigurationError,
    NumericDegeneracyError,
    # Gas properties and state
    GasProperties,
    FlowState,
    primitives,
    conserved,
    # Mesh
    Mesh1D,
    Mesh2D,
    # Flux schemes
    FluxScheme,
    HLLEFlux,
    HLLCFlux,
    # Boundary conditions
    BoundaryCondition,
    TransmissiveBC,
    ReflectiveBC,
    # Solver
    Solver1D,
    Solver2D,
    SolverConfig,
)

__all__ = [
    'EulerFVError',
    'InvalidStateError',
    'ConfigurationError',
    'NumericDegeneracyError',
    'GasProperties',
    'FlowState',
    'primitives',
    'conserved',
    'Mesh1D',
    'Mesh2D',
    'FluxScheme',
    'HLLEFlux',
    'HLLCFlux',
    'BoundaryCondition',
    'TransmissiveBC',
    'ReflectiveBC',
    'Solver1D',
    'Solver2D',
    'SolverConfig',
]
