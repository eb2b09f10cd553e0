"""
Enumerations of the available numerical schemes.

Scheme names are resolved once, when a solver is configured; the stepping
loop only ever sees enum members and flux objects.
"""

from enum import Enum

from .errors import ConfigurationError


class _NamedScheme(Enum):

    @classmethod
    def parse(cls, name):
        """Resolve a member from a member or a case-insensitive name."""
        if isinstance(name, cls):
            return name
        if isinstance(name, str):
            key = name.strip().upper()
            for member in cls:
                if key == member.name or key in member.aliases:
                    return member
        options = ', '.join(m.name for m in cls)
        raise ConfigurationError(f"Unknown {cls.__name__}: {name!r}. Options: {options}")

    @property
    def aliases(self):
        return ()


class ReconstructionMethod(_NamedScheme):
    """Face-state reconstruction for the 1D solver."""
    WENO5 = 'weno5'
    WENO7 = 'weno7'
    POLY5 = 'poly5'
    POLY7 = 'poly7'
    MUSCL = 'muscl'

    @property
    def order(self) -> int:
        return {'WENO5': 5, 'WENO7': 7, 'POLY5': 5, 'POLY7': 7, 'MUSCL': 2}[self.name]

    @property
    def n_ghost(self) -> int:
        """Stencil half-width R, i.e. ghost cells needed on each side."""
        return {5: 3, 7: 4, 2: 2}[self.order]

    @property
    def nonlinear(self) -> bool:
        """True if the weights depend on the local smoothness of the data."""
        return self.name.startswith('WENO') or self is ReconstructionMethod.MUSCL


class FluxMethod(_NamedScheme):
    """Approximate Riemann solvers for the 1D solver."""
    HLLE = 'hlle'
    HLLC = 'hllc'
    ROE = 'roe'
    LF = 'lf'
    RUS = 'rus'
    AUSM = 'ausm'

    @property
    def aliases(self):
        return {'HLLE': ('HLL',), 'LF': ('LAX-FRIEDRICHS',),
                'RUS': ('RUSANOV', 'LLF')}.get(self.name, ())


class FluxMethod2D(_NamedScheme):
    """Face flux assembly for the 2D solver."""
    HLLE1D = 'hlle1d'
    HLLE2D = 'hlle2d'


class TimeScheme(_NamedScheme):
    """Explicit strong-stability-preserving time integrators."""
    SSPRK3 = 'ssprk3'
    SSPRK2 = 'ssprk2'
    EULER = 'euler'

    @property
    def aliases(self):
        return {'SSPRK3': ('RK3',), 'SSPRK2': ('RK2',)}.get(self.name, ())
