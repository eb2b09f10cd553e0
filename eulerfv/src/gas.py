"""
Gas properties for a calorically perfect gas.
"""

from dataclasses import dataclass

from .errors import ConfigurationError


@dataclass(frozen=True)
class GasProperties:
    """
    Thermodynamic properties for a calorically perfect gas.

    Only gamma enters the flow equations; R, cp and cv are used for
    reporting (e.g. FlowState.T) when the solution is in dimensional units.
    """
    gamma: float = 1.4          # Ratio of specific heats
    R: float = 287.0            # Specific gas constant [J/(kg·K)]

    def __post_init__(self):
        if not self.gamma > 1.0:
            raise ConfigurationError(f"gamma must be > 1, got {self.gamma}")

    @property
    def gm1(self) -> float:
        """gamma - 1."""
        return self.gamma - 1.0

    @property
    def cp(self) -> float:
        """Specific heat at constant pressure [J/(kg·K)]."""
        return self.gamma * self.R / (self.gamma - 1)

    @property
    def cv(self) -> float:
        """Specific heat at constant volume [J/(kg·K)]."""
        return self.R / (self.gamma - 1)
