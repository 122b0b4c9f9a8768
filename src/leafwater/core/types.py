"""
Type definitions and type aliases for the leafwater package.
"""
from dataclasses import dataclass
from typing import Protocol, runtime_checkable
from typing_extensions import TypeAlias


# Type aliases for clarity
SoilMoisture: TypeAlias = float  # deficit, volumetric content or potential
LimitationFactor: TypeAlias = float  # dimensionless, 0-1
WaterPotentialKPa: TypeAlias = float
WaterPotentialMPa: TypeAlias = float


@runtime_checkable
class LeafState(Protocol):
    """
    Mutable leaf state owned by the enclosing physiology model.

    The soil moisture engine reads ``soilmoist`` and writes ``fsoil``
    (or ``soilmoist`` for simulated soil water).
    """
    soilmoist: float
    fsoil: float


@dataclass
class LeafWaterState:
    """Minimal leaf state carrying the variables the engine touches"""
    soilmoist: SoilMoisture = 0.0
    fsoil: LimitationFactor = 1.0
    cs: float = 0.0  # CO2 at the leaf surface, used by the host model
