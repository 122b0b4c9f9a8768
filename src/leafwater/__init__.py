"""
leafwater: soil water limitation factors for leaf gas exchange models.

Computes the soil moisture factor ``fsoil`` that scales stomatal
conductance, and the potential dependence factor that scales assimilation.
"""
from leafwater.core.exceptions import (
    LeafwaterError,
    ConfigurationError,
    ConfigurationMismatchError,
    ParameterError,
    InvertedThresholdError,
    UndefinedEffectError,
)
from leafwater.core.types import LeafState, LeafWaterState
from leafwater.physics import (
    NoSoilData,
    DeficitSoilData,
    ContentSoilData,
    SimulatedSoilData,
    PotentialSoilData,
    ConstantSoilMethod,
    DeficitSoilMethod,
    PotentialSoilMethod,
    VolumetricSoilMethod,
    apply_soil_moisture,
    NoPotentialDependence,
    LinearPotentialDependence,
    ZhouPotentialDependence,
    potential_dependence,
    SoilWaterLimitation,
)

__version__ = "0.1.0"

__all__ = [
    # Errors
    "LeafwaterError",
    "ConfigurationError",
    "ConfigurationMismatchError",
    "ParameterError",
    "InvertedThresholdError",
    "UndefinedEffectError",
    # State
    "LeafState",
    "LeafWaterState",
    # Soil moisture
    "NoSoilData",
    "DeficitSoilData",
    "ContentSoilData",
    "SimulatedSoilData",
    "PotentialSoilData",
    "ConstantSoilMethod",
    "DeficitSoilMethod",
    "PotentialSoilMethod",
    "VolumetricSoilMethod",
    "apply_soil_moisture",
    # Potential dependence
    "NoPotentialDependence",
    "LinearPotentialDependence",
    "ZhouPotentialDependence",
    "potential_dependence",
    "SoilWaterLimitation",
]
