"""Soil moisture and water potential limitation physics."""
from leafwater.physics.soil_data import (
    SoilData,
    NoSoilData,
    DeficitCapableSoilData,
    DeficitSoilData,
    ContentCapableSoilData,
    ContentSoilData,
    SimulatedSoilData,
    PotentialSoilData,
)
from leafwater.physics.soil_methods import (
    SoilMethod,
    ConstantSoilMethod,
    DeficitSoilMethod,
    PotentialSoilMethod,
    VolumetricSoilMethod,
)
from leafwater.physics.soil_moisture import (
    apply_soil_moisture,
    deficit_effect,
    deficit_from_content,
    potential_effect,
    volumetric_effect,
)
from leafwater.physics.potential_dependence import (
    PotentialDependence,
    NoPotentialDependence,
    LinearPotentialDependence,
    ZhouPotentialDependence,
    potential_dependence,
)
from leafwater.physics.limitation import SoilWaterLimitation

__all__ = [
    # Soil data
    "SoilData",
    "NoSoilData",
    "DeficitCapableSoilData",
    "DeficitSoilData",
    "ContentCapableSoilData",
    "ContentSoilData",
    "SimulatedSoilData",
    "PotentialSoilData",
    # Soil methods
    "SoilMethod",
    "ConstantSoilMethod",
    "DeficitSoilMethod",
    "PotentialSoilMethod",
    "VolumetricSoilMethod",
    # Soil moisture engine
    "apply_soil_moisture",
    "deficit_effect",
    "deficit_from_content",
    "potential_effect",
    "volumetric_effect",
    # Potential dependence
    "PotentialDependence",
    "NoPotentialDependence",
    "LinearPotentialDependence",
    "ZhouPotentialDependence",
    "potential_dependence",
    "SoilWaterLimitation",
]
