"""
Default parameter values and unit conversion constants.
"""
from typing import Dict, Final, Optional

# Soil data defaults
DEFAULT_SMD1: Final[float] = 1.0
DEFAULT_SMD2: Final[float] = 1.0
DEFAULT_SWMAX: Final[float] = 1.0  # volumetric content upper bound
DEFAULT_SWMIN: Final[float] = 0.0  # volumetric content lower bound
DEFAULT_SWPEXP: Final[float] = 1.0

# Volumetric soil method defaults
DEFAULT_WC1: Final[float] = 0.5
DEFAULT_WC2: Final[float] = 0.5
DEFAULT_SOILROOT: Final[float] = 0.5
DEFAULT_SOILDEPTH: Final[float] = 0.5

# Potential dependence defaults
DEFAULT_VPARA_KPA: Final[float] = -300.0  # swp where the factor reaches zero
DEFAULT_VPARB_KPA: Final[float] = -100.0  # swp where the factor reaches one
DEFAULT_ZHOU_S_PER_MPA: Final[float] = 2.0
DEFAULT_ZHOU_PSI_MPA: Final[float] = -1.0

# Output range of the limitation factors
FSOIL_MIN: Final[float] = 0.0
FSOIL_MAX: Final[float] = 1.0

# Pressure unit conversions (value in unit * factor = value in kPa)
PRESSURE_TO_KPA: Final[Dict[str, float]] = {
    "Pa": 0.001,
    "kPa": 1.0,
    "MPa": 1000.0,
}

# Undefined-result handling for the potential soil formula
UNDEFINED_EFFECT_POLICIES: Final[Dict[str, Optional[float]]] = {
    "raise": None,
    "no_limitation": 1.0,
    "full_limitation": 0.0,
}

# Avoid exp overflow in float64
LOG_MAX_FLOAT64: Final[float] = 709.0
