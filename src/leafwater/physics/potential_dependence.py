"""
Dependence of assimilation on soil water potential.

Each variant maps a soil water potential to a modifier between 0 and 1:

    NoPotentialDependence       f = 1
    LinearPotentialDependence   linear between vpara (f = 0) and vparb (f = 1)
    ZhouPotentialDependence     f = (1 + exp(s ψ_ref)) / (1 + exp(s (ψ_ref - ψ)))

Linear parameters are in kPa, Zhou parameters in MPa. Potentials passed
without units are assumed to already be in the variant's units.

References:
- Zhou, S. et al. (2013). How should we model plant responses to drought?
  An analysis of stomatal and non-stomatal responses to water stress.
  Agricultural and Forest Meteorology, 182-183:204-214.
"""

from dataclasses import dataclass
from typing import ClassVar, Optional
import logging
import math

from leafwater.core.constants import (
    DEFAULT_VPARA_KPA,
    DEFAULT_VPARB_KPA,
    DEFAULT_ZHOU_PSI_MPA,
    DEFAULT_ZHOU_S_PER_MPA,
    LOG_MAX_FLOAT64,
    PRESSURE_TO_KPA,
)
from leafwater.core.exceptions import (
    ConfigurationMismatchError,
    ErrorContext,
    InvertedThresholdError,
    ParameterError,
)
from leafwater.core.types import LimitationFactor
from leafwater.physics.soil_data import coerce_float_fields

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PotentialDependence:
    """Base class for potential dependence variants"""
    kind: ClassVar[str] = "abstract"
    units: ClassVar[str] = "kPa"

    def __post_init__(self) -> None:
        coerce_float_fields(self)


@dataclass(frozen=True)
class NoPotentialDependence(PotentialDependence):
    """No dependence on water potential"""
    kind: ClassVar[str] = "none"


@dataclass(frozen=True)
class LinearPotentialDependence(PotentialDependence):
    """
    Simple linear dependence.

    vpara is the potential where the factor is zero, vparb the potential
    where it reaches one. Both are negative, with vpara < vparb.
    """
    kind: ClassVar[str] = "linear"
    units: ClassVar[str] = "kPa"

    vpara: float = DEFAULT_VPARA_KPA
    vparb: float = DEFAULT_VPARB_KPA

    def __post_init__(self) -> None:
        super().__post_init__()
        if self.vpara > self.vparb:
            logger.warning(
                "LinearPotentialDependence vpara=%.4g kPa is above vparb=%.4g kPa; the ramp is inverted",
                self.vpara,
                self.vparb,
            )

    def validate_thresholds(self) -> "LinearPotentialDependence":
        """Raise InvertedThresholdError unless vpara < vparb."""
        if self.vpara >= self.vparb:
            raise InvertedThresholdError(
                f"vpara ({self.vpara}) needs to be smaller than vparb ({self.vparb})",
                ErrorContext(component="LinearPotentialDependence", operation="validate_thresholds"),
            )
        return self


@dataclass(frozen=True)
class ZhouPotentialDependence(PotentialDependence):
    """
    Logistic dependence of Zhou et al. (2013).

    s is the sensitivity (steepness of the decline, 1/MPa) and psi the
    reference potential (MPa) where the factor falls to half its maximum.
    """
    kind: ClassVar[str] = "zhou"
    units: ClassVar[str] = "MPa"

    s: float = DEFAULT_ZHOU_S_PER_MPA
    psi: float = DEFAULT_ZHOU_PSI_MPA


def convert_pressure(value: float, from_units: str, to_units: str) -> float:
    """Convert a pressure between Pa, kPa and MPa."""
    for unit in (from_units, to_units):
        if unit not in PRESSURE_TO_KPA:
            raise ParameterError(
                f"Unknown pressure unit '{unit}'; expected one of {sorted(PRESSURE_TO_KPA)}",
                ErrorContext(component="potential_dependence", operation="convert_pressure"),
            )
    return value * PRESSURE_TO_KPA[from_units] / PRESSURE_TO_KPA[to_units]


def linear_dependence(f: LinearPotentialDependence, swp: float) -> LimitationFactor:
    if swp < f.vpara:
        return 0.0
    elif swp > f.vparb:
        return 1.0
    else:
        return (swp - f.vpara) / (f.vparb - f.vpara)


def zhou_dependence(f: ZhouPotentialDependence, swp: float) -> LimitationFactor:
    # Bounded in (0, 1) for swp <= 0; not clamped
    exponent = min(f.s * (f.psi - swp), LOG_MAX_FLOAT64)
    return (1.0 + math.exp(f.s * f.psi)) / (1.0 + math.exp(exponent))


def potential_dependence(
    f: PotentialDependence,
    soilwaterpotential: float,
    swp_units: Optional[str] = None,
) -> LimitationFactor:
    """
    Modifier of assimilation by soil water potential.

    Args:
        f: Potential dependence variant
        soilwaterpotential: Soil water potential
        swp_units: Units of the potential ("Pa", "kPa" or "MPa"); None means
            it is already in the variant's units

    Returns:
        Modifier, nominally between 0 and 1
    """
    if swp_units is not None:
        soilwaterpotential = convert_pressure(soilwaterpotential, swp_units, f.units)

    if isinstance(f, NoPotentialDependence):
        return 1.0
    if isinstance(f, LinearPotentialDependence):
        return linear_dependence(f, soilwaterpotential)
    if isinstance(f, ZhouPotentialDependence):
        return zhou_dependence(f, soilwaterpotential)

    raise ConfigurationMismatchError(
        f"No potential dependence formula for {type(f).__name__}",
        ErrorContext(component="potential_dependence", operation="potential_dependence"),
    )


POTENTIAL_DEPENDENCE_KINDS = {
    cls.kind: cls
    for cls in (NoPotentialDependence, LinearPotentialDependence, ZhouPotentialDependence)
}
