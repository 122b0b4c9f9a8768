"""
Effect of soil water on stomatal conductance.

The soil moisture factor ``fsoil`` (0-1) multiplies stomatal conductance.
It is selected by the pair (soil method, soil data):

    Method       Soil data          Result
    ----------   ----------------   ---------------------------------------
    Constant     NoSoilData         fsoil = 1
    Deficit      content-capable    content converted to deficit, then
                                    Granier & Loustau deficit response
    Deficit      DeficitSoilData    Granier & Loustau deficit response
    Potential    PotentialSoilData  exponential response to potential
    Volumetric   SimulatedSoilData  soilmoist = soilroot / soildepth
                                    (fsoil is not updated)
    Volumetric   content-capable    linear ramp between wc1 and wc2

All soil moisture values are plain floats in the units of the soil data
parameters. Deficits must already be dimensionless.

References:
- Granier, A. and Loustau, D. (1994). Measuring and modelling the
  transpiration of a maritime pine canopy from sap-flow data.
  Agricultural and Forest Meteorology, 71:61-81.
"""

from typing import Callable, List, Optional, Tuple, Type
import logging
import math

from leafwater.core.constants import FSOIL_MAX, FSOIL_MIN, LOG_MAX_FLOAT64, UNDEFINED_EFFECT_POLICIES
from leafwater.core.exceptions import (
    ConfigurationMismatchError,
    ErrorContext,
    InvertedThresholdError,
    ParameterError,
    UndefinedEffectError,
    handle_exception,
)
from leafwater.core.types import LeafState, LimitationFactor, SoilMoisture
from leafwater.physics.soil_data import (
    ContentCapableSoilData,
    DeficitCapableSoilData,
    DeficitSoilData,
    NoSoilData,
    PotentialSoilData,
    SimulatedSoilData,
    SoilData,
)
from leafwater.physics.soil_methods import (
    ConstantSoilMethod,
    DeficitSoilMethod,
    PotentialSoilMethod,
    SoilMethod,
    VolumetricSoilMethod,
)

logger = logging.getLogger(__name__)


# =============================================================================
# RESPONSE FUNCTIONS
# =============================================================================

def deficit_from_content(soildata: ContentCapableSoilData, soilmoist: SoilMoisture) -> float:
    """
    Convert volumetric content to a relative soil moisture deficit.

    d = (swmax - θ) / (swmax - swmin)

    Args:
        soildata: Content-capable soil data with swmax/swmin bounds
        soilmoist: Volumetric soil water content

    Returns:
        Dimensionless deficit (0 at swmax, 1 at swmin)
    """
    span = soildata.swmax - soildata.swmin
    if span == 0:
        raise ParameterError(
            f"swmax ({soildata.swmax}) equals swmin ({soildata.swmin}); "
            "cannot convert content to deficit",
            ErrorContext(component=type(soildata).__name__, operation="deficit_from_content"),
        )
    return (soildata.swmax - soilmoist) / span


def deficit_effect(soildata: DeficitCapableSoilData, soilmoist: SoilMoisture) -> LimitationFactor:
    """
    Granier & Loustau (1994) response to soil moisture deficit.

    Fs = 1 - smd1 exp(smd2 SMD²)        if smd1 > 0
    Fs = (1 - SMD) / smd2               if smd1 <= 0, smd2 > 0 and 1 - SMD < smd2
    Fs = 1                              otherwise

    The exponential branch takes priority when smd1 and smd2 are both
    positive. The result is floored at zero.

    Args:
        soildata: Deficit-capable soil data (smd1, smd2)
        soilmoist: Dimensionless soil moisture deficit

    Returns:
        Soil moisture factor (>= 0)
    """
    effect = 1.0

    if soildata.smd1 > 0:
        # Exponential relationship with deficit
        exponent = min(soildata.smd2 * soilmoist ** 2, LOG_MAX_FLOAT64)
        effect = 1.0 - soildata.smd1 * math.exp(exponent)
    elif soildata.smd2 > 0:
        # Linear decline with increasing deficit
        if 1.0 - soilmoist < soildata.smd2:
            effect = (1.0 - soilmoist) / soildata.smd2

    return max(effect, 0.0)


def potential_effect(
    soildata: PotentialSoilData,
    soilmoist: SoilMoisture,
    undefined_effect: str = "raise",
) -> LimitationFactor:
    """
    Exponential response to soil water potential.

    Fs = exp(swpexp ψ)

    The response is undefined for swpexp <= 0. ``undefined_effect`` decides
    what happens then: "raise" raises UndefinedEffectError, "no_limitation"
    returns 1 and "full_limitation" returns 0.

    Args:
        soildata: Potential soil data (swpexp)
        soilmoist: Soil water potential
        undefined_effect: Policy for swpexp <= 0

    Returns:
        Soil moisture factor (>= 0)
    """
    if soildata.swpexp > 0:
        effect = math.exp(min(soildata.swpexp * soilmoist, LOG_MAX_FLOAT64))
        return max(effect, 0.0)

    fallback = undefined_fallback(undefined_effect)
    if fallback is None:
        raise UndefinedEffectError(
            f"potential response is undefined for swpexp={soildata.swpexp} (must be > 0)",
            ErrorContext(
                component="PotentialSoilData",
                operation="potential_effect",
                details={"swpexp": soildata.swpexp, "soilmoist": soilmoist},
            ),
        )
    logger.debug("swpexp=%.4g <= 0, using %s fallback %.1f", soildata.swpexp, undefined_effect, fallback)
    return fallback


def volumetric_effect(method: VolumetricSoilMethod, soilmoist: SoilMoisture) -> LimitationFactor:
    """
    Linear response to volumetric content between wc1 and wc2.

    Fs = clamp((θ - wc1) / (wc2 - wc1), 0, 1)

    Args:
        method: Volumetric soil method (wc1, wc2)
        soilmoist: Volumetric soil water content

    Returns:
        Soil moisture factor (0-1)
    """
    width = method.wc2 - method.wc1
    if width == 0:
        raise InvertedThresholdError(
            f"wc1 ({method.wc1}) equals wc2 ({method.wc2}); the volumetric ramp is degenerate",
            ErrorContext(component="VolumetricSoilMethod", operation="volumetric_effect"),
        )
    fsoil = -method.wc1 / width + soilmoist / width
    return max(min(fsoil, FSOIL_MAX), FSOIL_MIN)


def undefined_fallback(undefined_effect: str) -> Optional[float]:
    if undefined_effect not in UNDEFINED_EFFECT_POLICIES:
        raise ParameterError(
            f"Unknown undefined_effect policy '{undefined_effect}'; "
            f"expected one of {sorted(UNDEFINED_EFFECT_POLICIES)}"
        )
    return UNDEFINED_EFFECT_POLICIES[undefined_effect]


# =============================================================================
# DISPATCH
# =============================================================================

def _finite_soilmoist(state: LeafState) -> float:
    soilmoist = float(state.soilmoist)
    if not math.isfinite(soilmoist):
        raise ParameterError(
            f"soilmoist must be finite, got {soilmoist}",
            ErrorContext(component="soil_moisture", operation="apply_soil_moisture"),
        )
    return soilmoist


def _constant(method: SoilMethod, state: LeafState, undefined_effect: str) -> None:
    state.fsoil = 1.0


def _deficit_from_content(method: SoilMethod, state: LeafState, undefined_effect: str) -> None:
    deficit = deficit_from_content(method.soildata, _finite_soilmoist(state))
    state.fsoil = deficit_effect(method.soildata, deficit)


def _deficit(method: SoilMethod, state: LeafState, undefined_effect: str) -> None:
    state.fsoil = deficit_effect(method.soildata, _finite_soilmoist(state))


def _potential(method: SoilMethod, state: LeafState, undefined_effect: str) -> None:
    state.fsoil = potential_effect(method.soildata, _finite_soilmoist(state), undefined_effect)


def _volumetric_simulated(method: SoilMethod, state: LeafState, undefined_effect: str) -> None:
    # TODO: fsoil is not derived from the simulated content here; decide
    # whether the host model recomputes it after soilmoist is overwritten.
    state.soilmoist = method.soilroot / method.soildepth
    logger.debug("Simulated soilmoist=%.4g, fsoil left at %s", state.soilmoist, state.fsoil)


def _volumetric(method: SoilMethod, state: LeafState, undefined_effect: str) -> None:
    state.fsoil = volumetric_effect(method, _finite_soilmoist(state))


Handler = Callable[[SoilMethod, LeafState, str], None]

# Ordered: the first row matching (method, soil data) wins, so specific
# soil data types precede the capabilities they belong to.
DISPATCH_TABLE: List[Tuple[Type[SoilMethod], Type[SoilData], Handler]] = [
    (ConstantSoilMethod, NoSoilData, _constant),
    (DeficitSoilMethod, ContentCapableSoilData, _deficit_from_content),
    (DeficitSoilMethod, DeficitSoilData, _deficit),
    (PotentialSoilMethod, PotentialSoilData, _potential),
    (VolumetricSoilMethod, SimulatedSoilData, _volumetric_simulated),
    (VolumetricSoilMethod, ContentCapableSoilData, _volumetric),
]


def resolve_handler(method: SoilMethod) -> Handler:
    """Return the handler selected by the method and its soil data."""
    for method_cls, data_cls, handler in DISPATCH_TABLE:
        if isinstance(method, method_cls) and isinstance(method.soildata, data_cls):
            return handler

    raise ConfigurationMismatchError(
        f"No soil moisture formula for {type(method).__name__} "
        f"with {type(getattr(method, 'soildata', None)).__name__}",
        ErrorContext(component="soil_moisture", operation="resolve_handler"),
    )


def apply_soil_moisture(
    method: SoilMethod,
    state: LeafState,
    undefined_effect: str = "raise",
) -> LeafState:
    """
    Update the leaf state with the effect of soil water on conductance.

    Reads ``state.soilmoist`` and writes ``state.fsoil``. Volumetric methods
    with simulated soil data overwrite ``state.soilmoist`` instead.

    Args:
        method: Soil method wrapping compatible soil data
        state: Mutable leaf state, not shared with concurrent calls
        undefined_effect: Policy for the undefined potential response

    Returns:
        The same state object, updated in place
    """
    handler = resolve_handler(method)
    logger.debug(
        "Applying %s to %s/%s",
        handler.__name__,
        type(method).__name__,
        type(method.soildata).__name__,
    )
    try:
        handler(method, state, undefined_effect)
    except (ArithmeticError, ValueError, TypeError) as exc:
        raise handle_exception(
            exc, ErrorContext(component=type(method).__name__, operation="apply_soil_moisture")
        ) from exc
    return state
