"""
Soil method variants: how the soil moisture factor is computed.

Every method owns exactly one soil data value and only accepts the soil
data capabilities it can use. Incompatible pairings are rejected when the
method is constructed, never at simulation time.
"""

from dataclasses import dataclass, field
from typing import ClassVar, Tuple, Type
import logging

from leafwater.core.constants import (
    DEFAULT_SOILDEPTH,
    DEFAULT_SOILROOT,
    DEFAULT_WC1,
    DEFAULT_WC2,
)
from leafwater.core.exceptions import (
    ConfigurationMismatchError,
    ErrorContext,
    InvertedThresholdError,
    ParameterError,
)
from leafwater.physics.soil_data import (
    ContentCapableSoilData,
    ContentSoilData,
    DeficitCapableSoilData,
    NoSoilData,
    PotentialSoilData,
    SimulatedSoilData,
    SoilData,
    coerce_float_fields,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SoilMethod:
    """Base class for soil methods"""
    kind: ClassVar[str] = "abstract"
    accepts: ClassVar[Tuple[Type[SoilData], ...]] = ()

    soildata: SoilData = field(default_factory=NoSoilData)

    def __post_init__(self) -> None:
        if not isinstance(self.soildata, self.accepts):
            accepted = ", ".join(cls.__name__ for cls in self.accepts)
            raise ConfigurationMismatchError(
                f"{type(self).__name__} cannot use {type(self.soildata).__name__}; "
                f"expected one of: {accepted}",
                ErrorContext(
                    component=type(self).__name__,
                    operation="construct",
                    details={"soildata": type(self.soildata).__name__},
                ),
            )
        coerce_float_fields(self)


@dataclass(frozen=True)
class ConstantSoilMethod(SoilMethod):
    """No soil water limitation: fsoil is always 1"""
    kind: ClassVar[str] = "constant"
    accepts: ClassVar[Tuple[Type[SoilData], ...]] = (NoSoilData,)

    soildata: SoilData = field(default_factory=NoSoilData)


@dataclass(frozen=True)
class DeficitSoilMethod(SoilMethod):
    """Soil water deficit response; volumetric content is converted to deficit"""
    kind: ClassVar[str] = "deficit"
    accepts: ClassVar[Tuple[Type[SoilData], ...]] = (DeficitCapableSoilData,)

    soildata: SoilData = field(default_factory=ContentSoilData)


@dataclass(frozen=True)
class PotentialSoilMethod(SoilMethod):
    """Exponential response to soil water potential"""
    kind: ClassVar[str] = "potential"
    accepts: ClassVar[Tuple[Type[SoilData], ...]] = (PotentialSoilData,)

    soildata: SoilData = field(default_factory=PotentialSoilData)


@dataclass(frozen=True)
class VolumetricSoilMethod(SoilMethod):
    """
    Linear response to volumetric soil water content.

    fsoil rises from 0 at ``wc1`` to 1 at ``wc2``. ``soilroot`` and
    ``soildepth`` are used with simulated soil water only.
    """
    kind: ClassVar[str] = "volumetric"
    accepts: ClassVar[Tuple[Type[SoilData], ...]] = (ContentCapableSoilData,)

    soildata: SoilData = field(default_factory=ContentSoilData)
    wc1: float = DEFAULT_WC1
    wc2: float = DEFAULT_WC2
    soilroot: float = DEFAULT_SOILROOT
    soildepth: float = DEFAULT_SOILDEPTH

    def __post_init__(self) -> None:
        super().__post_init__()
        if self.soildepth <= 0:
            raise ParameterError(
                f"soildepth must be positive, got {self.soildepth}",
                ErrorContext(component="VolumetricSoilMethod", operation="construct"),
            )
        if isinstance(self.soildata, SimulatedSoilData):
            logger.warning(
                "VolumetricSoilMethod with SimulatedSoilData sets soilmoist=%.4g "
                "(soilroot/soildepth) but never updates fsoil",
                self.soilroot / self.soildepth,
            )
        if self.wc1 > self.wc2:
            logger.warning(
                "VolumetricSoilMethod wc1=%.4g is above wc2=%.4g; the ramp is inverted",
                self.wc1,
                self.wc2,
            )

    def validate_thresholds(self) -> "VolumetricSoilMethod":
        """Raise InvertedThresholdError unless wc1 < wc2."""
        if self.wc1 >= self.wc2:
            raise InvertedThresholdError(
                f"wc1 ({self.wc1}) needs to be smaller than wc2 ({self.wc2})",
                ErrorContext(component="VolumetricSoilMethod", operation="validate_thresholds"),
            )
        return self


SOIL_METHOD_KINDS = {
    cls.kind: cls
    for cls in (ConstantSoilMethod, DeficitSoilMethod, PotentialSoilMethod, VolumetricSoilMethod)
}
