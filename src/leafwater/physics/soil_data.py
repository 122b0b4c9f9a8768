"""
Soil data variants: how soil water is represented numerically.

The set of variants is closed:

    SoilData
    ├── NoSoilData                    soil effect disabled
    ├── PotentialSoilData             soil water potential (swpexp)
    └── DeficitCapableSoilData
        ├── DeficitSoilData           soil moisture deficit (smd1, smd2)
        └── ContentCapableSoilData
            ├── ContentSoilData       measured volumetric content
            └── SimulatedSoilData     simulated volumetric content

ContentSoilData and SimulatedSoilData carry identical fields but select
different formulas, so they never compare equal.
"""

from dataclasses import dataclass, fields
from typing import ClassVar
import logging

import numpy as np

from leafwater.core.constants import (
    DEFAULT_SMD1,
    DEFAULT_SMD2,
    DEFAULT_SWMAX,
    DEFAULT_SWMIN,
    DEFAULT_SWPEXP,
)
from leafwater.core.exceptions import ConfigurationMismatchError, ErrorContext, ParameterError

logger = logging.getLogger(__name__)


def coerce_float_fields(obj) -> None:
    """Convert every dataclass field of a frozen instance to a finite float."""
    for f in fields(obj):
        value = getattr(obj, f.name)
        if not isinstance(value, (int, float, np.floating, np.integer)) or isinstance(value, bool):
            continue
        value = float(value)
        if not np.isfinite(value):
            raise ParameterError(
                f"{type(obj).__name__}.{f.name} must be finite, got {value}",
                ErrorContext(component=type(obj).__name__, operation="construct"),
            )
        object.__setattr__(obj, f.name, value)


@dataclass(frozen=True)
class SoilData:
    """Base class for all soil data variants"""
    kind: ClassVar[str] = "abstract"

    def __post_init__(self) -> None:
        if self.kind == "abstract":
            raise ConfigurationMismatchError(
                f"{type(self).__name__} is a capability base; use one of {sorted(SOIL_DATA_KINDS)}",
                ErrorContext(component=type(self).__name__, operation="construct"),
            )
        coerce_float_fields(self)


@dataclass(frozen=True)
class NoSoilData(SoilData):
    """Soil effect disabled"""
    kind: ClassVar[str] = "none"


@dataclass(frozen=True)
class DeficitCapableSoilData(SoilData):
    """
    Soil data carrying deficit response shape parameters.

    smd1 > 0 selects the exponential (Granier & Loustau 1994) response,
    smd1 <= 0 with smd2 > 0 selects the linear decline.
    """
    smd1: float = DEFAULT_SMD1
    smd2: float = DEFAULT_SMD2


@dataclass(frozen=True)
class DeficitSoilData(DeficitCapableSoilData):
    """Soil water is measured as deficit"""
    kind: ClassVar[str] = "deficit"


@dataclass(frozen=True)
class ContentCapableSoilData(DeficitCapableSoilData):
    """Soil data with volumetric content bounds"""
    swmax: float = DEFAULT_SWMAX
    swmin: float = DEFAULT_SWMIN

    def __post_init__(self) -> None:
        super().__post_init__()
        if self.swmax <= self.swmin:
            logger.warning(
                "%s swmax=%.4g is not above swmin=%.4g; deficit conversion is undefined",
                type(self).__name__,
                self.swmax,
                self.swmin,
            )


@dataclass(frozen=True)
class ContentSoilData(ContentCapableSoilData):
    """Soil water is measured as volumetric content"""
    kind: ClassVar[str] = "content"


@dataclass(frozen=True)
class SimulatedSoilData(ContentCapableSoilData):
    """Simulated soil volumetric content"""
    kind: ClassVar[str] = "simulated"


@dataclass(frozen=True)
class PotentialSoilData(SoilData):
    """Soil water is measured as water potential"""
    kind: ClassVar[str] = "potential"
    swpexp: float = DEFAULT_SWPEXP


SOIL_DATA_KINDS = {
    cls.kind: cls
    for cls in (NoSoilData, DeficitSoilData, ContentSoilData, SimulatedSoilData, PotentialSoilData)
}
