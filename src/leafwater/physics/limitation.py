"""
Soil water limitation of leaf gas exchange, as called by a host leaf model.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Optional
import logging

from leafwater.core.types import LeafState, LimitationFactor
from leafwater.physics.potential_dependence import (
    NoPotentialDependence,
    PotentialDependence,
    potential_dependence,
)
from leafwater.physics.soil_data import NoSoilData
from leafwater.physics.soil_methods import ConstantSoilMethod, SoilMethod
from leafwater.physics.soil_moisture import undefined_fallback, apply_soil_moisture, resolve_handler

if TYPE_CHECKING:
    from leafwater.core.config import LeafwaterConfig


class SoilWaterLimitation:
    """
    Bundles a soil method and a potential dependence.

    Holds only immutable configuration, so one instance can serve any
    number of leaf states as long as each call gets its own state.
    """

    def __init__(
        self,
        soil_method: Optional[SoilMethod] = None,
        potential: Optional[PotentialDependence] = None,
        undefined_effect: str = "raise",
    ):
        """
        Initialize the limitation model.

        Args:
            soil_method: Soil method (default: no soil limitation)
            potential: Potential dependence (default: none)
            undefined_effect: Policy for the undefined potential response
        """
        self.soil_method = soil_method or ConstantSoilMethod(NoSoilData())
        self.potential = potential or NoPotentialDependence()
        undefined_fallback(undefined_effect)
        self.undefined_effect = undefined_effect

        # Fail at setup if no formula exists for the pairing
        resolve_handler(self.soil_method)

        self.logger = logging.getLogger(f"{__name__}.SoilWaterLimitation")
        self.logger.debug(
            "Using %s(%s) with %s",
            type(self.soil_method).__name__,
            type(self.soil_method.soildata).__name__,
            type(self.potential).__name__,
        )

    @classmethod
    def from_config(cls, config: "LeafwaterConfig") -> "SoilWaterLimitation":
        """Build from a LeafwaterConfig, validating thresholds when strict."""
        soil_method = config.soil.build(strict_thresholds=config.strict_thresholds)
        potential = config.potential.build(strict_thresholds=config.strict_thresholds)
        return cls(soil_method, potential, config.undefined_effect)

    def update(self, state: LeafState) -> LeafState:
        """Update ``state.fsoil`` (or ``state.soilmoist``) in place."""
        return apply_soil_moisture(self.soil_method, state, self.undefined_effect)

    def potential_factor(self, soilwaterpotential: float, swp_units: Optional[str] = None) -> LimitationFactor:
        """Modifier of assimilation by soil water potential."""
        return potential_dependence(self.potential, soilwaterpotential, swp_units)

    def __repr__(self) -> str:
        return (
            f"SoilWaterLimitation(soil_method={self.soil_method!r}, "
            f"potential={self.potential!r}, undefined_effect={self.undefined_effect!r})"
        )
