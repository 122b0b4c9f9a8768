"""
Response curves of the limitation factors over ranges of inputs.

Useful for plotting and checking calibrated parameter sets. Each point is
evaluated on a fresh leaf state, so results do not depend on order.
"""
from __future__ import annotations

from typing import Optional

import numpy as np
import pandas as pd

from leafwater.core.types import LeafWaterState
from leafwater.physics.potential_dependence import PotentialDependence, potential_dependence
from leafwater.physics.soil_methods import SoilMethod
from leafwater.physics.soil_moisture import apply_soil_moisture


def soil_moisture_response(
    method: SoilMethod,
    soilmoist,
    undefined_effect: str = "raise",
    fsoil_initial: float = np.nan,
) -> pd.DataFrame:
    """
    Evaluate the soil moisture factor for each soil moisture value.

    ``fsoil_initial`` is the fsoil each fresh state starts with; it is
    returned unchanged where the method does not set fsoil.
    """
    values = np.atleast_1d(np.asarray(soilmoist, dtype=float))
    soilmoist_out = np.empty_like(values)
    fsoil = np.empty_like(values)

    for i, value in enumerate(values):
        state = LeafWaterState(soilmoist=float(value), fsoil=fsoil_initial)
        apply_soil_moisture(method, state, undefined_effect)
        soilmoist_out[i] = state.soilmoist
        fsoil[i] = state.fsoil

    return pd.DataFrame({"soilmoist_in": values, "soilmoist": soilmoist_out, "fsoil": fsoil})


def potential_dependence_response(
    variant: PotentialDependence,
    swp,
    swp_units: Optional[str] = None,
) -> pd.DataFrame:
    """Evaluate the potential dependence factor for each soil water potential."""
    values = np.atleast_1d(np.asarray(swp, dtype=float))
    factor = np.array([potential_dependence(variant, float(v), swp_units) for v in values])
    return pd.DataFrame({"swp": values, "factor": factor})
