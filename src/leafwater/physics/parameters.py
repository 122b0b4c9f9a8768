"""
Calibration metadata for model parameters.

Units, priors, bounds and descriptions live in a side table keyed by
variant class and field name. The formulas never read it; calibration
tools use it to tabulate, flatten and override parameter sets.
"""
from __future__ import annotations

from dataclasses import dataclass, fields, is_dataclass, replace
from typing import Any, Dict, Optional, Tuple

import numpy as np
import pandas as pd
from scipy import stats

from leafwater.core.exceptions import ErrorContext, ParameterError
from leafwater.physics.potential_dependence import (
    LinearPotentialDependence,
    ZhouPotentialDependence,
)
from leafwater.physics.soil_data import (
    ContentCapableSoilData,
    DeficitCapableSoilData,
    PotentialSoilData,
)
from leafwater.physics.soil_methods import VolumetricSoilMethod


@dataclass(frozen=True)
class ParameterSpec:
    """Calibration metadata for one parameter. Has no effect on the formulas."""

    default: float
    units: Optional[str] = None
    prior: Optional[Any] = None  # frozen scipy.stats distribution
    bounds: Optional[Tuple[float, float]] = None
    description: str = ""


PARAMETER_METADATA: Dict[type, Dict[str, ParameterSpec]] = {
    DeficitCapableSoilData: {
        "smd1": ParameterSpec(1.0, description="deficit response scale; <= 0 selects the linear response"),
        "smd2": ParameterSpec(1.0, description="deficit response exponent or linear threshold"),
    },
    ContentCapableSoilData: {
        "swmax": ParameterSpec(1.0, description="maximum volumetric soil water content"),
        "swmin": ParameterSpec(0.0, description="minimum volumetric soil water content"),
    },
    PotentialSoilData: {
        "swpexp": ParameterSpec(1.0, description="exponent of the soil water potential response"),
    },
    VolumetricSoilMethod: {
        "wc1": ParameterSpec(0.5, prior=stats.beta(2.0, 2.0),
                             description="content where fsoil reaches zero"),
        "wc2": ParameterSpec(0.5, prior=stats.beta(2.0, 2.0),
                             description="content where fsoil reaches one"),
        "soilroot": ParameterSpec(0.5, description="simulated root zone soil water"),
        "soildepth": ParameterSpec(0.5, description="simulated soil depth"),
    },
    LinearPotentialDependence: {
        "vpara": ParameterSpec(-300.0, "kPa", stats.gamma(10, scale=1 / 10), (-2000.0, 0.0),
                               "soil water potential where the factor is zero"),
        "vparb": ParameterSpec(-100.0, "kPa", stats.gamma(10, scale=2 / 10), (-2000.0, 0.0),
                               "soil water potential where the factor is one"),
    },
    ZhouPotentialDependence: {
        "s": ParameterSpec(2.0, "MPa^-1", stats.gamma(10, scale=1 / 10), (0.4, 12.0),
                           "sensitivity parameter indicating the steepness of the decline"),
        "psi": ParameterSpec(-1.0, "MPa", stats.gamma(10, scale=2 / 10), (-4.0, -0.1),
                             "reference value indicating the water potential at which "
                             "f(Ψpd) decreases to half of its maximum value"),
    },
}


def parameter_specs(obj) -> Dict[str, ParameterSpec]:
    """Metadata for the numeric fields of a variant (instance or class), base classes first."""
    cls = obj if isinstance(obj, type) else type(obj)
    specs: Dict[str, ParameterSpec] = {}
    for base in reversed(cls.__mro__):
        specs.update(PARAMETER_METADATA.get(base, {}))
    return specs


def flatten_parameters(obj) -> Dict[str, float]:
    """Numeric fields as a flat dict; nested soil data is prefixed with ``soildata.``."""
    out: Dict[str, float] = {}
    for f in fields(obj):
        value = getattr(obj, f.name)
        if is_dataclass(value):
            for k, v in flatten_parameters(value).items():
                out[f"{f.name}.{k}"] = v
        elif isinstance(value, (int, float)) and not isinstance(value, bool):
            out[f.name] = float(value)
    return out


def with_parameters(obj, p: Dict[str, float]):
    """Return a copy of a variant with parameters applied (dotted names reach nested data)."""
    own: Dict[str, float] = {}
    nested: Dict[str, Dict[str, float]] = {}
    names = {f.name for f in fields(obj)}

    for name, value in p.items():
        head, _, rest = name.partition(".")
        if head not in names:
            raise ParameterError(
                f"{type(obj).__name__} has no parameter '{name}'",
                ErrorContext(component=type(obj).__name__, operation="with_parameters"),
            )
        if rest:
            nested.setdefault(head, {})[rest] = value
        else:
            own[head] = float(value)

    for head, sub in nested.items():
        own[head] = with_parameters(getattr(obj, head), sub)

    return replace(obj, **own)


def _describe_prior(prior) -> str:
    if prior is None:
        return ""
    args = ", ".join(f"{a:g}" for a in prior.args)
    kwds = ", ".join(f"{k}={v:g}" for k, v in prior.kwds.items())
    return f"{prior.dist.name}({', '.join(x for x in (args, kwds) if x)})"


def parameter_table(obj) -> pd.DataFrame:
    """One row per numeric parameter with its value and calibration metadata."""
    rows = []
    for name, value in flatten_parameters(obj).items():
        head, _, rest = name.rpartition(".")
        owner = getattr(obj, head) if head else obj
        spec = parameter_specs(owner).get(rest)
        prior = spec.prior if spec else None
        bounds = spec.bounds if spec and spec.bounds else (np.nan, np.nan)
        rows.append(
            {
                "name": name,
                "value": value,
                "default": spec.default if spec else np.nan,
                "units": spec.units if spec and spec.units else "-",
                "prior": _describe_prior(prior),
                "prior_mean": float(prior.mean()) if prior is not None else np.nan,
                "prior_std": float(prior.std()) if prior is not None else np.nan,
                "lower": bounds[0],
                "upper": bounds[1],
                "description": spec.description if spec else "",
            }
        )
    return pd.DataFrame(
        rows,
        columns=["name", "value", "default", "units", "prior", "prior_mean",
                 "prior_std", "lower", "upper", "description"],
    )
