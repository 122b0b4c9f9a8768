"""
Configuration system with validation and environment awareness.
Based on Pydantic Settings; model setups can be kept in YAML files.
"""
from dataclasses import fields
from pathlib import Path
import logging
import yaml
from pydantic import BaseModel, Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional, Literal, Union

from leafwater.physics.potential_dependence import POTENTIAL_DEPENDENCE_KINDS, PotentialDependence
from leafwater.physics.soil_data import SOIL_DATA_KINDS, SoilData
from leafwater.physics.soil_methods import SOIL_METHOD_KINDS, SoilMethod


# Soil data used when a method is configured without one
DEFAULT_SOIL_DATA_KIND = {
    "constant": "none",
    "deficit": "content",
    "potential": "potential",
    "volumetric": "content",
}


def _build_dataclass(cls, source: BaseModel, **extra):
    """Instantiate a variant from the config fields it declares."""
    kwargs = {f.name: getattr(source, f.name) for f in fields(cls) if hasattr(source, f.name)}
    kwargs.update(extra)
    return cls(**kwargs)


class SoilDataConfig(BaseModel):
    """How soil water is represented"""

    kind: Literal["none", "deficit", "content", "simulated", "potential"] = "content"

    smd1: float = Field(1.0, description="Deficit response scale (<= 0 selects linear decline)")
    smd2: float = Field(1.0, description="Deficit response exponent or linear threshold")
    swmax: float = Field(1.0, description="Maximum volumetric content")
    swmin: float = Field(0.0, description="Minimum volumetric content")
    swpexp: float = Field(1.0, description="Soil water potential response exponent")

    def build(self) -> SoilData:
        return _build_dataclass(SOIL_DATA_KINDS[self.kind], self)


class SoilMethodConfig(BaseModel):
    """How the soil moisture factor is computed"""

    method: Literal["constant", "deficit", "potential", "volumetric"] = "constant"
    soildata: Optional[SoilDataConfig] = None

    # Volumetric method
    wc1: float = Field(0.5, description="Content where fsoil reaches zero")
    wc2: float = Field(0.5, description="Content where fsoil reaches one")
    soilroot: float = Field(0.5, description="Simulated root zone soil water")
    soildepth: float = Field(0.5, gt=0, description="Simulated soil depth")

    @model_validator(mode="after")
    def check_soildata(self):
        """Fill in the default soil data and reject incompatible pairings"""
        if self.soildata is None:
            self.soildata = SoilDataConfig(kind=DEFAULT_SOIL_DATA_KIND[self.method])

        method_cls = SOIL_METHOD_KINDS[self.method]
        data_cls = SOIL_DATA_KINDS[self.soildata.kind]
        if not issubclass(data_cls, method_cls.accepts):
            raise ValueError(
                f"soil method '{self.method}' cannot use soil data '{self.soildata.kind}'"
            )
        return self

    def build(self, strict_thresholds: bool = False) -> SoilMethod:
        method = _build_dataclass(
            SOIL_METHOD_KINDS[self.method], self, soildata=self.soildata.build()
        )
        if strict_thresholds and hasattr(method, "validate_thresholds"):
            method.validate_thresholds()
        return method


class PotentialDependenceConfig(BaseModel):
    """Dependence of assimilation on soil water potential"""

    kind: Literal["none", "linear", "zhou"] = "none"

    vpara: float = Field(-300.0, description="Potential where the factor is zero (kPa)")
    vparb: float = Field(-100.0, description="Potential where the factor is one (kPa)")
    s: float = Field(2.0, description="Zhou sensitivity (1/MPa)")
    psi: float = Field(-1.0, description="Zhou reference potential (MPa)")

    def build(self, strict_thresholds: bool = False) -> PotentialDependence:
        variant = _build_dataclass(POTENTIAL_DEPENDENCE_KINDS[self.kind], self)
        if strict_thresholds and hasattr(variant, "validate_thresholds"):
            variant.validate_thresholds()
        return variant


class LeafwaterConfig(BaseSettings):
    """Main configuration for the leafwater package"""

    soil: SoilMethodConfig = Field(default_factory=SoilMethodConfig)
    potential: PotentialDependenceConfig = Field(default_factory=PotentialDependenceConfig)

    # Behaviour where the potential response is undefined (swpexp <= 0)
    undefined_effect: Literal["raise", "no_limitation", "full_limitation"] = "raise"
    # Reject wc1 >= wc2 and vpara >= vparb when building
    strict_thresholds: bool = Field(False)

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_format: str = Field(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )

    model_config = SettingsConfigDict(
        env_prefix="LEAFWATER_",
        env_nested_delimiter="__",
        case_sensitive=False,
    )

    @classmethod
    def from_yaml(cls, yaml_path: Union[str, Path]) -> "LeafwaterConfig":
        """Load configuration from YAML file"""
        yaml_path = Path(yaml_path)
        if not yaml_path.exists():
            raise FileNotFoundError(f"Config file not found: {yaml_path}")

        with open(yaml_path, encoding="utf-8") as f:
            yaml_config = yaml.safe_load(f) or {}

        return cls(**yaml_config)

    def to_yaml(self, yaml_path: Union[str, Path]):
        """Save configuration to YAML file"""
        yaml_path = Path(yaml_path)
        yaml_path.parent.mkdir(parents=True, exist_ok=True)

        with open(yaml_path, "w", encoding="utf-8") as f:
            yaml.dump(self.model_dump(), f, default_flow_style=False)


def setup_logging(config: Optional[LeafwaterConfig] = None):
    """Configure root logging from the config's level and format"""
    config = config or get_config()
    logging.basicConfig(level=getattr(logging, config.log_level), format=config.log_format)


# Global configuration instance
_config: Optional[LeafwaterConfig] = None


def get_config(config_path: Optional[Path] = None) -> LeafwaterConfig:
    """Get or create configuration instance (singleton pattern)"""
    global _config

    if _config is None:
        if config_path and Path(config_path).exists():
            _config = LeafwaterConfig.from_yaml(config_path)
        else:
            # Try to load from environment
            _config = LeafwaterConfig()

    return _config


def set_config(config: Optional[LeafwaterConfig]):
    """Set configuration (useful for testing)"""
    global _config
    _config = config
