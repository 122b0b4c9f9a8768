"""
Tests for configuration loading and variant construction from config.
"""
import logging

import pytest
import yaml
from pydantic import ValidationError

from leafwater.core.config import (
    LeafwaterConfig,
    PotentialDependenceConfig,
    SoilDataConfig,
    SoilMethodConfig,
    get_config,
    set_config,
    setup_logging,
)
from leafwater.core.exceptions import (
    ConfigurationError,
    ErrorContext,
    InvertedThresholdError,
    LeafwaterError,
    ParameterError,
    handle_exception,
)
from leafwater.physics.limitation import SoilWaterLimitation
from leafwater.physics.potential_dependence import LinearPotentialDependence, NoPotentialDependence
from leafwater.physics.soil_data import ContentSoilData, DeficitSoilData, NoSoilData, SimulatedSoilData
from leafwater.physics.soil_methods import ConstantSoilMethod, DeficitSoilMethod, VolumetricSoilMethod


@pytest.fixture(autouse=True)
def reset_config():
    set_config(None)
    yield
    set_config(None)


class TestSoilMethodConfig:

    def test_default_is_constant(self):
        method = SoilMethodConfig().build()
        assert isinstance(method, ConstantSoilMethod)
        assert isinstance(method.soildata, NoSoilData)

    @pytest.mark.parametrize(
        "method, data_cls",
        [("deficit", ContentSoilData), ("volumetric", ContentSoilData), ("constant", NoSoilData)],
    )
    def test_default_soil_data_per_method(self, method, data_cls):
        built = SoilMethodConfig(method=method).build()
        assert type(built.soildata) is data_cls

    def test_builds_volumetric(self):
        cfg = SoilMethodConfig(
            method="volumetric",
            soildata=SoilDataConfig(kind="simulated", swmax=0.45),
            wc1=0.2,
            wc2=0.8,
        )
        method = cfg.build()
        assert isinstance(method, VolumetricSoilMethod)
        assert method.soildata == SimulatedSoilData(swmax=0.45)
        assert (method.wc1, method.wc2) == (0.2, 0.8)

    def test_builds_deficit(self):
        cfg = SoilMethodConfig(method="deficit", soildata={"kind": "deficit", "smd1": 0.0, "smd2": 0.4})
        method = cfg.build()
        assert isinstance(method, DeficitSoilMethod)
        assert method.soildata == DeficitSoilData(smd1=0.0, smd2=0.4)

    def test_mismatch_rejected(self):
        with pytest.raises(ValidationError):
            SoilMethodConfig(method="volumetric", soildata={"kind": "none"})

    def test_unknown_method_rejected(self):
        with pytest.raises(ValidationError):
            SoilMethodConfig(method="bucket")

    def test_strict_thresholds(self):
        cfg = SoilMethodConfig(method="volumetric")  # wc1 == wc2
        assert cfg.build().wc1 == 0.5
        with pytest.raises(InvertedThresholdError):
            cfg.build(strict_thresholds=True)


class TestPotentialDependenceConfig:

    def test_default_is_none(self):
        assert isinstance(PotentialDependenceConfig().build(), NoPotentialDependence)

    def test_builds_linear(self):
        variant = PotentialDependenceConfig(kind="linear", vpara=-400.0).build()
        assert variant == LinearPotentialDependence(vpara=-400.0, vparb=-100.0)

    def test_strict_thresholds(self):
        cfg = PotentialDependenceConfig(kind="linear", vpara=-100.0, vparb=-300.0)
        with pytest.raises(InvertedThresholdError):
            cfg.build(strict_thresholds=True)


class TestLeafwaterConfig:

    def test_defaults(self):
        config = LeafwaterConfig()
        assert config.undefined_effect == "raise"
        assert config.strict_thresholds is False
        assert config.log_level == "INFO"

    def test_environment_override(self, monkeypatch):
        monkeypatch.setenv("LEAFWATER_UNDEFINED_EFFECT", "no_limitation")
        monkeypatch.setenv("LEAFWATER_SOIL__METHOD", "volumetric")
        monkeypatch.setenv("LEAFWATER_SOIL__WC1", "0.2")
        monkeypatch.setenv("LEAFWATER_SOIL__WC2", "0.8")
        config = LeafwaterConfig()
        assert config.undefined_effect == "no_limitation"
        method = config.soil.build()
        assert isinstance(method, VolumetricSoilMethod)
        assert (method.wc1, method.wc2) == (0.2, 0.8)

    def test_yaml_round_trip(self, tmp_path):
        path = tmp_path / "leafwater.yaml"
        path.write_text(
            yaml.safe_dump(
                {
                    "soil": {
                        "method": "volumetric",
                        "soildata": {"kind": "content", "swmax": 0.45, "swmin": 0.05},
                        "wc1": 0.15,
                        "wc2": 0.35,
                    },
                    "potential": {"kind": "zhou", "s": 3.0, "psi": -1.5},
                    "strict_thresholds": True,
                }
            )
        )
        config = LeafwaterConfig.from_yaml(path)
        assert config.soil.soildata.swmax == 0.45
        assert config.potential.kind == "zhou"

        out = tmp_path / "nested" / "saved.yaml"
        config.to_yaml(out)
        reloaded = LeafwaterConfig.from_yaml(out)
        assert reloaded.soil == config.soil
        assert reloaded.potential == config.potential

    def test_missing_yaml(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            LeafwaterConfig.from_yaml(tmp_path / "missing.yaml")

    def test_limitation_from_config(self):
        config = LeafwaterConfig(
            soil={"method": "volumetric", "wc1": 0.2, "wc2": 0.8},
            potential={"kind": "linear"},
            strict_thresholds=True,
        )
        limitation = SoilWaterLimitation.from_config(config)
        assert isinstance(limitation.soil_method, VolumetricSoilMethod)
        assert limitation.potential_factor(-200.0) == pytest.approx(0.5)

    def test_limitation_from_config_strict_rejects(self):
        config = LeafwaterConfig(soil={"method": "volumetric"}, strict_thresholds=True)
        with pytest.raises(InvertedThresholdError):
            SoilWaterLimitation.from_config(config)

    def test_singleton(self):
        custom = LeafwaterConfig(log_level="DEBUG")
        set_config(custom)
        assert get_config() is custom

    def test_get_config_from_yaml(self, tmp_path):
        path = tmp_path / "leafwater.yaml"
        path.write_text("undefined_effect: full_limitation\n")
        assert get_config(path).undefined_effect == "full_limitation"

    def test_setup_logging(self, monkeypatch):
        calls = {}
        monkeypatch.setattr(logging, "basicConfig", lambda **kw: calls.update(kw))
        setup_logging(LeafwaterConfig(log_level="WARNING"))
        assert calls["level"] == logging.WARNING


class TestExceptions:

    def test_context_in_message(self):
        err = InvertedThresholdError("wc1 too high", ErrorContext(component="VolumetricSoilMethod"))
        assert str(err) == "InvertedThresholdError: wc1 too high [Component: VolumetricSoilMethod]"
        assert isinstance(err, ParameterError)

    def test_handle_exception(self):
        assert isinstance(handle_exception(ZeroDivisionError("x")), ParameterError)
        assert isinstance(handle_exception(KeyError("x")), ConfigurationError)
        wrapped = handle_exception(RuntimeError("x"))
        assert type(wrapped) is LeafwaterError
        original = ParameterError("kept")
        assert handle_exception(original) is original
