"""Tests for configuration module."""

import tempfile
from pathlib import Path

import pytest

from rack_monitor.config import (
    Config,
    RackConfig,
    ServiceConfig,
    Thresholds,
    create_example_config,
)
from rack_monitor.errors import ConfigurationError


class TestThresholds:
    """Tests for Thresholds configuration."""

    def test_default_values(self):
        t = Thresholds()
        assert t.shaky == 0.9
        assert t.unhealthy == 0.8
        t.validate()

    def test_from_dict(self):
        t = Thresholds.from_dict({"shaky": 0.75})
        assert t.shaky == 0.75
        # Default for missing value
        assert t.unhealthy == 0.8

    def test_inverted_thresholds_rejected(self):
        with pytest.raises(ConfigurationError):
            Thresholds(shaky=0.8, unhealthy=0.9).validate()

    def test_equal_thresholds_rejected(self):
        with pytest.raises(ConfigurationError):
            Thresholds(shaky=0.8, unhealthy=0.8).validate()

    @pytest.mark.parametrize("shaky,unhealthy", [(1.1, 0.8), (0.9, 0.0), (0.9, -0.1)])
    def test_out_of_range_rejected(self, shaky, unhealthy):
        with pytest.raises(ConfigurationError):
            Thresholds(shaky=shaky, unhealthy=unhealthy).validate()

    def test_non_numeric_rejected(self):
        with pytest.raises(ConfigurationError):
            Thresholds.from_dict({"shaky": "high"})

    def test_shaky_threshold_of_one_allowed(self):
        Thresholds(shaky=1.0, unhealthy=0.5).validate()


class TestServiceConfig:
    """Tests for collaborator endpoint configuration."""

    def test_from_dict_minimal(self):
        svc = ServiceConfig.from_dict({"url": "http://warranty.local"})
        assert svc.url == "http://warranty.local"
        assert svc.timeout == 10.0
        assert svc.headers == {}

    def test_missing_url(self):
        with pytest.raises(ConfigurationError):
            ServiceConfig.from_dict({"timeout": 5})


class TestRackConfig:
    """Tests for rack configuration."""

    def test_from_dict_static(self):
        rack = RackConfig.from_dict("RACK01", {
            "servers": {"TEST0001": 1, "TEST0002": 2},
            "health": {"TEST0001": 0.5},
        })
        assert rack.name == "RACK01"
        assert rack.servers == {"TEST0001": 1, "TEST0002": 2}
        assert rack.health == {"TEST0001": 0.5}
        assert rack.inventory_url is None

    def test_whole_float_unit_accepted(self):
        rack = RackConfig.from_dict("RACK01", {"servers": {"TEST0001": 3.0}})
        assert rack.servers == {"TEST0001": 3}

    @pytest.mark.parametrize("unit", [1.7, "x", None, True, [1]])
    def test_invalid_unit_rejected(self, unit):
        with pytest.raises(ConfigurationError):
            RackConfig.from_dict("RACK01", {"servers": {"TEST0001": unit}})

    @pytest.mark.parametrize("score", [1.5, -0.1, "x", None])
    def test_invalid_score_rejected(self, score):
        with pytest.raises(ConfigurationError):
            RackConfig.from_dict("RACK01", {
                "servers": {"TEST0001": 1},
                "health": {"TEST0001": score},
            })

    def test_non_mapping_servers_rejected(self):
        with pytest.raises(ConfigurationError):
            RackConfig.from_dict("RACK01", {"servers": ["TEST0001"]})

    def test_from_dict_inventory(self):
        rack = RackConfig.from_dict("RACK02", {
            "servers": {"TEST0101": 1},
            "inventory_url": "http://inventory.local",
        })
        assert rack.health is None
        assert rack.inventory_url == "http://inventory.local"


class TestConfig:
    """Tests for main configuration."""

    def test_from_dict(self):
        data = {
            "racks": {
                "RACK01": {"servers": {"TEST0001": 1}, "health": {"TEST0001": 0.95}},
                "RACK02": {"servers": {"TEST0101": 1}},
            },
            "inventory_url": "http://inventory.local",
            "thresholds": {"shaky": 0.85, "unhealthy": 0.6},
            "warranty": {"url": "http://warranty.local"},
            "replacement": {"url": "http://replacements.local", "timeout": 30},
        }
        config = Config.from_dict(data)
        assert len(config.racks) == 2
        assert config.thresholds.shaky == 0.85
        assert config.warranty.url == "http://warranty.local"
        assert config.replacement.timeout == 30
        assert config.inventory_url_for(config.get_rack("RACK02")) == "http://inventory.local"

    def test_invalid_thresholds_rejected(self):
        with pytest.raises(ConfigurationError):
            Config.from_dict({"thresholds": {"shaky": 0.5, "unhealthy": 0.7}})

    def test_rack_without_health_source_rejected(self):
        with pytest.raises(ConfigurationError):
            Config.from_dict({"racks": {"RACK01": {"servers": {"TEST0001": 1}}}})

    def test_get_rack(self):
        config = create_example_config()
        assert config.get_rack("RACK01") is not None
        assert config.get_rack("nonexistent") is None

    def test_from_yaml(self):
        yaml_content = """
racks:
  RACK01:
    servers:
      TEST0001: 1
      TEST0002: 2
    health:
      TEST0001: 0.5
      TEST0002: 0.95

thresholds:
  shaky: 0.9
  unhealthy: 0.8

warranty:
  url: http://warranty.local
"""
        with tempfile.NamedTemporaryFile(mode="w", suffix=".yaml", delete=False) as f:
            f.write(yaml_content)
            f.flush()

            config = Config.from_yaml(f.name)
            assert len(config.racks) == 1
            assert config.racks[0].servers["TEST0002"] == 2
            assert config.replacement is None

        Path(f.name).unlink()

    def test_from_yaml_missing_file(self):
        with pytest.raises(FileNotFoundError):
            Config.from_yaml("/nonexistent/rackmon.yaml")

    def test_to_yaml(self):
        config = create_example_config()

        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "rackmon.yaml"
            config.to_yaml(path)

            assert path.exists()

            loaded = Config.from_yaml(path)
            assert len(loaded.racks) == len(config.racks)
            assert loaded.thresholds == config.thresholds
            assert loaded.get_rack("RACK02").inventory_url == config.get_rack("RACK02").inventory_url
