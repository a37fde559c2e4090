import json

import pytest

from core.config_loader import config_loader, ConfigLoader
from core.models.config_data import dashboardConfigData
from core.service_manager import service_manager


class TestConfigLoader:
    """Test configuration loading and access."""

    def test_config_singleton(self):
        """Test that ConfigLoader is a singleton."""
        assert ConfigLoader() is config_loader

    def test_shipped_config_defaults(self):
        """The shipped JSON matches the reference tunables."""
        config = config_loader.get_dashboard_config()
        assert config.window_capacity == 20
        assert config.interval_ms == 2000
        assert config_loader.get_value_range() == (65.0, 85.0)

    def test_partial_file_keeps_defaults(self, tmp_path):
        path = tmp_path / "dashboard_config.json"
        path.write_text(json.dumps({"dashboard": {"window_capacity": 5}}), encoding="utf-8")
        config_loader.load_config(path)

        assert config_loader.get_window_capacity() == 5
        assert config_loader.get_interval_ms() == 2000
        assert config_loader.get_chart_config().width == 1000

    def test_missing_file_uses_defaults(self, tmp_path):
        config_loader.load_config(tmp_path / "missing.json")
        assert config_loader.get_dashboard_config() == dashboardConfigData()

    def test_invalid_json_uses_defaults(self, tmp_path):
        path = tmp_path / "dashboard_config.json"
        path.write_text("{not json", encoding="utf-8")
        config_loader.load_config(path)
        assert config_loader.get_dashboard_config() == dashboardConfigData()

    @pytest.mark.parametrize("content", [
        [],
        {"dashboard": 5},
        {"chart": "wide"},
    ])
    def test_wrong_shape_uses_defaults(self, tmp_path, content):
        """Valid JSON with the wrong structure is logged and ignored"""
        path = tmp_path / "dashboard_config.json"
        path.write_text(json.dumps(content), encoding="utf-8")
        config_loader.load_config(path)
        assert config_loader.get_dashboard_config() == dashboardConfigData()
        assert config_loader.get_chart_config().width == 1000

    def test_invalid_values_use_defaults(self, tmp_path):
        path = tmp_path / "dashboard_config.json"
        path.write_text(json.dumps({"dashboard": {"value_min": 90, "value_max": 70}}), encoding="utf-8")
        config_loader.load_config(path)
        assert config_loader.get_value_range() == (65.0, 85.0)


class TestConfigOverrides:
    """Environment overrides merged by the service manager."""

    def test_overrides_applied(self):
        config = service_manager.build_config({"interval_ms": 250, "value_min": None})
        assert config.interval_ms == 250
        assert config.value_min == 65.0

    def test_invalid_override_rejected(self):
        with pytest.raises(ValueError):
            service_manager.build_config({"window_capacity": 0})

    @pytest.mark.parametrize("kwargs", [
        {"interval_ms": 0},
        {"value_min": float("nan")},
        {"value_min": 10.0, "value_max": 5.0},
    ])
    def test_validate(self, kwargs):
        with pytest.raises(ValueError):
            dashboardConfigData(**kwargs).validate()
