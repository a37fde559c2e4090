import json
import logging
from pathlib import Path
from typing import Optional

from core.models.config_data import chartConfigData, configData, dashboardConfigData

logger = logging.getLogger(__name__)

class ConfigLoader:
    """Loads and manages dashboard configuration from JSON file."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super(ConfigLoader, cls).__new__(cls)
            cls._instance._config = cls._get_default_config()
            cls._instance._initialized = False
        return cls._instance

    def __init__(self):
        if not self._initialized:
            self._config = self._get_default_config()
            self.load_config()
            self._initialized = True

    @staticmethod
    def get_config_path() -> Path:
        """Get the path to the dashboard_config.json file."""
        # Config file should be in the project root/config directory
        config_path = Path(__file__).parent.parent.parent / "config" / "dashboard_config.json"
        return config_path

    def load_config(self, config_path: Optional[Path] = None):
        """Load configuration from JSON file."""
        config_path = config_path or self.get_config_path()

        # Start from defaults so a partial file still yields a usable config
        self._config = self._get_default_config()

        if not config_path.exists():
            logger.warning(f"Configuration file not found: {config_path}, using defaults")
            return

        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                json_data = json.load(f)

            if not isinstance(json_data, dict):
                raise ValueError(f"top-level JSON must be an object, got {type(json_data).__name__}")

            dashboard_cfg = self._section(json_data, "dashboard")
            defaults = self._config.dashboard
            dashboard = dashboardConfigData(
                window_capacity=int(dashboard_cfg.get("window_capacity", defaults.window_capacity)),
                interval_ms=int(dashboard_cfg.get("interval_ms", defaults.interval_ms)),
                value_min=float(dashboard_cfg.get("value_min", defaults.value_min)),
                value_max=float(dashboard_cfg.get("value_max", defaults.value_max)),
                unit=dashboard_cfg.get("unit", defaults.unit),
            )
            dashboard.validate()

            chart_cfg = self._section(json_data, "chart")
            chart_defaults = self._config.chart
            chart = chartConfigData(
                width=int(chart_cfg.get("width", chart_defaults.width)),
                height=int(chart_cfg.get("height", chart_defaults.height)),
                line_color=chart_cfg.get("line_color", chart_defaults.line_color),
                background=chart_cfg.get("background", chart_defaults.background),
                dot_radius=int(chart_cfg.get("dot_radius", chart_defaults.dot_radius)),
            )

            self._config = configData(dashboard=dashboard, chart=chart)
            logger.info(f"Configuration loaded from {config_path}")

        except json.JSONDecodeError as e:
            logger.error(f"Failed to parse configuration file: {e}")
            self._config = self._get_default_config()

        except (TypeError, ValueError) as e:
            logger.error(f"Invalid configuration values in {config_path}: {e}")
            self._config = self._get_default_config()

    @staticmethod
    def _section(json_data: dict, key: str) -> dict:
        """Return a config section, which must be a JSON object when present."""
        section = json_data.get(key, {})
        if not isinstance(section, dict):
            raise ValueError(f"\"{key}\" section must be an object, got {type(section).__name__}")
        return section

    @staticmethod
    def _get_default_config() -> configData:
        """Return default configuration."""
        return configData(dashboard=dashboardConfigData(), chart=chartConfigData())

    def get_dashboard_config(self) -> dashboardConfigData:
        """Get the generator/window tunables."""
        return self._config.dashboard

    def get_chart_config(self) -> chartConfigData:
        """Get the default chart rendering settings."""
        return self._config.chart

    def get_window_capacity(self) -> int:
        return self._config.dashboard.window_capacity

    def get_interval_ms(self) -> int:
        return self._config.dashboard.interval_ms

    def get_value_range(self) -> tuple[float, float]:
        return self._config.dashboard.value_min, self._config.dashboard.value_max

    def reload_config(self):
        """Reload configuration from file."""
        self.load_config()
        logger.info("Configuration reloaded")


# Global singleton instance
config_loader = ConfigLoader()
