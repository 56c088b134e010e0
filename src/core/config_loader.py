import json
import logging
from pathlib import Path

from core.models.config_data import configData
from core.models.sample import to_finite_or_none

logger = logging.getLogger(__name__)


class ConfigLoader:
    """Loads and manages fleet scoring configuration from JSON file."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super(ConfigLoader, cls).__new__(cls)
            cls._instance._config = configData()
            cls._instance._initialized = False
        return cls._instance

    def __init__(self):
        if not self._initialized:
            self._config = self._get_default_config()
            self.load_config()
            self._initialized = True

    @staticmethod
    def get_config_path() -> Path:
        """Get the path to the fleet_config.json file."""
        # Config file should be in the project root/config directory
        config_path = Path(__file__).parent.parent.parent / "config" / "fleet_config.json"
        return config_path

    def load_config(self, config_path: Path = None):
        """Load configuration from JSON file."""
        if config_path is None:
            config_path = self.get_config_path()

        # Start from defaults so a partial file keeps sane values
        self._config = self._get_default_config()

        if not config_path.exists():
            logger.error(f"Configuration file not found: {config_path}")
            return

        try:
            with open(config_path, 'r') as f:
                json_data = json.load(f)

            expected_hz = to_finite_or_none(json_data.get("expected_hz", self._config.expected_hz))
            if expected_hz is None:
                logger.warning(f"Invalid expected_hz in {config_path}, using {self._config.expected_hz}")
            else:
                self._config.expected_hz = expected_hz

            for key in ("history_capacity", "max_devices"):
                default = getattr(self._config, key)
                value = json_data.get(key, default)
                if isinstance(value, int) and not isinstance(value, bool) and value > 0:
                    setattr(self._config, key, value)
                else:
                    logger.warning(f"Invalid {key} in {config_path}, using {default}")

            logger.info(f"Configuration loaded from {config_path}")

        except json.JSONDecodeError as e:
            logger.error(f"Failed to parse configuration file: {e}")
            self._config = self._get_default_config()

        except Exception as e:
            logger.error(f"Unexpected error loading configuration: {e}")
            self._config = self._get_default_config()

    @staticmethod
    def _get_default_config() -> configData:
        """Return default configuration."""
        return configData(expected_hz=1.0, history_capacity=500, max_devices=1000)

    def get_expected_hz(self) -> float:
        """Expected per-device sample rate in Hz."""
        return self._config.expected_hz

    def set_expected_hz(self, expected_hz: float):
        """Override the configured rate (e.g. from the environment) until the next reload."""
        self._config.expected_hz = expected_hz

    def get_history_capacity(self) -> int:
        """Maximum number of samples kept per device."""
        return self._config.history_capacity

    def get_max_devices(self) -> int:
        """Maximum number of devices kept in history."""
        return self._config.max_devices

    def reload_config(self):
        """Reload configuration from file."""
        self.load_config()
        logger.info("Configuration reloaded")


# Global singleton instance
config_loader = ConfigLoader()
