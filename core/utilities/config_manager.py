# core/utilities/config_manager.py
import json
import logging
from config import (
    PathConfig,
    DEFAULT_COUNTER_WIDTH,
    DEFAULT_FALSE_POSITIVE_RATE,
    DEFAULT_TOP_K,
    MAX_COUNTER_WIDTH
)

logger = logging.getLogger(__name__)

class ConfigManager:
    LOG_LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR')

    DEFAULT_SETTINGS = {
        'top_k': DEFAULT_TOP_K,  # How many documents in the result list
        'false_positive_rate': DEFAULT_FALSE_POSITIVE_RATE,
        'counter_width': DEFAULT_COUNTER_WIDTH,
        'minimize_width': False,
        'log_level': 'WARNING'
    }

    _instance = None

    def __new__(cls, config_path=None):
        if cls._instance is None or config_path is not None:
            instance = super().__new__(cls)
            instance.load(config_path)
            if config_path is not None:
                return instance  # Explicit paths never replace the singleton
            cls._instance = instance
        return cls._instance

    def load(self, config_path=None):
        self.config_path = config_path or PathConfig.get_config_path()
        try:
            if self.config_path.exists():
                with open(self.config_path, 'r') as f:
                    self.settings = json.load(f)
                if not isinstance(self.settings, dict):
                    raise ValueError("config root must be an object")

                # Ensure new settings exist
                for key, default in self.DEFAULT_SETTINGS.items():
                    if key not in self.settings:
                        self.settings[key] = default
                self._reset_invalid_settings()
            else:
                self.settings = self.DEFAULT_SETTINGS.copy()
        except (OSError, ValueError) as e:
            logger.warning(f"Ignoring unreadable config {self.config_path}: {e}")
            self.settings = self.DEFAULT_SETTINGS.copy()

    def _reset_invalid_settings(self):
        """Replace hand-edited values the setters would reject with their defaults"""
        def is_count(value, low, high):
            return isinstance(value, int) and not isinstance(value, bool) and low <= value <= high

        checks = {
            'top_k': lambda v: is_count(v, 1, 10_000),
            'false_positive_rate': lambda v: (isinstance(v, (int, float)) and not isinstance(v, bool)
                                              and 0.0 < v < 1.0),
            'counter_width': lambda v: is_count(v, 1, MAX_COUNTER_WIDTH),
            'minimize_width': lambda v: isinstance(v, bool),
            'log_level': lambda v: isinstance(v, str) and v.upper() in self.LOG_LEVELS,
        }
        for key, is_valid in checks.items():
            if not is_valid(self.settings[key]):
                logger.warning(
                    f"Invalid {key} {self.settings[key]!r} in {self.config_path}, "
                    f"using {self.DEFAULT_SETTINGS[key]!r}"
                )
                self.settings[key] = self.DEFAULT_SETTINGS[key]

    def save(self):
        with open(self.config_path, 'w') as f:
            json.dump(self.settings, f, indent=2)

    def get(self, key, default=None):
        return self.settings.get(key, default)

    def set(self, key, value):
        self.settings[key] = value
        self.save()

    def get_top_k(self) -> int:
        """Get number of results to return per search."""
        return self.get('top_k', DEFAULT_TOP_K)

    def set_top_k(self, value: int):
        """Set number of results (1-10k)."""
        value = max(1, min(10_000, int(value)))
        self.set('top_k', value)

    def get_false_positive_rate(self) -> float:
        return self.get('false_positive_rate', DEFAULT_FALSE_POSITIVE_RATE)

    def set_false_positive_rate(self, value: float):
        rate = float(value)
        if not 0.0 < rate < 1.0:
            raise ValueError("False positive rate must be between 0 and 1 (exclusive)")
        self.set('false_positive_rate', rate)

    def get_counter_width(self) -> int:
        return self.get('counter_width', DEFAULT_COUNTER_WIDTH)

    def set_counter_width(self, value: int):
        width = int(value)
        if not 1 <= width <= MAX_COUNTER_WIDTH:
            raise ValueError(f"Counter width must be between 1 and {MAX_COUNTER_WIDTH}")
        self.set('counter_width', width)

    def get_minimize_width(self) -> bool:
        return self.get('minimize_width', False)

    def set_minimize_width(self, value):
        self.set('minimize_width', bool(value))

    def get_log_level(self) -> str:
        level = str(self.get('log_level', 'WARNING')).upper()
        return level if level in self.LOG_LEVELS else 'WARNING'

    def set_log_level(self, value: str):
        level = str(value).upper()
        if level not in self.LOG_LEVELS:
            raise ValueError(f"Invalid log level: {value}")
        self.set('log_level', level)

# Singleton access
config_manager = ConfigManager()
