"""
MemFS Configuration Loader

Configuration management for the in-memory filesystem:
- JSON configuration file loading
- Configuration validation
- Default value handling
- Runtime configuration updates

Author: YSNRFD
Version: 1.0.0
"""

import json
import threading
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from memfs.exceptions import ConfigLoadError, ConfigValidationError
from memfs.logger import LogLevel


@dataclass
class NotifierConfig:
    """Change notifier settings."""
    quiet_period_ms: int = 5


@dataclass
class EventLoopConfig:
    """Event loop settings."""
    poll_interval: float = 0.001


@dataclass
class LoggingConfig:
    """Logging configuration settings."""
    level: str = "INFO"
    log_file: Optional[str] = None
    console_output: bool = True
    use_colors: bool = True


@dataclass
class Config:
    """
    Main configuration container.

    Holds all configuration settings for the filesystem.
    """
    notifier: NotifierConfig = field(default_factory=NotifierConfig)
    event_loop: EventLoopConfig = field(default_factory=EventLoopConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


class ConfigLoader:
    """
    Configuration loader and manager.

    Example:
        >>> loader = ConfigLoader()
        >>> config = loader.load('memfs.json')
        >>> config.notifier.quiet_period_ms
        5
    """

    _instance: Optional['ConfigLoader'] = None
    _lock = threading.Lock()

    def __new__(cls) -> 'ConfigLoader':
        """Singleton pattern for configuration access."""
        with cls._lock:
            if cls._instance is None:
                cls._instance = super().__new__(cls)
                cls._instance._config = Config()
                cls._instance._loaded = False
            return cls._instance

    def load(self, config_path: str) -> Config:
        """
        Load configuration from a JSON file.

        Args:
            config_path: Path to the configuration file

        Returns:
            Config object with loaded settings

        Raises:
            ConfigLoadError: If the file cannot be read or parsed
            ConfigValidationError: If a value is out of range
        """
        path = Path(config_path)

        if not path.exists():
            raise ConfigLoadError(
                f"Configuration file not found: {config_path}",
                config_path=config_path
            )

        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigLoadError(
                f"Invalid JSON in configuration file: {e}",
                config_path=config_path
            ) from e
        except OSError as e:
            raise ConfigLoadError(
                f"Cannot read configuration file: {e}",
                config_path=config_path
            ) from e

        if not isinstance(data, dict):
            raise ConfigLoadError(
                "Configuration root must be a JSON object",
                config_path=config_path
            )

        config = self._parse_config(data)
        self.validate(config)

        self._config = config
        self._loaded = True
        return self._config

    def _parse_config(self, data: dict[str, Any]) -> Config:
        """Parse configuration data into Config object."""
        config = Config()

        for name in ('notifier', 'event_loop', 'logging'):
            if name in data and not isinstance(data[name], dict):
                raise ConfigValidationError(
                    f"Section {name!r} must be an object",
                    key=name
                )

        if 'notifier' in data:
            notifier_data = data['notifier']
            config.notifier = NotifierConfig(
                quiet_period_ms=notifier_data.get('quiet_period_ms', config.notifier.quiet_period_ms),
            )

        if 'event_loop' in data:
            loop_data = data['event_loop']
            config.event_loop = EventLoopConfig(
                poll_interval=loop_data.get('poll_interval', config.event_loop.poll_interval),
            )

        if 'logging' in data:
            log_data = data['logging']
            config.logging = LoggingConfig(
                level=log_data.get('level', config.logging.level),
                log_file=log_data.get('log_file', config.logging.log_file),
                console_output=log_data.get('console_output', config.logging.console_output),
                use_colors=log_data.get('use_colors', config.logging.use_colors),
            )

        return config

    @staticmethod
    def validate(config: Config) -> None:
        """
        Check configuration values.

        Raises:
            ConfigValidationError: On the first invalid value found
        """
        quiet = config.notifier.quiet_period_ms
        if not isinstance(quiet, (int, float)) or isinstance(quiet, bool) or quiet < 0:
            raise ConfigValidationError(
                f"quiet_period_ms must be a non-negative number, got {quiet!r}",
                key='notifier.quiet_period_ms'
            )

        interval = config.event_loop.poll_interval
        if not isinstance(interval, (int, float)) or isinstance(interval, bool) or interval <= 0:
            raise ConfigValidationError(
                f"poll_interval must be a positive number, got {interval!r}",
                key='event_loop.poll_interval'
            )

        level = config.logging.level
        if not isinstance(level, str) or level.upper() not in LogLevel.__members__:
            raise ConfigValidationError(
                f"Unknown log level: {level!r}",
                key='logging.level'
            )

    @property
    def config(self) -> Config:
        """Get the current configuration."""
        return self._config

    @property
    def loaded(self) -> bool:
        return self._loaded

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get a configuration value by dot-notation key.

        Args:
            key: Dot-notation key (e.g., 'notifier.quiet_period_ms')
            default: Default value if key not found

        Returns:
            Configuration value or default
        """
        obj: Any = self._config

        for part in key.split('.'):
            if hasattr(obj, part):
                obj = getattr(obj, part)
            else:
                return default

        return obj

    def set(self, key: str, value: Any) -> None:
        """
        Set a configuration value at runtime.

        Changes are not persisted to disk.

        Raises:
            ConfigValidationError: If the key is unknown or the value invalid
        """
        parts = key.split('.')
        obj: Any = self._config

        for part in parts[:-1]:
            if hasattr(obj, part):
                obj = getattr(obj, part)
            else:
                raise ConfigValidationError(f"Invalid configuration key: {key}", key=key)

        final_key = parts[-1]
        if not hasattr(obj, final_key):
            raise ConfigValidationError(f"Invalid configuration key: {key}", key=key)

        previous = getattr(obj, final_key)
        setattr(obj, final_key, value)
        try:
            self.validate(self._config)
        except ConfigValidationError:
            setattr(obj, final_key, previous)
            raise

    def reload(self, config_path: str) -> Config:
        """Reload configuration from file."""
        return self.load(config_path)

    def reset(self) -> None:
        """Restore the default configuration."""
        self._config = Config()
        self._loaded = False

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to dictionary."""
        def dataclass_to_dict(obj: Any) -> Any:
            if hasattr(obj, '__dataclass_fields__'):
                return {
                    k: dataclass_to_dict(v)
                    for k, v in obj.__dict__.items()
                }
            elif isinstance(obj, list):
                return [dataclass_to_dict(item) for item in obj]
            elif isinstance(obj, dict):
                return {k: dataclass_to_dict(v) for k, v in obj.items()}
            else:
                return obj

        return dataclass_to_dict(self._config)


def get_config() -> Config:
    """
    Get the global configuration instance.

    Returns:
        Config object with current settings
    """
    return ConfigLoader().config
