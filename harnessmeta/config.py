"""
Configuration module for harness metadata processing.
"""
import logging
import os
from pathlib import Path
from typing import Dict, Optional, Any
from dotenv import load_dotenv

from .errors import ConfigurationError
from .types import SUMMARY_ID

LOG_LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL')

class Config:
    """Configuration manager for harness metadata processing."""
    _instance = None

    def __new__(cls, *args, **kwargs):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self, env_file: Optional[str] = None):
        if not hasattr(self, 'initialized'):
            self.env_file = env_file or '.env'
            self._config = {}
            self._load_env()
            self.initialized = True

    def _load_env(self):
        """Load environment variables from .env file."""
        logger = logging.getLogger("harnessmeta.config")

        # First try to load from the explicitly set env file path
        if self.env_file and os.path.exists(self.env_file):
            logger.debug(f"Loading environment from {self.env_file}")
            load_dotenv(self.env_file, override=True)
            return

        # Look for the env file in the current directory and its parents
        current_dir = Path.cwd()
        while current_dir != current_dir.parent:
            potential_path = current_dir / self.env_file
            if potential_path.exists():
                logger.debug(f"Loading environment from {potential_path}")
                load_dotenv(potential_path, override=True)
                return
            current_dir = current_dir.parent

        home_env = Path.home() / '.harnessmeta' / '.env'
        if home_env.exists():
            logger.debug(f"Loading environment from {home_env}")
            load_dotenv(home_env, override=True)

    def set_env_file(self, env_file: str) -> None:
        """
        Set the environment file path and reload environment variables.

        Args:
            env_file: Path to the .env file
        """
        self.env_file = env_file
        self._load_env()

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get a configuration value.

        Explicit overrides win over HARNESSMETA_* environment variables.

        Args:
            key: The configuration key to get
            default: Default value if key is not found

        Returns:
            The configuration value or default
        """
        if key in self._config:
            return self._config[key]
        return os.getenv(f"HARNESSMETA_{key.upper()}", default)

    def set(self, key: str, value: Any) -> None:
        """
        Set a configuration value.

        Args:
            key: The configuration key to set
            value: The value to set
        """
        self._config[key] = value

    def update(self, config_dict: Dict[str, Any]) -> None:
        """
        Update configuration with a dictionary of values.

        Args:
            config_dict: Dictionary of configuration values
        """
        self._config.update(config_dict)

    def reset(self) -> None:
        """Drop all explicit overrides."""
        self._config.clear()

    @property
    def log_level(self) -> str:
        """Console log level, validated against the standard level names."""
        level = str(self.get('log_level', 'INFO')).upper()
        if level not in LOG_LEVELS:
            raise ConfigurationError(f"Invalid log level: {level}", {"allowed": LOG_LEVELS})
        return level

    @property
    def log_dir(self) -> Optional[Path]:
        """Directory for detailed log files, or None to log to the console only."""
        value = self.get('log_dir')
        return Path(value) if value else None

    @property
    def summary_id(self) -> str:
        """Id of the element messages are inserted before."""
        return self.get('summary_id', SUMMARY_ID)

def get_config(env_file: Optional[str] = None) -> Config:
    """
    Get the singleton Config instance.

    Args:
        env_file: Optional path to .env file

    Returns:
        Config: The singleton configuration instance
    """
    return Config(env_file)
