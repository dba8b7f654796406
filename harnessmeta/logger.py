"""
Logging utility for harness metadata processing.
"""
import logging
from datetime import datetime
from pathlib import Path
from typing import Optional
from rich.console import Console
from rich.logging import RichHandler

from .config import get_config
from .errors import ConfigurationError

console = Console(stderr=True)

def _default_console_level() -> str:
    """Configured console level, or INFO when the configured one is invalid."""
    try:
        return get_config().log_level
    except ConfigurationError:
        return 'INFO'

def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance with the specified name.

    File logging is left to configure_logging, which runs once the
    configuration is final.

    Args:
        name: The name of the logger

    Returns:
        A configured logger instance
    """
    logger = logging.getLogger(f"harnessmeta.{name}")
    logger.setLevel(logging.DEBUG)

    # Add rich handler for console output if no handlers exist
    if not logger.handlers:
        console_handler = RichHandler(console=console, show_path=False)
        console_handler.setLevel(_default_console_level())
        logger.addHandler(console_handler)
        logger.propagate = False

    return logger

def _harnessmeta_loggers():
    for name, logger in list(logging.root.manager.loggerDict.items()):
        if name.startswith("harnessmeta.") and isinstance(logger, logging.Logger):
            yield name, logger

def set_console_level(level: str) -> None:
    """
    Change the console level of every harnessmeta logger created so far.

    Args:
        level: Standard logging level name
    """
    for _, logger in _harnessmeta_loggers():
        for handler in logger.handlers:
            if isinstance(handler, RichHandler):
                handler.setLevel(level)

def configure_logging(level: Optional[str] = None, log_dir: Optional[Path] = None) -> None:
    """
    Apply the configured console level and detailed log files.

    Args:
        level: Console level; defaults to the configured log level
        log_dir: Directory for DEBUG log files; defaults to the configured one

    Raises:
        ConfigurationError: If the configured log level is invalid
    """
    config = get_config()
    set_console_level(level or config.log_level)

    output_dir = log_dir if log_dir is not None else config.log_dir
    if output_dir is None:
        return
    output_dir.mkdir(parents=True, exist_ok=True)
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    for name, logger in _harnessmeta_loggers():
        if any(isinstance(handler, logging.FileHandler) for handler in logger.handlers):
            continue
        log_file = output_dir / f"{name.split('.', 1)[1]}_{timestamp}.log"
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(logging.DEBUG)
        logger.addHandler(file_handler)
