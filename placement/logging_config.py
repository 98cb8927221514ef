"""
Logging setup for the placement service and its scripts.

Level and log file default to PLACEMENT_LOG_LEVEL / PLACEMENT_LOG_FILE.
"""
import logging
import sys
from pathlib import Path
from typing import Optional, Union

from placement import config

LOG_FORMAT = "[%(asctime)s] [{component}] %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def resolve_level(level: Union[int, str, None]) -> int:
    """Accept a level number or name ("debug", "WARNING"); None means configured level."""
    if level is None:
        return config.LOG_LEVEL
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(str(level).strip().upper())
    if not isinstance(resolved, int):
        raise ValueError(f"Unknown log level: {level!r}")
    return resolved


def setup_logging(
    component_name: str = "placement",
    level: Union[int, str, None] = None,
    log_file: Optional[str] = None,
) -> logging.Logger:
    """
    Route root logging to stdout (and optionally a file) tagged with the component.

    Calling it again replaces the handlers installed by the previous call.
    """
    level = resolve_level(level)
    log_file = log_file or config.LOG_FILE
    formatter = logging.Formatter(LOG_FORMAT.format(component=component_name.upper()), datefmt=DATE_FORMAT)

    handlers = [logging.StreamHandler(sys.stdout)]
    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file))
    for handler in handlers:
        handler.setFormatter(formatter)

    logging.basicConfig(level=level, handlers=handlers, force=True)

    logger = logging.getLogger(component_name)
    logger.info("%s logging initialized (level=%s)", component_name.upper(), logging.getLevelName(level))
    return logger
