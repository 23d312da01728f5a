import os
import logging
from warnings import warn

LOG_FORMAT = '%(asctime)s [%(levelname)s] %(message)s'
LOG_DATEFMT = '%Y-%m-%d %H:%M:%S'


def _env_flag(name, default):
    raw = os.environ.get(name)
    if raw is None:
        return default
    return raw.strip().lower() not in ("0", "false", "no", "off", "")


LOG_LEVEL = os.environ.get("SCALARGRAD_LOG_LEVEL", "WARNING").upper()
LOG_FILE = os.environ.get("SCALARGRAD_LOG_FILE") or None

# defaults for AutogradGraph
CHECK_CYCLES = _env_flag("SCALARGRAD_CHECK_CYCLES", True)
AUTO_CLEANUP = _env_flag("SCALARGRAD_AUTO_CLEANUP", True)


def configure_logging(level=None, filename=None):
    """
    Configures the root logger for scripts using scalargrad.
    The library itself never installs handlers on import.
    """
    level = level if level is not None else LOG_LEVEL
    if isinstance(level, str):
        numeric = logging.getLevelName(level.upper())
        if not isinstance(numeric, int):
            raise ValueError(f"Unknown log level: {level!r}")
        level = numeric
    filename = filename if filename is not None else LOG_FILE
    kwargs = dict(level=level, format=LOG_FORMAT, datefmt=LOG_DATEFMT)
    if filename:
        kwargs['filename'] = filename
    logging.basicConfig(**kwargs)
    logging.getLogger("scalargrad").setLevel(level)


if __name__ == "__main__":
    warn("This module is not intended to be run directly. Please import it in your application.")
