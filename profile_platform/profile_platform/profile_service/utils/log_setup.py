"""
Logging configuration for the profile service.
"""
import logging
import os
import sys

from ..config import Settings

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
LOG_FILENAME = "profile_service.log"

# Handlers attached to the root logger by the last configure_logging() call
_installed_handlers = []


def configure_logging(settings: Settings) -> None:
    """
    Send logs to stdout and, when LOG_DIR is set, to profile_service.log.

    Each call replaces (and closes) the handlers installed by the previous
    one, leaving any other root handlers in place. A log directory that
    cannot be created is reported on stderr and the service continues with
    stdout only.
    """
    root = logging.getLogger()
    for handler in _installed_handlers:
        root.removeHandler(handler)
        handler.close()
    _installed_handlers.clear()

    handlers = [logging.StreamHandler(sys.stdout)]

    if settings.LOG_DIR:
        try:
            os.makedirs(settings.LOG_DIR, exist_ok=True)
            handlers.append(logging.FileHandler(os.path.join(settings.LOG_DIR, LOG_FILENAME)))
        except OSError as e:
            print(f"WARNING: Could not set up file logging: {e}", file=sys.stderr)

    formatter = logging.Formatter(LOG_FORMAT)
    for handler in handlers:
        handler.setFormatter(formatter)
        root.addHandler(handler)
        _installed_handlers.append(handler)

    root.setLevel(getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO))
