"""
Logging setup for the backend.

Modules log through ``logging.getLogger(__name__)``; this only wires the
root handler once at application startup.
"""

import logging
import sys

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """Attach a stdout handler to the root logger and set its level."""
    root = logging.getLogger()
    root.setLevel(level.upper())

    # Idempotent across app factories created in the same process
    if any(getattr(h, "_ecochallenge", False) for h in root.handlers):
        return

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler._ecochallenge = True  # type: ignore[attr-defined]
    root.addHandler(handler)
