"""
Logging setup.

Modules log through `logging.getLogger(__name__)`; this only wires the
root handler once at start-up.
"""

import logging

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """Attach a stream handler to the root logger (idempotent)."""
    root = logging.getLogger()
    root.setLevel(level.upper())

    if not any(getattr(h, "_portal_handler", False) for h in root.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._portal_handler = True
        root.addHandler(handler)
