"""
Process-wide logging setup.

Everything goes to stdout so gunicorn / the container runtime captures it
next to the access log.
"""
import logging
import sys

_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str = "INFO") -> None:
    root = logging.getLogger()
    if not any(getattr(h, "_ltos", False) for h in root.handlers):
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(_FORMAT))
        handler._ltos = True  # type: ignore[attr-defined]
        root.addHandler(handler)
    root.setLevel(level.upper())
