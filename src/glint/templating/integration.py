"""Kida environment setup.

Components compile their template source against a kida ``Environment``.
The app creates one from ``AppConfig`` and hands it to every component it
renders pages for; components built without an explicit environment
share a lazily created process-wide default.
"""

import threading

from kida import Environment
from kida.template import Markup

from glint.config import AppConfig

_default_env: Environment | None = None
_default_lock = threading.Lock()


def create_environment(config: AppConfig | None = None) -> Environment:
    """Create a kida Environment from app configuration.

    No loader is configured: component and layout templates are inline
    strings compiled with ``env.from_string``.
    """
    cfg = config or AppConfig()
    return Environment(autoescape=cfg.autoescape)


def default_environment() -> Environment:
    """Return the shared environment used by components without one."""
    global _default_env
    if _default_env is None:
        with _default_lock:
            if _default_env is None:
                _default_env = create_environment()
    return _default_env


def mark_safe(html: str) -> Markup:
    """Wrap already-rendered component markup so layouts don't escape it."""
    return Markup(html)
