"""Deterministic container image tags derived from git working-copy state."""

from importlib import import_module
from typing import Any

__version__ = "0.1.0"

__all__ = ("cli", "config", "errors", "tagging", "utils", "vcs")


def __getattr__(name: str) -> Any:
    if name in __all__:
        module = import_module(f"{__name__}.{name}")
        globals()[name] = module
        return module
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
