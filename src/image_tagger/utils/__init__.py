"""Utility helpers for logging and environment loading."""

from .logging import configure_logging
from .env import load_workdir_dotenv, prefixed_environ

__all__ = [
    "configure_logging",
    "load_workdir_dotenv",
    "prefixed_environ",
]
