"""Environment helpers for resolving repository-local .env files."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Dict, Optional

from dotenv import load_dotenv

ENV_PREFIX = "IMAGE_TAGGER_"


def load_workdir_dotenv(working_dir: Path | str) -> Optional[Path]:
    """Load the nearest .env file at or above ``working_dir`` without overriding the environment."""

    start = Path(working_dir).resolve()
    for directory in (start, *start.parents):
        env_path = directory / ".env"
        if env_path.is_file():
            load_dotenv(env_path, override=False)
            return env_path
    return None


def prefixed_environ(prefix: str = ENV_PREFIX) -> Dict[str, str]:
    """Return ``prefix``-ed variables with the prefix stripped and keys lower-cased."""

    return {
        key[len(prefix):].lower(): value
        for key, value in os.environ.items()
        if key.startswith(prefix) and value.strip()
    }


__all__ = ["ENV_PREFIX", "load_workdir_dotenv", "prefixed_environ"]
