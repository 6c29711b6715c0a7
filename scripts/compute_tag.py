#!/usr/bin/env python3
"""Print the reproducible image reference for the current git working copy.

Usage:
    ./scripts/compute_tag.py --image myapp [--working-dir path] [--config tagger.yaml]
"""

from __future__ import annotations

import sys
from pathlib import Path

_REPO_ROOT = Path(__file__).resolve().parents[1]
_SRC = _REPO_ROOT / "src"
if _SRC.exists():  # pragma: no cover - bootstrap import path
    sys.path.insert(0, str(_SRC))

from image_tagger.cli import main  # noqa: E402


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
