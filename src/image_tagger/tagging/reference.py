"""Container image reference helpers."""

from __future__ import annotations

import re

TAG_RE = re.compile(r"[A-Za-z0-9_][A-Za-z0-9_.-]{0,127}")


def is_valid_tag(tag: str) -> bool:
    """Return ``True`` when ``tag`` is accepted by the docker reference grammar."""

    return bool(TAG_RE.fullmatch(tag))


__all__ = ["TAG_RE", "is_valid_tag"]
