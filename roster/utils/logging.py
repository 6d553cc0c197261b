"""Root logger setup for the ``roster`` CLI and embedding applications.

Environment overrides, checked in order:
    ROSTER_LOG_LEVEL   explicit level, by name (``debug``) or number (``10``)
    ROSTER_DEBUG       truthy value forces DEBUG when no explicit level is set
"""

from __future__ import annotations

import logging
import os
from typing import Mapping, Optional, Union

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
LOG_DATEFMT = "%H:%M:%S"

ENV_LEVEL = "ROSTER_LOG_LEVEL"
ENV_DEBUG = "ROSTER_DEBUG"

_TRUTHY = frozenset({"1", "true", "yes", "on"})


def env_truthy(value: Optional[str]) -> bool:
    return value is not None and value.strip().lower() in _TRUTHY


def parse_level(value: Union[int, str, None], fallback: int = logging.INFO) -> int:
    """Turn ``"warning"``, ``"30"`` or ``30`` into a level; unknown input gives ``fallback``."""
    if isinstance(value, int):
        return value
    text = (value or "").strip()
    if not text:
        return fallback
    if text.isdigit():
        return int(text)
    # getLevelName maps registered names back to their number
    level = logging.getLevelName(text.upper())
    return level if isinstance(level, int) else fallback


def _env_level(env: Mapping[str, str]) -> Optional[int]:
    explicit = env.get(ENV_LEVEL)
    if explicit and explicit.strip():
        return parse_level(explicit)
    if env_truthy(env.get(ENV_DEBUG)):
        return logging.DEBUG
    return None


def configure_root(
    default_level: Union[int, str] = logging.INFO,
    *,
    environ: Optional[Mapping[str, str]] = None,
) -> int:
    """Install a stream handler on first use and set the root level.

    Returns the level actually applied, after environment overrides.
    """
    env = os.environ if environ is None else environ
    level = _env_level(env)
    if level is None:
        level = parse_level(default_level)

    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(level=level, format=LOG_FORMAT, datefmt=LOG_DATEFMT)
    root.setLevel(level)
    return level


__all__ = ["configure_root", "env_truthy", "parse_level"]
