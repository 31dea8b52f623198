"""Environment-driven settings shared by the engine and its hosts."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

ENV_PREFIX = "PAIR_ENGINE_"

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off"}


def env(
    name: str,
    default: Optional[str] = None,
    *,
    environ: Optional[Mapping[str, str]] = None,
) -> Optional[str]:
    source = os.environ if environ is None else environ
    return source.get(f"{ENV_PREFIX}{name}", default)


def env_flag(
    name: str, default: bool, *, environ: Optional[Mapping[str, str]] = None
) -> bool:
    raw = env(name, environ=environ)
    if raw is None:
        return default
    value = raw.strip().lower()
    if value in _TRUTHY:
        return True
    if value in _FALSY:
        return False
    raise ValueError(f"{ENV_PREFIX}{name} must be a boolean flag, got {raw!r}")


@dataclass(frozen=True, slots=True)
class EngineSettings:
    """Knobs for the pairing convention and the initial session state."""

    trailing_space: bool = True
    marker: str = "*"
    start_enabled: bool = True
    jump_key: str = "tab"

    def __post_init__(self) -> None:
        if not self.jump_key.strip():
            raise ValueError("jump_key cannot be empty")
        if len(self.marker) != 1:
            raise ValueError(f"marker must be a single character, got {self.marker!r}")
        if self.marker.isspace():
            raise ValueError("marker cannot be whitespace")


def load_settings(environ: Optional[Mapping[str, str]] = None) -> EngineSettings:
    """Build ``EngineSettings`` from ``PAIR_ENGINE_*`` variables."""

    return EngineSettings(
        trailing_space=env_flag("TRAILING_SPACE", True, environ=environ),
        marker=env("MARKER", "*", environ=environ) or "*",
        start_enabled=env_flag("START_ENABLED", True, environ=environ),
        jump_key=env("JUMP_KEY", "tab", environ=environ) or "tab",
    )


__all__ = ["ENV_PREFIX", "EngineSettings", "env", "env_flag", "load_settings"]
