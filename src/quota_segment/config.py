# SPDX-License-Identifier: LGPL-3.0-only
# Copyright (c) 2026 Mirrowel

"""
Runtime configuration for the quota segment.

Everything the segment reads from the outside world (environment variables,
the per-user Claude directory, the diagnostic toggle) is captured once into a
frozen QuotaSettings object and passed down explicitly.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping, Optional


DEFAULT_TIMEOUT_SECONDS = 5.0

DEBUG_ENV = "YESCODE_DEBUG"
ENABLED_ENV = "QUOTA_SEGMENT_ENABLED"
TIMEOUT_ENV = "QUOTA_TIMEOUT_SECONDS"

SETTINGS_FILENAME = "settings.json"
API_KEY_FILENAME = "api_key"

_FALSY = {"0", "false", "no", "off"}
_TRUTHY = {"1", "true", "yes", "on"}


class QuotaConfigError(RuntimeError):
    pass


def parse_bool_env(environ: Mapping[str, str], name: str, default: bool) -> bool:
    raw = environ.get(name)
    if raw is None:
        return default
    return raw.strip().lower() in _TRUTHY


def is_debug_enabled(environ: Mapping[str, str]) -> bool:
    # Presence alone turns diagnostics on; only an explicit falsy value turns them off.
    raw = environ.get(DEBUG_ENV)
    if raw is None:
        return False
    return raw.strip().lower() not in _FALSY


def default_claude_dir() -> Path:
    return Path.home() / ".claude"


def parse_timeout(environ: Mapping[str, str]) -> float:
    raw = (environ.get(TIMEOUT_ENV) or "").strip()
    if not raw:
        return DEFAULT_TIMEOUT_SECONDS
    try:
        value = float(raw)
    except ValueError:
        raise QuotaConfigError(
            f"Invalid {TIMEOUT_ENV}={raw!r}: expected a number of seconds."
        ) from None
    if value <= 0:
        raise QuotaConfigError(
            f"Invalid {TIMEOUT_ENV}={raw!r}: timeout must be positive."
        )
    return value


@dataclass(frozen=True)
class QuotaSettings:
    environ: Mapping[str, str] = field(default_factory=dict)
    claude_dir: Path = field(default_factory=default_claude_dir)
    debug: bool = False
    enabled: bool = True
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS

    @property
    def settings_path(self) -> Path:
        return self.claude_dir / SETTINGS_FILENAME

    @property
    def api_key_path(self) -> Path:
        return self.claude_dir / API_KEY_FILENAME

    @classmethod
    def from_env(
        cls,
        environ: Optional[Mapping[str, str]] = None,
        claude_dir: Optional[Path] = None,
    ) -> "QuotaSettings":
        """Snapshot the environment into a settings object."""
        env = dict(os.environ if environ is None else environ)
        return cls(
            environ=env,
            claude_dir=claude_dir if claude_dir is not None else default_claude_dir(),
            debug=is_debug_enabled(env),
            enabled=parse_bool_env(env, ENABLED_ENV, True),
            timeout_seconds=parse_timeout(env),
        )


def get_quota_settings() -> QuotaSettings:
    return QuotaSettings.from_env()
