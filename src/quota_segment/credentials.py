# SPDX-License-Identifier: LGPL-3.0-only
# Copyright (c) 2026 Mirrowel

"""
API key resolution for the quota segment.

Priority: environment variables > Claude Code settings.json > api_key file.
Every call re-reads every source; nothing is cached.
"""

import json
from pathlib import Path
from typing import Any, Callable, Optional, Tuple

from .config import QuotaSettings
from .diagnostics import lib_logger, mask_credential


ENV_KEY_ORDER: Tuple[str, ...] = (
    "YESCODE_API_KEY",
    "ANTHROPIC_API_KEY",
    "ANTHROPIC_AUTH_TOKEN",
)

SETTINGS_KEY_ORDER: Tuple[str, ...] = (
    "ANTHROPIC_AUTH_TOKEN",
    "ANTHROPIC_API_KEY",
)


def _read_text(path: Path) -> str:
    return path.read_text(encoding="utf-8")


def _non_empty(value: Any) -> Optional[str]:
    if isinstance(value, str) and value.strip():
        return value
    return None


class CredentialResolver:
    """
    Resolves the API key from the configured sources.

    Args:
        settings: Environment snapshot and per-user paths
        read_text: File reader, injectable for tests
    """

    def __init__(
        self,
        settings: QuotaSettings,
        read_text: Callable[[Path], str] = _read_text,
    ):
        self.settings = settings
        self._read_text = read_text

    def resolve(self) -> Optional[str]:
        for name in ENV_KEY_ORDER:
            key = _non_empty(self.settings.environ.get(name))
            if key is not None:
                lib_logger.debug(f"Using API key from ${name} ({mask_credential(key)})")
                return key

        key = self.load_from_settings()
        if key is not None:
            return key

        key = self.load_from_key_file()
        if key is not None:
            return key

        lib_logger.debug("No API key found in environment, settings or key file")
        return None

    def load_from_settings(self) -> Optional[str]:
        path = self.settings.settings_path
        try:
            content = self._read_text(path)
        except (OSError, UnicodeDecodeError):
            return None

        try:
            settings = json.loads(content)
        except ValueError as e:
            lib_logger.debug(f"Ignoring malformed settings file {path}: {e}")
            return None

        if not isinstance(settings, dict):
            return None
        env = settings.get("env")
        if not isinstance(env, dict):
            return None

        for name in SETTINGS_KEY_ORDER:
            key = _non_empty(env.get(name))
            if key is not None:
                lib_logger.debug(
                    f"Using API key from {path.name} env.{name} ({mask_credential(key)})"
                )
                return key
        return None

    def load_from_key_file(self) -> Optional[str]:
        path = self.settings.api_key_path
        try:
            content = self._read_text(path)
        except (OSError, UnicodeDecodeError):
            return None

        key = content.strip()
        if not key:
            return None
        lib_logger.debug(f"Using API key from {path} ({mask_credential(key)})")
        return key
