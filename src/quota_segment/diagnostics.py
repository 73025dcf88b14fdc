# SPDX-License-Identifier: LGPL-3.0-only
# Copyright (c) 2026 Mirrowel

import hashlib
import logging
import sys
from typing import Optional, TextIO


lib_logger = logging.getLogger("quota_segment")
lib_logger.addHandler(logging.NullHandler())


class DiagnosticHandler(logging.StreamHandler):
    """Marker subclass so the diagnostic handler is attached at most once."""


class DiagnosticFormatter(logging.Formatter):
    def format(self, record):
        return f"[{record.levelname}] {record.getMessage()}"


def enable_diagnostics(stream: Optional[TextIO] = None) -> logging.Logger:
    """
    Route the library logger to the diagnostic stream (stderr by default).

    Diagnostics never go to stdout, which belongs to the statusline output.
    Calling this repeatedly keeps a single handler; a new stream replaces the
    old one.
    """
    target = stream if stream is not None else sys.stderr
    for handler in list(lib_logger.handlers):
        if isinstance(handler, DiagnosticHandler):
            if handler.stream is target:
                return lib_logger
            lib_logger.removeHandler(handler)

    handler = DiagnosticHandler(target)
    handler.setFormatter(DiagnosticFormatter())
    handler.setLevel(logging.DEBUG)
    lib_logger.addHandler(handler)
    lib_logger.setLevel(logging.DEBUG)
    lib_logger.propagate = False
    return lib_logger


def disable_diagnostics() -> None:
    for handler in list(lib_logger.handlers):
        if isinstance(handler, DiagnosticHandler):
            lib_logger.removeHandler(handler)
    lib_logger.setLevel(logging.NOTSET)
    lib_logger.propagate = True


def mask_credential(credential: str) -> str:
    """
    Format a credential for display in logs.

    Only the last 6 characters are kept, e.g. "sk-1234567890abcdef" becomes
    "...abcdef". Credentials of 6 characters or fewer are fully masked.
    """
    if len(credential) <= 6:
        return "..."
    return f"...{credential[-6:]}"


def credential_fingerprint(credential: str) -> str:
    """Stable, non-reversible identifier for a credential."""
    return hashlib.sha256(credential.encode("utf-8")).hexdigest()[:16]
