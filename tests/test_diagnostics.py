import io
import logging

from quota_segment.diagnostics import (
    DiagnosticHandler,
    credential_fingerprint,
    disable_diagnostics,
    enable_diagnostics,
    lib_logger,
    mask_credential,
)


def _diagnostic_handlers():
    return [h for h in lib_logger.handlers if isinstance(h, DiagnosticHandler)]


def test_mask_credential_keeps_tail_only() -> None:
    assert mask_credential("sk-1234567890abcdef") == "...abcdef"
    assert mask_credential("short") == "..."


def test_fingerprint_is_stable_and_opaque() -> None:
    fp = credential_fingerprint("sk-secret")
    assert fp == credential_fingerprint("sk-secret")
    assert fp != credential_fingerprint("sk-other")
    assert "secret" not in fp
    assert len(fp) == 16


def test_enable_is_idempotent() -> None:
    stream = io.StringIO()
    enable_diagnostics(stream)
    enable_diagnostics(stream)

    assert len(_diagnostic_handlers()) == 1


def test_lines_are_prefixed_with_level() -> None:
    stream = io.StringIO()
    enable_diagnostics(stream)
    lib_logger.debug("Success: balance in 12ms")

    assert stream.getvalue() == "[DEBUG] Success: balance in 12ms\n"


def test_disable_removes_handler() -> None:
    enable_diagnostics(io.StringIO())
    disable_diagnostics()

    assert _diagnostic_handlers() == []
    assert lib_logger.level == logging.NOTSET
