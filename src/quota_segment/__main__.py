# SPDX-License-Identifier: LGPL-3.0-only
# Copyright (c) 2026 Mirrowel

"""
Single-shot entry point for statusline hooks:

    python -m quota_segment < input.json

Prints "primary | secondary" to stdout, or nothing when no API key is found.
"""

import json
import sys
from typing import Any, Dict, Optional

from dotenv import load_dotenv
from rich.console import Console
from rich.markup import escape as rich_escape

from .segment import QuotaSegment


console = Console(highlight=False)


def _read_input() -> Optional[Dict[str, Any]]:
    if sys.stdin is None or sys.stdin.isatty():
        return None
    raw = sys.stdin.read().strip()
    if not raw:
        return None
    try:
        data = json.loads(raw)
    except ValueError:
        return None
    return data if isinstance(data, dict) else None


def main() -> int:
    load_dotenv()
    result = QuotaSegment().collect(_read_input())
    if result is not None:
        console.print(f"{rich_escape(result.primary)} | {rich_escape(result.secondary)}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
