# SPDX-License-Identifier: LGPL-3.0-only
# Copyright (c) 2026 Mirrowel

"""
Data shapes for the quota segment.

The remote response bodies are pydantic models so that decoding and schema
validation happen in one step; anything that fails validation is treated as
a decode failure by the fetcher. Validation is strict: a string where a
number belongs is a schema mismatch, not something to coerce. The result
handed to the statusline is a plain dataclass.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict


@dataclass(frozen=True)
class EndpointDescriptor:
    """One candidate remote address. `name` is only used in diagnostics."""

    url: str
    name: str


class DailyUsage(BaseModel):
    model_config = ConfigDict(strict=True)

    date: str
    total_cost: float


class UsageSnapshot(BaseModel):
    """Body of the daily usage endpoint, newest day first."""

    model_config = ConfigDict(strict=True)

    daily_usage: List[DailyUsage]


class BalanceSnapshot(BaseModel):
    """
    Body of the balance endpoint.

    Only total_balance drives the display; the remaining fields are carried
    into metadata for diagnostics. The weekly pair is not returned by every
    deployment of the billing service.
    """

    model_config = ConfigDict(strict=True)

    total_balance: float
    balance: float = 0.0
    pay_as_you_go_balance: float = 0.0
    subscription_balance: float = 0.0
    weekly_limit: Optional[float] = None
    weekly_spent_balance: Optional[float] = None


@dataclass
class SegmentResult:
    primary: str
    secondary: str
    metadata: Dict[str, str] = field(default_factory=dict)
