# SPDX-License-Identifier: LGPL-3.0-only
# Copyright (c) 2026 Mirrowel

from .config import QuotaConfigError, QuotaSettings, get_quota_settings
from .credentials import CredentialResolver
from .detector import BalanceFetcher, UsageDetector
from .endpoints import DEFAULT_CATALOG, EndpointCatalog
from .fetcher import FailureKind, FetchOutcome, RemoteFetcher
from .models import (
    BalanceSnapshot,
    DailyUsage,
    EndpointDescriptor,
    SegmentResult,
    UsageSnapshot,
)
from .segment import QuotaSegment, collect

__all__ = [
    "QuotaSegment",
    "collect",
    "QuotaSettings",
    "QuotaConfigError",
    "get_quota_settings",
    "CredentialResolver",
    "UsageDetector",
    "BalanceFetcher",
    "RemoteFetcher",
    "FetchOutcome",
    "FailureKind",
    "EndpointCatalog",
    "DEFAULT_CATALOG",
    "EndpointDescriptor",
    "UsageSnapshot",
    "DailyUsage",
    "BalanceSnapshot",
    "SegmentResult",
]
