# SPDX-License-Identifier: LGPL-3.0-only
# Copyright (c) 2026 Mirrowel

from typing import Optional, Tuple

from .diagnostics import lib_logger
from .endpoints import BALANCE_HEADERS, DEFAULT_CATALOG, USAGE_HEADERS, EndpointCatalog
from .fetcher import RemoteFetcher
from .models import BalanceSnapshot, UsageSnapshot


class UsageDetector:
    """
    Walks the usage endpoints in catalog order and stops at the first one
    that answers with a valid body. No racing, no merging.
    """

    def __init__(self, fetcher: RemoteFetcher, catalog: EndpointCatalog = DEFAULT_CATALOG):
        self.fetcher = fetcher
        self.catalog = catalog

    def detect(self, credential: str) -> Optional[Tuple[str, UsageSnapshot]]:
        for endpoint in self.catalog.usage:
            snapshot = self.fetcher.fetch(
                endpoint, credential, UsageSnapshot, headers=USAGE_HEADERS
            )
            if snapshot is not None:
                return endpoint.url, snapshot

        lib_logger.debug(
            f"All {len(self.catalog.usage)} usage endpoint(s) failed"
        )
        return None


class BalanceFetcher:
    def __init__(self, fetcher: RemoteFetcher, catalog: EndpointCatalog = DEFAULT_CATALOG):
        self.fetcher = fetcher
        self.catalog = catalog

    def fetch_balance(self, credential: str) -> Optional[BalanceSnapshot]:
        return self.fetcher.fetch(
            self.catalog.balance, credential, BalanceSnapshot, headers=BALANCE_HEADERS
        )
