# SPDX-License-Identifier: LGPL-3.0-only
# Copyright (c) 2026 Mirrowel

"""
Quota segment orchestration.

State flow for one collect() call:

    disabled      -> None
    no credential -> None (silent, no "Offline")
    fetching      -> usage first, then balance (a usage failure does not
                     skip the balance call)
    result        -> success / partial / no data today / offline, decided by
                     formatter.format_result()
"""

import os
from typing import Any, Callable, Mapping, Optional

import httpx

from .config import (
    DEFAULT_TIMEOUT_SECONDS,
    TIMEOUT_ENV,
    QuotaConfigError,
    QuotaSettings,
    get_quota_settings,
)
from .credentials import CredentialResolver
from .detector import BalanceFetcher, UsageDetector
from .diagnostics import (
    credential_fingerprint,
    disable_diagnostics,
    enable_diagnostics,
    lib_logger,
)
from .endpoints import DEFAULT_CATALOG, EndpointCatalog
from .fetcher import RemoteFetcher
from .formatter import format_result
from .models import SegmentResult


SEGMENT_ID = "quota"


class QuotaSegment:
    """
    Statusline segment reporting today's spend and the remaining balance.

    Args:
        settings: Configuration snapshot; read from the process environment
            on every collect() when omitted
        catalog: Endpoints to query
        client: Optional httpx.Client shared by all requests of a collection;
            the segment never closes an injected client
        resolver_factory: Builds the CredentialResolver for a settings object
    """

    id = SEGMENT_ID

    def __init__(
        self,
        settings: Optional[QuotaSettings] = None,
        catalog: EndpointCatalog = DEFAULT_CATALOG,
        client: Optional[httpx.Client] = None,
        resolver_factory: Callable[[QuotaSettings], CredentialResolver] = CredentialResolver,
    ):
        self._settings = settings
        self.catalog = catalog
        self._client = client
        self._resolver_factory = resolver_factory

    @property
    def settings(self) -> QuotaSettings:
        if self._settings is not None:
            return self._settings
        try:
            return get_quota_settings()
        except QuotaConfigError as e:
            # A bad override must not take the statusline down.
            lib_logger.warning(f"{e} Using the default {DEFAULT_TIMEOUT_SECONDS:g}s timeout.")
            environ = {k: v for k, v in os.environ.items() if k != TIMEOUT_ENV}
            return QuotaSettings.from_env(environ)

    def collect(self, input_data: Optional[Mapping[str, Any]] = None) -> Optional[SegmentResult]:
        settings = self.settings
        if not settings.enabled:
            return None
        if settings.debug:
            enable_diagnostics()
        else:
            disable_diagnostics()

        credential = self._resolver_factory(settings).resolve()
        if credential is None:
            return None

        lib_logger.debug(
            f"Collecting quota for key {credential_fingerprint(credential)}"
        )

        with RemoteFetcher(client=self._client, timeout=settings.timeout_seconds) as fetcher:
            detected = UsageDetector(fetcher, self.catalog).detect(credential)
            balance = BalanceFetcher(fetcher, self.catalog).fetch_balance(credential)

        usage_endpoint, usage = detected if detected is not None else (None, None)
        result = format_result(usage, balance, usage_endpoint=usage_endpoint)
        lib_logger.debug(f"Quota segment status: {result.metadata['status']}")
        return result


def collect(input_data: Optional[Mapping[str, Any]] = None) -> Optional[SegmentResult]:
    """Collect the quota segment using the current process environment."""
    return QuotaSegment().collect(input_data)
