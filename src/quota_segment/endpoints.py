# SPDX-License-Identifier: LGPL-3.0-only
# Copyright (c) 2026 Mirrowel

from dataclasses import dataclass
from typing import Dict, Tuple

from .models import EndpointDescriptor


# =============================================================================
# ENDPOINTS
# =============================================================================

YESCODE_API_BASE = "https://co.yes.vg/api/v1"

# Tried in order; the first endpoint that answers wins.
USAGE_ENDPOINTS: Tuple[EndpointDescriptor, ...] = (
    EndpointDescriptor(
        url=f"{YESCODE_API_BASE}/user/usage/daily",
        name="daily_usage",
    ),
)

BALANCE_ENDPOINT = EndpointDescriptor(
    url=f"{YESCODE_API_BASE}/user/balance",
    name="balance",
)

USAGE_HEADERS: Dict[str, str] = {
    "Accept": "*/*",
    "Content-Type": "application/json",
}

BALANCE_HEADERS: Dict[str, str] = {
    "Accept": "application/json",
}

API_KEY_HEADER = "X-API-Key"


@dataclass(frozen=True)
class EndpointCatalog:
    usage: Tuple[EndpointDescriptor, ...] = USAGE_ENDPOINTS
    balance: EndpointDescriptor = BALANCE_ENDPOINT


DEFAULT_CATALOG = EndpointCatalog()
