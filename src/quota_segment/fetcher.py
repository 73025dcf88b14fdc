# SPDX-License-Identifier: LGPL-3.0-only
# Copyright (c) 2026 Mirrowel

"""
Single-attempt HTTP fetcher for the billing endpoints.

Each attempt produces a FetchOutcome describing exactly what happened
(timeout, connection error, non-200 status, undecodable body). The public
fetch() collapses that into "value or None"; the detailed outcome only ever
reaches the diagnostic log.
"""

import time
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Generic, Optional, Type, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from .config import DEFAULT_TIMEOUT_SECONDS
from .diagnostics import lib_logger
from .endpoints import API_KEY_HEADER
from .models import EndpointDescriptor


T = TypeVar("T", bound=BaseModel)


class FailureKind(str, Enum):
    NETWORK = "network"
    TIMEOUT = "timeout"
    REJECTED = "rejected"
    DECODE = "decode"


@dataclass
class FetchOutcome(Generic[T]):
    endpoint: EndpointDescriptor
    elapsed_ms: int
    value: Optional[T] = None
    status_code: Optional[int] = None
    failure: Optional[FailureKind] = None
    detail: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.failure is None and self.value is not None


class RemoteFetcher:
    """
    Issues bounded-timeout GET requests against billing endpoints.

    Args:
        client: Optional pre-built httpx.Client (tests inject one backed by a
            MockTransport). When omitted, the fetcher owns its client and
            closes it in close().
        timeout: Deadline in seconds for one attempt, body included
    """

    def __init__(
        self,
        client: Optional[httpx.Client] = None,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
    ):
        self.timeout = timeout
        self._client = client
        self._owns_client = client is None

    @property
    def client(self) -> httpx.Client:
        if self._client is None:
            self._client = httpx.Client(timeout=httpx.Timeout(self.timeout))
        return self._client

    def close(self) -> None:
        if self._owns_client and self._client is not None:
            self._client.close()
            self._client = None

    def __enter__(self) -> "RemoteFetcher":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def fetch(
        self,
        endpoint: EndpointDescriptor,
        credential: str,
        model: Type[T],
        headers: Optional[Dict[str, str]] = None,
    ) -> Optional[T]:
        """Return the decoded body, or None on any failure."""
        outcome = self.attempt(endpoint, credential, model, headers)
        return outcome.value if outcome.ok else None

    def attempt(
        self,
        endpoint: EndpointDescriptor,
        credential: str,
        model: Type[T],
        headers: Optional[Dict[str, str]] = None,
    ) -> FetchOutcome[T]:
        request_headers = dict(headers or {})
        request_headers[API_KEY_HEADER] = credential

        lib_logger.debug(f"Fetching {endpoint.name} from: {endpoint.url}")
        start = time.perf_counter()
        outcome = self._attempt(endpoint, request_headers, model, start)
        self._report(outcome)
        return outcome

    def _attempt(
        self,
        endpoint: EndpointDescriptor,
        headers: Dict[str, str],
        model: Type[T],
        start: float,
    ) -> FetchOutcome[T]:
        # httpx timeouts are per phase; the deadline bounds the whole attempt.
        deadline = start + self.timeout
        try:
            with self.client.stream(
                "GET", endpoint.url, headers=headers, timeout=self.timeout
            ) as response:
                status_code = response.status_code
                if status_code != 200:
                    return FetchOutcome(
                        endpoint=endpoint,
                        elapsed_ms=_elapsed_ms(start),
                        status_code=status_code,
                        failure=FailureKind.REJECTED,
                        detail=f"status {status_code}",
                    )

                chunks = []
                for chunk in response.iter_bytes():
                    chunks.append(chunk)
                    if time.perf_counter() > deadline:
                        return FetchOutcome(
                            endpoint=endpoint,
                            elapsed_ms=_elapsed_ms(start),
                            status_code=status_code,
                            failure=FailureKind.TIMEOUT,
                            detail=f"body not received within {self.timeout:g}s",
                        )
                body = b"".join(chunks)
        except httpx.TimeoutException as e:
            return FetchOutcome(
                endpoint=endpoint,
                elapsed_ms=_elapsed_ms(start),
                failure=FailureKind.TIMEOUT,
                detail=str(e) or type(e).__name__,
            )
        except (httpx.HTTPError, httpx.InvalidURL, UnicodeError) as e:
            return FetchOutcome(
                endpoint=endpoint,
                elapsed_ms=_elapsed_ms(start),
                failure=FailureKind.NETWORK,
                detail=str(e) or type(e).__name__,
            )

        if time.perf_counter() > deadline:
            return FetchOutcome(
                endpoint=endpoint,
                elapsed_ms=_elapsed_ms(start),
                status_code=status_code,
                failure=FailureKind.TIMEOUT,
                detail=f"response not received within {self.timeout:g}s",
            )

        try:
            value = model.model_validate_json(body)
        except ValidationError as e:
            return FetchOutcome(
                endpoint=endpoint,
                elapsed_ms=_elapsed_ms(start),
                status_code=status_code,
                failure=FailureKind.DECODE,
                detail=f"{e.error_count()} validation error(s) for {model.__name__}",
            )

        return FetchOutcome(
            endpoint=endpoint,
            elapsed_ms=_elapsed_ms(start),
            value=value,
            status_code=status_code,
        )

    def _report(self, outcome: FetchOutcome) -> None:
        name = outcome.endpoint.name
        if outcome.ok:
            lib_logger.debug(f"Success: {name} in {outcome.elapsed_ms}ms")
        elif outcome.failure is FailureKind.REJECTED:
            lib_logger.debug(
                f"Failed: {name} status {outcome.status_code} in {outcome.elapsed_ms}ms"
            )
        else:
            lib_logger.debug(
                f"Error: {name} ({outcome.failure.value}) - {outcome.detail} "
                f"in {outcome.elapsed_ms}ms"
            )


def _elapsed_ms(start: float) -> int:
    return int((time.perf_counter() - start) * 1000)
