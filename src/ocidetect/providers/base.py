# SPDX-FileCopyrightText: 2026 The ocidetect Authors
# SPDX-License-Identifier: Apache-2.0

"""Shared plumbing for the link-local OCI metadata service.

Every request carries the fixed ``Authorization: Bearer Oracle`` header.  The
instance document is read from the v2 endpoint; a non-200 reply falls back
once to v1.  A transport failure on v2 fails the call without trying v1.
"""

from __future__ import annotations

import abc
import logging
from typing import Dict, Generic, Optional, TypeVar

import httpx

from ocidetect.errors import (
    MetadataReadError,
    MetadataRequestError,
    MetadataStatusError,
    MetadataTransportError,
)

logger = logging.getLogger(__name__)

METADATA_ENDPOINT_V2 = "http://169.254.169.254/opc/v2/instance/"
METADATA_ENDPOINT_V1 = "http://169.254.169.254/opc/v1/instance/"
IDENTITY_CERT_ENDPOINT = "http://169.254.169.254/opc/v2/identity/cert.pem"

AUTHORIZATION_HEADERS: Dict[str, str] = {"Authorization": "Bearer Oracle"}

DEFAULT_TIMEOUT_SECONDS = 2.0

T = TypeVar("T")


def new_client(timeout: float = DEFAULT_TIMEOUT_SECONDS) -> httpx.Client:
    """Return a client suited to the metadata service.

    ``trust_env`` is off so proxy variables never route link-local traffic.
    """
    return httpx.Client(timeout=timeout, trust_env=False)


def send_get(
    client: httpx.Client,
    url: str,
    *,
    timeout: Optional[float] = None,
    description: str = "metadata endpoint",
) -> httpx.Response:
    """Issue an authorized GET and return the still-unread response.

    The caller owns the response and must close it (``read_body`` does).
    """
    extra = {} if timeout is None else {"timeout": timeout}
    try:
        request = client.build_request("GET", url, headers=AUTHORIZATION_HEADERS, **extra)
    except (httpx.InvalidURL, ValueError, TypeError) as exc:
        raise MetadataRequestError(f"failed to create request: {exc}") from exc

    try:
        return client.send(request, stream=True)
    except httpx.InvalidURL as exc:
        raise MetadataRequestError(f"failed to create request: {exc}") from exc
    except httpx.HTTPError as exc:
        raise MetadataTransportError(f"failed to query {description}: {exc}") from exc


def read_body(response: httpx.Response, description: str = "metadata endpoint") -> bytes:
    """Read the full body of *response* and close it."""
    try:
        return response.read()
    except httpx.HTTPError as exc:
        raise MetadataReadError(f"failed to read {description} reply: {exc}") from exc
    finally:
        response.close()


def status_error(response: httpx.Response, description: str) -> MetadataStatusError:
    reason = response.reason_phrase
    return MetadataStatusError(
        f"{description} replied with status code: {response.status_code} {reason}".rstrip(),
        status_code=response.status_code,
        reason=reason,
    )


class MetadataProvider(abc.ABC, Generic[T]):
    """Source of instance metadata for one platform."""

    @abc.abstractmethod
    def metadata(self, timeout: Optional[float] = None) -> T:
        """Fetch and decode the metadata document.

        Raises:
            MetadataError: On any failure; no partial record is returned.
        """

    def close(self) -> None:
        """Release resources held by the provider."""


class InstanceMetadataProvider(MetadataProvider[T]):
    """Provider reading ``/opc/v{2,1}/instance/`` with a v1 fallback."""

    platform = "oci"

    def __init__(
        self,
        endpoint_v2: str = METADATA_ENDPOINT_V2,
        endpoint_v1: str = METADATA_ENDPOINT_V1,
        client: Optional[httpx.Client] = None,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
    ) -> None:
        self.endpoint_v2 = endpoint_v2
        self.endpoint_v1 = endpoint_v1
        self.timeout = timeout
        self._owns_client = client is None
        self.client = client if client is not None else new_client(timeout)

    def _fetch_instance_document(self, timeout: Optional[float] = None) -> bytes:
        if timeout is None:
            timeout = self.timeout

        response = send_get(
            self.client,
            self.endpoint_v2,
            timeout=timeout,
            description=f"{self.platform} instance metadata endpoint v2",
        )
        if response.status_code != 200:
            response.close()
            logger.debug(
                "%s instance metadata endpoint v2 replied %s, trying v1",
                self.platform,
                response.status_code,
            )
            response = send_get(
                self.client,
                self.endpoint_v1,
                timeout=timeout,
                description=f"{self.platform} instance metadata endpoint v1",
            )
            if response.status_code != 200:
                response.close()
                raise status_error(response, f"{self.platform} instance metadata endpoint v1")

        return read_body(response, f"{self.platform} metadata instance endpoint")

    def close(self) -> None:
        """Close the HTTP client if this provider created it."""
        if self._owns_client:
            self.client.close()
