# SPDX-FileCopyrightText: 2026 The ocidetect Authors
# SPDX-License-Identifier: Apache-2.0

"""Metadata provider for OCI compute instances."""

from __future__ import annotations

import dataclasses
from typing import Optional

import httpx

from ocidetect.errors import MetadataError, TenancyResolutionError
from ocidetect.models.metadata import OciMetadataResponse
from ocidetect.providers.base import (
    DEFAULT_TIMEOUT_SECONDS,
    IDENTITY_CERT_ENDPOINT,
    METADATA_ENDPOINT_V1,
    METADATA_ENDPOINT_V2,
    InstanceMetadataProvider,
)
from ocidetect.providers.identity import resolve_tenancy_id


class OciProvider(InstanceMetadataProvider[OciMetadataResponse]):
    """Reads the instance document and resolves the tenancy id.

    A failure in either step fails the whole call.
    """

    platform = "oci"

    def __init__(
        self,
        endpoint_v2: str = METADATA_ENDPOINT_V2,
        endpoint_v1: str = METADATA_ENDPOINT_V1,
        identity_cert_endpoint: str = IDENTITY_CERT_ENDPOINT,
        client: Optional[httpx.Client] = None,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
    ) -> None:
        super().__init__(endpoint_v2=endpoint_v2, endpoint_v1=endpoint_v1, client=client, timeout=timeout)
        self.identity_cert_endpoint = identity_cert_endpoint

    def metadata(self, timeout: Optional[float] = None) -> OciMetadataResponse:
        if timeout is None:
            timeout = self.timeout

        body = self._fetch_instance_document(timeout)
        metadata = OciMetadataResponse.from_json(body)

        try:
            tenant_id = resolve_tenancy_id(self.client, self.identity_cert_endpoint, timeout)
        except MetadataError as exc:
            raise TenancyResolutionError(f"failed to retrieve oci identity certificate: {exc}") from exc

        return dataclasses.replace(metadata, tenant_id=tenant_id)
