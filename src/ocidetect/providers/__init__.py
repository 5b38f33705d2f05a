# SPDX-FileCopyrightText: 2026 The ocidetect Authors
# SPDX-License-Identifier: Apache-2.0

"""Metadata providers for the OCI link-local metadata service."""

from __future__ import annotations

from ocidetect.providers.base import (
    IDENTITY_CERT_ENDPOINT,
    METADATA_ENDPOINT_V1,
    METADATA_ENDPOINT_V2,
    InstanceMetadataProvider,
    MetadataProvider,
)
from ocidetect.providers.identity import extract_tenancy_id, resolve_tenancy_id
from ocidetect.providers.oci import OciProvider
from ocidetect.providers.oke import OkeProvider

__all__ = [
    "IDENTITY_CERT_ENDPOINT",
    "METADATA_ENDPOINT_V1",
    "METADATA_ENDPOINT_V2",
    "InstanceMetadataProvider",
    "MetadataProvider",
    "OciProvider",
    "OkeProvider",
    "extract_tenancy_id",
    "resolve_tenancy_id",
]
