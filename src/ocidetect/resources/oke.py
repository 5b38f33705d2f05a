# SPDX-FileCopyrightText: 2026 The ocidetect Authors
# SPDX-License-Identifier: Apache-2.0

"""Resource detector for OKE worker nodes."""

from __future__ import annotations

from typing import Dict

from opentelemetry.semconv._incubating.attributes.cloud_attributes import (
    CLOUD_ACCOUNT_ID,
    CLOUD_PLATFORM,
    CLOUD_PROVIDER,
    CLOUD_REGION,
)
from opentelemetry.semconv._incubating.attributes.k8s_attributes import K8S_CLUSTER_NAME

from ocidetect.config import OkeDetectorConfig
from ocidetect.models.metadata import OkeMetadataResponse
from ocidetect.providers.oke import OkeProvider
from ocidetect.resources.detector import CLOUD_PROVIDER_OCI, MetadataDetector

CLOUD_PLATFORM_OCI_OKE = "oci_oke"
OKE_CLUSTER_ID = "oci.oke.clusterid"
OKE_K8S_VERSION = "oci.oke.k8version"


class OkeResourceDetector(MetadataDetector[OkeMetadataResponse]):
    """Detects cluster identity of an OKE node."""

    detector_type = "oke"
    config_class = OkeDetectorConfig

    def _new_provider(self, config: OkeDetectorConfig) -> OkeProvider:  # type: ignore[override]
        return OkeProvider(timeout=config.timeout_seconds)

    def _attributes(self, metadata: OkeMetadataResponse) -> Dict[str, str]:
        cluster = metadata.metadata
        return {
            CLOUD_PROVIDER: CLOUD_PROVIDER_OCI,
            CLOUD_PLATFORM: CLOUD_PLATFORM_OCI_OKE,
            CLOUD_REGION: metadata.canonical_region_name,
            K8S_CLUSTER_NAME: cluster.cluster_display_name,
            CLOUD_ACCOUNT_ID: cluster.tenancy_id,
            OKE_CLUSTER_ID: cluster.cluster_id,
            OKE_K8S_VERSION: cluster.k8s_version,
        }
