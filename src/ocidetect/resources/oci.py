# SPDX-FileCopyrightText: 2026 The ocidetect Authors
# SPDX-License-Identifier: Apache-2.0

"""Resource detector for OCI compute instances."""

from __future__ import annotations

from typing import Dict

from opentelemetry.semconv._incubating.attributes.cloud_attributes import (
    CLOUD_ACCOUNT_ID,
    CLOUD_AVAILABILITY_ZONE,
    CLOUD_PLATFORM,
    CLOUD_PROVIDER,
    CLOUD_REGION,
)
from opentelemetry.semconv._incubating.attributes.host_attributes import HOST_ID, HOST_IMAGE_ID

from ocidetect.config import OciDetectorConfig
from ocidetect.models.metadata import OciMetadataResponse
from ocidetect.providers.oci import OciProvider
from ocidetect.resources.jpath import Document
from ocidetect.resources.detector import CLOUD_PROVIDER_OCI, MetadataDetector

ATTRIBUTE_PREFIX = "oci."

CLOUD_PLATFORM_OCI_COMPUTE = "oci_compute"
OCI_COMPARTMENT_ID = "oci.compartment.id"
OCI_SHAPE = "oci.shape"


class OciResourceDetector(MetadataDetector[OciMetadataResponse]):
    """Detects ``cloud.*``, ``host.*`` and ``oci.*`` attributes of a compute instance.

    Each configured JPath entry that resolves in the raw instance document
    adds ``oci.<name>``; later entries overwrite earlier ones and the fixed
    keys.  Entries that do not resolve add nothing.
    """

    detector_type = "oci"
    config_class = OciDetectorConfig

    def _new_provider(self, config: OciDetectorConfig) -> OciProvider:  # type: ignore[override]
        return OciProvider(timeout=config.timeout_seconds)

    def _attributes(self, metadata: OciMetadataResponse) -> Dict[str, str]:
        attrs: Dict[str, str] = {
            CLOUD_PROVIDER: CLOUD_PROVIDER_OCI,
            CLOUD_PLATFORM: CLOUD_PLATFORM_OCI_COMPUTE,
            CLOUD_ACCOUNT_ID: metadata.tenant_id,
            CLOUD_REGION: metadata.canonical_region_name,
            CLOUD_AVAILABILITY_ZONE: metadata.availability_domain,
            HOST_ID: metadata.id,
            HOST_IMAGE_ID: metadata.image,
            OCI_COMPARTMENT_ID: metadata.compartment_id,
            OCI_SHAPE: metadata.shape,
        }

        jpaths = self._config.attribute_jpaths
        if jpaths:
            document = Document(metadata.raw_response)
            for entry in jpaths:
                try:
                    result = document.get(entry.path)
                    if result.exists:
                        attrs[ATTRIBUTE_PREFIX + entry.name] = result.to_string()
                except Exception as exc:
                    # A faulty path drops only its own attribute.
                    self._logger.debug("OCI attribute path %r for %r failed: %s", entry.path, entry.name, exc)

        return attrs
