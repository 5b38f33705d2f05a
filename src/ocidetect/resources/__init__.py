# SPDX-FileCopyrightText: 2026 The ocidetect Authors
# SPDX-License-Identifier: Apache-2.0

"""OCI resource detection for OpenTelemetry.

Each detector implements ``opentelemetry.sdk.resources.ResourceDetector`` and
can be composed with any other detector by the SDK's aggregation.  The same
classes are published under the ``opentelemetry_resource_detector`` entry
point group, so the SDK can load them by name::

    OTEL_EXPERIMENTAL_RESOURCE_DETECTORS=oci

Or drive them from configuration::

    from ocidetect.resources import detect_resource
    resource = detect_resource()   # reads OCIDETECT_* env vars / ocidetect.yaml
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Type

from opentelemetry.sdk.resources import Resource, get_aggregated_resources

from ocidetect.config import DetectorConfig, ResourceDetectionConfig
from ocidetect.errors import ConfigError
from ocidetect.resources.detector import (
    SCHEMA_URL,
    CreateSettings,
    Detection,
    DetectionStatus,
    MetadataDetector,
)
from ocidetect.resources.oci import OciResourceDetector
from ocidetect.resources.oke import OkeResourceDetector

logger = logging.getLogger(__name__)

DEFAULT_AGGREGATION_TIMEOUT_SECONDS = 5.0

DETECTOR_REGISTRY: Dict[str, Type[MetadataDetector]] = {
    OciResourceDetector.detector_type: OciResourceDetector,
    OkeResourceDetector.detector_type: OkeResourceDetector,
}


def create_detector(
    name: str,
    settings: Optional[CreateSettings] = None,
    config: Optional[DetectorConfig] = None,
) -> MetadataDetector:
    """Build the detector registered under *name*.

    Raises:
        ConfigError: If *name* is unknown or *config* does not fit the detector.
    """
    try:
        detector_cls = DETECTOR_REGISTRY[name]
    except KeyError:
        known = ", ".join(sorted(DETECTOR_REGISTRY))
        raise ConfigError(f"Unknown resource detector {name!r} (known: {known})") from None
    return detector_cls(settings=settings, config=config)


def collect_detectors(
    config: Optional[ResourceDetectionConfig] = None,
    settings: Optional[CreateSettings] = None,
) -> List[MetadataDetector]:
    """Return one detector per name listed in *config*, in order."""
    if config is None:
        config = ResourceDetectionConfig.from_file_or_env()

    detectors = [create_detector(name, settings, config.config_for(name)) for name in config.detectors or []]

    if detectors:
        names = [type(d).__name__ for d in detectors]
        logger.debug("Configured resource detectors: %s", names)

    return detectors


def detect_resource(
    config: Optional[ResourceDetectionConfig] = None,
    settings: Optional[CreateSettings] = None,
    timeout: float = DEFAULT_AGGREGATION_TIMEOUT_SECONDS,
) -> Resource:
    """Run the configured detectors concurrently and merge what they find.

    Detectors that do not apply contribute an empty resource, so off OCI
    the result is empty. The detectors built here are closed afterwards.
    """
    detectors = collect_detectors(config, settings)
    if not detectors:
        return Resource.get_empty()
    try:
        return get_aggregated_resources(detectors, initial_resource=Resource.get_empty(), timeout=timeout)
    finally:
        for detector in detectors:
            detector.close()


def detect_resource_attrs(
    config: Optional[ResourceDetectionConfig] = None,
    settings: Optional[CreateSettings] = None,
) -> Dict[str, Any]:
    """Detect OCI attributes as a flat dict."""
    return dict(detect_resource(config, settings).attributes)


__all__ = [
    "DETECTOR_REGISTRY",
    "SCHEMA_URL",
    "CreateSettings",
    "Detection",
    "DetectionStatus",
    "MetadataDetector",
    "OciResourceDetector",
    "OkeResourceDetector",
    "collect_detectors",
    "create_detector",
    "detect_resource",
    "detect_resource_attrs",
]
