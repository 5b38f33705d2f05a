# SPDX-FileCopyrightText: 2026 The ocidetect Authors
# SPDX-License-Identifier: Apache-2.0

"""ocidetect - OpenTelemetry resource detection for Oracle Cloud Infrastructure.

Quick Start::

    from opentelemetry.sdk.resources import get_aggregated_resources
    from ocidetect import OciResourceDetector

    resource = get_aggregated_resources([OciResourceDetector()])

Off OCI the detectors return an empty resource; they never raise.
"""

from __future__ import annotations

from ocidetect._version import __version__

# Configuration
from ocidetect.config import (
    AttributeJPathConfig,
    OciDetectorConfig,
    OkeDetectorConfig,
    ResourceDetectionConfig,
)

# Errors
from ocidetect.errors import ConfigError, MetadataError

# Metadata records
from ocidetect.models.metadata import (
    OciMetadataResponse,
    OkeClusterMetadata,
    OkeMetadataResponse,
    ShapeConfig,
)

# Providers
from ocidetect.providers import OciProvider, OkeProvider

# Detectors  (primary integration point)
from ocidetect.resources import (
    CreateSettings,
    Detection,
    DetectionStatus,
    OciResourceDetector,
    OkeResourceDetector,
    create_detector,
    detect_resource,
    detect_resource_attrs,
)

__all__ = [
    "__version__",
    # Configuration
    "AttributeJPathConfig",
    "OciDetectorConfig",
    "OkeDetectorConfig",
    "ResourceDetectionConfig",
    # Errors
    "ConfigError",
    "MetadataError",
    # Records
    "OciMetadataResponse",
    "OkeClusterMetadata",
    "OkeMetadataResponse",
    "ShapeConfig",
    # Providers
    "OciProvider",
    "OkeProvider",
    # Detectors
    "CreateSettings",
    "Detection",
    "DetectionStatus",
    "OciResourceDetector",
    "OkeResourceDetector",
    "create_detector",
    "detect_resource",
    "detect_resource_attrs",
]
