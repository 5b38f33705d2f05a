# SPDX-FileCopyrightText: 2026 The ocidetect Authors
# SPDX-License-Identifier: Apache-2.0

"""Metadata records."""

from __future__ import annotations

from ocidetect.models.metadata import (
    InstanceMetadata,
    OciMetadataResponse,
    OkeClusterMetadata,
    OkeMetadataResponse,
    ShapeConfig,
)

__all__ = [
    "InstanceMetadata",
    "OciMetadataResponse",
    "OkeClusterMetadata",
    "OkeMetadataResponse",
    "ShapeConfig",
]
