# SPDX-FileCopyrightText: 2026 The ocidetect Authors
# SPDX-License-Identifier: Apache-2.0

"""Metadata provider for OKE worker nodes."""

from __future__ import annotations

from typing import Optional

from ocidetect.models.metadata import OkeMetadataResponse
from ocidetect.providers.base import InstanceMetadataProvider


class OkeProvider(InstanceMetadataProvider[OkeMetadataResponse]):
    """Reads the instance document of a node, including its cluster block."""

    platform = "oke"

    def metadata(self, timeout: Optional[float] = None) -> OkeMetadataResponse:
        return OkeMetadataResponse.from_json(self._fetch_instance_document(timeout))
