# SPDX-FileCopyrightText: 2026 The ocidetect Authors
# SPDX-License-Identifier: Apache-2.0

"""Instance metadata records returned by the OCI metadata service.

The service answers ``/opc/v{1,2}/instance/`` with a JSON document whose
camelCase keys map one-to-one onto the fields below.  Unknown keys are
ignored; missing or ``null`` keys decode to zero values.  A document that is
not a JSON object, or a key holding the wrong JSON type, is rejected.

Records are immutable and built fresh for every ``metadata()`` call.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping

from ocidetect.errors import MetadataDecodeError


# =========================================================================
# Field decoding
# =========================================================================


def _string(data: Mapping[str, Any], key: str) -> str:
    value = data.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise TypeError(f"field {key!r}: expected string, got {type(value).__name__}")
    return value


def _number(data: Mapping[str, Any], key: str) -> float:
    value = data.get(key)
    if value is None:
        return 0.0
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TypeError(f"field {key!r}: expected number, got {type(value).__name__}")
    return float(value)


def _integer(data: Mapping[str, Any], key: str) -> int:
    value = data.get(key)
    if value is None:
        return 0
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"field {key!r}: expected integer, got {type(value).__name__}")
    return value


def _object(data: Mapping[str, Any], key: str) -> Dict[str, Any]:
    value = data.get(key)
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise TypeError(f"field {key!r}: expected object, got {type(value).__name__}")
    return value


def _common_fields(data: Mapping[str, Any]) -> Dict[str, Any]:
    return {
        "availability_domain": _string(data, "availabilityDomain"),
        "fault_domain": _string(data, "faultDomain"),
        "compartment_id": _string(data, "compartmentId"),
        "display_name": _string(data, "displayName"),
        "hostname": _string(data, "hostname"),
        "id": _string(data, "id"),
        "image": _string(data, "image"),
        "region": _string(data, "region"),
        "canonical_region_name": _string(data, "canonicalRegionName"),
        "oci_ad_name": _string(data, "ociAdName"),
        "shape": _string(data, "shape"),
        "shape_config": ShapeConfig.from_dict(_object(data, "shapeConfig")),
    }


def load_document(body: bytes, label: str = "oci") -> tuple[Dict[str, Any], str]:
    """Parse *body* as a JSON object, returning it with its text form."""
    try:
        text = body.decode("utf-8")
        data = json.loads(text)
    except (UnicodeDecodeError, ValueError) as exc:
        raise MetadataDecodeError(f"failed to decode {label} instance metadata reply: {exc}") from exc
    if not isinstance(data, dict):
        raise MetadataDecodeError(
            f"failed to decode {label} instance metadata reply: expected a JSON object, got {type(data).__name__}"
        )
    return data, text


# =========================================================================
# Records
# =========================================================================


@dataclass(frozen=True)
class ShapeConfig:
    """Capacity figures of the instance shape."""

    ocpus: float = 0.0
    memory_in_gbs: float = 0.0
    networking_bandwidth_in_gbps: float = 0.0
    max_vnic_attachments: int = 0

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ShapeConfig:
        return cls(
            ocpus=_number(data, "ocpus"),
            memory_in_gbs=_number(data, "memoryInGBs"),
            networking_bandwidth_in_gbps=_number(data, "networkingBandwidthInGbps"),
            max_vnic_attachments=_integer(data, "maxVnicAttachments"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "ocpus": self.ocpus,
            "memoryInGBs": self.memory_in_gbs,
            "networkingBandwidthInGbps": self.networking_bandwidth_in_gbps,
            "maxVnicAttachments": self.max_vnic_attachments,
        }


@dataclass(frozen=True)
class InstanceMetadata:
    """Fields shared by every instance metadata document."""

    availability_domain: str = ""
    fault_domain: str = ""
    compartment_id: str = ""
    display_name: str = ""
    hostname: str = ""
    id: str = ""
    image: str = ""
    region: str = ""
    canonical_region_name: str = ""
    oci_ad_name: str = ""
    shape: str = ""
    shape_config: ShapeConfig = field(default_factory=ShapeConfig)

    def to_dict(self) -> Dict[str, Any]:
        """Render the record in the service's JSON layout."""
        return {
            "availabilityDomain": self.availability_domain,
            "faultDomain": self.fault_domain,
            "compartmentId": self.compartment_id,
            "displayName": self.display_name,
            "hostname": self.hostname,
            "id": self.id,
            "image": self.image,
            "region": self.region,
            "canonicalRegionName": self.canonical_region_name,
            "ociAdName": self.oci_ad_name,
            "shape": self.shape,
            "shapeConfig": self.shape_config.to_dict(),
        }


@dataclass(frozen=True)
class OciMetadataResponse(InstanceMetadata):
    """Metadata of a bare compute instance.

    ``tenant_id`` is not part of the JSON document; the provider fills it
    from the instance identity certificate.  ``raw_response`` keeps the
    document text for JPath extraction and takes no part in equality.
    """

    tenant_id: str = ""
    raw_response: str = field(default="", compare=False, repr=False)

    @classmethod
    def from_json(cls, body: bytes) -> OciMetadataResponse:
        data, text = load_document(body, "oci")
        try:
            return cls(raw_response=text, **_common_fields(data))
        except TypeError as exc:
            raise MetadataDecodeError(f"failed to decode oci instance metadata reply: {exc}") from exc


@dataclass(frozen=True)
class OkeClusterMetadata:
    """The ``metadata`` block OKE writes onto its worker nodes."""

    oke_tm: str = ""
    k8s_version: str = ""
    pool_id: str = ""
    tenancy_id: str = ""
    cluster_display_name: str = ""
    availability_domain: str = ""
    cluster_id: str = ""
    private_subnet: str = ""
    image_name: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> OkeClusterMetadata:
        return cls(
            oke_tm=_string(data, "oke-tm"),
            k8s_version=_string(data, "oke-k8version"),
            pool_id=_string(data, "oke-pool-id"),
            tenancy_id=_string(data, "oke-tenancy-id"),
            cluster_display_name=_string(data, "oke-cluster-display-name"),
            availability_domain=_string(data, "oke-ad"),
            cluster_id=_string(data, "oke-cluster-id"),
            private_subnet=_string(data, "oke-is-on-private-subnet"),
            image_name=_string(data, "oke-image-name"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "oke-tm": self.oke_tm,
            "oke-k8version": self.k8s_version,
            "oke-pool-id": self.pool_id,
            "oke-tenancy-id": self.tenancy_id,
            "oke-cluster-display-name": self.cluster_display_name,
            "oke-ad": self.availability_domain,
            "oke-cluster-id": self.cluster_id,
            "oke-is-on-private-subnet": self.private_subnet,
            "oke-image-name": self.image_name,
        }


@dataclass(frozen=True)
class OkeMetadataResponse(InstanceMetadata):
    """Metadata of an OKE worker node."""

    metadata: OkeClusterMetadata = field(default_factory=OkeClusterMetadata)

    @classmethod
    def from_json(cls, body: bytes) -> OkeMetadataResponse:
        data, _ = load_document(body, "oke")
        try:
            return cls(
                metadata=OkeClusterMetadata.from_dict(_object(data, "metadata")),
                **_common_fields(data),
            )
        except TypeError as exc:
            raise MetadataDecodeError(f"failed to decode oke instance metadata reply: {exc}") from exc

    def to_dict(self) -> Dict[str, Any]:
        document = super().to_dict()
        document["metadata"] = self.metadata.to_dict()
        return document
