# SPDX-FileCopyrightText: 2026 The ocidetect Authors
# SPDX-License-Identifier: Apache-2.0

"""Error taxonomy for metadata acquisition.

Everything a provider raises derives from :class:`MetadataError`.  Detectors
catch these and report "not applicable" instead of propagating them.
:class:`ConfigError` is the only error meant to reach callers, and only at
construction or config-loading time.
"""

from __future__ import annotations

from typing import Optional


class MetadataError(Exception):
    """Base class for provider-tier failures."""


class MetadataRequestError(MetadataError):
    """The HTTP request could not be constructed."""


class MetadataTransportError(MetadataError):
    """The request never produced a response (network error, timeout)."""


class MetadataStatusError(MetadataError):
    """The endpoint replied with a status other than 200."""

    def __init__(self, message: str, status_code: int, reason: Optional[str] = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.reason = reason or ""

    @property
    def status(self) -> str:
        return f"{self.status_code} {self.reason}".strip()


class MetadataReadError(MetadataError):
    """The response body could not be read."""


class MetadataDecodeError(MetadataError):
    """The response body is not a valid metadata document."""


class IdentityCertificateError(MetadataError):
    """The identity certificate could not be decoded."""


class InvalidPemError(IdentityCertificateError):
    """The certificate endpoint did not return PEM data."""


class CertificateParseError(IdentityCertificateError):
    """The PEM block does not hold a parsable X.509 certificate."""


class TenancyResolutionError(MetadataError):
    """The tenancy id step of the OCI provider failed."""


class ConfigError(ValueError):
    """Invalid detector configuration."""


__all__ = [
    "CertificateParseError",
    "ConfigError",
    "IdentityCertificateError",
    "InvalidPemError",
    "MetadataDecodeError",
    "MetadataError",
    "MetadataReadError",
    "MetadataRequestError",
    "MetadataStatusError",
    "MetadataTransportError",
    "TenancyResolutionError",
]
