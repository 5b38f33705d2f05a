# SPDX-FileCopyrightText: 2026 The ocidetect Authors
# SPDX-License-Identifier: Apache-2.0

"""Tenancy id resolution from the instance identity certificate.

The tenancy OCID is not part of the instance document.  OCI embeds it in
the subject of the instance's identity certificate as an attribute value of
the form ``opc-tenant:<tenancy-ocid>``.
"""

from __future__ import annotations

import logging
import re
from typing import Optional

import httpx
from cryptography import x509

from ocidetect.errors import CertificateParseError, InvalidPemError
from ocidetect.providers.base import IDENTITY_CERT_ENDPOINT, read_body, send_get, status_error

logger = logging.getLogger(__name__)

TENANT_PREFIX = "opc-tenant:"

_PEM_BLOCK = re.compile(
    rb"-----BEGIN (?P<label>[^\r\n-]+)-----\r?\n(?P<payload>.*?)-----END (?P=label)-----",
    re.DOTALL,
)


def decode_pem_certificate(body: bytes) -> x509.Certificate:
    """Decode the first PEM block in *body* as an X.509 certificate.

    Text around the block is ignored and any block label is accepted.
    """
    block = _PEM_BLOCK.search(body)
    if block is None:
        raise InvalidPemError("failed to parse the certificate, not valid pem data")

    pem = b"-----BEGIN CERTIFICATE-----\n" + block.group("payload") + b"-----END CERTIFICATE-----\n"
    try:
        return x509.load_pem_x509_certificate(pem)
    except ValueError as exc:
        raise CertificateParseError(f"failed to parse the certificate: {exc}") from exc


def fetch_identity_certificate(
    client: httpx.Client,
    endpoint: str = IDENTITY_CERT_ENDPOINT,
    timeout: Optional[float] = None,
) -> x509.Certificate:
    response = send_get(client, endpoint, timeout=timeout, description="oci instance certificate endpoint")
    if response.status_code != 200:
        response.close()
        raise status_error(response, "oci instance certificate endpoint")
    body = read_body(response, "oci identity certificate endpoint")
    return decode_pem_certificate(body)


def extract_tenancy_id(certificate: x509.Certificate) -> str:
    """Return the tenancy id carried in the certificate subject, or ``""``.

    Attribute values that are not strings never match.
    """
    for attribute in certificate.subject:
        value = attribute.value
        if isinstance(value, str) and value.startswith(TENANT_PREFIX):
            return value[len(TENANT_PREFIX):]
    return ""


def resolve_tenancy_id(
    client: httpx.Client,
    endpoint: str = IDENTITY_CERT_ENDPOINT,
    timeout: Optional[float] = None,
) -> str:
    """Fetch the identity certificate and extract the tenancy id from it.

    An absent tenancy attribute yields ``""``; every other problem raises a
    :class:`~ocidetect.errors.MetadataError`.
    """
    certificate = fetch_identity_certificate(client, endpoint, timeout)
    tenancy_id = extract_tenancy_id(certificate)
    if not tenancy_id:
        logger.debug("Identity certificate subject carries no %s attribute", TENANT_PREFIX)
    return tenancy_id
