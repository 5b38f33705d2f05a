# SPDX-FileCopyrightText: 2026 The ocidetect Authors
# SPDX-License-Identifier: Apache-2.0

"""Shared test fixtures for ocidetect tests."""

from __future__ import annotations

import datetime
from typing import Callable, Dict, Iterable, Optional, Tuple, Union

import httpx
import pytest
from cryptography import x509
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import ec

BASE_URL = "http://metadata.test"
V2_URL = f"{BASE_URL}/opc/v2/instance/"
V1_URL = f"{BASE_URL}/opc/v1/instance/"
CERT_URL = f"{BASE_URL}/opc/v2/identity/cert.pem"

# Self-signed; subject is OU=opc-tenant:tenantId.
TEST_CERT = b"""-----BEGIN CERTIFICATE-----
MIIDHTCCAgWgAwIBAgIUN4v0jRyyOLMckguORjMhWiJEhAQwDQYJKoZIhvcNAQEL
BQAwHjEcMBoGA1UECwwTb3BjLXRlbmFudDp0ZW5hbnRJZDAeFw0yMjA3MTUxODU0
MDJaFw0zMjA0MTMxODU0MDJaMB4xHDAaBgNVBAsME29wYy10ZW5hbnQ6dGVuYW50
SWQwggEiMA0GCSqGSIb3DQEBAQUAA4IBDwAwggEKAoIBAQDO8dk3hCZTiskiUyXC
d6QuEnhseE432oh56wRdA/TPrCzgY9EXLJjttfbdcnXeOjwSRQs5hlP5Ob/OFjDq
LtbTVliwIf5gcoPiZzzR/D5sI5AUaW5uiqLbBGf8xzDeo3lxU6dU/eooTeA1kMYV
QtH3QdAkhp6P/Tb1Vg0chUzGk4Y5MrtV6uV3VWOVpJv8Simcw9bxQhAFUhIxRJ2n
cjWQaLGgdZD/z60WBBOU6L7KDghB9uekYz6bxnj431e9RttwaVTFXwyQ/A12K4gQ
1TJyejmFIIE6i6A12rZspRktrOfiAN9W8hHEaQ8WtVTfs75bdco5a4IuoRPwmYZx
4chZAgMBAAGjUzBRMB0GA1UdDgQWBBRZRBzARXbgsoHR36hkK4a4E4KHRzAfBgNV
HSMEGDAWgBRZRBzARXbgsoHR36hkK4a4E4KHRzAPBgNVHRMBAf8EBTADAQH/MA0G
CSqGSIb3DQEBCwUAA4IBAQBmRE4xd11BEBhf+hN28VSwZNgVGyzti/4VO+NWnh/6
YchxIcZ02NTKC2XP/abnkpLlwdWGWtrCqNW84KVqCIkrmPlhXV1wHiTmdCFj/qip
ZCi3SlwZB5jBBm4zb9aSBfdhHPpiU+/jhlHiVG1cSw/oZ9W653B/V2brn45eKVyd
5ifrA5kMxx78DAekVmODNHwPmhuOMgEqqMTPfjyDWOsycG/SrHBqk2marRRFInh8
Oi1ecAgr6kQEzDYwdtU80GExTZkUS61Gzvt1d2uT4KJrdhXI6cdeBaXCOKhrvaiL
6zh0yyMtq6NV9C/SMSXSP5Kjpwcxib1+fnKSoD7oBfvO
-----END CERTIFICATE-----"""

Reply = Union[httpx.Response, Callable[[httpx.Request], httpx.Response], Exception]


def make_certificate(*attributes: Tuple[x509.ObjectIdentifier, str]) -> bytes:
    """Build a self-signed PEM certificate whose subject holds *attributes*."""
    key = ec.generate_private_key(ec.SECP256R1())
    name = x509.Name([x509.NameAttribute(oid, value) for oid, value in attributes])
    not_before = datetime.datetime(2024, 1, 1, tzinfo=datetime.timezone.utc)
    certificate = (
        x509.CertificateBuilder()
        .subject_name(name)
        .issuer_name(name)
        .public_key(key.public_key())
        .serial_number(x509.random_serial_number())
        .not_valid_before(not_before)
        .not_valid_after(not_before + datetime.timedelta(days=365))
        .sign(key, hashes.SHA256())
    )
    return certificate.public_bytes(serialization.Encoding.PEM)


class FakeMetadataService:
    """Routes requests by URL to canned replies and records what was asked.

    A reply can be a response, a callable producing one, or an exception to
    raise as a transport failure.  Unrouted URLs answer 404.
    """

    def __init__(self, routes: Optional[Dict[str, Reply]] = None) -> None:
        self.routes: Dict[str, Reply] = dict(routes or {})
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        reply = self.routes.get(str(request.url))
        if reply is None:
            return httpx.Response(404)
        if isinstance(reply, Exception):
            raise reply
        if callable(reply):
            return reply(request)
        return reply

    @property
    def requested_urls(self) -> list[str]:
        return [str(request.url) for request in self.requests]

    def client(self) -> httpx.Client:
        return httpx.Client(transport=httpx.MockTransport(self))


class BrokenStream(httpx.SyncByteStream):
    """Body stream that fails part-way through."""

    def __iter__(self) -> Iterable[bytes]:
        yield b'{"id": '
        raise httpx.ReadError("connection reset by peer")


@pytest.fixture
def instance_document() -> Dict[str, object]:
    """A representative ``/opc/v2/instance/`` document."""
    return {
        "availabilityDomain": "Uocm:PHX-AD-1",
        "faultDomain": "FAULT-DOMAIN-2",
        "compartmentId": "ocid1.compartment.oc1..aaaa",
        "displayName": "web-1",
        "hostname": "web-1",
        "id": "ocid1.instance.oc1.phx.aaaa",
        "image": "ocid1.image.oc1.phx.aaaa",
        "region": "phx",
        "canonicalRegionName": "us-phoenix-1",
        "ociAdName": "phx-ad-1",
        "shape": "VM.Standard.E4.Flex",
        "shapeConfig": {
            "ocpus": 2.0,
            "memoryInGBs": 32.0,
            "networkingBandwidthInGbps": 2.0,
            "maxVnicAttachments": 2,
        },
        "regionInfo": {"realmKey": "oc1", "realmDomainComponent": "oraclecloud.com"},
        "definedTags": {"Operations": {"CostCenter": "42"}},
        "vnics": [{"privateIp": "10.0.0.5"}, {"privateIp": "10.0.1.5"}],
    }


@pytest.fixture
def oke_document(instance_document) -> Dict[str, object]:
    document = dict(instance_document)
    document["metadata"] = {
        "oke-tm": "oke",
        "oke-k8version": "v1.28.2",
        "oke-pool-id": "ocid1.nodepool.oc1.phx.aaaa",
        "oke-tenancy-id": "ocid1.tenancy.oc1..aaaa",
        "oke-cluster-display-name": "prod-cluster",
        "oke-ad": "Uocm:PHX-AD-1",
        "oke-cluster-id": "ocid1.cluster.oc1.phx.aaaa",
        "oke-is-on-private-subnet": "true",
        "oke-image-name": "Oracle-Linux-8.8",
        "ssh_authorized_keys": "ssh-rsa AAAA",
    }
    return document


@pytest.fixture
def metadata_service() -> FakeMetadataService:
    return FakeMetadataService()


@pytest.fixture
def certificate_factory() -> Callable[..., bytes]:
    """Builds PEM certificates with arbitrary subject attributes."""
    return make_certificate


@pytest.fixture
def tenant_certificate() -> bytes:
    return TEST_CERT


@pytest.fixture
def broken_body_response() -> httpx.Response:
    """A 200 reply whose body cannot be read to the end."""
    return httpx.Response(200, stream=BrokenStream())


@pytest.fixture
def endpoints() -> Dict[str, str]:
    return {"endpoint_v2": V2_URL, "endpoint_v1": V1_URL, "identity_cert_endpoint": CERT_URL}


@pytest.fixture
def service_factory() -> Callable[..., FakeMetadataService]:
    return FakeMetadataService
