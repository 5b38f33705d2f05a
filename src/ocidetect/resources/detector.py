# SPDX-FileCopyrightText: 2026 The ocidetect Authors
# SPDX-License-Identifier: Apache-2.0

"""Resource detectors backed by a metadata provider.

Detectors are speculative probes: off OCI the metadata service does not
exist, and that is the common case rather than an error.  A provider
failure is therefore logged at debug level and reported as a
``NOT_APPLICABLE`` :class:`Detection` with no attributes and no schema URL.
Nothing raised by the provider escapes :meth:`MetadataDetector.run`.
"""

from __future__ import annotations

import abc
import logging
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import ClassVar, Dict, Generic, Mapping, Optional, Type, TypeVar

from opentelemetry.sdk.resources import Resource, ResourceDetector

from ocidetect.config import DetectorConfig
from ocidetect.errors import ConfigError
from ocidetect.providers.base import MetadataProvider

SCHEMA_URL = "https://opentelemetry.io/schemas/1.6.1"

CLOUD_PROVIDER_OCI = "oci"

T = TypeVar("T")


@dataclass(frozen=True)
class CreateSettings:
    """What the host hands every detector at construction."""

    logger: logging.Logger = field(default_factory=lambda: logging.getLogger("ocidetect.resources"))


class DetectionStatus(str, Enum):
    """Outcome of a detection run."""

    DETECTED = "detected"
    NOT_APPLICABLE = "not_applicable"


@dataclass(frozen=True)
class Detection:
    """Result of :meth:`MetadataDetector.run`.

    ``attributes`` is read-only and keeps insertion order.  ``error`` holds
    the swallowed provider error of a ``NOT_APPLICABLE`` run, for callers
    that want to know why.
    """

    status: DetectionStatus
    attributes: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))
    schema_url: str = ""
    error: Optional[BaseException] = None

    @classmethod
    def success(cls, attributes: Mapping[str, str], schema_url: str = SCHEMA_URL) -> Detection:
        return cls(
            status=DetectionStatus.DETECTED,
            attributes=MappingProxyType(dict(attributes)),
            schema_url=schema_url,
        )

    @classmethod
    def not_applicable(cls, error: Optional[BaseException] = None) -> Detection:
        return cls(status=DetectionStatus.NOT_APPLICABLE, error=error)

    @property
    def detected(self) -> bool:
        return self.status is DetectionStatus.DETECTED

    def to_resource(self) -> Resource:
        if not self.detected:
            return Resource.get_empty()
        return Resource(dict(self.attributes), self.schema_url)


class MetadataDetector(ResourceDetector, Generic[T]):
    """Base class turning a provider's record into resource attributes.

    Subclasses name their ``detector_type``, their ``config_class``, how to
    build a default provider, and the field-to-key mapping.  Instances hold
    no per-call state and may be run concurrently.
    """

    detector_type: ClassVar[str] = ""
    config_class: ClassVar[Type[DetectorConfig]] = DetectorConfig

    def __init__(
        self,
        settings: Optional[CreateSettings] = None,
        config: Optional[DetectorConfig] = None,
        provider: Optional[MetadataProvider[T]] = None,
        raise_on_error: bool = False,
    ) -> None:
        super().__init__(raise_on_error=raise_on_error)
        if config is None:
            config = self.config_class()
        elif not isinstance(config, self.config_class):
            raise ConfigError(
                f"{self.detector_type} detector expects {self.config_class.__name__}, got {type(config).__name__}"
            )

        self._settings = settings or CreateSettings()
        self._logger = self._settings.logger
        self._config = config
        self._owns_provider = provider is None
        self._provider = provider if provider is not None else self._new_provider(config)

    @property
    def config(self) -> DetectorConfig:
        return self._config

    @abc.abstractmethod
    def _new_provider(self, config: DetectorConfig) -> MetadataProvider[T]:
        """Build the provider used when none is injected."""

    @abc.abstractmethod
    def _attributes(self, metadata: T) -> Dict[str, str]:
        """Map a metadata record onto resource attribute keys."""

    def run(self) -> Detection:
        """Probe the metadata service and map what it returns."""
        try:
            metadata = self._provider.metadata()
            attributes = self._attributes(metadata)
        except Exception as exc:
            # Off-platform this is the expected outcome; never surface it.
            self._logger.debug("%s detector metadata retrieval failed: %s", self.detector_type.upper(), exc)
            return Detection.not_applicable(exc)
        return Detection.success(attributes)

    def detect(self) -> Resource:
        """``ResourceDetector`` entry point; empty resource when not on the platform."""
        detection = self.run()
        if detection.error is not None and self.raise_on_error:
            raise detection.error
        return detection.to_resource()

    def close(self) -> None:
        """Close the provider if this detector built it."""
        if self._owns_provider:
            self._provider.close()

    def __enter__(self) -> MetadataDetector[T]:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
