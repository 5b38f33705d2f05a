# SPDX-FileCopyrightText: 2026 The ocidetect Authors
# SPDX-License-Identifier: Apache-2.0

"""Configuration for the OCI resource detectors.

Configuration precedence (highest to lowest):
1. Code arguments (explicit values passed to the config classes)
2. Environment variables (``OCIDETECT_*``)
3. YAML config file (``ocidetect.yaml`` or specified path)
4. Built-in defaults

A YAML file mirrors the collector's ``resourcedetection`` layout::

    detectors: [oci]
    oci:
      timeout: 1.5
      attributeJPaths:
        - name: realm
          path: regionInfo.realmKey
    oke:
      timeout: 1.0
"""

from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from ocidetect.errors import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 2.0
DEFAULT_DETECTORS = ("oci",)


@dataclass(frozen=True)
class AttributeJPathConfig:
    """Extra attribute ``oci.<name>`` read from the document at *path*."""

    name: str
    path: str

    def __post_init__(self) -> None:
        if not isinstance(self.name, str) or not self.name.strip():
            raise ConfigError("attributeJPaths entry requires a non-blank name")
        if not isinstance(self.path, str) or not self.path.strip():
            raise ConfigError(f"attributeJPaths entry {self.name!r} requires a non-blank path")

    @classmethod
    def from_dict(cls, data: Any) -> AttributeJPathConfig:
        if isinstance(data, AttributeJPathConfig):
            return data
        if not isinstance(data, dict):
            raise ConfigError(f"attributeJPaths entries must be mappings, got {type(data).__name__}")
        return cls(name=data.get("name", ""), path=data.get("path", ""))

    def to_dict(self) -> Dict[str, str]:
        return {"name": self.name, "path": self.path}


def _section(data: Any, owner: str) -> Dict[str, Any]:
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"{owner} section must be a mapping, got {type(data).__name__}")
    return data


@dataclass
class DetectorConfig:
    """Settings shared by every detector."""

    timeout_seconds: Optional[float] = None

    def __post_init__(self) -> None:
        if self.timeout_seconds is None:
            env_timeout = os.getenv("OCIDETECT_METADATA_TIMEOUT")
            if env_timeout:
                try:
                    self.timeout_seconds = float(env_timeout)
                except ValueError as exc:
                    raise ConfigError(f"OCIDETECT_METADATA_TIMEOUT is not a number: {env_timeout!r}") from exc
            else:
                self.timeout_seconds = DEFAULT_TIMEOUT_SECONDS

        if isinstance(self.timeout_seconds, bool) or not isinstance(self.timeout_seconds, (int, float)):
            raise ConfigError(f"timeout must be a number, got {self.timeout_seconds!r}")
        if self.timeout_seconds <= 0:
            raise ConfigError(f"timeout must be > 0, got {self.timeout_seconds}")

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> DetectorConfig:
        data = _section(data, cls.__name__)
        return cls(timeout_seconds=data.get("timeout"))

    def to_dict(self) -> Dict[str, Any]:
        return {"timeout": self.timeout_seconds}


@dataclass
class OkeDetectorConfig(DetectorConfig):
    """The OKE detector takes no options beyond the shared ones."""

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> OkeDetectorConfig:
        data = _section(data, cls.__name__)
        return cls(timeout_seconds=data.get("timeout"))


@dataclass
class OciDetectorConfig(DetectorConfig):
    """OCI compute detector options.

    ``attribute_jpaths`` lists extra attributes plucked from the raw
    instance document, applied in order (later entries win on duplicate
    names).
    """

    attribute_jpaths: List[AttributeJPathConfig] = field(default_factory=list)

    def __post_init__(self) -> None:
        super().__post_init__()
        if self.attribute_jpaths is None:
            self.attribute_jpaths = []
        if not isinstance(self.attribute_jpaths, (list, tuple)):
            raise ConfigError("attributeJPaths must be a list")
        self.attribute_jpaths = [AttributeJPathConfig.from_dict(entry) for entry in self.attribute_jpaths]

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> OciDetectorConfig:
        data = _section(data, cls.__name__)
        jpaths = data.get("attributeJPaths", data.get("attribute_jpaths"))
        return cls(timeout_seconds=data.get("timeout"), attribute_jpaths=jpaths)

    def to_dict(self) -> Dict[str, Any]:
        document = super().to_dict()
        document["attributeJPaths"] = [entry.to_dict() for entry in self.attribute_jpaths]
        return document


@dataclass
class ResourceDetectionConfig:
    """Which detectors to run and how each one is configured.

    Example::

        >>> config = ResourceDetectionConfig(detectors=["oke"])

        >>> # Or load from YAML
        >>> config = ResourceDetectionConfig.from_yaml("config/ocidetect.yaml")
    """

    detectors: Optional[List[str]] = None
    oci: OciDetectorConfig = field(default_factory=OciDetectorConfig)
    oke: OkeDetectorConfig = field(default_factory=OkeDetectorConfig)

    def __post_init__(self) -> None:
        if self.detectors is None:
            env_detectors = os.getenv("OCIDETECT_DETECTORS")
            if env_detectors:
                self.detectors = [name.strip() for name in env_detectors.split(",") if name.strip()]
            else:
                self.detectors = list(DEFAULT_DETECTORS)

    def config_for(self, name: str) -> Optional[DetectorConfig]:
        return {"oci": self.oci, "oke": self.oke}.get(name)

    # ------------------------------------------------------------------
    # YAML loading
    # ------------------------------------------------------------------

    @classmethod
    def from_yaml(cls, path: Optional[str] = None) -> ResourceDetectionConfig:
        """Load configuration from a YAML file.

        Supports environment variable interpolation using ``${VAR_NAME}`` syntax.

        Raises:
            FileNotFoundError: If config file doesn't exist.
            ConfigError: If YAML is malformed or holds invalid values.
        """
        if path is None:
            raise FileNotFoundError("No config file path provided")

        resolved = Path(path)
        if not resolved.exists():
            raise FileNotFoundError(f"Config file not found: {resolved}")

        import yaml

        with open(resolved) as fh:
            raw_content = fh.read()

        content = _interpolate_env_vars(raw_content)

        try:
            data = yaml.safe_load(content)
        except yaml.YAMLError as exc:
            raise ConfigError(f"Invalid YAML in {resolved}: {exc}") from exc

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ConfigError(f"Invalid config in {resolved}: top level must be a mapping")

        return cls._from_dict(data)

    @classmethod
    def from_file_or_env(cls, path: Optional[str] = None) -> ResourceDetectionConfig:
        """Load config from file if exists, otherwise use environment variables.

        Search order:
        1. Explicit *path* argument
        2. ``OCIDETECT_CONFIG_FILE`` env var
        3. ``./ocidetect.yaml``
        4. ``./config/ocidetect.yaml``
        5. Falls back to env-only config
        """
        search_paths: List[Path] = []

        if path:
            search_paths.append(Path(path))

        env_path = os.getenv("OCIDETECT_CONFIG_FILE")
        if env_path:
            search_paths.append(Path(env_path))

        search_paths.extend(
            [
                Path("ocidetect.yaml"),
                Path("ocidetect.yml"),
                Path("config/ocidetect.yaml"),
                Path("config/ocidetect.yml"),
            ]
        )

        for candidate in search_paths:
            if candidate.exists():
                logger.info("Loading config from: %s", candidate)
                return cls.from_yaml(str(candidate))

        logger.debug("No config file found, using environment variables only")
        return cls()

    @classmethod
    def _from_dict(cls, data: Dict[str, Any]) -> ResourceDetectionConfig:
        detectors = data.get("detectors")
        if detectors is not None and not isinstance(detectors, list):
            raise ConfigError("detectors must be a list")

        return cls(
            detectors=[str(name) for name in detectors] if detectors is not None else None,
            oci=OciDetectorConfig.from_dict(data.get("oci")),
            oke=OkeDetectorConfig.from_dict(data.get("oke")),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Export configuration as dictionary."""
        return {
            "detectors": list(self.detectors or []),
            "oci": self.oci.to_dict(),
            "oke": self.oke.to_dict(),
        }


def _interpolate_env_vars(content: str) -> str:
    """Interpolate ``${VAR_NAME}`` and ``${VAR_NAME:-default}`` in *content*."""
    pattern = re.compile(r"\$\{([A-Za-z_][A-Za-z0-9_]*)(?::-([^}]*))?\}")

    def _replace(match: re.Match) -> str:  # type: ignore[type-arg]
        var_name = match.group(1)
        default = match.group(2)
        value = os.getenv(var_name)
        if value is not None:
            return value
        if default is not None:
            return default
        return match.group(0)

    return pattern.sub(_replace, content)
