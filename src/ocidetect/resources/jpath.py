# SPDX-FileCopyrightText: 2026 The ocidetect Authors
# SPDX-License-Identifier: Apache-2.0

"""Dotted-path lookups into a JSON document.

Paths use the dotted style of the collector's ``attributeJPaths`` option::

    shapeConfig.ocpus          object keys
    regionInfo.realmKey        nested keys
    vnics.0.privateIp          array index
    vnics.#                    array length
    metadata.my\\.dotted\\.key   ``\\`` escapes a literal character

A path that does not resolve is reported as missing, never as an error.
"""

from __future__ import annotations

import json
import re
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, List

_MISSING = object()

_INDEX = re.compile(r"[0-9]+")


@dataclass(frozen=True)
class Result:
    """Outcome of a lookup."""

    exists: bool
    value: Any = None

    def to_string(self) -> str:
        """Render the value as an attribute string.

        Strings are returned verbatim, booleans as ``true``/``false``,
        ``null`` as an empty string, objects and arrays as compact JSON.
        """
        if not self.exists or self.value is None:
            return ""
        value = self.value
        if isinstance(value, str):
            return value
        if isinstance(value, bool):
            return "true" if value else "false"
        if isinstance(value, int):
            return str(value)
        if isinstance(value, float):
            return _format_float(value)
        return json.dumps(value, separators=(",", ":"), ensure_ascii=False)


NOT_FOUND = Result(exists=False)


def _format_float(value: float) -> str:
    if value.is_integer():
        return str(int(value))
    text = repr(value)
    if "e" not in text:
        return text
    # Expand exponent notation without losing the shortest repr digits.
    return format(Decimal(text), "f")


def _reject_constant(name: str) -> Any:
    raise ValueError(f"invalid JSON constant {name}")


def split_path(path: str) -> List[str]:
    """Split *path* on unescaped dots."""
    segments: List[str] = []
    current: List[str] = []
    escaped = False
    for char in path:
        if escaped:
            current.append(char)
            escaped = False
        elif char == "\\":
            escaped = True
        elif char == ".":
            segments.append("".join(current))
            current = []
        else:
            current.append(char)
    if escaped:
        current.append("\\")
    segments.append("".join(current))
    return segments


def _step(node: Any, segment: str) -> Any:
    if isinstance(node, dict):
        return node.get(segment, _MISSING)
    if isinstance(node, list):
        if segment == "#":
            return len(node)
        if _INDEX.fullmatch(segment):
            index = int(segment)
            if index < len(node):
                return node[index]
    return _MISSING


class Document:
    """A JSON document parsed once and queried many times.

    Malformed JSON produces a document in which every lookup misses.
    """

    def __init__(self, text: str) -> None:
        self._root: Any
        try:
            self._root = json.loads(text, parse_constant=_reject_constant)
        except (TypeError, ValueError):
            self._root = _MISSING

    def get(self, path: str) -> Result:
        if not path or self._root is _MISSING:
            return NOT_FOUND

        node = self._root
        for segment in split_path(path):
            node = _step(node, segment)
            if node is _MISSING:
                return NOT_FOUND
        return Result(exists=True, value=node)


def get(text: str, path: str) -> Result:
    """Look up *path* in the JSON *text*."""
    return Document(text).get(path)

