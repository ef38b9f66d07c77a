"""Flatten marker detection on field attribute lists."""

from __future__ import annotations

import re
from collections.abc import Sequence
from dataclasses import dataclass

from struct_flattener.flattening import MalformedFlattenMarker

_DOC_ATTRIBUTE_REGEX = re.compile(r"^doc\s*=")


@dataclass(frozen=True)
class FlattenMarkerDetection:
    """Result of scanning one field's attributes for the flatten marker."""

    is_flatten_marker: bool
    attributes: tuple[str, ...]


def detect_flatten_marker(
    attributes: Sequence[str],
    *,
    marker: str = "flatten",
    require_first: bool = False,
    field: str = "",
    host: str | None = None,
) -> FlattenMarkerDetection:
    """Find the flatten marker and return the remaining attributes.

    The marker is recognized at any position unless `require_first` is set. Then
    only doc attributes may precede it; anything else in front of the marker
    raises MalformedFlattenMarker.
    """
    positions = [
        index for index, attribute in enumerate(attributes) if _is_marker(attribute, marker)
    ]
    if not positions:
        return FlattenMarkerDetection(is_flatten_marker=False, attributes=tuple(attributes))
    if require_first and positions[0] != _leading_doc_count(attributes):
        raise MalformedFlattenMarker(field, positions[0], host=host)
    remaining = tuple(
        attribute for index, attribute in enumerate(attributes) if index not in positions
    )
    return FlattenMarkerDetection(is_flatten_marker=True, attributes=remaining)


def _leading_doc_count(attributes: Sequence[str]) -> int:
    count = 0
    for attribute in attributes:
        if not _DOC_ATTRIBUTE_REGEX.match(_unwrap(attribute)):
            break
        count += 1
    return count


def _is_marker(attribute: str, marker: str) -> bool:
    return _unwrap(attribute) == marker


def _unwrap(attribute: str) -> str:
    text = attribute.strip()
    if text.startswith("#[") and text.endswith("]"):
        text = text[2:-1].strip()
    return text
