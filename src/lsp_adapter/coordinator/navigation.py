"""Go-to / references location payloads."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Mapping

from lsp_adapter.buffer import Range
from lsp_adapter.errors import MalformedResponseError


@dataclass(frozen=True, slots=True)
class Location:
    uri: str
    range: Range


def parse_location(payload: Any) -> Location:
    """Read a ``Location`` or a ``LocationLink`` (its target range)."""

    if not isinstance(payload, Mapping):
        raise MalformedResponseError("location must be an object", payload=payload)
    if "targetUri" in payload:
        uri = payload.get("targetUri")
        raw_range = payload.get("targetRange")
    else:
        uri = payload.get("uri")
        raw_range = payload.get("range")
    if not isinstance(uri, str):
        raise MalformedResponseError("location needs a string uri", payload=payload)
    return Location(uri=uri, range=Range.from_lsp(raw_range))


def parse_locations(payload: Any) -> list[Location]:
    if payload is None:
        return []
    if isinstance(payload, Mapping):
        return [parse_location(payload)]
    if isinstance(payload, (str, bytes)) or not isinstance(payload, Iterable):
        raise MalformedResponseError("unsupported location payload", payload=payload)
    return [parse_location(item) for item in payload]


def split_by_document(
    locations: Iterable[Location], document_uri: str
) -> tuple[list[Location], list[Location]]:
    local: list[Location] = []
    external: list[Location] = []
    for location in locations:
        (local if location.uri == document_uri else external).append(location)
    return local, external


__all__ = ["Location", "parse_location", "parse_locations", "split_by_document"]
