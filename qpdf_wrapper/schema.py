"""Readers for the JSON emitted by ``qpdf --json``.

The layout depends on the qpdf version. Before qpdf 11 the objects live
under ``objects`` keyed ``"N 0 R"``. From qpdf 11 on they live in the second
element of the ``qpdf`` array, keyed ``"obj:N 0 R"`` and wrapped in
``{"value": ...}`` (or ``{"stream": {"dict": ...}}`` for streams).
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from .types import PageSize

JsonObject = Dict[str, Any]

POINTS_PER_INCH = 72


class JsonSchema:
    """Base class for version-specific JSON layouts."""

    name: str = "base"
    key_prefix: str = ""

    def objects(self, info: JsonObject) -> JsonObject:  # pragma: no cover - abstract
        raise NotImplementedError

    def unwrap(self, raw: Any) -> Any:
        return raw

    def lookup(self, info: JsonObject, ref: str) -> Optional[JsonObject]:
        value = self.objects(info).get(f"{self.key_prefix}{ref}")
        value = self.unwrap(value)
        return value if isinstance(value, dict) else None

    def page_objects(self, info: JsonObject) -> List[JsonObject]:
        """Return page dictionaries, in document order when qpdf reports it."""

        ordered = info.get("pages")
        if isinstance(ordered, list) and ordered:
            pages = [self.lookup(info, entry.get("object", "")) for entry in ordered if isinstance(entry, dict)]
            if all(page is not None for page in pages):
                return [page for page in pages if _is_page(page)]

        candidates = (self.unwrap(raw) for raw in self.objects(info).values())
        return [obj for obj in candidates if _is_page(obj)]


class LegacyObjectsSchema(JsonSchema):
    """qpdf < 11 (JSON version 1)."""

    name = "v1"

    def objects(self, info: JsonObject) -> JsonObject:
        return info.get("objects") or {}


class QpdfV2Schema(JsonSchema):
    """qpdf >= 11 (JSON version 2)."""

    name = "v2"
    key_prefix = "obj:"

    def objects(self, info: JsonObject) -> JsonObject:
        section = info.get("qpdf")
        if isinstance(section, list) and len(section) > 1:
            return section[1] or {}
        return {}

    def unwrap(self, raw: Any) -> Any:
        if isinstance(raw, dict):
            if "value" in raw:
                return raw["value"]
            if "stream" in raw:
                return raw["stream"].get("dict")
        return raw


def schema_for_version(version: int) -> JsonSchema:
    """Return the JSON layout used by qpdf *version*."""

    if version < 11:
        return LegacyObjectsSchema()
    return QpdfV2Schema()


def _is_page(obj: Any) -> bool:
    return isinstance(obj, dict) and obj.get("/Type") == "/Page"


def _inherited(info: JsonObject, schema: JsonSchema, page: JsonObject, key: str) -> Any:
    node: Optional[JsonObject] = page
    seen = set()
    while node is not None:
        if key in node:
            return node[key]
        parent = node.get("/Parent")
        if not isinstance(parent, str) or parent in seen:
            return None
        seen.add(parent)
        node = schema.lookup(info, parent)
    return None


def page_size(info: JsonObject, schema: JsonSchema, page: JsonObject) -> Optional[PageSize]:
    """Return the visual ``(width, height)`` of *page* in inches.

    Width and height are swapped when ``/Rotate`` is an odd multiple of 90.
    """

    media_box = _inherited(info, schema, page, "/MediaBox")
    if not isinstance(media_box, list) or len(media_box) < 4:
        return None

    width, height = (value / POINTS_PER_INCH for value in media_box[2:4])
    rotation = _inherited(info, schema, page, "/Rotate")
    if isinstance(rotation, (int, float)) and rotation % 180 != 0:
        return (height, width)
    return (width, height)


def page_sizes(info: JsonObject, schema: JsonSchema) -> List[Optional[PageSize]]:
    return [page_size(info, schema, page) for page in schema.page_objects(info)]


__all__ = [
    "JsonSchema",
    "LegacyObjectsSchema",
    "POINTS_PER_INCH",
    "QpdfV2Schema",
    "page_size",
    "page_sizes",
    "schema_for_version",
]
