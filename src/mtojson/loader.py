"""Build entry trees from plain YAML/JSON documents.

A document is a list of entry mappings::

    - key: keys
      type: array
      value:
        type: object
        items:
          - [{key: key_id, type: integer, value: 1}]
          - []
    - key: number_of_keys
      type: integer
      value: 2

Object values are entry lists, array values are ``{type, items}``
mappings (with an optional ``count``), and ``value`` entries are wrapped
in ``Raw`` since the document names the raw type explicitly.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from .errors import TreeError, TreeLoadError
from .model import SCALAR_TAGS, Entry, JsonArray, JsonObject, Raw, RefSequence, ScalarBlock, TypeTag


def load_tree_file(path: str | Path) -> JsonObject:
    """Read a YAML (or JSON) tree document from *path*."""
    with Path(path).open("r", encoding="utf-8") as handle:
        data = yaml.safe_load(handle)
    return load_tree(data if data is not None else [])


def load_tree(data: Any) -> JsonObject:
    """Convert a parsed document into a JsonObject."""
    return _load_object(data, "")


def _parse_tag(raw: Any, path: str) -> TypeTag:
    if not isinstance(raw, str):
        raise TreeLoadError(path, f"type must be a string, got {raw!r}")
    try:
        return TypeTag[raw.upper()]
    except KeyError:
        names = ", ".join(t.name.lower() for t in TypeTag)
        raise TreeLoadError(path, f"unknown type {raw!r} (expected one of: {names})") from None


def _load_object(data: Any, path: str) -> JsonObject:
    if not isinstance(data, list):
        raise TreeLoadError(path, "object must be a list of entries")
    return JsonObject([_load_entry(item, f"{path}[{i}]") for i, item in enumerate(data)])


def _load_entry(data: Any, path: str) -> Entry:
    if not isinstance(data, dict):
        raise TreeLoadError(path, "entry must be a mapping with key, type and value")
    missing = [name for name in ("key", "type", "value") if name not in data]
    if missing:
        raise TreeLoadError(path, "entry is missing " + ", ".join(missing))
    tag = _parse_tag(data["type"], f"{path}.type")
    value = _load_value(tag, data["value"], f"{path}.value")
    try:
        return Entry(str(data["key"]), value, tag)
    except TreeError as exc:
        raise TreeLoadError(path, str(exc)) from exc


def _load_value(tag: TypeTag, data: Any, path: str) -> Any:
    if tag == TypeTag.OBJECT:
        return _load_object(data, path)
    if tag == TypeTag.ARRAY:
        return _load_array(data, path)
    if tag == TypeTag.VALUE:
        if not isinstance(data, str):
            raise TreeLoadError(path, "raw value must be a string")
        return Raw(data)
    return data


def _load_array(data: Any, path: str) -> JsonArray:
    if not isinstance(data, dict) or "type" not in data:
        raise TreeLoadError(path, "array must be a mapping with type and items")
    tag = _parse_tag(data["type"], f"{path}.type")
    items = data.get("items") or []
    if not isinstance(items, list):
        raise TreeLoadError(f"{path}.items", "items must be a list")
    values = [_load_value(tag, item, f"{path}.items[{i}]") for i, item in enumerate(items)]
    payload = ScalarBlock(values) if tag in SCALAR_TAGS else RefSequence(values)
    try:
        return JsonArray(tag, payload, data.get("count"))
    except TreeError as exc:
        raise TreeLoadError(path, str(exc)) from exc
