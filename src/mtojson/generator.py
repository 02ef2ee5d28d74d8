"""Generator: renders an entry tree into a fixed-capacity buffer."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from .config import RenderConfig
from .errors import NestingTooDeep, TreeError
from .model import JsonArray, JsonObject, Tree, TypeTag, as_object
from .writer import BoundedWriter, MeasuringWriter

LOG = logging.getLogger(__name__)

_DEFAULT_CONFIG = RenderConfig()


@dataclass(slots=True)
class _Context:
    writer: BoundedWriter | MeasuringWriter
    encoding: str
    max_depth: int

    def text(self, value: str | bytes) -> bytes:
        if isinstance(value, bytes):
            return value
        try:
            return value.encode(self.encoding)
        except UnicodeEncodeError as exc:
            raise TreeError(f"cannot encode {value!r} as {self.encoding}: {exc.reason}") from exc


# ---------------------------------------------------------------------------
# Public entry points
# ---------------------------------------------------------------------------

def generate_json(
    out: bytearray | memoryview,
    root: Tree,
    capacity: int | None = None,
    config: RenderConfig | None = None,
) -> int:
    """Render *root* as a JSON object into ``out[:capacity]``.

    Returns the length of the rendered text; ``out[length]`` holds the
    ``\\0`` terminator. Returns ``0`` when text plus terminator does not
    fit, in which case the first *capacity* bytes of *out* hold unspecified
    data and nothing past them has been touched.

    Raises NestingTooDeep when the tree is nested deeper than
    ``config.max_depth``, and TreeError when a ``str`` key, string or raw
    fragment cannot be encoded with ``config.encoding``.
    """
    cfg = config or _DEFAULT_CONFIG
    writer = BoundedWriter(out, capacity)
    _render_object(_Context(writer, cfg.encoding, cfg.max_depth), as_object(root), 1)
    written = writer.finalize()
    if not written:
        LOG.debug("render does not fit in %d bytes", writer.capacity)
    return written


def required_size(root: Tree, config: RenderConfig | None = None) -> int:
    """Return the exact capacity needed to render *root*, terminator included."""
    cfg = config or _DEFAULT_CONFIG
    writer = MeasuringWriter()
    _render_object(_Context(writer, cfg.encoding, cfg.max_depth), as_object(root), 1)
    return writer.finalize() + 1


def dumps(root: Tree, config: RenderConfig | None = None) -> str:
    """Render *root* into an exactly sized buffer and return the text."""
    cfg = config or _DEFAULT_CONFIG
    size = required_size(root, cfg)
    out = bytearray(size)
    written = generate_json(out, root, size, cfg)
    return bytes(out[:written]).decode(cfg.encoding)


# ---------------------------------------------------------------------------
# Tree walker
# ---------------------------------------------------------------------------

def _enter(ctx: _Context, depth: int) -> None:
    if depth > ctx.max_depth:
        raise NestingTooDeep(ctx.max_depth)


def _render_object(ctx: _Context, obj: JsonObject, depth: int) -> None:
    """``{"key": value, ...}``; an empty object renders as ``{}``."""
    _enter(ctx, depth)
    emit = ctx.writer.emit
    emit(b"{")
    for i, entry in enumerate(obj):
        if i:
            emit(b", ")
        emit(b'"')
        emit(ctx.text(entry.key))
        emit(b'": ')
        _render_value(ctx, entry.type, entry.value, depth)
    emit(b"}")


def _render_array(ctx: _Context, array: JsonArray, depth: int) -> None:
    """``[elem, ...]``; a count of 0 renders ``[]`` without touching the payload."""
    _enter(ctx, depth)
    emit = ctx.writer.emit
    emit(b"[")
    for i in range(array.count):
        if i:
            emit(b", ")
        _render_value(ctx, array.type, array.element(i), depth)
    emit(b"]")


# ---------------------------------------------------------------------------
# Type dispatcher
# ---------------------------------------------------------------------------

def _render_value(ctx: _Context, tag: TypeTag, value: object, depth: int) -> None:
    emit = ctx.writer.emit
    if tag == TypeTag.BOOLEAN:
        emit(b"true" if value else b"false")
    elif tag == TypeTag.INTEGER or tag == TypeTag.UINTEGER:
        emit(b"%d" % value)
    elif tag == TypeTag.STRING:
        emit(b'"')
        emit(ctx.text(value))
        emit(b'"')
    elif tag == TypeTag.VALUE:
        # Raw fragment: no quoting, no escaping, no validity check.
        emit(ctx.text(value.text))
    elif tag == TypeTag.OBJECT:
        _render_object(ctx, as_object(value), depth + 1)
    elif tag == TypeTag.ARRAY:
        _render_array(ctx, value, depth + 1)
    else:
        raise TreeError(f"unknown type tag {tag!r}")
