"""Bounded output writers used by the generator."""

from __future__ import annotations

TERMINATOR = b"\0"


class BoundedWriter:
    """Appends bytes to a caller-owned buffer without passing *capacity*.

    One byte of the capacity is always held back for the terminator. The
    first ``emit`` that does not fit sets ``overflowed``; from then on every
    ``emit`` is a no-op and the cursor never moves again.
    """

    def __init__(self, buffer: bytearray | memoryview, capacity: int | None = None) -> None:
        view = memoryview(buffer)
        if view.readonly:
            raise ValueError("output buffer is read-only")
        view = view.cast("B")
        if capacity is None:
            capacity = len(view)
        if capacity < 0 or capacity > len(view):
            raise ValueError(f"capacity {capacity} outside buffer of {len(view)} bytes")
        self._view = view
        self.capacity = capacity
        self.cursor = 0
        self.overflowed = False

    @property
    def remaining(self) -> int:
        """Bytes still available for text, terminator excluded."""
        return max(self.capacity - 1 - self.cursor, 0)

    def emit(self, data: bytes) -> None:
        if self.overflowed:
            return
        end = self.cursor + len(data)
        if end > self.capacity - 1:
            self.overflowed = True
            return
        self._view[self.cursor:end] = data
        self.cursor = end

    def finalize(self) -> int:
        """Terminate the text; return its length, or 0 after an overflow."""
        if self.overflowed or self.capacity < 1:
            self.overflowed = True
            return 0
        self._view[self.cursor] = TERMINATOR[0]
        return self.cursor


class MeasuringWriter:
    """Writer that only counts bytes; used to size buffers exactly."""

    overflowed = False

    def __init__(self) -> None:
        self.cursor = 0

    def emit(self, data: bytes) -> None:
        self.cursor += len(data)

    def finalize(self) -> int:
        return self.cursor
