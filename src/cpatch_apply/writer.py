from __future__ import annotations

import os
from typing import BinaryIO
from warnings import warn

from cpatch_core.patchset import PatchEntry


class ByteWriter:
    """Positioned writes over an open ``r+b`` stream.

    Every seek and write is checked. A failing call stops at the first
    failed operation and returns False; bytes already written stay written.
    The caller owns the stream: no flush, no close.
    """

    def __init__(self, stream: BinaryIO, size_limit: int | None = None):
        self.stream = stream
        self.last_error: str | None = None
        self.size_limit = size_limit
        if size_limit is None and not stream.closed:
            # Writes past EOF would silently grow the file.
            pos = stream.tell()
            self.size_limit = stream.seek(0, os.SEEK_END)
            stream.seek(pos)

    def _error(self, message: str) -> bool:
        self.last_error = message
        warn(message)
        return False

    def write_bytes(self, offset: int, data: bytes) -> bool:
        if self.stream.closed:
            return self._error("Stream is not open")
        data = bytes(data)
        if offset < 0:
            return self._error(f"Failed to set position in the stream: negative offset {offset}")
        end = offset + len(data)
        if self.size_limit is not None and end > self.size_limit:
            return self._error(
                f"Failed to set position in the stream: range {offset:#x}..{end:#x} "
                f"exceeds file size {self.size_limit:#x}"
            )

        try:
            pos = self.stream.seek(offset)
        except (OSError, ValueError) as e:
            return self._error(f"Failed to set position in the stream at {offset:#x}: {e}")
        if pos != offset:
            return self._error(f"Failed to set position in the stream: at {pos:#x}, wanted {offset:#x}")

        try:
            written = self.stream.write(data)
            if written is not None and written != len(data):
                return self._error(
                    f"Failed to write to the stream at {offset:#x}: short write {written}/{len(data)}"
                )
            # Buffered streams only report I/O errors once the bytes leave the buffer.
            self.stream.flush()
        except (OSError, ValueError) as e:
            return self._error(f"Failed to write to the stream at {offset:#x}: {e}")

        self.last_error = None
        return True

    def write_byte(self, offset: int, value: int) -> bool:
        if not 0 <= value <= 0xFF:
            return self._error(f"Unable to write to file: byte value {value!r} out of range")
        return self.write_bytes(offset, bytes([value]))

    def write_repeated(self, offset: int, value: int, count: int) -> bool:
        if not 0 <= value <= 0xFF:
            return self._error(f"Write operation failed: byte value {value!r} out of range")
        if count < 1:
            return self._error(f"Write operation failed: repeat count {count} < 1")
        return self.write_bytes(offset, bytes([value]) * count)

    def write_entry(self, entry: PatchEntry) -> bool:
        return self.write_bytes(entry.offset, entry.data)
