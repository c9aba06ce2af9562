"""Byte-stream primitives shared by the codecs.

Readers and writers are binary file-like objects (``io.BytesIO``, an open
file, a socket's ``makefile("rb")``...).  Stream errors surface as
:class:`IoFailure`; premature end of stream as :class:`TruncatedInput`.
"""

from __future__ import annotations

import struct
from typing import BinaryIO

from i2p_identity.errors import IoFailure, TruncatedInput

_U8 = struct.Struct(">B")
_U16 = struct.Struct(">H")


def read_exact(reader: BinaryIO, size: int) -> bytes:
    """Read exactly *size* bytes from *reader*.

    Short reads are retried until the stream reports end of file.
    """
    chunks: list[bytes] = []
    remaining = size
    while remaining > 0:
        try:
            chunk = reader.read(remaining)
        except OSError as exc:
            raise IoFailure(f"Read failed: {exc}") from exc
        if not chunk:
            break
        chunks.append(chunk)
        remaining -= len(chunk)
    data = b"".join(chunks)
    if len(data) != size:
        raise TruncatedInput(size, len(data))
    return data


def read_u8(reader: BinaryIO) -> int:
    return _U8.unpack(read_exact(reader, _U8.size))[0]


def read_u16(reader: BinaryIO) -> int:
    """Read a big-endian unsigned 16-bit integer."""
    return _U16.unpack(read_exact(reader, _U16.size))[0]


def pack_u8(value: int) -> bytes:
    return _U8.pack(value)


def pack_u16(value: int) -> bytes:
    """Pack *value* as a big-endian unsigned 16-bit integer."""
    return _U16.pack(value)


def write_all(writer: BinaryIO, data: bytes) -> int:
    """Write all of *data* to *writer* and return the number of bytes written.

    Raw writers may accept only part of a buffer per call; the remainder is
    written until the whole buffer is consumed.
    """
    view = memoryview(data)
    while view:
        try:
            written = writer.write(view)
        except OSError as exc:
            raise IoFailure(f"Write failed: {exc}") from exc
        if written is None:
            raise IoFailure(
                f"Write failed: writer would block with {len(view)} bytes pending"
            )
        if written <= 0:
            raise IoFailure(
                f"Write failed: writer accepted no bytes, {len(view)} pending"
            )
        view = view[written:]
    return len(data)


__all__ = [
    "pack_u16",
    "pack_u8",
    "read_exact",
    "read_u16",
    "read_u8",
    "write_all",
]
