"""Scratch buffers handed to the engine and their decoding.

Every buffer is allocated right before a call and dropped once its content
has been copied into an owned Python value.  Text is cut at the first NUL
byte before decoding; anything after the terminator is engine scratch space.
"""

from __future__ import annotations

import ctypes
from typing import Final

from .exceptions import EngineContractError

__all__ = [
    "MAXCH",
    "TextBuffer",
    "VectorBuffer",
    "copy_borrowed_string",
    "decode_text",
    "new_text_buffer",
    "new_vector_buffer",
]

MAXCH: Final[int] = 256
"""Capacity of every text buffer; the engine never writes more than this."""

TextBuffer = ctypes.Array  # Array[c_char]
VectorBuffer = ctypes.Array  # Array[c_double]

_ENCODING: Final[str] = "utf-8"


def new_text_buffer(size: int = MAXCH) -> ctypes.Array:
    """Return a zero-filled ``char[size]`` buffer."""

    if size < MAXCH:
        raise ValueError(f"Text buffers need at least {MAXCH} bytes, got {size}")
    return ctypes.create_string_buffer(size)


def new_vector_buffer(length: int = 6) -> ctypes.Array:
    """Return a zero-filled ``double[length]`` buffer."""

    return (ctypes.c_double * length)()


def decode_text(buffer: ctypes.Array | bytes | bytearray) -> str:
    """Decode the NUL-terminated content of ``buffer``.

    Bytes after the first terminator are discarded before decoding.  Content
    that is not valid UTF-8 means the engine broke its buffer contract.
    """

    raw = buffer.raw if isinstance(buffer, ctypes.Array) else bytes(buffer)
    content, _, _ = raw.partition(b"\0")
    try:
        return content.decode(_ENCODING)
    except UnicodeDecodeError as exc:
        raise EngineContractError(
            f"Engine returned undecodable text ({len(content)} bytes)"
        ) from exc


def copy_borrowed_string(address: int | None) -> str | None:
    """Copy the engine-owned NUL-terminated string at ``address``.

    ``None`` (or a zero address) stands for a NULL pointer.  The address is
    only dereferenced here and never kept.
    """

    if not address:
        return None
    return decode_text(ctypes.string_at(address))
