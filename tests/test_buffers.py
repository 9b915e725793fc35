from __future__ import annotations

import ctypes

import pytest

from libswiss.buffers import (
    MAXCH,
    copy_borrowed_string,
    decode_text,
    new_text_buffer,
    new_vector_buffer,
)
from libswiss.exceptions import EngineContractError


def test_text_buffer_has_engine_capacity() -> None:
    buffer = new_text_buffer()

    assert len(buffer) == MAXCH
    assert buffer.raw == b"\0" * MAXCH


def test_text_buffer_below_capacity_is_rejected() -> None:
    with pytest.raises(ValueError):
        new_text_buffer(16)


def test_vector_buffer_is_zeroed() -> None:
    assert list(new_vector_buffer()) == [0.0] * 6


def test_decode_stops_at_first_terminator() -> None:
    buffer = new_text_buffer()
    payload = b"Sun\0\xff\xfe stale bytes"
    buffer[: len(payload)] = payload

    assert decode_text(buffer) == "Sun"


def test_decode_without_terminator_uses_whole_buffer() -> None:
    assert decode_text(b"Mercury") == "Mercury"


def test_decode_keeps_utf8_content() -> None:
    assert decode_text("Cérès\0".encode("utf-8")) == "Cérès"


def test_undecodable_content_breaks_engine_contract() -> None:
    with pytest.raises(EngineContractError):
        decode_text(b"\xff\xfeSun\0")


def test_copy_borrowed_string_copies_content() -> None:
    storage = ctypes.create_string_buffer(b"/ephe/semo_18.se1")

    copied = copy_borrowed_string(ctypes.addressof(storage))
    storage.value = b"/overwritten"

    assert copied == "/ephe/semo_18.se1"


@pytest.mark.parametrize("address", [None, 0])
def test_copy_borrowed_null_pointer(address) -> None:
    assert copy_borrowed_string(address) is None
