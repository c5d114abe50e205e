"""Tests for eISCP frame encoding and decoding."""

import io
import socket

import pytest

from onkyo_receiver.exceptions import (
    FrameError,
    FrameErrorKind,
    ShortReadError,
    TransportError,
)
from onkyo_receiver.protocol import (
    Message,
    decode_message,
    encode_message,
    peek_frame_length,
    read_exactly,
    DEVICE_END_OF_MESSAGE,
    MAX_DATA_SIZE,
)


def device_frame(
    payload: bytes,
    destination: int = 0x31,
    version: int = 0x01,
    terminator: bytes = b"\x1a\r\n",
    header_size: int = 16,
) -> bytes:
    """Build a frame byte-for-byte the way a receiver sends it."""
    body = b"!" + bytes([destination]) + payload + terminator
    return (
        b"ISCP"
        + header_size.to_bytes(4, "big")
        + len(body).to_bytes(4, "big")
        + bytes([version, 0, 0, 0])
        + body
    )


class TrickleReader:
    """A byte source that returns at most one byte per read() call."""

    def __init__(self, data: bytes) -> None:
        self._data = data
        self.reads = 0

    def read(self, size: int = -1) -> bytes:
        self.reads += 1
        chunk = self._data[:1]
        self._data = self._data[1:]
        return chunk


class RecordingReader(io.BytesIO):
    """An in-memory byte source that records the size of each read() request."""

    def __init__(self, data: bytes) -> None:
        super().__init__(data)
        self.requested = []

    def read(self, size: int = -1) -> bytes:
        self.requested.append(size)
        return super().read(size)


class FailingReader:
    def read(self, size: int = -1) -> bytes:
        raise ConnectionResetError("connection reset by peer")


def test_encode_power_on_layout():
    """A PWR01 command should encode to the exact eISCP byte layout."""
    frame = encode_message(Message(b"PWR01"))
    assert frame == (
        b"ISCP"
        b"\x00\x00\x00\x10"   # header size
        b"\x00\x00\x00\x08"   # body: '!' '1' PWR01 CR
        b"\x01\x00\x00\x00"   # version + reserved
        b"!1PWR01\r"
    )


def test_encode_data_size_counts_body():
    """The data size field is the body length: payload plus 3 bytes."""
    payload = b"MVLQSTN"
    frame = encode_message(Message(payload))
    assert int.from_bytes(frame[8:12], "big") == len(payload) + 3
    assert len(frame) == 16 + len(payload) + 3


def test_encode_uses_version_and_destination():
    frame = encode_message(Message(b"PWR01", destination=0x41, version=0x02))
    assert frame[12] == 0x02
    assert frame[13:16] == b"\x00\x00\x00"
    assert frame[16:18] == b"!A"


def test_encode_device_terminator():
    """Receivers terminate messages with EOF CR LF."""
    frame = encode_message(Message(b"PWR01"), end_of_message=DEVICE_END_OF_MESSAGE)
    assert frame == device_frame(b"PWR01")


@pytest.mark.parametrize(
    "payload",
    [b"", b"P", b"PWR01", b"MVLQSTN", b"SLI2B", b"NLSC-P" + b"x" * 200],
)
def test_roundtrip(payload):
    """decode(encode(m)) reproduces version, destination and payload."""
    original = Message(payload, destination=0x31, version=0x01)
    decoded = decode_message(io.BytesIO(encode_message(original)))
    assert decoded == original
    assert decoded.payload == payload


def test_roundtrip_preserves_version_and_destination():
    original = Message(b"PWRQSTN", destination=0x78, version=0x05)
    decoded = decode_message(io.BytesIO(encode_message(original)))
    assert decoded.version == 0x05
    assert decoded.destination == 0x78


def test_decode_device_frame():
    """The EOF CR LF trailer sent by receivers is not part of the payload."""
    decoded = decode_message(io.BytesIO(device_frame(b"MVL2A")))
    assert decoded.payload == b"MVL2A"
    assert decoded.destination == 0x31
    assert decoded.version == 0x01
    assert decoded.command_code == "MVL"
    assert decoded.argument == "2A"


def test_decode_strips_at_most_three_trailing_bytes():
    decoded = decode_message(io.BytesIO(device_frame(b"PWR01", terminator=b"\r\r\r\r")))
    assert decoded.payload == b"PWR01\r"


def test_decode_consumes_exactly_one_frame():
    """Back-to-back frames are decoded one at a time."""
    stream = io.BytesIO(device_frame(b"PWR01") + device_frame(b"MVL10"))
    assert decode_message(stream).payload == b"PWR01"
    assert decode_message(stream).payload == b"MVL10"
    assert stream.read() == b""


def test_decode_fragmented_stream():
    """A frame that arrives one byte at a time is reassembled."""
    reader = TrickleReader(device_frame(b"SLI05"))
    decoded = decode_message(reader)
    assert decoded.payload == b"SLI05"
    assert reader.reads > 16


def test_bad_magic_consumes_only_magic():
    stream = io.BytesIO(b"ISCX" + device_frame(b"PWR01")[4:])
    with pytest.raises(FrameError) as exc_info:
        decode_message(stream)
    assert exc_info.value.kind is FrameErrorKind.BAD_MAGIC
    assert stream.tell() == 4


@pytest.mark.parametrize("header_size", [0, 15, 17, 32, 0x10000000])
def test_bad_header_size(header_size):
    stream = io.BytesIO(device_frame(b"PWR01", header_size=header_size))
    with pytest.raises(FrameError) as exc_info:
        decode_message(stream)
    assert exc_info.value.kind is FrameErrorKind.BAD_HEADER_SIZE


def test_bad_data_size():
    frame = b"ISCP" + (16).to_bytes(4, "big") + (1).to_bytes(4, "big") + b"\x01\x00\x00\x00!"
    with pytest.raises(FrameError) as exc_info:
        decode_message(io.BytesIO(frame))
    assert exc_info.value.kind is FrameErrorKind.BAD_DATA_SIZE


def oversized_header(data_size: int) -> bytes:
    return b"ISCP" + (16).to_bytes(4, "big") + data_size.to_bytes(4, "big") + b"\x01\x00\x00\x00"


def test_oversized_data_size_is_rejected_before_reading_body():
    stream = io.BytesIO(oversized_header(0x7FFFFFF0) + b"!1PWR01\x1a\r\n")
    with pytest.raises(FrameError) as exc_info:
        decode_message(stream)
    assert exc_info.value.kind is FrameErrorKind.BAD_DATA_SIZE
    # Only the magic, header size and data size fields were consumed
    assert stream.tell() == 12


def test_oversized_data_size_over_socket():
    """A hostile data size on a buffered socket reader fails without a large read."""
    a, b = socket.socketpair()
    with a, b, b.makefile("rb") as reader:
        a.sendall(oversized_header(0x7FFFFFF0) + b"!1PWR01\x1a\r\n")
        with pytest.raises(FrameError) as exc_info:
            decode_message(reader)
    assert exc_info.value.kind is FrameErrorKind.BAD_DATA_SIZE


def test_max_data_size_is_accepted():
    payload = b"NLS" + b"x" * (MAX_DATA_SIZE - 8)
    frame = device_frame(payload)
    assert peek_frame_length(frame) == 16 + MAX_DATA_SIZE
    assert decode_message(io.BytesIO(frame)).payload == payload


def test_peek_frame_length_oversized():
    with pytest.raises(FrameError) as exc_info:
        peek_frame_length(oversized_header(MAX_DATA_SIZE + 1))
    assert exc_info.value.kind is FrameErrorKind.BAD_DATA_SIZE


def test_read_exactly_requests_bounded_chunks():
    data = bytes(200000)
    reader = RecordingReader(data)
    assert read_exactly(reader, len(data)) == data
    assert max(reader.requested) <= 0x10000
    assert sum(reader.requested) == len(data)


def test_truncated_frame_is_short_read():
    frame = device_frame(b"PWR01")
    with pytest.raises(ShortReadError) as exc_info:
        decode_message(io.BytesIO(frame[:-4]))
    assert isinstance(exc_info.value, TransportError)


def test_empty_stream_is_short_read():
    with pytest.raises(ShortReadError) as exc_info:
        decode_message(io.BytesIO(b""))
    assert exc_info.value.expected_length == 4
    assert exc_info.value.data == b""


def test_read_error_is_transport_error():
    with pytest.raises(TransportError) as exc_info:
        decode_message(FailingReader())
    assert isinstance(exc_info.value.__cause__, ConnectionResetError)


def test_read_exactly_loops_until_satisfied():
    reader = TrickleReader(b"abcdef")
    assert read_exactly(reader, 4) == b"abcd"
    assert reader.reads == 4


def test_peek_frame_length():
    frame = device_frame(b"PWR01")
    assert peek_frame_length(frame[:15]) is None
    assert peek_frame_length(frame[:16]) == len(frame)
    assert peek_frame_length(frame + b"ISCP") == len(frame)


def test_peek_frame_length_bad_magic():
    with pytest.raises(FrameError) as exc_info:
        peek_frame_length(b"XXXX" + b"\x00" * 12)
    assert exc_info.value.kind is FrameErrorKind.BAD_MAGIC


def test_message_repr():
    m = Message(b"PWR01")
    assert "PWR01" in repr(m)
    assert "0x31" in repr(m)


def test_message_rejects_out_of_range_bytes():
    with pytest.raises(ValueError):
        Message(b"PWR01", destination=0x100)
    with pytest.raises(ValueError):
        Message(b"PWR01", version=-1)


def test_create_command_requires_three_character_code():
    assert Message.create_command("PWR", "01").payload == b"PWR01"
    with pytest.raises(ValueError):
        Message.create_command("PW", "01")
