# Copyright (c) 2023 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

"""
eISCP frame codec.

Converts between Message objects and the bytes of an eISCP frame. Decoding
reads from any blocking byte source with a read(n) method; it performs no
other I/O.
"""

from __future__ import annotations

from ..internal_types import *
from ..exceptions import (
    FrameError,
    FrameErrorKind,
    ShortReadError,
    TransportError,
  )
from ..pkg_logging import logger
from .message import Message
from .constants import (
    ISCP_MAGIC,
    HEADER_SIZE,
    RESERVED_BYTES,
    START_CHAR,
    BODY_PREFIX_LENGTH,
    MAX_DATA_SIZE,
    READ_CHUNK_SIZE,
    END_OF_MESSAGE,
    END_OF_MESSAGE_CHARS,
    MAX_END_OF_MESSAGE_LENGTH,
  )

def read_exactly(reader: ByteSource, length: int) -> bytes:
    """Reads exactly length bytes from a blocking byte source.

    A single read() may return fewer bytes than requested (e.g., a fragmented
    TCP stream), so reads are repeated until the request is satisfied.

    Raises ShortReadError if the source reaches end-of-stream first, and
    TransportError if the source raises OSError.
    """
    chunks: List[bytes] = []
    remaining = length
    while remaining > 0:
        try:
            chunk = reader.read(min(remaining, READ_CHUNK_SIZE))
        except OSError as e:
            raise TransportError(f"Read failed after {length - remaining} of {length} bytes: {e}") from e
        if not chunk:
            raise ShortReadError(length, b''.join(chunks))
        chunks.append(chunk)
        remaining -= len(chunk)
    return b''.join(chunks)

def strip_end_of_message(data: bytes) -> bytes:
    """Strips up to MAX_END_OF_MESSAGE_LENGTH trailing EOF/CR/LF bytes from a message body."""
    end = len(data)
    limit = max(0, end - MAX_END_OF_MESSAGE_LENGTH)
    while end > limit and data[end-1] in END_OF_MESSAGE_CHARS:
        end -= 1
    return data[:end]

def decode_message(reader: ByteSource) -> Message:
    """Reads exactly one eISCP frame from reader and returns its Message.

    Raises FrameError if the frame header is malformed, including a data
    size outside BODY_PREFIX_LENGTH..MAX_DATA_SIZE. On a bad magic value,
    no more than the 4 magic bytes are consumed.
    """
    magic = read_exactly(reader, 4)
    if magic != ISCP_MAGIC:
        raise FrameError(
            FrameErrorKind.BAD_MAGIC,
            f"Not an eISCP frame (expected {ISCP_MAGIC.hex(' ')}): {magic.hex(' ')}")
    header_size = int.from_bytes(read_exactly(reader, 4), 'big')
    if header_size != HEADER_SIZE:
        raise FrameError(
            FrameErrorKind.BAD_HEADER_SIZE,
            f"Invalid eISCP header size (expected {HEADER_SIZE}): {header_size}")
    data_size = int.from_bytes(read_exactly(reader, 4), 'big')
    if data_size < BODY_PREFIX_LENGTH:
        raise FrameError(
            FrameErrorKind.BAD_DATA_SIZE,
            f"eISCP data size too small (minimum {BODY_PREFIX_LENGTH}): {data_size}")
    if data_size > MAX_DATA_SIZE:
        raise FrameError(
            FrameErrorKind.BAD_DATA_SIZE,
            f"eISCP data size too large (maximum {MAX_DATA_SIZE}): {data_size}")
    version = read_exactly(reader, 1)[0]
    read_exactly(reader, len(RESERVED_BYTES))  # reserved; not validated
    read_exactly(reader, 1)                    # start character; not validated
    destination = read_exactly(reader, 1)[0]
    body = read_exactly(reader, data_size - BODY_PREFIX_LENGTH)
    payload = strip_end_of_message(body)
    result = Message(payload, destination=destination, version=version)
    logger.debug(f"Decoded frame: {result}")
    return result

def peek_frame_length(data: bytes) -> Optional[int]:
    """Returns the total length of the frame at the start of data, or None if
       data does not yet hold a complete header.

    Raises FrameError if the header is malformed.
    """
    if len(data) < HEADER_SIZE:
        return None
    if data[:4] != ISCP_MAGIC:
        raise FrameError(FrameErrorKind.BAD_MAGIC, f"Not an eISCP frame: {data[:4].hex(' ')}")
    header_size = int.from_bytes(data[4:8], 'big')
    if header_size != HEADER_SIZE:
        raise FrameError(FrameErrorKind.BAD_HEADER_SIZE, f"Invalid eISCP header size: {header_size}")
    data_size = int.from_bytes(data[8:12], 'big')
    if data_size < BODY_PREFIX_LENGTH:
        raise FrameError(FrameErrorKind.BAD_DATA_SIZE, f"eISCP data size too small: {data_size}")
    if data_size > MAX_DATA_SIZE:
        raise FrameError(FrameErrorKind.BAD_DATA_SIZE, f"eISCP data size too large: {data_size}")
    return HEADER_SIZE + data_size

def encode_body(message: Message, end_of_message: bytes=END_OF_MESSAGE) -> bytes:
    """Returns the ISCP body of a message: start character, destination, payload and terminator."""
    return START_CHAR + bytes([message.destination]) + message.payload + end_of_message

def encode_message(message: Message, end_of_message: bytes=END_OF_MESSAGE) -> bytes:
    """Returns the complete eISCP frame for a message.

    Clients terminate messages with a single CR. Receivers terminate theirs
    with DEVICE_END_OF_MESSAGE, which can be passed as end_of_message.
    """
    body = encode_body(message, end_of_message=end_of_message)
    return (
        ISCP_MAGIC +
        HEADER_SIZE.to_bytes(4, 'big') +
        len(body).to_bytes(4, 'big') +
        bytes([message.version]) +
        RESERVED_BYTES +
        body
      )
