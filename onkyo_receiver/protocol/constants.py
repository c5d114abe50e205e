# Copyright (c) 2023 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

"""
Wire-level constants for the eISCP protocol.

An eISCP frame on the wire is laid out as:

    "ISCP" <header_size:u32be=16> <data_size:u32be> <version:u8> 00 00 00
    '!' <destination:u8> <payload...> <terminator>

data_size counts the body that follows the 16-byte header: the start
character, the destination, the payload and the terminator.
"""

from __future__ import annotations

from enum import IntEnum

ISCP_MAGIC = b"ISCP"
"""Every eISCP frame starts with these 4 bytes."""

HEADER_SIZE = 16
"""Value of the header size field. Also the length in bytes of the header."""

RESERVED_BYTES = b"\x00\x00\x00"
"""The 3 reserved bytes following the version byte in the header."""

START_CHAR = b"!"
"""First byte of every ISCP message body."""

BODY_PREFIX_LENGTH = 2
"""Number of body bytes that precede the payload (start character and destination)."""

MAX_DATA_SIZE = 0x10000
"""Largest data size accepted in a received frame header. ISCP messages are
   short; a larger value indicates a corrupt or non-eISCP stream."""

READ_CHUNK_SIZE = 0x10000
"""Largest number of bytes requested from the byte source in a single read."""

DEFAULT_VERSION = 0x01
"""ISCP protocol version sent in every frame."""

END_OF_MESSAGE = b"\x0d"
"""Terminator appended to client-originated messages (carriage return)."""

DEVICE_END_OF_MESSAGE = b"\x1a\x0d\x0a"
"""Terminator appended by receivers to the messages they send (EOF, CR, LF)."""

END_OF_MESSAGE_CHARS = b"\x1a\x0d\x0a"
"""Bytes that may terminate a device-originated message: EOF (0x1a), CR and LF.
   Receivers typically send all three, in that order."""

MAX_END_OF_MESSAGE_LENGTH = 3
"""Maximum number of end-of-message bytes stripped from a received payload."""

COMMAND_CODE_LENGTH = 3
"""Length of the ASCII command code at the start of each payload (e.g., "PWR")."""

QUERY_ARG = "QSTN"
"""Argument that turns a command into a query for its current value."""

NOT_AVAILABLE_ARG = "N/A"
"""Argument sent by the receiver when a parameter is not supported or not currently available."""

class DeviceType(IntEnum):
    """Destination codes identifying the class of the addressed device."""
    RECEIVER = 0x31
