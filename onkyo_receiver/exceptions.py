#
# Copyright (c) 2023 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

"""Exceptions defined by this package"""

from __future__ import annotations

from enum import Enum

from typing import Optional

class OnkyoReceiverError(Exception):
  """Base class for all error exceptions defined by this package."""
  pass

class ConnectionErrorKind(Enum):
    CONNECT_FAILED = "connect_failed"
    """The TCP/IP connection to the receiver could not be established."""

    HANDSHAKE_FAILED = "handshake_failed"
    """The connection was established but the greeting frame could not be read."""

class ReceiverConnectionError(OnkyoReceiverError):
    """Raised when a session with the receiver cannot be established."""
    kind: ConnectionErrorKind

    def __init__(self, kind: ConnectionErrorKind, message: Optional[str]=None):
        if message is None:
            message = f"Connection to receiver failed: {kind.value}"
        super().__init__(message)
        self.kind = kind

class TransportError(OnkyoReceiverError):
    """Raised on read/write failure, or on use of a transport that is not connected."""
    pass

class ShortReadError(TransportError):
    """Raised when the byte stream ends before a complete frame field could be read."""
    expected_length: int
    data: bytes

    def __init__(self, expected_length: int, data: bytes):
        super().__init__(
            f"Stream ended after {len(data)} of {expected_length} expected bytes: [{data.hex(' ')}]")
        self.expected_length = expected_length
        self.data = data

class FrameErrorKind(Enum):
    BAD_MAGIC = "bad_magic"
    BAD_HEADER_SIZE = "bad_header_size"
    BAD_DATA_SIZE = "bad_data_size"

class FrameError(OnkyoReceiverError):
    """Raised when bytes read from the receiver are not a well-formed eISCP frame.

    The stream position can no longer be trusted after a FrameError; the
    session should be closed.
    """
    kind: FrameErrorKind

    def __init__(self, kind: FrameErrorKind, message: str):
        super().__init__(message)
        self.kind = kind

class CommandErrorKind(Enum):
    NOT_AVAILABLE = "not_available"
    """The receiver answered "N/A" for the parameter."""

    INVALID_RESPONSE = "invalid_response"
    """The response value could not be interpreted for the parameter."""

class CommandError(OnkyoReceiverError):
    """Raised when the receiver rejects a command or returns a value that cannot be decoded."""
    kind: CommandErrorKind
    command_code: str

    def __init__(self, kind: CommandErrorKind, command_code: str, message: Optional[str]=None):
        if message is None:
            if kind is CommandErrorKind.NOT_AVAILABLE:
                message = f"Command {command_code} is not available on this receiver"
            else:
                message = f"Invalid response to command {command_code}"
        super().__init__(message)
        self.kind = kind
        self.command_code = command_code
