# Copyright (c) 2023 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

from __future__ import annotations

from ..internal_types import *
from .constants import (
    COMMAND_CODE_LENGTH,
    DEFAULT_VERSION,
    DeviceType,
  )

class Message:
    """A single eISCP message, as carried in one frame.

    The payload is the ASCII command code immediately followed by its
    argument, e.g. b"PWR01" or b"MVLQSTN". Messages are plain values; two
    messages with the same version, destination and payload are equal.
    """
    version: int
    destination: int
    payload: bytes

    def __init__(
            self,
            payload: bytes,
            destination: int=DeviceType.RECEIVER,
            version: int=DEFAULT_VERSION,
          ):
        if not 0 <= version <= 0xff:
            raise ValueError(f"Version must fit in one byte: {version}")
        if not 0 <= destination <= 0xff:
            raise ValueError(f"Destination must fit in one byte: {destination}")
        self.version = int(version)
        self.destination = int(destination)
        self.payload = bytes(payload)

    @classmethod
    def create_command(
            cls,
            command_code: str,
            arg: str,
            destination: int=DeviceType.RECEIVER,
            version: int=DEFAULT_VERSION,
          ) -> Self:
        """Creates a message carrying an ASCII command code and argument."""
        if len(command_code) != COMMAND_CODE_LENGTH:
            raise ValueError(f"Command code must be {COMMAND_CODE_LENGTH} characters: '{command_code}'")
        payload = (command_code + arg).encode('ascii')
        return cls(payload, destination=destination, version=version)

    @property
    def text(self) -> str:
        """The payload decoded as ASCII. Non-ASCII bytes are replaced."""
        return self.payload.decode('ascii', errors='replace')

    @property
    def command_code(self) -> str:
        """The 3-character command code that starts the payload."""
        return self.text[:COMMAND_CODE_LENGTH]

    @property
    def argument(self) -> str:
        """The payload following the command code."""
        return self.text[COMMAND_CODE_LENGTH:]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Message):
            return NotImplemented
        return (
            self.version == other.version and
            self.destination == other.destination and
            self.payload == other.payload
          )

    def __hash__(self) -> int:
        return hash((self.version, self.destination, self.payload))

    def __str__(self) -> str:
        return f"Message(v{self.version}, dest=0x{self.destination:02x}: {self.text!r})"

    def __repr__(self) -> str:
        return str(self)
