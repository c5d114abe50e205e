# Copyright (c) 2023 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

from __future__ import annotations

import string

from ..internal_types import *
from ..exceptions import CommandError, CommandErrorKind
from .message import Message
from .constants import (
    COMMAND_CODE_LENGTH,
    DEFAULT_VERSION,
    QUERY_ARG,
    NOT_AVAILABLE_ARG,
    DeviceType,
  )

POWER_CODE = "PWR"
"""System power. Argument "01" is on, "00" is standby."""

VOLUME_CODE = "MVL"
"""Master volume. Argument is the level as 2 uppercase hex digits."""

SOURCE_CODE = "SLI"
"""Input selector. Argument is a 2-character hex source code."""

POWER_ON_ARG = "01"
POWER_OFF_ARG = "00"

class ReceiverCommand:
    """A command to an eISCP receiver: a 3-character command code and an argument.

    The argument "QSTN" makes the command a query for the current value.
    """
    command_code: str
    arg: str

    def __init__(self, command_code: str, arg: str):
        if len(command_code) != COMMAND_CODE_LENGTH or not command_code.isascii():
            raise ValueError(f"Command code must be {COMMAND_CODE_LENGTH} ASCII characters: '{command_code}'")
        if not arg.isascii():
            raise ValueError(f"Command argument must be ASCII: '{arg}'")
        self.command_code = command_code
        self.arg = arg

    @classmethod
    def create_query(cls, command_code: str) -> Self:
        """Creates a query for the current value of a parameter"""
        return cls(command_code, QUERY_ARG)

    @property
    def is_query(self) -> bool:
        return self.arg == QUERY_ARG

    def to_message(
            self,
            destination: int=DeviceType.RECEIVER,
            version: int=DEFAULT_VERSION,
          ) -> Message:
        """Returns the message that carries this command"""
        return Message.create_command(self.command_code, self.arg, destination=destination, version=version)

    def create_response(self, value: str) -> ReceiverResponse:
        """Creates the response the receiver would send with the given value"""
        message = Message.create_command(self.command_code, value)
        return ReceiverResponse(self, message)

    def __str__(self) -> str:
        return f"ReceiverCommand({self.command_code}{self.arg})"

    def __repr__(self) -> str:
        return str(self)

class ReceiverResponse:
    """The response message read from the receiver after a command was sent.

    Response payloads echo the 3-character command code, followed by the
    value (e.g., b"MVL2A"). Correlation with the command is positional; the
    echoed command code is not required to match.
    """
    command: ReceiverCommand
    message: Message

    def __init__(self, command: ReceiverCommand, message: Message):
        self.command = command
        self.message = message

    @property
    def echoed_command_code(self) -> str:
        return self.message.command_code

    @property
    def matches_command(self) -> bool:
        """True iff the response echoes the command code of the command"""
        return self.echoed_command_code == self.command.command_code

    @property
    def value(self) -> str:
        """The response payload with the echoed command code stripped"""
        return self.message.argument

    @property
    def is_not_available(self) -> bool:
        """True iff the receiver reported that the parameter is not available"""
        return self.value == NOT_AVAILABLE_ARG

    def raise_if_not_available(self) -> None:
        if self.is_not_available:
            raise CommandError(CommandErrorKind.NOT_AVAILABLE, self.command.command_code)

    def __str__(self) -> str:
        return f"ReceiverResponse({self.command.command_code}: {self.message.text!r})"

    def __repr__(self) -> str:
        return str(self)

def encode_power(on: bool) -> str:
    return POWER_ON_ARG if on else POWER_OFF_ARG

def decode_power(value: str) -> bool:
    return value == POWER_ON_ARG

def encode_volume(level: int) -> str:
    """Encodes a volume level 0..255 as 2 uppercase hex digits"""
    if not 0 <= level <= 0xff:
        raise ValueError(f"Volume level must be in the range 0..255: {level}")
    return f"{level:02X}"

def decode_volume(value: str) -> int:
    """Decodes a 2-hex-digit volume level (either case) into 0..255"""
    try:
        if len(value) != 2 or not all(c in string.hexdigits for c in value):
            raise ValueError(f"expected 2 hex digits: '{value}'")
        return int(value, 16)
    except ValueError as e:
        raise CommandError(
            CommandErrorKind.INVALID_RESPONSE,
            VOLUME_CODE,
            f"Invalid volume level in response: '{value}'") from e
