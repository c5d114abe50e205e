# Copyright (c) 2023 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

"""
eISCP receiver client.

Provides the synchronous command/response session on top of a
ReceiverClientTransport, and typed getters/setters for well-known
receiver parameters.
"""

from __future__ import annotations

import string

from ..internal_types import *
from ..constants import DEFAULT_TIMEOUT
from ..pkg_logging import logger
from ..protocol import (
    ReceiverCommand,
    ReceiverResponse,
    DeviceType,
    DEFAULT_VERSION,
    POWER_CODE,
    VOLUME_CODE,
    SOURCE_CODE,
    SourceCode,
    encode_power,
    decode_power,
    encode_volume,
    decode_volume,
    source_name_for_code,
  )

from .client_transport import ReceiverClientTransport
from .tcp_client_transport import TcpReceiverClientTransport

class OnkyoReceiverClient:
    """eISCP receiver client.

    Each operation writes one command and reads exactly one response. Only
    one operation may be in progress at a time; the client does no locking.
    """

    transport: ReceiverClientTransport

    def __init__(
            self,
            transport: ReceiverClientTransport,
          ):
        self.transport = transport

    def transact(
            self,
            command: ReceiverCommand,
          ) -> ReceiverResponse:
        """Sends a command and reads the response.

        The next message read from the receiver is taken to be the response.
        """
        self.transport.write_command(command.command_code, command.arg)
        message = self.transport.read_message()
        response = ReceiverResponse(command, message)
        if not response.matches_command:
            logger.debug(f"{self}: Response does not echo command code {command.command_code}: {response}")
        return response

    def set(self, command_code: str, arg: str) -> None:
        """Sets a parameter on the receiver.

        Raises CommandError(NOT_AVAILABLE) if the receiver answers "N/A".
        """
        response = self.transact(ReceiverCommand(command_code, arg))
        response.raise_if_not_available()

    def get(self, command_code: str) -> str:
        """Queries the current value of a parameter, and returns the response
           value with the echoed command code stripped.

        Raises CommandError(NOT_AVAILABLE) if the receiver answers "N/A".
        """
        response = self.transact(ReceiverCommand.create_query(command_code))
        response.raise_if_not_available()
        return response.value

    def set_power(self, on: bool) -> None:
        """Turns the receiver on, or puts it in standby."""
        self.set(POWER_CODE, encode_power(on))

    def get_power(self) -> bool:
        """Returns True iff the receiver is on."""
        return decode_power(self.get(POWER_CODE))

    def set_volume(self, level: int) -> None:
        """Sets the master volume level (0..255)."""
        self.set(VOLUME_CODE, encode_volume(level))

    def get_volume(self) -> int:
        """Returns the master volume level (0..255)."""
        return decode_volume(self.get(VOLUME_CODE))

    def set_source(self, code: SourceCode) -> None:
        """Selects an input source by its 2-character hex source code.

        Use source_code_for_name() to find the code for a named input channel.
        """
        if len(code) != 2 or not all(c in string.hexdigits for c in code):
            raise ValueError(f"Source code must be 2 hex characters: '{code}'")
        self.set(SOURCE_CODE, code.upper())

    def get_source(self) -> SourceCode:
        """Returns the 2-character hex code of the selected input source.

        Use source_name_for_code() to find the name of the input channel.
        """
        return self.get(SOURCE_CODE).upper()

    def get_source_name(self) -> Optional[str]:
        """Returns the name of the selected input channel, or None if its code is not known."""
        return source_name_for_code(self.get_source())

    def close(self) -> None:
        self.transport.close()

    def __enter__(self) -> OnkyoReceiverClient:
        logger.debug(f"{self}: Entering context manager")
        return self

    def __exit__(
            self,
            exc_type: Optional[Type[BaseException]],
            exc_val: Optional[BaseException],
            exc_tb: Optional[TracebackType],
          ) -> None:
        logger.debug(f"{self}: Exiting context manager, exc={exc_val}")
        self.close()

    @classmethod
    def create(
            cls,
            host: Optional[str]=None,
            port: Optional[int]=None,
            timeout_secs: Optional[float]=DEFAULT_TIMEOUT,
            destination: int=DeviceType.RECEIVER,
            version: int=DEFAULT_VERSION,
          ) -> Self:
        """Connects to a receiver over TCP/IP and returns a client for it.

        host and port are resolved as by TcpReceiverClientTransport.create();
        if port is None, ONKYO_RECEIVER_PORT or the default eISCP port is used.
        """
        transport = TcpReceiverClientTransport.create(
                host,
                port=port,
                timeout_secs=timeout_secs,
                destination=destination,
                version=version,
              )
        try:
            self = cls(transport)
        except BaseException:
            transport.close()
            raise
        return self

    def __str__(self) -> str:
        return f"OnkyoReceiverClient(transport={self.transport})"

    def __repr__(self) -> str:
       return str(self)
