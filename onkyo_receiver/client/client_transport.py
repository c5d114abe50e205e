# Copyright (c) 2023 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

"""
eISCP receiver client abstract transport interface.

Provides a low-level abstract interface for sending eISCP messages to a
receiver and reading the messages it sends back. Does not provide session
establishment or handshake. Does not provide any higher-level abstractions
such as semantic commands or responses.

This abstraction allows for the implementation of alternate transports
(e.g., an in-memory transport for testing).
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import Enum

from ..internal_types import *
from ..pkg_logging import logger
from ..protocol import Message, DeviceType, DEFAULT_VERSION

class TransportState(Enum):
    DISCONNECTED = "disconnected"
    CONNECTING = "connecting"
    CONNECTED = "connected"

class ReceiverClientTransport(ABC):
    destination: int
    """Destination byte placed in every message written by write_command()."""

    version: int
    """Protocol version byte placed in every message written by write_command()."""

    def __init__(
            self,
            destination: int=DeviceType.RECEIVER,
            version: int=DEFAULT_VERSION,
          ) -> None:
        self.destination = destination
        self.version = version

    @property
    @abstractmethod
    def state(self) -> TransportState:
        """The connection state of the transport.

        Must be implemented by subclasses.
        """
        raise NotImplementedError()

    @property
    def is_connected(self) -> bool:
        return self.state == TransportState.CONNECTED

    @abstractmethod
    def write_message(self, message: Message) -> None:
        """Encodes a message and writes the frame to the receiver.

        Raises TransportError if the transport is not connected or the write fails.

        Must be implemented by subclasses.
        """
        raise NotImplementedError()

    @abstractmethod
    def read_message(self) -> Message:
        """Blocks until one complete frame has been read from the receiver, and returns its message.

        Raises TransportError if the transport is not connected or the read fails,
        and FrameError if the bytes read are not a valid frame.

        Must be implemented by subclasses.
        """
        raise NotImplementedError()

    @abstractmethod
    def shutdown(self, exc: Optional[BaseException] = None) -> None:
        """Shuts the transport down and releases its connection.

        If exc is not None, it is recorded as the reason for the shutdown.

        Has no effect if the transport is already disconnected. Does not raise.

        Must be implemented by subclasses.
        """
        raise NotImplementedError()

    def write_command(self, command_code: str, arg: str) -> None:
        """Writes a message carrying command_code + arg with this transport's destination and version."""
        message = Message.create_command(
            command_code, arg, destination=self.destination, version=self.version)
        self.write_message(message)

    def transact(self, message: Message) -> Message:
        """Writes a message and reads the next message from the receiver.

        The next message read is assumed to be the response; only one
        transaction may be in progress at a time.
        """
        self.write_message(message)
        return self.read_message()

    def close(self) -> None:
        """Closes the transport. Has no effect if the transport is already closed."""
        self.shutdown()

    def __enter__(self) -> Self:
        """Enters a context that will close the transport on exit."""
        return self

    def __exit__(
            self,
            exc_type: Optional[Type[BaseException]],
            exc: Optional[BaseException],
            tb: Optional[TracebackType],
          ) -> None:
        """Exits the context and closes the transport."""
        logger.debug(f"{self}: Exiting context manager, exc={exc}")
        self.shutdown(exc)
