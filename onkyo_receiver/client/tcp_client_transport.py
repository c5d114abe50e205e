# Copyright (c) 2023 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

"""
eISCP receiver TCP/IP client transport.

Provides an implementation of ReceiverClientTransport over a blocking
TCP/IP socket.
"""

from __future__ import annotations

import socket

from ..internal_types import *
from ..exceptions import (
    OnkyoReceiverError,
    TransportError,
    ReceiverConnectionError,
    ConnectionErrorKind,
  )
from ..constants import DEFAULT_TIMEOUT, DEFAULT_PORT
from ..pkg_logging import logger
from ..protocol import (
    Message,
    DeviceType,
    DEFAULT_VERSION,
    decode_message,
    encode_message,
  )

from .client_transport import ReceiverClientTransport, TransportState
from .resolve_host import resolve_receiver_tcp_host

class TcpReceiverClientTransport(ReceiverClientTransport):
    """eISCP receiver TCP/IP client transport.

    All operations block. With the default timeout of None, a receiver that
    stops responding blocks the caller indefinitely; closing the transport
    from another thread unblocks it with a TransportError.
    """

    sock: Optional[socket.socket] = None
    reader: Optional[BinaryIO] = None
    host: str
    port: int
    timeout_secs: Optional[float]
    final_exception: Optional[BaseException] = None
    _state: TransportState = TransportState.DISCONNECTED
    _used: bool = False

    def __init__(
            self,
            host: str,
            port: int=DEFAULT_PORT,
            timeout_secs: Optional[float]=DEFAULT_TIMEOUT,
            destination: int=DeviceType.RECEIVER,
            version: int=DEFAULT_VERSION,
          ) -> None:
        """Initializes the transport. Does not connect.
        """
        super().__init__(destination=destination, version=version)
        self.host = host
        self.port = port
        self.timeout_secs = timeout_secs

    @property
    def state(self) -> TransportState:
        return self._state

    def write_message(self, message: Message) -> None:
        """Writes a single message frame to the receiver.

        On error, the transport will be shut down, and no further interaction is possible.
        """
        if self._state != TransportState.CONNECTED or self.sock is None:
            raise TransportError(f"{self}: Not connected")
        data = encode_message(message)
        try:
            logger.debug(f"Writing frame for {message}: {data.hex(' ')}")
            self.sock.sendall(data)
        except OSError as e:
            self.shutdown(e)
            raise TransportError(f"{self}: Write failed: {e}") from e

    def read_message(self) -> Message:
        """Reads a single message frame from the receiver.

        On error, the transport will be shut down, and no further interaction is possible.
        """
        if self._state != TransportState.CONNECTED or self.reader is None:
            raise TransportError(f"{self}: Not connected")
        return self._read_message()

    def _read_message(self) -> Message:
        assert self.reader is not None
        try:
            result = decode_message(self.reader)
        except OnkyoReceiverError as e:
            self.shutdown(e)
            raise
        except ValueError as e:
            # The buffered reader was closed by shutdown() in another thread
            self.shutdown(e)
            raise TransportError(f"{self}: Read aborted: {e}") from e
        return result

    def shutdown(self, exc: Optional[BaseException] = None) -> None:
        """Shuts the transport down. Safe to call from another thread to
           abort a blocked read.

        If exc is not None, records the reason for the shutdown.

        Has no effect if the transport is already disconnected.

        Does not raise an exception.
        """
        if self.final_exception is None and exc is not None:
            self.final_exception = exc
        self._state = TransportState.DISCONNECTED
        sock = self.sock
        reader = self.reader
        self.sock = None
        self.reader = None
        if sock is not None:
            try:
                sock.shutdown(socket.SHUT_RDWR)
            except OSError:
                logger.debug("Exception while shutting down socket", exc_info=True)
        try:
            if reader is not None:
                reader.close()
        except Exception:
            logger.debug("Exception while closing reader", exc_info=True)
        finally:
            try:
                if sock is not None:
                    sock.close()
                    logger.debug(f"{self}: Closed")
            except Exception:
                logger.debug("Exception while closing socket", exc_info=True)

    def connect(self) -> None:
        """Connect to the receiver and consume its greeting frame.

        Raises ReceiverConnectionError if the TCP/IP connection cannot be
        established or the greeting cannot be read. On error the transport
        is shut down.
        """
        if self._used:
            raise TransportError(f"{self}: Transport has already been connected")
        self._used = True
        self._state = TransportState.CONNECTING
        logger.debug(f"Connecting to receiver at {self.host}:{self.port}")
        try:
            sock = socket.create_connection((self.host, self.port), timeout=self.timeout_secs)
        except OSError as e:
            self.shutdown(e)
            raise ReceiverConnectionError(
                ConnectionErrorKind.CONNECT_FAILED,
                f"Unable to connect to receiver at {self.host}:{self.port}: {e}") from e
        self.sock = sock
        self.reader = sock.makefile('rb')
        try:
            # The receiver announces itself with one unsolicited frame as soon
            # as the connection is accepted. Its content is not interpreted.
            logger.debug(f"Handshake: Waiting for greeting")
            greeting = self._read_message()
            logger.debug(f"Handshake: Discarding greeting: {greeting}")
        except Exception as e:
            self.shutdown(e)
            raise ReceiverConnectionError(
                ConnectionErrorKind.HANDSHAKE_FAILED,
                f"Handshake with receiver at {self.host}:{self.port} failed: {e}") from e
        self._state = TransportState.CONNECTED
        logger.info(f"Handshake: {self} connected")

    @classmethod
    def create(
            cls,
            host: Optional[str]=None,
            port: Optional[int]=None,
            timeout_secs: Optional[float]=DEFAULT_TIMEOUT,
            destination: int=DeviceType.RECEIVER,
            version: int=DEFAULT_VERSION,
          ) -> Self:
        """Creates and connects a transport to
           an eISCP receiver that is reachable over TCP/IP.

              Args:
                host: The hostname or IPV4 address of the receiver.
                      may optionally be prefixed with "tcp://".
                      May be suffixed with ":<port>" to specify a
                      non-default port, which will override the port argument.
                      May be "sddp://" or "sddp://<host>" to use
                      SDDP to discover the receiver.
                      If None, the host will be taken from the
                        ONKYO_RECEIVER_HOST environment variable.
                port: The default TCP/IP port number to use. If None, the port
                      will be taken from the ONKYO_RECEIVER_PORT. If that
                      environment variable is not found, the default eISCP
                      port (60128) will be used.
                timeout_secs: The timeout for operations on the
                        transport. If None (the default), operations
                        block indefinitely.
                destination: The destination byte for written messages.
                version: The protocol version byte for written messages.
        """
        final_host, final_port = resolve_receiver_tcp_host(host, port)

        transport = cls(
            final_host,
            port=final_port,
            timeout_secs=timeout_secs,
            destination=destination,
            version=version,
          )
        # on error, the transport will be shut down, and no further interaction is possible
        transport.connect()
        return transport

    def __str__(self) -> str:
        return f"TcpReceiverClientTransport({self.host}:{self.port})"

    def __repr__(self) -> str:
        return str(self)
