# Copyright (c) 2023 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

"""
eISCP receiver TCP/IP client connector.

Provides a connector for a ReceiverClientTransport over a TCP/IP
socket.
"""

from __future__ import annotations

from ..internal_types import *
from ..exceptions import OnkyoReceiverError
from .connector import OnkyoReceiverConnector
from .client_transport import ReceiverClientTransport
from .client_config import OnkyoReceiverClientConfig

from .tcp_client_transport import TcpReceiverClientTransport

class TcpReceiverConnector(OnkyoReceiverConnector):
    """eISCP receiver TCP/IP client transport connector."""

    config: OnkyoReceiverClientConfig

    def __init__(
            self,
            host: Optional[str]=None,
            port: Optional[int]=None,
            timeout_secs: Optional[float] = None,
            config: Optional[OnkyoReceiverClientConfig]=None,
          ) -> None:
        """Creates a connector that can create transports to
           an eISCP receiver that is reachable over TCP/IP.

              Args:
                host: The hostname or IPV4 address of the receiver.
                      may optionally be prefixed with "tcp://".
                      May be suffixed with ":<port>" to specify a
                      non-default port, which will override the port argument.
                      May be "sddp://" or "sddp://<host>" to use
                      SDDP to discover the receiver.
                      If None, the host will be taken from the config.
                port: The default TCP/IP port number to use. If None, the port
                      will be taken from the config.
                timeout_secs: The timeout for operations on the
                        transport. If None, the config's timeout is used.
                config: An OnkyoReceiverClientConfig object that specifies
                        the default host, port, etc to use.
                        If None, a default config will be created.
        """
        super().__init__()
        self.config = OnkyoReceiverClientConfig(
            default_host=host,
            default_port=port,
            timeout_secs=timeout_secs,
            base_config=config
          )
        host = self.config.default_host
        if host is not None and '://' in host and not host.startswith('tcp://') and not host.startswith('sddp://'):
            raise OnkyoReceiverError(f"Invalid host protocol specifier for TCP transport: '{host}'")

    def connect(self) -> ReceiverClientTransport:
        """Create and initialize (including handshake)
           a TCP/IP client transport for the receiver associated with this
           connector.
        """
        transport = TcpReceiverClientTransport.create(
            self.config.default_host,
            port=self.config.default_port,
            timeout_secs=self.config.timeout_secs,
            destination=self.config.destination,
            version=self.config.protocol_version,
          )
        return transport

    def __str__(self) -> str:
        return f"TcpReceiverConnector(host='{self.config.default_host}', port={self.config.default_port})"

    def __repr__(self) -> str:
        return str(self)
