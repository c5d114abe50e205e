# Copyright (c) 2023 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

"""
eISCP receiver simple client connection API.

Provides a simple API for connecting to a receiver.
"""

from __future__ import annotations

from ..internal_types import *
from .client_transport import ReceiverClientTransport
from .tcp_connector import TcpReceiverConnector
from .client_config import OnkyoReceiverClientConfig
from .client_impl import OnkyoReceiverClient

def onkyo_receiver_transport_connect(
        host: Optional[str]=None,
        config: Optional[OnkyoReceiverClientConfig]=None
      ) -> ReceiverClientTransport:
    """Create and initialize (including handshake)
       a transport for an eISCP receiver from a configuration.

    Args:
        host: The hostname or IPV4 address of the receiver.
                may optionally be prefixed with "tcp://".
                May be suffixed with ":<port>" to specify a
                non-default port.
                May be "sddp://" or "sddp://<host>" to use
                SDDP to discover the receiver.
                If None, the host will be taken from the config.
        config: An OnkyoReceiverClientConfig object that specifies
                the default host, port, etc. to use.
                If None, a default config will be created.
    """
    connector = TcpReceiverConnector(
        host=host,
        config=config
      )
    transport = connector.connect()
    return transport

def onkyo_receiver_connect(
        host: Optional[str]=None,
        config: Optional[OnkyoReceiverClientConfig]=None
      ) -> OnkyoReceiverClient:
    """Create and initialize (including handshake)
       an eISCP receiver client from a configuration.

    Args:
        host: The hostname or IPV4 address of the receiver.
                may optionally be prefixed with "tcp://".
                May be suffixed with ":<port>" to specify a
                non-default port.
                May be "sddp://" or "sddp://<host>" to use
                SDDP to discover the receiver.
                If None, the host will be taken from the config,
                or the ONKYO_RECEIVER_HOST environment variable.
        config: An OnkyoReceiverClientConfig object that specifies
                the default host, port, etc. to use.
                If None, a default config will be created.
    """
    config = OnkyoReceiverClientConfig(
        default_host=host,
        base_config=config
      )
    transport = onkyo_receiver_transport_connect(
        config=config
      )
    try:
        client = OnkyoReceiverClient(
            transport=transport,
        )
    except BaseException:
        transport.close()
        raise

    return client
