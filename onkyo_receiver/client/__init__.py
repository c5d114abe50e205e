# Copyright (c) 2023 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

"""
eISCP receiver client.

Provides a synchronous client for an eISCP receiver on TCP/IP.
"""

from .resolve_host import resolve_receiver_tcp_host
from .client_transport import ReceiverClientTransport, TransportState
from .tcp_client_transport import TcpReceiverClientTransport
from .connector import OnkyoReceiverConnector
from .simple import onkyo_receiver_transport_connect, onkyo_receiver_connect
from .tcp_connector import TcpReceiverConnector
from .client_config import OnkyoReceiverClientConfig
from .client_impl import (
    OnkyoReceiverClient,
  )
