# Copyright (c) 2023 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

"""
eISCP receiver host IP/Port resolver.

Provides a method that can resolve various host pathnames, environment variables,
SDDP discovery, etc. into a receiver IP address and port.
"""

from __future__ import annotations

import os
import asyncio

from ..internal_types import *
from ..exceptions import OnkyoReceiverError
from ..constants import DEFAULT_PORT, SDDP_FILTER_HEADERS, ENV_HOST, ENV_PORT
from ..pkg_logging import logger

from sddp_discovery_protocol import SddpClient, SddpResponseInfo

async def discover_receiver_sddp(sddp_host: Optional[str]=None) -> SddpResponseInfo:
    """Uses SDDP to find a receiver on the local network.

    Args:
        sddp_host: If not None, the SDDP "Host" header the receiver must advertise.
                   If None, the first receiver that responds is used.
    """
    async with SddpClient(include_loopback=True) as sddp_client:
        async with sddp_client.search(filter_headers=SDDP_FILTER_HEADERS) as search_request:
            async for response in search_request:
                if sddp_host is None or response.datagram.hdr_host == sddp_host:
                    logger.debug(f"SDDP: Found receiver at {response.src_addr[0]}")
                    return response
    raise OnkyoReceiverError("SDDP discovery failed to find a receiver")

def resolve_receiver_tcp_host(
        host: Optional[str]=None,
        default_port: Optional[int]=None,
      ) -> Tuple[str, int]:
    """Resolves a receiver host string into a hostname and port.

        Args:
            host: The hostname or IPV4 address of the receiver.
                    may optionally be prefixed with "tcp://".
                    May be suffixed with ":<port>" to specify a
                    non-default port, which will override the default_port argument.
                    May be "sddp://" or "sddp://<sddp-hostname>" to use
                    SDDP to discover the receiver.
                    If None, the host will be taken from the
                    ONKYO_RECEIVER_HOST environment variable.
            default_port: The default TCP/IP port number to use. If None, the port
                    will be taken from the ONKYO_RECEIVER_PORT. If that
                    environment variable is not found, the default eISCP
                    port (60128) will be used.

        Returns:
            A tuple of (hostname: str, port: int) where:
                hostname: The resolved hostname or IP address.
                port:     The resolved port number.
    """
    if host is None or host == '':
        host = os.environ.get(ENV_HOST)
        if host is None or host == '':
            raise OnkyoReceiverError(f"No receiver host specified, and {ENV_HOST} is not set")

    if default_port is None or default_port <= 0:
        default_port_str = os.environ.get(ENV_PORT)
        if default_port_str is None or default_port_str == '':
            default_port = DEFAULT_PORT
        else:
            default_port = int(default_port_str)

    result_host: str
    port: int

    if host.startswith('sddp://'):
        sddp_host: Optional[str] = host[7:]
        if sddp_host == '':
            sddp_host = None
        # SDDP discovery is asynchronous; run it to completion on a private event loop
        sddp_response_info = asyncio.run(discover_receiver_sddp(sddp_host))
        result_host = sddp_response_info.src_addr[0]
        optional_port = sddp_response_info.datagram.headers.get('Port')
        if optional_port is None:
            port = default_port
        else:
            port = int(optional_port)
    else:
        if host.startswith('tcp://'):
            host = host[6:]
        if '://' in host:
            raise OnkyoReceiverError(f"Unsupported protocol in host specifier: '{host}'")
        if ':' in host:
            host, port_str = host.rsplit(':', 1)
            port = int(port_str)
        else:
            port = default_port
        result_host = host

    return (result_host, port)
