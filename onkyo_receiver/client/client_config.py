# Copyright (c) 2023 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

"""
eISCP receiver client configuration.

Provides a general config object for creating a ReceiverClientTransport.
"""

from __future__ import annotations

import os

from ..internal_types import *
from ..exceptions import OnkyoReceiverError
from ..constants import (
    DEFAULT_TIMEOUT,
    DEFAULT_PORT,
    ENV_HOST,
    ENV_PORT,
    ENV_TIMEOUT,
  )
from ..protocol import DeviceType, DEFAULT_VERSION

class OnkyoReceiverClientConfig:
    """eISCP receiver client configuration."""
    default_host: Optional[str]
    default_port: int
    timeout_secs: Optional[float]
    destination: int
    protocol_version: int

    def __init__(
            self,
            default_host: Optional[str]=None,
            *,
            default_port: Optional[int]=None,
            timeout_secs: Optional[float]=None,
            destination: Optional[int]=None,
            protocol_version: Optional[int]=None,
            base_config: Optional[OnkyoReceiverClientConfig]=None
          ) -> None:
        """Creates a configuration for an eISCP receiver client.

           Args:
             default_host: The default hostname or IPV4 address of the receiver.
                   may optionally be prefixed with "tcp://".
                   May be suffixed with ":<port>" to specify a
                   non-default port, which will override the default_port argument.
                   May be "sddp://" or "sddp://<host>" to use
                   SDDP to discover the receiver.
                   If None, the default host will be taken from the
                     ONKYO_RECEIVER_HOST environment variable.
             default_port: The default TCP/IP port number to use.
                    If None, the default port will be taken from ONKYO_RECEIVER_PORT.
                    If that environment variable is not found, the default eISCP
                    port (60128) will be used.
             timeout_secs:
                   The timeout for all client operations, in seconds.
                   If None, the timeout will be taken from the
                   ONKYO_RECEIVER_TIMEOUT environment variable.
                   If the environment variable is not found, operations
                   block indefinitely.
             destination:
                   The destination byte for commands. If None, the
                   receiver destination (0x31) is used.
             protocol_version:
                   The ISCP version byte for commands. If None, version 1 is used.
             base_config:
                     An optional base configuration to use.
        """
        if base_config is None:
            self.init_from_defaults()
        else:
            self.init_from_base_config(base_config)

        if default_host is not None and default_host != '':
            self.default_host = default_host

        if default_port is not None and default_port > 0:
            self.default_port = default_port

        if timeout_secs is not None:
            self.timeout_secs = timeout_secs

        if destination is not None:
            if not 0 <= destination <= 0xff:
                raise OnkyoReceiverError(f"Invalid destination byte: {destination}")
            self.destination = destination

        if protocol_version is not None:
            if not 0 <= protocol_version <= 0xff:
                raise OnkyoReceiverError(f"Invalid protocol version byte: {protocol_version}")
            self.protocol_version = protocol_version

    def init_from_defaults(self) -> None:
        """Initializes the configuration from defaults."""
        default_host: Optional[str] = os.environ.get(ENV_HOST)
        if default_host == '':
            default_host = None
        self.default_host = default_host
        default_port_str = os.environ.get(ENV_PORT)
        if default_port_str is None or default_port_str == '':
            default_port = DEFAULT_PORT
        else:
            default_port = int(default_port_str)
        self.default_port = default_port
        timeout_str = os.environ.get(ENV_TIMEOUT)
        if timeout_str is None or timeout_str == '':
            self.timeout_secs = DEFAULT_TIMEOUT
        else:
            self.timeout_secs = float(timeout_str)
        self.destination = DeviceType.RECEIVER
        self.protocol_version = DEFAULT_VERSION

    def init_from_base_config(self, base_config: OnkyoReceiverClientConfig) -> None:
        """Initializes the configuration from a base configuration."""
        self.default_host = base_config.default_host
        self.default_port = base_config.default_port
        self.timeout_secs = base_config.timeout_secs
        self.destination = base_config.destination
        self.protocol_version = base_config.protocol_version

    def __str__(self) -> str:
        return (
            f"OnkyoReceiverClientConfig("
            f"default_host={self.default_host}, "
            f"default_port={self.default_port}, "
            f"timeout_secs={self.timeout_secs!r})"
          )

    def __repr__(self) -> str:
        return str(self)
