# Copyright (c) 2023 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

"""Package onkyo_receiver provides a command-line tool and API for controlling
Onkyo (and Integra/Pioneer) receivers via the eISCP protocol over TCP/IP.
"""

from .version import __version__

from .pkg_logging import logger

from .exceptions import (
    OnkyoReceiverError,
    ReceiverConnectionError,
    ConnectionErrorKind,
    TransportError,
    ShortReadError,
    FrameError,
    FrameErrorKind,
    CommandError,
    CommandErrorKind,
  )

from .constants import DEFAULT_PORT, DEFAULT_TIMEOUT

from .client import (
    OnkyoReceiverClient,
    resolve_receiver_tcp_host,
    ReceiverClientTransport,
    TransportState,
    TcpReceiverClientTransport,
    OnkyoReceiverConnector,
    TcpReceiverConnector,
    onkyo_receiver_transport_connect,
    onkyo_receiver_connect,
    OnkyoReceiverClientConfig,
  )

from .protocol import (
    Message,
    DeviceType,
    ReceiverCommand,
    ReceiverResponse,
    decode_message,
    encode_message,
    SourceCode,
    source_name_to_code,
    source_code_to_name,
    get_all_source_names,
    source_code_for_name,
    source_name_for_code,
  )
