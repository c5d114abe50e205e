# Copyright (c) 2023 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

"""Constants used by onkyo_receiver"""

from __future__ import annotations

from typing import Dict, Optional

DEFAULT_PORT = 60128
"""The listen port number used by the receiver for eISCP control over TCP/IP."""

DEFAULT_TIMEOUT: Optional[float] = None
"""The default timeout for TCP/IP control operations, in seconds. None
   means block indefinitely, which is how the receiver protocol is normally used."""

SDDP_FILTER_HEADERS: Dict[str, str] = {
    "Manufacturer": "ONKYO",
  }
"""SDDP headers that a discovered device must match to be considered an eISCP receiver."""

ENV_HOST = 'ONKYO_RECEIVER_HOST'
ENV_PORT = 'ONKYO_RECEIVER_PORT'
ENV_TIMEOUT = 'ONKYO_RECEIVER_TIMEOUT'

LOG_LEVELS = ("debug", "info", "warning", "error", "critical")
"""Values accepted by the --log-level option of the command-line tools."""
