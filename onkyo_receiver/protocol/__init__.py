# Copyright (c) 2023 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

"""
Low-level protocol definitions for eISCP receivers.

Refer to the Onkyo "ISCP-AV Command Protocol" documentation for the
official protocol description.
"""

from .constants import (
    DeviceType,
    ISCP_MAGIC,
    HEADER_SIZE,
    MAX_DATA_SIZE,
    DEFAULT_VERSION,
    END_OF_MESSAGE,
    DEVICE_END_OF_MESSAGE,
    QUERY_ARG,
    NOT_AVAILABLE_ARG,
  )

from .message import (
    Message,
  )

from .codec import (
    decode_message,
    encode_message,
    peek_frame_length,
    read_exactly,
  )

from .command import (
    ReceiverCommand,
    ReceiverResponse,
    POWER_CODE,
    VOLUME_CODE,
    SOURCE_CODE,
    encode_power,
    decode_power,
    encode_volume,
    decode_volume,
  )

from .sources import (
    SourceCode,
    source_name_to_code,
    source_code_to_name,
    get_all_source_names,
    source_code_for_name,
    source_name_for_code,
  )
