# Copyright (c) 2023 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

"""
eISCP receiver emulator session.

One session exists for each client connected to the emulator.
"""

from __future__ import annotations

import asyncio
import io

from ..internal_types import *
from ..pkg_logging import logger
from ..protocol import (
    Message,
    DEVICE_END_OF_MESSAGE,
    decode_message,
    encode_message,
    peek_frame_length,
  )

if TYPE_CHECKING:
    from .emulator_impl import OnkyoReceiverEmulator

class OnkyoReceiverEmulatorSession(asyncio.Protocol):
    emulator: OnkyoReceiverEmulator
    session_id: int
    transport: Optional[asyncio.Transport] = None
    buffer: bytes

    def __init__(self, emulator: OnkyoReceiverEmulator):
        self.emulator = emulator
        self.buffer = b''
        self.session_id = emulator.alloc_session_id(self)

    def connection_made(self, transport: asyncio.BaseTransport) -> None:
        assert isinstance(transport, asyncio.Transport)
        self.transport = transport
        logger.debug(f"{self}: Connection made; sending greeting")
        self.send_message(self.emulator.create_greeting())

    def data_received(self, data: bytes) -> None:
        self.buffer += data
        try:
            while True:
                frame_length = peek_frame_length(self.buffer)
                if frame_length is None or len(self.buffer) < frame_length:
                    break
                frame = self.buffer[:frame_length]
                self.buffer = self.buffer[frame_length:]
                message = decode_message(io.BytesIO(frame))
                self.emulator.on_message_received(self, message)
        except Exception as e:
            logger.warning(f"{self}: Invalid data from client; closing session: {e}")
            self.close()

    def connection_lost(self, exc: Optional[Exception]) -> None:
        logger.debug(f"{self}: Connection lost, exc={exc}")
        self.transport = None
        self.emulator.free_session_id(self.session_id)

    def send_message(self, message: Message) -> None:
        """Sends a message framed the way a receiver frames it."""
        data = encode_message(message, end_of_message=DEVICE_END_OF_MESSAGE)
        self.write(data)

    def write(self, data: bytes) -> None:
        if self.transport is not None:
            logger.debug(f"{self}: Writing {len(data)} bytes: {data.hex(' ')}")
            self.transport.write(data)

    def close(self) -> None:
        if self.transport is not None:
            self.transport.close()

    def __str__(self) -> str:
        return f"OnkyoReceiverEmulatorSession({self.session_id})"

    def __repr__(self) -> str:
        return str(self)
