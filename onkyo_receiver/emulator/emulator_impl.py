# Copyright (c) 2023 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

"""
eISCP receiver emulator.

Provides a simple emulation of an eISCP receiver on TCP/IP.
"""

from __future__ import annotations

import asyncio

from ..internal_types import *
from ..pkg_logging import logger
from ..protocol import (
    Message,
    ReceiverCommand,
    QUERY_ARG,
    NOT_AVAILABLE_ARG,
    POWER_CODE,
    VOLUME_CODE,
    SOURCE_CODE,
    encode_power,
    encode_volume,
    source_code_to_name,
  )
from ..constants import DEFAULT_PORT

from .session import OnkyoReceiverEmulatorSession

class OnkyoReceiverEmulator:
    """An emulated receiver with power, master volume and input selector state.

    Any command other than PWR, MVL and SLI is answered with "N/A".

    Must be constructed while an asyncio event loop is running.
    """
    power: bool
    volume: int
    source: str
    bind_addr: str
    port: int
    sessions: Dict[int, OnkyoReceiverEmulatorSession]
    next_session_id: int = 0
    requests: asyncio.Queue[Optional[Tuple[OnkyoReceiverEmulatorSession, Message]]]
    server: Optional[asyncio.Server] = None
    handler_task: Optional[asyncio.Task[None]] = None
    final_result: asyncio.Future[None]

    def __init__(
            self,
            bind_addr: Optional[str] = None,
            port: int = DEFAULT_PORT,
            power: bool = False,
            volume: int = 0x20,
            source: str = "10",
          ):
        self.bind_addr = '0.0.0.0' if bind_addr is None else bind_addr
        self.port = port
        self.power = power
        self.volume = volume
        self.source = source
        self.sessions = {}
        self.requests = asyncio.Queue()
        self.final_result = asyncio.get_running_loop().create_future()

    @property
    def bound_port(self) -> int:
        """The port the emulator is listening on. Differs from port if port was 0."""
        if self.server is None or len(self.server.sockets) == 0:
            return self.port
        return self.server.sockets[0].getsockname()[1]

    def alloc_session_id(self, session: OnkyoReceiverEmulatorSession) -> int:
        result = self.next_session_id
        self.next_session_id += 1
        self.sessions[result] = session
        return result

    def free_session_id(self, session_id: int) -> None:
        self.sessions.pop(session_id, None)

    def create_greeting(self) -> Message:
        """Returns the unsolicited message sent to each client when it connects."""
        return Message.create_command(POWER_CODE, encode_power(self.power))

    def on_message_received(self, session: OnkyoReceiverEmulatorSession, message: Message) -> None:
        """Called when a message is received from a session."""
        self.requests.put_nowait((session, message))

    def handle_command(
            self,
            session: OnkyoReceiverEmulatorSession,
            command: ReceiverCommand
          ) -> str:
        """Handle a single command, and return the value to send in the response."""
        arg = command.arg
        if command.command_code == POWER_CODE:
            if arg == QUERY_ARG:
                return encode_power(self.power)
            if arg in ("00", "01"):
                self.power = arg == "01"
                return arg
        elif command.command_code == VOLUME_CODE:
            if arg == QUERY_ARG:
                return encode_volume(self.volume)
            if arg == "UP":
                self.volume = min(self.volume + 1, 0xff)
                return encode_volume(self.volume)
            if arg == "DOWN":
                self.volume = max(self.volume - 1, 0)
                return encode_volume(self.volume)
            try:
                if len(arg) == 2:
                    self.volume = int(arg, 16)
                    return encode_volume(self.volume)
            except ValueError:
                pass
        elif command.command_code == SOURCE_CODE:
            if arg == QUERY_ARG:
                return self.source
            if arg.upper() in source_code_to_name:
                self.source = arg.upper()
                return self.source
        logger.debug(f"{session}: Command not available: {command}")
        return NOT_AVAILABLE_ARG

    def handle_request_message(
            self,
            session: OnkyoReceiverEmulatorSession,
            message: Message
          ) -> Message:
        """Handle a single request message, and return the response message.

        If an exception is raised, the session is closed.
        """
        command = ReceiverCommand(message.command_code, message.argument)
        logger.debug(f"{session}: Received command: {command}")
        value = self.handle_command(session, command)
        return command.create_response(value).message

    async def handle_requests(self) -> None:
        """Handle requests from sessions."""
        while True:
            session_and_message = await self.requests.get()
            try:
                if session_and_message is None:
                    logger.debug("Emulator handler: Received EOF; exiting")
                    break
                session, message = session_and_message
                try:
                    response = self.handle_request_message(session, message)
                    logger.debug(f"{session}: Emulator handler: Sending response: {response}")
                    session.send_message(response)
                except asyncio.CancelledError:
                    logger.debug(f"{session}: Handler task cancelled; exiting")
                    break
                except Exception as e:
                    logger.exception(f"{session}: Handler task: Exception while handling request; killing session: {e}")
                    session.close()
            finally:
                self.requests.task_done()

    async def run(self) -> None:
        """Runs the Emulator until it is closed."""
        async with self:
            await self.wait_closed()

    async def start(self) -> None:
        try:
            loop = asyncio.get_running_loop()
            self.handler_task = asyncio.create_task(self.handle_requests())
            self.server = await loop.create_server(
                lambda: OnkyoReceiverEmulatorSession(self),
                host=self.bind_addr,
                port=self.port)
            logger.debug(f"Emulator: Listening on {self.bind_addr}:{self.bound_port}")
            await self.server.start_serving()
        except BaseException as e:
            self.set_final_result(e)
            try:
                await self.wait_closed()
            except BaseException:
                pass
            raise

    def close(self, exc: Optional[BaseException]=None) -> None:
        """Stops the Emulator."""
        self.set_final_result(exc)

    async def wait_closed(self) -> None:
        """Waits for the emulator to be fully closed. Does not initiate shutdown."""
        try:
            await self.final_result
        finally:
            try:
                if self.server is not None:
                    try:
                        for session in list(self.sessions.values()):
                            session.close()
                        self.server.close()
                    finally:
                        await self.server.wait_closed()
            finally:
                self.server = None
                if self.handler_task is not None:
                    try:
                        await self.handler_task
                    finally:
                        self.handler_task = None

    def set_final_result(self, exc: Optional[BaseException]=None) -> None:
        if not self.final_result.done():
            if exc is None:
                logger.debug(f"Emulator: Setting final result to success")
                self.final_result.set_result(None)
            else:
                logger.debug(f"Emulator: Setting final exception: {exc}")
                self.final_result.set_exception(exc)
            self.requests.put_nowait(None)
            if self.server is not None:
                self.server.close()

    async def __aenter__(self) -> OnkyoReceiverEmulator:
        await self.start()
        return self

    async def __aexit__(self,
            exc_type: Optional[type[BaseException]],
            exc: Optional[BaseException],
            tb: Optional[TracebackType]
      ) -> None:
        self.set_final_result(exc)
        try:
            # ensure that final_result has been awaited
            await self.wait_closed()
        except Exception:
            pass

    def __str__(self) -> str:
        return f"OnkyoReceiverEmulator({self.bind_addr}:{self.bound_port})"

    def __repr__(self) -> str:
        return str(self)
