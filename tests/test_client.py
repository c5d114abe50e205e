"""Tests for the command/response client, using an in-memory transport."""

from typing import List, Optional

import pytest

from onkyo_receiver.client import (
    OnkyoReceiverClient,
    ReceiverClientTransport,
    TransportState,
)
from onkyo_receiver.exceptions import (
    CommandError,
    CommandErrorKind,
    TransportError,
)
from onkyo_receiver.protocol import Message


class FakeTransport(ReceiverClientTransport):
    """Records written messages and answers reads from a queue of payloads."""

    def __init__(self, responses: List[bytes]) -> None:
        super().__init__()
        self.responses = list(responses)
        self.written: List[Message] = []
        self.shutdown_exc: Optional[BaseException] = None
        self._state = TransportState.CONNECTED

    @property
    def state(self) -> TransportState:
        return self._state

    def write_message(self, message: Message) -> None:
        if self._state != TransportState.CONNECTED:
            raise TransportError("Not connected")
        self.written.append(message)

    def read_message(self) -> Message:
        if self._state != TransportState.CONNECTED:
            raise TransportError("Not connected")
        return Message(self.responses.pop(0))

    def shutdown(self, exc: Optional[BaseException] = None) -> None:
        self.shutdown_exc = exc
        self._state = TransportState.DISCONNECTED


def make_client(*responses: bytes):
    transport = FakeTransport(list(responses))
    return OnkyoReceiverClient(transport), transport


def test_set_power_on():
    client, transport = make_client(b"PWR01")
    client.set_power(True)
    assert transport.written == [Message(b"PWR01", destination=0x31, version=0x01)]


def test_set_power_off():
    client, transport = make_client(b"PWR00")
    client.set_power(False)
    assert transport.written[0].payload == b"PWR00"


@pytest.mark.parametrize("payload, expected", [(b"PWR01", True), (b"PWR00", False), (b"PWR02", False)])
def test_get_power(payload, expected):
    client, transport = make_client(payload)
    assert client.get_power() is expected
    assert transport.written[0].payload == b"PWRQSTN"


def test_set_volume_encodes_uppercase_hex():
    client, transport = make_client(b"MVL2A")
    client.set_volume(42)
    assert transport.written[0].payload == b"MVL2A"


def test_get_volume():
    client, transport = make_client(b"MVL2a")
    assert client.get_volume() == 42
    assert transport.written[0].payload == b"MVLQSTN"


def test_get_volume_invalid_response():
    client, _ = make_client(b"MVLXYZ")
    with pytest.raises(CommandError) as exc_info:
        client.get_volume()
    assert exc_info.value.kind is CommandErrorKind.INVALID_RESPONSE


def test_set_volume_out_of_range_writes_nothing():
    client, transport = make_client()
    with pytest.raises(ValueError):
        client.set_volume(256)
    assert transport.written == []


def test_set_source():
    client, transport = make_client(b"SLI2A")
    client.set_source("2a")
    assert transport.written[0].payload == b"SLI2A"


def test_set_source_rejects_non_hex_code():
    client, transport = make_client()
    with pytest.raises(ValueError):
        client.set_source("pc")
    assert transport.written == []


def test_get_source():
    client, transport = make_client(b"SLI05")
    assert client.get_source() == "05"
    assert transport.written[0].payload == b"SLIQSTN"


def test_get_source_name():
    client, _ = make_client(b"SLI28", b"SLI99")
    assert client.get_source_name() == "internet-radio"
    assert client.get_source_name() is None


def test_generic_set_and_get():
    client, transport = make_client(b"AMT01", b"AMT01")
    client.set("AMT", "01")
    assert client.get("AMT") == "01"
    assert [m.payload for m in transport.written] == [b"AMT01", b"AMTQSTN"]


def test_set_not_available():
    client, _ = make_client(b"AMTN/A")
    with pytest.raises(CommandError) as exc_info:
        client.set("AMT", "01")
    assert exc_info.value.kind is CommandErrorKind.NOT_AVAILABLE
    assert exc_info.value.command_code == "AMT"


@pytest.mark.parametrize(
    "call",
    [
        lambda c: c.get_power(),
        lambda c: c.get_volume(),
        lambda c: c.get_source(),
        lambda c: c.set_power(True),
        lambda c: c.set_volume(10),
        lambda c: c.set_source("05"),
    ],
)
def test_typed_operations_not_available(call):
    client, _ = make_client(b"XXXN/A")
    with pytest.raises(CommandError) as exc_info:
        call(client)
    assert exc_info.value.kind is CommandErrorKind.NOT_AVAILABLE


def test_not_available_leaves_session_usable():
    client, transport = make_client(b"TUNN/A", b"PWR01")
    with pytest.raises(CommandError):
        client.get("TUN")
    assert transport.is_connected
    assert client.get_power() is True


def test_each_operation_reads_exactly_one_response():
    client, transport = make_client(b"PWR01", b"MVL10", b"SLI23")
    client.set_power(True)
    assert client.get_volume() == 0x10
    assert client.get_source() == "23"
    assert transport.responses == []
    assert len(transport.written) == 3


def test_closed_client_raises_transport_error():
    client, transport = make_client(b"PWR01")
    client.close()
    assert transport.state is TransportState.DISCONNECTED
    with pytest.raises(TransportError):
        client.get_power()


def test_context_manager_closes_transport():
    client, transport = make_client(b"PWR01")
    with client as c:
        assert c.get_power() is True
    assert not transport.is_connected


def test_write_command_uses_transport_destination_and_version():
    transport = FakeTransport([])
    transport.destination = 0x32
    transport.version = 0x02
    transport.write_command("PWR", "QSTN")
    assert transport.written == [Message(b"PWRQSTN", destination=0x32, version=0x02)]
