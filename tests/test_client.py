import socket

import pytest

from spacebus import config
from spacebus.ccsds import Packet
from spacebus.client import build_packet, dummy_payload, main


@pytest.fixture
def receiver():
    sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
    sock.bind(("127.0.0.1", 0))
    sock.settimeout(2.0)
    yield sock
    sock.close()


def test_dummy_payload_first_packet():
    assert dummy_payload(0) == b"\x03\x04"


def test_dummy_payload_wraps_at_byte():
    payload = dummy_payload(254)
    assert len(payload) == 2
    assert all(0 <= byte <= 0xFF for byte in payload)


def test_build_packet_wire_form():
    assert build_packet(0) == b"\x10\x01\xc0\x00\x00\x02\x03\x04"


def test_build_packet_round_trip():
    packet = Packet.decode(build_packet(9))
    assert packet.header.apid == config.APP1_APID
    assert packet.header.is_tc is True
    assert packet.header.has_secondary_header is False
    assert packet.header.sequence_count == 9
    assert packet.data == dummy_payload(9)


def test_main_sends_on_fifth_cycle(receiver, capsys):
    port = receiver.getsockname()[1]
    result = main(["--address", "127.0.0.1", "--port", str(port), "--cycles", "6", "--period-ms", "1"])
    data, _ = receiver.recvfrom(1024)
    assert result == 0
    assert data == build_packet(0)
    out = capsys.readouterr().out
    assert out.startswith("CLIENT\n")
    assert out.count("time to send packet") == 1


def test_main_increments_sequence_count(receiver):
    port = receiver.getsockname()[1]
    main(["--address", "127.0.0.1", "--port", str(port), "--cycles", "11", "--period-ms", "1"])
    first, _ = receiver.recvfrom(1024)
    second, _ = receiver.recvfrom(1024)
    assert Packet.decode(first).header.sequence_count == 0
    assert Packet.decode(second).header.sequence_count == 1
    assert second == build_packet(1)


def test_main_sends_nothing_before_fifth_cycle(receiver, capsys):
    port = receiver.getsockname()[1]
    result = main(["--address", "127.0.0.1", "--port", str(port), "--cycles", "5", "--period-ms", "1"])
    assert result == 0
    out = capsys.readouterr().out
    assert out.count("time to send packet") == 0
    receiver.settimeout(0.2)
    with pytest.raises(socket.timeout):
        receiver.recvfrom(1024)


def test_main_rejects_non_positive_period():
    with pytest.raises(SystemExit) as excinfo:
        main(["--period-ms", "0"])
    assert excinfo.value.code == 2