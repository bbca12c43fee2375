import time

import pytest

from spacebus.ccsds import create_packet
from spacebus.datalink import DataLink


def _wait_for(predicate, timeout=3.0):
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if predicate():
            return True
        time.sleep(0.01)
    return predicate()


@pytest.fixture
def server():
    link = DataLink(address="127.0.0.1", port=0)
    link.bind()
    link.start()
    yield link
    link.close()


def _client_for(server, **kwargs):
    _, port = server.local_address
    return DataLink(address="127.0.0.1", port=port, **kwargs)


def test_packet_round_trip(server):
    packet = create_packet(1, 0, b"\x03\x04")
    with _client_for(server) as client:
        client.send(packet)
        assert _wait_for(lambda: len(server.receive_queue) == 1)
    assert server.drain() == [packet]
    assert server.received_count == 1


def test_packets_arrive_in_order(server):
    first = create_packet(1, 0, b"\x01")
    second = create_packet(1, 1, b"\x02")
    with _client_for(server) as client:
        client.send(first)
        client.send(second)
        assert _wait_for(lambda: len(server.receive_queue) == 2)
    assert server.drain() == [first, second]


def test_send_counts_and_returns_length(server):
    packet = create_packet(1, 0, b"\x03\x04")
    with _client_for(server) as client:
        assert client.send(packet) == len(packet)
        client.send(packet)
        assert client.sent_count == 2


def test_drain_empties_queue(server):
    with _client_for(server) as client:
        client.send(b"abc")
        assert _wait_for(lambda: len(server.receive_queue) == 1)
    assert server.drain() == [b"abc"]
    assert server.drain() == []


def test_packet_rejected_when_queue_full():
    link = DataLink(address="127.0.0.1", port=0, queue_capacity=4)
    link.bind()
    link.start()
    try:
        with _client_for(link) as client:
            client.send(b"0123456789")
            assert _wait_for(lambda: link.rejected_count == 1)
        assert link.drain() == []
        assert link.received_count == 0
    finally:
        link.close()


def test_send_after_close_fails(server):
    client = _client_for(server)
    with client:
        pass
    with pytest.raises(OSError):
        client.send(b"abc")


def test_close_is_idempotent():
    link = DataLink(address="127.0.0.1", port=0)
    link.bind()
    link.start()
    link.close()
    link.close()
    with pytest.raises(OSError):
        link.send(b"x")