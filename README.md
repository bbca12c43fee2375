# spacebus

A small flight-software style bus for CCSDS space packets.

## Modules

- `spacebus.ccsds` builds, encodes, decodes and formats CCSDS packets. The packets have a 6-byte primary header. It provides `PrimaryHeader`, `Packet`, `create_packet`, `format_packet` and `PacketError`.
- `spacebus.crc` computes the CCSDS CRC-16 (polynomial 0x1021) with `ccsds_crc16(data, seed=0xFFFF, bias=0)`.
- `spacebus.endian` provides `swap`, `host_to_network` and `network_to_host` for values up to 64 bits. Wider values raise `ValueError`.
- `spacebus.packet_queue` provides `PacketQueue`, a thread-safe FIFO of byte packets. The queue is bounded both by total bytes and by element count, and a packet that does not fit raises `QueueFullError`. Iterating over a queue drains it.
- `spacebus.comparators` provides `compare` for threshold checks (strictly smaller or strictly greater, with equality optionally allowed) and `compare_equal`.
- `spacebus.osal` provides `Semaphore` with millisecond timeouts, `start_thread` to start a daemon thread, and `sleep_ms`.
- `spacebus.datalink` provides `DataLink`, a UDP endpoint with a background receive thread. It can be used as a context manager.
- `spacebus.router` provides `Router`, which queues published packets and hands each one to the handler subscribed to its APID. A router takes at most 6 subscribers.
- `spacebus.app1` provides `App1`, an example application subscribed to APID 1. It queues the packets it receives and decodes them on each `execute`.
- `spacebus.maestro` provides `Maestro`, the scheduler that owns the router and the application. It wakes once per period (1000 ms by default). It runs the router in a slot from 10 ms to 100 ms, then the application in a slot from 110 ms to 210 ms. A process that has not finished when its slot ends counts as an overrun. After five overruns in a row in one slot, the maestro stops running.
- `spacebus.config` holds the constants: APIDs, queue sizes, slot timings, and the data link address and port.

## Installing

```
pip install .
```

To run the test suite as well:

```
pip install .[test]
pytest
```

## Running

Start the server. It binds a UDP socket to 127.0.0.1, port 4163, and runs the maestro:

```
spacebus-server
```

In another terminal, start the client:

```
spacebus-client
```

The client counts periods of one second. Starting at period 5, it sends a telecommand to APID 1 every fifth period. Each telecommand carries two data bytes, `sequence_count + 3` and `sequence_count + 4`. The client also prints every packet it sends.

On the server side, the router passes each received packet to the application. The application records the packet with the `logging` module at INFO level. The server command does not configure logging, so these records are not shown unless the caller sets up a handler.

Both commands accept these options:

- `--address`
- `--port`
- `--period-ms`
- `--cycles`, which stops the command after that many periods. Without it, the client runs until interrupted, and the server runs until the maestro stops or it is interrupted.

## Using the library

```python
from spacebus.ccsds import Packet, create_packet, format_packet
from spacebus.crc import ccsds_crc16

raw = create_packet(apid=1, sequence_count=0, data=b"\x03\x04", is_tc=True)
packet = Packet.decode(raw)
print(format_packet(packet))
print(hex(ccsds_crc16(raw, 0xFFFF, 0)))
```

```python
from spacebus.packet_queue import PacketQueue, QueueFullError

queue = PacketQueue(capacity=16, max_elements=4)
queue.add(b"abc")
try:
    queue.add(b"x" * 32)
except QueueFullError:
    pass
print(queue.get())
```

## What it does not do

- The application only receives packets. It sends nothing back to the client.
- The server never sends packets.
- Packets carry no CRC. `ccsds_crc16` is a standalone function.
- A secondary header is only a flag in the primary header. Its contents are not parsed.