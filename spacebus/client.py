"""Client entry point: sends a telecommand to application 1 every few seconds."""

import argparse
from collections.abc import Sequence

from . import config
from .ccsds import HEADER_SIZE, create_packet, format_packet
from .datalink import DataLink
from .osal import sleep_ms

_PERIOD_MS = 1000
_SEND_EVERY = 5


def dummy_payload(sequence_count: int) -> bytes:
    """Return the two data bytes the client sends with packet ``sequence_count``."""
    return bytes([(sequence_count + 3) & 0xFF, (sequence_count + 4) & 0xFF])


def build_packet(sequence_count: int) -> bytes:
    """Build the telecommand for application 1 carrying the dummy payload."""
    payload = dummy_payload(sequence_count)
    return create_packet(
        config.APP1_APID,
        sequence_count,
        payload,
        is_tc=True,
        has_secondary_header=False,
        capacity=HEADER_SIZE + len(payload),
    )


def _positive_int(text: str) -> int:
    value = int(text)
    if value <= 0:
        raise argparse.ArgumentTypeError(f"{text} is not a positive integer")
    return value


def _parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="spacebus-client", description=__doc__)
    parser.add_argument("--address", default=config.DATALINK_ADDRESS)
    parser.add_argument("--port", type=int, default=config.DATALINK_PORT)
    parser.add_argument("--period-ms", type=_positive_int, default=_PERIOD_MS)
    parser.add_argument(
        "--cycles",
        type=_positive_int,
        default=None,
        help="stop after this many periods (default: run forever)",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the client loop, sending a packet every fifth period."""
    args = _parser().parse_args(argv)
    print("CLIENT")
    print(f"size of CCSDS_PrimaryHeader_t: {HEADER_SIZE}")

    sequence_count = 0
    up_time = 0
    with DataLink(args.address, args.port) as link:
        try:
            while args.cycles is None or up_time < args.cycles:
                print(f"client {up_time}")
                if up_time > 0 and up_time % _SEND_EVERY == 0:
                    print("time to send packet")
                    packet = build_packet(sequence_count)
                    print(format_packet(packet))
                    link.send(packet)
                    sequence_count = (sequence_count + 1) & 0xFFFF
                sleep_ms(args.period_ms)
                up_time += 1
        except KeyboardInterrupt:
            pass
    print("END")
    return 0