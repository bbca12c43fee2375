"""Server entry point: runs the maestro and its processes."""

import argparse
from collections.abc import Sequence

from . import config
from .ccsds import HEADER_SIZE
from .datalink import DataLink
from .maestro import Maestro
from .osal import sleep_ms


def _positive_int(text: str) -> int:
    value = int(text)
    if value <= 0:
        raise argparse.ArgumentTypeError(f"{text} is not a positive integer")
    return value


def _parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="spacebus-server", description=__doc__)
    parser.add_argument("--address", default=config.DATALINK_ADDRESS)
    parser.add_argument("--port", type=int, default=config.DATALINK_PORT)
    parser.add_argument(
        "--period-ms", type=_positive_int, default=config.MAESTRO_PERIOD_MS
    )
    parser.add_argument(
        "--cycles",
        type=_positive_int,
        default=None,
        help="stop after this many periods (default: run until rebooted)",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the server until the maestro stops or the cycle limit is reached."""
    args = _parser().parse_args(argv)
    print("SERVER")
    print(f"size of CCSDS_PrimaryHeader_t: {HEADER_SIZE}")

    link = DataLink(args.address, args.port)
    try:
        link.bind()
        maestro = Maestro(link, args.period_ms)
        sleep_ms(100)
        maestro.start()
        try:
            cycles = 0
            while maestro.is_running and (args.cycles is None or cycles < args.cycles):
                sleep_ms(args.period_ms)
                cycles += 1
        except KeyboardInterrupt:
            pass
        finally:
            maestro.stop()
    finally:
        link.close()
    print("END")
    return 0