"""CCSDS space packets: primary header encoding and packet helpers.

Primary header layout (6 bytes, big-endian):
  3 bits version number, 1 bit packet type (0 TM, 1 TC),
  1 bit secondary header flag, 11 bits application process id,
  2 bits sequence flags (0b11 stand alone), 14 bits sequence count,
  16 bits data length (length of the data field).
"""

import struct
from dataclasses import dataclass

VERSION_NUMBER = 0
STANDALONE_PACKET = 0b11
HEADER_SIZE = 6

_HEADER = struct.Struct(">HHH")
_APID_MASK = 0x7FF
_COUNT_MASK = 0x3FFF
_MAX_DATA_LENGTH = 0xFFFF


class PacketError(ValueError):
    """Raised for packets that cannot be built or parsed."""


def _check_range(name: str, value: int, bits: int) -> None:
    if not 0 <= value < (1 << bits):
        raise PacketError(f"{name} {value} does not fit in {bits} bits")


@dataclass(frozen=True)
class PrimaryHeader:
    """CCSDS packet primary header."""

    apid: int
    sequence_count: int
    data_length: int
    is_tc: bool = True
    has_secondary_header: bool = False
    version_number: int = VERSION_NUMBER
    sequence_flag: int = STANDALONE_PACKET

    def __post_init__(self) -> None:
        _check_range("version number", self.version_number, 3)
        _check_range("apid", self.apid, 11)
        _check_range("sequence flag", self.sequence_flag, 2)
        _check_range("sequence count", self.sequence_count, 14)
        _check_range("data length", self.data_length, 16)

    def encode(self) -> bytes:
        """Return the 6-byte wire form of the header."""
        identification = (
            (self.version_number << 13)
            | (int(self.is_tc) << 12)
            | (int(self.has_secondary_header) << 11)
            | self.apid
        )
        sequence = (self.sequence_flag << 14) | self.sequence_count
        return _HEADER.pack(identification, sequence, self.data_length)

    @classmethod
    def decode(cls, raw: bytes) -> "PrimaryHeader":
        """Parse a header from the first 6 bytes of ``raw``."""
        if len(raw) < HEADER_SIZE:
            raise PacketError(
                f"{len(raw)} bytes are too short for a {HEADER_SIZE}-byte header"
            )
        identification, sequence, data_length = _HEADER.unpack_from(raw)
        return cls(
            apid=identification & _APID_MASK,
            sequence_count=sequence & _COUNT_MASK,
            data_length=data_length,
            is_tc=bool((identification >> 12) & 1),
            has_secondary_header=bool((identification >> 11) & 1),
            version_number=identification >> 13,
            sequence_flag=sequence >> 14,
        )


@dataclass(frozen=True)
class Packet:
    """A primary header followed by its data field."""

    header: PrimaryHeader
    data: bytes = b""

    def encode(self) -> bytes:
        """Return the wire form of the packet."""
        return self.header.encode() + bytes(self.data)

    @classmethod
    def decode(cls, raw: bytes) -> "Packet":
        """Parse a packet; bytes past the declared data length are ignored."""
        header = PrimaryHeader.decode(raw)
        end = HEADER_SIZE + header.data_length
        if len(raw) < end:
            raise PacketError(
                f"packet declares {header.data_length} data bytes "
                f"but holds {len(raw) - HEADER_SIZE}"
            )
        return cls(header, bytes(raw[HEADER_SIZE:end]))


def create_packet(
    apid: int,
    sequence_count: int,
    data: bytes,
    is_tc: bool = True,
    has_secondary_header: bool = False,
    capacity: int | None = None,
) -> bytes:
    """Build a stand-alone packet and return its wire form.

    The apid and sequence count are truncated to their field widths.
    Raises PacketError if the packet would exceed ``capacity`` bytes.
    """
    payload = bytes(data)
    if len(payload) > _MAX_DATA_LENGTH:
        raise PacketError(f"{len(payload)} data bytes exceed the 16-bit length field")
    if capacity is not None and capacity < len(payload) + HEADER_SIZE:
        raise PacketError(
            f"packet of {len(payload) + HEADER_SIZE} bytes "
            f"does not fit in {capacity} bytes"
        )
    header = PrimaryHeader(
        apid=apid & _APID_MASK,
        sequence_count=sequence_count & _COUNT_MASK,
        data_length=len(payload),
        is_tc=bool(is_tc),
        has_secondary_header=bool(has_secondary_header),
    )
    return Packet(header, payload).encode()


def format_packet(packet: "Packet | bytes") -> str:
    """Return a readable multi-line description of a packet."""
    if not isinstance(packet, Packet):
        packet = Packet.decode(packet)
    header = packet.header
    lines = [
        "CCSDS packet:",
        f"\t versionNumber: {header.version_number}",
        f"\t packetType: {int(header.is_tc)}",
        f"\t secondaryHeader: {int(header.has_secondary_header)}",
        f"\t apid: {header.apid}",
        f"\t sequenceFlag: {header.sequence_flag}",
        f"\t sequenceCount: {header.sequence_count}",
        f"\t dataLength: {header.data_length}",
        "\t data:" + "".join(f" {byte}" for byte in packet.data),
    ]
    return "\n".join(lines)