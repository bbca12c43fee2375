"""Byte order conversion for values up to 64 bits wide."""

from . import config

_MAX_WIDTH = 8


def swap(data: bytes) -> bytes:
    """Return ``data`` with its byte order reversed.

    Raises ValueError for values wider than 64 bits.
    """
    raw = bytes(data)
    if len(raw) > _MAX_WIDTH:
        raise ValueError(f"cannot swap {len(raw) * 8} bits: more than 64 bits")
    return raw[::-1]


def host_to_network(data: bytes) -> bytes:
    """Convert a value from host byte order to network (big-endian) order."""
    return swap(data) if config.IS_LITTLE_ENDIAN else _checked(data)


def network_to_host(data: bytes) -> bytes:
    """Convert a value from network (big-endian) order to host byte order."""
    return swap(data) if config.IS_LITTLE_ENDIAN else _checked(data)


def _checked(data: bytes) -> bytes:
    raw = bytes(data)
    if len(raw) > _MAX_WIDTH:
        raise ValueError(f"cannot convert {len(raw) * 8} bits: more than 64 bits")
    return raw