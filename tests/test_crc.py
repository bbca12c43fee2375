import pytest

from spacebus.crc import ccsds_crc16


def test_standard_check_value():
    assert ccsds_crc16(b"123456789") == 0x29B1


def test_zero_seed_check_value():
    assert ccsds_crc16(b"123456789", seed=0) == 0x31C3


def test_empty_data_returns_seed():
    assert ccsds_crc16(b"", seed=0x1234) == 0x1234
    assert ccsds_crc16(b"") == 0xFFFF


def test_single_byte_from_zero_seed_is_table_entry():
    # Table entries 1 and 0x10 are fixed by the polynomial table.
    assert ccsds_crc16(b"\x01", seed=0) == 0x1021
    assert ccsds_crc16(b"\x10", seed=0) == 0x1231


@pytest.mark.parametrize("payload", [b"a", b"hello world", bytes(range(200))])
def test_appending_crc_gives_zero_residue(payload):
    crc = ccsds_crc16(payload)
    assert ccsds_crc16(payload + crc.to_bytes(2, "big")) == 0


@pytest.mark.parametrize("bias", [0, 1, 7])
def test_incremental_computation(bias):
    first, second = b"spacebus", b"packet data"
    partial = ccsds_crc16(first, bias=bias)
    assert ccsds_crc16(second, seed=partial, bias=bias) == ccsds_crc16(
        first + second, bias=bias
    )


def test_bias_changes_result():
    assert ccsds_crc16(b"abc", bias=1) != ccsds_crc16(b"abc")
    assert ccsds_crc16(b"abc", bias=1) == (
        ccsds_crc16(b"c", seed=ccsds_crc16(b"ab", bias=1), bias=1)
    )


def test_result_fits_sixteen_bits():
    for length in range(0, 64, 7):
        assert 0 <= ccsds_crc16(bytes([0xFF] * length), bias=0xFF) <= 0xFFFF


def test_accepts_iterable_of_ints():
    assert ccsds_crc16([0x31, 0x32, 0x33]) == ccsds_crc16(b"123")