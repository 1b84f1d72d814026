import pytest

from bitops import BitWriter, BitReader, pack_bits, unpack_bits
from errors import TruncatedData


def test_bitwriter_write_bits_and_flush_basic():
    bw = BitWriter()
    bw.write_bits(0b1010, 4)
    bw.write_bits(0b11110000, 8)
    out = bw.flush()
    assert isinstance(out, (bytes, bytearray))
    assert len(out) == 2
    assert out[0] == 0b10101111
    assert out[1] == 0b00000000


def test_bitwriter_align_pads_with_zeros():
    bw = BitWriter()
    bw.write_bit_string("1")
    bw.align()
    bw.write_bits(0x41, 8)
    out = bw.flush()
    assert out == bytes([0b10000000, 0x41])


def test_bitwriter_rejects_non_bits():
    bw = BitWriter()
    with pytest.raises(ValueError):
        bw.write_bit_string("102")


def test_bitreader_read_bits_and_align():
    data = bytes([0b11001010, 0xFF, 0x00])
    br = BitReader(data)
    assert br.read_bits(3) == 0b110
    assert br.read_bit_string(2) == "01"
    br.align()
    assert br.read_bits(8) == 0xFF
    assert br.pos == 2


def test_bitreader_truncated_on_insufficient_bits():
    br = BitReader(b"\xF0")
    with pytest.raises(TruncatedData):
        _ = br.read_bits(9)


def test_truncated_data_is_an_eoferror():
    br = BitReader(b"")
    with pytest.raises(EOFError):
        _ = br.read_bit()


def test_pack_nine_bits_msb_first():
    bits = [1, 0, 1, 1, 0, 0, 0, 0, 1]
    packed = pack_bits(bits)
    assert len(packed) == 2
    assert packed[0] == 0xB0
    assert packed[1] & 0x80 == 0x80
    assert packed[1] == 0x80


def test_unpack_ignores_padding():
    bits = "101100001"
    assert unpack_bits(bytes([0xB0, 0x80]), 9) == bits
    assert unpack_bits(bytes([0xB0, 0xFF]), 9) == bits


def test_pack_accepts_bit_strings_and_empty_input():
    assert pack_bits("10000001") == bytes([0x81])
    assert pack_bits("") == b""
    assert unpack_bits(b"", 0) == ""


def test_unpack_truncation_detected():
    with pytest.raises(TruncatedData):
        _ = unpack_bits(bytes([0xB0]), 9)
