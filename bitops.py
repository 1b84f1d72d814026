from typing import Iterable

from errors import TruncatedData


class BitWriter:
    """Bit-packing writer.

    Accumulates individual bits into bytes, most significant bit first,
    and buffers them until flushed.

    :ivar buffer: Internal byte buffer holding fully written bytes.
    :type buffer: bytearray
    :ivar bit_buffer: 8-bit scratch register for accumulating pending bits.
    :type bit_buffer: int
    :ivar bit_count: Number of valid bits currently stored in ``bit_buffer`` (0-7).
    :type bit_count: int
    """

    def __init__(self):
        """Initialize an empty bit writer.

        :returns: None
        :rtype: None
        """
        self.buffer = bytearray()
        self.bit_buffer = 0
        self.bit_count = 0

    def write_bit(self, bit: int):
        """Append a single bit.

        :param bit: ``0`` or ``1``.
        :type bit: int
        :returns: None
        :rtype: None
        """
        self.bit_buffer = (self.bit_buffer << 1) | (bit & 1)
        self.bit_count += 1
        if self.bit_count == 8:
            self.buffer.append(self.bit_buffer)
            self.bit_buffer = 0
            self.bit_count = 0

    def write_bits(self, value: int, nbits: int):
        """Write the lowest ``nbits`` of ``value`` to the buffer, MSB first.

        :param value: Integer whose bits will be written.
        :type value: int
        :param nbits: Number of bits from ``value`` to write.
        :type nbits: int
        :returns: None
        :rtype: None
        """
        for i in range(nbits - 1, -1, -1):
            self.write_bit((value >> i) & 1)

    def write_bit_string(self, bits: Iterable):
        """Write a sequence of bits in order.

        :param bits: Bits as ``0``/``1`` integers or ``'0'``/``'1'`` characters.
        :type bits: Iterable
        :returns: None
        :rtype: None
        :raises ValueError: If an element is not a bit.
        """
        for bit in bits:
            value = int(bit)
            if value not in (0, 1):
                raise ValueError(f"Not a bit: {bit!r}")
            self.write_bit(value)

    def align(self):
        """Zero-fill pending bits up to the next byte boundary.

        :returns: None
        :rtype: None
        """
        if self.bit_count > 0:
            self.bit_buffer <<= (8 - self.bit_count)
            self.buffer.append(self.bit_buffer)
            self.bit_buffer = 0
            self.bit_count = 0

    def flush(self) -> bytes:
        """Flush remaining bits (if any) and return the full byte buffer.

        Any partial byte in ``bit_buffer`` is padded with zeros to complete the
        byte before being appended.

        :returns: The accumulated bytes written so far.
        :rtype: bytes
        """
        self.align()
        return bytes(self.buffer)


class BitReader:
    """Bit-unpacking reader.

    Reads arbitrary bit lengths from a bytes-like object, most significant
    bit of each byte first.

    :ivar data: Input data to read bits from.
    :type data: bytes
    :ivar pos: Current position in ``data`` (byte index).
    :type pos: int
    :ivar bit_buffer: Scratch register holding the current source byte.
    :type bit_buffer: int
    :ivar bit_count: Number of unread bits remaining in ``bit_buffer`` (0-8).
    :type bit_count: int
    """

    def __init__(self, data: bytes):
        """Create a bit reader for the given input ``data``.

        :param data: Source data to read from.
        :type data: bytes
        :returns: None
        :rtype: None
        """
        self.data = data
        self.pos = 0
        self.bit_buffer = 0
        self.bit_count = 0

    def read_bit(self) -> int:
        """Read the next bit.

        :returns: ``0`` or ``1``.
        :rtype: int
        :raises TruncatedData: If the end of data has been reached.
        """
        if self.bit_count == 0:
            if self.pos >= len(self.data):
                raise TruncatedData("Unexpected end of data")
            self.bit_buffer = self.data[self.pos]
            self.pos += 1
            self.bit_count = 8
        self.bit_count -= 1
        return (self.bit_buffer >> self.bit_count) & 1

    def read_bits(self, nbits: int) -> int:
        """Read ``nbits`` bits from the stream and return them as an integer.

        Bits are returned MSB-first in the integer.

        :param nbits: Number of bits to read.
        :type nbits: int
        :returns: The integer value composed of the next ``nbits`` bits.
        :rtype: int
        :raises TruncatedData: If the end of data is reached before reading ``nbits``.
        """
        result = 0
        for _ in range(nbits):
            result = (result << 1) | self.read_bit()
        return result

    def read_bit_string(self, nbits: int) -> str:
        """Read ``nbits`` bits as a string of ``'0'``/``'1'`` characters.

        :param nbits: Number of bits to read.
        :type nbits: int
        :returns: The bits in stream order.
        :rtype: str
        :raises TruncatedData: If the end of data is reached before reading ``nbits``.
        """
        return "".join("1" if self.read_bit() else "0" for _ in range(nbits))

    def align(self):
        """Discard unread bits of the current byte.

        :returns: None
        :rtype: None
        """
        self.bit_count = 0


def packed_size(nbits: int) -> int:
    """Bytes needed to hold ``nbits`` packed bits."""
    return (nbits + 7) // 8


def pack_bits(bits: Iterable) -> bytes:
    """Pack a bit sequence into ``ceil(len / 8)`` bytes.

    The first bit lands in the most significant position of the first
    byte. Unused trailing bits of the last byte are zero.

    :param bits: Bits as ``0``/``1`` integers or ``'0'``/``'1'`` characters.
    :type bits: Iterable
    :returns: Packed bytes.
    :rtype: bytes
    """
    writer = BitWriter()
    writer.write_bit_string(bits)
    return writer.flush()


def unpack_bits(data: bytes, nbits: int) -> str:
    """Recover exactly ``nbits`` bits from packed ``data``.

    Padding beyond ``nbits`` in the final byte is ignored.

    :param data: Packed bytes produced by :func:`pack_bits`.
    :type data: bytes
    :param nbits: Logical number of bits stored in ``data``.
    :type nbits: int
    :returns: The bits as a string of ``'0'``/``'1'`` characters.
    :rtype: str
    :raises TruncatedData: If ``data`` holds fewer than ``ceil(nbits / 8)`` bytes.
    """
    needed = packed_size(nbits)
    if len(data) < needed:
        raise TruncatedData(
            f"{nbits} bits need {needed} bytes, only {len(data)} available"
        )
    return BitReader(data).read_bit_string(nbits)
