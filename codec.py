from typing import Dict, Tuple

from bitops import BitReader, BitWriter, pack_bits, packed_size, unpack_bits
from errors import (
    CorruptData,
    InvalidInput,
    ReadFailure,
    TruncatedData,
    WriteFailure,
)
from huffman import build_code_table

MAX_ENTRIES = 255  #: Entry count is stored in one byte
MAX_CODE_LENGTH = 255  #: Code bit-length is stored in one byte
MAX_PAYLOAD_BITS = 255  #: Payload bit-length is stored in one byte
MAX_SYMBOL = 0xFF  #: Symbols are stored as one byte
TEXT_ENCODING = "latin-1"  #: Maps bytes 0-255 one-to-one onto characters


def write_code_table(table: Dict[str, str]) -> bytes:
    """Serialize a code table as the file header.

    Layout: entry count (1 byte), then per symbol in ascending order the
    symbol (1 byte), the code bit-length (1 byte) and the code bits packed
    into ``ceil(length / 8)`` bytes.

    :param table: Mapping from symbol to bit-string code.
    :type table: Dict[str, str]
    :returns: Serialized header bytes.
    :rtype: bytes
    :raises InvalidInput: If the table does not fit the single-byte fields.
    """
    if len(table) > MAX_ENTRIES:
        raise InvalidInput(
            f"{len(table)} distinct symbols, at most {MAX_ENTRIES} supported"
        )
    writer = BitWriter()
    writer.write_bits(len(table), 8)
    for symbol in sorted(table):
        code = table[symbol]
        if ord(symbol) > MAX_SYMBOL:
            raise InvalidInput(f"Symbol {symbol!r} does not fit in one byte")
        if not code or len(code) > MAX_CODE_LENGTH:
            raise InvalidInput(
                f"Code length {len(code)} for {symbol!r} outside 1..{MAX_CODE_LENGTH}"
            )
        writer.write_bits(ord(symbol), 8)
        writer.write_bits(len(code), 8)
        writer.write_bit_string(code)
        writer.align()
    return writer.flush()


def read_code_table(data: bytes) -> Tuple[Dict[str, str], int]:
    """Deserialize a header written by :func:`write_code_table`.

    :param data: Bytes starting with the header.
    :type data: bytes
    :returns: The code table and the number of header bytes consumed.
    :rtype: Tuple[Dict[str, str], int]
    :raises TruncatedData: If ``data`` ends inside the header.
    :raises CorruptData: If the table is not a valid prefix-free code.
    """
    reader = BitReader(data)
    count = reader.read_bits(8)
    table: Dict[str, str] = {}
    for _ in range(count):
        symbol = chr(reader.read_bits(8))
        length = reader.read_bits(8)
        if length == 0:
            raise CorruptData(f"Zero-length code for {symbol!r}")
        if symbol in table:
            raise CorruptData(f"Duplicate symbol {symbol!r} in code table")
        table[symbol] = reader.read_bit_string(length)
        reader.align()
    _check_prefix_free(table)
    return table, reader.pos


def _check_prefix_free(table: Dict[str, str]):
    codes = sorted(table.values())
    for shorter, longer in zip(codes, codes[1:]):
        if longer.startswith(shorter):
            raise CorruptData(
                f"Code {shorter} is a prefix of {longer}; table is not prefix-free"
            )


def decode_bits(bits: str, table: Dict[str, str]) -> str:
    """Walk payload bits against ``table`` and emit the decoded symbols.

    Bits are accumulated until they exactly match a code, at which point
    the symbol is emitted and the accumulator is reset.

    :param bits: Payload bits as ``'0'``/``'1'`` characters.
    :type bits: str
    :param table: Prefix-free mapping from symbol to code.
    :type table: Dict[str, str]
    :returns: Decoded text.
    :rtype: str
    :raises CorruptData: If the bits do not resolve into whole codes.
    """
    lookup = {code: symbol for symbol, code in table.items()}
    if not lookup:
        if bits:
            raise CorruptData("Payload present but code table is empty")
        return ""
    longest = max(len(code) for code in lookup)

    output = []
    accumulator = ""
    for bit in bits:
        accumulator += bit
        symbol = lookup.get(accumulator)
        if symbol is not None:
            output.append(symbol)
            accumulator = ""
        elif len(accumulator) >= longest:
            raise CorruptData(f"Invalid Huffman code {accumulator}")
    if accumulator:
        raise CorruptData(
            f"{len(accumulator)} trailing bits do not form a complete code"
        )
    return "".join(output)


class FileCodec:
    """Huffman text encoder/decoder for the single-byte file format.

    File layout: the code table header (see :func:`write_code_table`),
    the payload bit-length (1 byte), then the payload bits packed into
    ``ceil(bit-length / 8)`` bytes.

    Every call builds or reads its own code table; nothing is kept
    between calls.
    """

    def encode(self, text: str) -> bytes:
        """Encode ``text`` into the file format.

        Empty text is rejected here, before any tree is built.

        :param text: Non-empty text made of characters ``U+0000``-``U+00FF``.
        :type text: str
        :returns: Encoded file contents.
        :rtype: bytes
        :raises InvalidInput: If ``text`` is empty, holds a character outside
            the single-byte range, or overflows a format limit.
        """
        if not text:
            raise InvalidInput("Cannot encode empty text")
        for ch in text:
            if ord(ch) > MAX_SYMBOL:
                raise InvalidInput(f"Character {ch!r} does not fit in one byte")

        table = build_code_table(text)
        payload = "".join(table[ch] for ch in text)
        if len(payload) > MAX_PAYLOAD_BITS:
            raise InvalidInput(
                f"Encoded payload is {len(payload)} bits, "
                f"at most {MAX_PAYLOAD_BITS} supported"
            )

        header = write_code_table(table)
        return header + bytes([len(payload)]) + pack_bits(payload)

    def decode(self, data: bytes) -> str:
        """Decode file contents produced by :meth:`encode`.

        :param data: Encoded file contents.
        :type data: bytes
        :returns: The original text.
        :rtype: str
        :raises TruncatedData: If ``data`` ends before a declared length.
        :raises CorruptData: If the header or payload is malformed, or bytes
            follow the payload.
        """
        table, pos = read_code_table(data)
        if pos >= len(data):
            raise TruncatedData("Missing payload bit-length")
        nbits = data[pos]
        packed = data[pos + 1:]
        bits = unpack_bits(packed, nbits)
        if len(packed) > packed_size(nbits):
            raise CorruptData(
                f"{len(packed) - packed_size(nbits)} unexpected bytes after payload"
            )
        return decode_bits(bits, table)

    def encode_file(self, text: str, output_path: str) -> bytes:
        """Encode ``text`` and write the result to ``output_path``.

        Nothing is written if encoding fails.

        :param text: Text to encode.
        :type text: str
        :param output_path: Destination file path.
        :type output_path: str
        :returns: The bytes written.
        :rtype: bytes
        :raises InvalidInput: See :meth:`encode`.
        :raises WriteFailure: If the destination cannot be written.
        """
        data = self.encode(text)
        try:
            with open(output_path, "wb") as out:
                out.write(data)
        except OSError as e:
            raise WriteFailure(f"Cannot write {output_path}: {e}") from e
        return data

    def decode_file(self, input_path: str, output_path: str) -> str:
        """Decode ``input_path`` and write the recovered text to ``output_path``.

        The text is written with :data:`TEXT_ENCODING`, one byte per symbol.

        :param input_path: Encoded file path.
        :type input_path: str
        :param output_path: Destination text file path.
        :type output_path: str
        :returns: The recovered text.
        :rtype: str
        :raises ReadFailure: If the input cannot be read.
        :raises WriteFailure: If the destination cannot be written.
        :raises TruncatedData: See :meth:`decode`.
        :raises CorruptData: See :meth:`decode`.
        """
        try:
            with open(input_path, "rb") as f:
                data = f.read()
        except OSError as e:
            raise ReadFailure(f"Cannot read {input_path}: {e}") from e

        text = self.decode(data)
        try:
            with open(output_path, "wb") as out:
                out.write(text.encode(TEXT_ENCODING))
        except OSError as e:
            raise WriteFailure(f"Cannot write {output_path}: {e}") from e
        return text
