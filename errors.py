class HuffmanError(Exception):
    """Base class for every failure raised by the Huffman codec."""


class InvalidInput(HuffmanError, ValueError):
    """Input text cannot be encoded.

    Raised for empty text, symbols outside the single-byte range, and
    inputs that overflow the single-byte fields of the file format.
    """


class TruncatedData(HuffmanError, EOFError):
    """A declared length runs past the end of the available bytes."""


class CorruptData(HuffmanError, ValueError):
    """Encoded data does not describe a valid code table or payload."""


class WriteFailure(HuffmanError, OSError):
    """The output destination could not be written."""


class ReadFailure(HuffmanError, OSError):
    """The input source could not be read."""
