import argparse
import sys

from codec import TEXT_ENCODING, FileCodec
from errors import HuffmanError, ReadFailure

#: Characters trimmed from both ends of input text (control codes and space)
_TRIM_CHARS = "".join(chr(c) for c in range(0x21))


def get_parser():
    """Create and configure the CLI argument parser.

    :returns: Configured argument parser.
    :rtype: argparse.ArgumentParser
    """
    parser = argparse.ArgumentParser(
        prog="huffpack",
        description="Huffman text compressor",
        usage="%(prog)s <e|d> <InputFileName> <OutputFileName>",
    )
    parser.add_argument(
        "mode",
        choices=["e", "d"],
        help="'e' to encode a text file, 'd' to decode an encoded file",
    )
    parser.add_argument("input", help="Input file path")
    parser.add_argument("output", help="Output file path")
    return parser


def read_text(path: str) -> str:
    """Read a text file line by line and return its trimmed contents.

    Line endings are normalized to ``\\n`` and leading and trailing
    whitespace and control characters are removed.

    :param path: Text file to read.
    :type path: str
    :returns: File contents.
    :rtype: str
    :raises ReadFailure: If the file cannot be read.
    """
    try:
        with open(path, "r", encoding=TEXT_ENCODING, newline=None) as f:
            lines = [line.rstrip("\n") for line in f]
    except OSError as e:
        raise ReadFailure(f"Cannot read {path}: {e}") from e
    return "\n".join(lines).strip(_TRIM_CHARS)


def _fmt_bytes(n: int) -> str:
    """Format a byte count into a human-readable string.

    :param n: Number of bytes.
    :type n: int
    :returns: Human-readable string.
    :rtype: str
    """
    for unit in ['', 'Ki', 'Mi', 'Gi', 'Ti']:
        if abs(n) < 1024:
            return f"{n:.2f} {unit}B"
        n /= 1024
    return f"{n:.2f} PiB"


def encode_command(input_path: str, output_path: str) -> None:
    """Encode a text file into the Huffman file format.

    :param input_path: Text file to encode.
    :type input_path: str
    :param output_path: Destination for the encoded file.
    :type output_path: str
    :returns: None
    :rtype: None
    :raises HuffmanError: If reading, encoding or writing fails.
    """
    text = read_text(input_path)
    data = FileCodec().encode_file(text, output_path)
    print("Size before compression: ", _fmt_bytes(len(text)))
    print("Size after compression: ", _fmt_bytes(len(data)))
    print(f"Compression ratio: {len(text) / len(data):.2f}")


def decode_command(input_path: str, output_path: str) -> None:
    """Decode a Huffman file back into text.

    :param input_path: Encoded file.
    :type input_path: str
    :param output_path: Destination for the recovered text.
    :type output_path: str
    :returns: None
    :rtype: None
    :raises HuffmanError: If reading, decoding or writing fails.
    """
    text = FileCodec().decode_file(input_path, output_path)
    print("Decoded size: ", _fmt_bytes(len(text)))


def main(argv=None) -> int:
    """Entry point for the CLI tool.

    :param argv: Arguments to parse; defaults to ``sys.argv[1:]``.
    :type argv: List[str] | None
    :returns: Process exit status.
    :rtype: int
    """
    parser = get_parser()
    args = parser.parse_args(argv)

    try:
        if args.mode == "e":
            encode_command(args.input, args.output)
        else:
            decode_command(args.input, args.output)
    except HuffmanError as e:
        print(f"[!] {e}", file=sys.stderr)
        return 1
    print("Operation completed successfully!")
    return 0


if __name__ == "__main__":
    sys.exit(main())
