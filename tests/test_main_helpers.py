import pytest


def test_fmt_bytes(m):
    assert m._fmt_bytes(0) == "0.00 B"
    assert m._fmt_bytes(1024).endswith("KiB")


def test_read_text_normalizes_and_trims(m, text_file):
    assert m.read_text(str(text_file)) == "abracadabra\nbar"


def test_read_text_keeps_inner_whitespace(m, tmp_path):
    path = tmp_path / "in.txt"
    path.write_bytes(b"  a \t b\n\nc  \n")
    assert m.read_text(str(path)) == "a \t b\n\nc"


def test_read_text_missing_file_raises(m, tmp_path):
    from errors import ReadFailure

    with pytest.raises(ReadFailure):
        m.read_text(str(tmp_path / "nope.txt"))


def test_cli_parser_accepts_modes(m):
    parser = m.get_parser()
    ns = parser.parse_args(["e", "in.txt", "out.huf"])
    assert (ns.mode, ns.input, ns.output) == ("e", "in.txt", "out.huf")
    ns2 = parser.parse_args(["d", "out.huf", "in.txt"])
    assert ns2.mode == "d"


@pytest.mark.parametrize(
    "argv", [["x", "in", "out"], ["e", "in"], ["e", "in", "out", "extra"], []]
)
def test_cli_parser_rejects_bad_usage(m, argv, capsys):
    with pytest.raises(SystemExit):
        m.get_parser().parse_args(argv)
    assert "usage:" in capsys.readouterr().err
