def test_encode_and_decode_roundtrip(m, text_file, tmp_path, capsys):
    enc = tmp_path / "out.huf"
    dec = tmp_path / "out.txt"

    assert m.main(["e", str(text_file), str(enc)]) == 0
    out = capsys.readouterr().out
    assert "Compression ratio" in out
    assert "Operation completed successfully!" in out
    assert enc.stat().st_size > 0

    assert m.main(["d", str(enc), str(dec)]) == 0
    assert dec.read_bytes() == b"abracadabra\nbar"


def test_bad_usage_performs_no_operation(m, text_file, tmp_path):
    out = tmp_path / "out.huf"
    try:
        m.main(["x", str(text_file), str(out)])
    except SystemExit as e:
        assert e.code != 0
    assert not out.exists()


def test_missing_input_reports_error(m, tmp_path, capsys):
    status = m.main(["e", str(tmp_path / "nope.txt"), str(tmp_path / "o.huf")])
    captured = capsys.readouterr()
    assert status == 1
    assert captured.err.startswith("[!]")
    assert "successfully" not in captured.out


def test_empty_input_reports_error(m, tmp_path, capsys):
    src = tmp_path / "blank.txt"
    src.write_text("  \n\n", encoding="latin-1")
    status = m.main(["e", str(src), str(tmp_path / "o.huf")])
    assert status == 1
    assert "empty" in capsys.readouterr().err


def test_corrupt_input_reports_error(m, tmp_path, capsys):
    src = tmp_path / "bad.huf"
    src.write_bytes(b"\x02\x61")
    status = m.main(["d", str(src), str(tmp_path / "o.txt")])
    assert status == 1
    assert capsys.readouterr().err.startswith("[!]")
