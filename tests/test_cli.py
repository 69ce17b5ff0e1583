from PIL import Image

from bpktool.cli import main

from builders import lz10_literals, make_bpk, make_mii, make_sheet

def write_letter(tmp_path, compress=False):
    data = make_bpk([
        ("MIISTD1", make_mii()),
        ("SHEET1", make_sheet([bytes([0x00, 0x01, 0x40, 0x00]), bytes([0x00, 0x08, 0x40, 0x00])])),
        ("THUMB2", b"not really a jpeg"),
        ("COLSLT1", b"\x01\x02"),
    ])
    path = tmp_path / "letter.bpk"
    path.write_bytes(lz10_literals(data) if compress else data)
    return path, data

def test_list(tmp_path, capsys):
    path, _ = write_letter(tmp_path)
    assert main([str(path)]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert lines[0].split('\t') == ["Offset", "Length", "Checksum", "Name"]
    assert [line.split('\t')[3] for line in lines[1:]] == ["MIISTD1", "SHEET1", "THUMB2", "COLSLT1"]
    assert lines[1].split('\t')[:2] == [hex(0x40 + 4 * 20), "96"]

def test_decompress(tmp_path):
    path, data = write_letter(tmp_path, compress=True)
    out = tmp_path / "out.bpk"
    assert main([str(path), "--decompress", str(out)]) == 0
    assert out.read_bytes() == data

def test_extract(tmp_path):
    path, _ = write_letter(tmp_path)
    outdir = tmp_path / "blocks"
    assert main([str(path), "--extract", str(outdir)]) == 0
    assert (outdir / "COLSLT10.bin").read_bytes() == b"\x01\x02"
    assert (outdir / "THUMB20.bin").read_bytes() == b"not really a jpeg"
    assert (outdir / "MIISTD10.bin").read_bytes() == make_mii()

def test_render(tmp_path, capsys):
    path, _ = write_letter(tmp_path)
    outdir = tmp_path / "png"
    assert main([str(path), "--render", str(outdir), "--scale", "2"]) == 0
    with Image.open(outdir / "sheet0.png") as img:
        assert img.size == (512, 512)
    assert (outdir / "thumb0.bin").read_bytes() == b"not really a jpeg"
    assert "Unreadable thumbnail 0" in capsys.readouterr().err

def test_bad_file(tmp_path, capsys):
    path = tmp_path / "junk.bpk"
    path.write_bytes(b"this is not a letter")
    assert main([str(path)]) == 1
    assert "unknown compression type" in capsys.readouterr().err

def test_compressed_input_decompressed_once(tmp_path, monkeypatch):
    import bpktool.bpk
    import bpktool.lzss

    calls = []
    real = bpktool.lzss.decompress
    def counting(data):
        calls.append(len(data))
        return real(data)
    monkeypatch.setattr(bpktool.lzss, "decompress", counting)
    monkeypatch.setattr(bpktool.bpk, "decompress", counting)

    path, data = write_letter(tmp_path, compress=True)
    out = tmp_path / "out.bpk"
    assert main([str(path), "--decompress", str(out), "--extract", str(tmp_path / "blocks")]) == 0
    assert out.read_bytes() == data
    assert len(calls) == 1
