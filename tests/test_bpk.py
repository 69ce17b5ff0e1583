import struct

import pytest

from bpktool import parse_blocks
from bpktool.bpk import Block, BlockGroups, has_bpk_magic, read_bpk, read_blocks
from bpktool.errors import (BadMagic, ChecksumMismatched, DecompressionFailed, InvalidText,
                            UnexpectedEof)

from builders import lz10_literals, make_bpk

BLOCKS = [
    ("THUMB2", b"\xff\xd8first"),
    ("SHEET1", bytes(range(70))),
    ("THUMB2", b"\xff\xd8second"),
    ("COLSLT1", b"\x01\x02\x03"),
    ("EMPTY", b""),
]

def test_blocks_round_trip():
    blocks = read_blocks(make_bpk(BLOCKS))
    assert blocks == [Block(name, data) for name, data in BLOCKS]

def test_groups_keep_per_name_order():
    groups = parse_blocks(make_bpk(BLOCKS))
    assert isinstance(groups, BlockGroups)
    assert groups["THUMB2"] == [b"\xff\xd8first", b"\xff\xd8second"]
    assert groups["COLSLT1"] == [b"\x01\x02\x03"]
    assert groups["EMPTY"] == [b""]
    assert sorted(groups) == ["COLSLT1", "EMPTY", "SHEET1", "THUMB2"]
    assert groups.get_block("THUMB2", 1) == b"\xff\xd8second"
    with pytest.raises(KeyError):
        groups.get_block("THUMB2", 2)
    with pytest.raises(KeyError):
        groups.get_block("STATIN1")

def test_no_blocks():
    assert parse_blocks(make_bpk([])) == {}

def test_compressed_container():
    raw = make_bpk(BLOCKS)
    assert read_blocks(lz10_literals(raw)) == read_blocks(raw)

def test_payloads_out_of_order():
    a, b = b"first payload", b"second"
    data = bytearray(make_bpk([("A", a), ("B", b)]))
    # swap the payloads around and point the headers at the new places
    base = 0x40 + 2 * 20
    data[base:] = b + a
    struct.pack_into("<I", data, 0x40, base + len(b))
    struct.pack_into("<I", data, 0x40 + 20, base)
    assert read_blocks(bytes(data)) == [Block("A", a), Block("B", b)]

def test_bad_magic():
    # decompresses fine but is not a container
    with pytest.raises(BadMagic):
        read_blocks(lz10_literals(b"not a container"))
    with pytest.raises(BadMagic):
        read_blocks(lz10_literals(b"BPK2" + bytes(0x40)))

def test_neither_container_nor_compressed():
    for data in (b"BPK2" + bytes(0x40), b"", b"\x11\x40\x00\x00\x00BPK"):
        with pytest.raises(DecompressionFailed):
            read_blocks(data)

def test_has_magic():
    assert has_bpk_magic(b"BPK1")
    assert not has_bpk_magic(b"BPK")
    assert not has_bpk_magic(lz10_literals(make_bpk([])))

def test_every_bit_flip_is_caught():
    payload = b"\x00\x10\xff\x80"
    data = make_bpk([("SHEET1", payload)])
    start = len(data) - len(payload)
    for pos in range(start, len(data)):
        for bit in range(8):
            corrupt = bytearray(data)
            corrupt[pos] ^= 1 << bit
            with pytest.raises(ChecksumMismatched):
                read_blocks(bytes(corrupt))

def test_checksum_error_names_block():
    data = make_bpk([("THUMB2", b"ok"), ("SHEET1", b"bad")])
    data = data[:-1] + b"x"
    with pytest.raises(ChecksumMismatched) as exc:
        read_blocks(data)
    assert exc.value.name == "SHEET1"
    assert exc.value.offset == 0x40 + 2 * 20 + 2
    assert exc.value.size == 3

def test_truncated_payload():
    data = make_bpk(BLOCKS)
    for cut in (len(data) - 1, 0x40 + 5 * 20 + 3):
        with pytest.raises(UnexpectedEof):
            read_blocks(data[:cut])

def test_truncated_headers():
    data = make_bpk(BLOCKS)
    for cut in (6, 0x3f, 0x40 + 30):
        with pytest.raises(UnexpectedEof):
            read_blocks(data[:cut])

def test_offset_past_end():
    data = bytearray(make_bpk([("SHEET1", b"abc")]))
    struct.pack_into("<I", data, 0x40, 0xFFFFFF00)
    with pytest.raises(UnexpectedEof):
        read_blocks(bytes(data))

def test_block_count_past_end():
    data = bytearray(make_bpk([("SHEET1", b"abc")]))
    struct.pack_into("<I", data, 4, 1000)
    with pytest.raises(UnexpectedEof):
        read_blocks(bytes(data))

def test_bad_block_name():
    with pytest.raises(InvalidText):
        read_blocks(make_bpk([(b"\xffBAD", b"abc")]))

def test_utf8_block_name():
    name = "CAF\u00c9".encode("utf-8")
    assert read_blocks(make_bpk([(name, b"x")])) == [Block("CAF\u00c9", b"x")]
    assert parse_blocks(make_bpk([(name, b"x")]))["CAF\u00c9"] == [b"x"]

def test_custom_assembler():
    class Names:
        @classmethod
        def from_blocks(cls, blocks):
            return [block.name for block in blocks]

    assert read_bpk(make_bpk(BLOCKS), Names) == [name for name, _ in BLOCKS]
