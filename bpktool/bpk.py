"""BPK1 container framing.

A BPK1 file is a 0x40 byte header (magic, block count, reserved) followed
by one 20 byte header per block and the block payloads at the offsets
those headers name. Each payload is guarded by a CRC32 variant, see crc.py.

The framing is shared by every document stored in a BPK1. What a given
document does with its blocks is up to an assembler: any object with a
``from_blocks(blocks)`` callable, handed the decoded blocks in header order.
BlockGroups is the generic one, Letter (letter.py) the typed one.
"""

import logging

from collections import namedtuple

from .bpkstructs import MAGIC, BPKHeader
from .crc import check_checksum
from .errors import BadMagic
from .lzss import decompress
from .reader import ByteReader

log = logging.getLogger(__name__)

Block = namedtuple("Block", "name data")
BlockHeader = namedtuple("BlockHeader", "offset size checksum name")

def has_bpk_magic(data):
    return bytes(data[0:4]) == MAGIC

def open_bpk(data):
    """Reader over the raw container, decompressing first if need be."""
    if has_bpk_magic(data):
        return ByteReader(data)

    data = decompress(data)

    if not has_bpk_magic(data):
        raise BadMagic("Bad BPK1 magic after decompression")
    return ByteReader(data)

def read_block_headers(fd):
    header = fd.read_struct(BPKHeader)
    headers = []
    for _ in range(header.count):
        headers.append(BlockHeader(
            offset      = fd.read_u32_le(),
            size        = fd.read_u32_le(),
            checksum    = fd.read_u32_le(),
            name        = fd.read_padded_string(8),
        ))
    return headers

def read_blocks(data):
    fd = open_bpk(data)

    # All headers first; fetching a payload moves the cursor around
    headers = read_block_headers(fd)

    blocks = []
    for head in headers:
        log.debug("Reading %s at offset %d with size %d", head.name, head.offset, head.size)
        fd.seek(head.offset)
        payload = fd.read(head.size)
        check_checksum(head.checksum, payload, head.name, head.offset)
        blocks.append(Block(head.name, payload))
    return blocks

def read_bpk(data, assembler):
    return assembler.from_blocks(read_blocks(data))


class BlockGroups(dict):
    """Block name -> list of payloads, in the order they appear."""

    @classmethod
    def from_blocks(cls, blocks):
        groups = cls()
        for name, data in blocks:
            groups.setdefault(name, []).append(data)
        return groups

    def get_block(self, name, index=0):
        try:
            return self[name][index]
        except (KeyError, IndexError):
            raise KeyError("Nonexistent block %s[%d]" % (name, index)) from None
