from .bpk import Block, BlockGroups, read_bpk, read_blocks
from .errors import (BPKError, BadMagic, ChecksumMismatched, DecompressionFailed,
                     InvalidText, UnexpectedEof)
from .letter import Letter, Stationery
from .lzss import decompress, decompress_if_compressed
from .mii import MiiData
from .sheet import Sheet, Stroke

def parse_letter(data):
    return read_bpk(data, Letter)

def parse_blocks(data):
    return read_bpk(data, BlockGroups)
