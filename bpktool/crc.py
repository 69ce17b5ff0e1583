import numpy as np

from .errors import ChecksumMismatched

# CRC-32 polynomial, MSB first, but seeded with the polynomial itself
# and without the final xor
POLY = 0x04C11DB7
INIT = 0x04C11DB7

def _make_table():
    table = np.arange(256, dtype=np.uint32) << np.uint32(24)
    for _ in range(8):
        top = (table & np.uint32(0x80000000)) != 0
        table = np.where(top, (table << np.uint32(1)) ^ np.uint32(POLY), table << np.uint32(1))
        table = table.astype(np.uint32)
    return table.tolist()

TABLE = _make_table()

def bpk_checksum(data, crc=INIT):
    for byte in data:
        crc = ((crc << 8) & 0xFFFFFFFF) ^ TABLE[(crc >> 24) ^ byte]
    return crc

def check_checksum(expected, data, name="", offset=0):
    actual = bpk_checksum(data)
    if actual != expected:
        raise ChecksumMismatched(name, offset, len(data), expected, actual)
