import logging

from .bits import bits
from .errors import DecompressionFailed, UnexpectedEof
from .reader import ByteReader

log = logging.getLogger(__name__)

LZ10 = 0x10
LZ11 = 0x11

def _read_size(fd):
    kind, = fd.read(1)
    if kind not in (LZ10, LZ11):
        raise DecompressionFailed("unknown compression type %s" % hex(kind))
    size = int.from_bytes(fd.read(3), 'little')
    if size == 0:
        # extended header, sizes of 16MiB and up
        size = fd.read_u32_le()
    return kind, size

def _lz10_ref(fd):
    code = fd.read(2)
    length = (code[0] >> 4) + 3
    distance = ((code[0] & 0xF) << 8 | code[1]) + 1
    return distance, length

def _lz11_ref(fd):
    code = fd.read(2)
    indicator = code[0] >> 4
    if indicator == 0:
        code += fd.read(1)
        length = ((code[0] & 0xF) << 4 | code[1] >> 4) + 0x11
        distance = ((code[1] & 0xF) << 8 | code[2]) + 1
    elif indicator == 1:
        code += fd.read(2)
        length = ((code[0] & 0xF) << 12 | code[1] << 4 | code[2] >> 4) + 0x111
        distance = ((code[2] & 0xF) << 8 | code[3]) + 1
    else:
        length = indicator + 1
        distance = ((code[0] & 0xF) << 8 | code[1]) + 1
    return distance, length

def decompress(data):
    """Decompress a Nintendo LZ10/LZ11 stream.

    Raises DecompressionFailed on anything that is not a complete,
    well-formed stream.
    """
    fd = ByteReader(data)
    try:
        kind, size = _read_size(fd)
        backref = _lz11_ref if kind == LZ11 else _lz10_ref
        out = bytearray()

        while len(out) < size:
            # flags are consumed most significant bit first
            for encoded in reversed(bits(fd.read(1)[0])):
                if len(out) >= size:
                    break
                if not encoded:
                    out += fd.read(1)
                    continue

                distance, length = backref(fd)
                if distance > len(out):
                    raise DecompressionFailed("back-reference %d bytes behind offset %s"
                                              % (distance, hex(len(out))))
                # byte by byte; the source may overlap what we are writing
                for _ in range(min(length, size - len(out))):
                    out.append(out[-distance])
    except UnexpectedEof as e:
        raise DecompressionFailed("truncated stream: %s" % e) from e

    if fd.remaining():
        log.debug("Ignoring %d trailing bytes after compressed stream", fd.remaining())
    return bytes(out)

def decompress_if_compressed(data):
    try:
        return decompress(data)
    except DecompressionFailed:
        return bytes(data)

def is_compressed(data):
    return len(data) >= 4 and data[0] in (LZ10, LZ11)
