import struct

from io import BytesIO
from construct import ConstructError, StreamError

from .errors import BPKError, UnexpectedEof, InvalidText


class ByteReader:
    """Cursor over an in-memory buffer.

    Every read is exact: asking for more bytes than remain raises
    UnexpectedEof and leaves the position where it was. Seeks are
    confined to [0, len(buffer)].
    """
    __slots__ = "_buf", "_size"

    def __init__(self, data):
        data = bytes(data)
        self._buf = BytesIO(data)
        self._size = len(data)

    def __len__(self):
        return self._size

    def tell(self):
        return self._buf.tell()

    def remaining(self):
        return self._size - self._buf.tell()

    def seek(self, offset):
        if not 0 <= offset <= self._size:
            raise UnexpectedEof("seek to %s outside buffer of %d bytes" % (hex(offset), self._size))
        self._buf.seek(offset)

    def seek_relative(self, delta):
        self.seek(self.tell() + delta)

    def read(self, count):
        if count < 0:
            raise ValueError("negative read size %d" % count)
        pos = self.tell()
        if count > self._size - pos:
            raise UnexpectedEof("wanted %d bytes at offset %s, only %d left"
                                % (count, hex(pos), self._size - pos))
        return self._buf.read(count)

    # Same contract as read(); kept for callers that think in fixed arrays
    read_array = read

    def read_u32_le(self):
        return struct.unpack("<I", self.read(4))[0]

    def read_padded_string(self, width, encoding="utf-8"):
        raw = self.read(width)
        end = raw.find(b'\x00')
        if end != -1:
            raw = raw[:end]
        try:
            return raw.decode(encoding)
        except UnicodeDecodeError as e:
            raise InvalidText("bad %s text %r" % (encoding, raw)) from e

    def read_struct(self, con):
        """Parse a fixed-size construct from the next con.sizeof() bytes."""
        data = self.read(con.sizeof())
        try:
            return con.parse(data)
        except StreamError as e:
            raise UnexpectedEof(str(e)) from e
        except ConstructError as e:
            raise BPKError("malformed record at offset %s: %s"
                           % (hex(self.tell() - len(data)), e)) from e
