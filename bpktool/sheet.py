import numpy as np

from collections import namedtuple

from .bits import pick_bit, pick_bits
from .bpkstructs import SheetHeader, STROKE_SIZE
from .reader import ByteReader

stroke_dtype = np.dtype([
    ("x",           np.uint8),
    ("y",           np.uint8),
    ("draw_line",   np.bool_),
    ("color",       np.uint8),
    ("style_3d",    np.bool_),
    ("style_bold",  np.bool_),
])


class Stroke(namedtuple("Stroke", "x y draw_line color style_3d style_bold")):
    __slots__ = ()

    @classmethod
    def from_bytes(cls, data):
        b0, b1, b2, b3 = data
        # b1's low nibble lands in both coordinates; that is how the format is
        return cls(
            x           = (b2 & 0x0F) << 4 | pick_bits(b1, 0, 3),
            y           = (b1 & 0x0F) << 4 | pick_bits(b0, 0, 3),
            draw_line   = pick_bit(b2, 6),
            color       = pick_bits(b3, 0, 2),
            style_3d    = pick_bit(b3, 5),
            style_bold  = pick_bit(b3, 4),
        )


class Sheet:
    """One drawn page: strokes in drawing order."""
    __slots__ = "strokes",

    def __init__(self, strokes=()):
        self.strokes = tuple(strokes)

    def __repr__(self):
        return "Sheet(%d strokes)" % len(self.strokes)

    def __len__(self):
        return len(self.strokes)

    def __iter__(self):
        return iter(self.strokes)

    def __eq__(self, other):
        if not isinstance(other, Sheet):
            return NotImplemented
        return self.strokes == other.strokes

    @classmethod
    def from_bytes(cls, data):
        fd = ByteReader(data)
        header = fd.read_struct(SheetHeader)
        return cls(Stroke.from_bytes(fd.read_array(STROKE_SIZE)) for _ in range(header.count))

    def to_array(self):
        return np.array(list(self.strokes), dtype=stroke_dtype)
