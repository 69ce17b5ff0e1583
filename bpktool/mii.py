from collections import namedtuple
from datetime import datetime, timedelta, timezone

from .bits import pick_bit, pick_bits
from .bpkstructs import MiiStoreData
from .errors import InvalidText
from .reader import ByteReader

MII_SIZE = MiiStoreData.sizeof()

# Mii ids count two second ticks from here
MII_EPOCH = datetime(2010, 1, 1, tzinfo=timezone.utc)

STUDIO_URL = "https://studio.mii.nintendo.com/miis/image.png?data="

Appearance = namedtuple("Appearance", """
    height build
    face_type face_color face_wrinkles face_makeup
    hair_type hair_color hair_flip
    eye_type eye_color eye_size eye_stretch eye_rotation eye_horizontal eye_vertical
    eyebrow_type eyebrow_color eyebrow_size eyebrow_stretch eyebrow_rotation
    eyebrow_horizontal eyebrow_vertical
    nose_type nose_size nose_vertical
    mouth_type mouth_color mouth_size mouth_stretch mouth_vertical
    mustache_type beard_type beard_color mustache_size mustache_vertical
    glasses_type glasses_color glasses_size glasses_vertical
    mole_enable mole_size mole_horizontal mole_vertical
""")

def _appearance(rec):
    eyes, brows = rec.eyes, rec.eyebrows
    return Appearance(
        height              = rec.height,
        build               = rec.build,
        face_type           = pick_bits(rec.face, 1, 4),
        face_color          = pick_bits(rec.face, 5, 7),
        face_wrinkles       = pick_bits(rec.makeup, 0, 3),
        face_makeup         = pick_bits(rec.makeup, 4, 7),
        hair_type           = rec.hair_type,
        hair_color          = pick_bits(rec.hair, 0, 2),
        hair_flip           = pick_bits(rec.hair, 3, 3),
        eye_type            = pick_bits(eyes, 0, 5),
        eye_color           = pick_bits(eyes, 6, 8),
        eye_size            = pick_bits(eyes, 9, 12),
        eye_stretch         = pick_bits(eyes, 13, 15),
        eye_rotation        = pick_bits(eyes, 16, 20),
        eye_horizontal      = pick_bits(eyes, 21, 24),
        eye_vertical        = pick_bits(eyes, 25, 29),
        eyebrow_type        = pick_bits(brows, 0, 4),
        eyebrow_color       = pick_bits(brows, 5, 7),
        eyebrow_size        = pick_bits(brows, 8, 11),
        eyebrow_stretch     = pick_bits(brows, 12, 14),
        eyebrow_rotation    = pick_bits(brows, 16, 19),
        eyebrow_horizontal  = pick_bits(brows, 21, 24),
        eyebrow_vertical    = pick_bits(brows, 25, 29),
        nose_type           = pick_bits(rec.nose, 0, 4),
        nose_size           = pick_bits(rec.nose, 5, 8),
        nose_vertical       = pick_bits(rec.nose, 9, 13),
        mouth_type          = pick_bits(rec.mouth, 0, 5),
        mouth_color         = pick_bits(rec.mouth, 6, 8),
        mouth_size          = pick_bits(rec.mouth, 9, 12),
        mouth_stretch       = pick_bits(rec.mouth, 13, 15),
        mouth_vertical      = pick_bits(rec.mouth2, 0, 4),
        mustache_type       = pick_bits(rec.mouth2, 5, 7),
        beard_type          = pick_bits(rec.beard, 0, 2),
        beard_color         = pick_bits(rec.beard, 3, 5),
        mustache_size       = pick_bits(rec.beard, 6, 9),
        mustache_vertical   = pick_bits(rec.beard, 10, 14),
        glasses_type        = pick_bits(rec.glasses, 0, 3),
        glasses_color       = pick_bits(rec.glasses, 4, 6),
        glasses_size        = pick_bits(rec.glasses, 7, 10),
        glasses_vertical    = pick_bits(rec.glasses, 11, 15),
        mole_enable         = pick_bits(rec.mole, 0, 0),
        mole_size           = pick_bits(rec.mole, 1, 4),
        mole_horizontal     = pick_bits(rec.mole, 5, 9),
        mole_vertical       = pick_bits(rec.mole, 10, 14),
    )

def _utf16_name(raw):
    units = [raw[i:i+2] for i in range(0, len(raw), 2)]
    if b'\x00\x00' in units:
        units = units[:units.index(b'\x00\x00')]
    try:
        return b''.join(units).decode("utf_16_le")
    except UnicodeDecodeError as e:
        raise InvalidText("bad utf-16 name %r" % raw) from e

# 3DS colour indices -> the shared table Mii Studio uses
def _common_color(color):
    return 8 if color == 0 else color

def _glasses_color(color):
    if color == 0:
        return 8
    if color < 6:
        return color + 13
    return 0

def _mouth_color(color):
    return color + 19 if color < 4 else 0


class MiiData:
    __slots__ = ("data", "version", "mii_id", "system_id", "mac", "mii_name",
                 "creator_name", "sex", "birth_month", "birth_day",
                 "favorite_color", "favorite", "copyable", "appearance")

    @classmethod
    def from_bytes(cls, data):
        """Decode the first MII_SIZE bytes of data."""
        fd = ByteReader(data)
        raw = fd.read_array(MII_SIZE)
        rec = ByteReader(raw).read_struct(MiiStoreData)

        self = cls()
        self.data = raw
        self.version = rec.version
        self.mii_id = rec.mii_id
        self.system_id = rec.system_id
        self.mac = rec.mac
        self.mii_name = _utf16_name(rec.mii_name)
        self.creator_name = _utf16_name(rec.creator_name)
        self.copyable = pick_bit(rec.flags, 0)
        self.appearance = _appearance(rec.appearance)

        attrs = rec.attributes
        self.sex = pick_bits(attrs, 0, 0)
        self.birth_month = pick_bits(attrs, 1, 4)
        self.birth_day = pick_bits(attrs, 5, 9)
        self.favorite_color = pick_bits(attrs, 10, 13)
        self.favorite = pick_bit(attrs, 14)
        return self

    @property
    def special(self):
        return not pick_bit(self.mii_id, 31)

    @property
    def creation_date(self):
        return MII_EPOCH + timedelta(seconds=pick_bits(self.mii_id, 0, 27) * 2)

    def studio_data(self):
        """The 46 byte Mii Studio character record, unobfuscated."""
        a = self.appearance
        return bytes([
            _common_color(a.beard_color),
            a.beard_type,
            a.build,
            a.eye_stretch,
            a.eye_color + 8,
            a.eye_rotation,
            a.eye_size,
            a.eye_type,
            a.eye_horizontal,
            a.eye_vertical,
            a.eyebrow_stretch,
            _common_color(a.eyebrow_color),
            a.eyebrow_rotation,
            a.eyebrow_size,
            a.eyebrow_type,
            a.eyebrow_horizontal,
            a.eyebrow_vertical,
            a.face_color,
            a.face_makeup,
            a.face_type,
            a.face_wrinkles,
            self.favorite_color,
            self.sex,
            _glasses_color(a.glasses_color),
            a.glasses_size,
            a.glasses_type,
            a.glasses_vertical,
            _common_color(a.hair_color),
            a.hair_flip,
            a.hair_type,
            a.height,
            a.mole_size,
            a.mole_enable,
            a.mole_horizontal,
            a.mole_vertical,
            a.mouth_stretch,
            _mouth_color(a.mouth_color),
            a.mouth_size,
            a.mouth_type,
            a.mouth_vertical,
            a.mustache_size,
            a.mustache_type,
            a.mustache_vertical,
            a.nose_size,
            a.nose_type,
            a.nose_vertical,
        ])

    @property
    def studio_url(self):
        # each byte is chained to the previous one; seed byte 0
        out = bytearray([0])
        prev = 0
        for value in self.studio_data():
            prev = (7 + (value ^ prev)) & 0xFF
            out.append(prev)
        return STUDIO_URL + out.hex()

    def __repr__(self):
        return "MiiData(mii_name=%r, creator_name=%r, creation_date=%s)" % (
            self.mii_name, self.creator_name, self.creation_date.isoformat())
