from .bpk import BlockGroups, read_bpk
from .mii import MiiData
from .sheet import Sheet

THUMBNAIL = "THUMB2"
SENDER_MII = "MIISTD1"
STATIONERY = "STATIN1"
SHEET = "SHEET1"


class Stationery:
    """Background the letter was drawn on. Kept as its raw payload."""
    __slots__ = "data",

    def __init__(self, data):
        self.data = data

    def __repr__(self):
        return "Stationery(%d bytes)" % len(self.data)


class Letter:
    __slots__ = "thumbnails", "sender_mii", "stationery", "sheets", "blocks"

    def __init__(self, thumbnails=None, sender_mii=None, stationery=None, sheets=None, blocks=None):
        self.thumbnails = thumbnails if thumbnails is not None else []
        self.sender_mii = sender_mii
        self.stationery = stationery
        self.sheets = sheets if sheets is not None else []
        self.blocks = blocks if blocks is not None else BlockGroups()

    def __repr__(self):
        return "Letter(thumbnails=%d, sender_mii=%r, stationery=%r, sheets=%r)" % (
            len(self.thumbnails), self.sender_mii, self.stationery, self.sheets)

    @classmethod
    def from_blocks(cls, blocks):
        letter = cls(blocks=BlockGroups.from_blocks(blocks))

        for name, data in blocks:
            if name == THUMBNAIL:
                letter.thumbnails.append(data)
            elif name == SENDER_MII:
                letter.sender_mii = MiiData.from_bytes(data)
            elif name == STATIONERY:
                letter.stationery = Stationery(data)
            elif name == SHEET:
                letter.sheets.append(Sheet.from_bytes(data))
            # anything else only lives in letter.blocks

        return letter

    @classmethod
    def from_bytes(cls, data):
        return read_bpk(data, cls)
