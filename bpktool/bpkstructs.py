from construct import *

MAGIC = b"BPK1"

BPKHeader = Struct(
    "magic"     / Const(MAGIC),
    "count"     / Int32ul,
    Padding(0x38),
)

SheetHeader = Struct(
    "u0"        / Int32ul,
    "count"     / Int32ul,
    Padding(0x38),
)

# Face and body of a 3DS Mii, packed little-endian bitfields
MiiAppearance = Struct(
    "height"    / Int8ul,
    "build"     / Int8ul,
    "face"      / Int8ul,     # sharing, shape, skin
    "makeup"    / Int8ul,     # wrinkles, makeup
    "hair_type" / Int8ul,
    "hair"      / Int8ul,     # colour, flip
    "eyes"      / Int32ul,
    "eyebrows"  / Int32ul,
    "nose"      / Int16ul,
    "mouth"     / Int16ul,
    "mouth2"    / Int16ul,    # mouth position, mustache
    "beard"     / Int16ul,
    "glasses"   / Int16ul,
    "mole"      / Int16ul,
)

# 3DS Mii store data, CFLStoreData
MiiStoreData = Struct(
    "version"       / Int8ul,
    "flags"         / Int8ul,
    "slot"          / Int8ul,
    "origin"        / Int8ul,
    "system_id"     / Bytes(8),
    "mii_id"        / Int32ub,
    "mac"           / Bytes(6),
    Padding(2),
    "attributes"    / Int16ul,
    "mii_name"      / Bytes(20),    # utf-16le
    "appearance"    / MiiAppearance,
    "creator_name"  / Bytes(20),    # utf-16le
    Padding(2),
    "checksum"      / Int16ub,
)

STROKE_SIZE = 4

__all__ = ["MAGIC", "BPKHeader", "SheetHeader", "MiiAppearance", "MiiStoreData", "STROKE_SIZE"]
