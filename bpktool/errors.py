class BPKError(Exception):
    pass

class BadMagic(BPKError):
    pass

class UnexpectedEof(BPKError, EOFError):
    pass

class InvalidText(BPKError, ValueError):
    pass

class DecompressionFailed(BPKError, ValueError):
    pass

class ChecksumMismatched(BPKError):
    def __init__(self, name, offset, size, expected, actual):
        super().__init__("Incorrect CRC32 checksum for %s at offset %s with size %d: expected %08x, got %08x"
                         % (name, hex(offset), size, expected, actual))
        self.name = name
        self.offset = offset
        self.size = size
        self.expected = expected
        self.actual = actual
