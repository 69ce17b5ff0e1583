def bits(byte):
    return ((byte >> 0) & 1,
            (byte >> 1) & 1,
            (byte >> 2) & 1,
            (byte >> 3) & 1,
            (byte >> 4) & 1,
            (byte >> 5) & 1,
            (byte >> 6) & 1,
            (byte >> 7) & 1)

def pick_bit(value, n):
    return bool((value >> n) & 1)

def pick_bits(value, first, last):
    """Bits first..last of value, inclusive, shifted down to bit 0."""
    if first > last:
        raise ValueError("empty bit range %d..%d" % (first, last))
    return (value >> first) & ((1 << (last - first + 1)) - 1)
