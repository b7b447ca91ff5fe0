"""The path hash stored in the file list.

This is the classic ELF hash, applied to the lower-cased path. It is only used
to check that the path resolved via the path list is the one that was written.
"""
from .utils import MAX_U32

HIGH_NIBBLE = 0xF0000000
SIGN_BIT = 0x80000000


def path_hash(path: str) -> int:
    value = 0
    # Java's US-ASCII encoder replaces unmappable characters with "?"
    for byte in path.lower().encode("ascii", errors="replace"):
        value = ((value << 4) + byte) & MAX_U32
        high = value & HIGH_NIBBLE
        if high:
            # python ints don't sign-extend when masked, so this is a
            # logical shift
            value ^= high >> 24
            value ^= high

    # the stored hash is signed
    if value & SIGN_BIT:
        value -= 1 << 32
    return value
