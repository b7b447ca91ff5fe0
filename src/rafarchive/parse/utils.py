from struct import Struct
from typing import Any, BinaryIO, Tuple

from ..errors import ArchiveReadError

INT32 = Struct("<i")
UINT32 = Struct("<I")

MAX_U32 = 0xFFFFFFFF


def ascii_padded(buf: bytes) -> str:
    """Return a string from an ASCII-encoded buffer.

    Bytes outside of 7-bit ASCII are not rejected, but are replaced with
    U+FFFD. Padding is not removed.
    """
    return buf.decode("ascii", errors="replace")


class FileReader:
    """Read little-endian fields from a seekable binary file.

    The reader owns the cursor of the file while a read is in progress. It
    keeps no state between reads besides ``prev``, the offset the last field
    started at.
    """

    def __init__(self, f: BinaryIO):
        self.f = f
        self.prev = 0

    @property
    def offset(self) -> int:
        return self.f.tell()

    @offset.setter
    def offset(self, value: int) -> None:
        # seeking past the end is fine, only the next read will fail
        if value < 0:
            raise ArchiveReadError(f"Cannot seek to negative offset {value}")
        self.f.seek(value)

    def read_bytes(self, length: int) -> bytes:
        self.prev = self.f.tell()
        value = self.f.read(length)
        if len(value) != length:
            raise ArchiveReadError(
                f"Expected {length} bytes, but read {len(value)} (at {self.prev})"
            )
        return value

    def read(self, struct: Struct) -> Tuple[Any, ...]:
        return struct.unpack(self.read_bytes(struct.size))

    def read_i32(self) -> int:
        (value,) = INT32.unpack(self.read_bytes(INT32.size))
        return value  # type: ignore

    def read_u32(self) -> int:
        (value,) = UINT32.unpack(self.read_bytes(UINT32.size))
        return value  # type: ignore

    def read_fixed_string(self, length: int) -> str:
        return ascii_padded(self.read_bytes(length))

    def read_zterm_string(self) -> str:
        start = self.f.tell()
        buf = bytearray()
        while True:
            byte = self.f.read(1)
            if not byte:
                raise ArchiveReadError(f"Null terminator not found (at {start})")
            if byte == b"\0":
                break
            buf += byte
        self.prev = start
        return ascii_padded(bytes(buf))
