"""Read RAF archives.

A RAF archive is a pair of files: the metadata file ('.raf') containing the
index, and the data file ('.raf.dat') containing the entries' data back to back.
The index is read and verified once when the archive is opened. Entry data is
read on demand, and returned as-is. Many entries are zlib compressed, which
can be checked with :func:`is_zlib_compressed`, but decompressing them is up
to the caller.

The archive isn't thread-safe. Both files are read via a single cursor each,
so access from multiple threads must be synchronised by the caller.
"""
from __future__ import annotations

import logging
from contextlib import ExitStack
from enum import Enum
from pathlib import Path
from typing import BinaryIO, Dict, Iterator, Optional, Tuple, Union

from .errors import SizeLimitError, assert_le
from .parse.index import FileEntry, read_index
from .parse.utils import MAX_U32, FileReader

ZLIB_MAGIC = 0x78
ZLIB_LEVELS = (0x01, 0x9C, 0xDA)

PathLike = Union[str, Path]

LOG = logging.getLogger(__name__)


class OpenMode(Enum):
    # the files are never written to, even in read-write mode
    ReadWrite = "r+b"
    Read = "rb"


def is_zlib_compressed(data: bytes) -> bool:
    return len(data) >= 2 and data[0] == ZLIB_MAGIC and data[1] in ZLIB_LEVELS


class RafArchive:
    def __init__(
        self,
        metadata_path: PathLike,
        data_path: PathLike,
        mode: OpenMode = OpenMode.ReadWrite,
    ):
        self.metadata_path = Path(metadata_path)
        self.data_path = Path(data_path)
        self.mode = mode

        with ExitStack() as stack:
            metadata_file: BinaryIO = stack.enter_context(
                self.metadata_path.open(mode.value)
            )
            data_file: BinaryIO = stack.enter_context(self.data_path.open(mode.value))

            LOG.debug("Opened archive '%s'", self.metadata_path)
            entries = read_index(FileReader(metadata_file))

            # only keep the files open if the index was read successfully
            self._stack = stack.pop_all()

        self._metadata = FileReader(metadata_file)
        self._data = FileReader(data_file)
        self._entries: Tuple[FileEntry, ...] = tuple(entries)
        self._lookup: Dict[str, FileEntry] = {}
        for entry in self._entries:
            self._lookup.setdefault(entry.path.lower(), entry)

    @classmethod
    def open(
        cls,
        metadata_path: PathLike,
        data_path: Optional[PathLike] = None,
        mode: OpenMode = OpenMode.ReadWrite,
    ) -> RafArchive:
        """Open an archive.

        If the data file isn't given, it is assumed to be next to the metadata
        file, with '.dat' appended to the name.
        """
        if data_path is None:
            path = Path(metadata_path)
            data_path = path.with_name(path.name + ".dat")
        return cls(metadata_path, data_path, mode)

    @property
    def entries(self) -> Tuple[FileEntry, ...]:
        return self._entries

    def list_entries(self) -> Tuple[FileEntry, ...]:
        return self._entries

    def find_entry(self, path: str) -> Optional[FileEntry]:
        # the hash is case-insensitive, so paths are too
        return self._lookup.get(path.lower())

    def read_entry(self, entry: FileEntry) -> bytes:
        assert_le("data size", MAX_U32, entry.data_size, entry.path, SizeLimitError)
        self._data.offset = entry.data_offset
        return self._data.read_bytes(entry.data_size)

    def read_path(self, path: str) -> bytes:
        entry = self.find_entry(path)
        if entry is None:
            raise KeyError(path)
        return self.read_entry(entry)

    @property
    def closed(self) -> bool:
        return self._data.f.closed

    def close(self) -> None:
        self._stack.close()

    def __enter__(self) -> RafArchive:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[FileEntry]:
        return iter(self._entries)

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}('{self.metadata_path}', '{self.data_path}')"
        )
