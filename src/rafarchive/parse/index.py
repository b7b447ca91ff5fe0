"""Read the index of a RAF archive from its metadata ('.raf') file.

The metadata file is a chain of tables, each located by offsets stored in the
previous one: the header points to the file list and the path list. Every
file list record points into the path list, and every path list record points
to the path string (relative to the start of the path list). The file list
record also stores the hash of the path, which is checked for every entry.
"""
import logging
from dataclasses import dataclass
from struct import Struct
from typing import List

from ..errors import ArchiveReadError, CorruptIndexError, assert_eq, assert_ge
from .hash import path_hash
from .utils import FileReader

HEADER = Struct("<5I")
assert HEADER.size == 20, HEADER.size
FILE_RECORD = Struct("<i 2I i")
assert FILE_RECORD.size == 16, FILE_RECORD.size
PATH_RECORD = Struct("<I i")
assert PATH_RECORD.size == 8, PATH_RECORD.size
# the path list starts with its count and total size, which aren't needed
PATH_LIST_HEADER_SIZE = 8

PATH_PADDING = " \t\r\n\0"

LOG = logging.getLogger(__name__)


@dataclass(frozen=True)
class FileEntry:
    data_offset: int
    data_size: int
    path: str


def _read_path(reader: FileReader, path_list_offset: int, index: int) -> str:
    assert_ge("path list index", 0, index, reader.prev, CorruptIndexError)
    reader.offset = path_list_offset + PATH_LIST_HEADER_SIZE + index * PATH_RECORD.size
    path_offset, path_size = reader.read(PATH_RECORD)
    assert_ge("path size", 0, path_size, reader.prev, CorruptIndexError)

    reader.offset = path_list_offset + path_offset
    return reader.read_fixed_string(path_size).rstrip(PATH_PADDING)


def read_index(reader: FileReader) -> List[FileEntry]:
    LOG.debug("Reading archive index...")
    reader.offset = 0
    magic, version, manager_index, file_list_offset, path_list_offset = reader.read(
        HEADER
    )
    LOG.debug(
        "Archive magic 0x%08X, version %d, manager index %d",
        magic,
        version,
        manager_index,
    )
    LOG.debug(
        "File list at %d, path list at %d", file_list_offset, path_list_offset
    )

    reader.offset = file_list_offset
    count = reader.read_i32()
    assert_ge("entry count", 0, count, reader.prev)
    LOG.debug("Archive count %d at %d", count, reader.prev)

    entries = []
    for i in range(count):
        stored_hash, data_offset, data_size, path_index = reader.read(FILE_RECORD)
        record_offset = reader.prev
        position = reader.offset

        try:
            path = _read_path(reader, path_list_offset, path_index)
        except ArchiveReadError as e:
            raise CorruptIndexError(
                f"entry {i}: path list index {path_index} could not be resolved (at {record_offset})"
            ) from e

        assert_eq(
            f"entry {i} '{path}' hash",
            stored_hash,
            path_hash(path),
            record_offset,
            CorruptIndexError,
        )

        LOG.debug(
            "Entry %d '%s', data from %d to %d",
            i,
            path,
            data_offset,
            data_offset + data_size,
        )
        entries.append(FileEntry(data_offset, data_size, path))
        reader.offset = position

    LOG.debug("Read archive index")
    return entries
