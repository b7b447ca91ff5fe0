"""Read RAF archives (.raf and .raf.dat file pairs)"""
from .archive import OpenMode, RafArchive, is_zlib_compressed
from .errors import (
    ArchiveParseError,
    ArchiveReadError,
    CorruptIndexError,
    RafError,
    SizeLimitError,
)
from .parse.hash import path_hash
from .parse.index import FileEntry

__version__ = "0.1.0"

__all__ = [
    "ArchiveParseError",
    "ArchiveReadError",
    "CorruptIndexError",
    "FileEntry",
    "OpenMode",
    "RafArchive",
    "RafError",
    "SizeLimitError",
    "is_zlib_compressed",
    "path_hash",
]
