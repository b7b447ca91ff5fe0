import zlib
from pathlib import Path
from struct import Struct
from typing import Callable, List, Optional, Sequence, Tuple

import pytest

from rafarchive.parse.hash import path_hash

HEADER = Struct("<5I")
COUNT = Struct("<i")
FILE_RECORD = Struct("<i 2I i")
PATH_RECORD = Struct("<I i")
PATH_LIST_HEADER = Struct("<2I")

MAGIC = 0x18BE0EF0
VERSION = 1

FILE_LIST_OFFSET = HEADER.size

FILES = [
    ("DATA/Characters/Annie/Annie.skn", b"\x00\x01\x02\x03 skin data"),
    ("DATA/Particles/fire.dds", zlib.compress(b"fire" * 32)),
    ("LEVELS/Map1/Scene/room.nvr", b""),
    ("data/menu/fontconfig_en_us.txt", b"tr \"game_font\" = \"Arial\"\n"),
]

Files = Sequence[Tuple[str, bytes]]


def record_offset(index: int) -> int:
    """Offset of a file list record in an archive from :func:`build_archive`."""
    return FILE_LIST_OFFSET + COUNT.size + index * FILE_RECORD.size


def build_archive(
    files: Files, hashes: Optional[Sequence[int]] = None
) -> Tuple[bytes, bytes]:
    """Build the metadata and data files for an archive.

    The path list is written in reverse order, so the file list index and
    the path list index differ for all but the middle entry. Path strings are
    null terminated, and the terminator is included in the path size.
    """
    count = len(files)

    data = bytearray()
    data_offsets = []
    for _, payload in files:
        data_offsets.append(len(data))
        data += payload

    path_order = list(reversed(range(count)))
    path_index = {file_index: i for i, file_index in enumerate(path_order)}

    strings_offset = PATH_LIST_HEADER.size + count * PATH_RECORD.size
    records = bytearray()
    strings = bytearray()
    for file_index in path_order:
        raw = files[file_index][0].encode("ascii") + b"\0"
        records += PATH_RECORD.pack(strings_offset + len(strings), len(raw))
        strings += raw
    path_list = PATH_LIST_HEADER.pack(count, len(strings)) + records + strings

    file_list = bytearray(COUNT.pack(count))
    for i, (path, payload) in enumerate(files):
        stored_hash = path_hash(path) if hashes is None else hashes[i]
        file_list += FILE_RECORD.pack(
            stored_hash, data_offsets[i], len(payload), path_index[i]
        )

    path_list_offset = FILE_LIST_OFFSET + len(file_list)
    header = HEADER.pack(MAGIC, VERSION, 0, FILE_LIST_OFFSET, path_list_offset)
    return header + bytes(file_list) + path_list, bytes(data)


WriteArchive = Callable[..., Tuple[Path, Path]]


@pytest.fixture
def write_archive(tmp_path: Path) -> WriteArchive:
    def _write(
        files: Files = FILES,
        hashes: Optional[Sequence[int]] = None,
        metadata: Optional[bytes] = None,
        name: str = "Archive_0.0.0.1.raf",
    ) -> Tuple[Path, Path]:
        built_metadata, data = build_archive(files, hashes)
        metadata_path = tmp_path / name
        metadata_path.write_bytes(built_metadata if metadata is None else metadata)
        data_path = tmp_path / f"{name}.dat"
        data_path.write_bytes(data)
        return metadata_path, data_path

    return _write


@pytest.fixture
def opened_files(monkeypatch: pytest.MonkeyPatch) -> List:
    """Record every file opened via :meth:`Path.open`."""
    opened = []
    real_open = Path.open

    def tracking_open(self, *args, **kwargs):  # type: ignore
        f = real_open(self, *args, **kwargs)
        opened.append(f)
        return f

    monkeypatch.setattr(Path, "open", tracking_open)
    return opened
