"""Describe the index of a RAF archive as JSON.

The manifest is a flat list of entries in file list order, so it can be
consumed by tools that don't understand the archive format.
"""
from __future__ import annotations

from typing import Iterable, List

from pydantic import BaseModel, RootModel

from ..parse.index import FileEntry


class EntryInfo(BaseModel):
    path: str
    offset: int
    size: int

    @classmethod
    def from_entry(cls, entry: FileEntry) -> EntryInfo:
        return cls(path=entry.path, offset=entry.data_offset, size=entry.data_size)

    def to_entry(self) -> FileEntry:
        return FileEntry(data_offset=self.offset, data_size=self.size, path=self.path)


class IndexManifest(RootModel[List[EntryInfo]]):
    @classmethod
    def from_entries(cls, entries: Iterable[FileEntry]) -> IndexManifest:
        return cls([EntryInfo.from_entry(entry) for entry in entries])

    def to_entries(self) -> List[FileEntry]:
        return [info.to_entry() for info in self.root]
