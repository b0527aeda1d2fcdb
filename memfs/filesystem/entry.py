"""
Entry Module

The two kinds of node in the in-memory tree. Entries hold data
only; the tree operations live in ``memfs.filesystem.memfs``.

Author: YSNRFD
Version: 1.0.0
"""

import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Union


class FileType(Enum):
    """Types of entries."""
    FILE = 1
    DIRECTORY = 2


@dataclass(frozen=True)
class FileStat:
    """Metadata snapshot of an entry."""
    type: FileType
    mtime: float
    size: int

    @property
    def is_file(self) -> bool:
        return self.type == FileType.FILE

    @property
    def is_directory(self) -> bool:
        return self.type == FileType.DIRECTORY


@dataclass
class File:
    """
    A regular file.

    ``size`` is the byte length of ``data`` and is kept in step by
    writes. The content belongs to the entry, so it goes away with it.
    """
    name: str
    mtime: float = field(default_factory=time.time)
    size: int = 0
    data: bytes = field(default=b'', repr=False)

    type = FileType.FILE

    @property
    def is_file(self) -> bool:
        return True

    @property
    def is_directory(self) -> bool:
        return False

    def stat(self) -> FileStat:
        return FileStat(type=self.type, mtime=self.mtime, size=self.size)


@dataclass
class Directory:
    """
    A directory.

    ``entries`` maps each child's name to the child, which the
    directory owns. ``size`` counts children as reported metadata
    only; traversal always goes through ``entries``.
    """
    name: str
    mtime: float = field(default_factory=time.time)
    size: int = 0
    entries: dict[str, 'Entry'] = field(default_factory=dict, repr=False)

    type = FileType.DIRECTORY

    @property
    def is_file(self) -> bool:
        return False

    @property
    def is_directory(self) -> bool:
        return True

    def stat(self) -> FileStat:
        return FileStat(type=self.type, mtime=self.mtime, size=self.size)


Entry = Union[File, Directory]
