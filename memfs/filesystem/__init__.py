"""
MemFS File System Module

Provides the in-memory file system:
- File and Directory entries
- Path resolution
- Tree operations
- Batched change notification
"""

from .entry import Entry, File, Directory, FileStat, FileType
from .path_resolver import PathResolver
from .notifier import (
    ChangeNotifier,
    Disposable,
    FileChangeEvent,
    FileChangeType,
    NotifierState,
)
from .memfs import MemFS

__all__ = [
    # Entries
    'Entry',
    'File',
    'Directory',
    'FileStat',
    'FileType',
    # Path Resolver
    'PathResolver',
    # Notifier
    'ChangeNotifier',
    'Disposable',
    'FileChangeEvent',
    'FileChangeType',
    'NotifierState',
    # File system
    'MemFS',
]
