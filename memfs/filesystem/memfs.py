"""
In-Memory File System Module

The tree operations and host-facing contract of MemFS:
- stat, readdir, read
- write, rename, delete, mkdir
- change subscriptions

Every operation resolves all the paths it needs before changing
anything, so a failed lookup leaves the tree untouched.

Author: YSNRFD
Version: 1.0.0
"""

import time
from typing import Any, Iterable, List, Optional, Tuple

from .entry import Directory, Entry, File, FileStat
from .notifier import (
    ChangeListener,
    ChangeNotifier,
    Disposable,
    FileChangeEvent,
    FileChangeType,
)
from .path_resolver import PathResolver
from memfs.core.config_loader import Config, get_config
from memfs.core.event_loop import EventLoop
from memfs.core.subsystem import Subsystem, SubsystemState
from memfs.exceptions import (
    EntryExistsError,
    EntryIsADirectoryError,
    EntryNotFoundError,
    NoPermissionsError,
)


class MemFS(Subsystem):
    """
    In-memory file system.

    Content is opaque bytes. Change events are batched by a
    ``ChangeNotifier`` running on ``event_loop``; when no loop is
    given MemFS creates its own and ``start()`` runs it in a
    background thread.

    Example:
        >>> fs = MemFS()
        >>> fs.mkdir('/docs')
        >>> fs.write('/docs/readme.txt', b'hello', create=True)
        >>> fs.read('/docs/readme.txt')
        b'hello'
    """

    def __init__(
        self,
        event_loop: Optional[EventLoop] = None,
        config: Optional[Config] = None
    ):
        super().__init__('memfs')
        self._config = config or get_config()

        self._root = Directory('')
        self._resolver = PathResolver(self._root)

        self._owns_loop = event_loop is None
        self._loop = event_loop or EventLoop(
            poll_interval=self._config.event_loop.poll_interval
        )
        self._notifier = ChangeNotifier(
            self._loop,
            quiet_period=self._config.notifier.quiet_period_ms / 1000.0
        )

    # Lifecycle

    def initialize(self) -> None:
        self._logger.info(
            "Initializing in-memory filesystem",
            context={'quiet_period_ms': self._config.notifier.quiet_period_ms}
        )
        self.set_state(SubsystemState.INITIALIZED)

    def start(self) -> None:
        if self._owns_loop:
            self._loop.start()
        self.set_state(SubsystemState.RUNNING)

    def stop(self) -> None:
        self._logger.info("Stopping in-memory filesystem")
        if self._owns_loop:
            self._loop.stop()
        self.set_state(SubsystemState.STOPPED)

    def cleanup(self) -> None:
        self._notifier.dispose()

    @property
    def event_loop(self) -> EventLoop:
        return self._loop

    @property
    def notifier(self) -> ChangeNotifier:
        return self._notifier

    # Subscriptions

    def watch(
        self,
        path: str,
        recursive: bool = False,
        excludes: Iterable[str] = ()
    ) -> Disposable:
        """
        Accept a watch request.

        Every change is reported to every subscriber regardless of
        path, so there is nothing to track: the returned handle does
        nothing when disposed.
        """
        return Disposable()

    def on_did_change_file(self, listener: ChangeListener) -> Disposable:
        """Subscribe to batches of change events."""
        return self._notifier.subscribe(listener)

    def _fire_soon(self, *events: Tuple[FileChangeType, str]) -> None:
        self._notifier.record(
            *(FileChangeEvent(kind, path) for kind, path in events)
        )

    # Queries

    def stat(self, path: str) -> FileStat:
        """
        Get metadata for a path.

        Raises:
            EntryNotFoundError: If the path does not exist
        """
        return self._resolver.resolve_entry(path).stat()

    def exists(self, path: str) -> bool:
        """Check if a path exists."""
        try:
            self._resolver.resolve_entry(path)
        except EntryNotFoundError:
            return False
        return True

    def is_directory(self, path: str) -> bool:
        return self.exists(path) and self.stat(path).is_directory

    def is_file(self, path: str) -> bool:
        return self.exists(path) and self.stat(path).is_file

    def readdir(self, path: str) -> List[Tuple[str, FileStat]]:
        """
        List the immediate children of a directory.

        Raises:
            EntryNotFoundError: If the path does not exist
            EntryNotADirectoryError: If the path names a file
        """
        directory = self._resolver.resolve_directory(path)
        return [(name, child.stat()) for name, child in directory.entries.items()]

    def read(self, path: str) -> bytes:
        """
        Read the content stored at a path.

        A directory has no content and reads as empty.

        Raises:
            EntryNotFoundError: If the path does not exist
        """
        entry = self._resolver.resolve_entry(path)
        if isinstance(entry, File):
            return entry.data
        return b''

    # Mutations

    def _require_not_root(self, path: str, operation: str) -> str:
        name = PathResolver.basename(path)
        if not name:
            raise NoPermissionsError(PathResolver.normalize(path), operation=operation)
        return name

    def write(
        self,
        path: str,
        content: bytes,
        create: bool = True,
        exclusive: bool = False
    ) -> None:
        """
        Write a file's content, creating the file if allowed.

        Args:
            path: File path
            content: Full new content
            create: Create the file if it does not exist
            exclusive: With ``create``, fail if the file already exists

        Raises:
            EntryNotFoundError: If the parent is missing, or the file is
                missing and ``create`` is False
            EntryNotADirectoryError: If the parent path names a file
            EntryExistsError: If the file exists and both flags are set
            EntryIsADirectoryError: If the path names a directory
            NoPermissionsError: If the path is the root
        """
        name = self._require_not_root(path, 'write')
        target = PathResolver.normalize(path)
        parent = self._resolver.resolve_parent_directory(path)
        entry = parent.entries.get(name)

        if entry is None and not create:
            raise EntryNotFoundError(target)
        if entry is not None and create and exclusive:
            raise EntryExistsError(target)
        if isinstance(entry, Directory):
            raise EntryIsADirectoryError(target)

        content = bytes(memoryview(content))
        events = []
        if entry is None:
            entry = File(name)
            parent.entries[name] = entry
            events.append((FileChangeType.CREATED, target))

        entry.mtime = time.time()
        entry.size = len(content)
        entry.data = content
        events.append((FileChangeType.CHANGED, target))

        self._logger.debug(
            "Wrote file",
            context={'path': target, 'size': entry.size, 'created': len(events) == 2}
        )
        self._fire_soon(*events)

    def rename(self, old_path: str, new_path: str) -> FileStat:
        """
        Move an entry to a new path.

        An entry already at ``new_path`` is replaced.

        Returns:
            Metadata of the moved entry

        Raises:
            EntryNotFoundError: If the source or the destination's
                parent does not exist
            EntryNotADirectoryError: If the destination's parent is a file
            NoPermissionsError: If either path is the root
        """
        self._require_not_root(old_path, 'rename')
        new_name = self._require_not_root(new_path, 'rename')

        entry = self._resolver.resolve_entry(old_path)
        old_parent = self._resolver.resolve_parent_directory(old_path)
        new_parent = self._resolver.resolve_parent_directory(new_path)

        del old_parent.entries[entry.name]
        entry.name = new_name
        new_parent.entries[new_name] = entry

        source = PathResolver.normalize(old_path)
        target = PathResolver.normalize(new_path)
        self._logger.debug("Renamed entry", context={'from': source, 'to': target})
        self._fire_soon(
            (FileChangeType.DELETED, source),
            (FileChangeType.CREATED, target),
        )
        return entry.stat()

    def delete(self, path: str) -> None:
        """
        Remove an entry, and its subtree if it is a directory.

        Raises:
            EntryNotFoundError: If the path does not exist
            EntryNotADirectoryError: If the parent path names a file
            NoPermissionsError: If the path is the root
        """
        name = self._require_not_root(path, 'delete')
        dirname = PathResolver.dirname(path)
        target = PathResolver.normalize(path)
        parent = self._resolver.resolve_directory(dirname)

        if name not in parent.entries:
            raise EntryNotFoundError(target)

        del parent.entries[name]
        parent.mtime = time.time()
        parent.size -= 1

        self._logger.debug("Deleted entry", context={'path': target})
        self._fire_soon(
            (FileChangeType.CHANGED, dirname),
            (FileChangeType.DELETED, target),
        )

    def mkdir(self, path: str) -> FileStat:
        """
        Create an empty directory.

        An entry already using the name is replaced, subtree included.

        Returns:
            Metadata of the new directory

        Raises:
            EntryNotFoundError: If the parent does not exist
            EntryNotADirectoryError: If the parent path names a file
            NoPermissionsError: If the path is the root
        """
        name = self._require_not_root(path, 'mkdir')
        dirname = PathResolver.dirname(path)
        target = PathResolver.normalize(path)
        parent = self._resolver.resolve_directory(dirname)

        entry = Directory(name)
        parent.entries[name] = entry
        parent.mtime = time.time()
        parent.size += 1

        self._logger.debug("Created directory", context={'path': target})
        self._fire_soon(
            (FileChangeType.CHANGED, dirname),
            (FileChangeType.CREATED, target),
        )
        return entry.stat()

    # Names used by editor-style hosts
    read_directory = readdir
    read_file = read
    write_file = write
    create_directory = mkdir

    def get_stats(self) -> dict[str, Any]:
        """Get filesystem statistics."""
        files = 0
        directories = 0
        total_size = 0

        stack: List[Entry] = [self._root]
        while stack:
            entry = stack.pop()
            if isinstance(entry, Directory):
                directories += 1
                stack.extend(entry.entries.values())
            else:
                files += 1
                total_size += len(entry.data)

        return {
            'files': files,
            'directories': directories,
            'total_size': total_size,
            'notifier': self._notifier.get_stats(),
            'event_loop': self._loop.get_stats(),
        }
