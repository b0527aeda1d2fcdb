"""
Path Resolver Module

Splits slash-delimited paths and walks them down the entry tree.

Paths are absolute and POSIX-style. Empty segments are ignored,
so ``""``, ``"/"`` and ``"//"`` all name the root directory.

Author: YSNRFD
Version: 1.0.0
"""

from typing import List, Tuple

from .entry import Directory, Entry
from memfs.exceptions import EntryNotFoundError, EntryNotADirectoryError


class PathResolver:
    """
    Resolves paths against a tree rooted at ``root``.

    The static helpers work on path strings alone and never touch
    the tree.

    Example:
        >>> resolver = PathResolver(root)
        >>> resolver.resolve_directory('/docs')
        Directory(name='docs', ...)
    """

    def __init__(self, root: Directory):
        self._root = root

    @property
    def root(self) -> Directory:
        return self._root

    # Path string helpers

    @staticmethod
    def split_components(path: str) -> List[str]:
        """Split a path into its non-empty segments."""
        return [c for c in path.split('/') if c]

    @staticmethod
    def normalize(path: str) -> str:
        """
        Canonical form of a path.

        Example:
            >>> PathResolver.normalize('//docs/readme.txt/')
            '/docs/readme.txt'
        """
        return '/' + '/'.join(PathResolver.split_components(path))

    @staticmethod
    def join(*paths: str) -> str:
        """Join path pieces and normalize the result."""
        components: List[str] = []
        for path in paths:
            components.extend(PathResolver.split_components(path))
        return '/' + '/'.join(components)

    @staticmethod
    def dirname(path: str) -> str:
        """Parent path. The parent of the root is the root."""
        components = PathResolver.split_components(path)
        return '/' + '/'.join(components[:-1])

    @staticmethod
    def basename(path: str) -> str:
        """Last segment of a path, ``""`` for the root."""
        components = PathResolver.split_components(path)
        return components[-1] if components else ''

    @staticmethod
    def split(path: str) -> Tuple[str, str]:
        """Split a path into (dirname, basename)."""
        return (PathResolver.dirname(path), PathResolver.basename(path))

    @staticmethod
    def is_root(path: str) -> bool:
        return not PathResolver.split_components(path)

    # Tree walking

    def resolve_entry(self, path: str) -> Entry:
        """
        Walk ``path`` from the root.

        Raises:
            EntryNotFoundError: If a segment is missing, or a segment
                other than the last names a file
        """
        entry: Entry = self._root

        for component in self.split_components(path):
            child = None
            if isinstance(entry, Directory):
                child = entry.entries.get(component)
            if child is None:
                raise EntryNotFoundError(self.normalize(path))
            entry = child

        return entry

    def resolve_directory(self, path: str) -> Directory:
        """
        Resolve ``path`` and require a directory.

        Raises:
            EntryNotFoundError: If the path does not resolve
            EntryNotADirectoryError: If it resolves to a file
        """
        entry = self.resolve_entry(path)
        if not isinstance(entry, Directory):
            raise EntryNotADirectoryError(self.normalize(path))
        return entry

    def resolve_parent_directory(self, path: str) -> Directory:
        """Resolve the directory that contains (or would contain) ``path``."""
        return self.resolve_directory(self.dirname(path))
