"""
Filesystem Exceptions

Exceptions raised by path resolution and tree operations.
Each carries the offending path, a numeric error code and a
``kind`` string naming the failure for hosts that map errors
by name.

Author: YSNRFD
Version: 1.0.0
"""

from typing import Optional, Any


class FileSystemException(Exception):
    """
    Base exception for all filesystem-related errors.

    Attributes:
        message: Human-readable error description
        path: File path associated with the error (if applicable)
        error_code: Numeric error code for programmatic handling
        context: Additional context about the error
    """

    kind = "Unknown"

    def __init__(
        self,
        message: str,
        path: Optional[str] = None,
        error_code: Optional[int] = None,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        super().__init__(message)
        self.message = message
        self.path = path
        self.error_code = error_code or 4000
        self.context = context or {}
        if path is not None:
            self.context["path"] = path

    def __str__(self) -> str:
        base = f"[Error {self.error_code}] {self.message}"
        if self.path is not None:
            base = f"{base} (path={self.path})"
        return base

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"path={self.path!r}, "
            f"error_code={self.error_code})"
        )


class EntryNotFoundError(FileSystemException):
    """
    A path segment or the target entry does not exist.

    Also raised when a path walks through a file, since a file
    has no children to look the next segment up in.

    Example:
        >>> raise EntryNotFoundError("/docs/missing.txt")
    """

    kind = "EntryNotFound"

    def __init__(
        self,
        path: str,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        super().__init__(
            message=f"Entry not found: {path}",
            path=path,
            error_code=4001,
            context=context
        )


class EntryExistsError(FileSystemException):
    """
    The entry already exists and the write was exclusive.

    Example:
        >>> raise EntryExistsError("/docs/readme.txt")
    """

    kind = "EntryExists"

    def __init__(
        self,
        path: str,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        super().__init__(
            message=f"Entry already exists: {path}",
            path=path,
            error_code=4002,
            context=context
        )


class EntryNotADirectoryError(FileSystemException):
    """
    A directory was required but the path names a file.

    Example:
        >>> raise EntryNotADirectoryError("/docs/readme.txt")
    """

    kind = "EntryNotADirectory"

    def __init__(
        self,
        path: str,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        super().__init__(
            message=f"Not a directory: {path}",
            path=path,
            error_code=4003,
            context=context
        )


class EntryIsADirectoryError(FileSystemException):
    """
    File content was written to a path that names a directory.

    Example:
        >>> raise EntryIsADirectoryError("/docs")
    """

    kind = "EntryIsADirectory"

    def __init__(
        self,
        path: str,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        super().__init__(
            message=f"Is a directory: {path}",
            path=path,
            error_code=4004,
            context=context
        )


class NoPermissionsError(FileSystemException):
    """
    The operation is not allowed on this entry.

    Raised for operations that would replace, move or remove the
    root directory.

    Example:
        >>> raise NoPermissionsError("/", operation="delete")
    """

    kind = "NoPermissions"

    def __init__(
        self,
        path: str,
        operation: Optional[str] = None,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        ctx = context or {}
        if operation:
            ctx["operation"] = operation
        super().__init__(
            message=f"Operation not permitted: {path}",
            path=path,
            error_code=4005,
            context=ctx
        )
        self.operation = operation
