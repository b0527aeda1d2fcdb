"""
MemFS Exception Hierarchy

Architecture:
    FileSystemException
    ├── EntryNotFoundError
    ├── EntryExistsError
    ├── EntryNotADirectoryError
    ├── EntryIsADirectoryError
    └── NoPermissionsError
    ConfigException
    ├── ConfigLoadError
    └── ConfigValidationError
"""

from .fs_exceptions import (
    FileSystemException,
    EntryNotFoundError,
    EntryExistsError,
    EntryNotADirectoryError,
    EntryIsADirectoryError,
    NoPermissionsError,
)

from .config_exceptions import (
    ConfigException,
    ConfigLoadError,
    ConfigValidationError,
)

__all__ = [
    # Filesystem exceptions
    "FileSystemException",
    "EntryNotFoundError",
    "EntryExistsError",
    "EntryNotADirectoryError",
    "EntryIsADirectoryError",
    "NoPermissionsError",
    # Configuration exceptions
    "ConfigException",
    "ConfigLoadError",
    "ConfigValidationError",
]
