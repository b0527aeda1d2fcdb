"""
MemFS - An in-memory hierarchical file system

A tree of directories and files addressed by POSIX-style paths,
with batched change notifications for observers.
"""

__version__ = "1.0.0"
__author__ = "YSNRFD"

from .filesystem import (
    MemFS,
    FileStat,
    FileType,
    FileChangeEvent,
    FileChangeType,
    Disposable,
)
from .core import EventLoop, ConfigLoader, Config, get_config
from .logger import Logger, get_logger

__all__ = [
    'MemFS',
    'FileStat',
    'FileType',
    'FileChangeEvent',
    'FileChangeType',
    'Disposable',
    'EventLoop',
    'ConfigLoader',
    'Config',
    'get_config',
    'Logger',
    'get_logger',
]
