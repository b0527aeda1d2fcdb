"""
MemFS Core Module

Infrastructure shared by the filesystem:
- Event Loop
- Subsystem lifecycle
- Configuration Loader
"""

from .event_loop import EventLoop, Event, EventPriority
from .subsystem import Subsystem, SubsystemState
from .config_loader import (
    ConfigLoader,
    Config,
    NotifierConfig,
    EventLoopConfig,
    LoggingConfig,
    get_config,
)

__all__ = [
    # Event Loop
    'EventLoop',
    'Event',
    'EventPriority',
    # Subsystem
    'Subsystem',
    'SubsystemState',
    # Config
    'ConfigLoader',
    'Config',
    'NotifierConfig',
    'EventLoopConfig',
    'LoggingConfig',
    'get_config',
]
