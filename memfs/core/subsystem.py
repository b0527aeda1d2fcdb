"""
MemFS Subsystem Base

Lifecycle management shared by long-lived MemFS components.

Author: YSNRFD
Version: 1.0.0
"""

from abc import ABC, abstractmethod
from enum import Enum, auto

from memfs.logger import Logger, get_logger


class SubsystemState(Enum):
    """Lifecycle state of a subsystem."""
    CREATED = auto()
    INITIALIZED = auto()
    RUNNING = auto()
    STOPPED = auto()


class Subsystem(ABC):
    """
    Abstract base class for MemFS subsystems.

    Lifecycle:
        1. __init__() - Subsystem is created
        2. initialize() - Subsystem is initialized
        3. start() - Subsystem starts operation
        4. stop() - Subsystem stops operation
        5. cleanup() - Subsystem cleans up resources
    """

    def __init__(self, name: str):
        self._name = name
        self._logger = get_logger(name)
        self._state = SubsystemState.CREATED

    @property
    def name(self) -> str:
        """Get the subsystem name."""
        return self._name

    @property
    def state(self) -> SubsystemState:
        """Get the current state."""
        return self._state

    @property
    def logger(self) -> Logger:
        """Get the subsystem logger."""
        return self._logger

    def set_state(self, state: SubsystemState) -> None:
        """Set the subsystem state."""
        self._state = state
        self._logger.debug(f"State changed to {state.name}")

    @abstractmethod
    def initialize(self) -> None:
        """Prepare the subsystem for operation."""

    def start(self) -> None:
        """Begin normal operation. Default implementation does nothing."""

    def stop(self) -> None:
        """Stop active operations. Default implementation does nothing."""

    def cleanup(self) -> None:
        """Release resources. Default implementation does nothing."""

    def health_check(self) -> bool:
        """Return True while the subsystem is initialized or running."""
        return self._state in (
            SubsystemState.INITIALIZED,
            SubsystemState.RUNNING
        )
