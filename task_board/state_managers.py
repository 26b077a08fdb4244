"""Base class for application-wide mutable state.

State managers own shared mutable state behind an asyncio.Lock and take part
in the application lifespan through initialize() and cleanup().
"""

from abc import ABC, abstractmethod


class StateManager(ABC):
    """Base class for all state managers.

    Subclasses must implement the lifecycle methods, which the lifespan
    calls on startup and shutdown.
    """

    @abstractmethod
    async def initialize(self) -> None:
        """Initialize the state manager (called during app startup)."""
        pass

    @abstractmethod
    async def cleanup(self) -> None:
        """Cleanup resources (called during app shutdown)."""
        pass
