"""Base class for external service connectors."""

from abc import ABC, abstractmethod

import structlog

logger = structlog.get_logger()


class BaseConnector(ABC):
    """Base class for connectors.

    Each connector provides:
    - Connection to an external service
    - Typed accessors returning normalized schemas
    """

    def __init__(self, name: str):
        self.name = name
        self._connected = False

    @abstractmethod
    async def connect(self) -> None:
        """Connect to the external service."""
        pass

    @abstractmethod
    async def disconnect(self) -> None:
        """Disconnect from the external service."""
        pass

    @abstractmethod
    async def health_check(self) -> bool:
        """Check if the connection is healthy."""
        pass

    @property
    def is_connected(self) -> bool:
        """Check if connector is connected."""
        return self._connected

    async def __aenter__(self):
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.disconnect()
        logger.debug("Connector closed", connector=self.name)
