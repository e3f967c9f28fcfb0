"""Search execution interface consumed by repositories."""

from abc import ABC, abstractmethod
from typing import Any, Optional


class SearchOperations(ABC):
    """Abstract base class for sending a resolved query to the search engine."""

    @abstractmethod
    def search(self, query: str, index: Optional[str] = None) -> Any:
        """Execute a query body against an index and return the engine's response."""
        pass
