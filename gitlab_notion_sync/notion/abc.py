"""Base ABC for target store clients."""

from abc import ABC, abstractmethod
from typing import Any


class TargetStoreBase(ABC):
    """Base ABC for target store clients."""

    # Database operations
    @abstractmethod
    async def query_database(self, start_cursor: str | None = None, **kwargs: Any) -> Any:
        """Fetch one page of records from the database."""
        pass

    @abstractmethod
    async def list_pages(self, **kwargs: Any) -> list[Any]:
        """Fetch every record of the database."""
        pass

    @abstractmethod
    async def replace_select_options(self, property_name: str, options: list[dict[str, str]]) -> Any:
        """Replace the option set of a select or multi-select property."""
        pass

    # Page operations
    @abstractmethod
    async def create_page(self, properties: dict[str, Any], **kwargs: Any) -> Any:
        """Create a record in the database."""
        pass

    @abstractmethod
    async def update_page(self, page_id: str, properties: dict[str, Any], **kwargs: Any) -> Any:
        """Update the properties of an existing record."""
        pass
