"""Base ABC for issue tracker clients."""

from abc import ABC, abstractmethod
from typing import Any


class IssueTrackerBase(ABC):
    """Base ABC for issue tracker clients."""

    @abstractmethod
    async def list_issues(self, **kwargs: Any) -> list[Any]:
        """List all issues of the project, oldest first."""
        pass

    @abstractmethod
    async def list_labels(self, **kwargs: Any) -> list[Any]:
        """List all labels of the project."""
        pass

    @abstractmethod
    async def list_milestones(self, **kwargs: Any) -> list[Any]:
        """List all milestones of the project."""
        pass
