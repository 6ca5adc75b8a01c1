from abc import ABC, abstractmethod
from typing import List

from licensing.domain.entities import ApplicationEvent


class IApplicationEventRepository(ABC):
    """ApplicationEvent repository interface - append only"""

    @abstractmethod
    async def create(self, event: ApplicationEvent) -> ApplicationEvent:
        """Append a new event (immutable)"""
        pass

    @abstractmethod
    async def list_by_application(self, application_uid: str) -> List[ApplicationEvent]:
        """All events of an application ordered by created_at, then id"""
        pass
