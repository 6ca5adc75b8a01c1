from abc import ABC, abstractmethod

from licensing.app.repositories.application_event_repository import (
    IApplicationEventRepository,
)
from licensing.app.repositories.application_repository import IApplicationRepository


class UnitOfWork(ABC):
    """Abstract UnitOfWork - defines repository access and transaction management"""

    # Repository properties (initialized in __aenter__)
    applications: IApplicationRepository
    application_events: IApplicationEventRepository

    @abstractmethod
    async def __aenter__(self):
        pass

    @abstractmethod
    async def __aexit__(self, *args):
        pass

    @abstractmethod
    async def commit(self):
        pass

    @abstractmethod
    async def rollback(self):
        pass
