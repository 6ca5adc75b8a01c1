from sqlmodel.ext.asyncio.session import AsyncSession

from licensing.adapter.repositories.application_event_repository import (
    ApplicationEventRepository,
)
from licensing.adapter.repositories.application_repository import ApplicationRepository
from licensing.app.services.unit_of_work import UnitOfWork


class SqlAlchemyUnitOfWork(UnitOfWork):
    """SQLAlchemy implementation of UnitOfWork pattern"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def __aenter__(self):
        # Initialize all repositories with the session
        self.applications = ApplicationRepository(self.session)
        self.application_events = ApplicationEventRepository(self.session)
        return self

    async def __aexit__(self, *args):
        # Anything not committed (error, cancellation) is discarded
        await self.rollback()

    async def commit(self):
        await self.session.commit()

    async def rollback(self):
        await self.session.rollback()
