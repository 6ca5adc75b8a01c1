from typing import List

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from licensing.app.repositories.application_event_repository import (
    IApplicationEventRepository,
)
from licensing.domain.entities import ApplicationEvent


class ApplicationEventRepository(IApplicationEventRepository):
    """ApplicationEvent repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, event: ApplicationEvent) -> ApplicationEvent:
        """Append a new event (immutable)"""
        self.session.add(event)
        await self.session.flush()
        await self.session.refresh(event)
        return event

    async def list_by_application(self, application_uid: str) -> List[ApplicationEvent]:
        """All events of an application, oldest first"""
        stmt = (
            select(ApplicationEvent)
            .where(ApplicationEvent.application_uid == application_uid)
            .order_by(ApplicationEvent.created_at.asc(), ApplicationEvent.id.asc())
        )
        result = await self.session.exec(stmt)
        return list(result.all())
