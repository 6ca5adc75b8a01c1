from typing import List, Optional

from sqlalchemy import func, update
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from licensing.app.repositories.application_repository import IApplicationRepository
from licensing.domain.base import utc_now
from licensing.domain.entities import Application, ApplicationStatus


class ApplicationRepository(IApplicationRepository):
    """Application repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_uid(self, application_uid: str) -> Optional[Application]:
        """Get application by uid"""
        # populate_existing: a conditional update elsewhere may have changed the row
        stmt = (
            select(Application)
            .where(Application.application_uid == application_uid)
            .execution_options(populate_existing=True)
        )
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def create(self, application: Application) -> Application:
        """Create a new application"""
        self.session.add(application)
        await self.session.flush()
        await self.session.refresh(application)
        return application

    async def update_status(
        self,
        application_uid: str,
        expected_status: ApplicationStatus,
        expected_version: int,
        new_status: ApplicationStatus,
    ) -> bool:
        """Compare-and-set on (status, version)"""
        stmt = (
            update(Application)
            .where(
                Application.application_uid == application_uid,
                Application.status == expected_status,
                Application.version == expected_version,
            )
            .values(
                status=new_status,
                version=Application.version + 1,
                updated_at=utc_now(),
            )
        )
        # Core UPDATE on the session's connection, inside its transaction
        connection = await self.session.connection()
        result = await connection.execute(stmt)
        return result.rowcount == 1

    async def get_latest_by_national_id(self, national_id: str) -> Optional[Application]:
        """Most recently created application for a national ID"""
        stmt = (
            select(Application)
            .where(Application.national_id == national_id.strip())
            .order_by(Application.created_at.desc())
            .limit(1)
        )
        result = await self.session.exec(stmt)
        return result.first()

    async def search(
        self,
        officer_email: Optional[str] = None,
        created_by_email: Optional[str] = None,
        status: Optional[ApplicationStatus] = None,
        limit: int = 50,
    ) -> List[Application]:
        """List applications newest first"""
        stmt = select(Application)

        # Identities compare case-insensitively
        if officer_email:
            stmt = stmt.where(func.lower(Application.officer_email) == officer_email.lower())
        if created_by_email:
            stmt = stmt.where(
                func.lower(Application.created_by_email) == created_by_email.lower()
            )
        if status:
            stmt = stmt.where(Application.status == status)

        stmt = stmt.order_by(Application.created_at.desc()).limit(limit)

        result = await self.session.exec(stmt)
        return list(result.all())
