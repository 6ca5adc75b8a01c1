from abc import ABC, abstractmethod
from typing import List, Optional

from licensing.domain.entities import Application, ApplicationStatus


class IApplicationRepository(ABC):
    """Application repository interface - application layer"""

    @abstractmethod
    async def get_by_uid(self, application_uid: str) -> Optional[Application]:
        """Get application by uid, always reflecting the stored row"""
        pass

    @abstractmethod
    async def create(self, application: Application) -> Application:
        """Create a new application"""
        pass

    @abstractmethod
    async def update_status(
        self,
        application_uid: str,
        expected_status: ApplicationStatus,
        expected_version: int,
        new_status: ApplicationStatus,
    ) -> bool:
        """
        Conditionally advance the status.

        The row is updated only while it still holds expected_status and
        expected_version; version is incremented on success.

        Returns:
            True if the row was updated, False if it changed in the meantime
        """
        pass

    @abstractmethod
    async def get_latest_by_national_id(self, national_id: str) -> Optional[Application]:
        """Most recently created application for a national ID"""
        pass

    @abstractmethod
    async def search(
        self,
        officer_email: Optional[str] = None,
        created_by_email: Optional[str] = None,
        status: Optional[ApplicationStatus] = None,
        limit: int = 50,
    ) -> List[Application]:
        """List applications newest first, optionally filtered"""
        pass
