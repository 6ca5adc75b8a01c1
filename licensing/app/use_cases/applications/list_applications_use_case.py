"""
List Applications Use Case

Work queues for the portals: an officer's assigned applications, a
dealer's submissions, or every application in a status for oversight.
"""

from typing import Optional

from licensing.app.services.unit_of_work import UnitOfWork
from licensing.domain.entities import ActorRole, ApplicationStatus
from licensing.domain.errors import ValidationError
from licensing.domain.workflow import Actor
from licensing.libs.result import Result, Return

from .dtos import ApplicationListResponse, ApplicationView

MAX_LIMIT = 100


class ListApplicationsUseCase:
    """
    Use case for listing applications newest first.

    Business Rules:
    - limit must be between 1 and 100
    - status, when given, must be a known status
    - A firearm officer only sees applications assigned to them
    - A dealer only sees applications it submitted
    - Other roles see every application matching the filters
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self,
        viewer: Actor,
        status: Optional[str] = None,
        officer_email: Optional[str] = None,
        limit: int = 50,
    ) -> Result[ApplicationListResponse]:
        if limit < 1 or limit > MAX_LIMIT:
            return Return.err(
                ValidationError(f"limit: must be between 1 and {MAX_LIMIT}")
            )

        status_filter = None
        if status:
            try:
                status_filter = ApplicationStatus(status)
            except ValueError:
                return Return.err(ValidationError(f"status: unknown status {status}"))

        created_by_email = None
        if viewer.role == ActorRole.firearm_officer:
            officer_email = viewer.email
        elif viewer.role == ActorRole.dealer:
            created_by_email = viewer.email

        async with self.uow:
            applications = await self.uow.applications.search(
                officer_email=officer_email,
                created_by_email=created_by_email,
                status=status_filter,
                limit=limit,
            )

            return Return.ok(
                ApplicationListResponse(
                    applications=[
                        ApplicationView.model_validate(application)
                        for application in applications
                    ]
                )
            )
