"""
Find Application By National ID Use Case

Lets a dealer resume tracking an application from the applicant's
national ID.
"""

from typing import Optional

from licensing.app.services.unit_of_work import UnitOfWork
from licensing.domain.entities import ApplicationStatus
from licensing.domain.errors import NotFoundError, ValidationError
from licensing.domain.workflow import Actor, authorize_view
from licensing.libs.result import Result, Return

from .dtos import ApplicationLookupResponse


class FindApplicationByNationalIdUseCase:
    """
    Use case for looking up the latest application of an applicant.

    Business Rules:
    - National ID is required
    - Most recently created application wins
    - A dealer viewer must be the submitter of that application
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, national_id: str, viewer: Optional[Actor] = None
    ) -> Result[ApplicationLookupResponse]:
        national_id = (national_id or "").strip()
        if not national_id:
            return Return.err(ValidationError("national_id: must not be empty"))

        async with self.uow:
            application = await self.uow.applications.get_latest_by_national_id(
                national_id
            )
            if application is None:
                return Return.err(
                    NotFoundError("No application found for this national ID")
                )

            allowed = authorize_view(application, viewer)
            if allowed.is_err():
                return allowed

            return Return.ok(
                ApplicationLookupResponse(
                    application_uid=application.application_uid,
                    status=ApplicationStatus(application.status).value,
                )
            )
