"""
Get Timeline Use Case

Reconstructs the ordered history of an application.
"""

import logging
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError

from licensing.app.services.unit_of_work import UnitOfWork
from licensing.domain.errors import NotFoundError, PersistenceError
from licensing.domain.workflow import Actor, authorize_view, verify_chain
from licensing.libs.result import Result, Return

from .dtos import ApplicationEventView, ApplicationView, TimelineResponse

logger = logging.getLogger(__name__)


class GetTimelineUseCase:
    """
    Use case for reading an application and its event trail.

    Business Rules:
    - Read only
    - Events ordered by created_at, ties broken by id
    - The chained events must end at the application's current status;
      otherwise IntegrityError is returned instead of the data
    - A dealer viewer may only read applications it submitted
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, application_uid: str, viewer: Optional[Actor] = None
    ) -> Result[TimelineResponse]:
        """
        Execute get timeline use case.

        Args:
            application_uid: Application to read
            viewer: Authenticated caller, when the read is on behalf of one

        Returns:
            Result[TimelineResponse], or NotFoundError / ForbiddenError /
            IntegrityError / PersistenceError
        """
        async with self.uow:
            try:
                application = await self.uow.applications.get_by_uid(application_uid)
                if application is None:
                    return Return.err(
                        NotFoundError(f"Application {application_uid} not found")
                    )

                allowed = authorize_view(application, viewer)
                if allowed.is_err():
                    return allowed

                events = await self.uow.application_events.list_by_application(
                    application_uid
                )
            except SQLAlchemyError:
                logger.exception(f"Timeline read for {application_uid} failed")
                return Return.err(
                    PersistenceError("Timeline could not be loaded, please try again")
                )

            verified = verify_chain(application, events)
            if verified.is_err():
                logger.error(f"Timeline integrity failure: {verified.error.message}")
                return verified

            # Built before leaving the unit of work, which expires loaded rows
            return Return.ok(
                TimelineResponse(
                    application=ApplicationView.model_validate(application),
                    events=[ApplicationEventView.model_validate(event) for event in events],
                )
            )
