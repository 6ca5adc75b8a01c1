"""
Use Case: Submit Application

A dealer files a license request and assigns it to a firearm officer.
"""

import logging
from typing import Any, Mapping, Union

from sqlalchemy.exc import SQLAlchemyError

from licensing.app.services.unit_of_work import UnitOfWork
from licensing.domain.entities import Application, ApplicationEvent, TransitionAction
from licensing.domain.errors import PersistenceError
from licensing.domain.workflow import Actor, TransitionEngine
from licensing.libs.result import Result, Return

from .dtos import SubmitApplicationCommand, SubmitApplicationResponse, parse_command

logger = logging.getLogger(__name__)


class SubmitApplicationUseCase:
    """
    Submit Application Use Case

    Command/Response Pattern:
    - Input: SubmitApplicationCommand (or its raw mapping)
    - Output: Result[SubmitApplicationResponse]

    Business Logic:
    1. Validate the command (no store access on failure)
    2. Check the actor's role may perform the submission transition
    3. Create the Application already in assigned_to_officer, version 2
    4. Append CREATE (null -> created) and ASSIGN_TO_OFFICER
       (created -> assigned_to_officer) events
    5. Commit once; a store failure rolls everything back
    """

    def __init__(self, uow: UnitOfWork, engine: TransitionEngine = None):
        self.uow = uow
        self.engine = engine or TransitionEngine()

    async def execute(
        self, command: Union[SubmitApplicationCommand, Mapping[str, Any]]
    ) -> Result[SubmitApplicationResponse]:
        """
        Execute submit application use case

        Returns:
            Result[SubmitApplicationResponse] with the new application_uid,
            or ValidationError / ForbiddenError / PersistenceError
        """
        parsed = parse_command(SubmitApplicationCommand, command)
        if parsed.is_err():
            return parsed
        command = parsed.value

        actor = Actor(email=command.actor_email, role=command.actor_role)
        authorized = self.engine.authorize_submission(actor)
        if authorized.is_err():
            return authorized
        rule = authorized.value

        async with self.uow:
            try:
                application = Application(
                    applicant_name=command.applicant_name,
                    national_id=command.national_id,
                    address=command.address,
                    phone=command.phone,
                    province=command.province,
                    district=command.district,
                    firearm_uid=command.firearm_uid,
                    officer_email=command.officer_email,
                    created_by_email=actor.email,
                    attachments=list(command.attachments),
                    status=rule.to_status,
                    version=2,
                )
                application = await self.uow.applications.create(application)
                application_uid = application.application_uid

                await self.uow.application_events.create(
                    ApplicationEvent(
                        application_uid=application_uid,
                        sequence=1,
                        from_status=None,
                        to_status=rule.from_status.value,
                        action=TransitionAction.CREATE.value,
                        actor_email=actor.email,
                        actor_role=actor.role.value,
                        note="Dealer created application",
                    )
                )
                await self.uow.application_events.create(
                    ApplicationEvent(
                        application_uid=application_uid,
                        sequence=2,
                        from_status=rule.from_status.value,
                        to_status=rule.to_status.value,
                        action=rule.action.value,
                        actor_email=actor.email,
                        actor_role=actor.role.value,
                        note=f"Assigned to officer {command.officer_email}",
                    )
                )

                # Commit transaction atomically
                await self.uow.commit()
            except SQLAlchemyError:
                logger.exception("Application submission failed, rolled back")
                await self.uow.rollback()
                return Return.err(
                    PersistenceError("Application could not be saved, please try again")
                )

        logger.info(
            f"Application {application_uid} submitted by {actor.email}, "
            f"assigned to {command.officer_email}"
        )
        return Return.ok(
            SubmitApplicationResponse(
                application_uid=application_uid, status=rule.to_status.value
            )
        )
