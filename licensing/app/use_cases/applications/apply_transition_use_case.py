"""
Use Case: Apply Transition

Moves an application to its next status through a named action and
records the change in the event trail.
"""

import logging
from typing import Any, Mapping, Union

from sqlalchemy.exc import IntegrityError as StoreIntegrityError
from sqlalchemy.exc import SQLAlchemyError

from licensing.app.services.unit_of_work import UnitOfWork
from licensing.domain.entities import ApplicationEvent
from licensing.domain.errors import ConcurrentUpdateError, NotFoundError, PersistenceError
from licensing.domain.workflow import Actor, TransitionEngine
from licensing.libs.result import Result, Return

from .dtos import ApplyTransitionCommand, ApplyTransitionResponse, parse_command

logger = logging.getLogger(__name__)


class ApplyTransitionUseCase:
    """
    Apply a named action to an application.

    Business Logic:
    1. Validate the command (no store access on failure)
    2. Re-read the application inside the transaction
    3. Resolve the transition table entry for (status, action) and check
       the actor's role and identity against it
    4. Conditionally update status/version (compare-and-set on the values
       read in step 2)
    5. Append the event at the next sequence position
    6. Commit once

    A lost compare-and-set, or a duplicate (application_uid, sequence),
    means another transition won; the call fails with ConcurrentUpdateError
    and writes nothing.
    """

    def __init__(self, uow: UnitOfWork, engine: TransitionEngine = None):
        self.uow = uow
        self.engine = engine or TransitionEngine()

    async def execute(
        self, command: Union[ApplyTransitionCommand, Mapping[str, Any]]
    ) -> Result[ApplyTransitionResponse]:
        """
        Execute apply transition use case.

        Returns:
            Result[ApplyTransitionResponse] with the new status, or
            ValidationError / NotFoundError / IllegalTransitionError /
            ForbiddenError / PersistenceError
        """
        parsed = parse_command(ApplyTransitionCommand, command)
        if parsed.is_err():
            return parsed
        command = parsed.value

        actor = Actor(email=command.actor_email, role=command.actor_role)
        uid = command.application_uid

        async with self.uow:
            try:
                application = await self.uow.applications.get_by_uid(uid)
                if application is None:
                    return Return.err(NotFoundError(f"Application {uid} not found"))

                resolved = self.engine.resolve(application, command.action, actor)
                if resolved.is_err():
                    logger.warning(
                        f"Transition {command.action.value} on {uid} by "
                        f"{actor.email} ({actor.role.value}) refused: {resolved.error.code}"
                    )
                    return resolved
                rule = resolved.value

                expected_version = application.version
                updated = await self.uow.applications.update_status(
                    uid, rule.from_status, expected_version, rule.to_status
                )
                if not updated:
                    await self.uow.rollback()
                    return Return.err(
                        ConcurrentUpdateError(
                            f"Application {uid} changed while processing, please try again"
                        )
                    )

                event = await self.uow.application_events.create(
                    ApplicationEvent(
                        application_uid=uid,
                        sequence=expected_version + 1,
                        from_status=rule.from_status.value,
                        to_status=rule.to_status.value,
                        action=rule.action.value,
                        actor_email=actor.email,
                        actor_role=actor.role.value,
                        note=command.note,
                    )
                )

                await self.uow.commit()
            except StoreIntegrityError:
                await self.uow.rollback()
                return Return.err(
                    ConcurrentUpdateError(
                        f"Application {uid} changed while processing, please try again"
                    )
                )
            except SQLAlchemyError:
                logger.exception(f"Transition on application {uid} failed, rolled back")
                await self.uow.rollback()
                return Return.err(
                    PersistenceError("Transition could not be saved, please try again")
                )

        logger.info(
            f"Application {uid}: {rule.from_status.value} -> {rule.to_status.value} "
            f"({rule.action.value} by {actor.email})"
        )
        return Return.ok(
            ApplyTransitionResponse(
                application_uid=uid,
                from_status=rule.from_status.value,
                status=rule.to_status.value,
                sequence=event.sequence,
            )
        )
