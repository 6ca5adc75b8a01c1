"""
Get Available Actions Use Case

Tells a portal which workflow buttons to offer the caller.
"""

from licensing.app.services.unit_of_work import UnitOfWork
from licensing.domain.entities import ApplicationStatus
from licensing.domain.errors import NotFoundError
from licensing.domain.workflow import Actor, TransitionEngine, authorize_view
from licensing.libs.result import Result, Return

from .dtos import AvailableActionsResponse


class GetAvailableActionsUseCase:
    """Actions from the transition table the viewer may apply right now"""

    def __init__(self, uow: UnitOfWork, engine: TransitionEngine = None):
        self.uow = uow
        self.engine = engine or TransitionEngine()

    async def execute(
        self, application_uid: str, viewer: Actor
    ) -> Result[AvailableActionsResponse]:
        async with self.uow:
            application = await self.uow.applications.get_by_uid(application_uid)
            if application is None:
                return Return.err(NotFoundError(f"Application {application_uid} not found"))

            allowed = authorize_view(application, viewer)
            if allowed.is_err():
                return allowed

            actions = self.engine.available_actions(application, viewer)
            return Return.ok(
                AvailableActionsResponse(
                    application_uid=application.application_uid,
                    status=ApplicationStatus(application.status).value,
                    actions=[action.value for action in actions],
                )
            )
