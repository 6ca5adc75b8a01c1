"""
Application API Routes

License application lifecycle endpoints used by the dealer, police and
oversight portals. The caller's identity and role come from the bearer
token; request bodies never carry them.
"""

from typing import List, Optional, Union

from fastapi import APIRouter, Depends, Query, status
from pydantic import BaseModel, Field

from licensing.api.error import ClientError, ServerError
from licensing.app.services.unit_of_work import UnitOfWork
from licensing.app.use_cases.applications import (
    ApplicationListResponse,
    ApplicationLookupResponse,
    ApplyTransitionResponse,
    ApplyTransitionUseCase,
    AvailableActionsResponse,
    FindApplicationByNationalIdUseCase,
    GetAvailableActionsUseCase,
    GetTimelineUseCase,
    ListApplicationsUseCase,
    SubmitApplicationResponse,
    SubmitApplicationUseCase,
    TimelineResponse,
)
from licensing.depends import get_current_actor, get_unit_of_work
from licensing.domain.errors import IntegrityError, PersistenceError
from licensing.domain.workflow import Actor
from licensing.libs.result import Error

router = APIRouter(prefix="/applications", tags=["Applications"])

CLIENT_ERROR_STATUS = {
    "VALIDATION_ERROR": status.HTTP_400_BAD_REQUEST,
    "FORBIDDEN": status.HTTP_403_FORBIDDEN,
    "APPLICATION_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "ILLEGAL_TRANSITION": status.HTTP_409_CONFLICT,
}


def raise_for_error(error: Error):
    """Translate a use case error into the HTTP exception the handlers render"""
    if error.code in CLIENT_ERROR_STATUS:
        raise ClientError(error, status_code=CLIENT_ERROR_STATUS[error.code])
    if isinstance(error, PersistenceError):
        raise ServerError(
            error,
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            public_message="Please try again",
        )
    if isinstance(error, IntegrityError):
        raise ServerError(error, public_message="Please contact support")
    raise ServerError(error)


class SubmitApplicationRequest(BaseModel):
    """
    Submit application HTTP request payload

    Fields are loosely typed here; the use case validates them so that
    every input problem is reported the same way.
    """

    applicant_name: Optional[str] = None
    national_id: Optional[str] = None
    address: Optional[str] = None
    phone: Optional[str] = None
    province: Optional[str] = None
    district: Optional[str] = None
    firearm_uid: Optional[Union[str, int]] = None
    officer_email: Optional[str] = None
    attachments: Optional[List[str]] = Field(default=None)


class TransitionRequest(BaseModel):
    """Apply transition HTTP request payload"""

    action: Optional[str] = Field(None, description="Action name, e.g. START_REVIEW")
    note: Optional[str] = Field(None, description="Optional free-text note")


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=SubmitApplicationResponse,
)
async def submit_application(
    request: SubmitApplicationRequest,
    actor: Actor = Depends(get_current_actor),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Submit Application

    A dealer files a license request assigned to a firearm officer.

    Raises:
        - 400 Bad Request: VALIDATION_ERROR
        - 401 Unauthorized: Invalid or expired JWT
        - 403 Forbidden: FORBIDDEN (role may not submit)
        - 503 Service Unavailable: PERSISTENCE_ERROR
    """
    data = request.model_dump()
    data["actor_email"] = actor.email
    data["actor_role"] = actor.role

    result = await SubmitApplicationUseCase(uow).execute(data)
    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.get(
    "",
    status_code=status.HTTP_200_OK,
    response_model=ApplicationListResponse,
)
async def list_applications(
    actor: Actor = Depends(get_current_actor),
    uow: UnitOfWork = Depends(get_unit_of_work),
    status_filter: Optional[str] = Query(None, alias="status", description="Filter by status"),
    officer_email: Optional[str] = Query(None, description="Filter by assigned officer"),
    limit: int = Query(50, description="Maximum number of applications (1-100)"),
):
    """
    List Applications

    Officers get their assigned queue, dealers their own submissions,
    oversight roles every application matching the filters.
    """
    result = await ListApplicationsUseCase(uow).execute(
        viewer=actor, status=status_filter, officer_email=officer_email, limit=limit
    )
    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.get(
    "/by-national-id/{national_id}",
    status_code=status.HTTP_200_OK,
    response_model=ApplicationLookupResponse,
)
async def find_by_national_id(
    national_id: str,
    actor: Actor = Depends(get_current_actor),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Find Latest Application By National ID

    Raises:
        - 403 Forbidden: dealer is not the submitter
        - 404 Not Found: APPLICATION_NOT_FOUND
    """
    result = await FindApplicationByNationalIdUseCase(uow).execute(national_id, viewer=actor)
    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.post(
    "/{application_uid}/transitions",
    status_code=status.HTTP_200_OK,
    response_model=ApplyTransitionResponse,
)
async def apply_transition(
    application_uid: str,
    request: TransitionRequest,
    actor: Actor = Depends(get_current_actor),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Apply Transition

    Moves the application with a named action from the transition table.

    Raises:
        - 400 Bad Request: VALIDATION_ERROR
        - 403 Forbidden: FORBIDDEN (role or identity not allowed)
        - 404 Not Found: APPLICATION_NOT_FOUND
        - 409 Conflict: ILLEGAL_TRANSITION
        - 503 Service Unavailable: CONCURRENT_UPDATE, PERSISTENCE_ERROR
    """
    result = await ApplyTransitionUseCase(uow).execute(
        {
            "application_uid": application_uid,
            "action": request.action,
            "note": request.note,
            "actor_email": actor.email,
            "actor_role": actor.role,
        }
    )
    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.get(
    "/{application_uid}/timeline",
    status_code=status.HTTP_200_OK,
    response_model=TimelineResponse,
)
async def get_timeline(
    application_uid: str,
    actor: Actor = Depends(get_current_actor),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Get Application Timeline

    Returns the application snapshot and its events, oldest first.

    Raises:
        - 403 Forbidden: dealer is not the submitter
        - 404 Not Found: APPLICATION_NOT_FOUND
        - 500 Internal Server Error: INTEGRITY_ERROR
    """
    result = await GetTimelineUseCase(uow).execute(application_uid, viewer=actor)
    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.get(
    "/{application_uid}/actions",
    status_code=status.HTTP_200_OK,
    response_model=AvailableActionsResponse,
)
async def get_available_actions(
    application_uid: str,
    actor: Actor = Depends(get_current_actor),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """Actions the caller may apply to the application right now"""
    result = await GetAvailableActionsUseCase(uow).execute(application_uid, viewer=actor)
    if result.is_err():
        raise_for_error(result.error)

    return result.value
