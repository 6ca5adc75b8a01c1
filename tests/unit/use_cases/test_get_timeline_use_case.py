"""
Unit tests for Get Timeline Use Case
"""

import pytest
from unittest.mock import AsyncMock
from sqlalchemy.exc import OperationalError

from licensing.app.use_cases.applications import GetTimelineUseCase
from licensing.domain.entities import ActorRole, ApplicationEvent, ApplicationStatus
from licensing.domain.workflow import Actor

from tests.unit.conftest import DEALER_EMAIL, OFFICER_EMAIL


def chain(uid, *steps):
    """Build stored events from (from_status, to_status, action) steps"""
    return [
        ApplicationEvent(
            id=index,
            application_uid=uid,
            sequence=index,
            from_status=from_status,
            to_status=to_status,
            action=action,
            actor_email=DEALER_EMAIL,
            actor_role="dealer",
        )
        for index, (from_status, to_status, action) in enumerate(steps, start=1)
    ]


SUBMITTED = (
    (None, "created", "CREATE"),
    ("created", "assigned_to_officer", "ASSIGN_TO_OFFICER"),
)


@pytest.mark.asyncio
async def test_get_timeline_success(mock_uow, make_application, officer):
    # Arrange
    application = make_application()
    uid = application.application_uid
    mock_uow.applications.get_by_uid.return_value = application
    mock_uow.application_events.list_by_application.return_value = chain(uid, *SUBMITTED)

    # Act
    result = await GetTimelineUseCase(mock_uow).execute(uid, viewer=officer)

    # Assert
    assert result.is_ok()
    timeline = result.value
    assert timeline.application.application_uid == uid
    assert timeline.application.status == "assigned_to_officer"
    assert timeline.application.version == 2
    assert [event.sequence for event in timeline.events] == [1, 2]
    assert timeline.events[0].from_status is None
    assert timeline.events[1].to_status == "assigned_to_officer"

    mock_uow.application_events.list_by_application.assert_called_once_with(uid)
    mock_uow.commit.assert_not_called()


@pytest.mark.asyncio
async def test_get_timeline_without_viewer(mock_uow, make_application):
    application = make_application()
    mock_uow.applications.get_by_uid.return_value = application
    mock_uow.application_events.list_by_application.return_value = chain(
        application.application_uid, *SUBMITTED
    )

    result = await GetTimelineUseCase(mock_uow).execute(application.application_uid)

    assert result.is_ok()


@pytest.mark.asyncio
async def test_get_timeline_not_found(mock_uow):
    result = await GetTimelineUseCase(mock_uow).execute("missing-uid")

    assert result.is_err()
    assert result.error.code == "APPLICATION_NOT_FOUND"
    mock_uow.application_events.list_by_application.assert_not_called()


@pytest.mark.asyncio
async def test_get_timeline_status_mismatch(mock_uow, make_application):
    """A status the events do not lead to is reported, not returned"""
    application = make_application(status=ApplicationStatus.approved)
    mock_uow.applications.get_by_uid.return_value = application
    mock_uow.application_events.list_by_application.return_value = chain(
        application.application_uid, *SUBMITTED
    )

    result = await GetTimelineUseCase(mock_uow).execute(application.application_uid)

    assert result.is_err()
    assert result.error.code == "INTEGRITY_ERROR"
    assert result.error.retryable is False


@pytest.mark.asyncio
async def test_get_timeline_without_events(mock_uow, make_application):
    application = make_application()
    mock_uow.applications.get_by_uid.return_value = application

    result = await GetTimelineUseCase(mock_uow).execute(application.application_uid)

    assert result.is_err()
    assert result.error.code == "INTEGRITY_ERROR"


@pytest.mark.asyncio
async def test_get_timeline_dealer_must_be_submitter(mock_uow, make_application):
    application = make_application()
    mock_uow.applications.get_by_uid.return_value = application
    mock_uow.application_events.list_by_application.return_value = chain(
        application.application_uid, *SUBMITTED
    )

    stranger = Actor(email="rival@guns.example", role=ActorRole.dealer)
    owner = Actor(email=DEALER_EMAIL, role=ActorRole.dealer)

    denied = await GetTimelineUseCase(mock_uow).execute(
        application.application_uid, viewer=stranger
    )
    allowed = await GetTimelineUseCase(mock_uow).execute(
        application.application_uid, viewer=owner
    )

    assert denied.is_err()
    assert denied.error.code == "FORBIDDEN"
    assert allowed.is_ok()


@pytest.mark.asyncio
async def test_get_timeline_store_failure(mock_uow, make_application):
    application = make_application()
    mock_uow.applications.get_by_uid.return_value = application
    mock_uow.application_events.list_by_application = AsyncMock(
        side_effect=OperationalError("SELECT", {}, Exception("no such table"))
    )

    result = await GetTimelineUseCase(mock_uow).execute(
        application.application_uid,
        viewer=Actor(email=OFFICER_EMAIL, role=ActorRole.firearm_officer),
    )

    assert result.is_err()
    assert result.error.code == "PERSISTENCE_ERROR"


@pytest.mark.asyncio
async def test_get_timeline_null_attachments(mock_uow, make_application):
    """A NULL attachments column is shown as an empty list"""
    application = make_application(attachments=None)
    mock_uow.applications.get_by_uid.return_value = application
    mock_uow.application_events.list_by_application.return_value = chain(
        application.application_uid, *SUBMITTED
    )

    result = await GetTimelineUseCase(mock_uow).execute(application.application_uid)

    assert result.is_ok()
    assert result.value.application.attachments == []
