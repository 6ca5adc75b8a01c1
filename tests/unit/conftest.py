import pytest
from unittest.mock import AsyncMock, MagicMock

from licensing.domain.entities import ActorRole, Application, ApplicationStatus
from licensing.domain.workflow import Actor

DEALER_EMAIL = "dealer@guns.example"
OFFICER_EMAIL = "officer@police.example"


@pytest.fixture
def mock_uow():
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)  # Must return False to not suppress exceptions
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()

    # Mock repositories
    uow.applications = MagicMock()
    uow.applications.get_by_uid = AsyncMock(return_value=None)
    uow.applications.create = AsyncMock(side_effect=lambda application: application)
    uow.applications.update_status = AsyncMock(return_value=True)
    uow.applications.get_latest_by_national_id = AsyncMock(return_value=None)
    uow.applications.search = AsyncMock(return_value=[])

    uow.application_events = MagicMock()
    uow.application_events.create = AsyncMock(side_effect=lambda event: event)
    uow.application_events.list_by_application = AsyncMock(return_value=[])

    return uow


@pytest.fixture
def dealer():
    return Actor(email=DEALER_EMAIL, role=ActorRole.dealer)


@pytest.fixture
def officer():
    return Actor(email=OFFICER_EMAIL, role=ActorRole.firearm_officer)


@pytest.fixture
def make_application():
    def _make(status=ApplicationStatus.assigned_to_officer, version=2, **overrides):
        fields = dict(
            applicant_name="Jane Moyo",
            national_id="63-123456-A-42",
            firearm_uid="GUN-0001",
            officer_email=OFFICER_EMAIL,
            created_by_email=DEALER_EMAIL,
            status=status,
            version=version,
        )
        fields.update(overrides)
        return Application(**fields)

    return _make
