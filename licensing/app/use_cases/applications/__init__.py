"""
Application Use Cases

License application lifecycle: submission, transitions, timeline and
portal lookups.
"""

from .apply_transition_use_case import ApplyTransitionUseCase
from .dtos import (
    ApplicationEventView,
    ApplicationListResponse,
    ApplicationLookupResponse,
    ApplicationView,
    ApplyTransitionCommand,
    ApplyTransitionResponse,
    AvailableActionsResponse,
    SubmitApplicationCommand,
    SubmitApplicationResponse,
    TimelineResponse,
)
from .find_application_by_national_id_use_case import FindApplicationByNationalIdUseCase
from .get_available_actions_use_case import GetAvailableActionsUseCase
from .get_timeline_use_case import GetTimelineUseCase
from .list_applications_use_case import ListApplicationsUseCase
from .submit_application_use_case import SubmitApplicationUseCase

__all__ = [
    # Use cases
    "SubmitApplicationUseCase",
    "ApplyTransitionUseCase",
    "GetTimelineUseCase",
    "FindApplicationByNationalIdUseCase",
    "ListApplicationsUseCase",
    "GetAvailableActionsUseCase",
    # Commands
    "SubmitApplicationCommand",
    "ApplyTransitionCommand",
    # Responses
    "SubmitApplicationResponse",
    "ApplyTransitionResponse",
    "TimelineResponse",
    "ApplicationView",
    "ApplicationEventView",
    "ApplicationLookupResponse",
    "ApplicationListResponse",
    "AvailableActionsResponse",
]
