"""
Use Cases

Organized into domain folders:
- applications/: License application lifecycle

Import from subdirectories for better organization.
"""

from .applications import (
    ApplyTransitionUseCase,
    FindApplicationByNationalIdUseCase,
    GetAvailableActionsUseCase,
    GetTimelineUseCase,
    ListApplicationsUseCase,
    SubmitApplicationUseCase,
)

__all__ = [
    "SubmitApplicationUseCase",
    "ApplyTransitionUseCase",
    "GetTimelineUseCase",
    "FindApplicationByNationalIdUseCase",
    "ListApplicationsUseCase",
    "GetAvailableActionsUseCase",
]
