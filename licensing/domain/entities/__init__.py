"""
Licensing Workflow Domain Entities

All domain entities organized by model.
"""

from .enums import ActorRole, ApplicationStatus, TransitionAction
from .application import Application
from .application_event import ApplicationEvent

__all__ = [
    # Enums
    "ActorRole",
    "ApplicationStatus",
    "TransitionAction",
    # Entities
    "Application",
    "ApplicationEvent",
]
