"""
ApplicationEvent Entity

Immutable audit trail of application status transitions.
"""

from datetime import datetime
from typing import Optional

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from licensing.domain.base import utc_now


class ApplicationEvent(SQLModel, table=True):
    """
    ApplicationEvent entity - one accepted status transition.

    Business Rules:
    - Immutable (never updated or deleted)
    - from_status is null only for the first event of an application
    - sequence is the 1-based position in the application's chain;
      (application_uid, sequence) is unique
    - Ordered by created_at, ties broken by id
    """

    __tablename__ = "application_events"

    id: Optional[int] = Field(default=None, primary_key=True)

    application_uid: str = Field(
        foreign_key="applications.application_uid", nullable=False, max_length=36
    )
    sequence: int = Field(nullable=False)

    from_status: Optional[str] = Field(default=None, max_length=50)
    to_status: str = Field(max_length=50)
    action: str = Field(max_length=50)  # e.g., "CREATE", "APPROVE"

    actor_email: str = Field(max_length=255)
    actor_role: str = Field(max_length=50)
    note: Optional[str] = Field(default=None, max_length=2000)

    # Timestamps
    created_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))

    __table_args__ = (
        Index("idx_event_app_sequence", "application_uid", "sequence", unique=True),
        Index("idx_event_app_created_at", "application_uid", "created_at"),
    )
