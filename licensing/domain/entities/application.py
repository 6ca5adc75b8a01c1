"""
Application Entity

Current-state projection of one firearm license request.
"""

from datetime import datetime
from typing import Optional

from sqlmodel import JSON, Column, DateTime, Field, Index, SQLModel

from licensing.domain.base import generate_uuid, utc_now

from .enums import ApplicationStatus


class Application(SQLModel, table=True):
    """
    Application entity - one row per license request.

    Business Rules:
    - application_uid and created_at never change
    - status always equals to_status of the latest event
    - version counts the events recorded so far
    - Only the workflow use cases write status/version
    - Never deleted
    """

    __tablename__ = "applications"

    application_uid: str = Field(
        default_factory=generate_uuid, primary_key=True, max_length=36
    )

    # Applicant identity
    applicant_name: str = Field(max_length=255)
    national_id: str = Field(max_length=64)
    address: Optional[str] = Field(default=None, max_length=500)
    phone: Optional[str] = Field(default=None, max_length=32)
    province: Optional[str] = Field(default=None, max_length=100)
    district: Optional[str] = Field(default=None, max_length=100)

    # Case details
    firearm_uid: str = Field(max_length=64)
    officer_email: str = Field(max_length=255)
    created_by_email: str = Field(max_length=255)
    attachments: list = Field(default_factory=list, sa_column=Column(JSON))

    status: ApplicationStatus = Field(default=ApplicationStatus.created)
    version: int = Field(default=0)

    # Timestamps
    created_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))
    updated_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))

    __table_args__ = (
        Index("idx_application_national_id", "national_id"),
        Index("idx_application_officer_email", "officer_email"),
        Index("idx_application_created_by", "created_by_email"),
        Index("idx_application_status", "status"),
    )
