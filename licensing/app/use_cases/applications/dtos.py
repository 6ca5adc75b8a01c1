"""
Application Use Case DTOs (Data Transfer Objects)

Command/Response pattern for clean architecture separation:
- Commands: validated input of a use case, checked before any store access
- Responses: structured output, decoupled from HTTP response format
"""

from datetime import datetime
from enum import Enum
from typing import Any, List, Mapping, Optional, Sequence, Type, TypeVar, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from licensing.domain.entities import ActorRole, TransitionAction
from licensing.domain.errors import ValidationError
from licensing.libs.result import Result, Return

NOTE_MAX_LENGTH = 2000

CommandT = TypeVar("CommandT", bound=BaseModel)


def _required_text(value: Any) -> str:
    if value is None:
        raise ValueError("is required")
    text = str(value).strip()
    if not text:
        raise ValueError("must not be empty")
    return text


def _optional_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


REQUEST_LOCATIONS = ("body", "query", "path")


def validation_error_from(errors: Sequence[Mapping[str, Any]]) -> ValidationError:
    """One ValidationError naming every bad field as "field: problem" """
    problems = []
    for error in errors:
        loc = list(error.get("loc", ()))
        if len(loc) > 1 and loc[0] in REQUEST_LOCATIONS:
            loc = loc[1:]
        field = ".".join(str(part) for part in loc) or "body"
        message = str(error.get("msg", "")).removeprefix("Value error, ")
        problems.append(f"{field}: {message}")
    return ValidationError("; ".join(problems))


def parse_command(
    command_cls: Type[CommandT], data: Union[CommandT, Mapping[str, Any]]
) -> Result[CommandT]:
    """
    Validate raw input into a command.

    Returns:
        Result with the command, or ValidationError listing every bad field
    """
    if isinstance(data, command_cls):
        return Return.ok(data)
    try:
        return Return.ok(command_cls.model_validate(data))
    except PydanticValidationError as exc:
        return Return.err(validation_error_from(exc.errors()))


# ============================================================================
# Commands
# ============================================================================


class SubmitApplicationCommand(BaseModel):
    """
    Submit application command - a dealer files a new license request
    and assigns it to a reviewing officer.
    """

    applicant_name: str
    national_id: str
    firearm_uid: str
    officer_email: str

    address: Optional[str] = None
    phone: Optional[str] = None
    province: Optional[str] = None
    district: Optional[str] = None
    attachments: List[str] = Field(default_factory=list)

    # Actor, supplied by the identity provider
    actor_email: str
    actor_role: ActorRole

    @field_validator(
        "applicant_name",
        "national_id",
        "firearm_uid",
        "officer_email",
        "actor_email",
        mode="before",
    )
    @classmethod
    def required_text(cls, value: Any) -> str:
        return _required_text(value)

    @field_validator("address", "phone", "province", "district", mode="before")
    @classmethod
    def optional_text(cls, value: Any) -> Optional[str]:
        return _optional_text(value)

    @field_validator("attachments", mode="before")
    @classmethod
    def attachment_list(cls, value: Any) -> List[str]:
        if value is None:
            return []
        return value


class ApplyTransitionCommand(BaseModel):
    """Apply transition command - move an application with a named action"""

    application_uid: str
    action: TransitionAction
    actor_email: str
    actor_role: ActorRole
    note: Optional[str] = Field(default=None, max_length=NOTE_MAX_LENGTH)

    @field_validator("application_uid", "actor_email", mode="before")
    @classmethod
    def required_text(cls, value: Any) -> str:
        return _required_text(value)

    @field_validator("action", mode="before")
    @classmethod
    def normalize_action(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip().upper()
        return value

    @field_validator("note", mode="before")
    @classmethod
    def optional_text(cls, value: Any) -> Optional[str]:
        return _optional_text(value)


# ============================================================================
# Response DTOs
# ============================================================================


class ApplicationView(BaseModel):
    """Snapshot of an application row"""

    model_config = ConfigDict(from_attributes=True)

    application_uid: str
    applicant_name: str
    national_id: str
    address: Optional[str] = None
    phone: Optional[str] = None
    province: Optional[str] = None
    district: Optional[str] = None
    firearm_uid: str
    officer_email: str
    created_by_email: str
    attachments: List[str] = Field(default_factory=list)
    status: str
    version: int
    created_at: datetime
    updated_at: datetime

    @field_validator("attachments", mode="before")
    @classmethod
    def attachment_list(cls, value: Any) -> Any:
        # A NULL column reads as no attachments
        if value is None:
            return []
        return value

    @field_validator("status", mode="before")
    @classmethod
    def status_value(cls, value: Any) -> Any:
        if isinstance(value, Enum):
            return value.value
        return value


class ApplicationEventView(BaseModel):
    """One entry of an application timeline"""

    model_config = ConfigDict(from_attributes=True)

    id: int
    application_uid: str
    sequence: int
    from_status: Optional[str]
    to_status: str
    action: str
    actor_email: str
    actor_role: str
    note: Optional[str]
    created_at: datetime


class SubmitApplicationResponse(BaseModel):
    """Response for submit application use case"""

    application_uid: str
    status: str


class ApplyTransitionResponse(BaseModel):
    """Response for apply transition use case"""

    application_uid: str
    from_status: str
    status: str
    sequence: int


class TimelineResponse(BaseModel):
    """Application snapshot plus its ordered event history"""

    application: ApplicationView
    events: List[ApplicationEventView]


class ApplicationLookupResponse(BaseModel):
    """Response for lookup by national ID"""

    application_uid: str
    status: str


class ApplicationListResponse(BaseModel):
    """Response for list applications use case"""

    applications: List[ApplicationView]


class AvailableActionsResponse(BaseModel):
    """Actions the caller may apply to an application right now"""

    application_uid: str
    status: str
    actions: List[str]
