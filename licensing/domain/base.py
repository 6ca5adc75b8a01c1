import uuid
from datetime import UTC, datetime


def generate_uuid() -> str:
    return str(uuid.uuid4())


def utc_now() -> datetime:
    # Stored naive, always UTC
    return datetime.now(UTC).replace(tzinfo=None)
