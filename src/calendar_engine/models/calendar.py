"""Calendar metadata model."""

from pydantic import BaseModel


class CalendarInfo(BaseModel):
    """Calendar summary for presentation layers."""

    name: str
    timezone: str
    is_active: bool = False
    event_count: int = 0

    model_config = {"frozen": True}
