from datetime import date, datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictBool, field_validator
from pydantic.alias_generators import to_camel

from models import CYCLE_STATUSES, WEEKDAYS

# camelCase on the wire, strict types, unknown keys (ids included) dropped

Status = Literal[CYCLE_STATUSES]
Weekday = Literal[WEEKDAYS]

TIME_PATTERN = r"^([01]\d|2[0-3]):[0-5]\d$"


class RequestModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        strict=True,
        extra="ignore",
    )

    def changes(self):
        # only the fields the caller sent, keyed by attribute name
        return self.model_dump(exclude_unset=True)


class InitializeCycles(RequestModel):
    start_date: date

    @field_validator("start_date", mode="before")
    @classmethod
    def parse_start_date(cls, value):
        # Clients send either "2024-01-01" or a full ISO timestamp
        if isinstance(value, datetime):
            return value.date()
        if isinstance(value, date):
            return value
        if not isinstance(value, str):
            raise ValueError("startDate must be an ISO date string")
        try:
            return date.fromisoformat(value)
        except ValueError:
            pass
        try:
            return datetime.fromisoformat(value.replace("Z", "+00:00")).date()
        except ValueError:
            raise ValueError(f"Invalid date: {value!r}") from None


class CycleUpdate(RequestModel):
    goal: Optional[str] = None
    status: Status = None


class DayUpdate(RequestModel):
    goal: Optional[str] = None
    is_completed: StrictBool = None
    notes: Optional[str] = None


class TaskCreate(RequestModel):
    day_id: int
    content: str = Field(min_length=1)
    is_completed: StrictBool = False


class TaskUpdate(RequestModel):
    content: str = Field(default=None, min_length=1)
    is_completed: StrictBool = None


class AlarmCreate(RequestModel):
    name: str = Field(min_length=1)
    time: str = Field(pattern=TIME_PATTERN)
    is_enabled: StrictBool = True
    repeat_days: Optional[List[Weekday]] = None
    message: Optional[str] = None
    sound: str = "default"


class AlarmUpdate(RequestModel):
    name: str = Field(default=None, min_length=1)
    time: str = Field(default=None, pattern=TIME_PATTERN)
    is_enabled: StrictBool = None
    repeat_days: Optional[List[Weekday]] = None
    message: Optional[str] = None
    sound: str = None
