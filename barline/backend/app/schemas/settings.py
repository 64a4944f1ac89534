from pydantic import BaseModel, RootModel
from typing import Dict


class DayHoursSchema(BaseModel):
    open: str  # "HH:MM"
    close: str


class BusinessHoursPayload(RootModel[Dict[str, DayHoursSchema]]):
    pass


class TimezonePayload(BaseModel):
    timezone: str
