from datetime import date, datetime
from typing import Literal

from pydantic import BaseModel


class WorkTimeOut(BaseModel):
    gross_seconds: int
    net_seconds: int
    gross: str  # "<hours>h<minutes>m"
    net: str


class DayTotal(BaseModel):
    day: date
    work_time: WorkTimeOut


class WeekTotal(BaseModel):
    iso_year: int
    iso_week: int
    label: str  # "2026-W42"
    work_time: WorkTimeOut


class EventOut(BaseModel):
    id: int
    event_type: Literal["in", "out", "note"]
    clock: datetime
    local_time: datetime


class SummaryReportResponse(BaseModel):
    next_direction: Literal["in", "out"]
    days: list[DayTotal]
    weeks: list[WeekTotal]
    recent_events: list[EventOut]
    anomalies: list[str]
