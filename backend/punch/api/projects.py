from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from punch.core.clock import ensure_utc, format_elapsed, format_week, to_local
from punch.core.errors import AmbiguousOrInvalidLocalTime, ProjectNotFound, StateMismatch
from punch.db import store
from punch.db.models import Event
from punch.db.session import get_db
from punch.schemas.punch import NextDirectionResponse, PunchRequest
from punch.schemas.report import (
    DayTotal,
    EventOut,
    SummaryReportResponse,
    WeekTotal,
    WorkTimeOut,
)
from punch.services.punch import record_note, submit_punch
from punch.services.punch_state import direction_after
from punch.services.report import summary_report
from punch.services.worktime import WorkTime

router = APIRouter()


def _work_time_out(wt: WorkTime) -> WorkTimeOut:
    return WorkTimeOut(
        gross_seconds=int(wt.gross.total_seconds()),
        net_seconds=int(wt.net.total_seconds()),
        gross=format_elapsed(wt.gross),
        net=format_elapsed(wt.net),
    )


def _event_out(event: Event) -> EventOut:
    return EventOut(
        id=event.id,
        event_type=event.event_type,
        clock=ensure_utc(event.clock),
        local_time=to_local(event.clock),
    )


def _not_found(exc: ProjectNotFound) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))


@router.get(
    "/{project_id}/report",
    response_model=SummaryReportResponse,
    summary="Work time summary for recent days and weeks",
)
async def get_report(
    project_id: int,
    db: AsyncSession = Depends(get_db),
) -> SummaryReportResponse:
    try:
        report = await summary_report(db, project_id)
    except ProjectNotFound as exc:
        raise _not_found(exc)
    except AmbiguousOrInvalidLocalTime as exc:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=str(exc),
        )

    return SummaryReportResponse(
        next_direction=report.next_direction,
        days=[DayTotal(day=day, work_time=_work_time_out(wt)) for day, wt in report.days],
        weeks=[
            WeekTotal(
                iso_year=week[0],
                iso_week=week[1],
                label=format_week(week),
                work_time=_work_time_out(wt),
            )
            for week, wt in report.weeks
        ],
        recent_events=[_event_out(e) for e in report.recent_events],
        anomalies=[a.message for a in report.anomalies],
    )


@router.get(
    "/{project_id}/next-direction",
    response_model=NextDirectionResponse,
    summary="Direction the next punch must have",
)
async def get_next_direction(
    project_id: int,
    db: AsyncSession = Depends(get_db),
) -> NextDirectionResponse:
    try:
        await store.get_project(db, project_id)
    except ProjectNotFound as exc:
        raise _not_found(exc)
    last_event = await store.last_punch_event(db, project_id)
    return NextDirectionResponse(next_direction=direction_after(last_event))


@router.post(
    "/{project_id}/punch",
    response_model=EventOut,
    status_code=status.HTTP_201_CREATED,
    summary="Punch in or out",
)
async def punch(
    project_id: int,
    body: PunchRequest,
    db: AsyncSession = Depends(get_db),
) -> EventOut:
    try:
        event = await submit_punch(db, project_id, body.direction)
    except ProjectNotFound as exc:
        raise _not_found(exc)
    except StateMismatch as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc))
    return _event_out(event)


@router.post(
    "/{project_id}/notes",
    response_model=EventOut,
    status_code=status.HTTP_201_CREATED,
    summary="Record a timestamped note",
)
async def add_note(
    project_id: int,
    db: AsyncSession = Depends(get_db),
) -> EventOut:
    try:
        event = await record_note(db, project_id)
    except ProjectNotFound as exc:
        raise _not_found(exc)
    return _event_out(event)
