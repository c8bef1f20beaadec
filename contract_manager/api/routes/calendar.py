"""Calendar API routes — derived events, statistics, month grid and .ics export."""

import logging
from datetime import date, datetime
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import Response

from contract_manager.api.deps import get_user_id
from contract_manager.api.schemas import (
    EventItem,
    EventListResponse,
    GridResponse,
    StatsResponse,
)
from contract_manager.models import CATEGORY_STYLES, DashboardStats
from contract_manager.services.calendar import CalendarService
from contract_manager.services.calendar_grid import WEEKDAY_NAMES
from contract_manager.services.ics import EXPORT_FILENAME
from contract_manager.services.status import event_status

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/api/calendar/events", response_model=EventListResponse)
async def list_events(
    search: str = "",
    event_type: Optional[str] = None,
    status: Optional[str] = None,
    user_id: str = Depends(get_user_id),
):
    """All derived events of the user, filtered and sorted by date."""
    service = CalendarService()
    now = datetime.now()
    events = service.filtered_events(user_id, now, search, event_type, status)
    settings = service.settings
    items = []
    for event in events:
        style = CATEGORY_STYLES[event.event_type]
        items.append(EventItem(
            event=event,
            status=event_status(
                event, now, settings.event_urgent_days, settings.event_upcoming_days
            ).value,
            label=style.label(service.language),
            icon=style.icon,
            color=style.color,
        ))
    return EventListResponse(events=items, total=len(items))


@router.get("/api/calendar/stats", response_model=StatsResponse)
async def calendar_stats(user_id: str = Depends(get_user_id)):
    service = CalendarService()
    return StatsResponse(stats=service.stats(user_id, datetime.now()))


@router.get("/api/calendar/dashboard", response_model=DashboardStats)
async def dashboard_stats(user_id: str = Depends(get_user_id)):
    """Portfolio overview: risk counts, renewals due soon, top sectors."""
    return CalendarService().dashboard(user_id, datetime.now())


@router.get("/api/calendar/grid", response_model=GridResponse)
async def month_grid(
    year: int = Query(..., ge=1, le=9999),
    month: int = Query(..., ge=1, le=12),
    user_id: str = Depends(get_user_id),
):
    service = CalendarService()
    grid = service.month_grid(user_id, year, month, date.today())
    return GridResponse(
        grid=grid,
        weekdays=WEEKDAY_NAMES.get(service.language, WEEKDAY_NAMES["en"]),
    )


@router.get("/api/calendar/export.ics")
async def export_calendar(
    search: str = "",
    event_type: Optional[str] = None,
    status: Optional[str] = None,
    user_id: str = Depends(get_user_id),
):
    """Download the currently filtered events as an iCalendar file."""
    service = CalendarService()
    events = service.filtered_events(user_id, datetime.now(), search, event_type, status)
    if not events:
        raise HTTPException(status_code=404, detail="No events to export")
    logger.info(f"Exporting {len(events)} events for {user_id}")
    return Response(
        content=service.export(events),
        media_type="text/calendar",
        headers={"Content-Disposition": f'attachment; filename="{EXPORT_FILENAME}"'},
    )
