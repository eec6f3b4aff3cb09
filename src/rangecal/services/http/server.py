from __future__ import annotations

import datetime as dt
import logging
from typing import Any, Dict, List, Optional

from fastapi import Depends, FastAPI, HTTPException, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from ...api import CachedRangePayload, EventCreateRequest, EventPayload, EventUpdateRequest
from ...domain import CalendarDate
from ...errors import NotFoundError, RemoteFailure, ValidationError
from ..context import ServiceContext, build_events_manager
from ..interface import EventsManagerInterface

logger = logging.getLogger(__name__)

app = FastAPI(title="rangecal API", version="0.1.0")
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def get_events_manager(request: Request) -> EventsManagerInterface:
    manager: Optional[EventsManagerInterface] = getattr(request.app.state, "events_manager", None)
    if manager is None:
        manager = build_events_manager(ServiceContext())
        request.app.state.events_manager = manager
    return manager


@app.exception_handler(ValidationError)
async def _validation_error(_: Request, exc: ValidationError) -> JSONResponse:
    return JSONResponse(status_code=422, content={"detail": str(exc)})


@app.exception_handler(NotFoundError)
async def _not_found(_: Request, exc: NotFoundError) -> JSONResponse:
    return JSONResponse(status_code=404, content={"detail": str(exc)})


@app.exception_handler(RemoteFailure)
async def _remote_failure(_: Request, exc: RemoteFailure) -> JSONResponse:
    logger.warning("Remote event store failed: %s", exc)
    return JSONResponse(status_code=502, content={"detail": str(exc)})


@app.get("/events", response_model=List[EventPayload])
async def list_events(
    start: dt.date = Query(...),
    end: dt.date = Query(...),
    manager: EventsManagerInterface = Depends(get_events_manager),
) -> List[EventPayload]:
    events = await manager.resolve_range(CalendarDate.from_date(start), CalendarDate.from_date(end))
    return [EventPayload.from_domain(event) for event in events]


@app.get("/events/cached", response_model=CachedRangePayload)
async def list_cached_events(
    start: dt.date = Query(...),
    end: dt.date = Query(...),
    manager: EventsManagerInterface = Depends(get_events_manager),
) -> CachedRangePayload:
    events = manager.get_local_if_available(CalendarDate.from_date(start), CalendarDate.from_date(end))
    if events is None:
        return CachedRangePayload(available=False)
    return CachedRangePayload(available=True, events=[EventPayload.from_domain(event) for event in events])


@app.get("/events/{event_id}", response_model=EventPayload)
async def get_event(event_id: str, manager: EventsManagerInterface = Depends(get_events_manager)) -> EventPayload:
    event = manager.find_by_id(event_id)
    if event is None:
        raise HTTPException(status_code=404, detail=f"event with ID {event_id} was not found")
    return EventPayload.from_domain(event)


@app.post("/events", response_model=EventPayload, status_code=201)
async def create_event(
    payload: EventCreateRequest,
    manager: EventsManagerInterface = Depends(get_events_manager),
) -> EventPayload:
    created = await manager.create(payload.to_domain())
    logger.debug("Event %s created through the API", created.id)
    return EventPayload.from_domain(created)


@app.patch("/events/{event_id}", response_model=EventPayload)
async def update_event(
    event_id: str,
    payload: EventUpdateRequest,
    manager: EventsManagerInterface = Depends(get_events_manager),
) -> EventPayload:
    updated = await manager.update(event_id, payload.to_changes())
    return EventPayload.from_domain(updated)


@app.delete("/events/{event_id}")
async def delete_event(event_id: str, manager: EventsManagerInterface = Depends(get_events_manager)) -> Dict[str, Any]:
    removed = await manager.remove(event_id)
    return {"deleted": removed.id}


def run_local_server(
    host: str = "127.0.0.1",
    port: int = 8000,
    *,
    manager: Optional[EventsManagerInterface] = None,
) -> None:
    import asyncio
    from hypercorn.asyncio import serve
    from hypercorn.config import Config

    if manager is not None:
        app.state.events_manager = manager
    config = Config()
    config.bind = [f"{host}:{port}"]
    logger.info("Serving the events API on %s:%d", host, port)
    asyncio.run(serve(app, config))
