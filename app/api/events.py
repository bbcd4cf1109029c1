from typing import Any, Dict

from fastapi import APIRouter, Depends, Request, Response, status
from fastapi.encoders import jsonable_encoder
from sqlalchemy.orm import Session

from app.api.listing import cached_page
from app.schemas.event import EventCreate
from app.services.database import get_db
from app.services.event_service import EventService
from app.services.memory_cache import MemoryCache, get_cache
from app.utils.log import app_logger
from app.utils.pagination import parse_pagination

router = APIRouter(prefix="/events", tags=["Events"])

EVENTS_LIST_PREFIX = "events:list:"


@router.get("")
def list_events(
    request: Request,
    response: Response,
    db: Session = Depends(get_db),
    cache: MemoryCache = Depends(get_cache),
) -> Dict[str, Any]:
    options = parse_pagination(request.query_params)
    return cached_page(response, cache, EVENTS_LIST_PREFIX, options, lambda: EventService.list_events(db, options))


@router.post("", status_code=status.HTTP_201_CREATED)
def create_event(
    payload: EventCreate,
    db: Session = Depends(get_db),
    cache: MemoryCache = Depends(get_cache),
) -> Dict[str, Any]:
    event = EventService.create_event(db, payload)
    removed = cache.invalidate_prefix(EVENTS_LIST_PREFIX)
    app_logger.info("api.events.create", event_id=event.id, invalidated=removed)
    return {"ok": True, "data": {"event": jsonable_encoder(event)}}
