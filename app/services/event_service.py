from typing import Any, List, Tuple

from sqlalchemy.orm import Session

from app.models.event import Event
from app.schemas.event import EventCreate
from app.services.list_query import ListQuery
from app.services.shop_service import like_pattern
from app.utils.log import app_logger
from app.utils.pagination import PaginationOptions, apply_pagination


class EventService:

    @staticmethod
    def list_events(db: Session, options: PaginationOptions) -> Tuple[List[Any], int]:
        query = ListQuery(db, Event)
        if options.q:
            query.where(Event.title.ilike(like_pattern(options.q), escape="\\"))
        if options.status:
            query.where(Event.status == options.status)
        total = query.count()
        items = apply_pagination(query, options).all()
        return items, total

    @staticmethod
    def create_event(db: Session, payload: EventCreate) -> Event:
        event = Event(**payload.model_dump())
        db.add(event)
        db.commit()
        db.refresh(event)
        app_logger.info("event.created", event_id=event.id, title=event.title)
        return event
