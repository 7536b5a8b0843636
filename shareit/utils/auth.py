from fastapi import Depends, Header
from sqlalchemy.orm import Session
from shareit.config import USER_ID_HEADER
from shareit.db import get_db
from shareit.services.booking_service import BookingService
from shareit.storage.sql import SqlBookingStore, SqlItemProvider, SqlUserProvider
from shareit.utils.clock import Clock, system_clock


def get_current_user_id(
    x_sharer_user_id: int = Header(
        ...,
        alias=USER_ID_HEADER,
        description="ID of the user on whose behalf the request is made.",
    ),
) -> int:
    """Identity of the caller, as forwarded by the gateway."""
    return x_sharer_user_id


def build_booking_service(db: Session, clock: Clock = system_clock) -> BookingService:
    """Wire the booking service to stores sharing one database session."""
    return BookingService(
        users=SqlUserProvider(db),
        items=SqlItemProvider(db),
        bookings=SqlBookingStore(db),
        clock=clock,
    )


def get_booking_service(db: Session = Depends(get_db)) -> BookingService:
    return build_booking_service(db)
