from typing import List
from fastapi import APIRouter, Depends, Query, status
from shareit.config import DEFAULT_PAGE_FROM, DEFAULT_PAGE_SIZE
from shareit.schemas.booking import (
    BookingCreate,
    BookingResponse,
    ItemBookingSummaryResponse,
)
from shareit.services.booking_service import BookingService
from shareit.services.queries import Role
from shareit.utils.auth import get_booking_service, get_current_user_id
import logging

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/bookings",
    tags=["bookings"],
)


@router.post(
    "/",
    response_model=BookingResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Request a booking",
    description="Request a booking of someone else's item. The booking starts in WAITING status."
)
def add_booking(
    booking: BookingCreate,
    user_id: int = Depends(get_current_user_id),
    service: BookingService = Depends(get_booking_service),
):
    """
    Request a booking of an item.

    - **itemId**: ID of the item to book.
    - **start**: Start of the booking, present or future.
    - **end**: End of the booking, strictly after start.

    Returns the created booking in WAITING status.
    """
    logger.debug(f"POST booking {booking} by user {user_id}")
    return service.add_booking(booking.item_id, booking.start, booking.end, user_id)


@router.get(
    "/",
    response_model=List[BookingResponse],
    summary="List the caller's bookings",
    description="Bookings made by the caller, filtered by state, newest start first."
)
def get_bookings(
    state: str = "ALL",
    from_: int = Query(DEFAULT_PAGE_FROM, alias="from"),
    size: int = DEFAULT_PAGE_SIZE,
    user_id: int = Depends(get_current_user_id),
    service: BookingService = Depends(get_booking_service),
):
    """
    - **state**: ALL, CURRENT, PAST, FUTURE, WAITING or REJECTED.
    - **from**: Index of the first booking wanted; rounded down to a page boundary.
    - **size**: Page size.
    """
    logger.debug(f"GET bookings of booker {user_id}, state={state}, from={from_}, size={size}")
    return service.list_bookings(user_id, Role.BOOKER, state, from_, size)


@router.get(
    "/owner",
    response_model=List[BookingResponse],
    summary="List bookings of the caller's items",
    description="Bookings of items owned by the caller, filtered by state, newest start first."
)
def get_bookings_owner(
    state: str = "ALL",
    from_: int = Query(DEFAULT_PAGE_FROM, alias="from"),
    size: int = DEFAULT_PAGE_SIZE,
    user_id: int = Depends(get_current_user_id),
    service: BookingService = Depends(get_booking_service),
):
    logger.debug(f"GET bookings of owner {user_id}, state={state}, from={from_}, size={size}")
    return service.list_bookings(user_id, Role.OWNER, state, from_, size)


@router.get(
    "/items/{item_id}/summary",
    response_model=ItemBookingSummaryResponse,
    summary="Next and last bookings of an item",
    description="Next and last approved bookings of an item. Only the owner sees them."
)
def get_item_summary(
    item_id: int,
    user_id: int = Depends(get_current_user_id),
    service: BookingService = Depends(get_booking_service),
):
    summary = service.get_item_summary(item_id, user_id)
    return ItemBookingSummaryResponse.model_validate(summary)


@router.get(
    "/{booking_id}",
    response_model=BookingResponse,
    summary="Get a booking by ID",
    description="Visible to the booker and to the owner of the booked item."
)
def get_booking(
    booking_id: int,
    user_id: int = Depends(get_current_user_id),
    service: BookingService = Depends(get_booking_service),
):
    logger.debug(f"GET booking {booking_id} by user {user_id}")
    return service.get_booking(booking_id, user_id)


@router.patch(
    "/{booking_id}",
    response_model=BookingResponse,
    summary="Approve or reject a booking",
    description="Owner-only decision on a WAITING booking."
)
def update_booking(
    booking_id: int,
    approved: bool,
    user_id: int = Depends(get_current_user_id),
    service: BookingService = Depends(get_booking_service),
):
    """
    Approve or reject a booking.

    - **booking_id**: ID of the booking to decide on.
    - **approved**: true to approve, false to reject.

    Returns the updated booking.
    """
    logger.debug(f"PATCH booking {booking_id} by user {user_id}, approved={approved}")
    return service.update_booking(booking_id, user_id, approved)
