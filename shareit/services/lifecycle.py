"""
Booking lifecycle: creation rules and the owner-driven status transition.

A booking starts in ``WAITING``. Its owner moves it once, to ``APPROVED`` or
``REJECTED``; both are terminal.
"""

from datetime import datetime

from shareit.exceptions import (
    AlreadyApprovedError,
    ForbiddenError,
    InvalidIntervalError,
    InvalidTransitionError,
    NotFoundError,
    SelfBookingError,
    UnavailableError,
)
from shareit.models.booking import Booking, BookingStatus
from shareit.storage.interfaces import BookingStore, ItemProvider, UserProvider
import logging

logger = logging.getLogger(__name__)


TRANSITIONS = {
    (BookingStatus.WAITING, True): BookingStatus.APPROVED,
    (BookingStatus.WAITING, False): BookingStatus.REJECTED,
}


def next_status(current: BookingStatus, approve: bool) -> BookingStatus:
    """Status a booking moves to when its owner approves or rejects it."""
    if approve and current == BookingStatus.APPROVED:
        raise AlreadyApprovedError("Booking has already been approved")
    try:
        return TRANSITIONS[(current, approve)]
    except KeyError:
        decision = "approve" if approve else "reject"
        raise InvalidTransitionError(
            f"Cannot {decision} a booking in status {current.value}"
        ) from None


def availability_after_approval() -> bool:
    """Availability flag written to an item when one of its bookings is approved."""
    # Kept as the historical behaviour: approval marks the item available.
    return True


def validate_interval(start: datetime, end: datetime) -> None:
    if start >= end:
        raise InvalidIntervalError(
            f"Invalid booking dates: start {start} must be before end {end}"
        )


class BookingLifecycle:
    def __init__(self, users: UserProvider, items: ItemProvider, bookings: BookingStore):
        self.users = users
        self.items = items
        self.bookings = bookings

    def create_booking(
        self, item_id: int, booker_id: int, start: datetime, end: datetime
    ) -> Booking:
        validate_interval(start, end)
        booker = self.users.get(booker_id)
        item = self.items.get(item_id)

        if not item.available:
            logger.error(f"Item {item_id} is not available for booking")
            raise UnavailableError(f"Item is not available for booking: {item_id}")
        if item.owner_id == booker_id:
            logger.error(f"User {booker_id} tried to book their own item {item_id}")
            raise SelfBookingError("The owner of an item cannot book it")

        booking = Booking(
            item=item,
            booker=booker,
            start=start,
            end=end,
            status=BookingStatus.WAITING,
        )
        with self.bookings.transaction():
            booking = self.bookings.save(booking)
        logger.debug(f"Created booking: {booking.id} for item {item_id} by user {booker_id}")
        return booking

    def decide(self, booking_id: int, acting_user_id: int, approve: bool) -> Booking:
        booking = self.bookings.find_by_id(booking_id)
        if not booking:
            raise NotFoundError(f"Booking not found: {booking_id}")
        if booking.item.owner_id != acting_user_id:
            logger.error(f"User {acting_user_id} does not own the item of booking {booking_id}")
            raise ForbiddenError(
                f"User {acting_user_id} is not the owner of item {booking.item_id}"
            )

        observed = booking.status
        target = next_status(observed, approve)

        with self.bookings.transaction():
            if not self.bookings.update_status(booking_id, target, expected=observed):
                # Lost the race: re-read and report against the winning status.
                current = self.bookings.find_by_id(booking_id)
                next_status(current.status, approve)
                raise InvalidTransitionError(
                    f"Booking {booking_id} was modified concurrently"
                )
            if target == BookingStatus.APPROVED:
                self.items.set_available(booking.item_id, availability_after_approval())

        booking = self.bookings.find_by_id(booking_id)
        logger.debug(f"Booking {booking_id} moved from {observed.value} to {booking.status.value}")
        return booking
