from datetime import datetime
from typing import List

from shareit.config import DEFAULT_PAGE_FROM, DEFAULT_PAGE_SIZE
from shareit.exceptions import ForbiddenError, NotFoundError
from shareit.models.booking import Booking, BookingStatus
from shareit.services.lifecycle import BookingLifecycle
from shareit.services.queries import (
    BookingQueryEngine,
    ItemBookingSummary,
    Role,
    is_past,
    summarize_item_bookings,
)
from shareit.storage.interfaces import BookingStore, ItemProvider, UserProvider
from shareit.utils.clock import Clock, system_clock
from shareit.utils.pagination import paginate
import logging

logger = logging.getLogger(__name__)


class BookingService:
    """
    Public booking operations: create, decide, fetch one and fetch many.

    Every call runs to completion against the stores it was built with; the
    clock is read once per query.
    """

    def __init__(
        self,
        users: UserProvider,
        items: ItemProvider,
        bookings: BookingStore,
        clock: Clock = system_clock,
    ):
        self.users = users
        self.items = items
        self.bookings = bookings
        self.clock = clock
        self.lifecycle = BookingLifecycle(users, items, bookings)
        self.queries = BookingQueryEngine(users, bookings, clock)

    def add_booking(
        self, item_id: int, start: datetime, end: datetime, booker_id: int
    ) -> Booking:
        logger.debug(f"Adding booking of item {item_id} by user {booker_id}: {start} - {end}")
        return self.lifecycle.create_booking(item_id, booker_id, start, end)

    def update_booking(self, booking_id: int, acting_user_id: int, approved: bool) -> Booking:
        logger.debug(f"User {acting_user_id} sets approved={approved} on booking {booking_id}")
        return self.lifecycle.decide(booking_id, acting_user_id, approved)

    def get_booking(self, booking_id: int, requesting_user_id: int) -> Booking:
        self.users.get(requesting_user_id)
        booking = self.bookings.find_by_id(booking_id)
        if not booking:
            raise NotFoundError(f"Booking not found: {booking_id}")
        if requesting_user_id not in (booking.item.owner_id, booking.booker_id):
            logger.error(f"User {requesting_user_id} may not view booking {booking_id}")
            raise ForbiddenError(
                f"User {requesting_user_id} is neither the owner of item "
                f"{booking.item_id} nor the booker of booking {booking_id}"
            )
        return booking

    def list_bookings(
        self,
        user_id: int,
        role: Role,
        state: str = "ALL",
        from_: int = DEFAULT_PAGE_FROM,
        size: int = DEFAULT_PAGE_SIZE,
    ) -> List[Booking]:
        return paginate(self.queries.find(user_id, role, state), from_, size)

    def get_item_summary(self, item_id: int, user_id: int) -> ItemBookingSummary:
        """Next and last approved bookings of an item, as seen by its owner."""
        self.users.get(user_id)
        self.items.get(item_id)
        bookings = self.queries.find_bookings_for_item_owner(item_id, user_id)
        summary = summarize_item_bookings(bookings, self.clock())
        logger.debug(
            f"Item {item_id}: next booking {getattr(summary.next_booking, 'id', None)}, "
            f"last booking {getattr(summary.last_booking, 'id', None)}"
        )
        return summary

    def has_completed_booking(self, item_id: int, booker_id: int) -> bool:
        """Whether the user has an approved booking of the item that already ended."""
        now = self.clock()
        approved = self.bookings.find_all_by_item_and_booker(
            item_id, booker_id, BookingStatus.APPROVED
        )
        return any(is_past(b, now) for b in approved)
