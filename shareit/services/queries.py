"""
Time-relative and status queries over a user's bookings.

Intervals are half-open, ``[start, end)``: a booking is current from the
moment it starts until just before it ends. A booking whose ``end`` equals
``now`` is neither current nor past yet.
"""

import enum
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Dict, List, Optional

from shareit.exceptions import InvalidFilterError
from shareit.models.booking import Booking, BookingStatus
from shareit.storage.interfaces import BookingStore, UserProvider
from shareit.utils.clock import Clock, system_clock
import logging

logger = logging.getLogger(__name__)


class BookingState(str, enum.Enum):
    ALL = "ALL"
    CURRENT = "CURRENT"
    PAST = "PAST"
    FUTURE = "FUTURE"
    WAITING = "WAITING"
    REJECTED = "REJECTED"


class Role(str, enum.Enum):
    BOOKER = "booker"
    OWNER = "owner"


def parse_state(raw: str) -> BookingState:
    """Exact, case-sensitive match against the filter names."""
    try:
        return BookingState[raw]
    except KeyError:
        raise InvalidFilterError(f"Unknown state: {raw}") from None


def is_current(booking: Booking, now: datetime) -> bool:
    return booking.start <= now < booking.end


def is_past(booking: Booking, now: datetime) -> bool:
    return booking.end < now


def is_future(booking: Booking, now: datetime) -> bool:
    return booking.start > now


TIME_FILTERS: Dict[BookingState, Callable[[Booking, datetime], bool]] = {
    BookingState.CURRENT: is_current,
    BookingState.PAST: is_past,
    BookingState.FUTURE: is_future,
}

STATUS_FILTERS = {
    BookingState.WAITING: BookingStatus.WAITING,
    BookingState.REJECTED: BookingStatus.REJECTED,
}


@dataclass(frozen=True)
class ItemBookingSummary:
    next_booking: Optional[Booking] = None
    last_booking: Optional[Booking] = None


def summarize_item_bookings(bookings: List[Booking], now: datetime) -> ItemBookingSummary:
    """
    Pick the next and last approved bookings of an item.

    - next: the earliest-starting approved booking that has not ended
      (``end > now``), ties broken by the earliest end.
    - last: the latest-starting approved booking that is past or current.

    A booking in progress can be both.
    """
    approved = [b for b in bookings if b.status == BookingStatus.APPROVED]
    upcoming = [b for b in approved if b.end > now]
    started = [b for b in approved if is_past(b, now) or is_current(b, now)]
    return ItemBookingSummary(
        next_booking=min(upcoming, key=lambda b: (b.start, b.end), default=None),
        last_booking=max(started, key=lambda b: b.start, default=None),
    )


class BookingQueryEngine:
    def __init__(self, users: UserProvider, bookings: BookingStore, clock: Clock = system_clock):
        self.users = users
        self.bookings = bookings
        self.clock = clock

    def find(self, user_id: int, role: Role, raw_state: str) -> List[Booking]:
        """Bookings of ``user_id`` in ``role`` matching ``raw_state``, newest start first."""
        self.users.get(user_id)
        state = parse_state(raw_state)

        if state in STATUS_FILTERS:
            bookings = self._with_status(user_id, role, STATUS_FILTERS[state])
        else:
            now = self.clock()
            bookings = self._all(user_id, role)
            if state in TIME_FILTERS:
                keep = TIME_FILTERS[state]
                bookings = [b for b in bookings if keep(b, now)]

        logger.debug(f"Found {len(bookings)} {state.value} bookings for {role.value} {user_id}")
        return bookings

    def find_bookings_for_item_owner(self, item_id: int, owner_id: int) -> List[Booking]:
        return self.bookings.find_all_by_item_and_owner(item_id, owner_id)

    def _all(self, user_id: int, role: Role) -> List[Booking]:
        if role == Role.OWNER:
            return self.bookings.find_all_by_owner(user_id)
        return self.bookings.find_all_by_booker(user_id)

    def _with_status(self, user_id: int, role: Role, status: BookingStatus) -> List[Booking]:
        if role == Role.OWNER:
            return self.bookings.find_all_by_owner_and_status(user_id, status)
        return self.bookings.find_all_by_booker_and_status(user_id, status)
