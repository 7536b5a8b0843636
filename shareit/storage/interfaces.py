"""
Collaborators the booking core depends on.

The core only talks to these interfaces. ``shareit.storage.sql`` provides
the SQLAlchemy-backed implementations used by the service; tests may pass
any object honouring the same methods.
"""

from abc import ABC, abstractmethod
from contextlib import AbstractContextManager
from typing import List, Optional

from shareit.models.booking import Booking, BookingStatus
from shareit.models.item import Item
from shareit.models.user import User


class UserProvider(ABC):
    @abstractmethod
    def get(self, user_id: int) -> User:
        """Return the user or raise ``NotFoundError``."""
        raise NotImplementedError


class ItemProvider(ABC):
    @abstractmethod
    def get(self, item_id: int) -> Item:
        """Return the item or raise ``NotFoundError``."""
        raise NotImplementedError

    @abstractmethod
    def set_available(self, item_id: int, available: bool) -> None:
        raise NotImplementedError


class BookingStore(ABC):
    """Durable bookings. Every ``find_all_*`` list is ordered by start, newest first."""

    @abstractmethod
    def transaction(self) -> AbstractContextManager:
        """Commit the writes made inside the block, or roll all of them back."""
        raise NotImplementedError

    @abstractmethod
    def save(self, booking: Booking) -> Booking:
        raise NotImplementedError

    @abstractmethod
    def find_by_id(self, booking_id: int) -> Optional[Booking]:
        raise NotImplementedError

    @abstractmethod
    def find_all_by_booker(self, booker_id: int) -> List[Booking]:
        raise NotImplementedError

    @abstractmethod
    def find_all_by_owner(self, owner_id: int) -> List[Booking]:
        raise NotImplementedError

    @abstractmethod
    def find_all_by_booker_and_status(
        self, booker_id: int, status: BookingStatus
    ) -> List[Booking]:
        raise NotImplementedError

    @abstractmethod
    def find_all_by_owner_and_status(
        self, owner_id: int, status: BookingStatus
    ) -> List[Booking]:
        raise NotImplementedError

    @abstractmethod
    def find_all_by_item_and_owner(self, item_id: int, owner_id: int) -> List[Booking]:
        raise NotImplementedError

    @abstractmethod
    def find_all_by_item_and_booker(
        self, item_id: int, booker_id: int, status: BookingStatus
    ) -> List[Booking]:
        raise NotImplementedError

    @abstractmethod
    def update_status(
        self, booking_id: int, status: BookingStatus, expected: BookingStatus
    ) -> bool:
        """
        Set ``status`` only if the stored status still equals ``expected``.

        Returns ``True`` when the row was changed. A ``False`` result means
        another writer got there first and nothing was written.
        """
        raise NotImplementedError
