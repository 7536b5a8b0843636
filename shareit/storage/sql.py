from contextlib import contextmanager
from typing import List, Optional
from sqlalchemy.orm import Session
from shareit.exceptions import NotFoundError
from shareit.models.booking import Booking, BookingStatus
from shareit.models.item import Item
from shareit.models.user import User
from shareit.storage.interfaces import BookingStore, ItemProvider, UserProvider
import logging

logger = logging.getLogger(__name__)


class SqlUserProvider(UserProvider):
    def __init__(self, db: Session):
        self.db = db

    def get(self, user_id: int) -> User:
        user = self.db.query(User).filter(User.id == user_id).first()
        if not user:
            raise NotFoundError(f"User not found: {user_id}")
        return user


class SqlItemProvider(ItemProvider):
    def __init__(self, db: Session):
        self.db = db

    def get(self, item_id: int) -> Item:
        item = self.db.query(Item).filter(Item.id == item_id).first()
        if not item:
            raise NotFoundError(f"Item not found: {item_id}")
        return item

    def set_available(self, item_id: int, available: bool) -> None:
        self.db.query(Item).filter(Item.id == item_id).update({Item.available: available})
        logger.debug(f"Item {item_id} availability set to {available}")


class SqlBookingStore(BookingStore):
    def __init__(self, db: Session):
        self.db = db

    @contextmanager
    def transaction(self):
        try:
            yield
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

    def save(self, booking: Booking) -> Booking:
        self.db.add(booking)
        self.db.flush()
        return booking

    def find_by_id(self, booking_id: int) -> Optional[Booking]:
        # populate_existing: a status swapped by another writer must be visible here
        return (
            self.db.query(Booking)
            .populate_existing()
            .filter(Booking.id == booking_id)
            .first()
        )

    def _by_booker(self, booker_id: int):
        return self.db.query(Booking).filter(Booking.booker_id == booker_id)

    def _by_owner(self, owner_id: int):
        return self.db.query(Booking).join(Booking.item).filter(Item.owner_id == owner_id)

    @staticmethod
    def _newest_first(query) -> List[Booking]:
        return query.order_by(Booking.start.desc(), Booking.id.desc()).all()

    def find_all_by_booker(self, booker_id: int) -> List[Booking]:
        return self._newest_first(self._by_booker(booker_id))

    def find_all_by_owner(self, owner_id: int) -> List[Booking]:
        return self._newest_first(self._by_owner(owner_id))

    def find_all_by_booker_and_status(
        self, booker_id: int, status: BookingStatus
    ) -> List[Booking]:
        return self._newest_first(self._by_booker(booker_id).filter(Booking.status == status))

    def find_all_by_owner_and_status(
        self, owner_id: int, status: BookingStatus
    ) -> List[Booking]:
        return self._newest_first(self._by_owner(owner_id).filter(Booking.status == status))

    def find_all_by_item_and_owner(self, item_id: int, owner_id: int) -> List[Booking]:
        return self._newest_first(self._by_owner(owner_id).filter(Item.id == item_id))

    def find_all_by_item_and_booker(
        self, item_id: int, booker_id: int, status: BookingStatus
    ) -> List[Booking]:
        return self._newest_first(
            self._by_booker(booker_id).filter(
                Booking.item_id == item_id, Booking.status == status
            )
        )

    def update_status(
        self, booking_id: int, status: BookingStatus, expected: BookingStatus
    ) -> bool:
        updated = (
            self.db.query(Booking)
            .filter(Booking.id == booking_id, Booking.status == expected)
            .update({Booking.status: status})
        )
        logger.debug(f"Status swap {expected.value} -> {status.value} on booking {booking_id}: {updated} row(s)")
        return updated == 1
