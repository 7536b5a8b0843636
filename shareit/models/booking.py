import enum
from sqlalchemy import Column, DateTime, Enum, ForeignKey, Integer
from sqlalchemy.orm import relationship
from shareit.db import Base


class BookingStatus(str, enum.Enum):
    WAITING = "WAITING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"


class Booking(Base):
    __tablename__ = "bookings"

    id = Column(Integer, primary_key=True, index=True)
    start = Column("start_date", DateTime, nullable=False, index=True)
    end = Column("end_date", DateTime, nullable=False)
    item_id = Column(Integer, ForeignKey("items.id"), nullable=False, index=True)
    booker_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    status = Column(Enum(BookingStatus), nullable=False, default=BookingStatus.WAITING)

    item = relationship("Item", back_populates="bookings")
    booker = relationship("User", back_populates="bookings")

    def __repr__(self):
        return (
            f"Booking(id={self.id}, item_id={self.item_id}, booker_id={self.booker_id}, "
            f"start={self.start}, end={self.end}, status={self.status})"
        )
