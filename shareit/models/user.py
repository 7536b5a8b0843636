from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship
from shareit.db import Base


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    email = Column(String, unique=True, index=True, nullable=False)

    items = relationship("Item", back_populates="owner")
    bookings = relationship("Booking", back_populates="booker")
