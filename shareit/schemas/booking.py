from pydantic import BaseModel, ConfigDict, Field, field_validator
from datetime import datetime
from typing import Optional
from shareit.models.booking import BookingStatus
from shareit.utils.validation_helpers import validate_booking_time


class BookingCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    item_id: int = Field(alias="itemId")
    start: datetime
    end: datetime

    @field_validator("start", "end")
    @classmethod
    def check_booking_time(cls, value):
        return validate_booking_time(value)


class UserShort(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str


class ItemShort(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str


class BookingResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    item_id: int
    start: datetime
    end: datetime
    status: BookingStatus
    item: ItemShort
    booker: UserShort


class BookingShort(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    booker_id: int
    start: datetime
    end: datetime


class ItemBookingSummaryResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    next_booking: Optional[BookingShort] = None
    last_booking: Optional[BookingShort] = None
