from datetime import datetime


def validate_booking_time(value: datetime) -> datetime:
    """Bookings are stored in naive local time and may not start or end in the past."""
    if value.tzinfo is not None:
        value = value.astimezone().replace(tzinfo=None)
    if value < datetime.now():
        raise ValueError("Booking dates must be in the present or future")
    return value
