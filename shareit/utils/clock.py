from datetime import datetime
from typing import Callable


# Anything returning the current moment. Time-relative queries read it once per call.
Clock = Callable[[], datetime]


def system_clock() -> datetime:
    return datetime.now()


def fixed_clock(moment: datetime) -> Clock:
    """Clock frozen at ``moment``."""
    return lambda: moment
