from typing import List, TypeVar
from shareit.exceptions import InvalidPageError


T = TypeVar("T")


def page_offset(from_: int, size: int) -> int:
    """
    Offset of the page that contains element ``from_``.

    Results are served in whole pages of ``size``, so ``from_`` is rounded
    down to the start of its page: from=7, size=5 -> offset 5.
    """
    if from_ < 0:
        raise InvalidPageError(f"Page start must not be negative: from={from_}")
    if size <= 0:
        raise InvalidPageError(f"Page size must be positive: size={size}")
    return (from_ // size) * size


def paginate(items: List[T], from_: int, size: int) -> List[T]:
    offset = page_offset(from_, size)
    return items[offset:offset + size]
