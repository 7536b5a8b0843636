import pytest

from shareit.exceptions import InvalidPageError
from shareit.utils.pagination import page_offset, paginate


@pytest.mark.parametrize(
    "from_, size, expected",
    [(0, 10, 0), (9, 10, 0), (10, 10, 10), (7, 5, 5), (25, 10, 20)],
)
def test_offset_rounds_down_to_page_start(from_, size, expected):
    assert page_offset(from_, size) == expected


@pytest.mark.parametrize("from_, size", [(-1, 10), (0, 0), (5, -3)])
def test_invalid_window(from_, size):
    with pytest.raises(InvalidPageError):
        page_offset(from_, size)


def test_paginate_past_the_end_is_empty():
    items = list(range(12))
    assert paginate(items, 10, 10) == [10, 11]
    assert paginate(items, 20, 10) == []
