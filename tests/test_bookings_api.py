import pytest
from datetime import datetime, timedelta
from fastapi import status

from shareit.models.booking import BookingStatus
from shareit.models.item import Item

from tests.conf_tests import (
    client,
    clear_db,
    create_booking,
    create_item,
    user_headers,
    test_db,
    owner,
    booker,
    stranger,
    item,
)

# Real clock: dates are relative to the moment the test module is loaded
START = datetime.now().replace(microsecond=0) + timedelta(days=1)
END = START + timedelta(days=1)


def booking_payload(item_id, start=START, end=END):
    return {"itemId": item_id, "start": start.isoformat(), "end": end.isoformat()}


@pytest.fixture
def created_booking(item, booker):
    response = client.post("/bookings/", json=booking_payload(item.id), headers=user_headers(booker))
    assert response.status_code == status.HTTP_201_CREATED
    return response.json()


# Tests
# pylint: disable-next=redefined-outer-name
def test_create_booking_success(item, booker):
    response = client.post("/bookings/", json=booking_payload(item.id), headers=user_headers(booker))
    assert response.status_code == status.HTTP_201_CREATED
    data = response.json()
    assert data["status"] == BookingStatus.WAITING.value
    assert data["item"]["id"] == item.id
    assert data["booker"]["id"] == booker.id
    assert data["start"] == START.isoformat()


# pylint: disable-next=redefined-outer-name
def test_create_booking_without_user_header(item):
    response = client.post("/bookings/", json=booking_payload(item.id))
    assert response.status_code == status.HTTP_400_BAD_REQUEST


# pylint: disable-next=redefined-outer-name
def test_create_booking_in_the_past(item, booker):
    payload = booking_payload(item.id, START - timedelta(days=3), END - timedelta(days=3))
    response = client.post("/bookings/", json=payload, headers=user_headers(booker))
    assert response.status_code == status.HTTP_400_BAD_REQUEST


# pylint: disable-next=redefined-outer-name
def test_create_booking_end_before_start(item, booker):
    payload = booking_payload(item.id, END, START)
    response = client.post("/bookings/", json=payload, headers=user_headers(booker))
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert "Invalid booking dates" in response.json()["detail"]


# pylint: disable-next=redefined-outer-name
def test_create_booking_item_not_found(booker):
    response = client.post("/bookings/", json=booking_payload(999), headers=user_headers(booker))
    assert response.status_code == status.HTTP_404_NOT_FOUND


# pylint: disable-next=redefined-outer-name
def test_create_booking_unavailable_item(test_db, owner, booker):
    unavailable = create_item(test_db, owner, available=False)
    response = client.post(
        "/bookings/", json=booking_payload(unavailable.id), headers=user_headers(booker)
    )
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert "not available" in response.json()["detail"]


# pylint: disable-next=redefined-outer-name
def test_owner_cannot_book_own_item(item, owner):
    response = client.post("/bookings/", json=booking_payload(item.id), headers=user_headers(owner))
    assert response.status_code == status.HTTP_404_NOT_FOUND


# pylint: disable-next=redefined-outer-name
def test_get_booking_by_booker_and_owner(created_booking, owner, booker):
    for user in (booker, owner):
        response = client.get(f"/bookings/{created_booking['id']}", headers=user_headers(user))
        assert response.status_code == status.HTTP_200_OK
        assert response.json()["id"] == created_booking["id"]


# pylint: disable-next=redefined-outer-name
def test_get_booking_by_stranger(created_booking, stranger):
    response = client.get(f"/bookings/{created_booking['id']}", headers=user_headers(stranger))
    assert response.status_code == status.HTTP_404_NOT_FOUND


# pylint: disable-next=redefined-outer-name
def test_get_booking_not_found(booker):
    response = client.get("/bookings/999", headers=user_headers(booker))
    assert response.status_code == status.HTTP_404_NOT_FOUND


# pylint: disable-next=redefined-outer-name
def test_approve_booking(test_db, created_booking, item, owner):
    response = client.patch(
        f"/bookings/{created_booking['id']}?approved=true", headers=user_headers(owner)
    )
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["status"] == BookingStatus.APPROVED.value

    response = client.patch(
        f"/bookings/{created_booking['id']}?approved=true", headers=user_headers(owner)
    )
    assert response.status_code == status.HTTP_400_BAD_REQUEST

    test_db.expire_all()
    assert test_db.query(Item).filter(Item.id == item.id).first().available is True


# pylint: disable-next=redefined-outer-name
def test_reject_booking(created_booking, owner):
    response = client.patch(
        f"/bookings/{created_booking['id']}?approved=false", headers=user_headers(owner)
    )
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["status"] == BookingStatus.REJECTED.value


# pylint: disable-next=redefined-outer-name
def test_booker_cannot_approve(created_booking, booker):
    response = client.patch(
        f"/bookings/{created_booking['id']}?approved=true", headers=user_headers(booker)
    )
    assert response.status_code == status.HTTP_404_NOT_FOUND


# pylint: disable-next=redefined-outer-name
def test_list_bookings_by_state(created_booking, owner, booker):
    response = client.get("/bookings/?state=FUTURE", headers=user_headers(booker))
    assert response.status_code == status.HTTP_200_OK
    assert [b["id"] for b in response.json()] == [created_booking["id"]]

    response = client.get("/bookings/owner?state=WAITING", headers=user_headers(owner))
    assert response.status_code == status.HTTP_200_OK
    assert [b["id"] for b in response.json()] == [created_booking["id"]]

    response = client.get("/bookings/owner?state=PAST", headers=user_headers(owner))
    assert response.status_code == status.HTTP_200_OK
    assert response.json() == []


# pylint: disable-next=redefined-outer-name
def test_list_bookings_unknown_state(booker):
    response = client.get("/bookings/?state=BOGUS", headers=user_headers(booker))
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["detail"] == "Unknown state: BOGUS"


# pylint: disable-next=redefined-outer-name
def test_list_bookings_paged(test_db, item, booker):
    for day in range(1, 4):
        create_booking(test_db, item, booker, START + timedelta(days=day), END + timedelta(days=day))

    response = client.get("/bookings/?from=2&size=2", headers=user_headers(booker))
    assert response.status_code == status.HTTP_200_OK
    assert len(response.json()) == 1

    response = client.get("/bookings/?from=0&size=0", headers=user_headers(booker))
    assert response.status_code == status.HTTP_400_BAD_REQUEST


# pylint: disable-next=redefined-outer-name
def test_item_summary(test_db, item, owner, booker):
    now = datetime.now()
    last = create_booking(
        test_db, item, booker, now - timedelta(days=2), now - timedelta(days=1),
        BookingStatus.APPROVED,
    )
    upcoming = create_booking(
        test_db, item, booker, now + timedelta(days=1), now + timedelta(days=2),
        BookingStatus.APPROVED,
    )

    response = client.get(f"/bookings/items/{item.id}/summary", headers=user_headers(owner))
    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["last_booking"]["id"] == last.id
    assert data["next_booking"]["id"] == upcoming.id
    assert data["next_booking"]["booker_id"] == booker.id
