"""
Tests for domain models and the QueryResult outcome type.
"""

from datetime import date

import pytest

from models.property import Property, PropertyListing
from models.reservation import Reservation, ReservationListing
from models.result import QueryResult
from models.user import User
from tests.conftest import property_row, reservation_row, user_row


class TestUser:

    def test_from_row(self):
        assert User.from_row(user_row(id=7)).id == 7

    def test_str(self):
        assert str(User(id=1, name="Ann", email="ann@x.io", password="pw")) == "#1 Ann <ann@x.io>"


class TestProperty:

    def test_insert_params_follow_insert_columns(self):
        prop = Property.from_mapping(property_row())
        params = prop.insert_params()

        assert len(params) == len(Property.INSERT_COLUMNS) == 14
        assert params[Property.INSERT_COLUMNS.index("owner_id")] == prop.owner_id
        assert params[Property.INSERT_COLUMNS.index("cost_per_night")] == prop.cost_per_night

    def test_from_mapping_defaults(self):
        prop = Property.from_mapping({
            "owner_id": 1,
            "title": "Cabin",
            "thumbnail_photo_url": "t.jpg",
            "cover_photo_url": "c.jpg",
            "country": "Canada",
            "street": "1 Main St",
            "city": "Banff",
            "province": "Alberta",
            "post_code": "T1L",
        })
        assert prop.cost_per_night == 0
        assert prop.active is True
        assert prop.id is None

    def test_from_mapping_missing_field(self):
        with pytest.raises(ValueError):
            Property.from_mapping({"title": "Cabin"})

    def test_price_per_night(self):
        assert Property.from_mapping(property_row(cost_per_night=12345)).price_per_night == 123.45

    def test_listing_without_rating(self):
        listing = PropertyListing.from_row(property_row(average_rating=None))
        assert listing.average_rating is None
        assert str(listing).endswith("rating n/a")


class TestReservation:

    def test_nights(self):
        reservation = Reservation(date(2021, 3, 1), date(2021, 3, 4), property_id=1, guest_id=2)
        assert reservation.nights == 3

    def test_listing_str_shows_nights(self):
        listing = ReservationListing.from_row(reservation_row())
        assert str(listing).startswith("2018-09-11 -> 2018-09-26 (15 nights) | #1 Speed lamp")


class TestQueryResult:

    def test_success_with_no_value(self):
        result = QueryResult.success(None)
        assert result.ok
        assert result.unwrap() is None
        assert result.value_or("default") is None

    def test_failure(self):
        error = RuntimeError("boom")
        result = QueryResult.failure(error)
        assert not result.ok
        assert result.value_or([]) == []
        with pytest.raises(RuntimeError, match="boom"):
            result.unwrap()
