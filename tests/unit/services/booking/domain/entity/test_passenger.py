import pytest


class TestPassenger:
    """Passenger Entity のテスト"""

    def test_create_passenger(self, create_passenger):
        passenger = create_passenger(seat_number="b7", meal_type="VEG")

        assert str(passenger.seat_number) == "B7"
        assert str(passenger.id) == "PNR-TEST000001#001"
        assert passenger.meal_type == "VEG"

    def test_blank_name_raises_error(self, create_passenger):
        with pytest.raises(ValueError):
            create_passenger(name=" ")

    def test_negative_age_raises_error(self, create_passenger):
        with pytest.raises(ValueError):
            create_passenger(age=-1)
