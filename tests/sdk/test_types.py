"""Tests for SDK types and constants."""

import pytest

from fitbit_mcp.sdk.types import (
    APICollectionType,
    ApiQuotaType,
    DeviceType,
    MEAL_TYPES,
    TimePeriod,
    TimeSeriesResourceType,
    UNSPECIFIED_SUBSCRIPTION_ID,
    VolumeUnits,
)


class TestEnums:
    def test_collection_paths(self):
        assert APICollectionType.FOODS.url_path == "/foods/log"
        assert APICollectionType.FOODS.collection_name == "foods"
        assert APICollectionType.WATER.url_path == "/foods/log/water"

    def test_time_period_short_forms(self):
        assert [p.short_form for p in TimePeriod] == [
            "1d", "7d", "30d", "1w", "1m", "3m", "6m", "1y", "max",
        ]

    def test_quota_types(self):
        assert ApiQuotaType.IP_ADDRESS.value == "ip"
        assert ApiQuotaType.CLIENT_AND_OWNER.value == "clientAndUser"

    def test_device_url_segment(self):
        assert DeviceType.TRACKER.url_segment == "tracker"
        assert DeviceType.SCALE.url_segment == "scale"

    def test_volume_units(self):
        assert VolumeUnits.FL_OZ.value == "fl oz"


class TestTimeSeriesResourceType:
    @pytest.mark.parametrize("resource_type,key", [
        (TimeSeriesResourceType.STEPS, "activities-steps"),
        (TimeSeriesResourceType.TRACKER_STEPS, "activities-tracker-steps"),
        (TimeSeriesResourceType.CALORIES_IN, "foods-log-caloriesIn"),
        (TimeSeriesResourceType.WEIGHT, "body-weight"),
        (TimeSeriesResourceType.MINUTES_ASLEEP, "sleep-minutesAsleep"),
    ])
    def test_response_key(self, resource_type, key):
        assert resource_type.response_key == key

    def test_intraday_response_key(self):
        assert TimeSeriesResourceType.CALORIES_OUT.intraday_response_key == "activities-calories-intraday"


class TestConstants:
    def test_subscription_sentinel(self):
        assert UNSPECIFIED_SUBSCRIPTION_ID == "-"

    def test_meal_types(self):
        assert MEAL_TYPES[1] == "Breakfast"
        assert 6 not in MEAL_TYPES
