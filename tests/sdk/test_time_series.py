"""Tests for SDK time series and generic collection functions."""

import pytest
from datetime import date

from fitbit_mcp.sdk import collections, time_series
from fitbit_mcp.sdk.credentials import CURRENT_AUTHORIZED_USER, FitbitUser
from fitbit_mcp.sdk.exceptions import SchemaMismatchError
from fitbit_mcp.sdk.models import Activities, Body, Foods, Meal, Water
from fitbit_mcp.sdk.types import (
    APICollectionType,
    ApiCollectionProperty,
    IntradayDetailLevel,
    TimePeriod,
    TimeSeriesResourceType,
)
from tests.conftest import make_response
from tests.sdk.test_foods import FOODS
from tests.sdk.test_models import ACTIVITIES


STEPS = {"activities-tracker-steps": [
    {"dateTime": "2011-01-15", "value": "8462"},
    {"dateTime": "2011-01-16", "value": "10120"},
]}


class TestTimeSeries:
    def test_period(self, fitbit_client, local_user, mock_request):
        mock_request.return_value = make_response(200, STEPS)
        data = time_series.get_time_series(
            fitbit_client, local_user, CURRENT_AUTHORIZED_USER,
            TimeSeriesResourceType.TRACKER_STEPS, date(2011, 1, 16), TimePeriod.SEVEN_DAYS,
        )
        assert mock_request.call_args[0][1] == (
            "http://api.fitbit.com/1/user/-/activities/tracker/steps/date/2011-01-16/7d.json"
        )
        assert [d.int_value for d in data] == [8462, 10120]

    def test_end_date(self, fitbit_client, local_user, mock_request):
        mock_request.return_value = make_response(200, {"body-weight": [{"dateTime": "2011-01-01", "value": "73.2"}]})
        data = time_series.get_time_series(
            fitbit_client, local_user, CURRENT_AUTHORIZED_USER,
            TimeSeriesResourceType.WEIGHT, "2011-01-01", date(2011, 1, 31),
        )
        assert mock_request.call_args[0][1].endswith("/body/weight/date/2011-01-01/2011-01-31.json")
        assert data[0].float_value == 73.2

    def test_public_data_without_local_user(self, fitbit_client, mock_request):
        mock_request.return_value = make_response(200, {"activities-steps": []})
        time_series.get_time_series(
            fitbit_client, None, FitbitUser("228TQ4"),
            TimeSeriesResourceType.STEPS, date(2011, 1, 16), TimePeriod.MAX,
        )
        assert mock_request.call_args.kwargs["auth"].client.resource_owner_key is None

    def test_missing_series_key(self, fitbit_client, local_user, mock_request):
        mock_request.return_value = make_response(200, {"activities-steps": []})
        with pytest.raises(SchemaMismatchError) as exc:
            time_series.get_time_series(
                fitbit_client, local_user, CURRENT_AUTHORIZED_USER,
                TimeSeriesResourceType.FLOORS, date(2011, 1, 16), TimePeriod.ONE_DAY,
            )
        assert exc.value.field == "activities-floors"


class TestIntraday:
    def test_decode(self, fitbit_client, local_user, mock_request):
        mock_request.return_value = make_response(200, {
            "activities-calories": [{"dateTime": "2011-01-16", "value": "2184"}],
            "activities-calories-intraday": {
                "dataset": [
                    {"dateTime": "00:00:00", "value": 1.2},
                    {"dateTime": "00:15:00", "value": 1.4},
                ],
                "datasetInterval": 15,
                "datasetType": "minute",
            },
        })
        summary = time_series.get_intraday_time_series(
            fitbit_client, local_user, CURRENT_AUTHORIZED_USER,
            TimeSeriesResourceType.CALORIES_OUT, date(2011, 1, 16), IntradayDetailLevel.FIFTEEN_MINUTES,
        )
        assert mock_request.call_args[0][1].endswith("/activities/calories/date/2011-01-16/1d/15min.json")
        assert summary.summary.int_value == 2184
        assert summary.intraday_dataset.dataset_interval == 15
        assert summary.intraday_dataset.dataset[1].value == 1.4

    def test_empty_day_summary(self, fitbit_client, local_user, mock_request):
        mock_request.return_value = make_response(200, {
            "activities-steps": [],
            "activities-steps-intraday": {"dataset": []},
        })
        with pytest.raises(SchemaMismatchError):
            time_series.get_intraday_time_series(
                fitbit_client, local_user, CURRENT_AUTHORIZED_USER, TimeSeriesResourceType.STEPS, "2011-01-16"
            )


class TestCollections:
    @pytest.mark.parametrize("collection_type,body,record,path", [
        (APICollectionType.ACTIVITIES, ACTIVITIES, Activities, "/user/-/activities/date/2011-06-29.json"),
        (APICollectionType.FOODS, FOODS, Foods, "/user/-/foods/log/date/2011-06-29.json"),
        (APICollectionType.WATER, {"summary": {"water": 0}, "water": []}, Water,
         "/user/-/foods/log/water/date/2011-06-29.json"),
    ])
    def test_dispatch_by_type(self, fitbit_client, local_user, mock_request, collection_type, body, record, path):
        mock_request.return_value = make_response(200, body)
        result = collections.get_collection_for_date(
            fitbit_client, local_user, CURRENT_AUTHORIZED_USER, collection_type, date(2011, 6, 29)
        )
        assert isinstance(result, record)
        assert mock_request.call_args[0][1].endswith(path)

    def test_meals_are_not_dated(self, fitbit_client, local_user, mock_request):
        mock_request.return_value = make_response(200, {"meals": [
            {"id": 1, "name": "Breakfast", "mealFoods": [{"foodId": 81, "amount": 1, "unitId": 226}]},
        ]})
        result = collections.get_collection_for_date(
            fitbit_client, local_user, FitbitUser("228TQ4"), APICollectionType.MEALS, date(2011, 6, 29)
        )
        assert mock_request.call_args[0][1] == "http://api.fitbit.com/1/user/-/meals.json"
        assert isinstance(result, list)
        assert isinstance(result[0], Meal)
        assert result[0].name == "Breakfast"

    def test_body_envelope(self, fitbit_client, local_user, mock_request):
        mock_request.return_value = make_response(200, {"body": {"weight": 70, "bmi": 22, "fat": 15}})
        result = collections.get_collection_for_date(
            fitbit_client, local_user, CURRENT_AUTHORIZED_USER, APICollectionType.BODY, "2011-06-29"
        )
        assert isinstance(result, Body)

    def test_every_type_has_fetcher(self):
        assert set(collections.COLLECTION_FETCHERS) == set(APICollectionType)

    def test_raw_property_response(self, fitbit_client, local_user, mock_request):
        mock_request.return_value = make_response(200, [])
        response = collections.get_collection_response_for_property(
            fitbit_client, local_user, CURRENT_AUTHORIZED_USER,
            APICollectionType.FOODS, ApiCollectionProperty.RECENT,
        )
        assert mock_request.call_args[0][1].endswith("/user/-/foods/log/recent.json")
        assert response.json() == []
