"""
Fitbit REST API Low-Level SDK.

Thin typed wrapper over the Fitbit HTTP API.
Each function maps 1:1 to a Fitbit endpoint; resource modules are
grouped by collection (activities, foods, water, body, sleep, ...).
"""

from fitbit_mcp.sdk.client import FitbitClient, Response, decode
from fitbit_mcp.sdk.credentials import (
    CURRENT_AUTHORIZED_USER,
    AccessToken,
    APIResourceCredentials,
    CredentialsCache,
    FileCredentialsCache,
    FitbitUser,
    InMemoryCredentialsCache,
    LocalUserDetail,
    TempCredentials,
)
from fitbit_mcp.sdk.exceptions import (
    CredentialsNotFoundError,
    FitbitAPIError,
    ResponseParseError,
    SchemaMismatchError,
    TransportError,
)
from fitbit_mcp.sdk.models import (
    Account,
    Activities,
    ActivitiesSummary,
    Activity,
    ActivityDistance,
    ActivityGoals,
    ActivityLevel,
    ActivityLog,
    ActivityReference,
    ApiRateLimitStatus,
    ApiSubscription,
    Body,
    Data,
    Device,
    FavoriteFood,
    Food,
    FoodLog,
    Foods,
    FoodsSummary,
    FoodUnit,
    IntradayData,
    IntradayDataset,
    IntradaySummary,
    LoggedActivityReference,
    LoggedFood,
    Meal,
    MealFood,
    NutritionalValuesEntry,
    Sleep,
    SleepLog,
    SleepSummary,
    UserInfo,
    Water,
    WaterLog,
    WaterSummary,
)
from fitbit_mcp.sdk.types import (
    APICollectionType,
    APIFormat,
    APIVersion,
    ApiCollectionProperty,
    ApiQuotaType,
    DeviceType,
    FoodFormType,
    IntradayDetailLevel,
    TimePeriod,
    TimeSeriesResourceType,
    VolumeUnits,
    MEAL_TYPES,
    UNSPECIFIED_SUBSCRIPTION_ID,
)

__all__ = [
    "FitbitClient",
    "Response",
    "decode",
    "CURRENT_AUTHORIZED_USER",
    "AccessToken",
    "APIResourceCredentials",
    "CredentialsCache",
    "FileCredentialsCache",
    "FitbitUser",
    "InMemoryCredentialsCache",
    "LocalUserDetail",
    "TempCredentials",
    "CredentialsNotFoundError",
    "FitbitAPIError",
    "ResponseParseError",
    "SchemaMismatchError",
    "TransportError",
    "Account",
    "Activities",
    "ActivitiesSummary",
    "Activity",
    "ActivityDistance",
    "ActivityGoals",
    "ActivityLevel",
    "ActivityLog",
    "ActivityReference",
    "ApiRateLimitStatus",
    "ApiSubscription",
    "Body",
    "Data",
    "Device",
    "FavoriteFood",
    "Food",
    "FoodLog",
    "Foods",
    "FoodsSummary",
    "FoodUnit",
    "IntradayData",
    "IntradayDataset",
    "IntradaySummary",
    "LoggedActivityReference",
    "LoggedFood",
    "Meal",
    "MealFood",
    "NutritionalValuesEntry",
    "Sleep",
    "SleepLog",
    "SleepSummary",
    "UserInfo",
    "Water",
    "WaterLog",
    "WaterSummary",
    "APICollectionType",
    "APIFormat",
    "APIVersion",
    "ApiCollectionProperty",
    "ApiQuotaType",
    "DeviceType",
    "FoodFormType",
    "IntradayDetailLevel",
    "TimePeriod",
    "TimeSeriesResourceType",
    "VolumeUnits",
    "MEAL_TYPES",
    "UNSPECIFIED_SUBSCRIPTION_ID",
]
