"""
Fitbit API types, enums, and constants.

All Fitbit-specific codes, path fragments and magic values live here.
"""

from enum import Enum


DEFAULT_API_HOST = "api.fitbit.com"
DEFAULT_WEB_BASE_URL = "http://www.fitbit.com"

SUBSCRIBER_ID_HEADER_NAME = "X-Fitbit-Subscriber-Id"
ACCEPT_LANGUAGE_HEADER_NAME = "Accept-Language"

# Path segment used when a subscription is created without an explicit id
UNSPECIFIED_SUBSCRIPTION_ID = "-"

# Encoded user id that stands for "whoever the access token belongs to"
CURRENT_USER_ID = "-"


class APIVersion(Enum):
    """Version segment prefixed to every request path."""
    BETA_1 = "1"


class APIFormat(Enum):
    """Response format suffix."""
    JSON = "json"
    XML = "xml"


class APICollectionType(Enum):
    """Per-user collections.

    Each member carries the name used in subscription paths and the URL
    path of the collection under /user/{id}.
    """
    ACTIVITIES = ("activities", "/activities")
    FOODS = ("foods", "/foods/log")
    MEALS = ("meals", "/meals")
    SLEEP = ("sleep", "/sleep")
    BODY = ("body", "/body")
    WATER = ("water", "/foods/log/water")

    def __init__(self, collection_name: str, url_path: str):
        self.collection_name = collection_name
        self.url_path = url_path


class ApiCollectionProperty(Enum):
    """Named views over a collection."""
    FAVORITE = "favorite"
    RECENT = "recent"
    FREQUENT = "frequent"


class TimePeriod(Enum):
    """Named depth of a time series range, ending at the given date."""
    ONE_DAY = "1d"
    SEVEN_DAYS = "7d"
    THIRTY_DAYS = "30d"
    ONE_WEEK = "1w"
    ONE_MONTH = "1m"
    THREE_MONTHS = "3m"
    SIX_MONTHS = "6m"
    ONE_YEAR = "1y"
    MAX = "max"

    @property
    def short_form(self) -> str:
        return self.value


# Intraday series are always requested for a single day
INTRADAY_PERIOD = TimePeriod.ONE_DAY


class IntradayDetailLevel(Enum):
    """Granularity suffix for intraday time series."""
    ONE_MINUTE = "1min"
    FIFTEEN_MINUTES = "15min"


class TimeSeriesResourceType(Enum):
    """Resources available as time series, keyed by their URL path."""
    # Activities
    CALORIES_OUT = "/activities/calories"
    STEPS = "/activities/steps"
    DISTANCE = "/activities/distance"
    FLOORS = "/activities/floors"
    ELEVATION = "/activities/elevation"
    MINUTES_SEDENTARY = "/activities/minutesSedentary"
    MINUTES_LIGHTLY_ACTIVE = "/activities/minutesLightlyActive"
    MINUTES_FAIRLY_ACTIVE = "/activities/minutesFairlyActive"
    MINUTES_VERY_ACTIVE = "/activities/minutesVeryActive"
    ACTIVE_SCORE = "/activities/activeScore"
    ACTIVITY_CALORIES = "/activities/activityCalories"
    # Tracker-only activities
    TRACKER_CALORIES_OUT = "/activities/tracker/calories"
    TRACKER_STEPS = "/activities/tracker/steps"
    TRACKER_DISTANCE = "/activities/tracker/distance"
    TRACKER_FLOORS = "/activities/tracker/floors"
    TRACKER_ELEVATION = "/activities/tracker/elevation"
    TRACKER_ACTIVE_SCORE = "/activities/tracker/activeScore"
    # Foods
    CALORIES_IN = "/foods/log/caloriesIn"
    WATER = "/foods/log/water"
    # Sleep
    START_TIME = "/sleep/startTime"
    TIME_IN_BED = "/sleep/timeInBed"
    MINUTES_ASLEEP = "/sleep/minutesAsleep"
    AWAKENINGS_COUNT = "/sleep/awakeningsCount"
    MINUTES_AWAKE = "/sleep/minutesAwake"
    MINUTES_TO_FALL_ASLEEP = "/sleep/minutesToFallAsleep"
    MINUTES_AFTER_WAKEUP = "/sleep/minutesAfterWakeup"
    EFFICIENCY = "/sleep/efficiency"
    # Body
    WEIGHT = "/body/weight"
    BMI = "/body/bmi"
    FAT = "/body/fat"

    @property
    def resource_path(self) -> str:
        return self.value

    @property
    def response_key(self) -> str:
        """JSON key of the series in the response, e.g. 'activities-tracker-steps'."""
        return self.value[1:].replace("/", "-")

    @property
    def intraday_response_key(self) -> str:
        return self.response_key + "-intraday"


class DeviceType(Enum):
    TRACKER = "TRACKER"
    SCALE = "SCALE"

    @property
    def url_segment(self) -> str:
        return self.value.lower()


class VolumeUnits(Enum):
    """Custom units accepted when logging water."""
    ML = "ml"
    FL_OZ = "fl oz"
    CUP = "cup"


class FoodFormType(Enum):
    LIQUID = "LIQUID"
    DRY = "DRY"


class ApiQuotaType(Enum):
    """Rate limit quota scopes."""
    IP_ADDRESS = "ip"
    CLIENT_AND_OWNER = "clientAndUser"


# Meal type ids accepted by the food log endpoint
MEAL_TYPES = {
    1: "Breakfast",
    2: "Morning Snack",
    3: "Lunch",
    4: "Afternoon Snack",
    5: "Dinner",
    7: "Anytime",
}
