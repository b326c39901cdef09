"""
Typed Fitbit resource records.

Each record is a frozen dataclass whose fields are declared with
json_field(), naming the exact (case-sensitive) JSON key and its kind.
JsonRecord.from_json() walks those declarations, so a record either
decodes completely or raises SchemaMismatchError naming the field.
"""

from dataclasses import MISSING, dataclass, field, fields
from typing import Any, Callable, Dict, List, Optional

from fitbit_mcp.sdk.exceptions import SchemaMismatchError
from fitbit_mcp.utils import Params, format_param_value


_REQUIRED = object()


def _to_int(value: Any) -> int:
    if isinstance(value, bool):
        raise TypeError("boolean is not an int")
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value)
    if isinstance(value, str):
        return int(float(value)) if "." in value else int(value)
    raise TypeError(f"cannot convert {type(value).__name__} to int")


def _to_float(value: Any) -> float:
    if isinstance(value, bool):
        raise TypeError("boolean is not a float")
    if isinstance(value, (int, float, str)):
        return float(value)
    raise TypeError(f"cannot convert {type(value).__name__} to float")


def _to_str(value: Any) -> str:
    if isinstance(value, (dict, list)):
        raise TypeError(f"cannot convert {type(value).__name__} to str")
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _to_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.lower() in ("true", "false"):
        return value.lower() == "true"
    raise TypeError(f"cannot convert {value!r} to bool")


_COERCERS: Dict[type, Callable[[Any], Any]] = {
    int: _to_int,
    float: _to_float,
    str: _to_str,
    bool: _to_bool,
}


def json_field(
    json_name: str,
    kind: type = str,
    default: Any = _REQUIRED,
    required: Optional[bool] = None,
    decoder: Optional[Callable[[Any], Any]] = None,
    item: Any = None,
):
    """
    Declare a record field mapped to a JSON key.

    Args:
        json_name: Exact JSON key
        kind: int, float, str, bool, dict (nested, via decoder) or list (via item)
        default: Value used when the key is absent; omit to make the field required
        required: Force the key to be present even though a default exists
        decoder: Callable decoding a nested object (kind=dict)
        item: Element kind (int/float/str/bool) or decoder for kind=list
    """
    if required is None:
        required = default is _REQUIRED
    metadata = {
        "json_name": json_name,
        "kind": kind,
        "required": required,
        "decoder": decoder,
        "item": item,
    }
    if default is _REQUIRED:
        return field(metadata=metadata)
    if isinstance(default, list):
        return field(default_factory=list, metadata=metadata)
    if isinstance(default, dict):
        return field(default_factory=dict, metadata=metadata)
    return field(default=default, metadata=metadata)


class JsonRecord:
    """Mixin giving declared-field dataclasses JSON decode/encode."""

    @classmethod
    def from_json(cls, obj: Any):
        if not isinstance(obj, dict):
            raise SchemaMismatchError(
                cls.__name__,
                f"{cls.__name__}: expected a JSON object, got {type(obj).__name__}",
            )
        values = {}
        for f in fields(cls):
            meta = f.metadata
            if "json_name" not in meta:
                continue
            name = meta["json_name"]
            raw = obj.get(name)
            if raw is None:
                if meta["required"]:
                    raise SchemaMismatchError(name, f"{cls.__name__}: missing required field '{name}'")
                continue
            values[f.name] = cls._decode_value(name, raw, meta)
        return cls(**values)

    @classmethod
    def _decode_value(cls, name: str, raw: Any, meta) -> Any:
        kind = meta["kind"]
        try:
            if kind is list:
                if not isinstance(raw, list):
                    raise TypeError("not a list")
                item = meta["item"]
                convert = _COERCERS.get(item, item)
                return [convert(element) for element in raw]
            if kind is dict:
                return meta["decoder"](raw)
            return _COERCERS[kind](raw)
        except (TypeError, ValueError) as e:
            raise SchemaMismatchError(
                name,
                f"{cls.__name__}: field '{name}' is not a valid {kind.__name__}: {raw!r}",
            ) from e

    @classmethod
    def from_json_list(cls, array: Any) -> list:
        if not isinstance(array, list):
            raise SchemaMismatchError(
                cls.__name__,
                f"{cls.__name__}: expected a JSON array, got {type(array).__name__}",
            )
        return [cls.from_json(element) for element in array]

    def to_json(self) -> Dict[str, Any]:
        """Encode back to the JSON shape this record was decoded from."""
        result = {}
        for f in fields(self):
            meta = f.metadata
            if "json_name" not in meta:
                continue
            value = getattr(self, f.name)
            if value is None:
                continue
            result[meta["json_name"]] = _encode_value(value)
        return result


def _encode_value(value: Any) -> Any:
    if isinstance(value, JsonRecord):
        return value.to_json()
    if isinstance(value, list):
        return [_encode_value(v) for v in value]
    return value


def unwrap(obj: Any, key: str) -> Any:
    """Return obj[key] from a response envelope like {"sleep": {...}}."""
    if not isinstance(obj, dict) or obj.get(key) is None:
        raise SchemaMismatchError(key, f"missing required field '{key}'")
    return obj[key]


def _float_map(obj: Any) -> Dict[str, float]:
    if not isinstance(obj, dict):
        raise TypeError("not an object")
    return {key: _to_float(value) for key, value in obj.items()}


# ── User ─────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class UserInfo(JsonRecord):
    """Profile of a Fitbit user (GET /user/{id}/profile)."""
    encoded_id: str = json_field("encodedId")
    display_name: str = json_field("displayName")
    full_name: str = json_field("fullName", default="")
    nickname: str = json_field("nickname", default="")
    gender: str = json_field("gender", default="NA")
    date_of_birth: str = json_field("dateOfBirth", default="")
    height: float = json_field("height", float, default=0.0)
    weight: float = json_field("weight", float, default=0.0)
    stride_length_walking: float = json_field("strideLengthWalking", float, default=0.0)
    stride_length_running: float = json_field("strideLengthRunning", float, default=0.0)
    about_me: str = json_field("aboutMe", default="")
    city: str = json_field("city", default="")
    state: str = json_field("state", default="")
    country: str = json_field("country", default="")
    member_since: str = json_field("memberSince", default="")
    timezone: str = json_field("timezone", default="")
    offset_from_utc_millis: int = json_field("offsetFromUTCMillis", int, default=0)
    avatar: str = json_field("avatar", default="")


@dataclass(frozen=True)
class Account(JsonRecord):
    """Newly registered account (partner-only endpoint)."""
    encoded_id: str = json_field("encodedId")
    email: str = json_field("email")
    timezone: str = json_field("timezone", default="")


# ── Activities ───────────────────────────────────────────────────────


@dataclass(frozen=True)
class ActivityLevel(JsonRecord):
    id: int = json_field("id", int)
    name: str = json_field("name")
    min_speed_mph: float = json_field("minSpeedMPH", float, default=0.0)
    max_speed_mph: float = json_field("maxSpeedMPH", float, default=0.0)
    mets: float = json_field("mets", float, default=0.0)


@dataclass(frozen=True)
class Activity(JsonRecord):
    """Entry of the activity catalog (GET /activities/{id})."""
    id: int = json_field("id", int)
    name: str = json_field("name")
    description: str = json_field("description", default="")
    access_level: str = json_field("accessLevel", default="")
    has_speed: bool = json_field("hasSpeed", bool, default=False)
    mets: float = json_field("mets", float, default=0.0)
    activity_levels: List[ActivityLevel] = json_field(
        "activityLevels", list, default=[], item=ActivityLevel.from_json
    )


@dataclass(frozen=True)
class ActivityLog(JsonRecord):
    """An activity the user logged on a given day."""
    log_id: int = json_field("logId", int)
    activity_id: int = json_field("activityId", int)
    name: str = json_field("name")
    activity_parent_id: int = json_field("activityParentId", int, default=0)
    description: str = json_field("description", default="")
    calories: int = json_field("calories", int, default=0)
    distance: float = json_field("distance", float, default=0.0)
    duration: int = json_field("duration", int, default=0)
    steps: int = json_field("steps", int, default=0)
    start_time: str = json_field("startTime", default="")
    has_start_time: bool = json_field("hasStartTime", bool, default=False)
    is_favorite: bool = json_field("isFavorite", bool, default=False)


@dataclass(frozen=True)
class ActivityDistance(JsonRecord):
    activity: str = json_field("activity")
    distance: float = json_field("distance", float)


@dataclass(frozen=True)
class ActivitiesSummary(JsonRecord):
    calories_out: int = json_field("caloriesOut", int)
    steps: int = json_field("steps", int)
    active_score: int = json_field("activeScore", int, default=-1)
    activity_calories: int = json_field("activityCalories", int, default=0)
    sedentary_minutes: int = json_field("sedentaryMinutes", int, default=0)
    lightly_active_minutes: int = json_field("lightlyActiveMinutes", int, default=0)
    fairly_active_minutes: int = json_field("fairlyActiveMinutes", int, default=0)
    very_active_minutes: int = json_field("veryActiveMinutes", int, default=0)
    floors: int = json_field("floors", int, default=0)
    elevation: float = json_field("elevation", float, default=0.0)
    distances: List[ActivityDistance] = json_field(
        "distances", list, default=[], item=ActivityDistance.from_json
    )


@dataclass(frozen=True)
class ActivityGoals(JsonRecord):
    active_score: int = json_field("activeScore", int, default=0)
    calories_out: int = json_field("caloriesOut", int, default=0)
    distance: float = json_field("distance", float, default=0.0)
    steps: int = json_field("steps", int, default=0)
    floors: int = json_field("floors", int, default=0)


@dataclass(frozen=True)
class Activities(JsonRecord):
    """A user's activities for one day (GET /user/{id}/activities/date/{date})."""
    activities: List[ActivityLog] = json_field("activities", list, item=ActivityLog.from_json)
    summary: ActivitiesSummary = json_field("summary", dict, decoder=ActivitiesSummary.from_json)
    goals: Optional[ActivityGoals] = json_field("goals", dict, default=None, decoder=ActivityGoals.from_json)


@dataclass(frozen=True)
class ActivityReference(JsonRecord):
    """A favorite activity."""
    activity_id: int = json_field("activityId", int)
    name: str = json_field("name")
    description: str = json_field("description", default="")
    mets: float = json_field("mets", float, default=0.0)


@dataclass(frozen=True)
class LoggedActivityReference(JsonRecord):
    """A recently or frequently logged activity."""
    activity_id: int = json_field("activityId", int)
    name: str = json_field("name")
    description: str = json_field("description", default="")
    calories: int = json_field("calories", int, default=0)
    distance: float = json_field("distance", float, default=0.0)
    duration: int = json_field("duration", int, default=0)


# ── Foods ────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class FoodUnit(JsonRecord):
    id: int = json_field("id", int)
    name: str = json_field("name")
    plural: str = json_field("plural", default="")


@dataclass(frozen=True)
class Food(JsonRecord):
    food_id: int = json_field("foodId", int)
    name: str = json_field("name")
    brand: str = json_field("brand", default="")
    access_level: str = json_field("accessLevel", default="")
    calories: int = json_field("calories", int, default=0)
    default_serving_size: float = json_field("defaultServingSize", float, default=0.0)
    default_unit: Optional[FoodUnit] = json_field("defaultUnit", dict, default=None, decoder=FoodUnit.from_json)
    units: List[int] = json_field("units", list, default=[], item=int)


@dataclass(frozen=True)
class LoggedFood(JsonRecord):
    """A food as it was logged: favorite, recent and frequent lists, and log entries."""
    food_id: int = json_field("foodId", int)
    name: str = json_field("name")
    brand: str = json_field("brand", default="")
    access_level: str = json_field("accessLevel", default="")
    amount: float = json_field("amount", float, default=0.0)
    meal_type_id: int = json_field("mealTypeId", int, default=0)
    calories: int = json_field("calories", int, default=0)
    unit: Optional[FoodUnit] = json_field("unit", dict, default=None, decoder=FoodUnit.from_json)
    units: List[int] = json_field("units", list, default=[], item=int)
    date_last_eaten: str = json_field("dateLastEaten", default="")


FavoriteFood = LoggedFood


@dataclass(frozen=True)
class FoodLog(JsonRecord):
    """One food log entry of a day."""
    log_id: int = json_field("logId", int)
    logged_food: LoggedFood = json_field("loggedFood", dict, decoder=LoggedFood.from_json)
    log_date: str = json_field("logDate", default="")
    is_favorite: bool = json_field("isFavorite", bool, default=False)
    nutritional_values: Dict[str, float] = json_field(
        "nutritionalValues", dict, default={}, decoder=_float_map
    )


@dataclass(frozen=True)
class FoodsSummary(JsonRecord):
    calories: int = json_field("calories", int, default=0)
    carbs: float = json_field("carbs", float, default=0.0)
    fat: float = json_field("fat", float, default=0.0)
    fiber: float = json_field("fiber", float, default=0.0)
    protein: float = json_field("protein", float, default=0.0)
    sodium: float = json_field("sodium", float, default=0.0)
    water: float = json_field("water", float, default=0.0)


@dataclass(frozen=True)
class FoodGoals(JsonRecord):
    calories: int = json_field("calories", int, default=0)


@dataclass(frozen=True)
class Foods(JsonRecord):
    """A user's food log for one day (GET /user/{id}/foods/log/date/{date})."""
    foods: List[FoodLog] = json_field("foods", list, item=FoodLog.from_json)
    summary: FoodsSummary = json_field("summary", dict, decoder=FoodsSummary.from_json)
    goals: Optional[FoodGoals] = json_field("goals", dict, default=None, decoder=FoodGoals.from_json)


@dataclass(frozen=True)
class MealFood(JsonRecord):
    food_id: int = json_field("foodId", int)
    amount: float = json_field("amount", float)
    unit_id: int = json_field("unitId", int)


@dataclass(frozen=True)
class Meal(JsonRecord):
    id: int = json_field("id", int)
    name: str = json_field("name")
    description: str = json_field("description", default="")
    meal_foods: List[MealFood] = json_field("mealFoods", list, default=[], item=MealFood.from_json)


@dataclass(frozen=True)
class NutritionalValuesEntry(JsonRecord):
    """
    Full nutrient panel of a custom food.

    Every nutrient is required when decoding. Fields are declared in the
    order the create-food endpoint lists them, which to_params() preserves.
    """
    calories: int = json_field("calories", int, default=0, required=True)
    calories_from_fat: int = json_field("caloriesFromFat", int, default=0, required=True)
    total_fat: float = json_field("totalFat", float, default=0.0, required=True)
    trans_fat: float = json_field("transFat", float, default=0.0, required=True)
    saturated_fat: float = json_field("saturatedFat", float, default=0.0, required=True)
    cholesterol: float = json_field("cholesterol", float, default=0.0, required=True)
    sodium: float = json_field("sodium", float, default=0.0, required=True)
    potassium: float = json_field("potassium", float, default=0.0, required=True)
    total_carbohydrate: float = json_field("totalCarbohydrate", float, default=0.0, required=True)
    dietary_fiber: float = json_field("dietaryFiber", float, default=0.0, required=True)
    sugars: float = json_field("sugars", float, default=0.0, required=True)
    protein: float = json_field("protein", float, default=0.0, required=True)
    vitamin_a: float = json_field("vitaminA", float, default=0.0, required=True)
    vitamin_c: float = json_field("vitaminC", float, default=0.0, required=True)
    iron: float = json_field("iron", float, default=0.0, required=True)
    calcium: float = json_field("calcium", float, default=0.0, required=True)
    thiamin: float = json_field("thiamin", float, default=0.0, required=True)
    riboflavin: float = json_field("riboflavin", float, default=0.0, required=True)
    vitamin_b6: float = json_field("vitaminB6", float, default=0.0, required=True)
    vitamin_b12: float = json_field("vitaminB12", float, default=0.0, required=True)
    vitamin_e: float = json_field("vitaminE", float, default=0.0, required=True)
    folic_acid: float = json_field("folicAcid", float, default=0.0, required=True)
    niacin: float = json_field("niacin", float, default=0.0, required=True)
    magnesium: float = json_field("magnesium", float, default=0.0, required=True)
    phosphorus: float = json_field("phosphorus", float, default=0.0, required=True)
    iodine: float = json_field("iodine", float, default=0.0, required=True)
    zinc: float = json_field("zinc", float, default=0.0, required=True)
    copper: float = json_field("copper", float, default=0.0, required=True)
    biotin: float = json_field("biotin", float, default=0.0, required=True)
    pantothenic_acid: float = json_field("pantothenicAcid", float, default=0.0, required=True)
    vitamin_d: float = json_field("vitaminD", float, default=0.0, required=True)

    def to_params(self) -> Params:
        """All nutrients as POST parameters, zero values included."""
        return [
            (f.metadata["json_name"], format_param_value(getattr(self, f.name)))
            for f in fields(self)
        ]


# ── Water ────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class WaterLog(JsonRecord):
    log_id: int = json_field("logId", int)
    amount: float = json_field("amount", float)


@dataclass(frozen=True)
class WaterSummary(JsonRecord):
    water: float = json_field("water", float, default=0.0)


@dataclass(frozen=True)
class Water(JsonRecord):
    """A user's water log for one day."""
    water: List[WaterLog] = json_field("water", list, item=WaterLog.from_json)
    summary: WaterSummary = json_field("summary", dict, decoder=WaterSummary.from_json)


# ── Sleep ────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class SleepLog(JsonRecord):
    log_id: int = json_field("logId", int)
    start_time: str = json_field("startTime")
    is_main_sleep: bool = json_field("isMainSleep", bool)
    duration: int = json_field("duration", int)
    minutes_to_fall_asleep: int = json_field("minutesToFallAsleep", int)
    minutes_asleep: int = json_field("minutesAsleep", int)
    minutes_awake: int = json_field("minutesAwake", int)
    awakenings_count: int = json_field("awakeningsCount", int)
    time_in_bed: int = json_field("timeInBed", int)


@dataclass(frozen=True)
class SleepSummary(JsonRecord):
    total_minutes_asleep: int = json_field("totalMinutesAsleep", int, default=0)
    total_sleep_records: int = json_field("totalSleepRecords", int, default=0)
    total_time_in_bed: int = json_field("totalTimeInBed", int, default=0)


@dataclass(frozen=True)
class Sleep(JsonRecord):
    """A user's sleep for one day."""
    sleep: List[SleepLog] = json_field("sleep", list, item=SleepLog.from_json)
    summary: SleepSummary = json_field("summary", dict, decoder=SleepSummary.from_json)


# ── Body ─────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class Body(JsonRecord):
    """Body measurements for one day. Units follow the request locale."""
    weight: float = json_field("weight", float)
    bmi: float = json_field("bmi", float)
    fat: float = json_field("fat", float)
    bicep: float = json_field("bicep", float, default=0.0)
    calf: float = json_field("calf", float, default=0.0)
    chest: float = json_field("chest", float, default=0.0)
    forearm: float = json_field("forearm", float, default=0.0)
    hips: float = json_field("hips", float, default=0.0)
    neck: float = json_field("neck", float, default=0.0)
    thigh: float = json_field("thigh", float, default=0.0)
    waist: float = json_field("waist", float, default=0.0)


# ── Devices ──────────────────────────────────────────────────────────


@dataclass(frozen=True)
class Device(JsonRecord):
    id: str = json_field("id")
    type: str = json_field("type")
    battery: str = json_field("battery", default="")
    last_sync_time: str = json_field("lastSyncTime", default="")
    device_version: str = json_field("deviceVersion", default="")


# ── Subscriptions & account ──────────────────────────────────────────


@dataclass(frozen=True)
class ApiSubscription(JsonRecord):
    subscription_id: str = json_field("subscriptionId")
    subscriber_id: str = json_field("subscriberId", default="")
    owner_id: str = json_field("ownerId", default="")
    owner_type: str = json_field("ownerType", default="")
    collection_type: str = json_field("collectionType", default="")


@dataclass(frozen=True)
class ApiRateLimitStatus(JsonRecord):
    hourly_limit: int = json_field("hourlyLimit", int)
    remaining_hits: int = json_field("remainingHits", int)
    reset_time: str = json_field("resetTime")


# ── Time series ──────────────────────────────────────────────────────


@dataclass(frozen=True)
class Data(JsonRecord):
    """One dated value of a time series. Values arrive as strings."""
    date_time: str = json_field("dateTime")
    value: str = json_field("value")

    @property
    def int_value(self) -> int:
        return _to_int(self.value)

    @property
    def float_value(self) -> float:
        return _to_float(self.value)


@dataclass(frozen=True)
class IntradayData(JsonRecord):
    date_time: str = json_field("dateTime")
    value: float = json_field("value", float)


@dataclass(frozen=True)
class IntradayDataset(JsonRecord):
    dataset: List[IntradayData] = json_field("dataset", list, item=IntradayData.from_json)
    dataset_interval: int = json_field("datasetInterval", int, default=1)
    dataset_type: str = json_field("datasetType", default="minute")


@dataclass(frozen=True)
class IntradaySummary:
    """Day total plus its intraday breakdown."""
    summary: Data
    intraday_dataset: IntradayDataset
