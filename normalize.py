import math
import re
from datetime import date, datetime, time, timezone, tzinfo
from typing import Any, Dict, List, Optional

from logging_config import get_logger
from models import LUNAR_DISTANCE_KM, NeoSummary

logger = get_logger(__name__)

DEFAULT_ORBITING_BODY = "Earth"

_MONTHS = {
    "jan": 1, "feb": 2, "mar": 3, "apr": 4, "may": 5, "jun": 6,
    "jul": 7, "aug": 8, "sep": 9, "oct": 10, "nov": 11, "dec": 12,
}

# NeoWs close_approach_date_full, e.g. "2015-Sep-08 20:28" or "2015-SEP-08 20:28:13"
_DATE_FULL_PATTERN = re.compile(
    r"^(\d{4})-([A-Za-z]{3})-(\d{2}) (\d{2}):(\d{2})(?::(\d{2}))?$"
)


def _get(mapping: Any, key: str) -> Any:
    """dict.get that tolerates a missing or non-dict parent."""
    if isinstance(mapping, dict):
        return mapping.get(key)
    return None


def parse_float_or_nan(value: Any) -> float:
    """
    Parse a NeoWs numeric field (often a string) into a float.

    Missing, blank, malformed or non-finite values become NaN instead of
    raising.
    """
    if value is None or isinstance(value, bool):
        return math.nan
    if isinstance(value, (int, float)):
        try:
            result = float(value)
        except OverflowError:
            return math.nan
    elif isinstance(value, str):
        value = value.strip()
        # float() also accepts digit separators ("1_000"); NeoWs never sends them
        if not value or "_" in value:
            return math.nan
        try:
            result = float(value)
        except ValueError:
            return math.nan
    else:
        return math.nan
    return result if math.isfinite(result) else math.nan


def parse_epoch_millis(value: Any) -> Optional[int]:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return None if math.isnan(value) or math.isinf(value) else int(value)
    if isinstance(value, str) and value.strip():
        try:
            return int(value.strip())
        except ValueError:
            return None
    return None


def parse_close_approach_date_full(value: Any, zone: tzinfo) -> Optional[datetime]:
    """Parse "yyyy-MMM-dd HH:mm[:ss]" in the given zone; None if it doesn't parse."""
    if not isinstance(value, str) or not value.strip():
        return None

    match = _DATE_FULL_PATTERN.match(value.strip())
    if match is None:
        return None

    year, month_name, day, hour, minute, second = match.groups()
    month = _MONTHS.get(month_name.lower())
    if month is None:
        return None

    try:
        return datetime(
            int(year), month, int(day), int(hour), int(minute), int(second or 0),
            tzinfo=zone,
        )
    except ValueError:
        return None


def _compare_miss_distance(left: float, right: float) -> int:
    """Compare two distances with NaN ordered after every parsed value."""
    if math.isnan(left) and math.isnan(right):
        return 0
    if math.isnan(left):
        return 1
    if math.isnan(right):
        return -1
    return (left > right) - (left < right)


def choose_close_approach(approaches: Any, target_date: date) -> Optional[Dict[str, Any]]:
    """
    Pick the close approach that describes the object on target_date.

    Approaches dated target_date win, smallest miss distance first (first
    encountered on ties). Otherwise the earliest epoch timestamp, otherwise
    the first record.
    """
    if not isinstance(approaches, list) or not approaches:
        return None

    date_key = target_date.isoformat()
    best_matching = None
    best_matching_km = math.nan

    for approach in approaches:
        if not isinstance(approach, dict) or approach.get("close_approach_date") != date_key:
            continue
        miss_km = parse_float_or_nan(_get(approach.get("miss_distance"), "kilometers"))
        if best_matching is None or _compare_miss_distance(miss_km, best_matching_km) < 0:
            best_matching = approach
            best_matching_km = miss_km

    if best_matching is not None:
        return best_matching

    first = None
    soonest = None
    soonest_epoch = None

    for approach in approaches:
        if not isinstance(approach, dict):
            continue
        if first is None:
            first = approach
        epoch = parse_epoch_millis(approach.get("epoch_date_close_approach"))
        if epoch is not None and (soonest_epoch is None or epoch < soonest_epoch):
            soonest_epoch = epoch
            soonest = approach

    return soonest if soonest is not None else first


def resolve_close_approach_time(
    approach: Optional[Dict[str, Any]], target_date: date, zone: tzinfo
) -> datetime:
    if approach is not None:
        epoch = parse_epoch_millis(approach.get("epoch_date_close_approach"))
        if epoch is not None:
            try:
                return datetime.fromtimestamp(epoch / 1000, tz=timezone.utc)
            except (OverflowError, OSError, ValueError):
                logger.debug("Epoch %s out of range, trying close_approach_date_full", epoch)

        parsed = parse_close_approach_date_full(approach.get("close_approach_date_full"), zone)
        if parsed is not None:
            return parsed

    return datetime.combine(target_date, time.min, tzinfo=zone)


def _safe_string(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    try:
        return str(value)
    except ValueError:
        # int too large for str() conversion
        return ""


def _is_hazardous(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() == "true"
    return value is True


def normalize_asteroid(raw_data: Dict[str, Any], target_date: date, zone: tzinfo) -> NeoSummary:
    """
    Normalize a single NeoWs object into a NeoSummary for target_date.

    Missing nested data degrades to defaults/NaN; it never raises.
    """
    meters = _get(raw_data.get("estimated_diameter"), "meters")
    approach = choose_close_approach(raw_data.get("close_approach_data"), target_date)

    distance = _get(approach, "miss_distance")
    velocity = _get(approach, "relative_velocity")

    miss_distance_km = parse_float_or_nan(_get(distance, "kilometers"))
    miss_distance_lunar = parse_float_or_nan(_get(distance, "lunar"))
    if math.isnan(miss_distance_lunar) and not math.isnan(miss_distance_km):
        miss_distance_lunar = miss_distance_km / LUNAR_DISTANCE_KM

    orbiting_body = _get(approach, "orbiting_body")
    if not isinstance(orbiting_body, str) or not orbiting_body.strip():
        orbiting_body = DEFAULT_ORBITING_BODY

    return NeoSummary(
        id=_safe_string(raw_data.get("id")),
        name=_safe_string(raw_data.get("name")),
        is_hazardous=_is_hazardous(raw_data.get("is_potentially_hazardous_asteroid")),
        diameter_min_meters=parse_float_or_nan(_get(meters, "estimated_diameter_min")),
        diameter_max_meters=parse_float_or_nan(_get(meters, "estimated_diameter_max")),
        close_approach_time=resolve_close_approach_time(approach, target_date, zone),
        orbiting_body=orbiting_body,
        miss_distance_km=miss_distance_km,
        miss_distance_lunar=miss_distance_lunar,
        relative_velocity_km_per_sec=parse_float_or_nan(_get(velocity, "kilometers_per_second")),
    )


def _sort_key(summary: NeoSummary):
    km = summary.miss_distance_km
    return (summary.close_approach_time, math.isnan(km), 0.0 if math.isnan(km) else km)


def normalize_feed_for_date(feed_response: Any, target_date: date, zone: tzinfo) -> List[NeoSummary]:
    """
    Normalize the objects listed under target_date in a NeoWs /feed response.

    Returns summaries ordered by close approach time, then miss distance
    (unknown distances last). Missing or empty date keys give an empty list.
    """
    near_earth_objects = _get(feed_response, "near_earth_objects")
    objects_for_date = _get(near_earth_objects, target_date.isoformat())
    if not isinstance(objects_for_date, list) or not objects_for_date:
        return []

    summaries = []
    for raw_data in objects_for_date:
        if raw_data is None:
            continue
        if not isinstance(raw_data, dict):
            logger.warning("Skipping NeoWs entry of unexpected type %s", type(raw_data).__name__)
            continue
        summaries.append(normalize_asteroid(raw_data, target_date, zone))

    summaries.sort(key=_sort_key)
    return summaries
