# ABOUTME: Day aggregation that buckets weather samples by local calendar day.
# ABOUTME: Reduces each bucket to min/max temperature and a near-noon representative condition.

import logging
from collections.abc import Iterable, Sequence
from datetime import date, datetime, timedelta

from weather_vue.conditions import describe_condition
from weather_vue.models import DaySummary, WeatherSample

logger = logging.getLogger(__name__)

NOON_SECONDS = 12 * 60 * 60


def local_datetime(sample: WeatherSample, timezone_offset_seconds: int) -> datetime:
    """Wall-clock time of a sample at the location, independent of the host clock."""
    return sample.timestamp_utc + timedelta(seconds=timezone_offset_seconds)


def local_day(sample: WeatherSample, timezone_offset_seconds: int) -> date:
    """Calendar day a sample falls on at the location."""
    return local_datetime(sample, timezone_offset_seconds).date()


def select_representative(bucket: Sequence[WeatherSample], timezone_offset_seconds: int = 0) -> WeatherSample:
    """Pick the sample whose local time of day is closest to noon.

    Ties go to the earliest sample in ``bucket``. Raises ValueError for an
    empty bucket, which aggregation never produces.
    """
    if not bucket:
        raise ValueError("cannot select a representative from an empty bucket")

    best = bucket[0]
    best_distance = _distance_from_noon(best, timezone_offset_seconds)
    for sample in bucket[1:]:
        distance = _distance_from_noon(sample, timezone_offset_seconds)
        if distance < best_distance:
            best, best_distance = sample, distance
    return best


def aggregate_by_local_day(samples: Iterable[WeatherSample], timezone_offset_seconds: int = 0) -> list[DaySummary]:
    """Bucket samples by local calendar day and summarise each day.

    Args:
        samples: Samples in provider order; the order decides representative ties.
        timezone_offset_seconds: UTC offset of the forecast location.

    Returns:
        One DaySummary per local day, sorted ascending. Empty input gives an empty list.
    """
    buckets: dict[date, list[WeatherSample]] = {}
    for sample in samples:
        try:
            day = local_day(sample, timezone_offset_seconds)
        except OverflowError:
            logger.debug("Skipping sample at %s outside the representable local range", sample.timestamp_utc)
            continue
        buckets.setdefault(day, []).append(sample)

    return [
        summarise_bucket(day, buckets[day], timezone_offset_seconds)
        for day in sorted(buckets)
    ]


def summarise_bucket(day: date, bucket: Sequence[WeatherSample], timezone_offset_seconds: int = 0) -> DaySummary:
    """Reduce one day's samples to a DaySummary."""
    low = min(_lower_bound(s) for s in bucket)
    high = max(_upper_bound(s) for s in bucket)
    representative = select_representative(bucket, timezone_offset_seconds)
    condition = describe_condition(representative.condition_code)
    return DaySummary(
        local_date=day,
        # Providers occasionally report a temp_min above another sample's temp_max.
        min_temperature=min(low, high),
        max_temperature=max(low, high),
        representative_condition_code=representative.condition_code,
        representative_description=condition.description,
        representative_emoji=condition.emoji,
    )


def _lower_bound(sample: WeatherSample) -> float:
    return sample.temperature if sample.temperature_min is None else sample.temperature_min


def _upper_bound(sample: WeatherSample) -> float:
    return sample.temperature if sample.temperature_max is None else sample.temperature_max


def _distance_from_noon(sample: WeatherSample, timezone_offset_seconds: int) -> float:
    local = local_datetime(sample, timezone_offset_seconds)
    seconds = local.hour * 3600 + local.minute * 60 + local.second + local.microsecond / 1_000_000
    return abs(seconds - NOON_SECONDS)
