from fractions import Fraction

from contrib3d.models import ColorBucket
from contrib3d.models import EncodedBar


EMPTY_HEIGHT = 0.1
BASE_HEIGHT = 0.2
HEIGHT_RANGE = 4.0
# Caps the color normalization so one outlier day does not wash out the rest.
COLOR_NORMALIZATION_CAP = 20

BUCKET_COLORS: dict[ColorBucket, str] = {
    ColorBucket.EMPTY: "#2d333b",
    ColorBucket.LOW: "#39d353",
    ColorBucket.MEDIUM: "#26a641",
    ColorBucket.HIGH: "#006d32",
    ColorBucket.MAX: "#0e4429",
}

_BUCKET_THRESHOLDS: tuple[tuple[Fraction, ColorBucket], ...] = (
    (Fraction(15, 100), ColorBucket.LOW),
    (Fraction(35, 100), ColorBucket.MEDIUM),
    (Fraction(60, 100), ColorBucket.HIGH),
)


def _check_count(count: int) -> None:
    if count < 0:
        raise ValueError(f"Contribution count must be non-negative, got {count}")


def bar_height(count: int, max_count: int) -> float:
    """Scale a day's count linearly between a visible floor and a fixed ceiling."""

    _check_count(count)
    if count == 0:
        return EMPTY_HEIGHT
    return BASE_HEIGHT + (count / max(1, max_count)) * HEIGHT_RANGE


def color_bucket(count: int, max_count: int) -> ColorBucket:
    """Assign a day to one of the five color intensity buckets.

    Thresholds are inclusive upper bounds, compared exactly so that a
    percentage landing on a boundary falls into the lower bucket.
    """

    _check_count(count)
    if count == 0:
        return ColorBucket.EMPTY

    percentage = Fraction(count, max(1, min(max_count, COLOR_NORMALIZATION_CAP)))
    for threshold, bucket in _BUCKET_THRESHOLDS:
        if percentage <= threshold:
            return bucket
    return ColorBucket.MAX


def bucket_color(bucket: ColorBucket) -> str:
    return BUCKET_COLORS[bucket]


def encode_bar(count: int, max_count: int) -> EncodedBar:
    return EncodedBar(
        height=bar_height(count, max_count),
        color_bucket=color_bucket(count, max_count),
    )
