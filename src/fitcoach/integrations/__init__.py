"""External service integrations."""

from .video_catalog import (
    FALLBACK_VIDEOS,
    WORKOUT_CATEGORIES,
    VideoCatalogClient,
    detect_category,
    estimate_calories,
    estimate_difficulty,
    format_count,
    parse_iso8601_duration,
)

__all__ = [
    "FALLBACK_VIDEOS",
    "WORKOUT_CATEGORIES",
    "VideoCatalogClient",
    "detect_category",
    "estimate_calories",
    "estimate_difficulty",
    "format_count",
    "parse_iso8601_duration",
]
