"""
Workout video catalog backed by the YouTube Data API v3.

Implements:
- Keyword search and category browsing
- Trending (most viewed) and newest workouts
- Duration, category, difficulty and calorie estimation from video metadata
- A static fallback catalog used whenever the API is unconfigured or failing
"""

import logging
import random
import re
from typing import Any, Dict, List, Optional

import httpx

from ..config import Settings, get_settings
from ..exceptions import VideoCatalogError
from ..models.coach import VideoSummary


logger = logging.getLogger(__name__)


# Search query used for each browsable category
WORKOUT_CATEGORIES: Dict[str, str] = {
    "hiit": "HIIT workout",
    "yoga": "yoga workout",
    "strength": "strength training",
    "cardio": "cardio workout",
    "core": "core workout abs",
    "fullbody": "full body workout",
    "pilates": "pilates workout",
    "dance": "dance workout",
    "stretching": "stretching workout",
    "bodyweight": "bodyweight workout",
}

_DURATION_PATTERN = re.compile(r"^PT(?:(\d+)H)?(?:(\d+)M)?(?:(\d+)S)?$")

# Ordered: the first matching rule wins
_CATEGORY_KEYWORDS = [
    ("HIIT", ("hiit", "high intensity")),
    ("Yoga", ("yoga", "vinyasa")),
    ("Strength", ("strength", "weight", "muscle")),
    ("Cardio", ("cardio", "aerobic")),
    ("Core", ("core", "abs", "abdominal")),
    ("Full Body", ("full body", "total body")),
    ("Pilates", ("pilates",)),
    ("Dance", ("dance",)),
    ("Stretching", ("stretch",)),
]

_FALLBACK_KEYWORDS = [
    ("hiit", ("hiit",)),
    ("yoga", ("yoga",)),
    ("strength", ("strength",)),
    ("core", ("core", "abs")),
    ("cardio", ("cardio",)),
    ("fullbody", ("full body",)),
]

_PEXELS = "https://images.pexels.com/photos/{0}/pexels-photo-{0}.jpeg?auto=compress&cs=tinysrgb&w=800"


def _fallback(
    video_id: str,
    catalog_id: str,
    title: str,
    description: str,
    photo: int,
    channel: str,
    duration: str,
    views: str,
    likes: str,
    category: str,
    difficulty: str,
    calories: int,
) -> VideoSummary:
    return VideoSummary(
        id=catalog_id,
        video_id=video_id,
        title=title,
        description=description,
        thumbnail=_PEXELS.format(photo),
        channel_title=channel,
        duration=duration,
        view_count=views,
        like_count=likes,
        category=category,
        difficulty=difficulty,
        estimated_calories=calories,
    )


FALLBACK_VIDEOS: Dict[str, List[VideoSummary]] = {
    "hiit": [
        _fallback("gBXUvbJBIiI", "hiit_1", "20 Min HIIT Tabata Workout - Fat Burning",
                  "High-intensity interval training workout designed to burn fat and build endurance. No equipment needed!",
                  416809, "FitnessBlender", "20:15", "512.4K", "5.2K", "HIIT", "Intermediate", 280),
        _fallback("enQKnq4bSTs", "hiit_2", "15 Min HIIT Cardio Workout - No Equipment",
                  "Quick and effective HIIT cardio session perfect for busy schedules. Get your heart pumping!",
                  1552242, "Calisthenic Movement", "15:40", "634.9K", "6.1K", "HIIT", "Beginner", 210),
        _fallback("DHD1-2P94DI", "hiit_3", "30 Min Advanced HIIT - Full Body Burn",
                  "Challenging HIIT workout targeting all muscle groups. Perfect for experienced fitness enthusiasts.",
                  1552106, "Athlean-X", "31:05", "1.1M", "11.8K", "HIIT", "Advanced", 390),
    ],
    "yoga": [
        _fallback("GLy2rYHwUqY", "yoga_1", "Morning Yoga Flow - 20 Minutes",
                  "Gentle morning yoga sequence to energize your day and improve flexibility.",
                  317157, "Yoga with Adriene", "21:30", "402.7K", "4.0K", "Yoga", "Beginner", 140),
        _fallback("BiWDsfZ3I2w", "yoga_2", "Power Vinyasa Yoga - 45 Minutes",
                  "Dynamic vinyasa flow combining strength, flexibility, and mindfulness.",
                  1051838, "DoYogaWithMe", "44:20", "731.0K", "7.3K", "Yoga", "Intermediate", 240),
        _fallback("pSHjTRCQxIw", "yoga_3", "Restorative Yoga for Deep Relaxation",
                  "Calming restorative yoga practice perfect for stress relief and better sleep.",
                  1472887, "Alo Yoga", "32:10", "288.5K", "3.1K", "Yoga", "Beginner", 120),
    ],
    "strength": [
        _fallback("8Ufg_gRG6jE", "strength_1", "Upper Body Strength Training - 30 Minutes",
                  "Build muscle and strength in your arms, shoulders, and back with this comprehensive workout.",
                  1229356, "Jeff Nippard", "30:45", "655.2K", "6.8K", "Strength", "Intermediate", 260),
        _fallback("IODxDxX7oi4", "strength_2", "Full Body Strength Workout - No Weights",
                  "Bodyweight strength training targeting all major muscle groups.",
                  1552252, "Calisthenic Movement", "27:00", "890.3K", "9.4K", "Strength", "Beginner", 210),
    ],
    "core": [
        _fallback("UBMk30rjy0o", "core_1", "15 Min Abs Workout - Core Strengthening",
                  "Targeted core workout to build strong abs and improve stability.",
                  1552103, "Chloe Ting", "16:20", "1.2M", "12.5K", "Core", "Intermediate", 180),
        _fallback("ml6cT4AZdqI", "core_2", "Plank Challenge - 10 Minutes",
                  "Progressive plank variations to build core strength and endurance.",
                  1552242, "FitnessBlender", "11:45", "512.0K", "5.6K", "Core", "Beginner", 120),
    ],
    "cardio": [
        _fallback("v7AYKMP6rOE", "cardio_1", "30 Min Cardio Dance Workout",
                  "Fun and energetic dance cardio session to get your heart pumping.",
                  1701194, "The Fitness Marshall", "32:30", "845.6K", "8.9K", "Cardio", "Intermediate", 320),
    ],
    "fullbody": [
        _fallback("gC_L9qAHVJ8", "fullbody_1", "Full Body Workout for Beginners - 25 Minutes",
                  "Complete beginner-friendly workout targeting all major muscle groups.",
                  1552106, "MadFit", "26:10", "604.8K", "6.2K", "Full Body", "Beginner", 240),
    ],
}


# =============================================================================
# Metadata helpers
# =============================================================================

def parse_iso8601_duration(duration: str) -> str:
    """
    Format an ISO-8601 video duration for display.

    Examples:
        >>> parse_iso8601_duration("PT1H2M3S")
        '1:02:03'
        >>> parse_iso8601_duration("PT20M5S")
        '20:05'
    """
    match = _DURATION_PATTERN.match(duration or "")
    if not match:
        return "0:00"

    hours, minutes, seconds = (int(group or 0) for group in match.groups())
    if hours > 0:
        return f"{hours}:{minutes:02d}:{seconds:02d}"
    return f"{minutes}:{seconds:02d}"


def detect_category(text: str) -> str:
    """Display category for a title/description, "General" if none matches."""
    lowered = text.lower()
    for category, keywords in _CATEGORY_KEYWORDS:
        if any(keyword in lowered for keyword in keywords):
            return category
    return "General"


def estimate_difficulty(title: str) -> str:
    lowered = title.lower()
    if any(word in lowered for word in ("beginner", "easy", "gentle")):
        return "Beginner"
    if any(word in lowered for word in ("advanced", "intense", "extreme")):
        return "Advanced"
    return "Intermediate"


def estimate_calories(title: str, minutes: int) -> int:
    """Calories for a video from its length and the kind of workout in the title."""
    lowered = title.lower()
    if "hiit" in lowered or "cardio" in lowered:
        per_minute = 12
    elif "yoga" in lowered or "stretch" in lowered:
        per_minute = 4
    elif "strength" in lowered or "weight" in lowered:
        per_minute = 6
    else:
        per_minute = 8
    return minutes * per_minute


def format_count(raw: Any) -> str:
    """Compact view/like count: 1.2M, 34.5K or the plain number."""
    try:
        number = int(raw)
    except (TypeError, ValueError):
        return "0"
    if number >= 1_000_000:
        return f"{number / 1_000_000:.1f}M"
    if number >= 1_000:
        return f"{number / 1_000:.1f}K"
    return str(number)


def fallback_category(query: str) -> str:
    """Fallback catalog section for a free-text query (HIIT if nothing matches)."""
    lowered = query.lower()
    for category, keywords in _FALLBACK_KEYWORDS:
        if any(keyword in lowered for keyword in keywords):
            return category
    return "hiit"


def video_from_api(item: Dict[str, Any]) -> VideoSummary:
    """Map a videos.list item (snippet, statistics, contentDetails) to a VideoSummary."""
    snippet = item.get("snippet", {})
    statistics = item.get("statistics", {})
    details = item.get("contentDetails", {})

    title = snippet.get("title", "")
    description = snippet.get("description", "")
    duration = parse_iso8601_duration(details.get("duration", "PT20M"))
    minutes = int(duration.split(":")[0]) or 20
    thumbnails = snippet.get("thumbnails", {})
    thumbnail = (thumbnails.get("high") or thumbnails.get("default") or {}).get("url", "")

    return VideoSummary(
        id=item["id"],
        video_id=item["id"],
        title=title,
        description=description,
        thumbnail=thumbnail,
        channel_title=snippet.get("channelTitle", ""),
        published_at=snippet.get("publishedAt"),
        duration=duration,
        view_count=format_count(statistics.get("viewCount", "0")),
        like_count=format_count(statistics.get("likeCount", "0")),
        category=detect_category(f"{title} {description}"),
        difficulty=estimate_difficulty(title),
        estimated_calories=estimate_calories(title, minutes),
    )


# =============================================================================
# Client
# =============================================================================

class VideoCatalogClient:
    """
    Async YouTube client for workout videos.

    Public methods never raise: any API failure is logged and the static
    fallback catalog is returned instead.

    Usage:
        async with VideoCatalogClient() as catalog:
            videos = await catalog.by_category("yoga", 5)
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        http_client: Optional[httpx.AsyncClient] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self._settings = settings or get_settings()
        self._http_client = http_client
        self._rng = rng or random.Random()

    @property
    def enabled(self) -> bool:
        """Whether a YouTube API key is configured."""
        return bool(self._settings.youtube_api_key)

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._http_client is None or self._http_client.is_closed:
            self._http_client = httpx.AsyncClient(timeout=self._settings.video_timeout)
        return self._http_client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._http_client is not None and not self._http_client.is_closed:
            await self._http_client.aclose()
            self._http_client = None

    async def __aenter__(self) -> "VideoCatalogClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    async def _request(self, endpoint: str, params: Dict[str, Any]) -> Dict[str, Any]:
        """
        GET an API endpoint with the key attached.

        Raises:
            VideoCatalogError: On transport errors or non-200 responses
        """
        url = f"{self._settings.youtube_base_url}{endpoint}"
        client = await self._get_client()

        try:
            response = await client.get(url, params={**params, "key": self._settings.youtube_api_key})
        except httpx.HTTPError as e:
            raise VideoCatalogError(f"YouTube request failed: {e}") from e

        if response.status_code != 200:
            raise VideoCatalogError(
                f"YouTube API error on {endpoint}", status=response.status_code
            )
        return response.json()

    async def _fetch(self, count: int, **search_params: Any) -> List[VideoSummary]:
        """Search, then load full details for the matching videos."""
        search = await self._request("/search", {
            "part": "snippet",
            "type": "video",
            "maxResults": count,
            "videoEmbeddable": "true",
            **search_params,
        })
        ids = [
            item["id"]["videoId"]
            for item in search.get("items", [])
            if isinstance(item.get("id"), dict) and "videoId" in item["id"]
        ]
        if not ids:
            return []

        details = await self._request("/videos", {
            "part": "snippet,statistics,contentDetails",
            "id": ",".join(ids),
        })
        return [video_from_api(item) for item in details.get("items", [])]

    async def _fetch_or_fallback(
        self, count: int, fallback: List[VideoSummary], **search_params: Any
    ) -> List[VideoSummary]:
        if not self.enabled:
            return fallback[:count]
        try:
            return await self._fetch(count, **search_params)
        except (VideoCatalogError, KeyError, ValueError) as e:
            logger.warning(f"Video catalog unavailable, using fallback: {e}")
            return fallback[:count]

    async def search(self, query: str, count: int = 10) -> List[VideoSummary]:
        """Workout videos matching a free-text query."""
        fallback = list(FALLBACK_VIDEOS.get(fallback_category(query), []))
        return await self._fetch_or_fallback(
            count, fallback, q=f"{query} workout fitness exercise", order="relevance"
        )

    async def by_category(self, category: str, count: int = 10) -> List[VideoSummary]:
        """Videos for a category key such as "hiit" or "yoga"."""
        return await self.search(WORKOUT_CATEGORIES.get(category, category), count)

    async def trending(self, count: int = 10) -> List[VideoSummary]:
        """Most viewed workout videos."""
        fallback = self._mixed_fallback({
            "hiit": (0, 4), "yoga": (0, 3), "strength": (0, 3),
            "cardio": (0, 3), "core": (0, 2), "fullbody": (0, 2),
        })
        self._rng.shuffle(fallback)
        return await self._fetch_or_fallback(
            count, fallback, q="workout fitness exercise", order="viewCount"
        )

    async def newest(self, count: int = 10) -> List[VideoSummary]:
        """Most recently published workout videos."""
        fallback = self._mixed_fallback({
            "hiit": (1, 4), "yoga": (1, 3), "strength": (1, 3),
            "core": (0, 3), "cardio": (1, 2), "fullbody": (0, 2),
        })
        return await self._fetch_or_fallback(
            count, fallback, q="workout fitness exercise", order="date"
        )

    @staticmethod
    def _mixed_fallback(slices: Dict[str, tuple]) -> List[VideoSummary]:
        videos: List[VideoSummary] = []
        for category, (start, stop) in slices.items():
            videos.extend(FALLBACK_VIDEOS.get(category, [])[start:stop])
        return videos
