"""YouTube URL parsing utilities."""

import re


# Video IDs are 11 chars: alphanumeric + _ + -
_URL_PATTERN = re.compile(
    r"^(?:https?://)?"
    r"(?:"
    r"(?:(?:www|m)\.)?youtube\.com/(?:watch\?(?:\S*?&)?v=|embed/|v/)"
    r"|youtu\.be/"
    r")"
    r"([a-zA-Z0-9_-]{11})"
)
_VIDEO_ID_PATTERN = re.compile(r"^([a-zA-Z0-9_-]{11})$")

CANONICAL_URL = "https://www.youtube.com/watch?v={video_id}"
THUMBNAIL_URL = "https://img.youtube.com/vi/{video_id}/{quality}.jpg"
EMBED_URL = "https://www.youtube.com/embed/{video_id}"

PLACEHOLDER_THUMBNAIL = "https://via.placeholder.com/480x360/cccccc/666666?text=No+Image"

SUPPORTED_FORMATS = (
    "https://www.youtube.com/watch?v=VIDEO_ID",
    "https://youtube.com/watch?v=VIDEO_ID",
    "https://m.youtube.com/watch?v=VIDEO_ID",
    "https://youtu.be/VIDEO_ID",
    "https://www.youtube.com/watch?v=VIDEO_ID&list=PLAYLIST",
    "https://www.youtube.com/watch?v=VIDEO_ID&t=30s",
    "https://youtu.be/VIDEO_ID?si=SHARE_PARAM",
    "https://www.youtube.com/embed/VIDEO_ID",
    "https://www.youtube.com/v/VIDEO_ID",
)


def extract_video_id(url: str) -> str | None:
    """Extract video ID from a YouTube URL or a bare video ID.

    Supports:
    - https://www.youtube.com/watch?v=VIDEO_ID
    - https://m.youtube.com/watch?v=VIDEO_ID
    - https://youtu.be/VIDEO_ID
    - https://youtube.com/embed/VIDEO_ID and /v/VIDEO_ID
    - URLs with additional params (t=, list=, si=, etc.)
    - VIDEO_ID on its own

    Returns:
        Video ID (11 chars) or None if not a YouTube video reference.
    """
    if not url:
        return None

    url = url.strip()

    for pattern in (_URL_PATTERN, _VIDEO_ID_PATTERN):
        match = pattern.match(url)
        if match:
            return match.group(1)

    return None


def is_valid_url(url: str) -> bool:
    return extract_video_id(url) is not None


def normalize_url(url: str) -> str | None:
    """Return the canonical watch URL, or None if no video ID is found."""
    video_id = extract_video_id(url)
    if not video_id:
        return None
    return CANONICAL_URL.format(video_id=video_id)


def thumbnail_url(url: str, quality: str = "hqdefault") -> str | None:
    """Return the thumbnail image URL for a video."""
    video_id = extract_video_id(url)
    if not video_id:
        return None
    return THUMBNAIL_URL.format(video_id=video_id, quality=quality)


def embed_url(url: str) -> str | None:
    video_id = extract_video_id(url)
    if not video_id:
        return None
    return EMBED_URL.format(video_id=video_id)
