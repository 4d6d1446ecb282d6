import re
from typing import Optional

_YOUTUBE_ID = re.compile(
    r"(?:youtube\.com/(?:watch\?(?:.*&)?v=|embed/|shorts/)|youtu\.be/)([^&\n?#/]+)"
)
_BARE_ID = re.compile(r"[A-Za-z0-9_-]{11}")


def extract_youtube_id(url: Optional[str]) -> Optional[str]:
    """Video id from a watch, embed, shorts or youtu.be link, or a bare 11-character id; None if not recognised."""
    if not url:
        return None
    match = _YOUTUBE_ID.search(url)
    if match:
        return match.group(1)
    if _BARE_ID.fullmatch(url.strip()):
        return url.strip()
    return None
