import asyncio
import functools
import logging
import re
import time
import uuid
from pathlib import Path
from typing import BinaryIO, Optional

from fastapi import UploadFile

from teamtrain.core.config import settings
from teamtrain.core.errors import MissingFile, PayloadTooLarge, UnsupportedType

logger = logging.getLogger(__name__)

ALLOWED_CONTENT_TYPES = {
    "image/jpeg": "image",
    "image/png": "image",
    "image/gif": "image",
    "video/mp4": "video",
    "video/webm": "video",
}
MEDIA_FOLDERS = {"image": "images", "video": "videos"}
PUBLIC_PREFIX = "/uploads"
CHUNK_SIZE = 1024 * 1024

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9._-]+")


def upload_root() -> Path:
    return Path(settings.UPLOAD_DIR)


def ensure_upload_dirs() -> None:
    for folder in MEDIA_FOLDERS.values():
        (upload_root() / folder).mkdir(parents=True, exist_ok=True)


def classify(content_type: Optional[str]) -> str:
    """Media kind ("image" or "video") for an allowed MIME type."""
    kind = ALLOWED_CONTENT_TYPES.get(content_type or "")
    if kind is None:
        raise UnsupportedType(
            f"File type '{content_type}' is not allowed. Allowed: JPEG, PNG, GIF, MP4, WEBM."
        )
    return kind


def make_filename(original: Optional[str]) -> str:
    name = _UNSAFE_CHARS.sub("_", Path(original or "").name).strip("._") or "file"
    return f"{int(time.time() * 1000)}-{uuid.uuid4().hex[:6]}-{name}"


def copy_with_limit(source: BinaryIO, target: Path, limit: int, chunk_size: int = CHUNK_SIZE) -> int:
    """
    Blocking chunked copy of ``source`` into ``target``.

    Stops as soon as more than ``limit`` bytes have been read and returns the
    byte count seen so far, so a result above ``limit`` means the copy is
    incomplete.
    """
    size = 0
    source.seek(0)
    with target.open("wb") as out:
        while True:
            chunk = source.read(chunk_size)
            if not chunk:
                break
            size += len(chunk)
            if size > limit:
                break
            out.write(chunk)
    return size


async def save_upload(file: Optional[UploadFile]) -> dict:
    """Stream an upload to disk off the event loop. Returns {filename, path, type}."""
    if file is None or not file.filename:
        raise MissingFile()
    kind = classify(file.content_type)

    folder = MEDIA_FOLDERS[kind]
    filename = make_filename(file.filename)
    target_dir = upload_root() / folder
    target_dir.mkdir(parents=True, exist_ok=True)
    target = target_dir / filename

    limit = settings.MAX_UPLOAD_SIZE
    loop = asyncio.get_running_loop()
    copy = functools.partial(copy_with_limit, file.file, target, limit)
    size = await loop.run_in_executor(None, copy)
    if size > limit:
        target.unlink(missing_ok=True)
        raise PayloadTooLarge(f"File size exceeds {limit // (1024 * 1024)} MB limit.")

    logger.info("Stored %s upload %s (%d bytes)", kind, filename, size)
    return {
        "filename": filename,
        "path": f"{PUBLIC_PREFIX}/{folder}/{filename}",
        "type": kind,
    }
