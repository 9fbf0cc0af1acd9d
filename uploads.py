# uploads.py
import logging
import os
import re
import time
import uuid

from fastapi import UploadFile

from errors import StoreError, ValidationError

logger = logging.getLogger(__name__)

CHUNK_SIZE = 1024 * 1024
_EXT_RE = re.compile(r"^\.[a-z0-9]{1,10}$")


def is_image_content_type(content_type: str | None) -> bool:
    return bool(content_type) and content_type.lower().startswith("image/")


def safe_extension(filename: str | None) -> str:
    # only the extension of the client name is kept, never its path
    ext = os.path.splitext(os.path.basename(filename or ""))[1].lower()
    return ext if _EXT_RE.match(ext) else ""


def unique_name(filename: str | None, prefix: str = "image") -> str:
    stamp = int(time.time() * 1000)
    return f"{prefix}-{stamp}-{uuid.uuid4().hex}{safe_extension(filename)}"


def discard_upload(path: str):
    try:
        os.remove(path)
    except FileNotFoundError:
        pass
    except OSError as e:
        logger.error(f"Could not remove partial upload {path}: {e}")


def store_upload(file: UploadFile, upload_dir: str, max_bytes: int) -> tuple[str, int]:
    """Validate `file` and stream it into `upload_dir` under a fresh name.

    Returns (stored filename, size in bytes). Raises ValidationError for a
    non-image content type or an oversized body and StoreError when the disk
    write fails; in both cases nothing is left on disk.
    """
    if not is_image_content_type(file.content_type):
        logger.info(f"Upload rejected, content type {file.content_type!r} for {file.filename!r}")
        raise ValidationError("Only image files are allowed")

    try:
        os.makedirs(upload_dir, exist_ok=True)
    except OSError as e:
        logger.exception(f"Upload directory unavailable: {upload_dir}")
        raise StoreError("Failed to store upload") from e

    name = unique_name(file.filename)
    path = os.path.join(upload_dir, name)
    size = 0
    try:
        # "xb" never overwrites an existing file
        with open(path, "xb") as out:
            while True:
                chunk = file.file.read(CHUNK_SIZE)
                if not chunk:
                    break
                size += len(chunk)
                if size > max_bytes:
                    break
                out.write(chunk)
    except OSError as e:
        discard_upload(path)
        logger.exception(f"Failed writing upload {path}")
        raise StoreError("Failed to store upload") from e

    if size > max_bytes:
        discard_upload(path)
        logger.info(f"Upload rejected, {file.filename!r} exceeds {max_bytes} bytes")
        raise ValidationError(f"File too large, limit is {max_bytes} bytes")

    if size == 0:
        discard_upload(path)
        raise ValidationError("Uploaded file is empty")

    logger.info(f"Stored upload {file.filename!r} as {name} ({size} bytes)")
    return name, size
