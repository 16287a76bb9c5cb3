"""Product image uploads stored on the local filesystem."""

import re
import time
from pathlib import Path

from protean.exceptions import ValidationError

from storefront.domain import logger
from storefront.settings import get_settings

_UNSAFE_CHARACTERS = re.compile(r"[^A-Za-z0-9._-]")


def store_upload(filename: str, content: bytes) -> str:
    """Write an uploaded file to the upload directory and return its public URL.

    Files are saved as ``<epoch-ms>-<original name>``.
    """
    if not filename:
        raise ValidationError({"file": ["No file uploaded"]})

    upload_dir = Path(get_settings().upload_dir)
    upload_dir.mkdir(parents=True, exist_ok=True)

    safe_name = _UNSAFE_CHARACTERS.sub("_", Path(filename).name)
    stored_name = f"{int(time.time() * 1000)}-{safe_name}"
    (upload_dir / stored_name).write_bytes(content)

    logger.info("image_uploaded", filename=stored_name, size=len(content))
    return f"/uploads/{stored_name}"
