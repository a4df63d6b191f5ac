"""Disk-backed store for uploaded ID-card photos."""

from __future__ import annotations

import io
import logging
import time
from pathlib import Path
from typing import Callable, Optional

from PIL import Image, UnidentifiedImageError
from werkzeug.datastructures import FileStorage
from werkzeug.utils import secure_filename

from ..core.constants import DEFAULT_MAX_PHOTO_BYTES
from ..core.exceptions import UploadTooLargeError, ValidationError

logger = logging.getLogger(__name__)


class PhotoStore:
    """Saves uploaded images under `upload_folder`.

    `save` returns the public path (served by the /uploads route) that becomes
    the employee's photoReference.
    """

    def __init__(
        self,
        upload_folder: str | Path,
        *,
        max_bytes: int = DEFAULT_MAX_PHOTO_BYTES,
        public_prefix: str = "/uploads",
        clock_ms: Optional[Callable[[], int]] = None,
    ):
        self._folder = Path(upload_folder)
        self._max_bytes = int(max_bytes)
        self._public_prefix = public_prefix.rstrip("/")
        self._clock_ms = clock_ms or (lambda: int(time.time() * 1000))

    @property
    def folder(self) -> Path:
        return self._folder

    def save(self, upload: FileStorage) -> str:
        data = upload.stream.read(self._max_bytes + 1)
        if len(data) > self._max_bytes:
            raise UploadTooLargeError(f"Photo exceeds the {self._max_bytes // (1024 * 1024)} MB limit!")
        if not data:
            raise ValidationError("Uploaded photo is empty!")

        try:
            with Image.open(io.BytesIO(data)) as img:
                img.verify()
        except (UnidentifiedImageError, OSError, SyntaxError):
            raise ValidationError("Uploaded photo is not a valid image!")

        filename = f"{self._clock_ms()}-{secure_filename(upload.filename or '') or 'photo'}"
        self._folder.mkdir(parents=True, exist_ok=True)
        target = self._folder / filename
        target.write_bytes(data)

        logger.info("Stored photo %s (%d bytes)", target, len(data))
        return f"{self._public_prefix}/{filename}"
