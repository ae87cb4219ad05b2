from __future__ import annotations

import io
import logging
import uuid
from datetime import datetime
from typing import Any, Callable, Mapping, Optional

from PIL import Image, UnidentifiedImageError

from ..auth.policy import Identity, authorize_personal
from ..common.datetime_utils import utcnow
from ..common.pagination import Page, read_page_request
from ..common.validators import PayloadValidator
from ..core.constants import ALLOWED_IMAGE_TYPES, DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE, MAX_UPLOAD_BYTES
from ..core.exceptions import ValidationError
from .model import StoredFile
from .repository import FileRepository
from .storage import ObjectStorage

logger = logging.getLogger(__name__)


def detect_image_type(data: bytes) -> tuple[str, str]:
    """Sniff the content (never the filename) and return (mime, extension)."""
    try:
        with Image.open(io.BytesIO(data)) as img:
            fmt = img.format
            img.verify()
    except Image.DecompressionBombError:
        raise ValidationError("Image dimensions are too large")
    except (UnidentifiedImageError, OSError, SyntaxError):
        raise ValidationError("Unable to detect file type")

    if fmt not in ALLOWED_IMAGE_TYPES:
        raise ValidationError("Only JPEG, JPG, and PNG files are allowed")
    return ALLOWED_IMAGE_TYPES[fmt]


class FileService:
    """Use case: a manager uploads images and lists their own uploads."""

    def __init__(
        self,
        files: FileRepository,
        storage: ObjectStorage,
        *,
        max_bytes: int = MAX_UPLOAD_BYTES,
        default_page_size: int = DEFAULT_PAGE_SIZE,
        max_page_size: int = MAX_PAGE_SIZE,
        clock: Callable[[], datetime] = utcnow,
    ):
        self._files = files
        self._storage = storage
        self._max_bytes = max_bytes
        self._default_page_size = default_page_size
        self._max_page_size = max_page_size
        self._clock = clock

    @property
    def max_bytes(self) -> int:
        return self._max_bytes

    def upload(self, *, identity: Optional[Identity], owner_id: str, data: Optional[bytes]) -> StoredFile:
        authorize_personal(identity, owner_id)
        if not data:
            raise ValidationError("File part is missing")
        if len(data) > self._max_bytes:
            raise ValidationError(f"File size exceeds {self._max_bytes // 1024}KiB limit")

        content_type, extension = detect_image_type(data)
        file_id = str(uuid.uuid4())
        key = f"{file_id}.{extension}"
        uri = self._storage.put(key, data, content_type)

        try:
            stored = self._files.create(
                StoredFile(
                    file_id=file_id,
                    user_id=owner_id,
                    uri=uri,
                    content_type=content_type,
                    size_bytes=len(data),
                    created_at=self._clock(),
                )
            )
        except Exception:
            logger.error("Recording file %s failed, removing object %s", file_id, key)
            self._storage.delete(key)
            raise
        logger.info("File %s uploaded by %s (%d bytes)", file_id, owner_id, len(data))
        return stored

    def list_files(
        self,
        *,
        identity: Optional[Identity],
        owner_id: str,
        params: Optional[Mapping[str, Any]] = None,
    ) -> Page[StoredFile]:
        authorize_personal(identity, owner_id)
        v = PayloadValidator(params)
        page = read_page_request(v, default_size=self._default_page_size, max_size=self._max_page_size)
        v.done()
        return Page(items=list(self._files.list_for_user(owner_id, page)), limit=page.limit, offset=page.offset)
