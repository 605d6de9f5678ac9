from __future__ import annotations

import io
import logging
import uuid
from pathlib import Path
from typing import BinaryIO, Optional, Protocol

from PIL import Image, UnidentifiedImageError
from werkzeug.utils import secure_filename

from ..core.constants import DEFAULT_MAX_DOCUMENT_BYTES
from ..core.exceptions import ValidationError
from .model import JustificationDocument

logger = logging.getLogger(__name__)


class DocumentStore(Protocol):
    def save(self, data: bytes, *, filename: str, mime_type: str) -> str:
        """Persist the bytes and return an opaque storage reference."""

        raise NotImplementedError

    def delete(self, storage_ref: str) -> None:
        """Drop a stored document; unknown references are ignored."""

        raise NotImplementedError


class LocalDocumentStore:
    """Stores uploads under ``root`` with a random prefix to avoid collisions."""

    def __init__(self, root: str | Path):
        self._root = Path(root)

    def save(self, data: bytes, *, filename: str, mime_type: str) -> str:
        self._root.mkdir(parents=True, exist_ok=True)
        name = f"{uuid.uuid4().hex}_{secure_filename(filename) or 'document'}"
        (self._root / name).write_bytes(data)
        logger.debug("Stored justification document %s (%s, %d bytes)", name, mime_type, len(data))
        return name

    def delete(self, storage_ref: str) -> None:
        (self._root / Path(storage_ref).name).unlink(missing_ok=True)
        logger.debug("Removed justification document %s", storage_ref)


def _ensure_decodable_image(data: bytes) -> None:
    try:
        with Image.open(io.BytesIO(data)) as img:
            img.verify()
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError, SyntaxError):
        raise ValidationError("Justification document is not a readable image")


def ingest_document(
    stream: BinaryIO,
    *,
    filename: str,
    mime_type: Optional[str],
    store: DocumentStore,
    max_bytes: int = DEFAULT_MAX_DOCUMENT_BYTES,
) -> JustificationDocument:
    """Validate an uploaded image once at the boundary, then store it.

    Nothing is written to the store unless type, size and content all pass.
    """

    data = stream.read(max_bytes + 1)
    mime = JustificationDocument.check(mime_type, len(data), max_bytes)
    _ensure_decodable_image(data)
    ref = store.save(data, filename=filename, mime_type=mime)
    return JustificationDocument.validated(mime_type=mime, size_bytes=len(data), storage_ref=ref, max_bytes=max_bytes)
