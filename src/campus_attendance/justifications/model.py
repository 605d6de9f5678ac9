from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.constants import DEFAULT_MAX_DOCUMENT_BYTES
from ..core.enums import JustificationStatus
from ..core.exceptions import ValidationError

# status -> statuses a transition into it may start from
ALLOWED_PRIOR = {
    JustificationStatus.PENDING: (JustificationStatus.TO_JUSTIFY, JustificationStatus.REJECTED),
    JustificationStatus.APPROVED: (JustificationStatus.PENDING,),
    JustificationStatus.REJECTED: (JustificationStatus.PENDING,),
}


@dataclass(frozen=True)
class JustificationDocument:
    """Attachment reference, decoupled from whatever stores the file."""

    mime_type: str
    size_bytes: int
    storage_ref: str

    @staticmethod
    def check(mime_type: Optional[str], size_bytes: int, max_bytes: int = DEFAULT_MAX_DOCUMENT_BYTES) -> str:
        """Validate type and size; returns the normalized mime type."""
        mime = (mime_type or "").strip().lower()
        if not mime.startswith("image/"):
            raise ValidationError("Justification document must be an image")
        if size_bytes <= 0:
            raise ValidationError("Justification document is empty")
        if size_bytes > max_bytes:
            raise ValidationError(f"Justification document exceeds {max_bytes // (1024 * 1024)}MB")
        return mime

    @classmethod
    def validated(
        cls,
        *,
        mime_type: Optional[str],
        size_bytes: int,
        storage_ref: str,
        max_bytes: int = DEFAULT_MAX_DOCUMENT_BYTES,
    ) -> "JustificationDocument":
        mime = cls.check(mime_type, size_bytes, max_bytes)
        if not storage_ref:
            raise ValidationError("Justification document has no storage reference")
        return cls(mime_type=mime, size_bytes=int(size_bytes), storage_ref=storage_ref)


@dataclass(frozen=True)
class Notification:
    actor_id: str
    record_id: int
    status: JustificationStatus
    message: str
