from __future__ import annotations

import io

import qrcode

from ..actors.model import Actor
from .payload import badge_payload


def render_badge_png(actor: Actor, *, box_size: int = 10, border: int = 2) -> bytes:
    """PNG QR code carrying ``{"id": <actor_id>}``, readable by the scan stations."""

    qr = qrcode.QRCode(
        version=None,
        error_correction=qrcode.constants.ERROR_CORRECT_M,
        box_size=box_size,
        border=border,
    )
    qr.add_data(badge_payload(actor.actor_id))
    qr.make(fit=True)

    img = qr.make_image(fill_color="black", back_color="white")
    buf = io.BytesIO()
    img.save(buf, format="PNG")
    return buf.getvalue()
