"""
Render a string into a QR code PNG, returned as a ``data:`` URL so it can
be stored inline in ``qr_codes.image_url``.
"""

from __future__ import annotations

import base64
import io

import qrcode
from qrcode.constants import ERROR_CORRECT_M

from config.settings import Settings

_DATA_URL_PREFIX = "data:image/png;base64,"


class QRRenderer:
    def __init__(self, width: int = 300, margin: int = 2) -> None:
        self.width = width
        self.margin = margin

    @classmethod
    def from_settings(cls, settings: Settings) -> "QRRenderer":
        return cls(width=settings.qr_width, margin=settings.qr_margin)

    def render(self, data: str) -> str:
        """Return a square PNG data URL no wider than ``width`` pixels."""
        qr = qrcode.QRCode(error_correction=ERROR_CORRECT_M, border=self.margin)
        qr.add_data(data)
        qr.make(fit=True)

        # Largest whole-pixel module size that keeps the image within ``width``.
        qr.box_size = max(1, self.width // (qr.modules_count + 2 * self.margin))
        image = qr.make_image(fill_color="black", back_color="white")

        buf = io.BytesIO()
        image.save(buf, format="PNG")
        return _DATA_URL_PREFIX + base64.b64encode(buf.getvalue()).decode()
