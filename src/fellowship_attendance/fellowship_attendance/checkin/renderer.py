from __future__ import annotations

import io
from typing import Protocol

import qrcode
from qrcode.constants import ERROR_CORRECT_H


class QRRenderer(Protocol):
    mime_type: str

    def render(self, data: str) -> bytes:
        raise NotImplementedError


class QRCodePngRenderer:
    """Renders text as a PNG QR code with the qrcode library."""

    mime_type = "image/png"

    def __init__(self, *, box_size: int = 10, border: int = 1):
        self._box_size = int(box_size)
        self._border = int(border)

    def render(self, data: str) -> bytes:
        qr = qrcode.QRCode(
            version=None,
            error_correction=ERROR_CORRECT_H,
            box_size=self._box_size,
            border=self._border,
        )
        qr.add_data(data)
        qr.make(fit=True)

        img = qr.make_image(fill_color="black", back_color="white")

        buf = io.BytesIO()
        img.save(buf, format="PNG")
        return buf.getvalue()
