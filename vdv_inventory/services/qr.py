"""QR payloads and PNG rendering for asset tags and machine stickers."""

from io import BytesIO

import qrcode

from vdv_inventory.core.config import settings


def scan_url(token: str) -> str:
    """Public landing URL encoded in a printed QR code."""
    return f"{settings.public_base_url.rstrip('/')}/m/{token}"


def render_qr_png(data: str, box_size: int = 8, border: int = 2) -> bytes:
    """Render ``data`` as a PNG QR code."""
    qr = qrcode.QRCode(
        version=None,
        error_correction=qrcode.constants.ERROR_CORRECT_M,
        box_size=box_size,
        border=border,
    )
    qr.add_data(data)
    qr.make(fit=True)
    img = qr.make_image(fill_color="black", back_color="white")
    buffer = BytesIO()
    img.save(buffer, format="PNG")
    return buffer.getvalue()
