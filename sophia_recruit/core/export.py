"""
PNG export of the recruitment QR panel and the flyer
"""
import io
import logging
import textwrap

import requests
from PIL import Image, ImageColor, ImageDraw, ImageFont, ImageOps

from sophia_recruit.config import settings
from sophia_recruit.core.qr import dashboard_qr_code_url, flyer_qr_code_url
from sophia_recruit.exceptions import ExportError
from sophia_recruit.models import FlyerConfig

logger = logging.getLogger(__name__)

NAVY = "#061E3E"
BLUE = "#145A8B"
GREY = "#6B7280"

PANEL_WIDTH = 320
PANEL_SCALE = 2
FLYER_SIZE = 800


def fetch_image(url: str) -> Image.Image:
    """Download a remote image (QR endpoint, flyer background)"""
    response = requests.get(url, timeout=settings.EXPORT_TIMEOUT_SECONDS)
    response.raise_for_status()
    image = Image.open(io.BytesIO(response.content))
    image.load()
    return image.convert("RGB")


def _font(size: int) -> ImageFont.ImageFont:
    return ImageFont.load_default(size=size)


def _centered_text(draw: ImageDraw.ImageDraw, y: int, text: str, font, fill, width: int) -> int:
    left, top, right, bottom = draw.textbbox((0, 0), text, font=font)
    draw.text(((width - (right - left)) / 2, y), text, font=font, fill=fill)
    return y + (bottom - top)


def _to_png(image: Image.Image) -> bytes:
    buffer = io.BytesIO()
    image.save(buffer, format="PNG")
    return buffer.getvalue()


def render_qr_panel(target_url: str) -> bytes:
    """
    Rasterize the dashboard QR panel: title, season, bordered QR code and
    the call to action, at twice the on-screen size.
    """
    try:
        s = PANEL_SCALE
        width = PANEL_WIDTH * s
        qr_size = 192 * s
        qr = fetch_image(dashboard_qr_code_url(target_url)).resize((qr_size, qr_size))

        panel = Image.new("RGB", (width, 400 * s), "white")
        draw = ImageDraw.Draw(panel)

        y = 16 * s
        y = _centered_text(draw, y, "Sofia Recrutement", _font(24 * s), NAVY, width) + 8 * s
        y = _centered_text(draw, y, "SAISON 2026", _font(13 * s), BLUE, width) + 20 * s

        border = 2 * s
        pad = 8 * s
        box_left = (width - qr_size) // 2 - pad
        draw.rounded_rectangle(
            (box_left, y, box_left + qr_size + 2 * pad, y + qr_size + 2 * pad),
            radius=12 * s, outline=NAVY, width=border,
        )
        panel.paste(qr, (box_left + pad, y + pad))
        y += qr_size + 2 * pad + 24 * s

        y = _centered_text(draw, y, "Scannez pour postuler", _font(14 * s), NAVY, width) + 6 * s
        y = _centered_text(draw, y, "Rejoignez notre équipe !", _font(12 * s), GREY, width)

        return _to_png(panel.crop((0, 0, width, y + 16 * s)))
    except Exception as e:
        logger.error(f"Failed to export QR code: {e}")
        raise ExportError("QR code export failed") from e


def render_flyer(config: FlyerConfig, target_url: str) -> bytes:
    """Rasterize the flyer: background, headline, subtext and QR card"""
    try:
        accent = ImageColor.getrgb(config.accent_color)
        flyer = Image.new("RGB", (FLYER_SIZE, FLYER_SIZE), NAVY)

        if config.background_image:
            background = fetch_image(config.background_image)
            flyer.paste(ImageOps.fit(background, (FLYER_SIZE, FLYER_SIZE)), (0, 0))

        overlay = Image.new("RGBA", flyer.size, (0, 0, 0, 110))
        flyer = Image.alpha_composite(flyer.convert("RGBA"), overlay)
        draw = ImageDraw.Draw(flyer)

        headline_font = _font(72)
        y = 90
        for line in textwrap.wrap(config.headline, width=16) or [""]:
            left, top, right, bottom = draw.textbbox((0, 0), line, font=headline_font)
            x = (FLYER_SIZE - (right - left)) / 2
            draw.text((x + 4, y + 4), line, font=headline_font, fill=accent)
            draw.text((x, y), line, font=headline_font, fill="white")
            y += (bottom - top) + 16

        y += 24
        subtext_font = _font(28)
        for line in textwrap.wrap(config.subtext, width=40):
            y = _centered_text(draw, y, line, subtext_font, "white", FLYER_SIZE) + 10

        qr_size = 250
        card_pad = 16
        qr = fetch_image(flyer_qr_code_url(target_url)).resize((qr_size, qr_size))
        card_left = (FLYER_SIZE - qr_size) // 2 - card_pad
        card_top = FLYER_SIZE - qr_size - 2 * card_pad - 60
        draw.rounded_rectangle(
            (card_left, card_top, card_left + qr_size + 2 * card_pad, card_top + qr_size + 2 * card_pad),
            radius=24, fill="white",
        )
        flyer.paste(qr, (card_left + card_pad, card_top + card_pad))

        return _to_png(flyer.convert("RGB"))
    except Exception as e:
        logger.error(f"Failed to export flyer: {e}")
        raise ExportError("Flyer export failed") from e
