"""
QR code links. Images are rendered by the public qrserver.com API.
"""
from urllib.parse import quote

from sophia_recruit.config import settings

# Same character set encodeURIComponent leaves untouched
_URI_COMPONENT_SAFE = "-_.!~*'()"


def encode_uri_component(value: str) -> str:
    return quote(value, safe=_URI_COMPONENT_SAFE)


def build_qr_code_url(
    target: str,
    size: int = 300,
    color: str = "061E3E",
    bgcolor: str = "FFFFFF",
    margin: int = 10,
) -> str:
    return (
        f"{settings.QR_API_URL}?size={size}x{size}"
        f"&data={encode_uri_component(target)}"
        f"&bgcolor={bgcolor}&color={color}&margin={margin}"
    )


def dashboard_qr_code_url(target: str) -> str:
    return build_qr_code_url(target, size=300, color="061E3E", bgcolor="FFFFFF", margin=10)


def flyer_qr_code_url(target: str) -> str:
    return build_qr_code_url(target, size=250, color="000000", bgcolor="FFFFFF", margin=10)


def application_url(base_url: str) -> str:
    """Public form link, PUBLIC_FORM_URL when configured"""
    if settings.PUBLIC_FORM_URL:
        return settings.PUBLIC_FORM_URL
    return f"{base_url.rstrip('/')}/apply"
