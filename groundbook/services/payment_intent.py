"""UPI payment intent strings and their QR codes.

The system never processes money. It only builds the deep link a UPI app
understands and renders it as a QR code the renter can scan::

    upi://pay?pa=alice%40bank&pn=Alice&am=500&cu=INR&tn=Booking%20X
"""
import base64
import io
import logging
from decimal import Decimal, InvalidOperation
from typing import Optional, Union
from urllib.parse import quote

import qrcode
from starlette.concurrency import run_in_threadpool

from groundbook.core.config import settings
from groundbook.core.errors import RenderingUnavailable

logger = logging.getLogger(__name__)

# Characters encodeURIComponent leaves alone besides alphanumerics and "-_."
_URI_COMPONENT_SAFE = "!~*'()"


def encode_component(value) -> str:
    """Percent-encode a value the way JavaScript's encodeURIComponent does."""
    if value is None:
        return ""
    return quote(str(value), safe=_URI_COMPONENT_SAFE)


def format_amount(amount: Union[int, float, Decimal, str]) -> str:
    """
    Render an amount for the ``am`` parameter.

    Whole amounts have no decimals (``500``), others have two (``499.50``).

    Raises:
        ValueError: If the amount is not a number. Request schemas validate
            amounts first, so this only reaches direct callers.
    """
    try:
        value = Decimal(str(amount))
    except InvalidOperation:
        raise ValueError(f"Invalid amount: {amount!r}")

    if value == value.to_integral_value():
        return str(int(value))
    return f"{value.quantize(Decimal('0.01'))}"


def build_payment_intent(
    payout_id: str,
    payee_name: Optional[str],
    amount: Union[int, float, Decimal, str],
    note: Optional[str],
    scheme: Optional[str] = None,
    currency: Optional[str] = None,
) -> str:
    """
    Build a UPI deep link.

    Args:
        payout_id: Payee UPI id, e.g. ``alice@bank``
        payee_name: Name shown by the payment app
        amount: Amount to pay
        note: Transaction note
        scheme: URI scheme, defaults to the configured one (``upi``)
        currency: Currency code, defaults to the configured one (``INR``)

    Returns:
        The payment intent string
    """
    scheme = scheme or settings.UPI_SCHEME
    currency = currency or settings.PAYMENT_CURRENCY

    return (
        f"{scheme}://pay"
        f"?pa={encode_component(payout_id)}"
        f"&pn={encode_component(payee_name)}"
        f"&am={encode_component(format_amount(amount))}"
        f"&cu={currency}"
        f"&tn={encode_component(note)}"
    )


def _render_png(intent: str) -> bytes:
    image = qrcode.make(intent)
    buffer = io.BytesIO()
    image.save(buffer)
    return buffer.getvalue()


async def render_qr_png(intent: str) -> bytes:
    """Render a payment intent as a PNG QR code."""
    try:
        return await run_in_threadpool(_render_png, intent)
    except Exception as e:
        logger.error(f"QR rendering failed: {e}", exc_info=True)
        raise RenderingUnavailable(f"QR generation failed: {e}") from e


def to_data_url(png: bytes) -> str:
    """Wrap PNG bytes as a ``data:`` URL usable in an ``<img>`` tag."""
    return "data:image/png;base64," + base64.b64encode(png).decode("ascii")
