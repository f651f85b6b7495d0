"""
SMS text composition.

Every message kind has a fixed template. Payment and welcome messages can
additionally be phrased by a generative text model (Gemini generateContent
REST API) when GENAI_API_KEY is configured; any failure or empty reply falls
back to the template text.
"""
import logging
from decimal import Decimal
from typing import Optional

import requests
from django.conf import settings

from .exceptions import TextGenerationError

logger = logging.getLogger(__name__)


DELIVERY_TEMPLATE = (
    "Dear {name}, your delivery of {quantity}L (Grade {grade}) "
    "for UGX {amount} is recorded. Thank you!"
)
PAYMENT_TEMPLATE = "Payment processed: UGX {amount} for {period}. Thank you!"
WELCOME_TEMPLATE = (
    "Welcome to DairyFlow, {name}! Your login ID is your phone number ({phone}) "
    "and your temporary password is: {password}. "
    "Please change it upon first login if possible."
)


def format_amount(amount) -> str:
    """Format a money value with thousands separators: 12000 -> '12,000'."""
    value = Decimal(str(amount)).quantize(Decimal('0.01'))
    if value == value.to_integral_value():
        return f"{int(value):,}"
    return f"{value:,.2f}"


def format_quantity(quantity) -> str:
    """Drop trailing zeros: Decimal('10.50') -> '10.5'."""
    return format(Decimal(str(quantity)).normalize(), 'f')


class TextGenerator:
    """Thin client for the Gemini generateContent endpoint."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: Optional[int] = None,
    ):
        self.api_key = api_key if api_key is not None else settings.GENAI_API_KEY
        self.model = model or settings.GENAI_MODEL
        self.base_url = (base_url or settings.GENAI_BASE_URL).rstrip('/')
        self.timeout = timeout or settings.NOTIFICATION_TIMEOUT_SECONDS

    @property
    def enabled(self) -> bool:
        return bool(self.api_key)

    def generate(self, prompt: str) -> str:
        """
        Return the model's text reply for a prompt.

        Raises:
            TextGenerationError: On network errors, non-200 replies or empty text
        """
        url = f"{self.base_url}/models/{self.model}:generateContent"
        payload = {'contents': [{'parts': [{'text': prompt}]}]}

        try:
            response = requests.post(
                url,
                params={'key': self.api_key},
                json=payload,
                timeout=self.timeout,
            )
        except requests.exceptions.RequestException as e:
            raise TextGenerationError(f"Text generation request failed: {e}") from e

        if response.status_code != 200:
            raise TextGenerationError(
                f"Text generation returned HTTP {response.status_code}"
            )

        try:
            data = response.json()
            text = data['candidates'][0]['content']['parts'][0]['text']
        except (ValueError, KeyError, IndexError, TypeError) as e:
            raise TextGenerationError("Unexpected text generation response") from e

        text = (text or '').strip()
        if not text:
            raise TextGenerationError("Text generation returned an empty message")
        return text


def _phrase(prompt: str, fallback: str, generator: Optional[TextGenerator]) -> str:
    generator = generator or TextGenerator()
    if not generator.enabled:
        return fallback

    try:
        return generator.generate(prompt)
    except TextGenerationError as e:
        logger.warning("Falling back to template message: %s", e)
        return fallback


def compose_delivery_message(*, farmer_name: str, quantity, quality: str, amount) -> str:
    return DELIVERY_TEMPLATE.format(
        name=farmer_name,
        quantity=format_quantity(quantity),
        grade=quality,
        amount=format_amount(amount),
    )


def compose_payment_message(
    *,
    amount,
    period: str,
    generator: Optional[TextGenerator] = None,
) -> str:
    """
    Compose the payment-processed SMS.

    Args:
        amount: Amount paid (UGX)
        period: Human-readable period label, e.g. "May 2024"
        generator: Optional text generator override

    Returns:
        Message text (never empty)
    """
    template = PAYMENT_TEMPLATE.format(amount=format_amount(amount), period=period)
    prompt = (
        "Compose a concise and informative SMS message for a farmer about their payment.\n"
        f"Payment Amount: {format_amount(amount)} UGX\n"
        f"Payment Period: {period}\n"
        f"Message: {template}\n\n"
        "Return ONLY the message content."
    )
    return _phrase(prompt, template, generator)


def compose_welcome_message(
    *,
    farmer_name: str,
    phone_number: str,
    default_password: str,
    generator: Optional[TextGenerator] = None,
) -> str:
    """Compose the welcome SMS sent when a farmer is registered."""
    template = WELCOME_TEMPLATE.format(
        name=farmer_name,
        phone=phone_number,
        password=default_password,
    )
    prompt = (
        "Compose a welcome SMS for a new farmer.\n"
        f"Farmer Name: {farmer_name}\n"
        f"Phone Number (Login ID): {phone_number}\n"
        f"Default Password: {default_password}\n\n"
        f"Message:\n{template}\n\n"
        "Return ONLY the message content."
    )
    return _phrase(prompt, template, generator)
