"""Services for sending farmer notifications."""

from .exceptions import (
    NotificationServiceError,
    TextGenerationError,
    UnknownSmsProviderError,
)
from .message_composer import (
    TextGenerator,
    compose_delivery_message,
    compose_payment_message,
    compose_welcome_message,
)
from .sms_gateway import (
    SimulatedGateway,
    TwilioGateway,
    AfricasTalkingGateway,
    get_sms_gateway,
)
from .dispatch import (
    send_delivery_notification,
    send_payment_notification,
    send_welcome_notification,
)

__all__ = [
    # Exceptions
    'NotificationServiceError',
    'TextGenerationError',
    'UnknownSmsProviderError',
    # Composition
    'TextGenerator',
    'compose_delivery_message',
    'compose_payment_message',
    'compose_welcome_message',
    # Gateways
    'SimulatedGateway',
    'TwilioGateway',
    'AfricasTalkingGateway',
    'get_sms_gateway',
    # Dispatch
    'send_delivery_notification',
    'send_payment_notification',
    'send_welcome_notification',
]
