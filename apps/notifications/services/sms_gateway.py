"""
SMS transports.

Twilio Messages API and Africa's Talking messaging API over HTTPS, plus a
simulated gateway used when no provider is selected or credentials are
missing. Every send returns a result dict:

    {'success': bool, 'status_message': str,
     'message_id': str | None, 'error_details': str | None}
"""
import logging
from typing import Dict, Optional

import requests
from django.conf import settings

from apps.system.models import SmsProvider

from .exceptions import UnknownSmsProviderError

logger = logging.getLogger(__name__)


def _result(success: bool, status_message: str, message_id: Optional[str] = None,
            error_details: Optional[str] = None) -> Dict:
    return {
        'success': success,
        'status_message': status_message,
        'message_id': message_id,
        'error_details': error_details,
    }


class SimulatedGateway:
    """Logs the message instead of sending it."""

    provider_name = 'Simulated'

    def __init__(self, reason: str = 'No SMS provider configured.'):
        self.reason = reason

    def send(self, phone_number: str, message: str) -> Dict:
        logger.info("SMS simulated to %s (%s): %s", phone_number, self.reason, message)
        return _result(True, f"SMS simulated. {self.reason}")


class TwilioGateway:
    """Send SMS through the Twilio Messages REST API."""

    provider_name = 'Twilio'
    API_URL = "https://api.twilio.com/2010-04-01/Accounts/{account_sid}/Messages.json"

    def __init__(self, account_sid: str, auth_token: str, from_number: str, timeout: int = 10):
        self.account_sid = account_sid
        self.auth_token = auth_token
        self.from_number = from_number
        self.timeout = timeout

    def send(self, phone_number: str, message: str) -> Dict:
        try:
            response = requests.post(
                self.API_URL.format(account_sid=self.account_sid),
                data={
                    'To': phone_number,
                    'From': self.from_number,
                    'Body': message,
                },
                auth=(self.account_sid, self.auth_token),
                timeout=self.timeout,
            )
        except requests.exceptions.Timeout:
            logger.error("Timeout sending Twilio SMS to %s", phone_number)
            return _result(False, 'Failed to send SMS via Twilio: request timeout', error_details='timeout')
        except requests.exceptions.RequestException as e:
            logger.error("Network error sending Twilio SMS to %s: %s", phone_number, e)
            return _result(False, 'Failed to send SMS via Twilio: network error', error_details=str(e))

        if response.status_code in (200, 201):
            data = response.json()
            logger.info("Twilio SMS sent to %s. SID: %s", phone_number, data.get('sid'))
            return _result(True, 'SMS sent successfully via Twilio.', message_id=data.get('sid'))

        try:
            error_message = response.json().get('message', 'Unknown error')
        except ValueError:
            error_message = 'Unknown error'
        logger.error(
            "Twilio SMS to %s failed. Status: %s, Error: %s",
            phone_number, response.status_code, error_message,
        )
        return _result(
            False,
            f'Failed to send SMS via Twilio: {error_message}',
            error_details=response.text,
        )


class AfricasTalkingGateway:
    """Send SMS through the Africa's Talking messaging REST API."""

    provider_name = "Africa's Talking"
    API_URL = "https://api.africastalking.com/version1/messaging"
    SANDBOX_API_URL = "https://api.sandbox.africastalking.com/version1/messaging"

    def __init__(self, username: str, api_key: str, sender_id: str = '', timeout: int = 10):
        self.username = username
        self.api_key = api_key
        self.sender_id = sender_id
        self.timeout = timeout

    @property
    def url(self) -> str:
        return self.SANDBOX_API_URL if self.username == 'sandbox' else self.API_URL

    def send(self, phone_number: str, message: str) -> Dict:
        payload = {
            'username': self.username,
            'to': phone_number,
            'message': message,
        }
        if self.sender_id:
            payload['from'] = self.sender_id

        try:
            response = requests.post(
                self.url,
                data=payload,
                headers={
                    'apiKey': self.api_key,
                    'Accept': 'application/json',
                },
                timeout=self.timeout,
            )
        except requests.exceptions.Timeout:
            logger.error("Timeout sending Africa's Talking SMS to %s", phone_number)
            return _result(False, "Failed to send SMS via Africa's Talking: request timeout", error_details='timeout')
        except requests.exceptions.RequestException as e:
            logger.error("Network error sending Africa's Talking SMS to %s: %s", phone_number, e)
            return _result(False, "Failed to send SMS via Africa's Talking: network error", error_details=str(e))

        if response.status_code != 201:
            logger.error(
                "Africa's Talking SMS to %s failed. Status: %s, Body: %s",
                phone_number, response.status_code, response.text,
            )
            return _result(
                False,
                f"Failed to send SMS via Africa's Talking: HTTP {response.status_code}",
                error_details=response.text,
            )

        try:
            recipients = response.json().get('SMSMessageData', {}).get('Recipients', [])
        except ValueError:
            recipients = []
        if not recipients:
            return _result(False, "Africa's Talking accepted no recipients.", error_details=response.text)

        recipient = recipients[0]
        if recipient.get('status') != 'Success':
            logger.error("Africa's Talking rejected SMS to %s: %s", phone_number, recipient.get('status'))
            return _result(
                False,
                f"Failed to send SMS via Africa's Talking: {recipient.get('status')}",
                error_details=response.text,
            )

        logger.info("Africa's Talking SMS sent to %s. Id: %s", phone_number, recipient.get('messageId'))
        return _result(
            True,
            "SMS sent successfully via Africa's Talking.",
            message_id=recipient.get('messageId'),
        )


def get_sms_gateway(system_settings):
    """
    Build the gateway for the provider selected in SystemSettings.

    Twilio credentials come from the environment, falling back to the
    SystemSettings username/API key. Africa's Talking prefers the
    SystemSettings values. Missing credentials yield a SimulatedGateway.

    Raises:
        UnknownSmsProviderError: If the provider value is not recognised
    """
    provider = system_settings.sms_provider
    timeout = settings.NOTIFICATION_TIMEOUT_SECONDS

    if provider == SmsProvider.NONE:
        return SimulatedGateway('No SMS provider selected.')

    if provider == SmsProvider.TWILIO:
        account_sid = settings.TWILIO_ACCOUNT_SID or system_settings.sms_username
        auth_token = settings.TWILIO_AUTH_TOKEN or system_settings.sms_api_key
        from_number = settings.TWILIO_PHONE_NUMBER
        if not (account_sid and auth_token and from_number):
            return SimulatedGateway('Twilio credentials not found or incomplete.')
        return TwilioGateway(account_sid, auth_token, from_number, timeout=timeout)

    if provider == SmsProvider.AFRICAS_TALKING:
        username = system_settings.sms_username or settings.AFRICASTALKING_USERNAME
        api_key = system_settings.sms_api_key or settings.AFRICASTALKING_API_KEY
        if not (username and api_key):
            return SimulatedGateway("Africa's Talking credentials not found or incomplete.")
        return AfricasTalkingGateway(username, api_key, settings.SMS_SENDER_ID, timeout=timeout)

    raise UnknownSmsProviderError(f"Unknown SMS provider: {provider}")
