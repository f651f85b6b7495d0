from unittest.mock import patch, MagicMock

import pytest
import requests

from apps.notifications.services import (
    TextGenerator,
    TextGenerationError,
    UnknownSmsProviderError,
    SimulatedGateway,
    TwilioGateway,
    AfricasTalkingGateway,
    compose_delivery_message,
    compose_payment_message,
    compose_welcome_message,
    get_sms_gateway,
    send_delivery_notification,
    send_payment_notification,
)
from apps.notifications.services.message_composer import format_amount
from apps.system.models import SmsProvider, SystemSettings


def _response(status_code, payload=None, text=''):
    response = MagicMock()
    response.status_code = status_code
    response.json.return_value = payload or {}
    response.text = text
    return response


# =============================================================================
# Message Composition Tests
# =============================================================================

class TestMessageComposer:
    """Tests for SMS text composition."""

    def test_format_amount(self):
        """Amounts get thousands separators."""
        assert format_amount(12000) == '12,000'
        assert format_amount('10800.50') == '10,800.50'

    def test_delivery_message(self):
        """Delivery SMS is always the fixed template."""
        message = compose_delivery_message(
            farmer_name='John',
            quantity='10.50',
            quality='A',
            amount='12600.00',
        )

        assert message == (
            "Dear John, your delivery of 10.5L (Grade A) "
            "for UGX 12,600 is recorded. Thank you!"
        )

    def test_payment_message_without_generator_key(self):
        """Without an API key the template is used."""
        generator = TextGenerator(api_key='')
        message = compose_payment_message(amount=36000, period='May 2024', generator=generator)

        assert message == "Payment processed: UGX 36,000 for May 2024. Thank you!"

    def test_payment_message_uses_generated_text(self):
        """Generated text replaces the template when available."""
        generator = MagicMock(enabled=True)
        generator.generate.return_value = 'Hi! You were paid UGX 36,000 for May 2024.'

        message = compose_payment_message(amount=36000, period='May 2024', generator=generator)

        assert message == 'Hi! You were paid UGX 36,000 for May 2024.'
        prompt = generator.generate.call_args[0][0]
        assert '36,000' in prompt

    def test_welcome_message_falls_back_on_error(self):
        """A generation failure falls back to the template."""
        generator = MagicMock(enabled=True)
        generator.generate.side_effect = TextGenerationError('boom')

        message = compose_welcome_message(
            farmer_name='Grace',
            phone_number='+256771234567',
            default_password='Dairy!2345',
            generator=generator,
        )

        assert message.startswith('Welcome to DairyFlow, Grace!')
        assert '+256771234567' in message
        assert 'Dairy!2345' in message


class TestTextGenerator:
    """Tests for the generateContent client."""

    @patch('apps.notifications.services.message_composer.requests.post')
    def test_generate_returns_text(self, mock_post):
        """The first candidate's text is returned, stripped."""
        mock_post.return_value = _response(200, {
            'candidates': [{'content': {'parts': [{'text': '  Paid in full.  '}]}}],
        })
        generator = TextGenerator(api_key='key', model='m', base_url='https://genai.test/v1beta/', timeout=5)

        assert generator.generate('prompt') == 'Paid in full.'
        args, kwargs = mock_post.call_args
        assert args[0] == 'https://genai.test/v1beta/models/m:generateContent'
        assert kwargs['params'] == {'key': 'key'}
        assert kwargs['timeout'] == 5

    @patch('apps.notifications.services.message_composer.requests.post')
    def test_generate_http_error(self, mock_post):
        """Non-200 replies raise TextGenerationError."""
        mock_post.return_value = _response(500)
        generator = TextGenerator(api_key='key', model='m', base_url='https://genai.test', timeout=5)

        with pytest.raises(TextGenerationError):
            generator.generate('prompt')

    @patch('apps.notifications.services.message_composer.requests.post')
    def test_generate_empty_text(self, mock_post):
        """An empty reply raises TextGenerationError."""
        mock_post.return_value = _response(200, {
            'candidates': [{'content': {'parts': [{'text': '   '}]}}],
        })
        generator = TextGenerator(api_key='key', model='m', base_url='https://genai.test', timeout=5)

        with pytest.raises(TextGenerationError):
            generator.generate('prompt')

    @patch('apps.notifications.services.message_composer.requests.post')
    def test_generate_network_error(self, mock_post):
        """Network errors raise TextGenerationError."""
        mock_post.side_effect = requests.exceptions.ConnectionError('down')
        generator = TextGenerator(api_key='key', model='m', base_url='https://genai.test', timeout=5)

        with pytest.raises(TextGenerationError):
            generator.generate('prompt')


# =============================================================================
# Gateway Tests
# =============================================================================

class TestGateways:
    """Tests for SMS transports."""

    def test_simulated_send(self):
        """Simulated sends succeed and explain why."""
        result = SimulatedGateway('No SMS provider selected.').send('+256771234567', 'Hello')

        assert result['success'] is True
        assert result['status_message'] == 'SMS simulated. No SMS provider selected.'
        assert result['message_id'] is None

    @patch('apps.notifications.services.sms_gateway.requests.post')
    def test_twilio_success(self, mock_post):
        """Twilio replies with a message SID."""
        mock_post.return_value = _response(201, {'sid': 'SM123'})
        gateway = TwilioGateway('AC1', 'token', '+15005550006')

        result = gateway.send('+256771234567', 'Hello')

        assert result['success'] is True
        assert result['message_id'] == 'SM123'
        kwargs = mock_post.call_args[1]
        assert kwargs['data']['To'] == '+256771234567'
        assert kwargs['auth'] == ('AC1', 'token')

    @patch('apps.notifications.services.sms_gateway.requests.post')
    def test_twilio_error(self, mock_post):
        """Twilio error messages are reported."""
        mock_post.return_value = _response(400, {'message': 'Invalid To number'}, text='bad')
        gateway = TwilioGateway('AC1', 'token', '+15005550006')

        result = gateway.send('+256771234567', 'Hello')

        assert result['success'] is False
        assert 'Invalid To number' in result['status_message']

    @patch('apps.notifications.services.sms_gateway.requests.post')
    def test_twilio_timeout(self, mock_post):
        """Timeouts become failed results."""
        mock_post.side_effect = requests.exceptions.Timeout()
        gateway = TwilioGateway('AC1', 'token', '+15005550006')

        result = gateway.send('+256771234567', 'Hello')

        assert result['success'] is False
        assert result['error_details'] == 'timeout'

    @patch('apps.notifications.services.sms_gateway.requests.post')
    def test_africas_talking_success(self, mock_post):
        """A Success recipient status means the SMS was accepted."""
        mock_post.return_value = _response(201, {
            'SMSMessageData': {'Recipients': [{'status': 'Success', 'messageId': 'ATXid_1'}]},
        })
        gateway = AfricasTalkingGateway('sandbox', 'key')

        result = gateway.send('+256771234567', 'Hello')

        assert result['success'] is True
        assert result['message_id'] == 'ATXid_1'
        assert mock_post.call_args[0][0] == AfricasTalkingGateway.SANDBOX_API_URL
        assert mock_post.call_args[1]['headers']['apiKey'] == 'key'

    @patch('apps.notifications.services.sms_gateway.requests.post')
    def test_africas_talking_rejected(self, mock_post):
        """A non-Success recipient status is a failure."""
        mock_post.return_value = _response(201, {
            'SMSMessageData': {'Recipients': [{'status': 'InvalidPhoneNumber'}]},
        })
        gateway = AfricasTalkingGateway('dairy', 'key')

        result = gateway.send('+256771234567', 'Hello')

        assert result['success'] is False
        assert 'InvalidPhoneNumber' in result['status_message']
        assert mock_post.call_args[0][0] == AfricasTalkingGateway.API_URL


@pytest.mark.django_db
class TestGatewaySelection:
    """Tests for get_sms_gateway."""

    def test_none_provider_simulates(self):
        obj = SystemSettings.load()
        obj.sms_provider = SmsProvider.NONE

        gateway = get_sms_gateway(obj)

        assert isinstance(gateway, SimulatedGateway)
        assert gateway.reason == 'No SMS provider selected.'

    def test_twilio_without_credentials_simulates(self):
        obj = SystemSettings.load()
        obj.sms_provider = SmsProvider.TWILIO

        gateway = get_sms_gateway(obj)

        assert isinstance(gateway, SimulatedGateway)
        assert gateway.reason == 'Twilio credentials not found or incomplete.'

    def test_twilio_from_environment(self, settings):
        settings.TWILIO_ACCOUNT_SID = 'AC1'
        settings.TWILIO_AUTH_TOKEN = 'token'
        settings.TWILIO_PHONE_NUMBER = '+15005550006'
        obj = SystemSettings.load()
        obj.sms_provider = SmsProvider.TWILIO

        gateway = get_sms_gateway(obj)

        assert isinstance(gateway, TwilioGateway)
        assert gateway.account_sid == 'AC1'

    def test_africas_talking_from_settings_row(self):
        obj = SystemSettings.load()
        obj.sms_provider = SmsProvider.AFRICAS_TALKING
        obj.sms_username = 'dairy'
        obj.sms_api_key = 'key'

        gateway = get_sms_gateway(obj)

        assert isinstance(gateway, AfricasTalkingGateway)
        assert gateway.username == 'dairy'

    def test_unknown_provider(self):
        obj = SystemSettings.load()
        obj.sms_provider = 'pigeon'

        with pytest.raises(UnknownSmsProviderError):
            get_sms_gateway(obj)


# =============================================================================
# Dispatch Tests
# =============================================================================

@pytest.mark.django_db
class TestDispatch:
    """Notification entry points never raise."""

    def test_delivery_notification_simulated(self):
        SystemSettings.objects.update_or_create(
            pk=SystemSettings.SINGLETON_PK,
            defaults={'milk_price_per_liter': 1200, 'sms_provider': SmsProvider.NONE},
        )

        result = send_delivery_notification(
            farmer_name='John',
            phone_number='+256771234567',
            quantity=10,
            quality='A',
            amount=12000,
        )

        assert result['success'] is True
        assert result['status_message'].startswith('SMS simulated.')

    @patch('apps.notifications.services.dispatch.get_sms_gateway')
    def test_gateway_exception_becomes_failed_result(self, mock_gateway):
        mock_gateway.side_effect = UnknownSmsProviderError('Unknown SMS provider: pigeon')

        result = send_payment_notification(
            phone_number='+256771234567',
            amount=36000,
            period='May 2024',
        )

        assert result['success'] is False
        assert result['error_details'] == 'Unknown SMS provider: pigeon'

    @patch('apps.notifications.services.dispatch.compose_payment_message')
    def test_empty_message_is_not_sent(self, mock_compose):
        mock_compose.return_value = '  '

        result = send_payment_notification(
            phone_number='+256771234567',
            amount=36000,
            period='May 2024',
        )

        assert result['success'] is False
        assert result['status_message'] == 'Failed to generate SMS content.'
