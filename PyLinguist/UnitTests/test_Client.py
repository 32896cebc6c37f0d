import json
import unittest
from unittest.mock import MagicMock, patch

import httpx
import openai

from PyLinguist.Helpers.Tests import BuildChatReply, log_input_expected_error, log_input_expected_result, log_test_name
from PyLinguist.LinguistError import (
    ProviderError,
    TranslationAuthError,
    TranslationImpossibleError,
    TranslationNetworkError,
    TranslationTimeoutError,
)
from PyLinguist.Options import Options
from PyLinguist.Providers.Custom.CustomClient import CustomClient
from PyLinguist.Providers.OpenAI.ChatGPTClient import ChatGPTClient
from PyLinguist.SettingsType import SettingsType
from PyLinguist.TranslationClient import USER_AGENT
from PyLinguist.TranslationProvider import TranslationProvider

from PyLinguist.UnitTests.TestData.login_dialog import login_dialog_data

real_httpx_client = httpx.Client

class CustomClientTests(unittest.TestCase):
    phrases = ('OK', 'Cancel')

    def setUp(self):
        self.requests : list[httpx.Request] = []
        self.responses : list[httpx.Response|Exception] = []

        sleep_patcher = patch('PyLinguist.Providers.Custom.CustomClient.time.sleep')
        self.sleep = sleep_patcher.start()
        self.addCleanup(sleep_patcher.stop)

        client_patcher = patch('PyLinguist.Providers.Custom.CustomClient.httpx.Client', side_effect=self._create_client)
        client_patcher.start()
        self.addCleanup(client_patcher.stop)

    def _create_client(self, **kwargs) -> httpx.Client:
        return real_httpx_client(transport=httpx.MockTransport(self._handle_request), **kwargs)

    def _handle_request(self, request : httpx.Request) -> httpx.Response:
        self.requests.append(request)
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response

    def _client(self, **settings) -> CustomClient:
        return CustomClient(SettingsType({
            'server_address': 'http://localhost:1234',
            'endpoint': '/v1/chat/completions',
            'api_key': 'sk-test-123',
            'model': 'local-model',
            'max_retries': 1,
            'backoff_time': 1.0,
            **settings
        }))

    def test_Request(self):
        log_test_name("Request translation from a custom server")

        self.responses.append(httpx.Response(200, content=BuildChatReply(login_dialog_data['login_reply'])))

        client = self._client()
        raw = client.Request(self.phrases, "Turkish", "tr_TR", "LoginDialog")
        reply = client.ParseReply(raw)

        log_input_expected_result("Translations", { 'OK': 'Tamam', 'Cancel': 'İptal' }, reply.translations)
        self.assertDictEqual(reply.translations, { 'OK': 'Tamam', 'Cancel': 'İptal' })

        request = self.requests[0]
        self.assertEqual(request.method, 'POST')
        self.assertEqual(str(request.url), 'http://localhost:1234/v1/chat/completions')
        self.assertEqual(request.headers['Authorization'], 'Bearer sk-test-123')
        self.assertEqual(request.headers['User-Agent'], USER_AGENT)

        body = json.loads(request.content)
        self.assertEqual(body['model'], 'local-model')
        self.assertEqual(body['messages'][0]['role'], 'system')
        self.assertIn("context of LoginDialog", body['messages'][-1]['content'])
        self.assertIn("OK\nCancel", body['messages'][-1]['content'])

    def test_MissingApiKey(self):
        log_test_name("Missing API key")

        with self.assertRaises(TranslationAuthError) as context:
            self._client(api_key=None).Request(self.phrases, "Turkish", "tr_TR")

        log_input_expected_error("No key", TranslationAuthError, context.exception)
        self.assertEqual(len(self.requests), 0)

        # Servers that do not need a key are called without one
        self.responses.append(httpx.Response(200, content=BuildChatReply([])))
        self._client(api_key=None, requires_api_key=False).Request(self.phrases, "Turkish", "tr_TR")
        self.assertNotIn('Authorization', self.requests[0].headers)

    def test_RetryAfterServerError(self):
        log_test_name("Retry after server error")

        self.responses.append(httpx.Response(503, headers={ 'Retry-After': '2' }, text="Service unavailable"))
        self.responses.append(httpx.Response(200, content=BuildChatReply([])))

        raw = self._client().Request(self.phrases, "Turkish", "tr_TR")

        self.assertEqual(len(self.requests), 2)
        self.assertTrue(raw)
        self.sleep.assert_called_once_with(2.0)

    def test_ErrorStatus(self):
        log_test_name("Error status codes")

        test_cases = [
            ("Unauthorized", [ httpx.Response(401, json={ 'error': { 'message': 'Invalid key' } }) ], TranslationAuthError, None),
            ("Forbidden", [ httpx.Response(403, text="Forbidden") ], TranslationAuthError, None),
            ("Bad request", [ httpx.Response(400, json={ 'error': 'Unknown model' }) ], TranslationNetworkError, 400),
            ("Still overloaded", [ httpx.Response(429, text="Slow down"), httpx.Response(429, text="Slow down") ], TranslationNetworkError, 429),
        ]

        for name, responses, expected_error, status_code in test_cases:
            with self.subTest(name=name):
                self.requests.clear()
                self.responses[:] = responses

                with self.assertRaises(expected_error) as context:
                    self._client().Request(self.phrases, "Turkish", "tr_TR")

                log_input_expected_error(name, expected_error, context.exception)
                if status_code:
                    self.assertEqual(getattr(context.exception, 'status_code', None), status_code)

    def test_Timeout(self):
        log_test_name("Timeouts are retried")

        self.responses.append(httpx.ReadTimeout("Timed out"))
        self.responses.append(httpx.ReadTimeout("Timed out"))

        with self.assertRaises(TranslationTimeoutError) as context:
            self._client().Request(self.phrases, "Turkish", "tr_TR")

        log_input_expected_error("Timeout", TranslationTimeoutError, context.exception)
        self.assertEqual(len(self.requests), 2)

    def test_ConnectionError(self):
        log_test_name("Connection errors")

        self.responses.append(httpx.ConnectError("Connection refused"))

        with self.assertRaises(TranslationNetworkError):
            self._client(max_retries=0).Request(self.phrases, "Turkish", "tr_TR")

class ChatGPTClientTests(unittest.TestCase):
    phrases = ('OK', 'Cancel')
    request = httpx.Request('POST', 'https://api.openai.com/v1/chat/completions')

    def setUp(self):
        sleep_patcher = patch('PyLinguist.Providers.OpenAI.ChatGPTClient.time.sleep')
        self.sleep = sleep_patcher.start()
        self.addCleanup(sleep_patcher.stop)

    def _client(self, *side_effect) -> tuple[ChatGPTClient, MagicMock]:
        client = ChatGPTClient(SettingsType({ 'api_key': 'sk-test-123', 'model': 'gpt-4o-mini', 'max_retries': 1 }))
        create = MagicMock(side_effect=list(side_effect))
        client.client = MagicMock()
        client.client.chat.completions.with_raw_response.create = create
        return client, create

    def _raw_response(self, content : bytes) -> MagicMock:
        raw = MagicMock()
        raw.http_response.content = content
        return raw

    def _status_error(self, error_type : type, status_code : int, headers : dict|None = None) -> Exception:
        response = httpx.Response(status_code, headers=headers, request=self.request)
        return error_type("Error", response=response, body=None)

    def test_Request(self):
        log_test_name("Request translation from OpenAI")

        reply = BuildChatReply(login_dialog_data['login_reply'])
        client, create = self._client(self._raw_response(reply))

        raw = client.Request(self.phrases, "Turkish", "tr_TR", "LoginDialog")

        self.assertEqual(raw, reply)
        kwargs = create.call_args.kwargs
        self.assertEqual(kwargs['model'], 'gpt-4o-mini')
        self.assertIn("OK\nCancel", kwargs['messages'][-1]['content'])

    def test_Errors(self):
        log_test_name("OpenAI errors")

        test_cases = [
            ("Authentication", [ self._status_error(openai.AuthenticationError, 401) ], TranslationAuthError),
            ("Quota", [ self._status_error(openai.RateLimitError, 429) ], TranslationImpossibleError),
            ("Rate limit", [ self._status_error(openai.RateLimitError, 429, { 'Retry-After': '1' }) ] * 2, TranslationNetworkError),
            ("Timeout", [ openai.APITimeoutError(request=self.request) ] * 2, TranslationTimeoutError),
            ("Connection", [ openai.APIConnectionError(request=self.request) ] * 2, TranslationNetworkError),
            ("Server error", [ self._status_error(openai.InternalServerError, 500) ], TranslationNetworkError),
        ]

        for name, side_effect, expected_error in test_cases:
            with self.subTest(name=name):
                client, dummy = self._client(*side_effect) # type: ignore[unused-ignore]
                with self.assertRaises(expected_error) as context:
                    client.Request(self.phrases, "Turkish", "tr_TR")

                log_input_expected_error(name, expected_error, context.exception)

    def test_RetryTimeout(self):
        log_test_name("Timeout is retried")

        reply = BuildChatReply([])
        client, create = self._client(openai.APITimeoutError(request=self.request), self._raw_response(reply))

        self.assertEqual(client.Request(self.phrases, "Turkish", "tr_TR"), reply)
        self.assertEqual(create.call_count, 2)

class TranslationProviderTests(unittest.TestCase):
    def test_get_providers(self):
        log_test_name("Available providers")

        providers = TranslationProvider.get_providers()

        log_input_expected_result("Providers", True, 'OpenAI' in providers and 'Custom Server' in providers)
        self.assertIn('OpenAI', providers)
        self.assertIn('Custom Server', providers)

    def test_get_provider(self):
        log_test_name("Create provider from options")

        options = Options({ 'provider': 'Custom Server' })
        options.current_provider_settings.update({ 'server_address': 'http://localhost:1234', 'model': 'local-model', 'requires_api_key': False })

        provider = TranslationProvider.get_provider(options)

        self.assertEqual(provider.name, 'Custom Server')
        self.assertEqual(provider.selected_model, 'local-model')
        self.assertEqual(provider.settings.get('server_address'), 'http://localhost:1234')
        self.assertTrue(provider.ValidateSettings())

        client = provider.GetTranslationClient(SettingsType({ 'max_retries': 3 }))
        self.assertIsInstance(client, CustomClient)
        self.assertEqual(client.max_retries, 3)
        self.assertFalse(client.requires_api_key)

    def test_ValidateSettings(self):
        log_test_name("Validate provider settings")

        options = Options({ 'provider': 'OpenAI' })
        options.current_provider_settings.update({ 'api_key': '', 'model': 'gpt-4o' })

        provider = TranslationProvider.get_provider(options)
        provider.settings['api_key'] = ''

        self.assertFalse(provider.ValidateSettings())
        self.assertIsNotNone(provider.validation_message)

        provider.settings['api_key'] = 'sk-test-123'
        self.assertTrue(provider.ValidateSettings())

    def test_UnknownProvider(self):
        log_test_name("Unknown provider")

        with self.assertRaises(ProviderError):
            TranslationProvider.get_provider(Options({ 'provider': 'Babel Fish' }))

if __name__ == '__main__':
    unittest.main()
