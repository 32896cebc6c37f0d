import logging
import time
from typing import Any
import httpx

from PyLinguist.Helpers import FormatMessages
from PyLinguist.Helpers.Localization import _
from PyLinguist.Helpers.Parse import ParseDelayFromHeader, ParseErrorMessageFromText
from PyLinguist.Helpers.Settings import GetStrSetting
from PyLinguist.LinguistError import (
    TranslationAuthError,
    TranslationImpossibleError,
    TranslationNetworkError,
    TranslationTimeoutError,
)
from PyLinguist.SettingsType import SettingsType
from PyLinguist.TranslationClient import USER_AGENT, TranslationClient
from PyLinguist.TranslationPrompt import TranslationPrompt

class CustomClient(TranslationClient):
    """
    Handles communication with an OpenAI compatible server to request translations
    """
    def __init__(self, settings : SettingsType):
        super().__init__(settings)
        self.client : httpx.Client|None = None
        self.headers : dict[str, str] = {'Content-Type': 'application/json', 'User-Agent': USER_AGENT}

        if self.api_key:
            self.headers['Authorization'] = f"Bearer {self.api_key}"

        logging.info(_("Translating with server at {server_address}{endpoint}").format(
            server_address=self.server_address, endpoint=self.endpoint
        ))
        if self.model:
            logging.info(_("Using model: {model}").format(model=self.model))

    @property
    def server_address(self) -> str|None:
        return GetStrSetting(self.settings, 'server_address')

    @property
    def endpoint(self) -> str|None:
        return GetStrSetting(self.settings, 'endpoint')

    def _request_translation(self, prompt : TranslationPrompt) -> bytes|None:
        """
        Request a translation based on the provided prompt
        """
        logging.debug(f"Messages:\n{FormatMessages(prompt.messages)}")

        if self.server_address is None or self.endpoint is None:
            raise TranslationImpossibleError(_("Server address or endpoint is not set"))

        request_body = self._generate_request_body(prompt)

        for retry in range(self.max_retries + 1):
            if self.aborted:
                return None

            can_retry = retry < self.max_retries
            sleep_time = self.backoff_time * 2.0**retry

            try:
                self.client = httpx.Client(base_url=self.server_address, follow_redirects=True, timeout=self.timeout, headers=self.headers)

                result : httpx.Response = self.client.post(self.endpoint, json=request_body)

                if self.aborted:
                    return None

                if not result.is_error:
                    return result.content

                parsed_message = ParseErrorMessageFromText(result.text)
                summary_text = parsed_message if parsed_message else result.text

                if result.status_code in (401, 403):
                    raise TranslationAuthError(_("The server rejected the API key: {text}").format(text=summary_text))

                retryable = result.status_code == 429 or result.is_server_error
                if not retryable or not can_retry:
                    raise TranslationNetworkError(_("Server error: {status_code} {text}").format(
                        status_code=result.status_code, text=summary_text
                    ), status_code=result.status_code)

                retry_after = result.headers.get('Retry-After')
                if retry_after:
                    sleep_time = ParseDelayFromHeader(retry_after)

                logging.warning(_("Server returned {status_code}, retrying in {sleep_time} seconds...").format(
                    status_code=result.status_code, sleep_time=sleep_time
                ))

            except httpx.TimeoutException as e:
                if self.aborted:
                    return None

                if not can_retry:
                    raise TranslationTimeoutError(_("Request to server timed out: {error}").format(error=str(e)), error=e)

                logging.warning(_("Request to server timed out, retrying in {sleep_time} seconds...").format(
                    sleep_time=sleep_time
                ))

            except httpx.TransportError as e:
                if self.aborted:
                    return None

                if not can_retry:
                    raise TranslationNetworkError(_("Failed to connect to server at {server_address}{endpoint}: {error}").format(
                        server_address=self.server_address, endpoint=self.endpoint, error=str(e)
                    ), error=e)

                logging.warning(_("Network error communicating with server, retrying in {sleep_time} seconds...").format(
                    sleep_time=sleep_time
                ))

            finally:
                if self.client:
                    self.client.close()
                    self.client = None

            time.sleep(sleep_time)

        return None

    def _generate_request_body(self, prompt : TranslationPrompt) -> dict[str, Any]:
        request_body : dict[str, Any] = {
            'messages': prompt.messages,
            'temperature': self.temperature,
            'stream': False
        }

        if self.model:
            request_body['model'] = self.model

        return request_body

    def _abort(self) -> None:
        if self.client:
            self.client.close()
        return super()._abort()
