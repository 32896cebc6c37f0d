import logging
import time
import httpx
import openai

from PyLinguist.Helpers import FormatMessages
from PyLinguist.Helpers.Localization import _
from PyLinguist.Helpers.Parse import ParseDelayFromHeader
from PyLinguist.Helpers.Settings import GetStrSetting
from PyLinguist.LinguistError import (
    TranslationAuthError,
    TranslationError,
    TranslationImpossibleError,
    TranslationNetworkError,
    TranslationTimeoutError,
)
from PyLinguist.SettingsType import SettingsType
from PyLinguist.TranslationClient import USER_AGENT, TranslationClient
from PyLinguist.TranslationPrompt import TranslationPrompt

class ChatGPTClient(TranslationClient):
    """
    Handles chat communication with OpenAI to request translations
    """
    def __init__(self, settings : SettingsType):
        super().__init__(settings)

        logging.info(_("Translating with model {model}, Using API Base: {api_base}").format(
            model=self.model or _("default"),
            api_base=self.api_base or openai.base_url or _("default")
        ))

        self.client : openai.OpenAI|None = None

    @property
    def api_base(self) -> str|None:
        return GetStrSetting(self.settings, 'api_base')

    @property
    def model(self) -> str|None:
        return GetStrSetting(self.settings, 'model') or "gpt-4o-mini"

    @property
    def proxy(self) -> str|None:
        return GetStrSetting(self.settings, 'proxy')

    def _request_translation(self, prompt : TranslationPrompt) -> bytes|None:
        """
        Request a translation, retrying timeouts and connection errors with exponential backoff
        """
        logging.debug(f"Messages:\n{FormatMessages(prompt.messages)}")

        for retry in range(self.max_retries + 1):
            if self.aborted:
                return None

            backoff_time = self.backoff_time * 2.0**retry
            can_retry = retry < self.max_retries

            try:
                if not self.client:
                    self._create_client()

                return self._send_messages(prompt)

            except (openai.AuthenticationError, openai.PermissionDeniedError) as e:
                raise TranslationAuthError(_("The provider rejected the API key"), error=e)

            except openai.RateLimitError as e:
                if self.aborted:
                    return None

                retry_after = e.response.headers.get('x-ratelimit-reset-requests') or e.response.headers.get('Retry-After')
                if not retry_after:
                    raise TranslationImpossibleError(_("Account quota reached, please upgrade your plan"), error=e)

                if not can_retry:
                    raise TranslationNetworkError(_("Rate limit exceeded"), error=e, status_code=e.status_code)

                backoff_time = ParseDelayFromHeader(retry_after)
                logging.warning(_("Rate limit hit, retrying in {backoff_time} seconds...").format(
                    backoff_time=backoff_time
                ))
                time.sleep(backoff_time)

            except openai.APITimeoutError as e:
                if self.aborted:
                    return None

                if not can_retry:
                    raise TranslationTimeoutError(_("Request timed out after {timeout} seconds").format(timeout=self.timeout), error=e)

                logging.warning(_("API Timeout, retrying in {backoff_time} seconds...").format(
                    backoff_time=backoff_time
                ))
                time.sleep(backoff_time)

            except openai.APIConnectionError as e:
                if self.aborted:
                    return None

                if not can_retry:
                    raise TranslationNetworkError(_("Unable to connect to the provider: {error}").format(error=str(e)), error=e)

                logging.warning(_("Connection error, retrying in {backoff_time} seconds...").format(
                    backoff_time=backoff_time
                ))
                time.sleep(backoff_time)

            except openai.APIStatusError as e:
                raise TranslationNetworkError(_("Provider returned an error: {status_code} {message}").format(
                    status_code=e.status_code, message=e.message
                ), error=e, status_code=e.status_code)

        return None

    def _send_messages(self, prompt : TranslationPrompt) -> bytes|None:
        """
        Make a request to an OpenAI-compatible API, returning the body of the reply
        """
        if not self.client:
            raise TranslationError(_("Client is not initialized"))

        if not prompt.messages:
            raise TranslationError(_("No content provided for translation"))

        result = self.client.chat.completions.with_raw_response.create(
            model=self.model,
            messages=prompt.messages,   # type: ignore[arg-type]
            temperature=self.temperature,
        )

        if self.aborted:
            return None

        return result.http_response.content

    def _create_client(self) -> None:
        http_client : httpx.Client|None = None
        if self.proxy:
            http_client = httpx.Client(proxy=self.proxy, timeout=self.timeout)

        self.client = openai.OpenAI(
            api_key=self.api_key,
            base_url=self.api_base or None,
            timeout=self.timeout,
            max_retries=0,
            http_client=http_client,
            default_headers={'User-Agent': USER_AGENT}
        )

    def _abort(self) -> None:
        if self.client:
            self.client.close()
        return super()._abort()
