import logging
import time

from PyLinguist.Helpers.Localization import _
from PyLinguist.Helpers.Settings import GetBoolSetting, GetFloatSetting, GetIntSetting, GetStrSetting
from PyLinguist.Instructions import Instructions
from PyLinguist.LinguistError import TranslationAuthError
from PyLinguist.SettingsType import SettingsType
from PyLinguist.TranslationParser import TranslationParser
from PyLinguist.TranslationPrompt import TranslationPrompt
from PyLinguist.TranslationReply import TranslationReply

USER_AGENT = "QtGPTTranslator/1.0"

class TranslationClient:
    """
    Handles communication with the translation provider
    """
    def __init__(self, settings : SettingsType|dict):
        self.settings : SettingsType = SettingsType(settings)
        self.instructions : Instructions = Instructions(self.settings)
        self.aborted : bool = False

    @property
    def api_key(self) -> str|None:
        return GetStrSetting(self.settings, 'api_key')

    @property
    def requires_api_key(self) -> bool:
        return GetBoolSetting(self.settings, 'requires_api_key', True)

    @property
    def model(self) -> str|None:
        return GetStrSetting(self.settings, 'model')

    @property
    def rate_limit(self) -> float|None:
        return GetFloatSetting(self.settings, 'rate_limit')

    @property
    def temperature(self) -> float:
        return GetFloatSetting(self.settings, 'temperature') or 0.0

    @property
    def max_retries(self) -> int:
        return GetIntSetting(self.settings, 'max_retries') or 0

    @property
    def backoff_time(self) -> float:
        return GetFloatSetting(self.settings, 'backoff_time') or 3.0

    @property
    def timeout(self) -> float:
        return GetFloatSetting(self.settings, 'timeout') or 120.0

    def BuildTranslationPrompt(self, phrases : list[str]|tuple[str, ...], target_language : str, target_tag : str, context_name : str|None = None) -> TranslationPrompt:
        """
        Generate a translation prompt for a batch of phrases
        """
        prompt = TranslationPrompt(self.instructions.instructions)
        prompt.prompt_template = self.instructions.prompt_template
        prompt.context_template = self.instructions.context_template
        prompt.GenerateMessages(phrases, target_language, target_tag, context_name)
        return prompt

    def Request(self, phrases : list[str]|tuple[str, ...], target_language : str, target_tag : str, context_name : str|None = None) -> bytes:
        """
        Ask the provider to translate a batch of phrases, returning the raw reply body
        """
        prompt = self.BuildTranslationPrompt(phrases, target_language, target_tag, context_name)
        return self.RequestTranslation(prompt)

    def RequestTranslation(self, prompt : TranslationPrompt) -> bytes:
        """
        Send the prompt and wait for the reply, respecting the rate limit
        """
        if self.requires_api_key and not self.api_key:
            raise TranslationAuthError(_("API key is empty, unable to request translations"))

        start_time = time.monotonic()

        reply = self._request_translation(prompt)

        if self.aborted or reply is None:
            return b""

        logging.debug(f"Response:\n{reply.decode('utf-8', errors='replace')}")

        # If a rate limit is specified ensure a minimum duration for each request
        rate_limit = self.rate_limit
        if rate_limit and rate_limit > 0.0:
            minimum_duration = 60.0 / rate_limit

            elapsed_time = time.monotonic() - start_time
            if elapsed_time < minimum_duration:
                sleep_time = minimum_duration - elapsed_time
                logging.debug(f"Sleeping for {sleep_time:.2f} seconds to respect rate limit")
                time.sleep(sleep_time)

        return reply

    def ParseReply(self, raw : bytes) -> TranslationReply:
        """
        Extract the source to translation mapping from a raw reply
        """
        return TranslationParser().ParseReply(raw)

    def AbortTranslation(self) -> None:
        self.aborted = True
        self._abort()

    def _request_translation(self, prompt : TranslationPrompt) -> bytes|None:
        """
        Make a request to the API to provide a translation
        """
        _ = prompt  # Mark as accessed to avoid lint warnings
        raise NotImplementedError

    def _abort(self) -> None:
        # Try to terminate ongoing requests
        pass
