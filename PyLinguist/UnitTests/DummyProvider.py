from copy import deepcopy

from PyLinguist.Helpers.Tests import BuildChatReply
from PyLinguist.LinguistError import TranslationError
from PyLinguist.SettingsType import SettingsType
from PyLinguist.TranslationClient import TranslationClient
from PyLinguist.TranslationPrompt import TranslationPrompt
from PyLinguist.TranslationProvider import TranslationProvider

class DummyProvider(TranslationProvider):
    """
    Provider that answers from canned replies keyed by context name
    """
    name = "Dummy Provider"

    def __init__(self, responses : dict):
        super().__init__("Dummy Provider", SettingsType({
            "model": "dummy",
            "requires_api_key": False,
        }))
        self.responses = responses
        self.clients : list[DummyTranslationClient] = []

    def GetTranslationClient(self, settings : SettingsType) -> TranslationClient:
        client_settings = SettingsType(deepcopy(self.settings))
        client_settings.update(settings)
        client = DummyTranslationClient(client_settings, self.responses)
        self.clients.append(client)
        return client

class DummyTranslationClient(TranslationClient):
    def __init__(self, settings : SettingsType, responses : dict):
        super().__init__(settings)
        self.responses = responses
        self.prompts : list[TranslationPrompt] = []

    def _request_translation(self, prompt : TranslationPrompt) -> bytes|None:
        """
        Return the canned reply for the context named in the prompt, or raise the canned error
        """
        if not prompt.batch_prompt:
            raise TranslationError("Translator did not generate a prompt")

        self.prompts.append(prompt)

        key = next((name for name in self.responses if name and f"context of {name}." in prompt.batch_prompt), None)

        response = self.responses.get(key)
        if response is None:
            raise TranslationError(f"No response for prompt:\n{prompt.batch_prompt}")

        if isinstance(response, Exception):
            raise response

        if isinstance(response, bytes):
            return response

        return BuildChatReply(response)
