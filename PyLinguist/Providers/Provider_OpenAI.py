import os

from PyLinguist.Helpers.Localization import _
from PyLinguist.Options import env_float, env_int
from PyLinguist.Providers.OpenAI.ChatGPTClient import ChatGPTClient
from PyLinguist.SettingsType import SettingsType
from PyLinguist.TranslationClient import TranslationClient
from PyLinguist.TranslationProvider import TranslationProvider

class OpenAiProvider(TranslationProvider):
    name = "OpenAI"

    def __init__(self, settings : SettingsType):
        settings = SettingsType(settings)
        super().__init__(self.name, SettingsType({
            "api_key": settings.get_str('api_key', os.getenv('OPENAI_API_KEY')),
            "api_base": settings.get_str('api_base', os.getenv('OPENAI_API_BASE')),
            "model": settings.get_str('model', os.getenv('OPENAI_MODEL', "gpt-4o-mini")),
            'temperature': settings.get_float('temperature', env_float('OPENAI_TEMPERATURE', 0.0)),
            'rate_limit': settings.get_float('rate_limit', env_float('OPENAI_RATE_LIMIT')),
            'timeout': settings.get_int('timeout', env_int('OPENAI_TIMEOUT', 120)),
            'proxy': settings.get_str('proxy', os.getenv('OPENAI_PROXY')),
        }))

    @property
    def api_base(self) -> str|None:
        return self.settings.get_str('api_base')

    def GetTranslationClient(self, settings : SettingsType) -> TranslationClient:
        client_settings = SettingsType(self.settings.copy())
        client_settings.update(settings)
        return ChatGPTClient(client_settings)

    def ValidateSettings(self) -> bool:
        """
        Validate the settings for the provider
        """
        if not self.api_key:
            self.validation_message = _("API Key is required")
            return False

        if not self.selected_model:
            self.validation_message = _("Model is required")
            return False

        return True
