import os

from PyLinguist.Helpers.Localization import _
from PyLinguist.Options import env_bool, env_float, env_int
from PyLinguist.Providers.Custom.CustomClient import CustomClient
from PyLinguist.SettingsType import SettingsType
from PyLinguist.TranslationClient import TranslationClient
from PyLinguist.TranslationProvider import TranslationProvider

class Provider_CustomServer(TranslationProvider):
    """
    Any server with an OpenAI compatible chat completion endpoint
    """
    name = "Custom Server"

    def __init__(self, settings : SettingsType):
        settings = SettingsType(settings)
        super().__init__(self.name, SettingsType({
            'server_address': settings.get_str('server_address', os.getenv('CUSTOM_SERVER_ADDRESS', "https://api.openai.com")),
            'endpoint': settings.get_str('endpoint', os.getenv('CUSTOM_ENDPOINT', "/v1/chat/completions")),
            'temperature': settings.get_float('temperature', env_float('CUSTOM_TEMPERATURE', 0.0)),
            'timeout': settings.get_int('timeout', env_int('CUSTOM_TIMEOUT', 120)),
            'rate_limit': settings.get_float('rate_limit', env_float('CUSTOM_RATE_LIMIT')),
            "api_key": settings.get_str('api_key', os.getenv('CUSTOM_API_KEY')),
            'requires_api_key': settings.get_bool('requires_api_key', env_bool('CUSTOM_REQUIRES_API_KEY', True)),
            "model": settings.get_str('model', os.getenv('CUSTOM_MODEL', "gpt-4o-mini")),
            }))

    @property
    def server_address(self) -> str|None:
        return self.settings.get_str('server_address')

    @property
    def endpoint(self) -> str|None:
        return self.settings.get_str('endpoint')

    def GetTranslationClient(self, settings : SettingsType) -> TranslationClient:
        client_settings = SettingsType(self.settings.copy())
        client_settings.update(settings)
        return CustomClient(client_settings)

    def ValidateSettings(self) -> bool:
        """
        Validate the settings for the provider
        """
        if not self.server_address:
            self.validation_message = _("Server address must be provided")
            return False

        if not self.endpoint:
            self.validation_message = _("Endpoint must be provided")
            return False

        if self.settings.get_bool('requires_api_key', True) and not self.api_key:
            self.validation_message = _("API Key is required")
            return False

        return True
