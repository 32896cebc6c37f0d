import importlib
import logging
import pkgutil

from PyLinguist.Helpers.Localization import _
from PyLinguist.LinguistError import NoProviderError, ProviderError
from PyLinguist.Options import Options
from PyLinguist.SettingsType import SettingsType
from PyLinguist.TranslationClient import TranslationClient

class TranslationProvider:
    """
    A translation service, which knows its default settings and how to create a client for them.

    Concrete providers live in the Providers package and register themselves by subclassing.
    """
    name : str = ""

    _providers_imported : bool = False

    def __init__(self, name : str, settings : SettingsType):
        self.name = name
        self.settings : SettingsType = settings
        self.validation_message : str|None = None

    @property
    def selected_model(self) -> str|None:
        model = self.settings.get_str('model')
        return model.strip() or None if model else None

    @property
    def api_key(self) -> str|None:
        return self.settings.get_str('api_key')

    def GetTranslationClient(self, settings : SettingsType) -> TranslationClient:
        """
        Create a client for a translation run, with run settings layered over the provider's
        """
        raise NotImplementedError

    def ValidateSettings(self) -> bool:
        """
        Check that the provider can be used. Sets validation_message on failure.
        """
        return True

    def UpdateSettings(self, settings : Options|dict):
        """
        Apply new values to settings the provider already knows about. Unset values are ignored.
        """
        if isinstance(settings, Options):
            settings = settings.GetProviderSettings(self.name)

        known = { key: value for key, value in settings.items() if key in self.settings }
        self.settings.update(known)

    @classmethod
    def get_providers(cls) -> dict[str, type['TranslationProvider']]:
        """
        Map provider names to provider classes, importing the Providers package the first time
        """
        if not TranslationProvider._providers_imported:
            TranslationProvider._providers_imported = True
            try:
                cls.import_providers(f"{__package__}.Providers")

            except ImportError as e:
                logging.error(_("Error importing providers: {error}").format(error=str(e)))

        return { provider.name : provider for provider in cls.__subclasses__() }

    @classmethod
    def get_provider(cls, options : Options) -> 'TranslationProvider':
        """
        Instantiate the provider selected in the options, using its stored settings
        """
        if not isinstance(options, Options):
            raise ValueError("Options object required")

        if not options.provider:
            raise NoProviderError()

        provider = cls.create_provider(options.provider, options.current_provider_settings)
        provider.UpdateSettings(options)
        return provider

    @classmethod
    def create_provider(cls, name : str, provider_settings : SettingsType) -> 'TranslationProvider':
        provider_class = cls.get_providers().get(name)
        if provider_class is None:
            raise ProviderError(_("Unknown translation provider: {name}").format(name=name))

        return provider_class(provider_settings)

    @classmethod
    def import_providers(cls, package_name : str):
        package = importlib.import_module(package_name)
        for module_info in pkgutil.iter_modules(package.__path__, package.__name__ + '.'):
            logging.debug(f"Importing provider module {module_info.name}")
            importlib.import_module(module_info.name)
