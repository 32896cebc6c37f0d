from __future__ import annotations
from collections.abc import Mapping
from copy import deepcopy
import json
import logging
import os
import dotenv

from PyLinguist.Helpers import GetCsvPath
from PyLinguist.Helpers.Localization import _, GetLanguageName, NormaliseLanguageTag
from PyLinguist.Helpers.Settings import SettingsError
from PyLinguist.LinguistError import ConfigurationError
from PyLinguist.SettingsType import SettingType, SettingsType
from PyLinguist.TsBatcher import BATCH_POLICIES, BATCH_SCOPES
from PyLinguist.version import __version__

# Load environment variables from .env file
dotenv.load_dotenv()

def env_bool(key : str, default : bool = False) -> bool:
    var = os.getenv(key, default)
    return True if var and str(var).lower() in ('true', 'yes', '1') else False

def env_int(key : str, default : int|None = None) -> int|None:
    value = os.getenv(key, default)
    if value is None:
        return None
    if isinstance(value, str) and not value.strip():
        return None
    return int(value)

def env_float(key : str, default : float|None = None) -> float|None:
    value = os.getenv(key, default)
    if value is None:
        return None
    if isinstance(value, str) and not value.strip():
        return None
    return float(value)

def env_str(key : str, default : str|None = None) -> str|None:
    value = os.getenv(key, default)
    return str(value) if value is not None else None

default_settings = {
    'version': __version__,
    'ts_file_path': env_str('TS_FILE_PATH', None),
    'api_key_path': env_str('API_KEY_PATH', None),
    'api_call_size': env_int('API_CALL_SIZE', 50),
    'batch_policy': env_str('BATCH_POLICY', 'count'),
    'batch_scope': env_str('BATCH_SCOPE', 'context'),
    'lang': env_str('TARGET_LANGUAGE', None),
    'lang_postfix': env_str('TARGET_LANGUAGE_TAG', None),
    'csv_to_import': None,
    'csv_to_export': None,
    'import_from_csv': False,
    'export_to_csv': False,
    'write_back_to_ts': False,
    'clear_translation': False,
    'template_ts_file': None,
    'provider': env_str('PROVIDER', 'OpenAI'),
    'provider_settings': SettingsType({}),
    'max_retries': env_int('MAX_RETRIES', 1),
    'backoff_time': env_float('BACKOFF_TIME', 3.0),
    'rate_limit': env_float('RATE_LIMIT', None),
    'stop_on_error': env_bool('STOP_ON_ERROR'),
    'preview': env_bool('PREVIEW'),
}

class Options(SettingsType):
    def __init__(self, settings : SettingsType|Mapping[str, SettingType]|None = None, **kwargs : SettingType):
        """ Initialise the Options object with default options and any provided options. """
        super().__init__()

        self.update(deepcopy(default_settings))

        # Unset values keep the defaults
        if settings:
            self.update(deepcopy(dict(settings)))

        self.update(kwargs)

    @property
    def ts_file_path(self) -> str|None:
        return self.get_str('ts_file_path')

    @property
    def api_key_path(self) -> str|None:
        return self.get_str('api_key_path')

    @property
    def api_call_size(self) -> int:
        return self.get_int('api_call_size') or 50

    @property
    def batch_policy(self) -> str:
        return (self.get_str('batch_policy') or 'count').lower()

    @property
    def batch_scope(self) -> str:
        return (self.get_str('batch_scope') or 'context').lower()

    @property
    def lang_postfix(self) -> str|None:
        """ Tag of the target language, e.g. tr_TR """
        return self.get_str('lang_postfix')

    @property
    def lang(self) -> str|None:
        """ Name of the target language, derived from the tag if not specified """
        return self.get_str('lang') or GetLanguageName(self.lang_postfix) or NormaliseLanguageTag(self.lang_postfix)

    @property
    def csv_to_import(self) -> str|None:
        return self.get_str('csv_to_import')

    @property
    def csv_to_export(self) -> str|None:
        return self.get_str('csv_to_export') or GetCsvPath(self.ts_file_path)

    @property
    def import_from_csv(self) -> bool:
        return self.get_bool('import_from_csv')

    @property
    def export_to_csv(self) -> bool:
        return self.get_bool('export_to_csv')

    @property
    def write_back_to_ts(self) -> bool:
        return self.get_bool('write_back_to_ts')

    @property
    def clear_translation(self) -> bool:
        return self.get_bool('clear_translation')

    @property
    def template_ts_file(self) -> str|None:
        return self.get_str('template_ts_file')

    @property
    def preview(self) -> bool:
        return self.get_bool('preview')

    @property
    def stop_on_error(self) -> bool:
        return self.get_bool('stop_on_error')

    @property
    def provider(self) -> str:
        """ the name of the translation provider """
        return self.get_str('provider') or ''

    @provider.setter
    def provider(self, value : str):
        self['provider'] = value

    @property
    def provider_settings(self) -> SettingsType:
        return self.get_dict('provider_settings')

    @property
    def current_provider_settings(self) -> SettingsType:
        """ Settings for the selected provider, created if necessary """
        return self.GetProviderSettings(self.provider)

    @property
    def model(self) -> str|None:
        return self.current_provider_settings.get_str('model')

    def GetProviderSettings(self, provider : str) -> SettingsType:
        """ Get the (mutable) settings for a specific provider """
        if not provider:
            return SettingsType()

        provider_settings = self.provider_settings
        settings = provider_settings.get(provider)
        if not isinstance(settings, SettingsType):
            settings = SettingsType(settings if isinstance(settings, dict) else {})
            provider_settings[provider] = settings

        return settings

    def LoadConfigFile(self, path : str) -> None:
        """
        Overlay settings from a JSON configuration file
        """
        try:
            with open(path, "r", encoding="utf-8-sig") as config_file:
                settings = json.load(config_file)

        except OSError as e:
            raise ConfigurationError(_("Unable to open config file {path}").format(path=path), e)

        except json.JSONDecodeError as e:
            raise ConfigurationError(_("Config file {path} is not valid JSON").format(path=path), e)

        if not isinstance(settings, dict):
            raise ConfigurationError(_("Config file {path} does not contain a JSON object").format(path=path))

        provider_settings = settings.pop('provider_settings', None)
        self.update(settings)

        if provider_settings is not None:
            if not isinstance(provider_settings, dict):
                raise ConfigurationError(_("provider_settings must be a JSON object"))

            for provider, values in provider_settings.items():
                if not isinstance(values, dict):
                    raise ConfigurationError(_("Settings for provider {provider} must be a JSON object").format(provider=provider))
                self.GetProviderSettings(provider).update(values)

        logging.debug(f"Loaded config from {path}")

    def Validate(self) -> None:
        """
        Check that the settings required for the selected mode are present and valid
        """
        try:
            errors = self._validation_errors()

        except SettingsError as e:
            raise ConfigurationError(_("Invalid configuration: {error}").format(error=str(e)), e)

        if errors:
            raise ConfigurationError(_("Invalid configuration: {errors}").format(errors=", ".join(errors)))

    def _validation_errors(self) -> list[str]:
        errors : list[str] = []

        if not self.ts_file_path:
            errors.append(_("ts_file_path is not set"))

        if not self.import_from_csv and not self.lang_postfix:
            errors.append(_("lang_postfix is not set"))

        if self.import_from_csv and not self.csv_to_import:
            errors.append(_("csv_to_import is not set"))

        if self.batch_policy not in BATCH_POLICIES:
            errors.append(_("Unknown batch policy '{policy}'").format(policy=self.batch_policy))

        if self.batch_scope not in BATCH_SCOPES:
            errors.append(_("Unknown batch scope '{scope}'").format(scope=self.batch_scope))

        api_call_size = self.get_int('api_call_size')
        if api_call_size is not None and api_call_size < 1:
            errors.append(_("api_call_size must be at least 1"))

        if not self.provider and not self.import_from_csv and not self.clear_translation:
            errors.append(_("provider is not set"))

        for key in ['max_retries']:
            self.get_int(key)

        for key in ['backoff_time', 'rate_limit']:
            self.get_float(key)

        for key in ['import_from_csv', 'export_to_csv', 'write_back_to_ts', 'clear_translation', 'stop_on_error', 'preview']:
            self.get_bool(key)

        return errors
