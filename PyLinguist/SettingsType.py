from __future__ import annotations
from collections.abc import Mapping

from PyLinguist.Helpers.Settings import (
    GetBoolSetting,
    GetFloatSetting,
    GetIntSetting,
    GetStrSetting,
    SettingType,
    SettingsError,
)

class SettingsType(dict[str, SettingType]):
    """
    A dictionary of settings with typed accessors.

    update() never stores None, so an unset value does not hide one applied
    earlier, and layers of settings can be applied one after another.
    """
    def __init__(self, settings : Mapping[str, SettingType]|None = None):
        super().__init__(settings or {})

    def get_bool(self, key : str, default : bool|None = False) -> bool:
        return GetBoolSetting(self, key, default)

    def get_int(self, key : str, default : int|None = None) -> int|None:
        return GetIntSetting(self, key, default)

    def get_float(self, key : str, default : float|None = None) -> float|None:
        return GetFloatSetting(self, key, default)

    def get_str(self, key : str, default : str|None = None) -> str|None:
        return GetStrSetting(self, key, default)

    def get_dict(self, key : str) -> SettingsType:
        """
        Nested settings stored under a key, created if missing.

        The nested dictionary is stored back as a SettingsType so that changes made
        through the returned value are kept.
        """
        value = self.get(key)
        if isinstance(value, SettingsType):
            return value

        if value is None:
            value = SettingsType()

        elif isinstance(value, Mapping):
            value = SettingsType(value)

        else:
            raise SettingsError(f"Setting '{key}' should be a dictionary, not {type(value).__name__}")

        self[key] = value
        return value

    def update(self, other=(), /, **kwargs) -> None:
        values = dict(other, **kwargs)
        super().update({ key: value for key, value in values.items() if value is not None })
