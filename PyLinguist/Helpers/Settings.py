"""
Typed access to settings dictionaries.

Settings arrive from environment variables, JSON config files and command line
arguments, so the same value may be a string, a number or a boolean. Each getter
accepts the representations that convert without loss of meaning and raises
SettingsError for anything else.
"""
from collections.abc import Mapping
from typing import TypeAlias

BasicType: TypeAlias = str | int | float | bool | list[str] | None
SettingType: TypeAlias = BasicType | dict[str, 'SettingType']

true_values = ('true', 'yes', 'on', '1')
false_values = ('false', 'no', 'off', '0', '')

class SettingsError(Exception):
    """Raised when a setting cannot be coerced to the expected type."""
    pass

def _describe(key : str, value : object) -> str:
    return f"setting '{key}' ({type(value).__name__} {repr(value)})"

def GetBoolSetting(settings : Mapping[str, SettingType], key : str, default : bool|None = False) -> bool:
    """
    Interpret a setting as a flag. Accepts booleans, 0/1 and yes/no style strings.
    """
    value = settings.get(key, default)
    if value is None:
        return False

    if isinstance(value, bool):
        return value

    if isinstance(value, int) and value in (0, 1):
        return value == 1

    if isinstance(value, str):
        text = value.strip().lower()
        if text in true_values:
            return True
        if text in false_values:
            return False

    raise SettingsError(f"Cannot interpret {_describe(key, value)} as a boolean")

def GetIntSetting(settings : Mapping[str, SettingType], key : str, default : int|None = None) -> int|None:
    """
    Interpret a setting as a whole number. Empty strings are treated as unset.
    """
    value = settings.get(key, default)
    if value is None:
        return None

    if isinstance(value, bool):
        raise SettingsError(f"Cannot interpret {_describe(key, value)} as an integer")

    if isinstance(value, int):
        return value

    if isinstance(value, float) and value.is_integer():
        return int(value)

    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            return int(text)
        except ValueError:
            pass

    raise SettingsError(f"Cannot interpret {_describe(key, value)} as an integer")

def GetFloatSetting(settings : Mapping[str, SettingType], key : str, default : float|None = None) -> float|None:
    """
    Interpret a setting as a number. Empty strings are treated as unset.
    """
    value = settings.get(key, default)
    if value is None:
        return None

    if isinstance(value, bool):
        raise SettingsError(f"Cannot interpret {_describe(key, value)} as a number")

    if isinstance(value, (int, float)):
        return float(value)

    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            return float(text)
        except ValueError:
            pass

    raise SettingsError(f"Cannot interpret {_describe(key, value)} as a number")

def GetStrSetting(settings : Mapping[str, SettingType], key : str, default : str|None = None) -> str|None:
    """
    Interpret a setting as text. Scalars are converted and lists are joined with commas.
    """
    value = settings.get(key, default)
    if value is None or isinstance(value, str):
        return value

    if isinstance(value, (bool, int, float)):
        return str(value)

    if isinstance(value, list):
        return ', '.join(str(item) for item in value)

    raise SettingsError(f"Cannot interpret {_describe(key, value)} as text")
