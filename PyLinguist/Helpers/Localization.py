"""
Localization utilities using Python's gettext.

This module initializes a gettext translator for the tool's own messages and
exposes helper functions for translations. Babel is used to turn language tags
(e.g. ``tr_TR``) into human readable language names for translation prompts.
"""
from __future__ import annotations

import gettext
import logging
from typing import Optional

from babel import Locale, UnknownLocaleError

from PyLinguist.Helpers.Resources import GetResourcePath

_translator: Optional[gettext.NullTranslations] = None
_domain = 'llm-tstrans'


def _get_locale_dir() -> str:
    return GetResourcePath('locales')


def initialize_localization(language_code: Optional[str] = None) -> None:
    """
    Initialize the gettext translation system.

    Falls back to NullTranslations when no catalog exists for the language.
    """
    global _translator

    if language_code is None:
        language_code = 'en'

    locale_dir = _get_locale_dir()

    try:
        _translator = gettext.translation(_domain, localedir=locale_dir, languages=[language_code])
    except OSError:
        logging.debug(f"No message catalog for '{language_code}' in {locale_dir}")
        _translator = gettext.NullTranslations()


def _(text: str) -> str:
    """Return translated string for the active language."""
    if _translator:
        return _translator.gettext(text)
    return text


def NormaliseLanguageTag(tag: str|None) -> str|None:
    """
    Convert a language tag to the underscore form used by Qt and Babel (tr-TR -> tr_TR)
    """
    if not tag:
        return None
    return tag.strip().replace('-', '_') or None


def GetLanguageName(tag: str|None, display_locale: str = 'en') -> str|None:
    """
    Get the name of the language identified by a tag, e.g. 'tr_TR' -> 'Turkish (Türkiye)'.

    Returns None if the tag is empty or Babel does not recognise it.
    """
    tag = NormaliseLanguageTag(tag)
    if not tag:
        return None

    try:
        locale = Locale.parse(tag)
        return locale.get_display_name(display_locale)

    except (ValueError, UnknownLocaleError) as e:
        logging.debug(f"Unable to resolve language tag '{tag}': {e}")
        return None
