from __future__ import annotations
from enum import Enum
import logging

from PyLinguist.Helpers.Localization import _
from PyLinguist.Helpers.Text import StripXmlIllegalCharacters, Truncate
from PyLinguist.TsLocation import TsLocation

class TranslationType(Enum):
    FINISHED = "finished"
    UNFINISHED = "unfinished"

class TsMessage:
    """
    A translatable string, the places it is used and its translation.

    The translation type is UNFINISHED whenever the translation is empty, and
    becomes FINISHED when a non-empty translation is assigned.
    """
    def __init__(self, source : str = "", translation : str|None = None, locations : list[TsLocation]|None = None, translation_type : TranslationType|None = None):
        self.source : str = source or ""
        self.locations : list[TsLocation] = list(locations or [])
        self._translation : str = translation or ""
        self._translation_type : TranslationType = translation_type or self._default_type(self._translation)

        if not self._translation:
            self._translation_type = TranslationType.UNFINISHED

    def __repr__(self) -> str:
        return f"TsMessage({repr(self.source)}, {repr(self.translation)}, {self.translation_type.name})"

    def __eq__(self, other : object) -> bool:
        if not isinstance(other, TsMessage):
            return False
        return (self.source == other.source and
                self.translation == other.translation and
                self.translation_type == other.translation_type and
                self.locations == other.locations)

    @property
    def translation(self) -> str:
        return self._translation

    @property
    def translation_type(self) -> TranslationType:
        return self._translation_type

    @property
    def unfinished(self) -> bool:
        return self._translation_type == TranslationType.UNFINISHED

    @property
    def needs_translation(self) -> bool:
        """ True if the message has source text but no translation """
        return bool(self.source) and not self._translation

    def SetTranslation(self, translation : str|None) -> None:
        """
        Assign a translation, marking the message finished if it is not empty.

        Characters that cannot be stored in a translation file are removed.
        """
        translation, removed = StripXmlIllegalCharacters(translation or "")
        if removed:
            logging.warning(_("Removed {count} invalid characters from the translation of '{source}'").format(count=removed, source=Truncate(self.source)))

        self._translation = translation
        self._translation_type = self._default_type(self._translation)

    def ClearTranslation(self) -> None:
        self._translation = ""
        self._translation_type = TranslationType.UNFINISHED

    @staticmethod
    def _default_type(translation : str) -> TranslationType:
        return TranslationType.FINISHED if translation else TranslationType.UNFINISHED
