from __future__ import annotations
from collections.abc import Iterator
import logging

from PyLinguist.Helpers.Localization import _
from PyLinguist.TsContext import TsContext
from PyLinguist.TsMessage import TsMessage

DEFAULT_TS_VERSION = "2.1"

class TsDocument:
    """
    In-memory representation of a Qt Linguist translation source file.

    Contexts are kept in file order, keyed by name.
    """
    def __init__(self, language : str|None = None, version : str|None = None, source_language : str|None = None):
        self.language : str|None = language
        self.version : str = version or DEFAULT_TS_VERSION
        self.source_language : str|None = source_language
        self._contexts : dict[str, TsContext] = {}

    def __repr__(self) -> str:
        return f"TsDocument(language={repr(self.language)}, {len(self._contexts)} contexts)"

    def __eq__(self, other : object) -> bool:
        if not isinstance(other, TsDocument):
            return False
        return list(self._contexts.values()) == list(other._contexts.values())

    def __len__(self) -> int:
        return len(self._contexts)

    def __iter__(self) -> Iterator[TsContext]:
        return iter(self._contexts.values())

    def __contains__(self, name : object) -> bool:
        return name in self._contexts

    @property
    def contexts(self) -> list[TsContext]:
        return list(self._contexts.values())

    @property
    def context_names(self) -> list[str]:
        return list(self._contexts.keys())

    @property
    def messages(self) -> Iterator[TsMessage]:
        """ Every message in the document, in document order """
        for context in self._contexts.values():
            yield from context.messages

    @property
    def message_count(self) -> int:
        return sum(len(context) for context in self._contexts.values())

    @property
    def untranslated_count(self) -> int:
        return sum(1 for message in self.messages if message.needs_translation)

    def GetContext(self, name : str) -> TsContext|None:
        return self._contexts.get(name)

    def AddContext(self, context : TsContext) -> TsContext:
        """
        Add a context to the end of the document.

        If a context with the same name already exists its messages are appended to it instead.
        """
        existing = self._contexts.get(context.name)
        if existing is not None:
            logging.warning(_("Duplicate context '{name}', merging messages into the first occurrence").format(name=context.name))
            existing.messages.extend(context.messages)
            return existing

        self._contexts[context.name] = context
        return context
