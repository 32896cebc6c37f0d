from __future__ import annotations
from collections.abc import Iterator

from PyLinguist.TsMessage import TsMessage

class TsContext:
    """
    A named group of messages, usually corresponding to a class or form in the application
    """
    def __init__(self, name : str, messages : list[TsMessage]|None = None):
        self.name : str = name
        self.messages : list[TsMessage] = list(messages or [])

    def __repr__(self) -> str:
        return f"TsContext({repr(self.name)}, {len(self.messages)} messages)"

    def __eq__(self, other : object) -> bool:
        if not isinstance(other, TsContext):
            return False
        return self.name == other.name and self.messages == other.messages

    def __len__(self) -> int:
        return len(self.messages)

    def __iter__(self) -> Iterator[TsMessage]:
        return iter(self.messages)

    @property
    def untranslated(self) -> list[TsMessage]:
        return [ message for message in self.messages if message.needs_translation ]

    def AddMessage(self, message : TsMessage) -> TsMessage:
        self.messages.append(message)
        return message

    def FindMessage(self, source : str) -> TsMessage|None:
        """
        Find the first message with the given source text
        """
        return next((message for message in self.messages if message.source == source), None)
