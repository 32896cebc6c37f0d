from collections.abc import Iterable, Mapping

from PyLinguist.TsContext import TsContext
from PyLinguist.TsDocument import TsDocument
from PyLinguist.TsMessage import TsMessage

MergeTarget = TsDocument | TsContext | list[TsMessage]

def _messages_in_scope(target : MergeTarget) -> Iterable[TsMessage]:
    if isinstance(target, TsDocument):
        return target.messages
    if isinstance(target, TsContext):
        return target.messages
    return target

def MergeTranslations(translations : Mapping[str, str], target : MergeTarget) -> int:
    """
    Apply a mapping of source text to translation to every matching message in scope.

    The target may be a whole document, a single context or a list of messages. Matching
    messages take the mapped translation regardless of any existing one, and every message
    with the same source text receives the same translation.

    Returns the number of messages updated.
    """
    if not translations:
        return 0

    updated = 0
    for message in _messages_in_scope(target):
        if message.source in translations:
            message.SetTranslation(translations[message.source])
            updated += 1

    return updated

def ClearTranslations(document : TsDocument) -> int:
    """
    Remove every translation in the document, marking all messages unfinished
    """
    cleared = 0
    for message in document.messages:
        message.ClearTranslation()
        cleared += 1

    return cleared
