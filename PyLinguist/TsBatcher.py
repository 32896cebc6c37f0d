from collections.abc import Iterator

from PyLinguist.Helpers.Settings import GetIntSetting, GetStrSetting
from PyLinguist.Helpers.Text import CountWords
from PyLinguist.SettingsType import SettingsType
from PyLinguist.TsBatch import TsBatch
from PyLinguist.TsDocument import TsDocument

BATCH_POLICIES = ['count', 'words']
BATCH_SCOPES = ['context', 'document']

class TsBatcher:
    def __init__(self, settings : SettingsType):
        """ Initialize a TsBatcher helper class with settings """
        self.max_batch_size : int = GetIntSetting(settings, 'api_call_size') or 50
        self.batch_policy : str = (GetStrSetting(settings, 'batch_policy') or 'count').lower()
        self.batch_scope : str = (GetStrSetting(settings, 'batch_scope') or 'context').lower()

        if self.max_batch_size < 1:
            raise ValueError("api_call_size must be at least 1")

        if self.batch_policy not in BATCH_POLICIES:
            raise ValueError(f"Unknown batch policy '{self.batch_policy}'")

        if self.batch_scope not in BATCH_SCOPES:
            raise ValueError(f"Unknown batch scope '{self.batch_scope}'")

    def BatchDocument(self, document : TsDocument) -> Iterator[TsBatch]:
        """
        Lazily divide the untranslated messages of a document into batches.

        Every message with source text and no translation is covered by exactly one
        batch, except that repeated source text within a batch is only sent once.
        The document is not modified.
        """
        number = 0
        phrases : list[str] = []
        word_count = 0
        context_name : str|None = None

        for context in document:
            if self.batch_scope == 'context':
                context_name = context.name

            for message in context.messages:
                if not message.needs_translation or message.source in phrases:
                    continue

                words = CountWords(message.source)
                if phrases and self._batch_is_full(phrases, word_count, words):
                    number += 1
                    yield TsBatch(number, tuple(phrases), context_name, word_count)
                    phrases = []
                    word_count = 0

                phrases.append(message.source)
                word_count += words

            if self.batch_scope == 'context' and phrases:
                number += 1
                yield TsBatch(number, tuple(phrases), context_name, word_count)
                phrases = []
                word_count = 0

        if phrases:
            number += 1
            yield TsBatch(number, tuple(phrases), context_name, word_count)

    def _batch_is_full(self, phrases : list[str], word_count : int, next_words : int) -> bool:
        """
        Check whether the open batch must be closed before adding another phrase
        """
        if self.batch_policy == 'words':
            return word_count + next_words > self.max_batch_size

        return len(phrases) >= self.max_batch_size
